"""FastAPI dependencies exposing the process-wide resources."""

from fastapi import Request

from tasktrack.core.config import Settings
from tasktrack.core.db_client import Database


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
