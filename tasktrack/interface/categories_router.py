"""Category endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from tasktrack.core.config import constants
from tasktrack.core.db_client import Database
from tasktrack.domain.create_models import CategoryCreate
from tasktrack.interface.auth import get_current_user_id
from tasktrack.interface.dependencies import get_db
from tasktrack.services import category_service


router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
async def list_categories(
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> JSONResponse:
    """List the caller's categories."""
    categories = await category_service.list_categories(db=db, user_id=user_id)
    return JSONResponse(
        content={"success": True, "categories": [c.model_dump(mode="json", by_alias=True) for c in categories]},
        status_code=constants.HTTP_OK,
    )


@router.post("")
async def create_category(
    payload: CategoryCreate,
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> JSONResponse:
    """Create a category owned by the caller."""
    category = await category_service.create_category(
        db=db,
        user_id=user_id,
        name=payload.name,
        description=payload.description,
    )
    return JSONResponse(
        content={"success": True, "category": category.model_dump(mode="json", by_alias=True)},
        status_code=constants.HTTP_CREATED,
    )


@router.get("/{category_id}")
async def get_category(
    category_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> JSONResponse:
    """Fetch one of the caller's categories."""
    category = await category_service.get_category(db=db, user_id=user_id, category_id=category_id)
    return JSONResponse(
        content={"success": True, "category": category.model_dump(mode="json", by_alias=True)},
        status_code=constants.HTTP_OK,
    )


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Database = Depends(get_db),
) -> JSONResponse:
    """Delete one of the caller's categories. Tasks keep their category reference."""
    await category_service.delete_category(db=db, user_id=user_id, category_id=category_id)
    return JSONResponse(
        content={"success": True, "message": "Category deleted successfully"},
        status_code=constants.HTTP_OK,
    )
