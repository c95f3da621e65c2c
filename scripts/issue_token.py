#!/usr/bin/env python3
"""Development script to mint a bearer token for a user id.

Tokens are signed with SECRET_KEY from the environment or .env file, the same
secret the API uses to verify them.

Usage:
    python scripts/issue_token.py <user_id>
"""

import logging
import sys

from tasktrack.core.config import settings
from tasktrack.interface.auth import TokenVerifier


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def print_usage() -> None:
    """Print usage information."""
    logger.info(__doc__)


def main() -> None:
    """Main entry point."""
    args = sys.argv[1:]

    if not args or "--help" in args or "-h" in args:
        print_usage()
        return

    verifier = TokenVerifier(settings.secret_key, max_age_seconds=settings.token_max_age_seconds)
    logger.info(verifier.issue(args[0]))


if __name__ == "__main__":
    main()
