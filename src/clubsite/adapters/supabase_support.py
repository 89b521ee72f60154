"""Helpers for running PostgREST queries through the Supabase client."""

import logging
from typing import Any

import httpx
from postgrest.exceptions import APIError

from clubsite.domain.errors import RepositoryError

logger = logging.getLogger(__name__)


def execute(query: Any, failure: str) -> Any:
    """Run a query builder, translating client failures to RepositoryError."""
    try:
        return query.execute()
    except APIError as exc:
        logger.error(
            failure, extra={"code": exc.code, "detail": exc.message}, exc_info=True
        )
        raise RepositoryError(failure) from exc
    except httpx.HTTPError as exc:
        logger.error(failure, exc_info=True)
        raise RepositoryError(failure) from exc


def first_row(response: Any, failure: str) -> dict[str, Any]:
    """Return the first row of a write response or fail."""
    if not response.data:
        raise RepositoryError(failure)
    return response.data[0]
