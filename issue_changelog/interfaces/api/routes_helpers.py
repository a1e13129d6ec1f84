"""Helper utilities shared across API route handlers."""

from typing import NoReturn

from fastapi import HTTPException, status

from issue_changelog.domain.entities import PolicyStoreError, UpstreamFetchError

_DETAIL_STATUS = {
    "Failed to fetch project details": status.HTTP_502_BAD_GATEWAY,
    "Project is not authorized by site administrator": status.HTTP_403_FORBIDDEN,
}


def raise_http_error(exc: Exception) -> NoReturn:
    """Translate a use case failure into the matching ``HTTPException``."""

    detail = str(exc)
    if isinstance(exc, PermissionError):
        status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, LookupError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, UpstreamFetchError):
        status_code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(exc, PolicyStoreError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        status_code = _DETAIL_STATUS.get(detail, status.HTTP_400_BAD_REQUEST)
    raise HTTPException(status_code=status_code, detail=detail) from exc


__all__ = ["raise_http_error"]
