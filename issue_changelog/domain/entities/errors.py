"""Error taxonomy shared by the access gate and the activity pipeline."""

from __future__ import annotations


class ChangelogError(Exception):
    """Base class for errors raised inside the issue change log service."""


class ProjectUnresolvableError(ChangelogError):
    """The owning project of an issue could not be determined."""


class AccessDeniedError(ChangelogError):
    """The project is not part of the site-wide allowlist."""


class ProjectDisabledError(ChangelogError):
    """The project is allowlisted but its administrator switched the feed off."""


class UpstreamFetchError(ChangelogError):
    """Jira answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedRecordError(ChangelogError):
    """An upstream record could not be turned into an activity."""


class PolicyStoreError(ChangelogError):
    """The access policy store could not be read or written."""


__all__ = [
    "AccessDeniedError",
    "ChangelogError",
    "MalformedRecordError",
    "PolicyStoreError",
    "ProjectDisabledError",
    "ProjectUnresolvableError",
    "UpstreamFetchError",
]
