"""Project allowlist and settings use cases."""

from .add_allowed_project import add_allowed_project
from .get_access_info import get_access_info
from .get_project_settings import get_project_settings
from .list_allowed_projects import list_allowed_projects
from .list_available_projects import list_available_projects
from .remove_allowed_project import remove_allowed_project
from .setup_initial_access import setup_initial_access
from .toggle_project_app import toggle_project_app

__all__ = [
    "add_allowed_project",
    "get_access_info",
    "get_project_settings",
    "list_allowed_projects",
    "list_available_projects",
    "remove_allowed_project",
    "setup_initial_access",
    "toggle_project_app",
]
