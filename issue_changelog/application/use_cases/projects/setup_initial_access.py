"""Use case for seeding the allowlist on a fresh installation."""

from collections.abc import Iterable

from issue_changelog.domain.entities import InitialAccessSetup
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.infrastructure.repositories import AccessPolicyRepository


def setup_initial_access(
    store: PolicyStore, *, project_keys: Iterable[str] = ()
) -> InitialAccessSetup:
    """Write ``project_keys`` only while the allowlist is still empty."""

    repository = AccessPolicyRepository(store)
    current = repository.get_allowed_projects()
    if current:
        return InitialAccessSetup(
            configured=False,
            message=f"Access already configured for: {', '.join(current)}",
            allowed_projects=current,
        )

    keys = [key.strip() for key in project_keys if key and key.strip()]
    if not keys:
        return InitialAccessSetup(
            configured=False,
            message="No initial projects specified",
            allowed_projects=[],
        )

    repository.set_allowed_projects(keys)
    return InitialAccessSetup(
        configured=True,
        message=f"Initial access configured for: {', '.join(keys)}",
        allowed_projects=keys,
    )


__all__ = ["setup_initial_access"]
