"""Key/value stores holding the project access policy."""

from __future__ import annotations

import copy
import logging
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from issue_changelog.domain.entities import PolicyStoreError
from issue_changelog.infrastructure.models import StorageEntryModel

logger = logging.getLogger(__name__)


class PolicyStore(Protocol):
    """Narrow get/set contract over the durable policy state.

    There are no transactions; concurrent read-modify-write cycles resolve
    as last writer wins.
    """

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class InMemoryPolicyStore:
    """Process-local store, used by tests and local development."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Any | None:
        # Copies keep callers from mutating stored values in place.
        return copy.deepcopy(self._values.get(key))

    def set(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)


class SqlPolicyStore:
    """Store entries as JSON values in the ``storage_entry`` table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: str) -> Any | None:
        try:
            model = (
                self.session.query(StorageEntryModel)
                .filter(StorageEntryModel.key == key)
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to read policy key %s", key)
            raise PolicyStoreError(f"Unable to read '{key}' from the policy store") from exc
        return copy.deepcopy(model.value) if model is not None else None

    def set(self, key: str, value: Any) -> None:
        try:
            model = (
                self.session.query(StorageEntryModel)
                .filter(StorageEntryModel.key == key)
                .first()
            )
            if model is None:
                model = StorageEntryModel(key=key)
            model.value = copy.deepcopy(value)
            self.session.add(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to write policy key %s", key)
            raise PolicyStoreError(f"Unable to write '{key}' to the policy store") from exc


__all__ = ["InMemoryPolicyStore", "PolicyStore", "SqlPolicyStore"]
