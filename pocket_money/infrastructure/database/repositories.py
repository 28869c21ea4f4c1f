"""Data access layer: key-value document stores and the budget repository"""

import copy
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Protocol, Tuple

from sqlalchemy.orm import Session

from pocket_money.config import settings
from pocket_money.domain.models import BudgetSettings, BudgetState
from pocket_money.infrastructure.database.documents import SettingsDocument, StateDocument, migrate_state
from pocket_money.infrastructure.database.models import StoredDocument

logger = logging.getLogger(__name__)

JSONDocument = Any


class PersistenceStore(Protocol):
    """Synchronous key-value store of JSON documents"""

    def get(self, key: str) -> Optional[JSONDocument]: ...

    def set(self, key: str, value: JSONDocument) -> None: ...


class InMemoryStore:
    """Dict-backed store; values are deep-copied in and out"""

    def __init__(self, initial: Optional[Dict[str, JSONDocument]] = None):
        self._data: Dict[str, JSONDocument] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Optional[JSONDocument]:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set(self, key: str, value: JSONDocument) -> None:
        self._data[key] = copy.deepcopy(value)


class SqlDocumentStore:
    """Store backed by the stored_document table; each set commits on its own"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[JSONDocument]:
        row = self.db.get(StoredDocument, key)
        return copy.deepcopy(row.payload) if row is not None else None

    def set(self, key: str, value: JSONDocument) -> None:
        row = self.db.get(StoredDocument, key)
        if row is None:
            self.db.add(StoredDocument(key=key, payload=copy.deepcopy(value)))
        else:
            row.payload = copy.deepcopy(value)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


class BudgetRepository:
    """Maps the Settings/State documents in a store to domain models"""

    def __init__(
        self,
        store: PersistenceStore,
        settings_key: str | None = None,
        state_key: str | None = None,
        legacy_history_key: str | None = None,
        default_currency: str | None = None,
    ):
        self.store = store
        self.settings_key = settings_key or settings.settings_key
        self.state_key = state_key or settings.state_key
        self.legacy_history_key = legacy_history_key or settings.legacy_history_key
        self.default_currency = default_currency or settings.default_currency

    def load_settings(self) -> Optional[BudgetSettings]:
        raw = self.store.get(self.settings_key)
        if raw is None:
            return None
        return SettingsDocument.model_validate(raw).to_domain(self.default_currency)

    def load_state(self, now: datetime) -> Optional[BudgetState]:
        """Load State, migrating and writing back documents that predate a field"""
        raw = self.store.get(self.state_key)
        if raw is None:
            return None

        state, migrated = migrate_state(raw, self.store.get(self.legacy_history_key), now)
        if migrated:
            logger.info("Migrated state document", extra={"step": "state_migrated", "key": self.state_key})
            self.save_state(state)
        return state

    def load(self, now: datetime) -> Tuple[Optional[BudgetSettings], Optional[BudgetState]]:
        return self.load_settings(), self.load_state(now)

    def save_settings(self, budget_settings: BudgetSettings) -> None:
        self.store.set(self.settings_key, SettingsDocument.from_domain(budget_settings).dump())

    def save_state(self, state: BudgetState) -> None:
        self.store.set(self.state_key, StateDocument.from_domain(state).dump())
