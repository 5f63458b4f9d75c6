# Overview: Device-local key-value store backing demo sessions.

from __future__ import annotations

from abc import ABC, abstractmethod

from ..extensions import db
from ..models import LocalEntry


class KeyValueStore(ABC):
    """String documents under fixed keys, one device, one writer."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class SqlKeyValueStore(KeyValueStore):
    """KeyValueStore over the `local_entries` table on the local bind."""

    def get(self, key: str) -> str | None:
        entry = db.session.get(LocalEntry, key)
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        entry = db.session.get(LocalEntry, key)
        if entry:
            entry.value = value
        else:
            db.session.add(LocalEntry(key=key, value=value))
        db.session.commit()

    def remove(self, key: str) -> None:
        entry = db.session.get(LocalEntry, key)
        if entry:
            db.session.delete(entry)
            db.session.commit()
