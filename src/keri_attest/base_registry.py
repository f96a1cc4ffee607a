# -*- encoding: utf-8 -*-
"""
BaseRegistry - Generic base class for the registry's canonical tables.

Provides the common infrastructure shared by the schema table and the
attestation table:
- Insert-only primary storage (identifier -> record), insertion ordered
- A lock that can be shared with other tables so several tables update as
  one unit
- A registry-wide sequence counter used to mint fresh identifiers
- Lookup raising a table-specific not-found error

Subclasses implement their own create/update operations. The base class
provides helpers (_insert, _get, _next_sn) rather than template methods,
keeping each table's write path explicit and readable.

Usage:
    class MyRegistry(BaseRegistry[MyRecord]):
        def _not_found(self, identifier):
            return MyNotFound(identifier)

        def create(self, name):
            with self._lock:
                sn = self._next_sn()
                record = MyRecord(record_id=compute_said({"sn": sn, "name": name}))
                self._insert(record.record_id, record)
            return record.record_id
"""

import itertools
import threading
from abc import ABC, abstractmethod
from typing import (
    Any,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    TypeVar,
)

from .errors import NotFoundError

T = TypeVar("T")


class BaseRegistry(ABC, Generic[T]):
    """
    Lean base class for canonical registry tables.

    Records are never deleted and identifiers are never overwritten. Record
    replacement (e.g. marking revoked) goes through _replace, which requires
    the identifier to exist already.
    """

    def __init__(
        self,
        lock: Optional[Any] = None,
        sequence: Optional[Iterator[int]] = None,
    ):
        self._entities: Dict[str, T] = {}
        self._lock = lock if lock is not None else threading.RLock()
        self._sequence = sequence if sequence is not None else itertools.count()

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _next_sn(self) -> int:
        """Next value of the sequence counter (caller holds the lock)."""
        return next(self._sequence)

    def _insert(self, identifier: str, obj: T) -> None:
        """Insert a new record (caller holds the lock).

        Raises:
            ValueError: If the identifier is already present.
        """
        if identifier in self._entities:
            raise ValueError(f"Duplicate {self._entity_label} identifier: {identifier}")
        self._entities[identifier] = obj

    def _discard(self, identifier: str) -> None:
        """Undo an uncommitted _insert (caller holds the lock)."""
        self._entities.pop(identifier, None)

    def _replace(self, identifier: str, obj: T) -> None:
        """Swap the stored snapshot of an existing record (caller holds the lock)."""
        if identifier not in self._entities:
            raise self._not_found(identifier)
        self._entities[identifier] = obj

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _get(self, identifier: str) -> T:
        """Exact-match lookup, raising the table's not-found error."""
        with self._lock:
            try:
                return self._entities[identifier]
            except KeyError:
                raise self._not_found(identifier) from None

    @abstractmethod
    def _not_found(self, identifier: str) -> NotFoundError:
        """Build the not-found error for this table."""

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._entities

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_all(self) -> List[T]:
        """List all records in insertion order."""
        with self._lock:
            return list(self._entities.values())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _entity_label(self) -> str:
        """Label for log messages (e.g. 'schema', 'attestation')."""
        name = type(self).__name__
        for suffix in ("Registry", "Store"):
            if name.endswith(suffix):
                return name[: -len(suffix)].lower()
        return name.lower()
