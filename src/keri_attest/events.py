# -*- encoding: utf-8 -*-
"""
Registry Notifications - Fire-and-forget events for external observers.

Every successful mutation emits one notification after it has committed:

    SchemaRegistered{schema_id, name, creator}
    SchemaCreatorsUpdated{holder, creators}
    AttestationCreated{attestation_id, schema_id, attester, subject}
    AttestationRevoked{attestation_id, schema_id, attester}

Delivery is synchronous and in subscription order. An observer that raises
is logged and skipped; it never fails the mutation or blocks other observers.

Usage:
    bus = EventBus()
    bus.subscribe(lambda event: print(event.to_dict()))
"""

import logging
import threading
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryEvent:
    """Base for registry notifications."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.kind, **asdict(self)}


@dataclass(frozen=True)
class SchemaRegistered(RegistryEvent):
    schema_id: str
    name: str
    creator: str


@dataclass(frozen=True)
class SchemaCreatorsUpdated(RegistryEvent):
    holder: str
    creators: Tuple[str, ...]


@dataclass(frozen=True)
class AttestationCreated(RegistryEvent):
    attestation_id: str
    schema_id: str
    attester: str
    subject: str


@dataclass(frozen=True)
class AttestationRevoked(RegistryEvent):
    attestation_id: str
    schema_id: str
    attester: str


Observer = Callable[[RegistryEvent], Any]


class EventBus:
    """Best-effort synchronous fan-out of registry events."""

    def __init__(self):
        self._observers: List[Observer] = []
        self._lock = threading.Lock()

    def subscribe(self, observer: Observer) -> None:
        with self._lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    @property
    def observer_count(self) -> int:
        with self._lock:
            return len(self._observers)

    def emit(self, event: RegistryEvent) -> None:
        """Deliver event to every observer. Never raises."""
        with self._lock:
            observers = list(self._observers)

        for observer in observers:
            try:
                observer(event)
            except Exception as e:
                logger.warning(f"Observer {observer!r} failed on {event.kind}: {e}")
