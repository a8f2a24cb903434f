from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union
from uuid import uuid4

from src.domain.dates import format_display, from_epoch_ms, parse_display, to_epoch_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Authoritative:
    epoch_ms: int


@dataclass(frozen=True, slots=True)
class LegacyText:
    text: str


# Where an event's instant comes from: a stored timestamp, or only the
# dd/mm/yyyy hh:mm text written by older versions.
TimestampSource = Union[Authoritative, LegacyText]


def _finite_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if math.isfinite(value) else None


def _representable_ms(value: float | None) -> int | None:
    """Whole epoch milliseconds that map to a datetime, else None."""
    if not value:
        return None
    try:
        from_epoch_ms(value)
    except (OverflowError, ValueError, OSError):
        return None
    return int(value)


@dataclass(slots=True)
class MedicationEvent:
    id: str
    pet: str
    medicine: str
    vet: str
    quantity: float
    timestamp: TimestampSource
    display_date: str

    @classmethod
    def create(
        cls,
        pet: str,
        medicine: str,
        vet: str,
        quantity: float,
        now: datetime,
    ) -> MedicationEvent:
        return cls(
            id=str(uuid4()),
            pet=pet,
            medicine=medicine,
            vet=vet,
            quantity=quantity,
            timestamp=Authoritative(to_epoch_ms(now)),
            display_date=format_display(now),
        )

    @property
    def occurred_at(self) -> int | None:
        if isinstance(self.timestamp, Authoritative):
            return self.timestamp.epoch_ms
        return None

    def retime(self, occurred_at: datetime) -> None:
        """Move the event to a new instant, keeping the display text in sync."""
        self.timestamp = Authoritative(to_epoch_ms(occurred_at))
        self.display_date = format_display(occurred_at)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "pet": self.pet,
            "medicine": self.medicine,
            "vet": self.vet,
            "quantity": self.quantity,
            "displayDate": self.display_date,
        }
        if self.occurred_at is not None:
            data["occurredAt"] = self.occurred_at
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MedicationEvent:
        """Build an event from its stored JSON shape.

        Accepts both the current keys (``occurredAt``/``displayDate``) and the
        older ``createdAt``/``date`` pair. Raises ValueError when the entry has
        no id.
        """
        if not isinstance(data, Mapping) or not data.get("id"):
            raise ValueError("Stored event without id")

        display = data.get("displayDate", data.get("date")) or ""
        raw_ts = data.get("occurredAt", data.get("createdAt"))
        # 0 and out-of-range values count as missing
        ts = _representable_ms(_finite_number(raw_ts))
        if ts is None and raw_ts:
            logger.warning("Ignoring unusable timestamp %r on event %s", raw_ts, data["id"])
        timestamp: TimestampSource = (
            Authoritative(ts) if ts is not None else LegacyText(str(display))
        )

        quantity = _finite_number(data.get("quantity"))
        if quantity is None:
            try:
                quantity = float(data.get("quantity"))
            except (TypeError, ValueError):
                quantity = 0.0

        return cls(
            id=str(data["id"]),
            pet=str(data.get("pet") or ""),
            medicine=str(data.get("medicine") or ""),
            vet=str(data.get("vet") or ""),
            quantity=quantity,
            timestamp=timestamp,
            display_date=str(display),
        )


def derive_timestamp(event: MedicationEvent, *, now: datetime | None = None) -> int:
    """Epoch milliseconds at which ``event`` happened.

    Stored timestamps win. Legacy entries are parsed from their display text;
    when that fails the current instant is returned.
    """
    source = event.timestamp
    if isinstance(source, Authoritative):
        return source.epoch_ms
    if isinstance(source, LegacyText):
        parsed = parse_display(source.text)
        if parsed is not None:
            return to_epoch_ms(parsed)
    return to_epoch_ms(now or datetime.now())


def derive_datetime(event: MedicationEvent, *, now: datetime | None = None) -> datetime:
    return from_epoch_ms(derive_timestamp(event, now=now))
