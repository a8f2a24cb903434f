from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from src.application.errors import ValidationError


@dataclass
class Submission:
    pet: str
    medicine: str
    vet: str
    quantity: Any


def parse_quantity(value: Any) -> float | None:
    """Quantity as a finite positive number, or None. Text input is accepted."""
    if value is None or isinstance(value, bool):
        return None
    try:
        quantity = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(quantity) or quantity <= 0:
        return None
    return quantity


def can_submit(pet: str | None, medicine: str | None, vet: str | None, quantity: Any) -> bool:
    """True when every name is non-blank and quantity is a positive number."""
    names_ok = all((name or "").strip() for name in (pet, medicine, vet))
    return names_ok and parse_quantity(quantity) is not None


def ensure_valid(payload: Submission) -> float:
    """Validated quantity for ``payload``; raises ValidationError otherwise."""
    if not can_submit(payload.pet, payload.medicine, payload.vet, payload.quantity):
        raise ValidationError(
            "Pet, medicine, vet and a positive quantity are required",
            details={
                "pet": payload.pet,
                "medicine": payload.medicine,
                "vet": payload.vet,
                "quantity": payload.quantity,
            },
        )
    return parse_quantity(payload.quantity)  # type: ignore[return-value]
