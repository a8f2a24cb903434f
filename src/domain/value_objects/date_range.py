from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from src.domain.dates import from_epoch_ms

# Floor/ceiling used when a custom range is missing one of its bounds
RANGE_FLOOR = from_epoch_ms(0)
RANGE_CEILING = datetime.max


@dataclass(frozen=True, slots=True)
class DateRange:
    start: datetime
    end: datetime
    open_start: bool = False
    open_end: bool = False

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("DateRange end must not precede start")

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end
