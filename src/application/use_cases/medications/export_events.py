from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from src.application.errors import ExportError
from src.application.interfaces.tabular_writer import TabularWriter
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.services.event_grid import ExportGrid, build_export_grid, export_filename
from src.domain.value_objects.date_range import DateRange

logger = logging.getLogger(__name__)


@dataclass
class ExportEventsOutput:
    path: Path
    grid: ExportGrid


def execute(
    uow: UnitOfWork,
    date_range: DateRange,
    catalog: Sequence[str],
    writer: TabularWriter,
    *,
    export_dir: str | Path,
    extension: str = "xlsx",
    sheet_name: str = "Records",
    now: datetime | None = None,
) -> ExportEventsOutput | None:
    """Write the medicine x day sheet for ``date_range``.

    Returns None when the range covers no days. Grid and writer failures are
    raised as ExportError.
    """
    try:
        grid = build_export_grid(uow.events.list(), date_range, catalog, now=now)
    except (OverflowError, ValueError, OSError) as exc:
        raise ExportError("Failed to build export grid") from exc
    filename = export_filename(grid.days, extension)
    if filename is None:
        return None

    target = Path(export_dir) / filename
    try:
        path = writer.write(grid.as_matrix(), target, sheet_name=sheet_name)
    except Exception as exc:
        raise ExportError(
            "Failed to write spreadsheet", details={"target": str(target)}
        ) from exc

    logger.info("Exported %d days to %s", len(grid.days), path)
    return ExportEventsOutput(path=Path(path), grid=grid)
