from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime
from pathlib import Path
from typing import Any

from src.application.errors import AppError, ExportError
from src.application.interfaces.tabular_writer import TabularWriter
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.medications import (
    create_event,
    delete_event,
    export_events,
    list_events,
    search_catalog,
    update_event,
)
from src.application.use_cases.medications.validate_submission import can_submit
from src.application.use_cases.ranges import apply_custom_range
from src.config.logging_config import configure_logging
from src.config.settings import Settings
from src.domain.dates import parse_day, to_input_value
from src.domain.models.medication_event import MedicationEvent, derive_datetime
from src.domain.services.range_resolver import bounded_for_days, list_days, resolve
from src.domain.value_objects.date_range import DateRange
from src.domain.value_objects.range_selector import RangeMode, selector_for

logger = logging.getLogger(__name__)

EXPORT_FAILED_NOTICE = "Failed to generate the spreadsheet."


class Logbook:
    """In-process state behind the logbook screen.

    Holds the entry form, the edit/delete flow, the list filter and the export
    dialog. A presentation layer reads and sets these attributes and calls the
    methods; nothing here renders anything.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        *,
        catalog: Sequence[str],
        writer: TabularWriter,
        export_dir: str | Path = "./exports",
        export_extension: str = "xlsx",
        sheet_name: str = "Records",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.uow = uow
        self.catalog = list(catalog)
        self.writer = writer
        self.export_dir = Path(export_dir)
        self.export_extension = export_extension
        self.sheet_name = sheet_name
        self.clock = clock

        self.vets = uow.vets.list()
        self.last_custom_days = uow.preferences.get_last_custom_days()
        self.last_notice: str | None = None

        self.pet = ""
        self.medicine = ""
        self.quantity: Any = 1
        self.vet = self.vets[0] if self.vets else ""
        self.editing_id: str | None = None
        self.edit_datetime = ""

        self.pending_delete_id: str | None = None

        self.filter_mode = RangeMode.TODAY
        self.custom_start: date | str | None = None
        self.custom_end: date | str | None = None

        self.download_open = False
        self.dl_mode = RangeMode.TODAY
        self.dl_start: date | str | None = None
        self.dl_end: date | str | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        writer: TabularWriter | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> Logbook:
        from src.infrastructure.catalog import load_catalog
        from src.infrastructure.reports.xlsx_writer import XlsxWriter
        from src.infrastructure.unit_of_work import build_unit_of_work

        configure_logging(settings.log_level)
        return cls(
            build_unit_of_work(settings),
            catalog=load_catalog(settings.medicine_catalog_file),
            writer=writer or XlsxWriter(),
            export_dir=settings.export_dir,
            export_extension=settings.export_extension,
            sheet_name=settings.export_sheet_name,
            clock=clock,
        )

    # Entry form

    def medicine_suggestions(self) -> list[str]:
        return search_catalog.filter_names(self.catalog, self.medicine)

    def pet_suggestions(self) -> list[str]:
        return search_catalog.filter_names(self.uow.pets.list(), self.pet)

    @property
    def can_submit(self) -> bool:
        return can_submit(self.pet, self.medicine, self.vet, self.quantity)

    def reset_form(self) -> None:
        self.pet = ""
        self.medicine = ""
        self.quantity = 1
        self.vet = self.vets[0] if self.vets else ""
        self.editing_id = None
        self.edit_datetime = ""

    def save(self) -> MedicationEvent | None:
        """Create a new event, or save the one being edited. No-op when the form is invalid."""
        if not self.can_submit:
            return None
        now = self.clock()
        if self.editing_id:
            event = update_event.execute(
                self.uow,
                update_event.UpdateEventInput(
                    pet=self.pet,
                    medicine=self.medicine,
                    vet=self.vet,
                    quantity=self.quantity,
                    event_id=self.editing_id,
                    occurred_at_text=self.edit_datetime,
                ),
                now=now,
            )
        else:
            event = create_event.execute(
                self.uow,
                create_event.CreateEventInput(
                    pet=self.pet, medicine=self.medicine, vet=self.vet, quantity=self.quantity
                ),
                now=now,
            )
        self.reset_form()
        return event

    def start_edit(self, event_id: str) -> MedicationEvent | None:
        event = self.uow.events.get(event_id)
        if event is None:
            return None
        self.pet = event.pet
        self.medicine = event.medicine
        self.quantity = event.quantity
        self.vet = event.vet
        self.editing_id = event.id
        self.edit_datetime = to_input_value(derive_datetime(event, now=self.clock()))
        return event

    # Delete confirmation

    def request_delete(self, event_id: str) -> None:
        self.pending_delete_id = event_id

    @property
    def pending_delete(self) -> MedicationEvent | None:
        if not self.pending_delete_id:
            return None
        return self.uow.events.get(self.pending_delete_id)

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self) -> bool:
        event_id = self.pending_delete_id
        if not event_id:
            return False
        self.pending_delete_id = None
        try:
            delete_event.execute(self.uow, event_id)
        except AppError as exc:
            logger.info("Delete skipped: %s", exc.message)
            return False
        if self.editing_id == event_id:
            self.reset_form()
        return True

    # Range filter

    def range_modes(self) -> list[RangeMode]:
        """Selectable modes; "last N days" appears once a custom range was applied."""
        modes = [RangeMode.MONTH, RangeMode.WEEK, RangeMode.TODAY]
        if self.last_custom_days:
            modes.append(RangeMode.LAST_N)
        modes.append(RangeMode.CUSTOM)
        return modes

    def set_filter(self, mode: RangeMode | str) -> None:
        self.filter_mode = RangeMode(mode)

    def _apply_custom(self, start: Any, end: Any) -> tuple[Any, Any]:
        if parse_day(start) is None and parse_day(end) is None:
            start = end = self.clock().date()
        days = apply_custom_range.execute(self.uow, start, end)
        if days:
            self.last_custom_days = days
        return start, end

    def apply_custom_filter(self) -> None:
        self.custom_start, self.custom_end = self._apply_custom(self.custom_start, self.custom_end)

    def clear_custom_filter(self) -> None:
        self.custom_start = None
        self.custom_end = None

    def _resolve(self, mode: RangeMode, start: Any, end: Any) -> DateRange:
        selector = selector_for(mode, last_n=self.last_custom_days, start=start, end=end)
        return resolve(selector, self.clock())

    def active_range(self) -> DateRange:
        return self._resolve(self.filter_mode, self.custom_start, self.custom_end)

    def _days(self, date_range: DateRange) -> list[date]:
        now = self.clock()
        instants = (derive_datetime(e, now=now) for e in self.uow.events.list())
        return list_days(bounded_for_days(date_range, instants, now))

    def active_days(self) -> list[date]:
        return self._days(self.active_range())

    def visible_events(self) -> list[MedicationEvent]:
        return list_events.execute(self.uow, self.active_range(), now=self.clock())

    # Export dialog

    def open_download(self) -> None:
        """Open the export dialog preset to the current filter."""
        self.dl_mode = self.filter_mode
        if self.filter_mode is RangeMode.CUSTOM:
            self.dl_start, self.dl_end = self.custom_start, self.custom_end
        else:
            self.dl_start = self.dl_end = None
        self.download_open = True

    def cancel_download(self) -> None:
        self.download_open = False

    def apply_download_custom(self) -> None:
        self.dl_start, self.dl_end = self._apply_custom(self.dl_start, self.dl_end)

    def clear_download_custom(self) -> None:
        self.dl_start = None
        self.dl_end = None

    def download_range(self) -> DateRange:
        return self._resolve(self.dl_mode, self.dl_start, self.dl_end)

    def download_days(self) -> list[date]:
        return self._days(self.download_range())

    def confirm_download(self) -> Path | None:
        """Write the sheet for the dialog's range and close the dialog.

        A failed write leaves a generic notice in ``last_notice``.
        """
        self.last_notice = None
        try:
            result = export_events.execute(
                self.uow,
                self.download_range(),
                self.catalog,
                self.writer,
                export_dir=self.export_dir,
                extension=self.export_extension,
                sheet_name=self.sheet_name,
                now=self.clock(),
            )
        except ExportError as exc:
            logger.error("Spreadsheet export failed: %s", exc.message, exc_info=True)
            self.last_notice = EXPORT_FAILED_NOTICE
            return None
        finally:
            self.download_open = False
        return result.path if result else None
