from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFound(AppError):
    code = "not_found"


class ValidationError(AppError):
    code = "validation_error"


class ExportError(AppError):
    code = "export_error"


class StorageError(AppError):
    code = "storage_error"
