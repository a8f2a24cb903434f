from __future__ import annotations

import logging


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers when called more than once
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("sqlalchemy.engine", "openpyxl"):
        logging.getLogger(name).setLevel(level)
