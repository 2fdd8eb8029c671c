"""
Project-wide logging setup.

Every module asks ``get_logger`` for its logger. The first call wires the
``family_tree_layout`` base logger from the ``logging:`` section of
``config/family_tree_layout.yml``:

* one master log file with everything at the configured level,
* one file per area (``layout.log``, ``hierarchy.log``, ...) so a single
  stage can be followed in isolation,
* a stderr handler that only shows warnings unless ``debug: true``; the CLI
  writes JSON to stdout and log chatter would corrupt it.

Log files and their directory are only created when the first record is
written, so importing the package never writes to disk. ``to_file`` defaults
to on in a source checkout and off in an installed copy; ``rotate: true``
swaps plain files for size-capped rotating ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

from family_tree_layout.config import get_config
from family_tree_layout.utils.pathing import is_source_checkout, resolve_project_path

BASE_LOGGER_NAME = "family_tree_layout"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROTATE_MAX_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 5


@dataclass(frozen=True)
class LogSettings:
    level: int
    console_level: int
    to_file: bool
    directory: Path
    master_file: str
    rotate: bool

    @classmethod
    def from_config(cls) -> "LogSettings":
        cfg = get_config()
        section = cfg.logging
        debug = bool(cfg.debug)

        level = getattr(logging, str(section.get("level", "INFO")).upper(), logging.INFO)
        directory = section.get("dir") or cfg.paths.get("logs_dir") or "logs"

        return cls(
            level=logging.DEBUG if debug else level,
            console_level=logging.DEBUG if debug else logging.WARNING,
            to_file=bool(section.get("to_file", is_source_checkout())),
            directory=resolve_project_path(directory),
            master_file=section.get("file", f"{BASE_LOGGER_NAME}.log"),
            rotate=bool(section.get("rotate", False)),
        )


_settings: Optional[LogSettings] = None
_area_handlers: Dict[str, logging.Handler] = {}


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


class _CreateDirOnOpen:
    """Mixin for ``delay=True`` file handlers: the log directory is made on first write."""

    baseFilename: str

    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()  # type: ignore[misc]


class _FileHandler(_CreateDirOnOpen, logging.FileHandler):
    pass


class _RotatingFileHandler(_CreateDirOnOpen, RotatingFileHandler):
    pass


def _file_handler(settings: LogSettings, filename: str) -> logging.Handler:
    # Nothing touches the filesystem until the first record is emitted
    path = settings.directory / filename

    if settings.rotate:
        handler: logging.Handler = _RotatingFileHandler(
            path,
            maxBytes=ROTATE_MAX_BYTES,
            backupCount=ROTATE_BACKUPS,
            encoding="utf-8",
            delay=True,
        )
    else:
        handler = _FileHandler(path, encoding="utf-8", delay=True)
    handler.setLevel(settings.level)
    handler.setFormatter(_formatter())
    return handler


def _setup() -> LogSettings:
    global _settings
    if _settings is not None:
        return _settings

    settings = LogSettings.from_config()
    base = logging.getLogger(BASE_LOGGER_NAME)
    base.setLevel(settings.level)
    base.propagate = False

    if settings.to_file:
        base.addHandler(_file_handler(settings, settings.master_file))

    console = logging.StreamHandler()
    console.setLevel(settings.console_level)
    console.setFormatter(_formatter())
    base.addHandler(console)

    _settings = settings
    return settings


def _qualified_name(name: str | None) -> str:
    # "pipeline" -> "family_tree_layout.pipeline"; dotted package names pass through
    if not name or name == BASE_LOGGER_NAME:
        return BASE_LOGGER_NAME
    if name.startswith(BASE_LOGGER_NAME + "."):
        return name
    return f"{BASE_LOGGER_NAME}.{name}"


def _area(qualified: str) -> str:
    """First component below the package: ``family_tree_layout.layout.engine`` -> ``layout``."""
    return qualified.split(".")[1]


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return the logger for ``name`` (usually ``__name__``).

    Loggers propagate to the base logger for the master file and console;
    each area logger additionally owns the area's file handler.
    """
    settings = _setup()
    qualified = _qualified_name(name)
    if qualified == BASE_LOGGER_NAME:
        return logging.getLogger(BASE_LOGGER_NAME)

    area = _area(qualified)
    if settings.to_file and area not in _area_handlers:
        handler = _file_handler(settings, f"{area}.log")
        logging.getLogger(f"{BASE_LOGGER_NAME}.{area}").addHandler(handler)
        _area_handlers[area] = handler

    return logging.getLogger(qualified)
