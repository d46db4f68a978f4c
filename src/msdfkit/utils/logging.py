"""Logging utilities for msdfkit.

Two layers share the stdlib root logger:

- Algorithm modules log plain messages through ``logging.getLogger``.
- The generator and CLI emit structlog events rendered as JSON lines.

``configure_logging`` installs the handlers for both and may be called more
than once (each call replaces the handlers of the previous one).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from msdfkit.config import LoggingConfig

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_STRUCTLOG_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.processors.JSONRenderer(),
]

# Handlers installed by configure_logging, removed on reconfiguration
_installed: list[logging.Handler] = []


@dataclass
class GenerationStats:
    """Counters and timings of one font run.

    Attributes:
        generated_count: Fields written
        skipped_count: Blank glyphs and characters missing from the font
        error_count: Glyphs whose field could not be generated
        contours_reversed: Contours whose winding the normalizer flipped
        coloring_fallbacks: Contours colored uniformly after a coloring failure
        errors: (glyph name, message) for every failed glyph
        field_timings_ms: Wall time of each generated field
    """

    generated_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    contours_reversed: int = 0
    coloring_fallbacks: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    field_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time

    @property
    def avg_field_time_ms(self) -> float | None:
        if not self.field_timings_ms:
            return None
        return sum(self.field_timings_ms) / len(self.field_timings_ms)


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def configure_logging(
    config: LoggingConfig | None = None,
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Route msdfkit logs to the console and, optionally, a log file.

    Args:
        config: Levels and log file (defaults if None)
        quiet: Suppress console output; the log file still receives records

    Returns:
        Structured logger for the ``msdfkit`` namespace

    Raises:
        ValueError: If a configured level name is unknown
    """
    config = config or LoggingConfig()
    root_logger = logging.getLogger()
    for handler in _installed:
        root_logger.removeHandler(handler)
        handler.close()
    _installed.clear()

    if config.log_file is not None:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setLevel(_level(config.file_log_level))
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        _installed.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(config.log_level))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        _installed.append(console_handler)

    for handler in _installed:
        root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    structlog.configure(
        processors=_STRUCTLOG_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("msdfkit")
    logger.debug(
        "Logging configured",
        log_file=str(config.log_file) if config.log_file else None,
        console_level=None if quiet else config.log_level,
    )
    return logger


class GenerationLogger:
    """Emits per-glyph events and accumulates GenerationStats."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = GenerationStats()

    @property
    def stats(self) -> GenerationStats:
        return self._stats

    def log_field_start(self, name: str) -> None:
        self._logger.debug("Generating field", name=name)

    def log_field_complete(self, name: str, width: int, height: int, duration_ms: float) -> None:
        """Record a written field and its timing."""
        self._stats.generated_count += 1
        self._stats.field_timings_ms.append(duration_ms)
        self._logger.info(
            "Field generated",
            name=name,
            size=f"{width}x{height}",
            duration_ms=round(duration_ms, 2),
        )

    def log_field_skipped(self, name: str, reason: str) -> None:
        """Record a glyph that needs no field (blank or not in the font)."""
        self._stats.skipped_count += 1
        self._logger.debug("Field skipped", name=name, reason=reason)

    def log_field_error(self, name: str, error: Exception, traceback: str | None = None) -> None:
        """Record a glyph whose geometry could not be rendered."""
        self._stats.error_count += 1
        self._stats.errors.append((name, str(error)))
        self._logger.error(
            "Field generation failed",
            name=name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )

    def log_normalization(self, name: str, total_contours: int, reversed_count: int, hole_count: int) -> None:
        self._stats.contours_reversed += reversed_count
        self._logger.debug(
            "Shape normalized",
            name=name,
            contours=total_contours,
            reversed=reversed_count,
            holes=hole_count,
        )

    def log_coloring(self, name: str, sharp_corners: int, fallbacks: int) -> None:
        self._stats.coloring_fallbacks += fallbacks
        if fallbacks:
            self._logger.warning("Contours colored uniformly", name=name, fallbacks=fallbacks)
        self._logger.debug("Edges colored", name=name, sharp_corners=sharp_corners)
