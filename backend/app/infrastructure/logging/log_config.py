"""Logging setup — root handler plus per-category levels from Settings.

Categories let operators raise the cipher logger to DEBUG, or silence the
request log, without touching the rest of the application.

Usage:
    from app.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from app.config import Settings, get_settings

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"

# Settings field → logger names it controls
_CATEGORY_LOGGERS: dict[str, tuple[str, ...]] = {
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_http_requests": ("RequestLogger",),
    "log_level_cipher": ("app.infrastructure.security",),
    "log_level_store": ("app.infrastructure.memory", "app.application.services"),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply log levels from settings and return the level set per logger name.

    Safe to call more than once: a stderr handler is only attached when the
    root logger has none (uvicorn normally installs its own).
    """
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for field_name, logger_names in _CATEGORY_LOGGERS.items():
        level = _parse_level(getattr(settings, field_name))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        ", ".join(f"{name}={logging.getLevelName(lvl)}" for name, lvl in applied.items()),
    )
    return applied


def _parse_level(raw: str) -> int:
    """Level name → logging constant; unknown names fall back to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
