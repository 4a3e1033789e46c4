import logging
import os
import sys

from rulehash.types import Label

EXTERNAL_PREFIXES = ("@", "//external")


def _resolve_bool_flag(explicit: bool | None, env_var: str) -> bool:
    """Resolve a boolean flag from explicit value or environment variable."""
    if explicit is not None:
        return explicit

    raw = os.getenv(env_var)
    if raw is None:
        return False

    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_log_level(debug: bool | None = None) -> int:
    """Resolve the log level from --debug, RULEHASH_DEBUG or RULEHASH_LOG_LEVEL.

    Unknown level names fall back to WARNING.
    """
    if _resolve_bool_flag(debug, "RULEHASH_DEBUG"):
        return logging.DEBUG

    name = os.getenv("RULEHASH_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int) -> None:
    """Send rulehash log records to the current stderr at the given level.

    Calling it again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger("rulehash")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_rulehash_cli", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    handler._rulehash_cli = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


def is_external_label(label: Label) -> bool:
    """True for labels of external workspaces, which are never resolved locally."""
    return label.startswith(EXTERNAL_PREFIXES)
