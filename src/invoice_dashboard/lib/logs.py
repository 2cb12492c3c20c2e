"""
Logging utilities for the Invoice Dashboard.

`logger(__file__)` returns a logger named after the module's dotted path
inside the package (`services/chatbot.py` logs as
`invoice_dashboard.services.chatbot`, a package `__init__.py` as the
package itself). Each logger gets one stream handler the first time it is
requested.

The level is read when a logger is first configured, from
INVOICE_DASHBOARD_LOG_LEVEL, then LOG_LEVEL, then INFO.
"""

import logging
import os
from pathlib import Path

PACKAGE = "invoice_dashboard"

_FORMATTER = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def level() -> int:
    """Return the configured log level, INFO when unset or unknown."""
    name = (
        os.getenv("INVOICE_DASHBOARD_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO"
    )
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO


def module_name(path: str) -> str:
    """Convert a source file path into a dotted module name under PACKAGE."""
    parts = list(Path(path).with_suffix("").parts)
    if PACKAGE in parts:
        parts = parts[len(parts) - parts[::-1].index(PACKAGE) - 1 :]
    else:
        parts = [PACKAGE, parts[-1]]
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def logger(name: str) -> logging.Logger:
    """
    Return a configured logger.

    Args:
        name: Logger name or a __file__ path.

    Returns:
        logging.Logger with a single formatted stream handler.
    """
    if "/" in name or "\\" in name:
        name = module_name(name)

    log = logging.getLogger(name)
    if not log.handlers:
        log.setLevel(level())
        handler = logging.StreamHandler()
        handler.setFormatter(_FORMATTER)
        log.addHandler(handler)
    return log
