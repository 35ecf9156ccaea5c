"""
Centralized application-specific logging using Loguru.

This module provides a function-based logging mechanism (`LOG`) that dynamically
respects the `beQuiet` flag from application settings.

What gets logged, all at debug level:
- Every command `Sh.exec` runs, rendered as it would be displayed, and any
  failure to launch it.
- Expansions aborted by an unresolved variable in `shline expand` and
  `shline run`.
- Unreadable, malformed or unwritable config files, and failed `var`
  subcommands.
- Help rendering errors and unhandled exceptions reaching `main()`.

Nothing is logged when `beQuiet` is set.

Example:
    from shline.lib.log import LOG
    LOG("Executing: ls -la")

Environment:
- Set `SHL_BEQUIET=True` to suppress detailed logging output.
"""

from loguru import logger
from typing import Any
import sys

app_logger = logger.bind(app="SHLINE")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >24}</yellow>::"
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()  # Remove any default handlers
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Application-specific logging function.

    Logs the message at debug level unless `beQuiet` is set in `appsettings`.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    try:
        from shline.config.settings import appsettings  # Ensure up-to-date settings

        if not appsettings.beQuiet:
            app_logger.debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}")  # Fallback to standard output on failure
