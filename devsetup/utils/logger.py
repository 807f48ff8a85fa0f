import logging
import os
import sys

import structlog

DEFAULT_LEVEL = "WARNING"


def _resolve_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    return logging.getLevelNamesMapping().get(
        os.getenv("DEVSETUP_LOG_LEVEL", DEFAULT_LEVEL).upper(),
        logging.WARNING,
    )


def _stderr_logger(*args) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger so redirected streams are honoured
    return structlog.PrintLogger(sys.stderr)


def configure_logging(verbose: bool = False, colors: bool = True) -> None:
    """
    Configure structlog for the provisioning run.

    Log lines go to stderr so they never interleave with the operator-facing
    console output on stdout.

    Args:
        verbose: Log everything down to DEBUG
        colors: Colorize the console renderer
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.contextvars.merge_contextvars,
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
        logger_factory=_stderr_logger,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(verbose)),
        cache_logger_on_first_use=False,
    )


configure_logging()

logger: structlog.stdlib.BoundLogger = structlog.get_logger()
