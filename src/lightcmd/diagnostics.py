"""
Logging integration with the host's diagnostic output.

Plugins on the console can only write diagnostics through a single
"print a line" function. `DiagnosticSinkHandler` forwards records of the
package logger to that function so the standard `logging` calls used across
the package show up in the console's system monitor.
"""

import logging

from lightcmd.core.types import DiagnosticSink

PACKAGE_LOGGER = "lightcmd"
LOG_FORMAT = "CMD_LOG: [%(asctime)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


class DiagnosticSinkHandler(logging.Handler):
    """Logging handler writing formatted records to a host print function.

    The sink is treated as write-only and order-preserving. A failing sink
    never propagates; the failure goes through `Handler.handleError`.
    """

    def __init__(self, sink: DiagnosticSink, level: int = logging.INFO):
        super().__init__(level)
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink(self.format(record))
        except Exception:
            self.handleError(record)


def attach_diagnostic_sink(
    sink: DiagnosticSink,
    level: int = logging.INFO,
    logger_name: str = PACKAGE_LOGGER,
) -> DiagnosticSinkHandler:
    """
    Route package log records to a host print function.

    Params:
        sink: Single-argument print function of the host
        level: Lowest level forwarded
        logger_name: Logger to attach to (defaults to the package logger)

    Returns:
        The installed handler, for `detach_diagnostic_sink`
    """
    handler = DiagnosticSinkHandler(sink, level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger = logging.getLogger(logger_name)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    logger.addHandler(handler)
    return handler


def detach_diagnostic_sink(
    handler: logging.Handler, logger_name: str = PACKAGE_LOGGER
) -> None:
    """Remove a handler installed by `attach_diagnostic_sink`."""
    logging.getLogger(logger_name).removeHandler(handler)
