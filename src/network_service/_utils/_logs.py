import logging
import sys

LOGGER_NAME = "network_service"
_HANDLER_NAME = "network_service.console"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure the package logger.

    When `debug` is set a stderr handler is attached once and the level is
    lowered to DEBUG. Otherwise the logger is left for the application to
    configure.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not debug:
        return logger

    logger.setLevel(logging.DEBUG)
    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        logger.addHandler(handler)
    return logger
