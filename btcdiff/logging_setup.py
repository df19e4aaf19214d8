import coloredlogs, logging

APP_LOGGER = "Difficulty-Converter"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logging(log_level="INFO"):
    """
    Install coloredlogs on the root logger and return the application logger.

    Args:
        log_level: One of VALID_LEVELS (any case), or a bool where True means
                   DEBUG. Unknown names fall back to INFO with a warning.

    Rejected conversions are logged by the "Converter" logger at WARNING.
    Half-typed input produces them on nearly every keystroke, so they only
    show up when running at DEBUG.
    """
    if isinstance(log_level, bool):
        log_level = "DEBUG" if log_level else "INFO"

    requested = str(log_level).upper()
    level_name = requested if requested in VALID_LEVELS else "INFO"

    logging.getLogger().setLevel(level_name)
    coloredlogs.install(level=level_name, fmt=LOG_FORMAT, milliseconds=True)

    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level_name)
    if requested != level_name:
        logger.warning(
            "Invalid log level %r, using INFO. Valid levels: %s",
            log_level,
            ", ".join(VALID_LEVELS),
        )

    converter_level = logging.DEBUG if level_name == "DEBUG" else logging.ERROR
    logging.getLogger("Converter").setLevel(converter_level)

    # Request lines from the API server are noise at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logger
