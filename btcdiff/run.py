from .config import Settings
from .logging_setup import setup_logging


def run_with_settings(settings: Settings):
    logger = setup_logging(settings.log_level)
    logger.info("Starting Bitcoin difficulty converter API")

    import uvicorn
    from .web.api import app, set_default_unit

    set_default_unit(settings.default_unit)
    logger.info(
        "Serving on %s:%d (default unit %r)",
        settings.api_host,
        settings.api_port,
        settings.default_unit,
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level="warning")


def run_from_env():
    run_with_settings(Settings())
