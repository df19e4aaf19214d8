from dataclasses import dataclass
import os
from dotenv import load_dotenv

from .utils.formatting import DIFFICULTY_UNITS, UNIT_ALIASES

# Load .env file if it exists
load_dotenv()


@dataclass
class Settings:
    log_level: str = "INFO"
    verbose: bool = False  # Deprecated: use log_level instead
    default_unit: str = "T"
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    def __post_init__(self):
        """Load settings from environment variables at instance creation time"""
        # Log level configuration (LOG_LEVEL takes precedence over VERBOSE)
        log_level_env = os.getenv("LOG_LEVEL", "").upper()
        if log_level_env:
            self.log_level = log_level_env
        else:
            self.verbose = os.getenv("VERBOSE", "false").lower() == "true"
            self.log_level = "DEBUG" if self.verbose else "INFO"

        # Unit the CLI and API display difficulties in when none is given
        unit = os.getenv("DEFAULT_UNIT", "T")
        if unit in DIFFICULTY_UNITS or unit in UNIT_ALIASES:
            self.default_unit = UNIT_ALIASES.get(unit, unit)
        else:
            self.default_unit = "T"

        self.api_host = os.getenv("API_HOST", "0.0.0.0")
        try:
            self.api_port = int(os.getenv("API_PORT", "8080"))
        except ValueError:
            self.api_port = 8080
