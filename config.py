"""Default configuration for the Kimi translation plugin."""
import logging
from pathlib import Path
from typing import Optional

# Plugin identity
APP_NAME = "Kimi Translation Plugin"
APP_VERSION = "0.1.0"
ENGINE_NAME = "Kimi翻译"

# Paths
BASE_PATH = Path(__file__).resolve().parent
# Global settings file placed next to the main sources.
DEFAULT_CONFIG_PATH = BASE_PATH / "config.yaml"

# Remote endpoint
API_BASE_URL = "https://api.moonshot.cn/v1/chat/completions"

# Transport limits (not user-configurable)
CONNECT_TIMEOUT_SEC = 30.0
READ_TIMEOUT_SEC = 60.0
MAX_RETRY_COUNT = 3
# Delay before retry n is n * RETRY_DELAY_SEC.
RETRY_DELAY_SEC = 1.0

# Settings defaults
DEFAULT_MODEL = "kimi-k2-turbo-preview"
DEFAULT_MAX_TOKENS = 2048
DEFAULT_TEMPERATURE = 0.3
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0

# Language defaults
DEFAULT_SRC_LANG = "auto"
DEFAULT_DST_LANG = "zh"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[int] = None, format_str: Optional[str] = None) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=level if level is not None else logging.INFO,
        format=format_str or LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )


def get_config_path() -> Path:
    """Return the default settings file location."""
    return DEFAULT_CONFIG_PATH
