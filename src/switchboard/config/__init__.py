"""Server configuration: settings models and YAML loading."""

from switchboard.config.errors import ConfigError
from switchboard.config.loader import CONFIG_ENV_VAR, ConfigLoader, load_settings
from switchboard.config.models import PROTOCOL_VERSION, ServerSettings, TelemetrySettings

__all__ = [
    "CONFIG_ENV_VAR",
    "PROTOCOL_VERSION",
    "ConfigError",
    "ConfigLoader",
    "ServerSettings",
    "TelemetrySettings",
    "load_settings",
]
