"""
Runtime settings loader: environment > defaults

Command-line options are not available for these: every argument other than
--config belongs to the remote cec-ctl.
"""
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ...core.constants import DEFAULT_LOG_LEVEL, ENV_PREFIX
from ...core.exceptions import SettingsError


@dataclass(frozen=True)
class RuntimeSettings:
    """Process-wide settings"""
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None
    connect_timeout: Optional[float] = None


class SettingsLoader:
    """Settings loader reading CEC_SSH_* environment variables"""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._env_prefix = ENV_PREFIX
        self._environ = environ

    def load_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        environ = self._environ if self._environ is not None else os.environ
        config = {}

        # Never coerced: a numeric level or file name stays a string
        raw_keys = {"log_level", "log_file"}
        env_mappings = {
            f"{self._env_prefix}LOG_LEVEL": "log_level",
            f"{self._env_prefix}LOG_FILE": "log_file",
            f"{self._env_prefix}CONNECT_TIMEOUT": "connect_timeout",
        }

        for env_key, config_key in env_mappings.items():
            value = environ.get(env_key)
            if value:
                config[config_key] = value if config_key in raw_keys else self._convert_value(value)

        return config

    def _convert_value(self, value: str) -> Any:
        """Convert string value to appropriate type"""
        # Try integer
        try:
            return int(value)
        except ValueError:
            pass

        # Try float
        try:
            return float(value)
        except ValueError:
            pass

        # Return as string
        return value

    def load(self) -> RuntimeSettings:
        """
        Load settings, falling back to defaults.

        Raises:
            SettingsError: If a variable has an unusable value
        """
        config = self.load_env()

        connect_timeout = config.get("connect_timeout")
        if connect_timeout is not None:
            if (
                not isinstance(connect_timeout, (int, float))
                or not math.isfinite(connect_timeout)
                or connect_timeout <= 0
            ):
                raise SettingsError(
                    f"{self._env_prefix}CONNECT_TIMEOUT must be a positive number of seconds, "
                    f"got {connect_timeout!r}"
                )
            connect_timeout = float(connect_timeout)

        log_level = config.get("log_level", DEFAULT_LOG_LEVEL).upper()
        if not log_level.isdigit() and not isinstance(logging.getLevelName(log_level), int):
            raise SettingsError(
                f"{self._env_prefix}LOG_LEVEL must be a level name or number, got {log_level!r}"
            )

        log_file = config.get("log_file")

        return RuntimeSettings(
            log_level=log_level,
            log_file=Path(log_file).expanduser() if log_file is not None else None,
            connect_timeout=connect_timeout,
        )
