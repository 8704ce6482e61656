"""
Unified exception definitions

Fatal errors carry the process exit code the CLI reports them with.
"""
from typing import List

from .constants import (
    EXIT_USAGE,
    EXIT_CONFIG_FLAG_MISSING_VALUE,
    EXIT_EXPLICIT_CONFIG_NOT_FOUND,
    EXIT_CONFIG_NOT_FOUND,
    EXIT_CONFIG_UNREADABLE,
    EXIT_CONNECT_FAILED,
    EXIT_SHELL_OPEN_FAILED,
    EXIT_DISPATCH_FAILED,
    EXIT_SETTINGS_INVALID,
)


class CecSshError(Exception):
    """Base exception class"""
    exit_code = 1


class UsageError(CecSshError):
    """No command arguments were supplied"""
    exit_code = EXIT_USAGE


class MissingConfigValueError(UsageError):
    """--config given without a following path"""
    exit_code = EXIT_CONFIG_FLAG_MISSING_VALUE


class ConfigError(CecSshError):
    """Configuration error"""
    pass


class ExplicitConfigNotFoundError(ConfigError):
    """Explicitly requested configuration file does not exist"""
    exit_code = EXIT_EXPLICIT_CONFIG_NOT_FOUND

    def __init__(self, path: str):
        super().__init__(f"Configuration file does not exist: {path}")
        self.path = path


class ConfigNotFoundError(ConfigError):
    """No configuration file found in the search order"""
    exit_code = EXIT_CONFIG_NOT_FOUND

    def __init__(self, file_name: str, tried_paths: List[str]):
        super().__init__(f"Configuration file {file_name} not found")
        self.file_name = file_name
        self.tried_paths = list(tried_paths)


class ConfigParseError(ConfigError):
    """Configuration file present but unreadable or invalid"""
    exit_code = EXIT_CONFIG_UNREADABLE


class SettingsError(ConfigError):
    """CEC_SSH_* environment variable with an unusable value"""
    exit_code = EXIT_SETTINGS_INVALID


class ConnectionError(CecSshError):
    """Connection error"""
    exit_code = EXIT_CONNECT_FAILED


class AuthenticationError(ConnectionError):
    """Remote host rejected the credentials"""
    pass


class NetworkError(ConnectionError):
    """Remote host unreachable or transport negotiation failed"""
    pass


class ShellOpenError(CecSshError):
    """Interactive shell channel could not be opened"""
    exit_code = EXIT_SHELL_OPEN_FAILED


class DispatchError(CecSshError):
    """Remote command could not be written to the shell"""
    exit_code = EXIT_DISPATCH_FAILED


class ChannelError(CecSshError):
    """Shell channel I/O failure"""
    pass
