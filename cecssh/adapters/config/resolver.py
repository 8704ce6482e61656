"""
Connection configuration discovery and parsing
"""
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ...core.constants import CONFIG_FILE_NAME, DEFAULT_SSH_PORT, SEARCH_PATH_ENV
from ...core.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ExplicitConfigNotFoundError,
)
from ...core.logging import get_logger
from ...domain.session.models import ConnectionConfig

logger = get_logger(__name__)

_REQUIRED_STRING_FIELDS = ("host", "username", "password")


def _is_file(path: Path) -> bool:
    """is_file() that treats paths the OS refuses to probe as absent"""
    try:
        return path.is_file()
    except (OSError, ValueError) as e:
        logger.debug(f"Cannot probe {path}: {e!r}")
        return False


class ConfigResolver:
    """
    Locate and load cec-ssh_config.json.

    Search order when no explicit path is given:
    1. current working directory
    2. every entry of PATH, in order
    """

    def __init__(
        self,
        file_name: str = CONFIG_FILE_NAME,
        cwd: Optional[Path] = None,
        search_path: Optional[str] = None,
    ):
        """
        Args:
            file_name: File name probed in each directory
            cwd: Working directory (default: process cwd)
            search_path: os.pathsep-separated directories (default: $PATH)
        """
        self.file_name = file_name
        self._cwd = cwd
        self._search_path = search_path

    def resolve(self, explicit_path: Optional[str] = None) -> ConnectionConfig:
        """
        Find and load the connection configuration.

        Raises:
            ExplicitConfigNotFoundError: explicit_path does not exist
            ConfigNotFoundError: nothing found in the search order
            ConfigParseError: file unreadable or invalid
        """
        if explicit_path:
            path = Path(explicit_path)
            if not _is_file(path):
                raise ExplicitConfigNotFoundError(explicit_path)
        else:
            path, tried = self.search()
            if path is None:
                raise ConfigNotFoundError(self.file_name, tried)

        logger.debug(f"Using configuration file {path}")
        return self.load(path)

    def search(self) -> Tuple[Optional[Path], List[str]]:
        """
        Probe the search order.

        Returns:
            (first existing path or None, every path tried in order)
        """
        tried: List[str] = []

        cwd = self._cwd if self._cwd is not None else Path.cwd()
        candidate = cwd / self.file_name
        tried.append(str(candidate))
        if _is_file(candidate):
            return candidate, tried

        for directory in self._search_dirs():
            candidate = Path(directory) / self.file_name
            tried.append(str(candidate))
            if _is_file(candidate):
                return candidate, tried

        return None, tried

    def _search_dirs(self) -> List[str]:
        raw = self._search_path
        if raw is None:
            raw = os.environ.get(SEARCH_PATH_ENV, "")
        return [entry for entry in raw.split(os.pathsep) if entry]

    def load(self, path: Path) -> ConnectionConfig:
        """
        Parse a configuration file; field names are case-insensitive.

        Raises:
            ConfigParseError: unreadable file, invalid JSON, missing or
                wrongly typed field
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Failed to read {path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"Failed to parse {path}: {e}") from e

        return parse_connection_config(data, source=str(path))


def parse_connection_config(data: Any, source: str = "<config>") -> ConnectionConfig:
    """
    Build ConnectionConfig from a decoded JSON document.

    Args:
        data: Decoded JSON value
        source: Name used in error messages

    Returns:
        ConnectionConfig
    """
    if not isinstance(data, dict):
        raise ConfigParseError(f"{source}: expected a JSON object, got {type(data).__name__}")

    fields: Dict[str, Any] = {str(key).lower(): value for key, value in data.items()}

    values: Dict[str, Any] = {}
    for name in _REQUIRED_STRING_FIELDS:
        value = fields.get(name)
        if value is None:
            raise ConfigParseError(f"{source}: missing required field '{name}'")
        if not isinstance(value, str):
            raise ConfigParseError(f"{source}: field '{name}' must be a string")
        values[name] = value

    port = fields.get("port", DEFAULT_SSH_PORT)
    if port is None:
        port = DEFAULT_SSH_PORT
    # bool is an int subclass
    if isinstance(port, bool) or not isinstance(port, int):
        raise ConfigParseError(f"{source}: field 'port' must be an integer")
    if not 0 < port < 65536:
        raise ConfigParseError(f"{source}: port {port} out of range")

    return ConnectionConfig(port=port, **values)
