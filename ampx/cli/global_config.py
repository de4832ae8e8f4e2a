"""
User level settings of the CLI, stored as JSON in the application directory
"""
import json
import logging
import os
import threading
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Set

import click

LOG = logging.getLogger(__name__)

APP_NAME = "ampx"
METADATA_FILENAME = "metadata.json"

# Any non empty value of this variable turns telemetry off regardless of the stored preference
TELEMETRY_DISABLE_ENV_VAR = "AMPLIFY_DISABLE_TELEMETRY"


@dataclass(frozen=True)
class ConfigEntry:
    """
    A setting known to the CLI. ``config_key`` names it in the metadata file, ``env_var_key`` in the
    environment. Entries that are not ``persistent`` live for the current process only.
    """

    config_key: Optional[str]
    env_var_key: Optional[str]
    persistent: bool = True


class DefaultEntry:
    INSTALLATION_ID = ConfigEntry("installationId", None)
    TELEMETRY = ConfigEntry("telemetryEnabled", None)


class Singleton(type):
    def __init__(cls, *args, **kwargs):
        super().__init__(*args, **kwargs)
        cls.__instance = None

    def __call__(cls, *args, **kwargs):
        if cls.__instance is None:
            cls.__instance = super().__call__(*args, **kwargs)
        return cls.__instance


class GlobalConfig(metaclass=Singleton):
    """
    Process wide access to the metadata file. The directory defaults to click's application directory
    for "ampx" and can be redirected with the __AMPX_APP_DIR environment variable.

    A file that cannot be read or parsed behaves like an empty one, so a broken file never stops a command.
    """

    _DIR_INJECTION_ENV_VAR = "__AMPX_APP_DIR"

    def __init__(self):
        self._lock = threading.RLock()
        self._dir: Optional[Path] = None
        self._values: Optional[Dict[str, Any]] = None
        self._transient_keys: Set[str] = set()

    @property
    def config_dir(self) -> Path:
        if self._dir is None:
            injected = os.environ.get(self._DIR_INJECTION_ENV_VAR)
            self._dir = Path(injected) if injected else Path(click.get_app_dir(APP_NAME, force_posix=True))
        return self._dir

    @config_dir.setter
    def config_dir(self, dir_path: Path) -> None:
        if not dir_path.is_dir():
            raise ValueError(f"{dir_path} is not a directory")
        with self._lock:
            self._dir = dir_path
            self._values = None

    @property
    def config_path(self) -> Path:
        return self.config_dir / METADATA_FILENAME

    def get_value(self, config_entry: ConfigEntry, default: Any = None, value_type: Any = object, reload_config=False):
        """
        Value of an entry, looked up in the environment first and in the metadata file second.
        ``default`` is returned when the value is missing or is not an instance of ``value_type``.
        """
        with self._lock:
            value = os.environ.get(config_entry.env_var_key) if config_entry.env_var_key else None
            if value is None and config_entry.config_key:
                value = self._file_values(reload_config).get(config_entry.config_key)
            return value if isinstance(value, value_type) and value is not None else default

    def set_value(self, config_entry: ConfigEntry, value: Any, flush: bool = True) -> None:
        with self._lock:
            if config_entry.env_var_key:
                os.environ[config_entry.env_var_key] = str(value)
            if not config_entry.config_key:
                return

            self._file_values()[config_entry.config_key] = value
            if config_entry.persistent:
                self._transient_keys.discard(config_entry.config_key)
            else:
                self._transient_keys.add(config_entry.config_key)
            if flush:
                self._flush()

    def _file_values(self, reload: bool = False) -> Dict[str, Any]:
        if self._values is None or reload:
            self._values = self._read_file()
        return self._values

    def _read_file(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            return {}
        try:
            values = json.loads(self.config_path.read_text())
        except (OSError, ValueError) as ex:
            LOG.warning("Could not read %s, ignoring its content", self.config_path, exc_info=ex)
            return {}
        if not isinstance(values, dict):
            LOG.warning("Ignoring %s, it does not hold a JSON object", self.config_path)
            return {}
        return values

    def _flush(self) -> None:
        stored = {key: value for key, value in self._file_values().items() if key not in self._transient_keys}
        if not stored:
            return
        try:
            self.config_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
            self.config_path.write_text(json.dumps(stored, indent=4))
        except OSError as ex:
            LOG.warning("Could not write %s", self.config_path, exc_info=ex)

    @property
    def installation_id(self) -> str:
        """
        Random id of this installation, generated and stored the first time it is needed
        """
        value = self.get_value(DefaultEntry.INSTALLATION_ID, value_type=str, reload_config=True)
        if not value:
            value = str(uuid.uuid4())
            self.set_value(DefaultEntry.INSTALLATION_ID, value)
        return value

    @property
    def telemetry_enabled(self) -> Optional[bool]:
        """
        Stored telemetry choice, None until the user makes one. AMPLIFY_DISABLE_TELEMETRY forces False.
        """
        if os.environ.get(TELEMETRY_DISABLE_ENV_VAR):
            return False
        return self.get_value(DefaultEntry.TELEMETRY, value_type=bool)

    @telemetry_enabled.setter
    def telemetry_enabled(self, value: bool) -> None:
        self.set_value(DefaultEntry.TELEMETRY, value)
