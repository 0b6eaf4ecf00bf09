"""Pinpoint configuration.

Settings are layered: built-in defaults, then an optional YAML file, then
``PINPOINT_*`` environment variables. The YAML file is the first of:

1. the path passed to ``load_settings``;
2. ``$PINPOINT_CONFIG``;
3. ``~/.pinpoint/config.yaml``, if it exists.

Example file::

    package_name: puppet
    install_mode: offline
    package_basedir: /opt/puppetlabs/pdk
    default_runtime: 2.5.9
    release_trains:
      - {train: "2018.1", min_version: 5.5.1, runtime: 2.4.4}
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pinpoint.core.release_train import ReleaseTrainEntry
from pinpoint.core.resolver import InstallMode
from pinpoint.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.pinpoint/config.yaml")

# Present in the base directory of a package (offline) install.
PACKAGE_MARKER = "PDK_VERSION"

_ENV_KEYS: dict[str, str] = {
    "PINPOINT_PACKAGE_NAME": "package_name",
    "PINPOINT_INSTALL_MODE": "install_mode",
    "PINPOINT_PACKAGE_BASEDIR": "package_basedir",
    "PINPOINT_INDEX_URL": "index_url",
    "PINPOINT_DEFAULT_RUNTIME": "default_runtime",
}


@dataclass
class Settings:
    """Resolved configuration for one process.

    Attributes:
        package_name: Package whose releases are resolved.
        install_mode: Forced install mode, or None to autodetect.
        package_basedir: Root of a package install.
        index_url: Base URL of the remote release index.
        default_runtime: Runtime id reported in remote mode.
        request_timeout: Remote index timeout in seconds.
        release_trains: Extra or overriding release-train entries.
    """

    package_name: str = "puppet"
    install_mode: InstallMode | None = None
    package_basedir: Path = Path("/opt/puppetlabs/pdk")
    index_url: str = "https://rubygems.org"
    default_runtime: str = "2.5.9"
    request_timeout: float = 30.0
    release_trains: list[ReleaseTrainEntry] = field(default_factory=list)

    def is_offline_install(self) -> bool:
        """True for package installs that resolve against bundled runtimes."""
        if self.install_mode is not None:
            return self.install_mode is InstallMode.OFFLINE
        return (self.package_basedir / PACKAGE_MARKER).is_file()

    def resolved_install_mode(self) -> InstallMode:
        return InstallMode.OFFLINE if self.is_offline_install() else InstallMode.REMOTE


def _parse_install_mode(value: Any) -> InstallMode | None:
    if value is None or value == "":
        return None
    if isinstance(value, InstallMode):
        return value
    try:
        return InstallMode(str(value).lower())
    except ValueError:
        choices = ", ".join(m.value for m in InstallMode)
        raise ConfigError(f"Unknown install mode {value!r} (expected one of: {choices})") from None


def _apply(settings: Settings, values: Mapping[str, Any], source: str) -> None:
    for key, value in values.items():
        if key == "install_mode":
            settings.install_mode = _parse_install_mode(value)
        elif key == "package_basedir":
            settings.package_basedir = Path(str(value)).expanduser()
        elif key == "request_timeout":
            try:
                settings.request_timeout = float(value)
            except (TypeError, ValueError):
                raise ConfigError(f"{source}: request_timeout must be a number, got {value!r}") from None
        elif key == "release_trains":
            if not isinstance(value, list):
                raise ConfigError(f"{source}: release_trains must be a list")
            entries = []
            for item in value:
                if not isinstance(item, Mapping):
                    raise ConfigError(f"{source}: release train entries must be mappings, got {item!r}")
                entries.append(ReleaseTrainEntry.from_mapping(item))
            settings.release_trains = entries
        elif key in ("package_name", "index_url", "default_runtime"):
            setattr(settings, key, str(value))
        else:
            logger.warning("%s: ignoring unknown setting %r", source, key)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build ``Settings`` from defaults, a YAML file and the environment.

    Args:
        path: Explicit config file; must exist when given.
        environ: Environment mapping (defaults to ``os.environ``).

    Raises:
        ConfigError: If the file is unreadable or a value is invalid.
    """
    env = os.environ if environ is None else environ
    settings = Settings()

    config_path: Path | None = None
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
    elif env.get("PINPOINT_CONFIG"):
        config_path = Path(env["PINPOINT_CONFIG"]).expanduser()
    else:
        candidate = DEFAULT_CONFIG_PATH.expanduser()
        if candidate.is_file():
            config_path = candidate

    if config_path is not None:
        logger.debug("Loading settings from %s", config_path)
        _apply(settings, _read_yaml(config_path), str(config_path))

    overrides = {attr: env[key] for key, attr in _ENV_KEYS.items() if env.get(key)}
    _apply(settings, overrides, "environment")
    return settings
