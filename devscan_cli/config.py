"""Configuration loading from ~/.devscan/config.yml and DEVSCAN_* variables"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from .aggregator import RESERVED_PORT
from .enumerators import BACKENDS, parse_port
from .errors import ConfigError
from .subprocess_timeouts import TIMEOUT_STANDARD


@dataclass(frozen=True)
class Settings:
    """
    Scanner settings.

    Schema (config.yml):
        backend: str              # auto|lsof|netstat|psutil (default: auto)
        reserved_ports: [int]     # Ports never reported (default: [1420])
        extra_processes: [str]    # Extra dev process name substrings
        scan_timeout: int         # Seconds before an async scan gives up (default: 30)
    """

    backend: str = "auto"
    reserved_ports: tuple[int, ...] = (RESERVED_PORT,)
    extra_processes: tuple[str, ...] = ()
    scan_timeout: int = TIMEOUT_STANDARD
    source: Path | None = field(default=None, compare=False)


def get_devscan_dir() -> Path:
    """Get the ~/.devscan directory path"""
    return Path.home() / ".devscan"


def get_config_file() -> Path:
    """Get the config file path, honouring DEVSCAN_CONFIG"""
    env_path = os.getenv("DEVSCAN_CONFIG")
    if env_path:
        return Path(env_path)
    return get_devscan_dir() / "config.yml"


def _split_list(value: Any) -> list:
    """Accept either a YAML list or a comma-separated string"""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _validate_backend(value: Any) -> str:
    backend = str(value).strip().lower()
    if backend not in BACKENDS:
        raise ConfigError(f"Invalid backend {value!r} (expected one of: {', '.join(BACKENDS)})")
    return backend


def _validate_ports(value: Any) -> tuple[int, ...]:
    ports = []
    for item in _split_list(value):
        port = parse_port(str(item))
        if port is None:
            raise ConfigError(f"Invalid reserved port: {item!r}")
        ports.append(port)
    return tuple(ports)


def _validate_timeout(value: Any) -> int:
    try:
        timeout = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid scan timeout: {value!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"Scan timeout must be positive, got {timeout}")
    return timeout


def _apply(settings: Settings, data: dict[str, Any]) -> Settings:
    """Return settings updated with the recognised keys from data"""
    changes: dict[str, Any] = {}
    if data.get("backend") is not None:
        changes["backend"] = _validate_backend(data["backend"])
    if data.get("reserved_ports") is not None:
        changes["reserved_ports"] = _validate_ports(data["reserved_ports"])
    if data.get("extra_processes") is not None:
        changes["extra_processes"] = tuple(str(name) for name in _split_list(data["extra_processes"]))
    if data.get("scan_timeout") is not None:
        changes["scan_timeout"] = _validate_timeout(data["scan_timeout"])
    return replace(settings, **changes)


def load_file(path: Path) -> dict[str, Any]:
    """Read a YAML settings file; a missing file yields an empty mapping"""
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to load {path}: expected a mapping at top level")
    return data


def load_env() -> dict[str, Any]:
    """Collect settings from DEVSCAN_* environment variables"""
    mapping = {
        "backend": "DEVSCAN_BACKEND",
        "reserved_ports": "DEVSCAN_RESERVED_PORTS",
        "extra_processes": "DEVSCAN_EXTRA_PROCESSES",
        "scan_timeout": "DEVSCAN_SCAN_TIMEOUT",
    }
    data = {}
    for key, env_name in mapping.items():
        value = os.getenv(env_name)
        if value is not None and value.strip() != "":
            data[key] = value
    return data


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings with precedence defaults < config file < environment.

    Raises:
        ConfigError: If any value is invalid
    """
    config_file = path or get_config_file()
    settings = Settings()

    file_data = load_file(config_file)
    if file_data:
        settings = replace(_apply(settings, file_data), source=config_file)

    return _apply(settings, load_env())
