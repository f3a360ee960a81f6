from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping
from pathlib import Path
import json, logging, os, re

import yaml

from jdbcurl.drivers import Driver, create_custom_driver
from jdbcurl.file_loader import LOADERS

logger = logging.getLogger(__name__)


class JdbcUrlConfigurationError(ValueError): ...

_ENV_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

# keys of a custom driver definition file
_REQUIRED = ("driverClass", "defaultPort", "jdbcName", "separator")

def _expand_env_str(v: str) -> str:
    # Expand ${VAR} from os.environ; missing vars become ""
    return _ENV_RE.sub(lambda m: os.environ.get(m.group(1), ""), v)

def _expand_env(obj: Any) -> Any:
    if isinstance(obj, str): return _expand_env_str(obj)
    if isinstance(obj, dict): return {k: _expand_env(v) for k, v in obj.items()}
    if isinstance(obj, list): return [_expand_env(x) for x in obj]
    return obj

def _read_definition(path: Path) -> Any:
    loader = LOADERS[path.suffix.lower()]
    try:
        return loader(path)
    except (OSError, UnicodeDecodeError) as e:
        raise JdbcUrlConfigurationError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise JdbcUrlConfigurationError(f"Invalid JSON in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise JdbcUrlConfigurationError(f"Invalid YAML in {path}: {e}") from e

def _to_int(name: str, v: Any) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        raise JdbcUrlConfigurationError(f"Invalid integer for {name}: {v!r}")

@dataclass(frozen=True, slots=True)
class CustomDriverConfig:
    name: str
    driver_class: str
    port: int
    jdbc_name: str
    separator: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_name: str | None = None) -> "CustomDriverConfig":
        """
        Shape of a definition (JSON or YAML):
          {"name": "H2", "driverClass": "org.h2.Driver", "defaultPort": 9092,
           "jdbcName": "jdbc:h2:tcp://", "separator": "/"}
        'name' falls back to `default_name` (the file stem when loading a directory).
        """
        if not isinstance(data, Mapping):
            raise JdbcUrlConfigurationError(f"Driver definition must be a mapping, got {type(data).__name__}")
        d = _expand_env(dict(data))  # expand ${ENV} inside strings

        missing = [k for k in _REQUIRED if d.get(k) in (None, "")]
        if missing:
            raise JdbcUrlConfigurationError(f"Missing fields for custom driver: {missing}")

        name = d.get("name") or default_name
        if not name:
            raise JdbcUrlConfigurationError("Custom driver requires a 'name'")

        return cls(
            name=str(name),
            driver_class=str(d["driverClass"]),
            port=_to_int("defaultPort", d["defaultPort"]),
            jdbc_name=str(d["jdbcName"]),
            separator=str(d["separator"]),
        )

    def to_driver(self) -> Driver:
        return create_custom_driver(self.name, self.driver_class, self.jdbc_name, self.port, self.separator)


def load_custom_drivers(directory: str | os.PathLike[str], *, strict: bool = False) -> list[Driver]:
    """
    Read every *.json / *.yaml / *.yml file in `directory` as one custom driver.
    Broken definitions are skipped with a warning, or raise when `strict`.
    Files are read in name order, so a later file wins on a name clash.
    """
    root = Path(directory).expanduser()
    if not root.is_dir():
        raise JdbcUrlConfigurationError(f"Custom driver directory not found: {root}")

    drivers: list[Driver] = []
    for path in sorted(root.iterdir()):
        if not path.is_file() or path.suffix.lower() not in LOADERS:
            continue
        try:
            cfg = CustomDriverConfig.from_dict(_read_definition(path), default_name=path.stem)
        except JdbcUrlConfigurationError as e:
            if strict:
                raise
            logger.warning(f"Skipping custom driver definition {path.name}: {e}")
            continue
        drivers.append(cfg.to_driver())

    logger.info(f"Loaded {len(drivers)} custom driver(s) from {root}")
    return drivers
