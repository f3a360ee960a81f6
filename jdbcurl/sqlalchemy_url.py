from __future__ import annotations
import json
from dataclasses import dataclass
from functools import lru_cache
from importlib.resources import files  # Python 3.9+
from typing import TYPE_CHECKING, Dict, Optional

from .drivers import Driver

if TYPE_CHECKING:
    from sqlalchemy.engine import URL

@dataclass(frozen=True, slots=True)
class SaDriverInfo:
    sa_dialect: str                    # e.g. "postgresql", "mssql"
    sa_driver: Optional[str] = None    # e.g. "psycopg2", "pyodbc"

@lru_cache(maxsize=1)
def load_driver_map() -> Dict[str, SaDriverInfo]:
    # keyed by driver name, exactly as in the driver registry
    text = files(__package__).joinpath("driver_map.json").read_text(encoding="utf-8")
    return {
        name: SaDriverInfo(sa_dialect=v["sa_dialect"], sa_driver=v.get("sa_driver"))
        for name, v in json.loads(text).items()
    }

def to_sqlalchemy_url(
    driver: Driver,
    jdbc_url: str,
    username: str | None = None,
    password: str | None = None,
    *,
    override_driver: Optional[str] = None,
) -> "URL":
    """
    Translate a jdbc url into a SQLAlchemy URL. Only address, port and
    database name are carried over; jdbc parameters have no SQLAlchemy
    equivalent and are dropped. Parts missing from the url stay unset.
    """
    info = load_driver_map().get(driver.name)
    if not info:
        raise ValueError(f"No SQLAlchemy dialect for driver={driver.name!r}")

    from sqlalchemy.engine import URL

    sa_driver = override_driver if override_driver is not None else info.sa_driver
    parts = driver.extract_url_parts(jdbc_url)
    return URL.create(
        f"{info.sa_dialect}+{sa_driver}" if sa_driver else info.sa_dialect,
        username=username,
        password=password,
        host=parts.server_address,
        port=parts.port,
        database=parts.database_name,
    )
