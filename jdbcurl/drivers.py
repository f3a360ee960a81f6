# drivers.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping

from .url_parts import (
    DatabaseNameExtraction,
    UrlParts,
    build_database_name_by_separator,
    build_url,
    extract_database_name_by_separator,
    extract_database_name_for_mssql,
    extract_parameters,
    extract_parameters_for_mssql,
    extract_url_parts,
    no_default_parameters,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Driver:
    name: str
    driver_class: str                  # written to the migration tool config
    url_for_download: str              # jar location, "" for custom drivers
    jdbc_name: str                     # url prefix, e.g. "jdbc:mariadb://"
    port: int                          # default port
    separator: str                     # between host:port and the database name
    extract_database_name: Callable[[str, "Driver"], DatabaseNameExtraction] = field(repr=False)
    build_database_name: Callable[["Driver", str], str] = field(repr=False)
    extract_parameters: Callable[[str], str] = field(repr=False)
    generate_default_parameters: Callable[[], str] = field(default=no_default_parameters, repr=False)

    def file_name(self) -> str:
        """Name under which the downloaded driver jar is stored."""
        return self.url_for_download[self.url_for_download.rfind("/") + 1:]

    def extract_url_parts(self, url: str) -> UrlParts:
        return extract_url_parts(self, url)

    def build_url(
        self,
        old_url: str | None,
        new_values: UrlParts | None,
        server_address: str,
        port: int,
        database_name: str,
    ) -> str:
        return build_url(self, old_url, new_values, server_address, port, database_name)


class DriverRegistry:
    """
    Read-only mapping of driver name -> Driver.
    The mapping is frozen in __init__; extending a registry returns a new one.
    """

    __slots__ = ("_drivers",)

    _drivers: Mapping[str, Driver]

    def __init__(self, drivers: Iterable[Driver] = ()):
        object.__setattr__(self, "_drivers", MappingProxyType({d.name: d for d in drivers}))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"DriverRegistry is read-only, cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"DriverRegistry is read-only, cannot delete {name!r}")

    def get(self, name: str) -> Driver | None:
        return self._drivers.get(name)

    def keys(self) -> frozenset[str]:
        return frozenset(self._drivers)

    def values(self) -> tuple[Driver, ...]:
        return tuple(self._drivers.values())

    def items(self) -> tuple[tuple[str, Driver], ...]:
        return tuple(self._drivers.items())

    def find_by_driver_class(self, driver_class: str) -> Driver | None:
        for drv in self._drivers.values():
            if drv.driver_class == driver_class:
                return drv
        return None

    def with_drivers(self, *drivers: Driver) -> "DriverRegistry":
        # later definitions win on name clashes
        return DriverRegistry((*self._drivers.values(), *drivers))

    def __contains__(self, name: object) -> bool:
        return name in self._drivers

    def __iter__(self) -> Iterator[str]:
        return iter(self._drivers)

    def __len__(self) -> int:
        return len(self._drivers)

    def __repr__(self) -> str:
        return f"DriverRegistry({sorted(self._drivers)!r})"


# ---- built-in drivers ------------------------------------------------------

def _separator_driver(name: str, driver_class: str, url_for_download: str,
                      jdbc_name: str, port: int, separator: str) -> Driver:
    return Driver(
        name=name,
        driver_class=driver_class,
        url_for_download=url_for_download,
        jdbc_name=jdbc_name,
        port=port,
        separator=separator,
        extract_database_name=extract_database_name_by_separator,
        build_database_name=build_database_name_by_separator,
        extract_parameters=extract_parameters,
    )

# https://mvnrepository.com/artifact/org.mariadb.jdbc/mariadb-java-client
mariadb = _separator_driver(
    "MariaDB",
    "org.mariadb.jdbc.Driver",
    "https://repo1.maven.org/maven2/org/mariadb/jdbc/mariadb-java-client/2.5.3/mariadb-java-client-2.5.3.jar",
    "jdbc:mariadb://",
    3306,
    "/",
)

# https://mvnrepository.com/artifact/com.mysql/mysql-connector-j
mysql = _separator_driver(
    "MySQL",
    "com.mysql.cj.jdbc.Driver",
    "https://repo1.maven.org/maven2/com/mysql/mysql-connector-j/8.2.0/mysql-connector-j-8.2.0.jar",
    "jdbc:mysql://",
    3306,
    "/",
)

# https://mvnrepository.com/artifact/com.microsoft.sqlserver/mssql-jdbc
# jdbc:sqlserver://host:port;databaseName=name;key=value;...
mssql = Driver(
    name="MS SQL",
    driver_class="com.microsoft.sqlserver.jdbc.SQLServerDriver",
    url_for_download="https://repo1.maven.org/maven2/com/microsoft/sqlserver/mssql-jdbc/12.2.0.jre11/mssql-jdbc-12.2.0.jre11.jar",
    jdbc_name="jdbc:sqlserver://",
    port=1433,
    separator=";databaseName=",
    extract_database_name=extract_database_name_for_mssql,
    build_database_name=build_database_name_by_separator,
    extract_parameters=extract_parameters_for_mssql,
)

# https://mvnrepository.com/artifact/org.postgresql/postgresql
postgresql = _separator_driver(
    "PostgreSQL",
    "org.postgresql.Driver",
    "https://repo1.maven.org/maven2/org/postgresql/postgresql/42.6.0/postgresql-42.6.0.jar",
    "jdbc:postgresql://",
    5432,
    "/",
)

# https://mvnrepository.com/artifact/com.oracle.database.jdbc/ojdbc11
# SID form only: jdbc:oracle:thin:@host:port:sid
oracle = _separator_driver(
    "Oracle",
    "oracle.jdbc.driver.OracleDriver",
    "https://repo1.maven.org/maven2/com/oracle/database/jdbc/ojdbc11/23.2.0.0/ojdbc11-23.2.0.0.jar",
    "jdbc:oracle:thin:@",
    1521,
    ":",
)

ALL_DRIVERS = DriverRegistry((mariadb, mysql, mssql, postgresql, oracle))


def get_driver(name: str) -> Driver | None:
    return ALL_DRIVERS.get(name)


def create_custom_driver(name: str, driver_class: str, jdbc_name: str, port: int, separator: str) -> Driver:
    """
    Driver for a user defined database type. Custom drivers are never
    downloaded and use the separator based url handling.
    """
    return _separator_driver(name, driver_class, "", jdbc_name, port, separator)


# ---- optional: third-party plugin discovery via entry points ---------------
def load_entry_point_drivers(group: str = "jdbcurl.drivers", *, strict: bool = False) -> list[Driver]:
    """
    Third-party packages can expose a `Driver` via entry points:
      pyproject:
        [project.entry-points."jdbcurl.drivers"]
        h2 = mypkg.drivers:h2_driver
    The drivers are returned, not registered; combine them with
    `ALL_DRIVERS.with_drivers(*drivers)`.
    """
    from importlib.metadata import entry_points

    found: list[Driver] = []
    for ep in entry_points().select(group=group):
        try:
            drv = ep.load()
        except Exception as e:
            if strict:
                raise
            logger.warning(f"Could not load driver entry point {ep.name!r}: {e}")
            continue
        if not isinstance(drv, Driver):
            if strict:
                raise TypeError(f"Entry point {ep.name!r} did not provide a Driver: {drv!r}")
            logger.warning(f"Entry point {ep.name!r} did not provide a Driver, skipped")
            continue
        found.append(drv)
    logger.debug(f"Loaded {len(found)} driver(s) from entry point group {group!r}")
    return found
