from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple, Optional

if TYPE_CHECKING:
    from .drivers import Driver

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UrlParts:
    # absent means "not in the url / not parseable / leave to the fallback"
    server_address: Optional[str] = None
    port: Optional[int] = None
    database_name: Optional[str] = None


class DatabaseNameExtraction(NamedTuple):
    # index where the database segment (incl. separator) starts; None = no boundary
    index: Optional[int]
    database_name: Optional[str]


def _to_port(v: str) -> int | None:
    # digits only; signs, blanks and the like make the port unreadable
    if not v.isdecimal():
        return None
    try:
        return int(v)
    except ValueError:
        # longer than the int conversion digit limit
        return None


def _strip_prefix(driver: "Driver", url: object) -> str | None:
    if not isinstance(url, str) or not url.startswith(driver.jdbc_name):
        return None
    return url[len(driver.jdbc_name):]


# ---- standard hooks ---------------------------------------------------------

def extract_database_name_by_separator(url: str, driver: "Driver") -> DatabaseNameExtraction:
    """
    Slash style: `host:port<sep>database?params`.
    The database name follows the last separator before the first '?'.
    """
    end = url.find("?")
    if end == -1:
        end = len(url)
    index = url.rfind(driver.separator, 0, end)
    if index == -1:
        # no database segment; the host still ends before the parameters
        return DatabaseNameExtraction(end, None)
    return DatabaseNameExtraction(index, url[index + len(driver.separator):end])


def extract_database_name_for_mssql(url: str, driver: "Driver") -> DatabaseNameExtraction:
    """
    Attribute style: `host:port;databaseName=database;key=value;...`.
    The host segment ends at the first ';', the name is read from its attribute.
    """
    index = url.find(";")
    if index == -1:
        return DatabaseNameExtraction(None, None)
    attribute = driver.separator.lstrip(";")
    for parameter in url[index + 1:].split(";"):
        if parameter.startswith(attribute):
            return DatabaseNameExtraction(index, parameter[len(attribute):])
    return DatabaseNameExtraction(index, None)


def build_database_name_by_separator(driver: "Driver", database_name: str) -> str:
    return f"{driver.separator}{database_name}"


def extract_parameters(old_url: str) -> str:
    # everything from the first '?', verbatim
    index = old_url.find("?")
    return old_url[index:] if index != -1 else ""


def extract_parameters_for_mssql(old_url: str) -> str:
    index = old_url.find(";")
    if index == -1:
        return ""
    parameters = [p for p in old_url[index + 1:].split(";") if not p.startswith("databaseName=")]
    joined = ";".join(parameters)
    return f";{joined}" if joined else ""


def no_default_parameters() -> str:
    return ""


# ---- extractor / builder ------------------------------------------------------

def extract_url_parts(driver: "Driver", url: str) -> UrlParts:
    """
    Decompose `url` into the parts that can be identified with confidence.

    Never raises: anything that cannot be read is left absent. A host segment
    with more than one ':' is ambiguous and yields only the driver's default port.
    """
    rest = _strip_prefix(driver, url)
    if rest is None:
        logger.debug(f"{driver.name}: url does not start with {driver.jdbc_name!r}")
        return UrlParts()

    extraction = driver.extract_database_name(rest, driver)
    host = rest if extraction.index is None else rest[:extraction.index]

    address, *remainders = host.split(":")
    if len(remainders) > 1:
        logger.debug(f"{driver.name}: ambiguous host segment {host!r}, using default port only")
        return UrlParts(port=driver.port)

    return UrlParts(
        server_address=address or None,
        port=_to_port(remainders[0]) if remainders else None,
        database_name=extraction.database_name or None,
    )


def build_url(
    driver: "Driver",
    old_url: str | None,
    new_values: UrlParts | None,
    server_address: str,
    port: int,
    database_name: str,
) -> str:
    """
    Build a url for `driver`. Each part is taken from `new_values`, then from
    `old_url`, then from the fallback arguments. Trailing parameters of
    `old_url` are carried over verbatim; without an old url the driver's
    default parameters are appended.
    """
    new_values = new_values or UrlParts()
    old = extract_url_parts(driver, old_url) if old_url else UrlParts()

    def _pick(field: str, fallback):
        for source, parts in (("override", new_values), ("old url", old)):
            value = getattr(parts, field)
            if value is not None:
                logger.debug(f"{driver.name}: {field} from {source}")
                return value
        return fallback

    address = _pick("server_address", server_address)
    resolved_port = _pick("port", port)
    name = _pick("database_name", database_name)

    if old_url:
        parameters = driver.extract_parameters(old_url)
    else:
        parameters = driver.generate_default_parameters()

    return f"{driver.jdbc_name}{address}:{resolved_port}{driver.build_database_name(driver, name)}{parameters}"
