# jdbcurl/__init__.py
import logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .url_parts import UrlParts, build_url, extract_url_parts
from .drivers import ALL_DRIVERS, Driver, DriverRegistry, get_driver, create_custom_driver

__all__ = [
    'ALL_DRIVERS',
    'Driver',
    'DriverRegistry',
    'UrlParts',
    'build_url',
    'create_custom_driver',
    'extract_url_parts',
    'get_driver',
]
