"""
Unit tests for the runtime driver registry

Tests cover:
1. Default registry equals the built-in drivers
2. Custom drivers from JDBCURL_CUSTOM_DRIVERS_PATH
3. Context overrides (configure / using_registry)
4. require_driver for unknown names
"""

import json
import logging

import pytest

from jdbcurl.config.config import JdbcUrlConfigurationError
from jdbcurl.config.runtime import configure, get_registry, reload_default, require_driver, using_registry
from jdbcurl.drivers import ALL_DRIVERS, DriverRegistry, create_custom_driver

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s',
    handlers=[logging.StreamHandler()]
)

logger = logging.getLogger(__name__)


@pytest.fixture(autouse=True)
def clean_runtime(monkeypatch):
    for key in ("JDBCURL_CUSTOM_DRIVERS_PATH", "JDBCURL_LOAD_PLUGINS", "JDBCURL_STRICT"):
        monkeypatch.delenv(key, raising=False)
    reload_default()
    yield
    configure(None)
    reload_default()


class TestRuntimeRegistry:
    """get_registry and friends"""

    def test_default_is_builtin(self):
        assert get_registry() is ALL_DRIVERS

    def test_custom_drivers_from_env(self, tmp_path, monkeypatch):
        (tmp_path / "h2.json").write_text(json.dumps({
            "name": "H2",
            "driverClass": "org.h2.Driver",
            "defaultPort": 9092,
            "jdbcName": "jdbc:h2:tcp://",
            "separator": "/",
        }), encoding="utf-8")
        monkeypatch.setenv("JDBCURL_CUSTOM_DRIVERS_PATH", str(tmp_path))

        registry = get_registry()
        assert registry.keys() == ALL_DRIVERS.keys() | {"H2"}
        assert "H2" not in ALL_DRIVERS
        assert get_registry() is registry

    def test_strict_env(self, tmp_path, monkeypatch):
        (tmp_path / "bad.json").write_text("{", encoding="utf-8")
        monkeypatch.setenv("JDBCURL_CUSTOM_DRIVERS_PATH", str(tmp_path))
        assert get_registry().keys() == ALL_DRIVERS.keys()

        monkeypatch.setenv("JDBCURL_STRICT", "true")
        with pytest.raises(JdbcUrlConfigurationError):
            get_registry()

    def test_using_registry(self):
        h2 = create_custom_driver("H2", "org.h2.Driver", "jdbc:h2:tcp://", 9092, "/")
        registry = DriverRegistry([h2])
        with using_registry(registry) as active:
            assert active is registry
            assert get_registry() is registry
            assert require_driver("H2") is h2
        assert get_registry() is ALL_DRIVERS

    def test_configure_empty_registry(self):
        configure(DriverRegistry())
        assert len(get_registry()) == 0
        configure(None)
        assert get_registry() is ALL_DRIVERS

    def test_require_driver(self):
        assert require_driver("Oracle").jdbc_name == "jdbc:oracle:thin:@"
        with pytest.raises(JdbcUrlConfigurationError, match="oracle"):
            require_driver("oracle")
