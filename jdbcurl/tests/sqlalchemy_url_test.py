"""
Unit tests for translating jdbc urls into SQLAlchemy URLs
"""

import logging

import pytest

pytest.importorskip("sqlalchemy")

from jdbcurl.drivers import ALL_DRIVERS, create_custom_driver, get_driver
from jdbcurl.sqlalchemy_url import load_driver_map, to_sqlalchemy_url

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s',
    handlers=[logging.StreamHandler()]
)

logger = logging.getLogger(__name__)


class TestSqlAlchemyUrl:
    """to_sqlalchemy_url"""

    def test_every_driver_is_mapped(self):
        assert set(load_driver_map()) == ALL_DRIVERS.keys()

    def test_postgresql(self):
        url = to_sqlalchemy_url(
            get_driver("PostgreSQL"),
            "jdbc:postgresql://127.0.0.1:1234/my_database?ssl=true",
            "username",
            "password",
        )
        assert url.drivername == "postgresql+psycopg2"
        assert url.host == "127.0.0.1"
        assert url.port == 1234
        assert url.database == "my_database"
        assert url.username == "username"
        assert url.password == "password"

    def test_mssql(self):
        url = to_sqlalchemy_url(get_driver("MS SQL"), "jdbc:sqlserver://db:1433;databaseName=sales;encrypt=true")
        assert url.drivername == "mssql+pyodbc"
        assert (url.host, url.port, url.database) == ("db", 1433, "sales")

    def test_override_driver(self):
        url = to_sqlalchemy_url(get_driver("MySQL"), "jdbc:mysql://db:3306/app", override_driver="mysqldb")
        assert url.drivername == "mysql+mysqldb"

    def test_missing_parts_stay_unset(self):
        url = to_sqlalchemy_url(get_driver("MariaDB"), "not a jdbc url")
        assert url.host is None
        assert url.port is None
        assert url.database is None

    def test_unmapped_driver(self):
        h2 = create_custom_driver("H2", "org.h2.Driver", "jdbc:h2:tcp://", 9092, "/")
        with pytest.raises(ValueError, match="H2"):
            to_sqlalchemy_url(h2, "jdbc:h2:tcp://localhost:9092/test")
