from .config import CustomDriverConfig, JdbcUrlConfigurationError, load_custom_drivers
from .runtime import configure, get_registry, reload_default, require_driver, using_registry

__all__ = [
    'CustomDriverConfig',
    'JdbcUrlConfigurationError',
    'configure',
    'get_registry',
    'load_custom_drivers',
    'reload_default',
    'require_driver',
    'using_registry',
]
