"""Pool configuration."""

from .loader import config_from_dict, configure_logging, load_config
from .schema import PoolConfig

__all__ = [
    "PoolConfig",
    "config_from_dict",
    "configure_logging",
    "load_config",
]
