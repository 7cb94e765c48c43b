"""Registry adapters. Importing this package registers the built-in backends."""

from cso_proxy.adapters.base import (
    Adapter,
    AdapterOptions,
    UnknownAdapterError,
    available_adapters,
    default_app_name,
    get_adapter,
    register_adapter,
)
from cso_proxy.adapters.harbor import HarborAdapter

__all__ = [
    "Adapter",
    "AdapterOptions",
    "HarborAdapter",
    "UnknownAdapterError",
    "available_adapters",
    "default_app_name",
    "get_adapter",
    "register_adapter",
]
