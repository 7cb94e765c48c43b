"""Registry adapter interface and the registration point for backends."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar
from urllib.parse import urlsplit

from cso_proxy.schemas.capabilities import AppCapabilities
from cso_proxy.schemas.secscan import SecscanResponse

if TYPE_CHECKING:
    from cso_proxy.core.config import Settings


@dataclass(frozen=True)
class AdapterOptions:
    """Per-request options passed from the router to an adapter."""

    uri: str
    features: bool = False
    vulnerabilities: bool = False


class UnknownAdapterError(Exception):
    """Raised when the configured adapter name has not been registered."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class Adapter(ABC):
    """A registry backend able to describe its capabilities and serve security reports."""

    name: str = ""

    def __init__(self, settings: "Settings") -> None:
        self.settings = settings

    @property
    def supports_image_security(self) -> bool:
        return False

    @abstractmethod
    def capabilities(self, url: str) -> AppCapabilities:
        """Build the discovery document for the scheme and host of url."""

    @abstractmethod
    async def manifest_security(
        self, path: str, digest: str, opts: AdapterOptions
    ) -> SecscanResponse:
        """Return the security report of the manifest `digest` in repository `path`."""

    async def image_security(
        self, path: str, image_id: str, opts: AdapterOptions
    ) -> SecscanResponse:
        """Return the security report of an image id; unsupported unless overridden."""
        raise NotImplementedError(f"{self.name or type(self).__name__} does not support image security")


def default_app_name(url: str) -> str:
    """Reverse the DNS labels of the host in url (https://quay.io → io.quay)."""
    hostname = urlsplit(url).hostname or ""
    return ".".join(reversed(hostname.split(".")))


AdapterT = TypeVar("AdapterT", bound=type[Adapter])

_ADAPTERS: dict[str, type[Adapter]] = {}


def register_adapter(name: str) -> Callable[[AdapterT], AdapterT]:
    """Class decorator registering an Adapter implementation under name."""

    def decorator(cls: AdapterT) -> AdapterT:
        key = name.strip().lower()
        if key in _ADAPTERS and _ADAPTERS[key] is not cls:
            raise ValueError(f"adapter {key!r} is already registered")
        cls.name = key
        _ADAPTERS[key] = cls
        return cls

    return decorator


def available_adapters() -> list[str]:
    """Names of registered adapters, sorted."""
    return sorted(_ADAPTERS)


def get_adapter(name: str, settings: "Settings") -> Adapter:
    """Instantiate the adapter registered under name."""
    key = (name or "").strip().lower()
    cls = _ADAPTERS.get(key)
    if cls is None:
        raise UnknownAdapterError(
            f"unknown adapter {name!r}; available: {', '.join(available_adapters()) or 'none'}"
        )
    return cls(settings)
