"""Per-service remote server settings.

Every service group (contents, kernels, terminals, ...) may point at its own
remote server. Each value is looked up through its own ordered chain of keys:

    base URL:  remote<Service>BaseUrl -> remoteBaseUrl -> hosting origin
    token:     remote<Service>Token   -> remoteToken   -> ""

Whether the token is appended to WebSocket URLs is decided once for all
services by ``appendToken``; when it is not configured, the token is appended
only for base URLs on a different origin than the hosting application, since
a cross-origin WebSocket handshake from a browser cannot carry headers.
"""

import enum
import logging
import typing as t
from dataclasses import dataclass, field
from types import MappingProxyType

from jupyter_server.utils import url_path_join

from .utils import RemoteServerConfigError, is_absolute_url, same_origin, url_origin, websocket_url

logger = logging.getLogger(__name__)


class ServiceType(str, enum.Enum):
    """Logical service groups that can be configured independently."""

    DEFAULT = "default"
    CONTENTS = "contents"
    KERNELS = "kernels"
    SETTINGS = "settings"
    WORKSPACES = "workspaces"
    USERS = "users"
    EVENTS = "events"
    TERMINALS = "terminals"
    NBCONVERT = "nbconvert"
    CONFIG_SECTION = "configSection"

    @property
    def key_names(self) -> t.Tuple[str, ...]:
        """Service names used in ``remote<Service>...`` keys, preferred first."""
        if self is ServiceType.DEFAULT:
            return ()
        names = [self.value[0].upper() + self.value[1:]]
        if self is ServiceType.NBCONVERT:
            names.append("NbConvert")
        return tuple(names)

    def config_keys(self, suffix: str) -> t.Tuple[str, ...]:
        """Lookup chain for ``suffix`` (``BaseUrl`` or ``Token``), most specific first."""
        return tuple(f"remote{name}{suffix}" for name in self.key_names) + (f"remote{suffix}",)


@dataclass(frozen=True)
class ResolvedSettings:
    """Endpoint and credential resolved for one service."""

    service_type: ServiceType
    base_url: str
    token: str = field(default="", repr=False)
    append_token: bool = False
    app_url: str = ""

    @property
    def ws_url(self) -> str:
        """The base URL with a ws(s) scheme, carrying the token when appended."""
        return websocket_url(self.base_url, self.token, self.append_token)

    @property
    def request_headers(self) -> t.Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"token {self.token}"}

    def make_url(self, *parts: str) -> str:
        return url_path_join(self.base_url, *parts)

    def make_ws_url(self, *parts: str) -> str:
        """WebSocket URL for an endpoint below the base URL, e.g. a kernel's channels."""
        return websocket_url(url_path_join(self.base_url, *parts), self.token, self.append_token)


def _first_configured(
    page_config: t.Mapping[str, t.Any], keys: t.Iterable[str]
) -> t.Tuple[t.Optional[str], t.Optional[str]]:
    for key in keys:
        value = page_config.get(key)
        if isinstance(value, str) and value.strip():
            return key, value.strip()
    return None, None


class SettingsResolver:
    """Resolve ``ResolvedSettings`` for each ``ServiceType``.

    Parameters
    ----------
    page_config : Mapping[str, Any]
        The global configuration snapshot. It is copied, later changes to the
        passed mapping are not observed.
    app_origin : Optional[str]
        Origin of the hosting application. Defaults to the origin of an
        absolute ``appUrl`` in ``page_config``.

    Raises
    ------
    RemoteServerConfigError
        If no hosting origin is given and ``appUrl`` is not an absolute URL.
    """

    def __init__(self, page_config: t.Mapping[str, t.Any], app_origin: t.Optional[str] = None) -> None:
        self._page_config = MappingProxyType(dict(page_config))
        self.app_url = self._page_config.get("appUrl") or ""

        if not app_origin:
            if not (isinstance(self.app_url, str) and is_absolute_url(self.app_url)):
                raise RemoteServerConfigError(
                    "The hosting application origin must be given when appUrl is not absolute"
                )
            app_origin = self.app_url
        self.app_origin = url_origin(app_origin)

        self._cache: t.Dict[ServiceType, ResolvedSettings] = {}

    def _resolve_base_url(self, service_type: ServiceType) -> str:
        key, value = _first_configured(self._page_config, service_type.config_keys("BaseUrl"))
        if key is None:
            logger.debug(f"No base URL configured for {service_type.value}, using {self.app_origin}")
            return self.app_origin

        # a server-rooted path lives on the hosting application
        if value.startswith("/") and not value.startswith("//"):
            value = url_path_join(self.app_origin, value)
        else:
            try:
                url_origin(value)
                websocket_url(value)
            except RemoteServerConfigError as e:
                raise RemoteServerConfigError(f"{key}: {e}") from e

        logger.debug(f"Base URL for {service_type.value} from {key}: {value}")
        return value

    def _resolve_token(self, service_type: ServiceType) -> str:
        key, value = _first_configured(self._page_config, service_type.config_keys("Token"))
        if key is None:
            return ""
        logger.debug(f"Token for {service_type.value} from {key}")
        return value

    def _explicit_append_token(self) -> t.Optional[bool]:
        value = self._page_config.get("appendToken")
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        logger.warning(f"Ignoring appendToken={value!r}, expected a boolean")
        return None

    def resolve(self, service_type: t.Union[ServiceType, str]) -> ResolvedSettings:
        """Resolve the settings for ``service_type``.

        Missing keys fall through to the next source and end at the hosting
        origin with no token, so this only raises for a malformed base URL.
        """
        service_type = ServiceType(service_type)
        if service_type in self._cache:
            return self._cache[service_type]

        base_url = self._resolve_base_url(service_type)
        token = self._resolve_token(service_type)

        append_token = self._explicit_append_token()
        if append_token is None:
            append_token = not same_origin(base_url, self.app_origin)
            logger.debug(
                f"appendToken for {service_type.value} auto-detected as {append_token} "
                f"({base_url} vs {self.app_origin})"
            )

        settings = ResolvedSettings(
            service_type=service_type,
            base_url=base_url,
            token=token,
            append_token=append_token,
            app_url=self.app_url,
        )
        self._cache[service_type] = settings
        return settings

    def resolve_all(self) -> t.Dict[ServiceType, ResolvedSettings]:
        return {service_type: self.resolve(service_type) for service_type in ServiceType}
