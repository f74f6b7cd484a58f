"""Loading of the global remote-server configuration.

The configuration is a flat mapping of page-config keys (``remoteBaseUrl``,
``remoteKernelsToken``, ``appendToken``, ``appUrl``, ...) read once at
startup, either inline from traitlets config or from a JSON document:

    c.RemoteServerConfig.page_config = {
        "remoteBaseUrl": "http://a:8888",
        "remoteToken": "secret",
    }
    c.RemoteServerConfig.page_config_file = "/etc/jupyter/remote.json"
"""

import json
import typing as t
from types import MappingProxyType

from traitlets import Dict, Unicode
from traitlets.config import LoggingConfigurable

from .serversettings import SettingsResolver
from .utils import RemoteServerConfigError, is_absolute_url, url_origin

CONFIG_DATA_KEY = "jupyter-config-data"


class PageConfig(t.Mapping[str, t.Any]):
    """Read-only snapshot of the global configuration."""

    def __init__(self, data: t.Optional[t.Mapping[str, t.Any]] = None) -> None:
        self._data = MappingProxyType(dict(data or {}))

    def __getitem__(self, key: str) -> t.Any:
        return self._data[key]

    def __iter__(self) -> t.Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        shown = {
            key: "<redacted>" if key.endswith("Token") and value else value
            for key, value in self._data.items()
        }
        return f"{type(self).__name__}({shown!r})"


class RemoteServerConfig(LoggingConfigurable):
    """Builds the configuration snapshot and the settings resolver."""

    page_config = Dict(
        config=True,
        help="""
        Remote server configuration keys, e.g. ``remoteBaseUrl``, ``remoteToken``,
        ``appendToken`` and the per-service ``remote<Service>BaseUrl`` /
        ``remote<Service>Token`` keys. Entries here override entries read from
        page_config_file.
        """,
    )

    page_config_file = Unicode(
        "",
        config=True,
        help="""Path to a JSON document holding remote server configuration keys.""",
    )

    app_origin = Unicode(
        "",
        config=True,
        help="""
        Origin of the application hosting the client, e.g. ``http://localhost:8888``.
        Used as the fallback base URL and to decide whether tokens must be appended
        to WebSocket URLs. Defaults to the origin of an absolute ``appUrl``.
        """,
    )

    def _read_page_config_file(self) -> t.Dict[str, t.Any]:
        try:
            with open(self.page_config_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise RemoteServerConfigError(
                f"Cannot read page config file {self.page_config_file!r}: {e}"
            ) from e

        if isinstance(data, dict) and isinstance(data.get(CONFIG_DATA_KEY), dict):
            data = data[CONFIG_DATA_KEY]
        if not isinstance(data, dict):
            raise RemoteServerConfigError(
                f"Page config file {self.page_config_file!r} must hold a JSON object"
            )
        return data

    def load_page_config(self) -> PageConfig:
        data: t.Dict[str, t.Any] = {}
        if self.page_config_file:
            data.update(self._read_page_config_file())
            self.log.debug(f"Loaded {len(data)} keys from {self.page_config_file}")
        data.update(self.page_config)
        return PageConfig(data)

    def resolver(self, default_origin: t.Optional[str] = None) -> SettingsResolver:
        """Return a resolver over the loaded configuration.

        The hosting origin is, in order: ``app_origin``, the origin of an
        absolute ``appUrl`` key, then ``default_origin``.
        """
        page_config = self.load_page_config()

        origin = self.app_origin
        app_url = page_config.get("appUrl")
        if not origin and isinstance(app_url, str) and is_absolute_url(app_url):
            origin = app_url
        if not origin and default_origin:
            origin = default_origin
        if not origin:
            raise RemoteServerConfigError(
                "Cannot determine the hosting application origin; "
                "set RemoteServerConfig.app_origin"
            )

        return SettingsResolver(page_config, app_origin=url_origin(origin))
