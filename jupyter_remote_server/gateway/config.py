"""Point jupyter_server's gateway client at the resolved kernels endpoint.

In ``jupyter_config.py``:

    resolver = SettingsResolver(page_config, app_origin="http://localhost:8888")
    c.GatewayClient.update(gateway_client_config(resolver.resolve("kernels")))
"""

import typing as t

from ..serversettings import ResolvedSettings
from ..utils import websocket_url


def gateway_client_config(settings: ResolvedSettings) -> t.Dict[str, t.Any]:
    """Return ``GatewayClient`` trait values for ``settings``.

    The gateway client authenticates with a header, so its ``ws_url`` never
    carries the token; ``GatewayKernelManager`` appends kernel paths to it.
    """
    config: t.Dict[str, t.Any] = {
        "url": settings.base_url,
        "ws_url": websocket_url(settings.base_url),
    }
    if settings.token:
        config["auth_token"] = settings.token
    return config
