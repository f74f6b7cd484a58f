"""
Example Jupyter Server configuration for jupyter-remote-server.

Usage:
    jupyter server --config=jupyter_config.py
"""

c = get_config()  # noqa

c.ServerApp.jpserver_extensions = {"jupyter_remote_server": True}

# Default remote server for every service
c.RemoteServerConfig.page_config = {
    "remoteBaseUrl": "http://localhost:8889",
    "remoteToken": "",
    # Run kernels on another server; its token falls back to remoteToken
    # "remoteKernelsBaseUrl": "http://kernels.example.com:9999",
    # Force the token onto WebSocket URLs for every service
    # "appendToken": True,
}

# Or read the same keys from a JSON document
# c.RemoteServerConfig.page_config_file = "/etc/jupyter/remote_server.json"

# Origin the browser client is served from. Defaults to the origin of an
# absolute appUrl, then to the server's own connection URL.
# c.RemoteServerConfig.app_origin = "http://localhost:8888"

# c.RemoteKernelSpecManager.request_timeout = 20.0

# ============================================================================
# Gateway
# ============================================================================
# Proxy kernels through jupyter_server's gateway to the resolved kernels server:
#
# from jupyter_remote_server import SettingsResolver
# from jupyter_remote_server.gateway import gateway_client_config
# resolver = SettingsResolver(c.RemoteServerConfig.page_config, app_origin="http://localhost:8888")
# c.GatewayClient.update(gateway_client_config(resolver.resolve("kernels")))

# Optional: Enable debug logging to see where each setting was resolved from
# c.Application.log_level = "DEBUG"
