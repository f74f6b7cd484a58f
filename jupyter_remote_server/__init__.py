"""Remote server settings for Jupyter clients talking to a remote Jupyter server."""

from .config import PageConfig, RemoteServerConfig
from .plugins import SERVICE_PLUGINS, ServicePlugin, activate_services
from .serversettings import ResolvedSettings, ServiceType, SettingsResolver
from .services.kernelspecs import RemoteKernelSpecManager, rewrite_resource_url
from .utils import RemoteServerConfigError

__version__ = "0.1.0"


def _jupyter_server_extension_points():
    return [{"module": "jupyter_remote_server"}]


def _load_jupyter_server_extension(serverapp):
    remote_config = RemoteServerConfig(parent=serverapp)
    resolver = remote_config.resolver(default_origin=serverapp.connection_url)
    services = activate_services(resolver, parent=serverapp)
    serverapp.web_app.settings["remote_server_services"] = services

    for service_type, settings in resolver.resolve_all().items():
        serverapp.log.info(
            f"Remote {service_type.value} server: {settings.base_url} "
            f"(append token: {settings.append_token})"
        )
    serverapp.log.info("jupyter_remote_server extension loaded")
