"""Service plugins: which settings each service manager is built with.

Manager implementations are supplied by the host through ``factories``,
keyed by the name a plugin provides. Each factory is called as
``factory(server_settings=..., **requirements)`` where requirements are the
instances provided by the plugins listed in ``requires``.
"""

import functools
import logging
import typing as t
from dataclasses import dataclass

from .serversettings import ServiceType, SettingsResolver
from .services.config.manager import ConfigSectionManager, set_config_section_manager
from .services.kernelspecs.kernelspecmanager import RemoteKernelSpecManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServicePlugin:
    id: str
    description: str
    service_type: ServiceType
    provides: str
    requires: t.Tuple[str, ...] = ()


SERVICE_PLUGINS: t.Tuple[ServicePlugin, ...] = (
    ServicePlugin(
        "jupyter-remote-server:server-settings",
        "Provides the default remote server settings.",
        ServiceType.DEFAULT,
        "server_settings",
    ),
    ServicePlugin(
        "jupyter-remote-server:default-drive",
        "Provides a default drive that connects to the remote server.",
        ServiceType.CONTENTS,
        "default_drive",
    ),
    ServicePlugin(
        "jupyter-remote-server:contents-manager",
        "Provides the contents manager.",
        ServiceType.CONTENTS,
        "contents_manager",
        requires=("default_drive",),
    ),
    ServicePlugin(
        "jupyter-remote-server:kernel-manager",
        "Provides the kernel manager.",
        ServiceType.KERNELS,
        "kernel_manager",
    ),
    ServicePlugin(
        "jupyter-remote-server:kernel-spec-manager",
        "Provides the kernel spec manager with remote resource URL rewriting.",
        ServiceType.KERNELS,
        "kernel_spec_manager",
    ),
    ServicePlugin(
        "jupyter-remote-server:session-manager",
        "Provides the session manager.",
        ServiceType.KERNELS,
        "session_manager",
        requires=("kernel_manager",),
    ),
    ServicePlugin(
        "jupyter-remote-server:setting-manager",
        "Provides the setting manager.",
        ServiceType.SETTINGS,
        "setting_manager",
    ),
    ServicePlugin(
        "jupyter-remote-server:workspace-manager",
        "Provides the workspace manager.",
        ServiceType.WORKSPACES,
        "workspace_manager",
    ),
    ServicePlugin(
        "jupyter-remote-server:user-manager",
        "Provides the user manager.",
        ServiceType.USERS,
        "user_manager",
    ),
    ServicePlugin(
        "jupyter-remote-server:event-manager",
        "Provides the event manager.",
        ServiceType.EVENTS,
        "event_manager",
    ),
    ServicePlugin(
        "jupyter-remote-server:config-section-manager",
        "Provides the config section manager.",
        ServiceType.CONFIG_SECTION,
        "config_section_manager",
    ),
    ServicePlugin(
        "jupyter-remote-server:nbconvert-manager",
        "Provides the nbconvert manager.",
        ServiceType.NBCONVERT,
        "nbconvert_manager",
    ),
    ServicePlugin(
        "jupyter-remote-server:terminal-manager",
        "Provides the terminal manager.",
        ServiceType.TERMINALS,
        "terminal_manager",
    ),
)


def _settings_only(server_settings, **requirements):
    return server_settings


def activate_services(
    resolver: SettingsResolver,
    factories: t.Optional[t.Mapping[str, t.Callable[..., t.Any]]] = None,
    parent: t.Any = None,
) -> t.Dict[str, t.Any]:
    """Activate every plugin in ``SERVICE_PLUGINS`` order.

    Services without a factory get their ``ResolvedSettings``. The kernel spec
    and config section managers default to ``RemoteKernelSpecManager`` and
    ``ConfigSectionManager``; the config section manager is registered as the
    process-wide one.

    Returns
    -------
    Dict[str, Any]
        The activated services keyed by the name each plugin provides.
    """
    available = {
        "kernel_spec_manager": functools.partial(RemoteKernelSpecManager, parent=parent),
        "config_section_manager": functools.partial(ConfigSectionManager, parent=parent),
    }
    available.update(factories or {})

    services: t.Dict[str, t.Any] = {}
    for plugin in SERVICE_PLUGINS:
        server_settings = resolver.resolve(plugin.service_type)
        requirements = {name: services[name] for name in plugin.requires}
        factory = available.get(plugin.provides, _settings_only)
        services[plugin.provides] = factory(server_settings=server_settings, **requirements)
        logger.debug(f"Activated {plugin.id} with {plugin.service_type.value} settings")

    set_config_section_manager(services["config_section_manager"])
    return services
