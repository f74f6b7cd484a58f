"""Config section manager and its process-wide registration.

Config sections look up their manager globally, so exactly one manager may be
registered per process. It is set once during startup and only read after.
"""

import threading
import typing as t

from tornado.escape import url_escape
from traitlets import Any, Unicode
from traitlets.config import LoggingConfigurable, SingletonConfigurable

from ...serversettings import ResolvedSettings


class ConfigSectionManagerRegisteredError(RuntimeError):
    """A different config section manager is already registered."""


class ConfigSectionManager(LoggingConfigurable):
    """Locates config sections on the remote server."""

    config_endpoint = Unicode(
        "api/config",
        config=True,
        help="""The config sections endpoint, relative to the base URL.""",
    )

    def __init__(self, server_settings: ResolvedSettings, **kwargs: t.Any) -> None:
        super().__init__(**kwargs)
        self.server_settings = server_settings

    def section_url(self, name: str) -> str:
        return self.server_settings.make_url(self.config_endpoint, url_escape(name, plus=False))


def _describe(manager: t.Any) -> str:
    base_url = getattr(getattr(manager, "server_settings", None), "base_url", None)
    return f"{type(manager).__name__} for {base_url}" if base_url else repr(manager)


class ConfigSectionRegistry(SingletonConfigurable):
    """Process-wide holder (singleton) of the config section manager.

    The manager may be set only once; config sections created afterwards keep
    using it, so replacing it would leave them with stale section data.
    Managers supplied by the host need not be ``ConfigSectionManager`` instances.
    """

    manager = Any(
        None,
        allow_none=True,
        help="""The registered config section manager.""",
    )

    # guards instance creation and the single assignment
    _lock = threading.Lock()

    def register(self, manager: t.Any) -> None:
        """Register ``manager``; registering the current one again is a no-op.

        Raises
        ------
        ConfigSectionManagerRegisteredError
            If another manager was registered before.
        """
        if self.manager is manager:
            return
        if self.manager is not None:
            raise ConfigSectionManagerRegisteredError(
                f"A config section manager is already registered: {_describe(self.manager)}"
            )
        self.manager = manager
        self.log.info(f"Registered config section manager: {_describe(manager)}")


def get_config_section_registry(config: t.Optional[t.Any] = None) -> ConfigSectionRegistry:
    """Get the config section registry singleton instance.

    This is a convenience wrapper around ConfigSectionRegistry.instance().
    """
    with ConfigSectionRegistry._lock:
        return ConfigSectionRegistry.instance(config=config)


def set_config_section_manager(manager: t.Any) -> None:
    """Register the process-wide config section manager.

    Raises
    ------
    ConfigSectionManagerRegisteredError
        If another manager was registered before.
    """
    with ConfigSectionRegistry._lock:
        ConfigSectionRegistry.instance().register(manager)


def get_config_section_manager() -> t.Optional[t.Any]:
    if not ConfigSectionRegistry.initialized():
        return None
    return ConfigSectionRegistry.instance().manager


def clear_config_section_manager() -> None:
    """Forget the registered manager. Primarily useful for testing."""
    with ConfigSectionRegistry._lock:
        ConfigSectionRegistry.clear_instance()
