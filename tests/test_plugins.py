"""Tests for service plugin activation."""

from unittest.mock import Mock

import pytest

from jupyter_remote_server.plugins import SERVICE_PLUGINS, activate_services
from jupyter_remote_server.serversettings import ResolvedSettings, ServiceType, SettingsResolver
from jupyter_remote_server.services.config.manager import (
    ConfigSectionManager,
    ConfigSectionManagerRegisteredError,
    get_config_section_manager,
)
from jupyter_remote_server.services.kernelspecs.kernelspecmanager import RemoteKernelSpecManager


@pytest.fixture
def resolver():
    return SettingsResolver(
        {
            "remoteBaseUrl": "http://a:8888",
            "remoteToken": "tok",
            "remoteKernelsBaseUrl": "http://b:9999",
            "remoteConfigSectionBaseUrl": "http://c:7777",
        },
        app_origin="http://a:8888",
    )


class TestPluginTable:
    def test_requirements_come_first(self):
        provided = set()
        for plugin in SERVICE_PLUGINS:
            assert set(plugin.requires) <= provided
            provided.add(plugin.provides)

    def test_every_service_type_covered(self):
        assert {plugin.service_type for plugin in SERVICE_PLUGINS} == set(ServiceType)

    def test_unique_ids(self):
        assert len({plugin.id for plugin in SERVICE_PLUGINS}) == len(SERVICE_PLUGINS)


class TestActivateServices:
    """Test building services from resolved settings."""

    def test_defaults(self, resolver):
        services = activate_services(resolver)

        assert isinstance(services["server_settings"], ResolvedSettings)
        assert services["contents_manager"].base_url == "http://a:8888"
        assert services["terminal_manager"].token == "tok"
        assert services["kernel_manager"].base_url == "http://b:9999"

        kernel_specs = services["kernel_spec_manager"]
        assert isinstance(kernel_specs, RemoteKernelSpecManager)
        assert kernel_specs.server_settings.base_url == "http://b:9999"

    def test_config_section_manager_registered(self, resolver):
        services = activate_services(resolver)
        manager = services["config_section_manager"]
        assert isinstance(manager, ConfigSectionManager)
        assert manager.server_settings.base_url == "http://c:7777"
        assert get_config_section_manager() is manager

    def test_activate_twice_fails(self, resolver):
        activate_services(resolver)
        with pytest.raises(ConfigSectionManagerRegisteredError):
            activate_services(resolver)

    def test_factories_receive_settings_and_requirements(self, resolver):
        kernel_manager_factory = Mock(name="KernelManager")
        session_manager_factory = Mock(name="SessionManager")

        services = activate_services(
            resolver,
            factories={
                "kernel_manager": kernel_manager_factory,
                "session_manager": session_manager_factory,
            },
        )

        kernel_manager_factory.assert_called_once_with(server_settings=resolver.resolve("kernels"))
        session_manager_factory.assert_called_once_with(
            server_settings=resolver.resolve("kernels"),
            kernel_manager=kernel_manager_factory.return_value,
        )
        assert services["session_manager"] is session_manager_factory.return_value

    def test_drive_passed_to_contents_manager(self, resolver):
        contents_manager_factory = Mock(name="ContentsManager")
        services = activate_services(resolver, factories={"contents_manager": contents_manager_factory})
        assert contents_manager_factory.call_args.kwargs["default_drive"] is services["default_drive"]

    def test_host_config_section_manager(self, resolver):
        host_manager = Mock(spec=[])
        services = activate_services(resolver, factories={"config_section_manager": lambda **kwargs: host_manager})
        assert services["config_section_manager"] is host_manager
        assert get_config_section_manager() is host_manager
