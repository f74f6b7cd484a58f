"""Tests for the config section manager registration."""

import threading

import pytest

from jupyter_remote_server.serversettings import ResolvedSettings, ServiceType
from jupyter_remote_server.services.config.manager import (
    ConfigSectionManager,
    ConfigSectionManagerRegisteredError,
    ConfigSectionRegistry,
    clear_config_section_manager,
    get_config_section_manager,
    get_config_section_registry,
    set_config_section_manager,
)


def make_manager(base_url="http://b:9999"):
    return ConfigSectionManager(server_settings=ResolvedSettings(ServiceType.CONFIG_SECTION, base_url))


class TestConfigSectionManager:
    def test_section_url(self):
        manager = make_manager("http://b:9999/jupyter/")
        assert manager.section_url("notebook") == "http://b:9999/jupyter/api/config/notebook"


class TestRegistration:
    """Test single-assignment registration."""

    def test_nothing_registered(self):
        assert get_config_section_manager() is None

    def test_register(self):
        manager = make_manager()
        set_config_section_manager(manager)
        assert get_config_section_manager() is manager

    def test_register_same_instance_again(self):
        manager = make_manager()
        set_config_section_manager(manager)
        set_config_section_manager(manager)
        assert get_config_section_manager() is manager

    def test_register_other_instance_fails(self):
        first = make_manager()
        set_config_section_manager(first)
        with pytest.raises(ConfigSectionManagerRegisteredError):
            set_config_section_manager(make_manager("http://c:1"))
        assert get_config_section_manager() is first

    def test_concurrent_registration_single_winner(self):
        managers = [make_manager(f"http://host{i}:1") for i in range(8)]
        errors = []

        def register(manager):
            try:
                set_config_section_manager(manager)
            except ConfigSectionManagerRegisteredError as e:
                errors.append(e)

        threads = [threading.Thread(target=register, args=(manager,)) for manager in managers]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(errors) == len(managers) - 1
        assert get_config_section_manager() in managers


class TestConfigSectionRegistry:
    """Test the registry singleton holding the manager."""

    def test_singleton_same_instance(self):
        assert get_config_section_registry() is ConfigSectionRegistry.instance()

    def test_manager_held_by_singleton(self):
        manager = make_manager()
        set_config_section_manager(manager)
        assert ConfigSectionRegistry.instance().manager is manager

    def test_clear_drops_instance(self):
        set_config_section_manager(make_manager())
        clear_config_section_manager()
        assert not ConfigSectionRegistry.initialized()
        assert get_config_section_manager() is None

    def test_register_after_clear(self):
        set_config_section_manager(make_manager())
        clear_config_section_manager()
        second = make_manager("http://c:1")
        set_config_section_manager(second)
        assert get_config_section_manager() is second

    def test_host_manager_without_settings(self):
        """Managers supplied by the host may not carry server settings."""
        manager = object()
        set_config_section_manager(manager)
        assert get_config_section_manager() is manager

        with pytest.raises(ConfigSectionManagerRegisteredError):
            set_config_section_manager(make_manager())
