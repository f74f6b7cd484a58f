import pytest

from jupyter_remote_server.services.config.manager import clear_config_section_manager


@pytest.fixture(autouse=True)
def reset_config_section_manager():
    """Forget the registered config section manager between tests."""
    clear_config_section_manager()
    yield
    clear_config_section_manager()
