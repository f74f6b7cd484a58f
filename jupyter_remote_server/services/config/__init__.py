from .manager import (
    ConfigSectionManager,
    ConfigSectionManagerRegisteredError,
    ConfigSectionRegistry,
    clear_config_section_manager,
    get_config_section_manager,
    get_config_section_registry,
    set_config_section_manager,
)
