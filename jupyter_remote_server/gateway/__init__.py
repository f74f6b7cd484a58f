from .config import gateway_client_config
