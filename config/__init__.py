from .config import get_settings_module

__all__ = ["get_settings_module"]
