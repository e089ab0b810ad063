from .base_settings import ContainerSettings, get_settings

__all__ = ["ContainerSettings", "get_settings"]
