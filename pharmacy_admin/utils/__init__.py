"""
Utility modules for the product admin client
"""
from .config_loader import ProductAdminSettings, load_settings

__all__ = [
    'ProductAdminSettings',
    'load_settings',
]
