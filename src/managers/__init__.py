"""
Managers for configuration
"""

from .config_manager import ConfigManager
from .brand_manager import BrandManager
from .preset_manager import PresetManager

__all__ = ['ConfigManager', 'BrandManager', 'PresetManager']
