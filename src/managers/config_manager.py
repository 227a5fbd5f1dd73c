"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and initializes sub-managers.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from managers.brand_manager import BrandManager
    from managers.preset_manager import PresetManager

log = get_logger().for_category(LogCategory.CONFIG)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into a copy of base

    Nested dicts are merged key by key; any other value in override
    replaces the value in base.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML files.
    The merged result is layered on top of factory_defaults.yaml, so a missing
    table in the loaded files still has a usable fallback.
    Initializes sub-managers (BrandManager, PresetManager).

    Example:
        config = ConfigManager()
        config.load()

        # Access via sub-managers
        palette = config.brand_manager.resolve_gradient("sunset")
        brb = config.preset_manager.get_preset("text", "brb")
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to src/)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}

        # Sub-managers (initialized in load())
        self.brand_manager: 'BrandManager'
        self.preset_manager: 'PresetManager'

    @staticmethod
    def _src_dir() -> Path:
        return Path(__file__).parent.parent

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self._src_dir() / path

    def load(self) -> Dict[str, Any]:
        """
        Load YAML configuration with include system support

        Process:
        1. Load factory defaults
        2. Load main config.yaml
        3. If it has 'include:' list, load and merge those files
        4. Otherwise treat as monolithic config
        5. Deep-merge the loaded config over the factory defaults
           (on any load failure, factory defaults alone are used)
        6. Initialize sub-managers

        Returns:
            Merged config data dict
        """
        defaults = self._load_factory_defaults()

        try:
            full_path = self._resolve(self.config_path)

            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if 'include' in main_config:
                log.info("Using include-based configuration")
                loaded = self._load_with_includes(main_config['include'], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                loaded = main_config

            self.data = deep_merge(defaults, loaded)

        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = defaults

        self._initialize_managers()

        return self.data

    def _load_factory_defaults(self) -> Dict[str, Any]:
        defaults_path = self._resolve(self.factory_defaults_path)
        try:
            with open(defaults_path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except Exception as ex:
            log.error("Failed to load factory defaults", path=str(defaults_path), error=str(ex))
            return {}

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["brand.yaml", "presets.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged = deep_merge(merged, file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except Exception as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    def _initialize_managers(self):
        """
        Initialize sub-managers with loaded config data

        Creates:
        - BrandManager: gradients, themes, fonts, social platforms
        - PresetManager: named parameter presets per overlay kind
        """
        from managers.brand_manager import BrandManager
        from managers.preset_manager import PresetManager

        try:
            self.brand_manager = BrandManager(self.data)
            log.info(
                "BrandManager initialized",
                gradients=len(self.brand_manager.gradient_names),
                themes=len(self.brand_manager.theme_names),
            )
        except Exception as ex:
            log.error("Failed to initialize BrandManager, using empty", error=str(ex))
            self.brand_manager = BrandManager({})

        try:
            self.preset_manager = PresetManager(self.data.get('presets', {}))
        except Exception as ex:
            log.warn("Failed to initialize PresetManager, using empty", error=str(ex))
            self.preset_manager = PresetManager({})

    # ===== Convenience accessors =====

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self.data.get(key, default)
