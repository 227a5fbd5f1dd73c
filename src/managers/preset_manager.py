"""
Preset Manager - Processes named parameter presets

Receives the 'presets' table from ConfigManager, keyed by overlay kind
then preset name. Unknown kinds and names resolve to an empty fragment.
"""

from typing import Any, Dict, List, Mapping


class PresetManager:
    """
    Named preset lookup per overlay kind

    Example:
        presets = PresetManager({"text": {"brb": {"text": "Be Right Back"}}})

        presets.get_preset("text", "brb")      # {"text": "Be Right Back"}
        presets.get_preset("text", "nope")     # {}
        presets.preset_names("text")           # ["brb"]
    """

    def __init__(self, data: Mapping[str, Any]):
        self.data: Dict[str, Dict[str, Dict[str, Any]]] = {
            kind: {name: dict(fragment or {}) for name, fragment in (table or {}).items()}
            for kind, table in (data or {}).items()
        }

    def presets_for(self, kind: str) -> Dict[str, Dict[str, Any]]:
        """All presets of one overlay kind"""
        return self.data.get(kind, {})

    def preset_names(self, kind: str) -> List[str]:
        return list(self.presets_for(kind).keys())

    def has_preset(self, kind: str, name: str) -> bool:
        return name in self.presets_for(kind)

    def get_preset(self, kind: str, name: str) -> Dict[str, Any]:
        """Copy of one preset fragment, empty if unknown"""
        return dict(self.presets_for(kind).get(name, {}))
