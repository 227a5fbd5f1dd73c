"""
Tests for PresetManager lookups.
"""

from managers.preset_manager import PresetManager


class TestPresetManager:

    def setup_method(self):
        self.presets = PresetManager({
            "text": {"brb": {"text": "Be Right Back"}, "custom": None},
            "cta": None,
        })

    def test_names(self):
        assert self.presets.preset_names("text") == ["brb", "custom"]
        assert self.presets.preset_names("cta") == []
        assert self.presets.preset_names("border") == []

    def test_get_preset_returns_copy(self):
        fragment = self.presets.get_preset("text", "brb")
        fragment["text"] = "changed"
        assert self.presets.get_preset("text", "brb") == {"text": "Be Right Back"}

    def test_unknown_preset_is_empty(self):
        assert self.presets.get_preset("text", "nope") == {}
        assert self.presets.get_preset("text", "custom") == {}
        assert not self.presets.has_preset("text", "nope")
