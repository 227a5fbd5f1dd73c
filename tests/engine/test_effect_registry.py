"""
Tests for EffectRegistry and effect declarations.
"""

import pytest

from engine.effect_registry import EffectRegistry, EffectSpec, register_default_effects
from models.enums import EffectKind


class TestEffectRegistry:

    def test_first_registration_wins(self):
        registry = EffectRegistry()
        first = registry.register(EffectSpec("fade", EffectKind.ENTRANCE, 0.6))
        second = registry.register(EffectSpec("fade", EffectKind.ENTRANCE, 9.0))
        assert second is first
        assert registry.get(EffectKind.ENTRANCE, "fade").duration == 0.6
        assert len(registry) == 1

    def test_same_name_different_kind(self):
        registry = EffectRegistry()
        registry.register(EffectSpec("pulse", EffectKind.ICON, 1.5))
        registry.register(EffectSpec("pulse", EffectKind.LINE, 2.0))
        assert len(registry) == 2

    def test_unknown_and_none(self, effects):
        assert effects.get(EffectKind.ENTRANCE, "none") is None
        assert effects.get(EffectKind.EXIT, "warp") is None
        assert effects.declaration(EffectKind.EXIT, "warp") is None

    def test_default_catalogue(self, effects):
        assert effects.contains(EffectKind.ENTRANCE, "typewriter")
        assert effects.contains(EffectKind.EXIT, "zoomOut")
        assert effects.contains(EffectKind.ICON, "heartbeat")
        assert "slide" in effects.names(EffectKind.LINE)

    def test_register_defaults_is_idempotent(self, effects):
        count = len(effects)
        register_default_effects(effects)
        assert len(effects) == count


class TestDeclaration:

    def test_replay_key_includes_cycle(self, effects):
        first = effects.declaration(EffectKind.ENTRANCE, "fade", cycle=0)
        second = effects.declaration(EffectKind.ENTRANCE, "fade", cycle=1)
        assert first["key"] == "entrance-fade-0"
        assert second["key"] == "entrance-fade-1"

    def test_overrides(self, effects):
        declaration = effects.declaration(EffectKind.EXIT, "fade", duration=0.4, delay=1.0)
        assert declaration["duration"] == 0.4
        assert declaration["delay"] == 1.0
        assert declaration["easing"] == "ease-in"
        assert declaration["fill"] == "forwards"

    def test_infinite_iterations(self, effects):
        declaration = effects.declaration(EffectKind.ICON, "pulse")
        assert declaration["iterations"] == "infinite"
        assert effects.declaration(EffectKind.ICON, "bounce")["iterations"] == 1

    def test_unsupported_override(self, effects):
        with pytest.raises(ValueError):
            effects.declaration(EffectKind.ENTRANCE, "fade", color="red")
