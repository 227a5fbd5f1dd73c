"""
Tests for parameter resolution: override > preset > default, fail-closed.
"""

import pytest

from models.enums import OverlayKind
from models.overlay_params import BoolParam, EnumParam, ListParam, NumberParam, TextParam
from services.overlay_definitions import get_definition
from services.parameter_resolver import resolve


class TestResolutionOrder:

    def test_override_beats_preset_beats_default(self, resolver):
        config = resolver.resolve(OverlayKind.TEXT, {"preset": "brb", "size": "60"})
        assert config.size == 60.0          # override
        assert config.weight == 700         # preset
        assert config.pad == 28             # default

    def test_preset_beats_default_without_override(self, resolver):
        config = resolver.resolve(OverlayKind.TEXT, {"preset": "starting"})
        assert config.entrance == "slideUp"
        assert config.gradient == "emerald"

    def test_invalid_override_falls_back_to_preset(self, resolver):
        config = resolver.resolve(OverlayKind.TEXT, {"preset": "brb", "size": "huge", "entrance": "Scale"})
        assert config.size == 48
        assert config.entrance == "scale"

    def test_unknown_preset_records_custom(self, resolver):
        config = resolver.resolve(OverlayKind.TEXT, {"preset": "nope"})
        assert config.preset == "custom"
        assert config.text == ""

    def test_cta_default_preset(self, resolver):
        config = resolver.resolve(OverlayKind.CTA, {})
        assert config.preset == "subscribe"
        assert config.text == "Subscribe"
        assert config.sub == "Don't miss out!"

    def test_kinds_without_presets_ignore_preset_key(self, resolver):
        config = resolver.resolve(OverlayKind.BORDER, {"preset": "brb"})
        assert "preset" not in config

    def test_unknown_keys_ignored(self, resolver):
        assert "bogus" not in resolver.resolve(OverlayKind.COUNTER, {"bogus": "1"})


class TestCaptions:

    def test_or_caption_skips_empty_override(self, resolver):
        config = resolver.resolve(OverlayKind.TEXT, {"preset": "brb", "text": ""})
        assert config.text == "Be Right Back"

    def test_or_caption_override(self, resolver):
        assert resolver.resolve(OverlayKind.TEXT, {"preset": "brb", "text": "Lunch"}).text == "Lunch"

    def test_explicit_caption_honours_empty_override(self, resolver):
        config = resolver.resolve(OverlayKind.CTA, {"preset": "like", "sub": ""})
        assert config.sub == ""

    def test_explicit_caption_uses_preset_when_absent(self, resolver):
        assert resolver.resolve(OverlayKind.CTA, {"preset": "like"}).sub == "It helps a lot!"


class TestTypedValues:

    def test_negative_durations_clamp_to_zero(self, resolver):
        config = resolver.resolve(OverlayKind.TEXT, {"hold": "-5", "delay": "-1"})
        assert config.hold == 0.0
        assert config.delay == 0.0

    def test_list_values(self, resolver):
        config = resolver.resolve(OverlayKind.SOCIALS, {"show": "github, ,twitter"})
        assert config.show == ("github", "twitter")

    def test_booleans(self, resolver):
        assert resolver.resolve(OverlayKind.TEXT, {"loop": "0"}).loop is False
        assert resolver.resolve(OverlayKind.TEXT, {"loop": "yes"}).loop is True

    @pytest.mark.parametrize("kind", list(OverlayKind))
    def test_garbage_never_escapes_allowed_sets(self, resolver, kind):
        definition = get_definition(kind)
        raw = {key: "💥garbage" for key in definition.keys}
        config = resolver.resolve(kind, raw)

        assert set(config) == set(definition.keys)
        for key, param in definition.params.items():
            value = config[key]
            if isinstance(param, EnumParam):
                assert value in param.values
            elif isinstance(param, NumberParam):
                assert isinstance(value, (int, float)) and not isinstance(value, bool)
                if param.min is not None:
                    assert value >= param.min
                if param.max is not None:
                    assert value <= param.max
            elif isinstance(param, BoolParam):
                assert isinstance(value, bool)
            elif isinstance(param, ListParam):
                assert isinstance(value, tuple)
            elif isinstance(param, TextParam):
                assert isinstance(value, str)


class TestIdempotence:

    def test_same_input_same_config(self, resolver):
        raw = {"preset": "brb", "hold": "6", "colors": "ff0000,00ff00"}
        first = resolver.resolve(OverlayKind.TEXT, raw)
        second = resolver.resolve(OverlayKind.TEXT, raw)
        assert first == second
        assert hash(first) == hash(second)

    def test_resolving_resolved_values_is_stable(self, resolver):
        first = resolver.resolve(OverlayKind.COUNTER, {"value": "1500", "decimals": "2"})
        again = resolver.resolve(
            OverlayKind.COUNTER,
            {key: ",".join(v) if isinstance(v, tuple) else str(v).lower() if isinstance(v, bool) else str(v)
             for key, v in first.items()},
        )
        assert again == first

    def test_module_level_resolve_without_presets(self):
        config = resolve({}, get_definition(OverlayKind.TEXT).params)
        assert config.preset == "custom"
