"""
Tests for TextOverlay frames and visibility wiring.
"""

from models.enums import OverlayKind

LOOP = {
    "loop": "true", "delay": "1", "entrancespeed": "1", "hold": "2",
    "exitspeed": "1", "pause": "1", "exit": "fade",
}


class TestTextFrame:

    def test_preset_frame(self, make_overlay):
        overlay = make_overlay(OverlayKind.TEXT, {"preset": "brb"})
        overlay.mount()
        frame = overlay.sample(0.5)

        assert frame["kind"] == "text"
        assert frame["text"] == "Be Right Back"
        assert frame["sub"] == "Stream will resume shortly"
        assert frame["visible"] is True
        assert frame["state"] is None
        assert frame["text_color"] == "#ef4444"
        assert frame["palette"][0] == "#f43f5e"
        assert frame["entrance"]["name"] == "scale"
        assert frame["entrance"]["duration"] == 1
        assert frame["entrance"]["key"] == "entrance-scale-0"
        assert frame["exit"] is None

    def test_signature_line(self, make_overlay):
        overlay = make_overlay(OverlayKind.TEXT, {"preset": "brb"})
        frame = overlay.sample(0)
        assert frame["line_top"] is None
        assert frame["line_bottom"]["effect"]["name"] == "grow"
        assert frame["line_bottom"]["color"] == frame["palette"][0]

        both = make_overlay(OverlayKind.TEXT, {"linepos": "both"}).sample(0)
        assert both["line_top"] is not None and both["line_bottom"] is not None

        off = make_overlay(OverlayKind.TEXT, {"line": "false"}).sample(0)
        assert off["line_bottom"] is None

    def test_padding_axes_fall_back_to_pad(self, make_overlay):
        frame = make_overlay(OverlayKind.TEXT, {"pad": "10", "padx": "4"}).sample(0)
        assert frame["padding"] == {"x": 4, "y": 10}

    def test_text_gradient_replaces_color(self, make_overlay):
        frame = make_overlay(OverlayKind.TEXT, {"textgradient": "1"}).sample(0)
        assert frame["text_color"] is None
        assert frame["text_gradient"] == frame["palette"]

    def test_theme_colors(self, make_overlay):
        frame = make_overlay(OverlayKind.TEXT, {"theme": "light"}).sample(0)
        assert frame["text_color"] == "#121216"
        assert frame["theme"]["name"] == "light"


class TestTextTiming:

    def test_loop_cycle(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, LOOP)
        overlay.mount()

        scheduler.advance_to(2.0)
        assert overlay.sample(2.0)["state"] == "visible"

        scheduler.advance_to(4.0)
        frame = overlay.sample(4.0)
        assert frame["state"] == "exiting"
        assert frame["exiting"] is True
        assert frame["visible"] is False

        scheduler.advance_to(6.0)
        frame = overlay.sample(6.0)
        assert frame["state"] == "entering"
        assert frame["cycle"] == 1
        assert frame["entrance"]["key"] == "entrance-fade-1"

    def test_delayed_exit(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, {"exitafter": "3", "exit": "fade"})
        overlay.mount()

        scheduler.advance_to(2.9)
        assert overlay.sample(2.9)["exiting"] is False
        scheduler.advance_to(3.0)
        assert overlay.sample(3.0)["exiting"] is True

    def test_exit_none_never_exits(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, {"exitafter": "3"})
        overlay.mount()
        scheduler.advance_to(10)
        assert overlay.sample(10)["exiting"] is False

    def test_update_from_loop_to_static(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, LOOP)
        overlay.mount()
        scheduler.advance_to(1.0)

        overlay.update(resolver.resolve(OverlayKind.TEXT, {"loop": "false"}))
        assert scheduler.pending == 0
        assert overlay.sample(1.0)["visible"] is True

    def test_update_timing_replays_entrance(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, LOOP)
        overlay.mount()
        scheduler.advance_to(3.0)

        overlay.update(resolver.resolve(OverlayKind.TEXT, {**LOOP, "hold": "5"}))
        frame = overlay.sample(3.0)
        assert frame["state"] == "entering"
        assert frame["cycle"] == 1
        assert scheduler.pending == 1

    def test_unmount_cancels_timers(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, LOOP)
        overlay.mount()
        overlay.unmount()
        assert scheduler.pending == 0
        assert not overlay.mounted

    def test_mount_twice_is_ignored(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, LOOP)
        overlay.mount()
        overlay.mount()
        assert scheduler.pending == 1

    def test_update_before_mount_applies_timing(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, {**LOOP, "hold": "4"})
        overlay.update(resolver.resolve(OverlayKind.TEXT, {**LOOP, "hold": "9"}))
        assert scheduler.pending == 0

        overlay.mount()
        assert overlay.visibility.timing.hold == 9
        assert overlay.visibility.cycle == 0
        scheduler.advance_to(10.0)
        assert overlay.sample(10.0)["state"] == "visible"
        scheduler.advance_to(11.0)
        assert overlay.sample(11.0)["state"] == "exiting"

    def test_update_before_mount_enables_loop(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, {"exitafter": "3"})
        overlay.update(resolver.resolve(OverlayKind.TEXT, LOOP))
        overlay.mount()
        scheduler.advance_to(2.0)
        assert overlay.sample(2.0)["state"] == "visible"

    def test_update_before_mount_changes_exit_after(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.TEXT, {"exitafter": "3", "exit": "fade"})
        overlay.update(resolver.resolve(OverlayKind.TEXT, {"exitafter": "8", "exit": "fade"}))
        overlay.mount()
        scheduler.advance_to(5.0)
        assert overlay.sample(5.0)["exiting"] is False
        scheduler.advance_to(8.0)
        assert overlay.sample(8.0)["exiting"] is True
