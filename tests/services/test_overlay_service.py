"""
Tests for OverlayService: discovery, deterministic frames and live sessions.
"""

import asyncio

import pytest

from engine.visibility import LoopTiming, advance_loop
from models.enums import LoopState, OverlayKind
from services.overlay_service import parse_kind


class TestDiscovery:

    def test_parse_kind(self):
        assert parse_kind("border") is OverlayKind.BORDER
        assert parse_kind("Border") is None
        assert parse_kind("nope") is None

    def test_list_kinds(self, overlay_service):
        kinds = {entry["kind"]: entry for entry in overlay_service.list_kinds()}
        assert set(kinds) == {"text", "cta", "socials", "border", "counter"}
        assert "brb" in kinds["text"]["presets"]
        assert "subscribe" in kinds["cta"]["presets"]
        assert kinds["border"]["presets"] == []
        assert "thickness" in kinds["border"]["params"]


class TestRenderFrame:

    def test_frame_after_timers(self, overlay_service):
        raw = {"loop": "1", "delay": "1", "entrancespeed": "1", "hold": "2", "exitspeed": "1", "pause": "1"}
        assert overlay_service.render_frame(OverlayKind.TEXT, raw, t=2.0)["state"] == "visible"
        assert overlay_service.render_frame(OverlayKind.TEXT, raw, t=4.5)["state"] == "exiting"
        frame = overlay_service.render_frame(OverlayKind.TEXT, raw, t=6.0)
        assert (frame["state"], frame["cycle"]) == ("entering", 1)

    def test_deterministic(self, overlay_service):
        raw = {"random": "1", "multicolor": "1"}
        first = overlay_service.render_frame(OverlayKind.BORDER, raw, t=3.21, seed=42)
        second = overlay_service.render_frame(OverlayKind.BORDER, raw, t=3.21, seed=42)
        assert first == second

    def test_negative_time_clamps(self, overlay_service):
        frame = overlay_service.render_frame(OverlayKind.COUNTER, {"value": "10"}, t=-5)
        assert frame["t"] == 0.0

    def test_border_viewport_option(self, overlay_service):
        frame = overlay_service.render_frame(OverlayKind.BORDER, {}, t=0, width=640, height=360)
        assert frame["viewport"] == {"width": 640, "height": 360}

    def test_socials_reveal_progress(self, overlay_service):
        frame = overlay_service.render_frame(OverlayKind.SOCIALS, {}, t=0.35)
        assert [item["visible"] for item in frame["items"]] == [True, False]


class TestRenderFrameLateTimes:
    """Frames far from mount are computed directly instead of by replaying every timer."""

    @pytest.mark.parametrize("kind", [OverlayKind.CTA, OverlayKind.TEXT])
    def test_loop_state_at_large_t(self, overlay_service, kind):
        raw = {"loop": "1"}
        t = 1_000_000.0
        frame = overlay_service.render_frame(kind, raw, t=t)

        timing = LoopTiming.from_config(overlay_service.resolve(kind, raw))
        expected = advance_loop(LoopState.ENTERING, 0, t, timing)
        assert frame["state"] == expected.state.value
        assert frame["cycle"] == expected.cycle
        assert frame["cycle"] > 1000

    @pytest.mark.parametrize("t", [0.5, 2.0, 4.5, 6.0, 13.5, 29.9])
    def test_same_frame_as_running_overlay(self, overlay_service, make_overlay, scheduler, t):
        raw = {"loop": "1", "delay": "1", "entrancespeed": "1", "hold": "2", "exitspeed": "1", "pause": "1"}
        overlay = make_overlay(OverlayKind.TEXT, raw)
        overlay.mount()
        scheduler.advance_to(t)
        running = overlay.sample(t)

        frame = overlay_service.render_frame(OverlayKind.TEXT, raw, t=t)
        for key in ("state", "cycle", "visible", "exiting"):
            assert frame[key] == running[key]

    def test_socials_stagger_loop(self, overlay_service):
        frame = overlay_service.render_frame(OverlayKind.SOCIALS, {"loop": "1", "hold": "1", "pause": "1"}, t=5e6)
        assert [item["platform"] for item in frame["items"]] == ["github", "linkedin"]

    def test_socials_one_by_one(self, overlay_service):
        raw = {"onebyone": "1", "show": "github,twitter,youtube", "each": "2", "eachpause": "0.5"}
        # delay 0.3, period 2.8: 3001 full turns, then 1s into twitter's turn
        t = 0.3 + 2.8 * 3001 + 1.0
        frame = overlay_service.render_frame(OverlayKind.SOCIALS, raw, t=t)
        assert [item["platform"] for item in frame["items"] if item["visible"]] == ["twitter"]

    def test_delayed_exit_at_large_t(self, overlay_service):
        frame = overlay_service.render_frame(OverlayKind.TEXT, {"exitafter": "3"}, t=1e6)
        assert frame["exiting"] is False
        frame = overlay_service.render_frame(OverlayKind.TEXT, {"exitafter": "3", "exit": "fade"}, t=1e6)
        assert frame["exiting"] is True

    def test_counter_at_large_t(self, overlay_service):
        frame = overlay_service.render_frame(OverlayKind.COUNTER, {"value": "10"}, t=1e6)
        assert frame["value"] == pytest.approx(10)
        assert frame["done"] is True


class TestSessions:

    @pytest.mark.asyncio
    async def test_session_samples_until_stopped(self, overlay_service, task_registry):
        session = overlay_service.open_session(OverlayKind.BORDER, {}, fps=120)
        await session.start()
        assert session.overlay.mounted

        await asyncio.sleep(0.05)
        await session.stop()

        assert not session.overlay.mounted
        assert session.sampler.frames_sampled > 0
        assert session.sampler.latest_frame["kind"] == "border"


class TestContainerSessions:

    @pytest.mark.asyncio
    async def test_start_and_stop_session(self, container, task_registry):
        session = await container.start_session(OverlayKind.COUNTER, {"value": "50"}, fps=100)
        assert container.get_session(session.id) is session
        assert session.sampler.fps == 100
        assert session.latest_frame()["kind"] == "counter"

        assert await container.stop_session(session.id) is True
        assert container.sessions == []
        assert not session.overlay.mounted
        assert await container.stop_session(session.id) is False

    def test_fps_from_server_settings(self, container):
        assert container.fps == 60
