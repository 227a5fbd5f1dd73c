"""
Tests for SocialsOverlay item selection, reveal modes and frames.
"""

from models.enums import OverlayKind


def visible(frame):
    return [item["platform"] for item in frame["items"] if item["visible"]]


class TestSocialsItems:

    def test_brand_socials_with_handles(self, make_overlay):
        frame = make_overlay(OverlayKind.SOCIALS).sample(0)
        assert [item["platform"] for item in frame["items"]] == ["github", "linkedin"]
        assert frame["items"][0]["handle"] == "streamer"
        assert frame["items"][0]["name"] == "GitHub"

    def test_show_list_drops_unknown_platforms(self, make_overlay):
        overlay = make_overlay(OverlayKind.SOCIALS, {"show": "twitter,github,myspace", "handles": "twitter:me"})
        items = overlay.sample(0)["items"]
        assert [item["platform"] for item in items] == ["twitter", "github"]
        assert items[0]["handle"] == "@me"

    def test_missing_handle_falls_back_to_platform_id(self, make_overlay):
        items = make_overlay(OverlayKind.SOCIALS, {"show": "kick"}).sample(0)["items"]
        assert items[0]["handle"] == "kick"

    def test_priority_order(self, make_overlay):
        overlay = make_overlay(OverlayKind.SOCIALS, {
            "show": "github,twitter,youtube",
            "order": "priority",
            "priority": "youtube:1,twitter:2",
        })
        assert [item["platform"] for item in overlay.sample(0)["items"]] == ["youtube", "twitter", "github"]

    def test_priority_ignored_in_default_order(self, make_overlay):
        overlay = make_overlay(OverlayKind.SOCIALS, {"show": "github,twitter", "priority": "twitter:1"})
        assert [item["platform"] for item in overlay.sample(0)["items"]] == ["github", "twitter"]

    def test_icon_overrides(self, make_overlay):
        items = make_overlay(OverlayKind.SOCIALS, {"icons": "github:twitter,linkedin:nope"}).sample(0)["items"]
        assert items[0]["icon"] == "twitter"
        assert items[1]["icon"] == "linkedin"


class TestSocialsFrame:

    def test_icon_color_modes(self, make_overlay):
        platform = make_overlay(OverlayKind.SOCIALS, {"iconcolor": "platform"}).sample(0)
        assert platform["items"][1]["icon_color"] == "#0a66c2"

        white = make_overlay(OverlayKind.SOCIALS, {"iconcolor": "white"}).sample(0)
        assert {item["icon_color"] for item in white["items"]} == {"#ffffff"}

        gradient = make_overlay(OverlayKind.SOCIALS, {"iconcolor": "gradient"}).sample(0)
        assert [item["icon_color"] for item in gradient["items"]] == gradient["palette"][:2]

        brand = make_overlay(OverlayKind.SOCIALS).sample(0)
        assert brand["items"][0]["icon_color"] == brand["palette"][0]

    def test_sizes(self, make_overlay):
        frame = make_overlay(OverlayKind.SOCIALS, {"size": "lg"}).sample(0)
        assert (frame["icon_size"], frame["handle_size"]) == (32, 18)

        frame = make_overlay(OverlayKind.SOCIALS, {"size": "lg", "iconsize": "50"}).sample(0)
        assert frame["icon_size"] == 50

    def test_layout_and_panel(self, make_overlay):
        frame = make_overlay(OverlayKind.SOCIALS, {"layout": "vertical"}).sample(0)
        assert frame["direction"] == "column"
        assert frame["panel"]["background"].startswith("#26262e")

        assert make_overlay(OverlayKind.SOCIALS, {"bg": "0"}).sample(0)["panel"] is None


class TestSocialsReveal:

    def test_staggered_reveal(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS)
        overlay.mount()
        assert overlay.sample(0)["mode"] == "stagger"

        scheduler.advance_to(0.3)
        assert visible(overlay.sample(0.3)) == ["github"]
        scheduler.advance_to(0.5)
        assert visible(overlay.sample(0.5)) == ["github", "linkedin"]

    def test_all_at_once(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS, {"entrance": "fade"})
        overlay.mount()
        scheduler.advance_to(0.3)
        frame = overlay.sample(0.3)
        assert frame["mode"] == "all_at_once"
        assert visible(frame) == ["github", "linkedin"]

    def test_one_by_one(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS, {
            "onebyone": "1", "show": "github,twitter,youtube", "each": "2", "eachpause": "0.5",
        })
        overlay.mount()
        assert overlay.sample(0)["mode"] == "one_by_one"

        for step in range(1, 300):
            t = step * 0.05
            scheduler.advance_to(t)
            assert len(visible(overlay.sample(t))) <= 1

    def test_delayed_exit(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS, {"exitafter": "5", "exit": "fade"})
        overlay.mount()
        scheduler.advance_to(5)
        frame = overlay.sample(5)
        assert frame["exiting"] is True
        assert frame["exit"]["name"] == "fade"

    def test_one_by_one_ignores_delayed_exit(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS, {"onebyone": "1", "exitafter": "5", "exit": "fade"})
        overlay.mount()
        scheduler.advance_to(6)
        assert overlay.sample(6)["exiting"] is False

    def test_update_items_restarts_reveal(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS)
        overlay.mount()
        scheduler.advance_to(1.0)

        overlay.update(resolver.resolve(OverlayKind.SOCIALS, {"show": "twitch"}))
        frame = overlay.sample(1.0)
        assert [item["platform"] for item in frame["items"]] == ["twitch"]
        assert visible(frame) == []

        scheduler.advance_to(1.3)
        assert visible(overlay.sample(1.3)) == ["twitch"]

    def test_mode_change_rebuilds_controller(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS)
        overlay.mount()
        overlay.update(resolver.resolve(OverlayKind.SOCIALS, {"onebyone": "true"}))
        assert overlay.sample(0)["mode"] == "one_by_one"

    def test_unmount_cancels_everything(self, make_overlay, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS, {"exitafter": "5"})
        overlay.mount()
        overlay.unmount()
        assert scheduler.pending == 0

    def test_items_and_timing_change_together(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS, {"show": "github,twitter", "loop": "true", "hold": "5"})
        overlay.mount()
        overlay.update(resolver.resolve(OverlayKind.SOCIALS, {"show": "twitch,github", "loop": "true", "hold": "1"}))

        assert overlay.reveal.hold == 1
        assert [item.identity for item in overlay.reveal.items] == ["twitch", "github"]
        scheduler.advance_to(0.5)
        assert visible(overlay.sample(0.5)) == ["twitch", "github"]
        scheduler.advance_to(2.0)
        assert visible(overlay.sample(2.0)) == []

    def test_timing_change_restarts_reveal(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS, {"delay": "1"})
        overlay.mount()
        overlay.update(resolver.resolve(OverlayKind.SOCIALS, {"delay": "3"}))
        assert overlay.reveal.delay == 3
        scheduler.advance_to(2.0)
        assert visible(overlay.sample(2.0)) == []
        scheduler.advance_to(3.0)
        assert visible(overlay.sample(3.0)) == ["github"]

    def test_update_before_mount(self, make_overlay, resolver, scheduler):
        overlay = make_overlay(OverlayKind.SOCIALS, {"loop": "true", "hold": "5", "exitafter": "5"})
        overlay.update(resolver.resolve(OverlayKind.SOCIALS, {"show": "twitch", "hold": "2", "exitafter": "8"}))
        assert scheduler.pending == 0

        overlay.mount()
        assert overlay.reveal.hold == 2
        assert overlay.delayed_exit.after == 8
        scheduler.advance_to(5.0)
        assert overlay.sample(5.0)["exiting"] is False
        scheduler.advance_to(8.0)
        assert overlay.sample(8.0)["exiting"] is True
