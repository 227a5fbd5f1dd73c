"""
Brand Manager - Processes brand table definitions

Processes gradient, theme, font and social platform data from ConfigManager
(does NOT load files). Every lookup fails closed to a built-in default.
"""

import random
from typing import Dict, List, Optional, Sequence

from models.color import Color
from models.domain.theme import ThemeColors, PlatformInfo
from utils.colors import COLOR_MODE_SHIFTS
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PALETTE)

DEFAULT_GRADIENT = "indigo"
DEFAULT_THEME = "dark"

# Built-in fallbacks used when the brand tables lack the defaults themselves
_FALLBACK_PALETTE = ("#6366f1", "#8b5cf6", "#a78bfa", "#c4b5fd", "#818cf8")
_FALLBACK_THEME = {
    "bg": "#121216",
    "bg_alt": "#1c1c24",
    "surface": "#26262e",
    "border": "#3a3a44",
    "text": "#f0f0f5",
    "text_muted": "#9898a8",
    "text_dim": "#5a5a6a",
}
_FALLBACK_FONTS = {"display": "Inter", "body": "Inter", "mono": "JetBrains Mono"}


def parse_palette(values: Sequence[str]) -> List[Color]:
    """Parse hex strings into colors, dropping malformed entries"""
    palette = []
    for value in values:
        color = Color.from_hex(str(value))
        if color is None:
            log.debug("Dropping malformed color", value=value)
            continue
        palette.append(color)
    return palette


class BrandManager:
    """
    Brand table manager (data processor only)

    Responsibilities:
    - Parse named gradient palettes and themes
    - Resolve gradients (explicit colors, random mode, color modes)
    - Provide font and social platform lookups

    Does NOT load files - receives data from ConfigManager.

    Example:
        brand = BrandManager(config.data)

        palette = brand.resolve_gradient("sunset")
        palette = brand.resolve_gradient("indigo", explicit_colors=["ff0000", "00ff00"])
        palette = brand.resolve_gradient("indigo", random_mode=True, rng=random.Random(7))
        theme = brand.resolve_theme("light")
    """

    def __init__(self, data: dict):
        """
        Initialize BrandManager with parsed config data

        Args:
            data: Config dict with 'gradients', 'themes', 'fonts',
                  'platforms' and 'socials' keys
        """
        self.data = data
        self._gradients: Dict[str, List[Color]] = {}
        self._themes: Dict[str, ThemeColors] = {}
        self._platforms: Dict[str, PlatformInfo] = {}
        self._process_data()

    def _process_data(self):
        """Process brand data and build caches"""
        for name, values in (self.data.get('gradients') or {}).items():
            palette = parse_palette(values or [])
            if palette:
                self._gradients[name] = palette
            else:
                log.warn("Skipping gradient with no valid colors", name=name)

        if DEFAULT_GRADIENT not in self._gradients:
            self._gradients[DEFAULT_GRADIENT] = parse_palette(_FALLBACK_PALETTE)

        for name, values in (self.data.get('themes') or {}).items():
            merged = {**_FALLBACK_THEME, **(values or {})}
            self._themes[name] = ThemeColors(name=name, **{k: merged[k] for k in _FALLBACK_THEME})

        if DEFAULT_THEME not in self._themes:
            self._themes[DEFAULT_THEME] = ThemeColors(name=DEFAULT_THEME, **_FALLBACK_THEME)

        for pid, info in (self.data.get('platforms') or {}).items():
            info = info or {}
            self._platforms[pid] = PlatformInfo(
                id=pid,
                name=info.get('name', pid),
                color=info.get('color', _FALLBACK_PALETTE[0]),
                prefix=info.get('prefix', ''),
            )

    # === Gradients ===

    @property
    def gradient_names(self) -> List[str]:
        return list(self._gradients.keys())

    @property
    def palettes(self) -> List[List[Color]]:
        """All named palettes in table order"""
        return list(self._gradients.values())

    def get_gradient(self, name: str) -> Optional[List[Color]]:
        palette = self._gradients.get(name)
        return list(palette) if palette is not None else None

    def resolve_gradient(
        self,
        name: str,
        explicit_colors: Optional[Sequence[str]] = None,
        random_mode: bool = False,
        color_mode: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> List[Color]:
        """
        Resolve a gradient name to a concrete, non-empty palette

        Priority:
        1. Explicit colors (malformed entries dropped)
        2. Random named palette (chosen with rng)
        3. Named palette, unknown names fall back to the default palette

        Args:
            name: Gradient name (e.g. "sunset")
            explicit_colors: Hex strings, '#' optional
            random_mode: Pick any named palette
            color_mode: darker/dark/normal/light/lighter lightness shift
            rng: Random source; callers pass a seeded instance

        Returns:
            List of Color (never empty)
        """
        palette: List[Color] = []

        if explicit_colors:
            palette = parse_palette(explicit_colors)
            if not palette:
                log.debug("No valid explicit colors, using named gradient", colors=list(explicit_colors))

        if not palette and random_mode:
            rng = rng or random.Random()
            chosen = rng.choice(self.gradient_names)
            log.debug("Random gradient selected", name=chosen)
            palette = list(self._gradients[chosen])

        if not palette:
            if name in self._gradients:
                palette = list(self._gradients[name])
            else:
                log.warn("Unknown gradient, using default", name=name, fallback=DEFAULT_GRADIENT)
                palette = list(self._gradients[DEFAULT_GRADIENT])

        if color_mode and color_mode in COLOR_MODE_SHIFTS and color_mode != 'normal':
            palette = [color.with_color_mode(color_mode) for color in palette]

        return palette

    # === Themes ===

    @property
    def theme_names(self) -> List[str]:
        return list(self._themes.keys())

    def resolve_theme(self, name: str) -> ThemeColors:
        """Resolve a theme name, unknown names fall back to the default theme"""
        theme = self._themes.get(name)
        if theme is None:
            log.warn("Unknown theme, using default", name=name, fallback=DEFAULT_THEME)
            theme = self._themes[DEFAULT_THEME]
        return theme

    # === Fonts ===

    def font_family(self, key: str) -> str:
        """Font family for a font key (display, body, mono); unknown keys are used verbatim"""
        fonts = {**_FALLBACK_FONTS, **(self.data.get('fonts') or {})}
        return fonts.get(key, key)

    # === Social platforms ===

    @property
    def platform_ids(self) -> List[str]:
        return list(self._platforms.keys())

    def get_platform(self, platform_id: str) -> Optional[PlatformInfo]:
        return self._platforms.get(platform_id)

    def is_platform(self, platform_id: str) -> bool:
        return platform_id in self._platforms

    @property
    def socials(self) -> Dict[str, str]:
        """Brand handles per platform (empty strings for unused platforms)"""
        return {k: str(v or '') for k, v in (self.data.get('socials') or {}).items()}
