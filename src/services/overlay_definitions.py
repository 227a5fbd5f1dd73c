"""
Overlay parameter tables

One typed default table per overlay kind. Every key an overlay reads is
declared here, so a resolved config never has an undefined field.
"""

from dataclasses import dataclass
from typing import Dict, List

from models.enums import OverlayKind, CaptionMode
from models.overlay_params import (
    OverlayParam, NumberParam, DurationParam, BoolParam, EnumParam, TextParam, ListParam
)

# === Allowed value sets ===

ENTRANCES = (
    'fade', 'slideUp', 'slideDown', 'slideLeft', 'slideRight', 'scale', 'bounce',
    'typewriter', 'flipIn', 'zoomBounce', 'rotateIn', 'zoomIn', 'stagger', 'none',
)
EXITS = (
    'none', 'fade', 'slideDown', 'slideUp', 'slideLeft', 'slideRight', 'scale',
    'fadeLeft', 'zoomOut', 'rotateOut', 'flipOut',
)
ICON_ANIMATIONS = ('bounce', 'shake', 'pulse', 'spin', 'wiggle', 'flip', 'heartbeat', 'none')
BORDER_ANIMATIONS = ('dash', 'rotate', 'pulse', 'breathe', 'none')
LINE_ANIMATIONS = ('slide', 'grow', 'pulse', 'none')
SHAPES = ('rect', 'circle')
BORDER_STYLES = ('solid', 'dashed', 'dotted', 'double', 'neon')
LINE_STYLES = ('solid', 'dashed', 'dotted', 'gradient', 'slant', 'wave', 'swirl', 'bracket')
DECORATIONS = ('line', 'slant', 'swirl', 'none')
HALIGNS = ('left', 'center', 'right')
VALIGNS = ('top', 'center', 'bottom')
LAYOUTS = ('horizontal', 'vertical')
COUNTER_LAYOUTS = ('stack', 'inline')
ICON_POSITIONS = ('left', 'right', 'top', 'bottom')
LINE_POSITIONS = ('top', 'bottom', 'both')
SIZES = ('sm', 'md', 'lg', 'xl')
CTA_ICONS = ('like', 'sub', 'bell', 'share', 'heart', 'star', 'follow', 'none')
COUNTER_ICONS = ('heart', 'star', 'users', 'eye', 'zap', 'fire', 'trophy', 'bell', 'trending', 'none')
ICON_COLOR_MODES = ('brand', 'platform', 'white', 'gradient')
NOTATIONS = ('standard', 'compact', 'scientific')
THEMES = ('dark', 'light')
PLATFORM_ORDERS = ('default', 'priority')
BG_SHADOWS = ('none', 'sm', 'md', 'lg', 'xl')
COLOR_MODES = ('darker', 'dark', 'normal', 'light', 'lighter')
FONTS = ('display', 'body', 'mono')

PRESET_KEY = 'preset'


@dataclass(frozen=True)
class OverlayDefinition:
    """Parameter table of one overlay kind"""
    kind: OverlayKind
    params: Dict[str, OverlayParam]
    has_presets: bool = False

    @property
    def keys(self) -> List[str]:
        return list(self.params.keys())

    def describe(self) -> Dict[str, dict]:
        return {key: param.describe() for key, param in self.params.items()}


def _brand_params() -> Dict[str, OverlayParam]:
    """Theme and palette keys shared by every overlay"""
    return {
        'theme': EnumParam('dark', THEMES),
        'gradient': TextParam('indigo'),
        'colors': ListParam(),
        'colormode': EnumParam('normal', COLOR_MODES),
    }


def _panel_params() -> Dict[str, OverlayParam]:
    """Background panel keys"""
    return {
        'bgcolor': TextParam(''),
        'bgopacity': NumberParam(0.9, min_value=0.0, max_value=1.0),
        'bgshadow': EnumParam('md', BG_SHADOWS),
        'bgblur': NumberParam(12, min_value=0),
        'bgradius': NumberParam(14, min_value=0),
    }


TEXT_PARAMS: Dict[str, OverlayParam] = {
    PRESET_KEY: TextParam('custom'),
    'text': TextParam('', caption=CaptionMode.OR),
    'sub': TextParam('', caption=CaptionMode.OR),
    'size': NumberParam(32, min_value=1),
    'subsize': NumberParam(18, min_value=1),
    'weight': NumberParam(600, min_value=100, max_value=900, integer=True),
    'font': EnumParam('display', FONTS),
    'align': EnumParam('left', HALIGNS),
    'valign': EnumParam('bottom', VALIGNS),
    'maxwidth': TextParam('auto'),
    'pad': NumberParam(28, min_value=0),
    'padx': NumberParam(0, min_value=0),
    'pady': NumberParam(0, min_value=0),
    'marginx': NumberParam(0),
    'marginy': NumberParam(0),
    'offsetx': NumberParam(0),
    'offsety': NumberParam(0),
    'bg': BoolParam(False),
    'textcolor': TextParam(''),
    'subcolor': TextParam(''),
    'textgradient': BoolParam(False),
    'line': BoolParam(True),
    'linestyle': EnumParam('gradient', LINE_STYLES),
    'lineanim': EnumParam('slide', LINE_ANIMATIONS),
    'linepos': EnumParam('bottom', LINE_POSITIONS),
    'linelength': NumberParam(100, min_value=0),
    'linewidth': NumberParam(2, min_value=0),
    'linespeed': DurationParam(2),
    'entrance': EnumParam('fade', ENTRANCES),
    'entrancespeed': DurationParam(0.8),
    'delay': DurationParam(0.3),
    'exit': EnumParam('none', EXITS),
    'exitafter': DurationParam(0),
    'exitspeed': DurationParam(0.6),
    'loop': BoolParam(False),
    'hold': DurationParam(4),
    'pause': DurationParam(2),
    **_brand_params(),
}

CTA_PARAMS: Dict[str, OverlayParam] = {
    PRESET_KEY: TextParam('subscribe'),
    'text': TextParam('Subscribe', caption=CaptionMode.OR),
    'sub': TextParam('', caption=CaptionMode.EXPLICIT),
    'size': NumberParam(28, min_value=1),
    'font': EnumParam('display', FONTS),
    'icon': EnumParam('sub', CTA_ICONS),
    'iconanim': EnumParam('bounce', ICON_ANIMATIONS),
    'iconpos': EnumParam('left', ICON_POSITIONS),
    'iconcolor': TextParam(''),
    'iconsize': NumberParam(0, min_value=0),
    'customicon': TextParam(''),
    'textpadx': NumberParam(0, min_value=0),
    'textpady': NumberParam(0, min_value=0),
    'letterspacing': NumberParam(0),
    'lineheight': NumberParam(1.2, min_value=0),
    'decoration': EnumParam('line', DECORATIONS),
    'decorationcolor': TextParam(''),
    'align': EnumParam('center', HALIGNS),
    'valign': EnumParam('bottom', VALIGNS),
    'bg': BoolParam(True),
    'entrance': EnumParam('bounce', ENTRANCES),
    'exit': EnumParam('fade', EXITS),
    'delay': DurationParam(0.5),
    'entrancespeed': DurationParam(0.5),
    'exitspeed': DurationParam(0.4),
    'loop': BoolParam(True),
    'hold': DurationParam(6),
    'pause': DurationParam(20),
    **_brand_params(),
}

SOCIALS_PARAMS: Dict[str, OverlayParam] = {
    'show': ListParam(),
    'handles': TextParam(''),
    'layout': EnumParam('horizontal', LAYOUTS),
    'size': EnumParam('md', SIZES),
    'showtext': BoolParam(True),
    'bg': BoolParam(True),
    'gap': NumberParam(16, min_value=0),
    'spacing': NumberParam(0, min_value=0),
    'borderradius': NumberParam(8, min_value=0),
    'iconcolor': EnumParam('brand', ICON_COLOR_MODES),
    'iconsize': NumberParam(0, min_value=0),
    'iconpadding': NumberParam(0, min_value=0),
    'font': EnumParam('body', FONTS),
    'fontsize': NumberParam(0, min_value=0),
    'fontweight': NumberParam(500, min_value=100, max_value=900, integer=True),
    'letterspacing': NumberParam(0),
    'entrance': EnumParam('stagger', ENTRANCES),
    'speed': DurationParam(0.5),
    'delay': DurationParam(0.3),
    'exit': EnumParam('none', EXITS),
    'exitafter': DurationParam(0),
    'exitspeed': DurationParam(0.5),
    'loop': BoolParam(False),
    'hold': DurationParam(5),
    'pause': DurationParam(3),
    'onebyone': BoolParam(False),
    'each': DurationParam(3),
    'eachpause': DurationParam(0.5),
    'order': EnumParam('default', PLATFORM_ORDERS),
    'priority': TextParam(''),
    'icons': TextParam(''),
    **_panel_params(),
    **_brand_params(),
}

BORDER_PARAMS: Dict[str, OverlayParam] = {
    'shape': EnumParam('rect', SHAPES),
    'style': EnumParam('solid', BORDER_STYLES),
    'animation': EnumParam('dash', BORDER_ANIMATIONS),
    'r': NumberParam(16, min_value=0),
    'thickness': NumberParam(2, min_value=0),
    'dash': NumberParam(0.3, min_value=0.0, max_value=1.0),
    'random': BoolParam(False),
    'glow': BoolParam(True),
    'glowsize': NumberParam(8, min_value=0),
    'opacity': NumberParam(0.85, min_value=0.0, max_value=1.0),
    'speed': DurationParam(4),
    'multicolor': BoolParam(False),
    'colorshift': BoolParam(False),
    'shiftspeed': DurationParam(10),
    **_brand_params(),
}

COUNTER_PARAMS: Dict[str, OverlayParam] = {
    'value': NumberParam(0),
    'label': TextParam('Subscribers'),
    'prefix': TextParam(''),
    'suffix': TextParam(''),
    'icon': EnumParam('none', COUNTER_ICONS),
    'size': NumberParam(48, min_value=1),
    'labelsize': NumberParam(16, min_value=1),
    'font': EnumParam('mono', FONTS),
    'layout': EnumParam('stack', COUNTER_LAYOUTS),
    'align': EnumParam('center', HALIGNS),
    'separator': BoolParam(True),
    'decimals': NumberParam(0, min_value=0, max_value=20, integer=True),
    'notation': EnumParam('standard', NOTATIONS),
    'abbreviate': BoolParam(False),
    'animate': BoolParam(True),
    'duration': DurationParam(2),
    'trend': BoolParam(False),
    'trendcolor': TextParam('#10b981'),
    'counterpadx': NumberParam(0, min_value=0),
    'counterpady': NumberParam(0, min_value=0),
    'width': TextParam('auto'),
    'height': TextParam('auto'),
    'iconcolor': TextParam(''),
    'numbercolor': TextParam(''),
    'bg': BoolParam(True),
    **_panel_params(),
    **_brand_params(),
}

DEFINITIONS: Dict[OverlayKind, OverlayDefinition] = {
    OverlayKind.TEXT: OverlayDefinition(OverlayKind.TEXT, TEXT_PARAMS, has_presets=True),
    OverlayKind.CTA: OverlayDefinition(OverlayKind.CTA, CTA_PARAMS, has_presets=True),
    OverlayKind.SOCIALS: OverlayDefinition(OverlayKind.SOCIALS, SOCIALS_PARAMS),
    OverlayKind.BORDER: OverlayDefinition(OverlayKind.BORDER, BORDER_PARAMS),
    OverlayKind.COUNTER: OverlayDefinition(OverlayKind.COUNTER, COUNTER_PARAMS),
}


def get_definition(kind: OverlayKind) -> OverlayDefinition:
    return DEFINITIONS[kind]
