"""
Parameter Resolver

Merges built-in defaults, a named preset and raw overrides into one
immutable ResolvedConfig. Never raises on bad input: unusable values fall
through to the next layer.
"""

from typing import Any, Dict, Mapping, Optional

from models.domain.resolved_config import ResolvedConfig
from models.enums import CaptionMode, OverlayKind
from models.overlay_params import OverlayParam, TextParam
from managers.preset_manager import PresetManager
from services.overlay_definitions import get_definition, PRESET_KEY
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.RESOLVER)

EMPTY_PRESET = 'custom'


def _select_preset(
    raw: Mapping[str, str],
    defaults: Mapping[str, OverlayParam],
    presets: Mapping[str, Mapping[str, Any]],
) -> tuple:
    """Return (preset name recorded in the config, fragment applied)"""
    if PRESET_KEY not in defaults:
        return None, {}

    requested = raw.get(PRESET_KEY)
    if OverlayParam.is_empty(requested):
        requested = defaults[PRESET_KEY].default
    requested = requested.strip()

    fragment = presets.get(requested)
    if fragment is None:
        log.debug("Unknown preset, using defaults", preset=requested)
        return EMPTY_PRESET, {}

    inert = [key for key in fragment if key not in defaults]
    if inert:
        log.debug("Ignoring preset keys without a default", preset=requested, keys=inert)

    return requested, fragment


def _first_non_empty(param: OverlayParam, *candidates: Any) -> Optional[Any]:
    for candidate in candidates:
        if OverlayParam.is_empty(candidate):
            continue
        value = param.coerce(candidate)
        if value is not None and value != '':
            return value
    return None


def _resolve_caption(key: str, param: TextParam, raw: Mapping[str, str], fragment: Mapping[str, Any]) -> str:
    """Caption fallbacks: OR skips empty values, EXPLICIT honors a present empty override"""
    if param.caption is CaptionMode.EXPLICIT and key in raw:
        return raw[key]

    if param.caption is CaptionMode.EXPLICIT:
        value = _first_non_empty(param, fragment.get(key))
    else:
        value = _first_non_empty(param, raw.get(key), fragment.get(key))

    return param.fallback if value is None else value


def _resolve_generic(key: str, param: OverlayParam, raw: Mapping[str, str], fragment: Mapping[str, Any]) -> Any:
    """override (present, non-empty, parseable) > preset > default"""
    raw_value = raw.get(key)
    if not OverlayParam.is_empty(raw_value):
        value = param.coerce(raw_value)
        if value is not None:
            return value
        log.debug("Invalid override, falling back", key=key, value=raw_value)

    if key in fragment:
        value = param.coerce(fragment[key])
        if value is not None:
            return value
        log.debug("Invalid preset value, using default", key=key, value=fragment[key])

    return param.default


def resolve(
    raw: Mapping[str, str],
    defaults: Mapping[str, OverlayParam],
    presets: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> ResolvedConfig:
    """
    Resolve raw parameters into a fully-defaulted config

    Args:
        raw: Raw string parameters (absent keys are simply missing)
        defaults: Parameter table of the overlay kind
        presets: Named preset fragments of the overlay kind

    Returns:
        ResolvedConfig with a typed value for every key of the table

    Example:
        cfg = resolve({"preset": "brb", "size": "60"}, TEXT_PARAMS, presets)
        cfg.size   # 60.0 (override)
        cfg.text   # "Be Right Back" (preset)
        cfg.pad    # 28 (default)
    """
    presets = presets or {}
    preset_name, fragment = _select_preset(raw, defaults, presets)

    values: Dict[str, Any] = {}
    for key, param in defaults.items():
        if key == PRESET_KEY:
            values[key] = preset_name
        elif isinstance(param, TextParam) and param.caption is not CaptionMode.GENERIC:
            values[key] = _resolve_caption(key, param, raw, fragment)
        else:
            values[key] = _resolve_generic(key, param, raw, fragment)

    unknown = [key for key in raw if key not in defaults]
    if unknown:
        log.debug("Ignoring unknown parameters", keys=unknown)

    return ResolvedConfig(values)


class ParameterResolver:
    """
    Resolves raw parameters for a given overlay kind

    Example:
        resolver = ParameterResolver(config.preset_manager)
        cfg = resolver.resolve(OverlayKind.CTA, {"preset": "like"})
        cfg.iconanim   # "shake"
    """

    def __init__(self, preset_manager: PresetManager):
        self.preset_manager = preset_manager

    def resolve(self, kind: OverlayKind, raw: Mapping[str, str]) -> ResolvedConfig:
        definition = get_definition(kind)
        presets = self.preset_manager.presets_for(kind.value) if definition.has_presets else {}
        config = resolve(raw, definition.params, presets)
        log.debug(f"Resolved {kind.value} parameters", preset=config.get(PRESET_KEY), keys=len(config))
        return config
