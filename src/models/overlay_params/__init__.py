"""Overlay parameter definitions"""

from .base import OverlayParam
from .number_param import NumberParam, DurationParam
from .bool_param import BoolParam
from .enum_param import EnumParam
from .text_param import TextParam
from .list_param import ListParam, split_list

__all__ = [
    "OverlayParam",
    "NumberParam",
    "DurationParam",
    "BoolParam",
    "EnumParam",
    "TextParam",
    "ListParam",
    "split_list",
]
