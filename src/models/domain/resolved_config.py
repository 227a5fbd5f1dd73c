"""Resolved overlay configuration"""

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping


class ResolvedConfig(Mapping):
    """
    Immutable, fully-defaulted parameter set of one overlay instance.

    Every key of the overlay's parameter table has a typed value.
    Supports both mapping and attribute access:

        cfg["hold"]   # 4.0
        cfg.hold      # 4.0

    Two configs are equal when their key/value pairs are equal.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any]):
        object.__setattr__(self, "_values", MappingProxyType(dict(values)))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "_values":
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"ResolvedConfig has no parameter '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ResolvedConfig is immutable")

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._values.items(), key=lambda kv: kv[0])))

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict copy with tuples rendered as lists (JSON friendly)"""
        return {k: list(v) if isinstance(v, tuple) else v for k, v in self._values.items()}

    def __repr__(self) -> str:
        return f"ResolvedConfig({dict(self._values)!r})"
