"""Sequenced reveal item"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SequencedItem:
    """
    One enumerable item of a sequenced reveal (a social platform, etc.)

    Owned by the reveal controller, which replaces items on every
    visibility change; consumers only ever see snapshots.
    """
    identity: str
    display_text: str
    visible: bool = False
