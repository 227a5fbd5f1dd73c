"""
Query string ingestion

Turns a URL-style query string into RawParams (flat str -> str mapping)
and parses `platform:value` pair lists.
"""

from typing import Dict, Mapping, Optional, Union
from urllib.parse import parse_qsl

RawParams = Dict[str, str]


def parse_query(query: Union[str, Mapping[str, str], None]) -> RawParams:
    """
    Parse a query string into raw parameters

    Percent-escapes and '+' are decoded. When a key repeats, the first
    occurrence wins. Blank values are kept so that callers can
    distinguish "present but empty" from "absent".

    Args:
        query: "?text=Hi&loop=1", "text=Hi", or an existing mapping

    Example:
        parse_query("?preset=brb&sub=")   # {"preset": "brb", "sub": ""}
    """
    if query is None:
        return {}
    if isinstance(query, Mapping):
        return {str(k): str(v) for k, v in query.items()}

    raw: RawParams = {}
    for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        raw.setdefault(key, value)
    return raw


def parse_pairs(text: Optional[str]) -> Dict[str, str]:
    """
    Parse a comma list of `key:value` pairs

    Malformed entries (missing colon, empty key or value) are dropped.
    Later duplicates override earlier ones.

    Example:
        parse_pairs("github:me, twitter:@me, broken")
        # {"github": "me", "twitter": "@me"}
    """
    pairs: Dict[str, str] = {}
    if not text:
        return pairs
    for item in text.split(","):
        key, sep, value = item.partition(":")
        key, value = key.strip(), value.strip()
        if not sep or not key or not value:
            continue
        pairs[key] = value
    return pairs
