"""Match parsed property addresses against the caller's own property list."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional


@dataclass
class KnownProperty:
    id: str
    name: str = ""
    address: str = ""


_non_word_re = re.compile(r"[^a-z0-9\s]")
_street_number_re = re.compile(r"^\d+")


def normalize(text: str) -> str:
    return _non_word_re.sub("", (text or "").lower())


def _street_words(text: str) -> List[str]:
    return [w for w in text.split() if len(w) > 2 and not w.isdigit()]


def _same_street(hint: str, addr: str) -> bool:
    hint_num = _street_number_re.match(hint)
    addr_num = _street_number_re.match(addr)
    if not (hint_num and addr_num and hint_num.group() == addr_num.group()):
        return False
    addr_words = _street_words(addr)
    return any(
        aw in w or w in aw for w in _street_words(hint) for aw in addr_words
    )


def _contains_either_way(a: str, b: str) -> bool:
    return bool(a and b) and (a in b or b in a)


def match_property(
    hint: str, properties: Iterable[KnownProperty]
) -> Optional[KnownProperty]:
    """Return the first property whose address or name matches ``hint``.

    A match is a shared street number plus an overlapping street word, or one
    normalised string containing the other.  Blank names and addresses never
    match.
    """
    h = normalize(hint).strip()
    if not h:
        return None
    for prop in properties:
        addr = normalize(prop.address).strip()
        name = normalize(prop.name).strip()
        if addr and _same_street(h, addr):
            return prop
        if _contains_either_way(h, addr) or _contains_either_way(h, name):
            return prop
    return None


def load_properties(path: Path) -> List[KnownProperty]:
    """Read ``[{"id": ..., "name": ..., "address": ...}, ...]`` from JSON."""
    with Path(path).open(encoding="utf-8") as f:
        raw = json.load(f)
    return [
        KnownProperty(
            id=str(p.get("id", "")),
            name=p.get("name", "") or "",
            address=p.get("address", "") or "",
        )
        for p in raw
    ]
