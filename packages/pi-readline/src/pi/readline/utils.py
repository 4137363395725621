"""Display-width measurement for prompts.

Prompts may carry ANSI styling and non-ASCII text, so the column the
cursor lands on is computed from the prompt's visible width rather than
its string length.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI sequences, OSC 8 hyperlinks and APC payloads occupy no columns
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[A-Za-z]"
    r"|\x1b\]8;;[^\x07]*\x07"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 256


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


def _cluster_width(cluster: str) -> int:
    """Terminal columns taken by one grapheme cluster."""
    first = cluster[0]
    cp = ord(first)
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        return 0

    if len(cluster) > 1:
        # VS16, ZWJ joiners, skin tones and flags render as a wide emoji
        for ch in cluster[1:]:
            if ord(ch) in (0xFE0F, 0x200D) or 0x1F3FB <= ord(ch) <= 0x1F3FF:
                return 2
        if 0x1F1E6 <= cp <= 0x1F1FF or cp >= 0x1F000:
            return 2
        if unicodedata.category(first) in ("Mn", "Me", "Cf"):
            return 0

    return max(_wcwidth.wcwidth(first), 0)


def visible_width(text: str) -> int:
    """Number of terminal columns *text* occupies once printed."""
    if not text:
        return 0

    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    width = sum(_cluster_width(g) for g in grapheme.graphemes(stripped))
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[stripped] = width
    return width
