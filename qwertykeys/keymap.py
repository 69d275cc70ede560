"""
Physical keyboard to note mapping.

Key codes are browser-style ``keyCode`` integers (65 = "A"). Each maps to a
relative note token such as ``"C#l"``: the trailing ``l`` means the lower
octave band and ``u`` the band above, so two rows of letters cover two
octaves.
"""

import re
from typing import Mapping, Optional

# QWERTY: home row for naturals, the row above for sharps.
DEFAULT_KEY_MAP: dict[int, str] = {
    65: "Cl",   # A
    87: "C#l",  # W
    83: "Dl",   # S
    69: "D#l",  # E
    68: "El",   # D
    70: "Fl",   # F
    84: "F#l",  # T
    71: "Gl",   # G
    89: "G#l",  # Y
    90: "G#l",  # Z (QWERTZ)
    72: "Al",   # H
    85: "A#l",  # U
    74: "Bl",   # J
    75: "Cu",   # K
    79: "C#u",  # O
    76: "Du",   # L
    80: "D#u",  # P
    59: "Eu",   # ; (Firefox)
    186: "Eu",  # ;
    222: "Fu",  # '
    221: "F#u", # ]
    220: "Gu",  # \
}

KEY_MAPS: dict[str, dict[int, str]] = {
    "en": DEFAULT_KEY_MAP,
}
DEFAULT_LAYOUT = "en"

# Shift, Control, Alt, left/right Meta, context menu, Firefox Meta
MODIFIER_KEY_CODES = frozenset({16, 17, 18, 91, 92, 93, 224})

_TOKEN_RE = re.compile(r"^([A-G]#?)([lu])$")


def normalise_layout(locale: Optional[str]) -> str:
    """Reduce a locale tag like ``"en-GB"`` to a registered layout name."""
    if not locale:
        return DEFAULT_LAYOUT
    language = re.split(r"[-_]", str(locale).strip().lower(), maxsplit=1)[0]
    return language if language in KEY_MAPS else DEFAULT_LAYOUT


def key_map_for_layout(locale: Optional[str] = None) -> dict[int, str]:
    return dict(KEY_MAPS[normalise_layout(locale)])


def merge_key_maps(base: Mapping[int, str], overrides: Mapping[int, str]) -> dict[int, str]:
    """Return a new map with ``overrides`` applied on top of ``base``."""
    merged = dict(base)
    merged.update(overrides)
    return merged


def parse_token(token: object) -> Optional[tuple[str, str]]:
    """Split ``"C#u"`` into ``("C#", "u")``; None for anything malformed."""
    if not isinstance(token, str):
        return None
    match = _TOKEN_RE.match(token)
    if match is None:
        return None
    return match.group(1), match.group(2)


def is_modifier_key(key_code: int) -> bool:
    return key_code in MODIFIER_KEY_CODES
