"""
Piano Layout Generator Module

This module produces the ordered list of white and black keys for a
single-row piano keyboard starting on any natural note, together with the
pixel hints a renderer needs to place them.
"""

import math
from typing import List, Optional

from .errors import InvalidConfiguration
from .models import NATURAL_NOTES, SHARP_NOTES, KeyboardConfig, KeyDescriptor
from .note_theory import order_notes

WHITE_KEYS_PER_OCTAVE = len(NATURAL_NOTES)
BLACK_KEY_WIDTH_UNITS = 0.5
BLACK_KEY_HEIGHT_RATIO = 1.5


def total_white_keys(config: KeyboardConfig) -> int:
    return config.octave_count * WHITE_KEYS_PER_OCTAVE


def white_key_width(total_width: float, number_of_white_keys: int) -> int:
    """Width of one white key, reserving a 1px border gap per key."""
    if total_width is None or total_width <= 0:
        raise InvalidConfiguration(f"Keyboard width must be positive, got {total_width!r}")
    if number_of_white_keys <= 0:
        return 0
    width = math.floor((total_width - number_of_white_keys) / number_of_white_keys)
    if width < 1:
        raise InvalidConfiguration(
            f"Keyboard width {total_width!r} is too narrow for {number_of_white_keys} white keys"
        )
    return width


def black_key_width(white_width: int) -> int:
    return math.floor(white_width / 2)


def black_key_offset(white_width: int, sequence_index: int) -> int:
    """Left edge of a black key sitting after white key ``sequence_index``."""
    return math.floor(((white_width + 1) * (sequence_index + 1)) - (black_key_width(white_width) / 2))


def keyboard_width(number_of_white_keys: int, white_width: int) -> int:
    """Outer width of the key strip including borders."""
    return number_of_white_keys * (white_width + 1) + 2


def create_piano_layout(
    config: KeyboardConfig,
    total_width: Optional[float] = None,
    height: Optional[float] = None,
) -> List[KeyDescriptor]:
    """
    Generate the keys of a piano keyboard in left-to-right drawing order.

    Each white key is followed by the black key that sits to its right, if
    any. Octave numbers advance whenever the letter C comes round again, so a
    keyboard starting on A3 runs A3, B3, C4, ... exactly like a real piano.

    Args:
        config: Start note and octave count.
        total_width: Width available for the whole keyboard. When given,
            each descriptor also carries ``x`` and ``width_px``.
        height: Height of the white keys. Black keys are ``height / 1.5``.

    Returns:
        List of KeyDescriptor objects, empty when ``octave_count`` is 0.
    """
    number_of_white_keys = total_white_keys(config)
    if number_of_white_keys == 0:
        return []
    if height is not None and height <= 0:
        raise InvalidConfiguration(f"Keyboard height must be positive, got {height!r}")

    start_letter = config.start_note.letter
    white_notes = order_notes(NATURAL_NOTES, start_letter)
    notes_with_sharps = order_notes(SHARP_NOTES, start_letter, strict=False)

    white_width = None
    if total_width is not None:
        white_width = white_key_width(total_width, number_of_white_keys)
    black_height = height / BLACK_KEY_HEIGHT_RATIO if height is not None else None

    keys: List[KeyDescriptor] = []
    octave = config.start_note.octave
    letter_index = 0
    for i in range(number_of_white_keys):
        if i % WHITE_KEYS_PER_OCTAVE == 0:
            letter_index = 0
        letter = white_notes[letter_index]

        # Octave numbering follows C regardless of the starting letter
        if letter == "C" and i != 0:
            octave += 1

        keys.append(KeyDescriptor(
            note_id=f"{letter}{octave}",
            color="white",
            width_units=1.0,
            sequence_index=i,
            octave=octave,
            x=i * (white_width + 1) if white_width is not None else None,
            width_px=white_width,
            height_px=height,
        ))

        if i != number_of_white_keys - 1:
            for sharp in notes_with_sharps:
                if sharp != letter:
                    continue
                keys.append(KeyDescriptor(
                    note_id=f"{letter}#{octave}",
                    color="black",
                    width_units=BLACK_KEY_WIDTH_UNITS,
                    sequence_index=i,
                    octave=octave,
                    x=black_key_offset(white_width, i) if white_width is not None else None,
                    width_px=black_key_width(white_width) if white_width is not None else None,
                    height_px=black_height,
                ))
        letter_index += 1

    return keys


def white_keys(keys: List[KeyDescriptor]) -> List[KeyDescriptor]:
    return [key for key in keys if not key.is_black]


def black_keys(keys: List[KeyDescriptor]) -> List[KeyDescriptor]:
    return [key for key in keys if key.is_black]
