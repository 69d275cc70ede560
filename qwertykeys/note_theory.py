"""
Note theory helpers.

Pure functions for turning note names into equal-tempered frequencies and
for rotating note cycles so a keyboard can start on any letter.
"""

from typing import Sequence, Union

from .errors import InvalidConfiguration
from .models import NATURAL_NOTES, Note

# Chromatic order used for key numbering; starts on A like a piano's lowest key.
CHROMATIC_FROM_A = ("A", "A#", "B", "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#")

A4_FREQUENCY = 440.0
A4_KEY_NUMBER = 49

NoteLike = Union[Note, str]


def parse_note(note: NoteLike) -> Note:
    """Return ``note`` as a :class:`Note`, parsing ids such as ``"C#4"``."""
    if isinstance(note, Note):
        return note
    return Note.from_id(note)


def key_number(note: NoteLike) -> int:
    """
    Return the 1-based piano key number of a note (A0 = 1, A4 = 49, C8 = 88).

    A, A# and B sit above C in octave naming, so they are counted one octave
    higher than the other pitch classes with the same octave number.
    """
    parsed = parse_note(note)
    index = CHROMATIC_FROM_A.index(parsed.name)
    if index < 3:
        return index + 12 + ((parsed.octave - 1) * 12) + 1
    return index + ((parsed.octave - 1) * 12) + 1


def frequency_of(note: NoteLike) -> float:
    """Frequency in hertz of ``note`` in 12-tone equal temperament (A4 = 440 Hz)."""
    return A4_FREQUENCY * 2 ** ((key_number(note) - A4_KEY_NUMBER) / 12)


def frequency_of_note(note_id: str) -> float:
    return frequency_of(parse_note(note_id))


def order_notes(notes: Sequence[str], start_letter: str, strict: bool = True) -> list[str]:
    """
    Rotate ``notes`` so the result begins at ``start_letter``.

    Args:
        notes: Note letters in their natural order.
        start_letter: Letter the rotated cycle should begin with. Only the
            first character is considered, so a full note id may be passed.
        strict: When True, a start letter missing from ``notes`` raises.
            Otherwise the order is left unchanged, which is what the
            sharp-bearing cycle needs for E and B.

    Returns:
        A new list holding a cyclic rotation of ``notes``.

    Raises:
        InvalidConfiguration: If ``start_letter`` is not a natural note
            letter, or ``strict`` and it is missing from ``notes``.
    """
    letter = start_letter[:1].upper() if start_letter else ""
    if letter not in NATURAL_NOTES:
        raise InvalidConfiguration(f"Unrecognised start note {start_letter!r}")
    count = len(notes)
    offset = 0
    for i, note in enumerate(notes):
        if note == letter:
            offset = i
            break
    else:
        if strict:
            raise InvalidConfiguration(f"{letter} is not in {list(notes)}")
    return [notes[(i + offset) % count] for i in range(count)]
