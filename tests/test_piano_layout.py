"""Unit tests for the key layout engine."""

import pytest

from qwertykeys.errors import InvalidConfiguration
from qwertykeys.models import KeyboardConfig
from qwertykeys.piano_layout import (
    black_key_offset,
    black_key_width,
    black_keys,
    create_piano_layout,
    keyboard_width,
    total_white_keys,
    white_key_width,
    white_keys,
)


def _ids(keys):
    return [key.note_id for key in keys]


def test_one_octave_from_c4() -> None:
    keys = create_piano_layout(KeyboardConfig(start_note="C4", octave_count=1))
    assert len(keys) == 12
    assert len(white_keys(keys)) == 7
    assert len(black_keys(keys)) == 5
    whites = white_keys(keys)
    assert whites[0].note_id == "C4"
    assert whites[-1].note_id == "B4"
    assert _ids(keys) == [
        "C4", "C#4", "D4", "D#4", "E4", "F4", "F#4", "G4", "G#4", "A4", "A#4", "B4",
    ]


def test_two_octaves_from_a3_roll_over_at_c() -> None:
    keys = create_piano_layout(KeyboardConfig(start_note="A3", octave_count=2))
    assert _ids(white_keys(keys)) == [
        "A3", "B3", "C4", "D4", "E4", "F4", "G4",
        "A4", "B4", "C5", "D5", "E5", "F5", "G5",
    ]
    assert _ids(black_keys(keys)) == [
        "A#3", "C#4", "D#4", "F#4", "G#4", "A#4", "C#5", "D#5", "F#5",
    ]


def test_octave_does_not_advance_on_cycle_wrap() -> None:
    # The 8th white key is A again but still in octave 4; the octave moved at C.
    keys = white_keys(create_piano_layout(KeyboardConfig(start_note="A3", octave_count=2)))
    assert keys[7].note_id == "A4"
    assert keys[7].octave == 4
    assert keys[2].octave == 4
    assert keys[1].octave == 3


def test_start_on_e_skips_missing_sharps() -> None:
    keys = create_piano_layout(KeyboardConfig(start_note="E4", octave_count=1))
    assert _ids(white_keys(keys)) == ["E4", "F4", "G4", "A4", "B4", "C5", "D5"]
    assert _ids(black_keys(keys)) == ["F#4", "G#4", "A#4", "C#5"]


def test_no_black_key_after_last_white() -> None:
    keys = create_piano_layout(KeyboardConfig(start_note="C4", octave_count=1))
    assert keys[-1].note_id == "B4"
    keys = create_piano_layout(KeyboardConfig(start_note="D2", octave_count=1))
    assert keys[-1].note_id == "C3"
    assert not keys[-1].is_black


def test_zero_octaves_is_empty() -> None:
    assert create_piano_layout(KeyboardConfig(start_note="C4", octave_count=0)) == []


def test_three_octaves_default_has_21_white_keys() -> None:
    config = KeyboardConfig()
    assert total_white_keys(config) == 21
    keys = create_piano_layout(config)
    assert len(white_keys(keys)) == 21
    assert len(black_keys(keys)) == 14  # no G# after the final G6


def test_descriptor_fields() -> None:
    keys = create_piano_layout(KeyboardConfig(start_note="C4", octave_count=1))
    c, c_sharp, d = keys[0], keys[1], keys[2]
    assert (c.color, c.width_units, c.sequence_index) == ("white", 1.0, 0)
    assert (c_sharp.color, c_sharp.width_units, c_sharp.sequence_index) == ("black", 0.5, 0)
    assert d.sequence_index == 1
    assert c.x is None and c.width_px is None


def test_white_sequence_indices_are_contiguous() -> None:
    keys = white_keys(create_piano_layout(KeyboardConfig(start_note="G1", octave_count=4)))
    assert [key.sequence_index for key in keys] == list(range(28))


def test_descriptors_are_immutable() -> None:
    key = create_piano_layout(KeyboardConfig(start_note="C4", octave_count=1))[0]
    with pytest.raises(Exception):
        key.note_id = "D4"


def test_pixel_hints() -> None:
    keys = create_piano_layout(KeyboardConfig(), total_width=600, height=150)
    whites = white_keys(keys)
    blacks = black_keys(keys)
    assert whites[0].width_px == 27
    assert whites[2].x == 56
    assert whites[0].height_px == 150
    assert blacks[0].width_px == 13
    assert blacks[0].x == 21
    assert blacks[0].height_px == pytest.approx(100)


def test_width_helpers() -> None:
    assert white_key_width(600, 21) == 27
    assert black_key_width(27) == 13
    assert black_key_offset(27, 0) == 21
    assert black_key_offset(27, 3) == 105
    assert keyboard_width(21, 27) == 590


@pytest.mark.parametrize("width", [0, -10])
def test_non_positive_width_raises(width: float) -> None:
    with pytest.raises(InvalidConfiguration):
        create_piano_layout(KeyboardConfig(), total_width=width)


def test_too_narrow_width_raises() -> None:
    with pytest.raises(InvalidConfiguration):
        white_key_width(10, 21)
    assert white_key_width(42, 21) == 1


def test_non_positive_height_raises() -> None:
    with pytest.raises(InvalidConfiguration):
        create_piano_layout(KeyboardConfig(), total_width=600, height=0)
