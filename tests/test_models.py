"""Unit tests for the pydantic models."""

import pytest
from pydantic import ValidationError

from qwertykeys.errors import InvalidConfiguration
from qwertykeys.models import KeyboardConfig, KeyboardSettings, Note


def test_note_id_and_name() -> None:
    note = Note(letter="f", sharp=True, octave=2)
    assert note.letter == "F"
    assert note.name == "F#"
    assert note.id == "F#2"
    assert str(note) == "F#2"


@pytest.mark.parametrize("letter", ["E", "B"])
def test_note_rejects_impossible_sharps(letter: str) -> None:
    with pytest.raises(ValidationError):
        Note(letter=letter, sharp=True, octave=4)


def test_note_rejects_unknown_letter() -> None:
    with pytest.raises(ValidationError):
        Note(letter="H", octave=4)


def test_note_from_id_raises_invalid_configuration() -> None:
    with pytest.raises(InvalidConfiguration):
        Note.from_id("Z9")


def test_invalid_configuration_is_a_value_error() -> None:
    assert issubclass(InvalidConfiguration, ValueError)


def test_keyboard_config_defaults() -> None:
    config = KeyboardConfig()
    assert config.start_note.id == "A3"
    assert config.octave_count == 3
    assert config.starting_key_octave == 3
    assert config.keyboard_enabled is True


def test_keyboard_config_key_octave_follows_start_note() -> None:
    assert KeyboardConfig(start_note="C5").starting_key_octave == 5


def test_keyboard_config_rejects_negative_octaves() -> None:
    with pytest.raises(ValidationError):
        KeyboardConfig(octave_count=-1)


def test_settings_defaults() -> None:
    settings = KeyboardSettings()
    assert settings.start_note == "A3"
    assert settings.octaves == 3
    assert settings.width is None and settings.height is None
    assert settings.white_key_colour == "#fff"
    assert settings.black_key_colour == "#000"
    assert settings.active_colour == "yellow"
    assert settings.border_colour == "#000"
    assert settings.keyboard_layout == "en"
    assert settings.musical_typing is True
    assert settings.key_octave == 3


def test_settings_accept_camel_case_names() -> None:
    settings = KeyboardSettings.model_validate({
        "startNote": "c4",
        "whiteKeyColour": "#eee",
        "musicalTyping": False,
        "keyOctave": 2,
    })
    assert settings.start_note == "C4"
    assert settings.white_key_colour == "#eee"
    assert settings.musical_typing is False
    assert settings.key_octave == 2


def test_settings_to_config() -> None:
    config = KeyboardSettings(start_note="D2", octaves=2, musical_typing=False).to_config()
    assert config.start_note.id == "D2"
    assert config.octave_count == 2
    assert config.starting_key_octave == 2
    assert config.keyboard_enabled is False


@pytest.mark.parametrize(
    "data",
    [{"octaves": 0}, {"width": 0}, {"height": -5}, {"start_note": "X3"}, {"start_note": "E#3"}],
)
def test_settings_reject_bad_values(data: dict) -> None:
    with pytest.raises(ValidationError):
        KeyboardSettings.model_validate(data)
