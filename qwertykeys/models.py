import re
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Literal, Optional

from .errors import InvalidConfiguration

NATURAL_NOTES = ("C", "D", "E", "F", "G", "A", "B")
SHARP_NOTES = ("C", "D", "F", "G", "A")

_NOTE_ID_RE = re.compile(r"^\s*([A-Ga-g])(#?)(\d+)\s*$")


class Note(BaseModel):
    """A single pitch: natural letter, optional sharp and octave number."""
    model_config = ConfigDict(frozen=True)

    letter: Literal["A", "B", "C", "D", "E", "F", "G"]
    sharp: bool = False
    octave: int

    @field_validator("letter", mode="before")
    @classmethod
    def _upper_letter(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_sharp(self) -> "Note":
        if self.sharp and self.letter not in SHARP_NOTES:
            raise ValueError(f"{self.letter}# is not a key on the keyboard")
        return self

    @property
    def name(self) -> str:
        """Pitch-class name without octave, e.g. ``"C#"``."""
        return self.letter + ("#" if self.sharp else "")

    @property
    def id(self) -> str:
        return f"{self.name}{self.octave}"

    def __str__(self) -> str:
        return self.id

    @classmethod
    def from_id(cls, note_id: str) -> "Note":
        """Parse a note id such as ``"A3"`` or ``"c#4"``."""
        if not isinstance(note_id, str):
            raise InvalidConfiguration(f"Note id must be a string, got {note_id!r}")
        match = _NOTE_ID_RE.match(note_id)
        if match is None:
            raise InvalidConfiguration(f"Unrecognised note {note_id!r}")
        letter, sharp, octave = match.groups()
        letter = letter.upper()
        if sharp and letter not in SHARP_NOTES:
            raise InvalidConfiguration(f"Unrecognised note {note_id!r}: {letter} has no sharp")
        return cls(letter=letter, sharp=bool(sharp), octave=int(octave))


class KeyDescriptor(BaseModel):
    """One drawable key produced by the layout engine.

    ``sequence_index`` is the position among white keys; a black key carries
    the index of the white key to its left. The pixel fields are only filled
    in when the layout was computed for a concrete width.
    """
    model_config = ConfigDict(frozen=True)

    note_id: str
    color: Literal["white", "black"]
    width_units: float = 1.0
    sequence_index: int = Field(ge=0)
    octave: int
    x: Optional[float] = None
    width_px: Optional[float] = None
    height_px: Optional[float] = None

    @property
    def is_black(self) -> bool:
        return self.color == "black"


class KeyboardConfig(BaseModel):
    start_note: Note = Note(letter="A", octave=3)
    octave_count: int = Field(default=3, ge=0)
    starting_key_octave: Optional[int] = None
    keyboard_enabled: bool = True

    @field_validator("start_note", mode="before")
    @classmethod
    def _parse_start_note(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Note.from_id(value)
        return value

    @model_validator(mode="after")
    def _default_key_octave(self) -> "KeyboardConfig":
        if self.starting_key_octave is None:
            self.starting_key_octave = self.start_note.octave
        return self


class KeyboardSettings(BaseModel):
    """Host-facing keyboard options.

    Accepts both snake_case names and the camelCase names used by web hosts
    (``startNote``, ``whiteKeyColour``, ...).
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    start_note: str = Field(default="A3", alias="startNote")
    octaves: int = Field(default=3, ge=1)
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    margin: float = Field(default=0, ge=0)
    white_key_colour: str = Field(default="#fff", alias="whiteKeyColour")
    black_key_colour: str = Field(default="#000", alias="blackKeyColour")
    active_colour: str = Field(default="yellow", alias="activeColour")
    border_colour: str = Field(default="#000", alias="borderColour")
    keyboard_layout: str = Field(default="en", alias="keyboardLayout")
    musical_typing: bool = Field(default=True, alias="musicalTyping")
    key_octave: Optional[int] = Field(default=None, alias="keyOctave")

    @field_validator("start_note", mode="before")
    @classmethod
    def _normalise_start_note(cls, value: Any) -> Any:
        if value is None:
            return "A3"
        return Note.from_id(value).id

    @model_validator(mode="after")
    def _default_key_octave(self) -> "KeyboardSettings":
        if self.key_octave is None:
            self.key_octave = self.start.octave
        return self

    @property
    def start(self) -> Note:
        return Note.from_id(self.start_note)

    def to_config(self) -> KeyboardConfig:
        return KeyboardConfig(
            start_note=self.start,
            octave_count=self.octaves,
            starting_key_octave=self.key_octave,
            keyboard_enabled=self.musical_typing,
        )
