"""
Input state machine.

Turns raw press/release notifications from the pointer (mouse or touch) and
from the computer keyboard into note events. Repeated presses of a held
computer key are dropped, releases are idempotent, and a held pointer
dragged across keys produces a down/up pair per key.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional

from .keymap import DEFAULT_KEY_MAP, is_modifier_key, parse_token
from .models import KeyboardConfig, Note
from .note_theory import frequency_of, frequency_of_note


@dataclass(frozen=True)
class NoteEvent:
    """A resolved note press or release."""

    note_id: str
    frequency: float
    down: bool


class InputStateMachine:
    """
    Press state for one keyboard instance.

    Attributes:
        key_octave: Octave the lower band of the computer keyboard plays in
            (before ``key_press_offset`` is applied). Unbounded.
        key_press_offset: 0 when the keyboard starts on C, otherwise 1, so
            the computer keyboard lines up with the on-screen octave labels.
        typing_enabled: Whether computer keyboard input produces notes.
        pointer_down: Whether a mouse button or finger is currently held.
    """

    def __init__(self, config: Optional[KeyboardConfig] = None, key_map: Optional[Mapping[int, str]] = None):
        config = config or KeyboardConfig()
        self.key_octave: int = config.starting_key_octave
        self.key_press_offset: int = 0 if config.start_note.letter == "C" else 1
        self.typing_enabled: bool = config.keyboard_enabled
        self.pointer_down: bool = False
        # note the held pointer is currently sounding
        self._pointer_note: Optional[str] = None
        self._key_map: dict[int, str] = dict(DEFAULT_KEY_MAP if key_map is None else key_map)
        # key code -> note it sounded when pressed (None for unmapped keys)
        self._keys_down: dict[int, Optional[Note]] = {}

    @property
    def keys_down(self) -> frozenset[int]:
        return frozenset(self._keys_down.keys())

    # Computer keyboard

    def _resolve(self, key_code: int) -> Optional[Note]:
        parsed = parse_token(self._key_map.get(key_code))
        if parsed is None:
            return None
        name, band = parsed
        octave = self.key_octave + self.key_press_offset + (1 if band == "u" else 0)
        try:
            return Note(letter=name[0], sharp=name.endswith("#"), octave=octave)
        except ValueError:
            # E# and B# tokens
            return None

    def resolve_key(self, key_code: int) -> Optional[str]:
        """Note id a mapped key code currently plays, or None."""
        note = self._resolve(key_code)
        return note.id if note is not None else None

    def on_physical_key_down(self, key_code: int, modifier: bool = False) -> Optional[NoteEvent]:
        """
        Handle a computer key press.

        Returns None when the key is already held, a modifier is involved,
        typing is disabled or the key is not mapped. Callers should only
        suppress the platform's default handling when an event is returned.
        """
        if not self.typing_enabled or modifier or is_modifier_key(key_code):
            return None
        if key_code in self._keys_down:
            return None
        note = self._resolve(key_code)
        self._keys_down[key_code] = note
        if note is None:
            return None
        return NoteEvent(note.id, frequency_of(note), True)

    def on_physical_key_up(self, key_code: int) -> Optional[NoteEvent]:
        """
        Handle a computer key release.

        Always clears the key's held state. Only a release that matches an
        earlier accepted press of a mapped key produces an event, so extra
        releases are no-ops. The event names the note the press sounded,
        even if the typing octave changed in between.
        """
        note = self._keys_down.pop(key_code, None)
        if note is None:
            return None
        return NoteEvent(note.id, frequency_of(note), False)

    # Pointer (mouse and touch)

    def _pointer_event(self, is_key: bool, note_id: Optional[str], down: bool) -> Optional[NoteEvent]:
        if not is_key or not note_id:
            return None
        try:
            frequency = frequency_of_note(note_id)
        except ValueError:
            return None
        return NoteEvent(note_id, frequency, down)

    def on_pointer_down(self, is_key: bool, note_id: Optional[str] = None) -> Optional[NoteEvent]:
        self.pointer_down = True
        event = self._pointer_event(is_key, note_id, True)
        self._pointer_note = event.note_id if event is not None else None
        return event

    def on_pointer_up(self, is_key: bool, note_id: Optional[str] = None) -> Optional[NoteEvent]:
        self.pointer_down = False
        self._pointer_note = None
        return self._pointer_event(is_key, note_id, False)

    def on_pointer_enter(self, is_key: bool, note_id: Optional[str] = None) -> Optional[NoteEvent]:
        if not self.pointer_down:
            return None
        event = self._pointer_event(is_key, note_id, True)
        if event is not None:
            self._pointer_note = event.note_id
        return event

    def on_pointer_leave(self, is_key: bool, note_id: Optional[str] = None) -> Optional[NoteEvent]:
        if not self.pointer_down:
            return None
        event = self._pointer_event(is_key, note_id, False)
        if event is not None and event.note_id == self._pointer_note:
            self._pointer_note = None
        return event

    def reset(self) -> List[NoteEvent]:
        """
        Release every held key and the pointer, e.g. on focus loss.

        Returns:
            Up events for each note that was still sounding, computer keys
            first in press order, then the pointer's note.
        """
        events = [
            NoteEvent(note.id, frequency_of(note), False)
            for note in self._keys_down.values()
            if note is not None
        ]
        if self.pointer_down and self._pointer_note is not None:
            events.append(self._pointer_event(True, self._pointer_note, False))
        self._keys_down.clear()
        self.pointer_down = False
        self._pointer_note = None
        return events

    # Octave controls

    def get_key_octave(self) -> int:
        return self.key_octave

    def set_key_octave(self, octave: int) -> int:
        self.key_octave = int(octave)
        return self.key_octave

    def octave_up(self) -> int:
        self.key_octave += 1
        return self.key_octave

    def octave_down(self) -> int:
        self.key_octave -= 1
        return self.key_octave

    # Key map

    def get_key_map(self) -> dict[int, str]:
        return self._key_map

    def set_key_map(self, overrides: Mapping[int, str]) -> dict[int, str]:
        """Merge ``overrides`` into the active key map in place."""
        self._key_map.update(overrides)
        return self._key_map
