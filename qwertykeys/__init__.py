"""
QwertyKeys - Playable On-Screen Piano Keyboard

QwertyKeys lays out a single-row piano keyboard starting on any note, turns
mouse, touch and computer-keyboard input into note events, and reports each
note with its equal-tempered frequency. It never makes sound itself; hosts
receive ``(note_id, frequency)`` callbacks and do what they like with them.
"""

__version__ = "0.10.0"
__author__ = "QwertyKeys Project"

from .errors import InvalidConfiguration
from .models import Note, KeyDescriptor, KeyboardConfig, KeyboardSettings
from .note_theory import frequency_of, frequency_of_note, order_notes, parse_note
from .piano_layout import create_piano_layout
from .keymap import DEFAULT_KEY_MAP, merge_key_maps
from .input_state import InputStateMachine, NoteEvent
from .render import RenderAdapter, RecordingAdapter
from .keyboard import QwertyKeyboard

__all__ = [
    "InvalidConfiguration",
    "Note",
    "KeyDescriptor",
    "KeyboardConfig",
    "KeyboardSettings",
    "frequency_of",
    "frequency_of_note",
    "order_notes",
    "parse_note",
    "create_piano_layout",
    "DEFAULT_KEY_MAP",
    "merge_key_maps",
    "InputStateMachine",
    "NoteEvent",
    "RenderAdapter",
    "RecordingAdapter",
    "QwertyKeyboard",
]
