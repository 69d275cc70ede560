"""
Keyboard facade.

Ties settings, layout, input handling and a rendering adapter together and
reports every note press and release to the host through two callbacks.
"""

from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from . import __version__
from .errors import InvalidConfiguration
from .input_state import InputStateMachine, NoteEvent
from .keymap import key_map_for_layout, merge_key_maps
from .models import KeyboardSettings, KeyDescriptor
from .note_theory import frequency_of_note
from .piano_layout import create_piano_layout, total_white_keys
from .render import RenderAdapter

NoteCallback = Callable[[str, float], None]

DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 150


def _ignore_note(note_id: str, frequency: float) -> None:
    return None


def build_settings(settings: Union[KeyboardSettings, Mapping[str, Any], None] = None, **overrides) -> KeyboardSettings:
    """Validate host options, raising InvalidConfiguration on bad input."""
    if isinstance(settings, KeyboardSettings):
        data = settings.model_dump()
    else:
        data = dict(settings or {})
    data.update(overrides)
    try:
        return KeyboardSettings.model_validate(data)
    except ValidationError as e:
        raise InvalidConfiguration(f"Invalid keyboard settings: {e}") from e


class QwertyKeyboard:
    """
    An on-screen piano keyboard playable with mouse, touch and computer keys.

    Usage:
        >>> kb = QwertyKeyboard({"startNote": "C4", "octaves": 1},
        ...                     on_note_down=lambda n, f: print(n, f))
        >>> kb.key_down(65)  # "A" plays C4
        True

    Attributes:
        settings: Validated host options.
        keys: Key descriptors of the current layout, left to right.
        state: Input state machine owned by this keyboard.
        adapter: Optional renderer receiving the layout and highlight changes.
    """

    version = __version__

    def __init__(
        self,
        settings: Union[KeyboardSettings, Mapping[str, Any], None] = None,
        *,
        on_note_down: Optional[NoteCallback] = None,
        on_note_up: Optional[NoteCallback] = None,
        adapter: Optional[RenderAdapter] = None,
        key_map: Optional[Mapping[int, str]] = None,
        **overrides,
    ):
        self.settings = build_settings(settings, **overrides)
        self.on_note_down: NoteCallback = on_note_down or _ignore_note
        self.on_note_up: NoteCallback = on_note_up or _ignore_note
        self.adapter = adapter
        self.config = self.settings.to_config()

        base_map = key_map_for_layout(self.settings.keyboard_layout)
        if key_map:
            base_map = merge_key_maps(base_map, key_map)
        self.state = InputStateMachine(self.config, base_map)

        self.width, self.height = self._initial_size()
        self.keys: list[KeyDescriptor] = []
        self.resize(self.width, self.height)

    def _initial_size(self) -> tuple[float, float]:
        width, height = self.settings.width, self.settings.height
        container_size = getattr(self.adapter, "container_size", None)
        if (width is None or height is None) and callable(container_size):
            container_w, container_h = container_size()
            width = width if width is not None else container_w
            height = height if height is not None else container_h
        return (width or DEFAULT_WIDTH, height or DEFAULT_HEIGHT)

    def resize(self, width: float, height: float) -> list[KeyDescriptor]:
        """Recompute the layout for a new size and hand it to the adapter."""
        if width <= 0 or height <= 0:
            raise InvalidConfiguration(f"Keyboard size must be positive, got {width}x{height}")
        self.width, self.height = width, height
        self.keys = create_piano_layout(self.config, total_width=width, height=height)
        if self.adapter is not None:
            self.adapter.render(self.keys, width, height)
        return self.keys

    @property
    def total_white_keys(self) -> int:
        return total_white_keys(self.config)

    def _dispatch(self, event: Optional[NoteEvent]) -> bool:
        if event is None:
            return False
        if self.adapter is not None:
            self.adapter.set_key_visual_state(event.note_id, event.down)
        if event.down:
            self.on_note_down(event.note_id, event.frequency)
        else:
            self.on_note_up(event.note_id, event.frequency)
        return True

    # Input forwarding. Each returns True when a note event was produced.

    def key_down(self, key_code: int, modifier: bool = False) -> bool:
        return self._dispatch(self.state.on_physical_key_down(key_code, modifier))

    def key_up(self, key_code: int) -> bool:
        return self._dispatch(self.state.on_physical_key_up(key_code))

    def pointer_down(self, note_id: Optional[str], is_key: bool = True) -> bool:
        return self._dispatch(self.state.on_pointer_down(is_key, note_id))

    def pointer_up(self, note_id: Optional[str], is_key: bool = True) -> bool:
        return self._dispatch(self.state.on_pointer_up(is_key, note_id))

    def pointer_enter(self, note_id: Optional[str], is_key: bool = True) -> bool:
        return self._dispatch(self.state.on_pointer_enter(is_key, note_id))

    def pointer_leave(self, note_id: Optional[str], is_key: bool = True) -> bool:
        return self._dispatch(self.state.on_pointer_leave(is_key, note_id))

    def release_all(self) -> int:
        """Release every held note (focus loss), returning how many were released."""
        events = self.state.reset()
        for event in events:
            self._dispatch(event)
        return len(events)

    # Host accessors

    def get_frequency_of_note(self, note_id: str) -> float:
        return frequency_of_note(note_id)

    def get_key_octave(self) -> int:
        return self.state.get_key_octave()

    def set_key_octave(self, octave: int) -> int:
        return self.state.set_key_octave(octave)

    def key_octave_up(self) -> int:
        return self.state.octave_up()

    def key_octave_down(self) -> int:
        return self.state.octave_down()

    def get_key_map(self) -> dict[int, str]:
        return self.state.get_key_map()

    def set_key_map(self, overrides: Mapping[int, str]) -> dict[int, str]:
        return self.state.set_key_map(overrides)
