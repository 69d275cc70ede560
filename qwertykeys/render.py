"""Rendering collaborator contract."""

from typing import Protocol, Sequence

from .models import KeyDescriptor


class RenderAdapter(Protocol):
    """Draws keys and shows which ones are held.

    ``render`` receives keys in left-to-right order and must keep that
    order when placing them. Adapters forward raw input to the keyboard's
    ``key_down``/``key_up``/``pointer_*`` methods.
    """

    def render(self, keys: Sequence[KeyDescriptor], width: float, height: float) -> None: ...

    def set_key_visual_state(self, note_id: str, active: bool) -> None: ...


class RecordingAdapter:
    """Headless adapter that remembers what it was asked to draw."""

    def __init__(self):
        self.keys: list[KeyDescriptor] = []
        self.width: float = 0
        self.height: float = 0
        self.active: set[str] = set()
        self.render_count = 0

    def render(self, keys: Sequence[KeyDescriptor], width: float, height: float) -> None:
        self.keys = list(keys)
        self.width = width
        self.height = height
        self.active.clear()
        self.render_count += 1

    def set_key_visual_state(self, note_id: str, active: bool) -> None:
        if active:
            self.active.add(note_id)
        else:
            self.active.discard(note_id)
