from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize, QRectF, QPointF
from PySide6.QtGui import QPainter, QColor, QPen

from .keyboard import DEFAULT_HEIGHT, DEFAULT_WIDTH, NoteCallback, QwertyKeyboard
from .models import KeyDescriptor
from .piano_layout import keyboard_width

MIN_WHITE_KEY_WIDTH = 8

# Qt key values that differ from browser keyCodes. Letters and digits match.
QT_KEY_TO_KEY_CODE: dict[int, int] = {
    int(Qt.Key.Key_Shift): 16,
    int(Qt.Key.Key_Control): 17,
    int(Qt.Key.Key_Alt): 18,
    int(Qt.Key.Key_Meta): 91,
    int(Qt.Key.Key_Semicolon): 186,
    int(Qt.Key.Key_Equal): 187,
    int(Qt.Key.Key_Comma): 188,
    int(Qt.Key.Key_Minus): 189,
    int(Qt.Key.Key_Period): 190,
    int(Qt.Key.Key_Slash): 191,
    int(Qt.Key.Key_BracketLeft): 219,
    int(Qt.Key.Key_Backslash): 220,
    int(Qt.Key.Key_BracketRight): 221,
    int(Qt.Key.Key_Apostrophe): 222,
}

OCTAVE_DOWN_KEYS = {int(Qt.Key.Key_PageDown)}
OCTAVE_UP_KEYS = {int(Qt.Key.Key_PageUp)}


def qt_key_to_key_code(key: int) -> int | None:
    """Translate a Qt key value to the browser keyCode used by key maps."""
    key = int(key)
    if int(Qt.Key.Key_A) <= key <= int(Qt.Key.Key_Z) or int(Qt.Key.Key_0) <= key <= int(Qt.Key.Key_9):
        return key
    return QT_KEY_TO_KEY_CODE.get(key)


class _WidgetAdapter:
    """RenderAdapter view of a KeyboardWidget; QWidget already owns ``render``."""

    def __init__(self, widget: "KeyboardWidget"):
        self.widget = widget

    def container_size(self) -> tuple[float, float]:
        return self.widget.container_size()

    def render(self, keys, width, height) -> None:
        self.widget.show_keys(keys, width, height)

    def set_key_visual_state(self, note_id: str, active: bool) -> None:
        self.widget.set_key_visual_state(note_id, active)


class KeyboardWidget(QWidget):
    """Paints a QwertyKeyboard and feeds it mouse and key input.

    White keys are drawn first and black keys on top, so hit testing checks
    black keys first. Page Up / Page Down shift the computer keyboard's octave.
    """

    def __init__(self, settings=None, on_note_down: NoteCallback | None = None,
                 on_note_up: NoteCallback | None = None, parent=None, **overrides):
        super().__init__(parent)
        self._keys: list[KeyDescriptor] = []
        self._active: set[str] = set()
        self._hover_note: str | None = None
        self.keyboard = QwertyKeyboard(
            settings,
            on_note_down=on_note_down,
            on_note_up=on_note_up,
            adapter=_WidgetAdapter(self),
            **overrides,
        )
        margin = int(self.keyboard.settings.margin)
        self.setContentsMargins(margin, margin, margin, margin)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        if self._fixed_size:
            self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        else:
            self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

    @property
    def _fixed_size(self) -> bool:
        s = self.keyboard.settings
        return s.width is not None and s.height is not None

    # Drawing state

    def container_size(self) -> tuple[float, float]:
        if not self.isVisible():
            return (DEFAULT_WIDTH, DEFAULT_HEIGHT)
        rect = self.contentsRect()
        return (max(1, rect.width()), max(1, rect.height()))

    def show_keys(self, keys, width, height):
        self._keys = list(keys)
        self._active.clear()
        self.updateGeometry()
        self.update()

    def set_key_visual_state(self, note_id: str, active: bool) -> None:
        if active:
            self._active.add(note_id)
        else:
            self._active.discard(note_id)
        self.update()

    def is_active(self, note_id: str) -> bool:
        return note_id in self._active

    # Geometry

    def sizeHint(self) -> QSize:  # type: ignore[override]
        m = self.contentsMargins()
        white_count = self.keyboard.total_white_keys
        white_w = self._keys[0].width_px if self._keys else 0
        width = keyboard_width(white_count, int(white_w or 0)) if white_count else int(self.keyboard.width)
        return QSize(width + m.left() + m.right(), int(self.keyboard.height) + m.top() + m.bottom())

    def _minimum_width(self) -> int:
        return keyboard_width(self.keyboard.total_white_keys, MIN_WHITE_KEY_WIDTH)

    def minimumSizeHint(self) -> QSize:  # type: ignore[override]
        if self._fixed_size:
            return self.sizeHint()
        m = self.contentsMargins()
        return QSize(self._minimum_width() + m.left() + m.right(), int(self.keyboard.height) + m.top() + m.bottom())

    def resizeEvent(self, event):  # type: ignore[override]
        super().resizeEvent(event)
        if self._fixed_size:
            return
        rect = self.contentsRect()
        if rect.width() > 0 and rect.height() > 0:
            self.keyboard.resize(max(rect.width(), self._minimum_width()), rect.height())

    def _key_rect(self, key: KeyDescriptor) -> QRectF:
        return QRectF(key.x or 0, 0, (key.width_px or 0) + (0 if key.is_black else 1), key.height_px or 0)

    def _note_at(self, pos: QPointF) -> str | None:
        origin = self.contentsRect().topLeft()
        local = QPointF(pos.x() - origin.x(), pos.y() - origin.y())
        for key in reversed(self._keys):
            if key.is_black and self._key_rect(key).contains(local):
                return key.note_id
        for key in self._keys:
            if not key.is_black and self._key_rect(key).contains(local):
                return key.note_id
        return None

    def paintEvent(self, _):  # type: ignore[override]
        s = self.keyboard.settings
        p = QPainter(self)
        origin = self.contentsRect().topLeft()
        p.translate(origin.x(), origin.y())
        p.setPen(QPen(QColor(s.border_colour), 1))
        active = QColor(s.active_colour)
        for key in self._keys:
            if key.is_black:
                continue
            p.setBrush(active if key.note_id in self._active else QColor(s.white_key_colour))
            p.drawRect(self._key_rect(key))
        for key in self._keys:
            if not key.is_black:
                continue
            p.setBrush(active if key.note_id in self._active else QColor(s.black_key_colour))
            p.drawRect(self._key_rect(key))
        p.end()

    # Pointer input

    def mousePressEvent(self, event):  # type: ignore[override]
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        note = self._note_at(event.position())
        self._hover_note = note
        self.keyboard.pointer_down(note, is_key=note is not None)

    def mouseMoveEvent(self, event):  # type: ignore[override]
        note = self._note_at(event.position())
        if note == self._hover_note:
            return
        if self._hover_note is not None:
            self.keyboard.pointer_leave(self._hover_note)
        if note is not None:
            self.keyboard.pointer_enter(note)
        self._hover_note = note

    def mouseReleaseEvent(self, event):  # type: ignore[override]
        if event.button() != Qt.LeftButton:
            return super().mouseReleaseEvent(event)
        note = self._note_at(event.position())
        self.keyboard.pointer_up(note, is_key=note is not None)
        self._hover_note = note

    def leaveEvent(self, event):  # type: ignore[override]
        if self._hover_note is not None:
            self.keyboard.pointer_leave(self._hover_note)
            self._hover_note = None
        super().leaveEvent(event)

    # Computer keyboard input

    def keyPressEvent(self, event):  # type: ignore[override]
        k = int(event.key())
        if k in OCTAVE_DOWN_KEYS:
            self.keyboard.key_octave_down()
            return
        if k in OCTAVE_UP_KEYS:
            self.keyboard.key_octave_up()
            return
        code = qt_key_to_key_code(k)
        modifier = bool(event.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier))
        if code is not None and (event.isAutoRepeat() and code in self.keyboard.state.keys_down):
            event.accept()
            return
        if code is not None and self.keyboard.key_down(code, modifier):
            event.accept()
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):  # type: ignore[override]
        code = qt_key_to_key_code(event.key())
        if code is None:
            return super().keyReleaseEvent(event)
        if event.isAutoRepeat():
            event.accept()
            return
        if self.keyboard.key_up(code):
            event.accept()
            return
        super().keyReleaseEvent(event)

    def focusOutEvent(self, event):  # type: ignore[override]
        # Qt may still deliver this while the widget is being torn down
        keyboard = getattr(self, "keyboard", None)
        if keyboard is not None:
            keyboard.release_all()
            self._hover_note = None
            self._active.clear()
            self.update()
        super().focusOutEvent(event)
