#!/usr/bin/env python3
"""
QwertyKeys demo

Opens a window with a playable keyboard and prints every note event.

Usage:
    python -m qwertykeys.main [options]

Options:
    --start-note NOTE   First key of the keyboard (default: A3)
    --octaves N         Number of octaves to show (default: 3)
    --width PX          Keyboard width in pixels (default: follow the window)
    --height PX         Keyboard height in pixels (default: 150)
    --layout LOCALE     Computer keyboard layout (default: en)
    --key-octave N      Octave played by the home row (default: start note octave)
    --no-typing         Disable playing with the computer keyboard
"""

import argparse
import sys

from PySide6.QtWidgets import QApplication, QMainWindow, QMessageBox

from . import __version__
from .errors import InvalidConfiguration
from .keyboard_widget import KeyboardWidget


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="QwertyKeys - playable on-screen piano keyboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Computer keyboard:
  A W S E D F T G Y H U J   lower octave (C to B)
  K O L P ; ' ] \\           upper octave (C to G)
  Page Up / Page Down       shift the typing octave

Examples:
  python -m qwertykeys.main --start-note C4 --octaves 2
  python -m qwertykeys.main --width 900 --height 200 --no-typing
        """
    )
    parser.add_argument("--start-note", type=str, default="A3", help="First key, e.g. C4, F#3 (default: A3)")
    parser.add_argument("--octaves", type=int, default=3, help="Number of octaves (default: 3)")
    parser.add_argument("--width", type=float, default=None, help="Keyboard width in pixels")
    parser.add_argument("--height", type=float, default=150, help="Keyboard height in pixels (default: 150)")
    parser.add_argument("--layout", type=str, default="en", help="Computer keyboard layout (default: en)")
    parser.add_argument("--key-octave", type=int, default=None, help="Octave played by the home row")
    parser.add_argument("--no-typing", action="store_true", help="Disable computer keyboard input")
    parser.add_argument("--version", action="version", version=f"QwertyKeys {__version__}")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> dict:
    settings = {
        "start_note": args.start_note,
        "octaves": args.octaves,
        "height": args.height,
        "keyboard_layout": args.layout,
        "musical_typing": not args.no_typing,
    }
    if args.width is not None:
        settings["width"] = args.width
    if args.key_octave is not None:
        settings["key_octave"] = args.key_octave
    return settings


def print_note_down(note_id: str, frequency: float) -> None:
    print(f"down {note_id:<4} {frequency:8.2f} Hz")


def print_note_up(note_id: str, frequency: float) -> None:
    print(f"up   {note_id:<4} {frequency:8.2f} Hz")


def run(argv=None) -> int:
    args = parse_args(argv)
    app = QApplication.instance() or QApplication(sys.argv)
    window = QMainWindow()
    window.setWindowTitle("QwertyKeys")
    try:
        widget = KeyboardWidget(
            settings_from_args(args),
            on_note_down=print_note_down,
            on_note_up=print_note_up,
            parent=window,
        )
    except InvalidConfiguration as e:
        print(f"Could not create keyboard: {e}")
        QMessageBox.critical(None, "QwertyKeys", f"Could not create keyboard:\n{e}")
        return 2
    window.setCentralWidget(widget)
    window.adjustSize()
    window.show()
    widget.setFocus()
    s = widget.keyboard.settings
    print(f"QwertyKeys {__version__}: {s.octaves} octave(s) from {s.start_note}, layout '{s.keyboard_layout}'")
    if s.musical_typing:
        print(f"Typing octave: {widget.keyboard.get_key_octave()}")
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(run())
