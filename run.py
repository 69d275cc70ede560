#!/usr/bin/env python3
"""
QwertyKeys Launcher
Run this script to open the demo keyboard window.
"""

if __name__ == "__main__":
    from qwertykeys.main import run
    raise SystemExit(run())
