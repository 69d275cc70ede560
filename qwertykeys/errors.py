"""Exceptions raised by the keyboard core."""


class InvalidConfiguration(ValueError):
    """Raised when a keyboard cannot be built from the given settings.

    Covers unrecognised start notes, non-positive dimensions and octave
    counts below the supported minimum. Always fatal to construction.
    """
