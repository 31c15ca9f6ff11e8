"""Exception hierarchy for sprite generation.

Every error derives from SpriteError. The concrete classes also inherit the
matching builtin so callers can catch ``ValueError`` or ``IndexError``
without importing this module.
"""


class SpriteError(Exception):
    """Base exception for all sprite generation errors."""


class ValidationError(SpriteError, ValueError):
    """Raised when a configuration value or colour channel is malformed."""


class BuilderStateError(SpriteError, RuntimeError):
    """Raised when a builder operation is called in the wrong state."""


class PixelIndexError(SpriteError, IndexError):
    """Raised when a pixel coordinate falls outside the raster."""


class MirrorFillError(SpriteError, RuntimeError):
    """Raised when a mirror-filled row ends with the wrong number of unmatched colours."""
