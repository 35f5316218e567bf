"""Error types raised by the render pipeline and its host."""


class PatternArtError(Exception):
    """Base class for pattern art failures."""


class RenderSurfaceUnavailable(PatternArtError):
    """A drawing surface or pixel buffer could not be allocated.

    Fatal to the current render only; the host keeps showing the last good
    output.
    """


class UnsupportedSourceFormat(PatternArtError):
    """The source bytes could not be decoded into a bitmap."""


class SourceUnavailable(PatternArtError):
    """The source image could not be fetched."""
