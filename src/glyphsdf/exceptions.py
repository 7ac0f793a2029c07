"""Exception hierarchy for glyphsdf."""


class GlyphSDFError(Exception):
    """Base exception for all glyphsdf errors."""

    pass


class FontError(GlyphSDFError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphError(GlyphSDFError):
    """Errors related to glyph lookup or conversion."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested character has no glyph in the font."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"No glyph for character {char!r} in font")


class CurveStoreError(GlyphSDFError):
    """Errors related to the shared curve buffers."""

    pass


class CurveRangeError(CurveStoreError):
    """A curve range does not fit inside its buffer."""

    def __init__(self, offset: int, count: int, buffer_length: int, degree: str) -> None:
        self.offset = offset
        self.count = count
        self.buffer_length = buffer_length
        self.degree = degree
        super().__init__(
            f"{degree} range (offset={offset}, count={count}) exceeds "
            f"buffer of {buffer_length} curves"
        )


class RenderError(GlyphSDFError):
    """Errors raised while rasterizing a frame."""

    pass


class RenderCancelledError(RenderError):
    """Rendering was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Rendering cancelled: {processed_count} completed, {pending_count} pending"
        )
