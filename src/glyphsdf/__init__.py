"""glyphsdf - Render vector glyph outlines by analytic signed distance.

glyphsdf evaluates the exact signed distance from every covered pixel to a
glyph's line and quadratic Bezier segments, instead of sampling a distance
field texture or tessellating the outline. Many glyph instances share one
flat set of control-point buffers addressed by ``(offset, count)`` ranges.

Example:
    $ glyphsdf render Roboto-Regular.ttf "Hello" -o hello.png
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
