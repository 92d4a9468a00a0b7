"""Plain-text PPM (P3) image writer.

The format is a three line header followed by the pixels in raster order:

    P3
    <width> <height>
    <max_color - 1>
    r g b r g b ... r g b\\n      (one line per row)

Pixels within a row are separated by spaces and each row ends with a
newline. The writer keeps a strict (row, column) cursor: it accepts exactly
width * height pixels.

Example:
    >>> import io
    >>> stream = io.StringIO()
    >>> writer = PpmWriter(stream, 2, 1, max_color=256)
    >>> writer.write_pixels([(255, 0, 0), (0, 0, 255)])
    >>> stream.getvalue()
    'P3\\n2 1\\n255\\n255 0 0 0 0 255\\n'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from pathtracer.core.color import DEFAULT_MAX_COLOR

logger = logging.getLogger(__name__)


class PpmWriter:
    """Streams RGB triples into a P3 image.

    The header is written on construction. Write errors from the underlying
    stream propagate to the caller unchanged.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        max_color: Number of levels per channel; the header stores
            max_color - 1.
    """

    def __init__(
        self,
        stream: TextIO,
        width: int,
        height: int,
        max_color: int = DEFAULT_MAX_COLOR,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
        self._stream = stream
        self.width = width
        self.height = height
        self.max_color = max_color
        self._column = 0
        self._row = 0
        self._stream.write(f"P3\n{width} {height}\n{max_color - 1}\n")

    @property
    def pixels_written(self) -> int:
        """Number of pixels written so far."""
        return self._row * self.width + self._column

    @property
    def complete(self) -> bool:
        """True once every pixel has been written."""
        return self._row == self.height

    def next_pixel(self, rgb: tuple[int, int, int]) -> None:
        """Write the pixel at the cursor and advance it.

        Raises:
            ValueError: If the image is already complete or a component is
                outside [0, max_color - 1].
        """
        if self.complete:
            raise ValueError(
                f"All {self.width * self.height} pixels already written"
            )
        r, g, b = rgb
        for component in (r, g, b):
            if not 0 <= component < self.max_color:
                raise ValueError(
                    f"Color component {component} is outside [0, {self.max_color - 1}]"
                )

        if self._column < self.width - 1:
            self._stream.write(f"{r} {g} {b} ")
            self._column += 1
        else:
            self._stream.write(f"{r} {g} {b}\n")
            self._column = 0
            self._row += 1
            logger.debug("Line %d written", self._row)

    def write_pixels(self, pixels: Iterable[tuple[int, int, int]]) -> None:
        """Write every pixel of an iterable, then check the image is complete.

        Raises:
            ValueError: If the iterable yields more or fewer pixels than the
                image holds.
        """
        for rgb in pixels:
            self.next_pixel(rgb)
        self.finish()

    def finish(self) -> None:
        """Flush the stream after checking that every pixel was written.

        Raises:
            ValueError: If the image is incomplete.
        """
        if not self.complete:
            raise ValueError(
                f"Image incomplete: {self.pixels_written} of "
                f"{self.width * self.height} pixels written"
            )
        self._stream.flush()


def write_ppm(
    filepath: str | Path,
    pixels: Iterable[tuple[int, int, int]],
    width: int,
    height: int,
    max_color: int = DEFAULT_MAX_COLOR,
) -> Path:
    """Write raster-order pixels to a PPM file.

    Returns:
        The path of the written file.
    """
    path = Path(filepath)
    with path.open("w", encoding="ascii") as stream:
        PpmWriter(stream, width, height, max_color).write_pixels(pixels)
    logger.info("Saved PPM image: %s", path)
    return path
