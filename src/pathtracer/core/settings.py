"""Render configuration.

Example:
    >>> settings = RenderSettings.from_aspect_ratio(400, 16.0 / 9.0, samples_per_pixel=20)
    >>> settings.height
    225
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pathtracer.core.color import DEFAULT_MAX_COLOR, SKY_BLUE
from pathtracer.core.integrator import MAX_DEPTH

# Number of render threads when none is given
DEFAULT_WORKERS = 6

# Samples averaged per pixel when none is given
DEFAULT_SAMPLES = 50


@dataclass(frozen=True)
class RenderSettings:
    """Parameters for one render pass.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_depth: Maximum number of bounces per path.
        workers: Number of worker threads.
        seed: Base seed. Each row draws from its own generator derived from
            (seed, row), so the image does not depend on which thread rendered
            which row. None draws fresh entropy for every row.
        max_color: Number of levels per output channel.
        sky_color: Color at the top of the background gradient.
    """

    width: int
    height: int
    samples_per_pixel: int = DEFAULT_SAMPLES
    max_depth: int = MAX_DEPTH
    workers: int = DEFAULT_WORKERS
    seed: int | None = None
    max_color: int = DEFAULT_MAX_COLOR
    sky_color: tuple[float, float, float] = tuple(float(c) for c in SKY_BLUE)

    def __post_init__(self) -> None:
        for name in ("width", "height", "samples_per_pixel", "workers"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} = {value} must be at least 1")
        if self.max_depth < 0:
            raise ValueError(f"max_depth = {self.max_depth} must not be negative")
        if self.max_color < 2:
            raise ValueError(f"max_color = {self.max_color} must be at least 2")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed = {self.seed} must not be negative")

    @classmethod
    def from_aspect_ratio(cls, width: int, aspect_ratio: float, **kwargs: Any) -> RenderSettings:
        """Create settings whose height follows from width and aspect ratio.

        The height is truncated, as in width / aspect_ratio rounded down.
        """
        return cls(width=width, height=int(width / aspect_ratio), **kwargs)

    @property
    def pixel_count(self) -> int:
        """Total number of pixels in the image."""
        return self.width * self.height
