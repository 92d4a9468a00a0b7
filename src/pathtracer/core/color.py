"""Color constants and display mapping.

Colors share the vector representation of ``core.ray`` (float64 arrays of
shape (3,)) with components nominally in [0, 1].

The display pipeline for one pixel is:
    1. Average the radiance samples.
    2. Gamma correct with gamma = 2 (square root of each channel).
    3. Scale into fixed point by ``max_color - 0.01`` and truncate.

Example:
    >>> to_fixed_point(gamma_correct(vec3(0.25, 1.0, 0.0)), 256)
    (127, 255, 0)
"""

from __future__ import annotations

import numpy as np

from pathtracer.core.ray import Vec3, vec3

BLACK = vec3(0.0, 0.0, 0.0)
WHITE = vec3(1.0, 1.0, 1.0)

# Sky color at the top of the background gradient
SKY_BLUE = vec3(0.5, 0.7, 1.0)

# Default number of color levels per channel (header value is one less)
DEFAULT_MAX_COLOR = 256

# Keeps a fully saturated channel strictly below max_color after scaling
_SCALE_MARGIN = 0.01


def gamma_correct(color: Vec3) -> Vec3:
    """Apply gamma 2 correction (square root of each channel).

    Negative values, which can only come from numerical noise, are clamped to
    zero before the square root.
    """
    return np.sqrt(np.maximum(color, 0.0))


def to_fixed_point(color: Vec3, max_color: int = DEFAULT_MAX_COLOR) -> tuple[int, int, int]:
    """Quantize a display color into integers in [0, max_color - 1].

    Each channel is clamped to [0, 1], scaled by ``max_color - 0.01`` and
    truncated toward zero (not rounded).

    Args:
        color: Gamma corrected color.
        max_color: Number of levels per channel.

    Returns:
        Tuple of (R, G, B) integers.
    """
    scaled = np.clip(color, 0.0, 1.0) * (max_color - _SCALE_MARGIN)
    return (int(scaled[0]), int(scaled[1]), int(scaled[2]))
