#  Copyright © 2025 Bentley Systems, Incorporated
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#      http://www.apache.org/licenses/LICENSE-2.0
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""Depth-cyclic colouring of ellipsoids."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from .config import validate_palette_size, validate_repeat_interval
from .exceptions import InvalidParameterError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

__all__ = [
    "DepthRange",
    "color_for_depth",
    "hsv_palette",
    "to_hex",
]


def hsv_palette(size: int = 256) -> NDArray[np.floating[Any]]:
    """Sample the hue wheel at full saturation and value.

    Entry ``i`` has hue ``i / size``, so the palette starts at red, passes through
    yellow, green, cyan, blue and magenta, and stops one step short of red again.

    Args:
        size: Number of colours.

    Returns:
        ``(size, 3)`` array of RGB values in [0, 1].
    """
    size = validate_palette_size(size)
    h6 = 6.0 * np.arange(size) / size
    sector = np.floor(h6).astype(int) % 6
    rising = h6 - np.floor(h6)
    falling = 1.0 - rising
    one = np.ones(size)
    zero = np.zeros(size)

    # (r, g, b) for each of the six hue sectors
    table = np.array(
        [
            [one, rising, zero],
            [falling, one, zero],
            [zero, one, rising],
            [zero, falling, one],
            [rising, zero, one],
            [one, zero, falling],
        ]
    )
    return table[sector, :, np.arange(size)]


def _round_half_away_from_zero(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def color_for_depth(depth: float, palette_size: int = 256, repeat_interval_km: float = 100.0) -> int:
    """Choose the palette entry for an ellipsoid at the given depth.

    The palette is traversed once per ``repeat_interval_km`` of depth: the depth is
    scaled to palette steps, rounded to the nearest step (halves away from zero) and
    wrapped into the palette.

    Args:
        depth: Representative depth of the ellipsoid in km.
        palette_size: Number of palette entries.
        repeat_interval_km: Depth over which the palette repeats.

    Returns:
        Index into the palette, in ``[0, palette_size)``.
    """
    palette_size = validate_palette_size(palette_size)
    repeat_interval_km = validate_repeat_interval(repeat_interval_km)
    if not math.isfinite(depth):
        raise InvalidParameterError(f"Depth must be finite, got {depth!r}")
    step = _round_half_away_from_zero(palette_size * depth / repeat_interval_km)
    return step % palette_size


def to_hex(color: ArrayLike) -> str:
    """Format an RGB triple in [0, 1] as ``#rrggbb``."""
    r, g, b = (int(round(255 * float(np.clip(v, 0.0, 1.0)))) for v in np.asarray(color).ravel()[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


@dataclass
class DepthRange:
    """Running minimum and maximum of the depths seen so far.

    The accumulator starts empty (both bounds NaN). Combining accumulators with
    :meth:`merge` is associative and commutative, so partial ranges can be folded in
    any order.
    """

    minimum: float = math.nan
    maximum: float = math.nan

    @property
    def is_empty(self) -> bool:
        return math.isnan(self.minimum)

    def update(self, depths: ArrayLike) -> None:
        """Fold an array of depths into the range. NaN depths are ignored."""
        values = np.asarray(depths, dtype=np.float64).ravel()
        values = values[~np.isnan(values)]
        if values.size == 0:
            return
        low = float(values.min())
        high = float(values.max())
        self.minimum = low if self.is_empty else min(self.minimum, low)
        self.maximum = high if math.isnan(self.maximum) else max(self.maximum, high)

    def merge(self, other: DepthRange) -> DepthRange:
        """Return the range covering both this range and ``other``."""
        merged = DepthRange(self.minimum, self.maximum)
        if not other.is_empty:
            merged.update([other.minimum, other.maximum])
        return merged

    def as_tuple(self) -> tuple[float, float]:
        return self.minimum, self.maximum
