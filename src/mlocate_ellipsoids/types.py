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

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, NamedTuple

import numpy as np
import pandas as pd

from .exceptions import InvalidParameterError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

__all__ = [
    "EllipsoidMesh",
    "EllipsoidRecord",
    "GeographicGrid",
    "GeographicPoint",
    "Hypocenter",
]


def _frozen_array(values: ArrayLike, shape: tuple[int, ...] | None = None) -> NDArray[np.float64]:
    array = np.array(values, dtype=np.float64)
    if shape is not None and array.shape != shape:
        raise InvalidParameterError(f"Expected an array of shape {shape}, got {array.shape}")
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class Hypocenter:
    """The reference location shared by all ellipsoids in one file."""

    latitude: float
    """Latitude in degrees."""

    longitude: float
    """Longitude in degrees."""

    depth: float
    """Depth in km, positive down."""


@dataclass(frozen=True, eq=False)
class EllipsoidRecord:
    """One confidence ellipsoid, expressed relative to its file's hypocenter.

    The timestamp fields are descriptive only. The geometry is given in a local
    tangent-plane frame (north, east, depth) in km.
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int
    seconds: float
    """The last timestamp field. MLOCATE writes the magnitude here, see :attr:`magnitude`."""

    north_dev: float
    east_dev: float
    depth_dev: float

    orientation: NDArray[np.float64]
    """3x3 matrix whose rows are the principal axis directions."""

    semi_axes: tuple[float, float, float]
    """Semi-axis lengths in km along each row of :attr:`orientation`."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "orientation", _frozen_array(self.orientation, (3, 3)))
        object.__setattr__(self, "semi_axes", tuple(float(v) for v in self.semi_axes))
        if len(self.semi_axes) != 3:
            raise InvalidParameterError(f"Expected three semi-axes, got {len(self.semi_axes)}")

    @property
    def magnitude(self) -> float:
        """The event magnitude, which shares the 5.2 seconds field of the timestamp line."""
        return self.seconds

    @property
    def origin_time(self) -> datetime:
        """The timestamp fields as a datetime."""
        try:
            base = datetime(self.year, self.month, self.day, self.hour, self.minute)
        except ValueError as ve:
            raise InvalidParameterError(f"Timestamp fields do not form a valid date: {ve}") from ve
        return base + timedelta(seconds=self.seconds)

    @property
    def local_offset(self) -> NDArray[np.float64]:
        """Displacement of the ellipsoid centre from the hypocenter as (north, east, depth) km."""
        return np.array([self.north_dev, self.east_dev, self.depth_dev])

    def depth(self, hypocenter: Hypocenter) -> float:
        """The representative depth of this ellipsoid below the hypocenter's reference."""
        return hypocenter.depth + self.depth_dev

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EllipsoidRecord):
            return NotImplemented
        return (
            (self.year, self.month, self.day, self.hour, self.minute, self.seconds)
            == (other.year, other.month, other.day, other.hour, other.minute, other.seconds)
            and (self.north_dev, self.east_dev, self.depth_dev) == (other.north_dev, other.east_dev, other.depth_dev)
            and self.semi_axes == other.semi_axes
            and np.array_equal(self.orientation, other.orientation)
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True, eq=False)
class EllipsoidMesh:
    """Ellipsoid surface points on a parametric grid, in the hypocenter-local frame (km).

    Each array has shape ``(resolution + 1, resolution + 1)``.
    """

    north: NDArray[np.float64]
    east: NDArray[np.float64]
    depth: NDArray[np.float64]

    def __post_init__(self) -> None:
        shape = np.shape(self.north)
        for name in ("north", "east", "depth"):
            object.__setattr__(self, name, _frozen_array(getattr(self, name), shape))

    @property
    def shape(self) -> tuple[int, ...]:
        return self.north.shape

    @property
    def points(self) -> NDArray[np.float64]:
        """The mesh as an ``(N, 3)`` row matrix of (north, east, depth)."""
        return np.column_stack([self.north.ravel(), self.east.ravel(), self.depth.ravel()])

    def __len__(self) -> int:
        return self.north.size


class GeographicPoint(NamedTuple):
    """A point in geographic coordinates."""

    latitude: float
    longitude: float
    depth: float


@dataclass(frozen=True, eq=False)
class GeographicGrid:
    """Projected ellipsoid surface points, sharing the 2-D shape of the mesh they came from."""

    latitude: NDArray[np.float64]
    longitude: NDArray[np.float64]
    depth: NDArray[np.float64]

    def __post_init__(self) -> None:
        shape = np.shape(self.latitude)
        for name in ("latitude", "longitude", "depth"):
            object.__setattr__(self, name, _frozen_array(getattr(self, name), shape))

    @property
    def shape(self) -> tuple[int, ...]:
        return self.latitude.shape

    def __len__(self) -> int:
        return self.latitude.size

    def __iter__(self) -> Iterator[GeographicPoint]:
        for lat, lon, depth in zip(self.latitude.ravel(), self.longitude.ravel(), self.depth.ravel()):
            yield GeographicPoint(float(lat), float(lon), float(depth))

    def to_dataframe(self, **extra_columns: Any) -> pd.DataFrame:
        """The points as a DataFrame with 'latitude', 'longitude' and 'depth' columns.

        Any keyword arguments are added as extra (usually constant) columns.
        """
        df = pd.DataFrame(
            {
                "latitude": self.latitude.ravel(),
                "longitude": self.longitude.ravel(),
                "depth": self.depth.ravel(),
            }
        )
        for name, value in extra_columns.items():
            df[name] = value
        return df
