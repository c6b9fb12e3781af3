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

"""Projection of local tangent-plane offsets onto the WGS-84 ellipsoid.

Offsets in km north and east of a hypocenter are turned into a distance and an
initial bearing, and the direct geodesic solution from :mod:`pyproj` gives the
destination latitude and longitude. Depth is not projected: it is the hypocenter
depth plus the local depth offset.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
import pyproj

from .types import EllipsoidMesh, GeographicGrid, Hypocenter

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

__all__ = [
    "WGS84",
    "geodesic_direct",
    "local_to_polar",
    "project_to_geographic",
]

WGS84 = pyproj.Geod(ellps="WGS84")
"""The reference ellipsoid used for projection."""


def geodesic_direct(
    latitude: ArrayLike,
    longitude: ArrayLike,
    distance: ArrayLike,
    azimuth: ArrayLike,
    *,
    geod: pyproj.Geod | None = None,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Solve the direct geodetic problem on an ellipsoid.

    All inputs broadcast against each other.

    Args:
        latitude: Origin latitude in degrees.
        longitude: Origin longitude in degrees.
        distance: Geodesic distance in metres.
        azimuth: Initial bearing in degrees, clockwise from north.
        geod: The ellipsoid to solve on. Defaults to :data:`WGS84`.

    Returns:
        Tuple of (latitude, longitude, back_azimuth) in degrees. The longitude is the
        origin longitude plus the computed difference, without wrapping, so points
        near the antimeridian stay contiguous. The back azimuth is in [0, 360).
        Zero distances return the origin.
    """
    lat1, lon1, s, alpha1 = np.broadcast_arrays(
        np.asarray(latitude, dtype=np.float64),
        np.asarray(longitude, dtype=np.float64),
        np.asarray(distance, dtype=np.float64),
        np.asarray(azimuth, dtype=np.float64),
    )
    geod = geod or WGS84

    lon2, lat2, back_azimuth = geod.fwd(lon1.flatten(), lat1.flatten(), alpha1.flatten(), s.flatten())
    lat2 = np.asarray(lat2, dtype=np.float64).reshape(lat1.shape)
    lon2 = np.asarray(lon2, dtype=np.float64).reshape(lat1.shape)
    back_azimuth = np.mod(np.asarray(back_azimuth, dtype=np.float64).reshape(lat1.shape), 360.0)

    # pyproj wraps longitudes into [-180, 180]
    lon2 = lon1 + (np.mod(lon2 - lon1 + 180.0, 360.0) - 180.0)

    at_origin = s == 0
    lat2 = np.where(at_origin, lat1, lat2)
    lon2 = np.where(at_origin, lon1, lon2)
    return lat2, lon2, back_azimuth


def local_to_polar(
    north: ArrayLike, east: ArrayLike
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Convert local north/east offsets to a planar distance and a bearing.

    Args:
        north: Offsets north of the origin.
        east: Offsets east of the origin, in the same units as ``north``.

    Returns:
        Tuple of (distance, bearing); the bearing is in degrees clockwise from north, in [0, 360).
    """
    north = np.asarray(north, dtype=np.float64)
    east = np.asarray(east, dtype=np.float64)
    distance = np.hypot(north, east)
    bearing = np.mod(np.degrees(np.arctan2(east, north)), 360.0)
    return distance, bearing


def project_to_geographic(hypocenter: Hypocenter, mesh: EllipsoidMesh) -> GeographicGrid:
    """Project a hypocenter-local mesh to geographic coordinates.

    Every point is projected independently from the hypocenter along its own distance
    and bearing. Points at the hypocenter map to the hypocenter.

    Args:
        hypocenter: The reference location of the mesh.
        mesh: Local (north, east, depth) points in km.

    Returns:
        GeographicGrid with the same 2-D shape as the mesh.
    """
    distance_km, bearing = local_to_polar(mesh.north, mesh.east)
    latitude, longitude, _ = geodesic_direct(hypocenter.latitude, hypocenter.longitude, distance_km * 1000.0, bearing)
    return GeographicGrid(
        latitude=latitude,
        longitude=longitude,
        depth=hypocenter.depth + mesh.depth,
    )
