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

"""Ellipsoid surface mesh generation.

A record's ellipsoid is built in four steps:

1. a parametric unit sphere grid,
2. scaled by the semi-axes along the local x, y and z axes,
3. de-rotated into the record's orientation,
4. translated by the record's offset from the hypocenter.

The orientation matrix ``V`` holds the principal axes as rows. MLOCATE decomposes an
ellipsoid into those axes by multiplying with ``V``, so placing the axis-aligned
points ``P`` (one row per point) back into the local frame means solving
``X @ V = P`` for ``X``, i.e. ``X = P @ inv(V)`` rather than ``P @ V``; see
:func:`derotate`.

Example with Plotly:
    >>> from mlocate_ellipsoids import build_mesh
    >>> import plotly.graph_objects as go
    >>> mesh = build_mesh(record, resolution=16)
    >>> fig = go.Figure(data=[go.Surface(x=mesh.north, y=mesh.east, z=mesh.depth)])
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from .config import validate_resolution
from .exceptions import InvalidParameterError, SingularMatrixError
from .types import EllipsoidMesh, EllipsoidRecord

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

__all__ = [
    "build_mesh",
    "derotate",
    "unit_sphere_grid",
]


def unit_sphere_grid(
    resolution: int,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Generate a parametric grid over the unit sphere.

    Latitude runs from the south pole (first row) to the north pole (last row), and
    azimuth from -pi to pi across the columns, each with ``resolution + 1`` samples.
    Both poles are part of the grid, so every point of the first and last rows
    coincides. The trigonometric values at the poles and at the azimuth seam are set
    to exact zeros.

    Args:
        resolution: Number of intervals in each direction.

    Returns:
        Tuple of (x, y, z), each of shape ``(resolution + 1, resolution + 1)``.
    """
    n = validate_resolution(resolution)

    theta = np.linspace(-np.pi, np.pi, n + 1)
    phi = np.linspace(-np.pi / 2, np.pi / 2, n + 1)

    cos_phi = np.cos(phi)
    cos_phi[0] = 0.0
    cos_phi[-1] = 0.0
    sin_theta = np.sin(theta)
    sin_theta[0] = 0.0
    sin_theta[-1] = 0.0

    x = np.outer(cos_phi, np.cos(theta))
    y = np.outer(cos_phi, sin_theta)
    z = np.outer(np.sin(phi), np.ones(n + 1))
    return x, y, z


def _check_orientation(orientation: ArrayLike) -> NDArray[np.float64]:
    matrix = np.asarray(orientation, dtype=np.float64)
    if matrix.shape != (3, 3):
        raise InvalidParameterError(f"Orientation must be a 3x3 matrix, got shape {matrix.shape}")
    if not np.all(np.isfinite(matrix)):
        raise SingularMatrixError("Orientation matrix contains non-finite values")
    # Numerically rank-deficient matrices are rejected too, using numpy's default SVD
    # tolerance. A 10.5 field cannot hold a non-zero value small enough to fall below it.
    rank = np.linalg.matrix_rank(matrix)
    if rank < 3:
        raise SingularMatrixError(f"Orientation matrix is singular (rank {rank})")
    return matrix


def derotate(points: ArrayLike, orientation: ArrayLike) -> NDArray[np.float64]:
    """Place axis-aligned points into the frame described by an orientation matrix.

    Solves ``X @ orientation = points`` for ``X``. Multiplying the result by
    ``orientation`` recovers ``points``.

    Args:
        points: ``(N, 3)`` row matrix of axis-aligned points.
        orientation: 3x3 matrix whose rows are principal axis directions.

    Returns:
        ``(N, 3)`` row matrix of de-rotated points.

    Raises:
        SingularMatrixError: If the orientation matrix is not invertible.
    """
    matrix = _check_orientation(orientation)
    rows = np.asarray(points, dtype=np.float64)
    try:
        # X @ V = P  <=>  V.T @ X.T = P.T
        return np.linalg.solve(matrix.T, rows.T).T
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(f"Orientation matrix cannot be inverted: {e}") from e


def build_mesh(record: EllipsoidRecord, resolution: int = 8) -> EllipsoidMesh:
    """Build the surface mesh of one ellipsoid in the hypocenter-local frame.

    Args:
        record: The ellipsoid to mesh.
        resolution: Number of parametric intervals in each direction. The mesh has
            ``(resolution + 1) ** 2`` points.

    Returns:
        EllipsoidMesh with (north, east, depth) coordinates in km relative to the hypocenter.

    Raises:
        InvalidParameterError: If a semi-axis is negative or not finite, or the resolution is invalid.
        SingularMatrixError: If the record's orientation matrix is not invertible.
    """
    a, b, c = record.semi_axes
    if not all(np.isfinite(v) and v >= 0 for v in (a, b, c)):
        raise InvalidParameterError(f"Semi-axes must be finite and non-negative, got {record.semi_axes}")

    x, y, z = unit_sphere_grid(resolution)
    shape = x.shape

    aligned = np.column_stack([a * x.ravel(), b * y.ravel(), c * z.ravel()])
    local = derotate(aligned, record.orientation) + record.local_offset

    return EllipsoidMesh(
        north=local[:, 0].reshape(shape),
        east=local[:, 1].reshape(shape),
        depth=local[:, 2].reshape(shape),
    )
