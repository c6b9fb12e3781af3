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

"""Reconstruct MLOCATE earthquake confidence ellipsoids in geographic coordinates.

Example:
    >>> from mlocate_ellipsoids import parse_ellipsoid_file, build_mesh, project_to_geographic, color_for_depth
    >>>
    >>> hypocenter, records = parse_ellipsoid_file("example.ellipse")
    >>> for record in records:
    ...     mesh = build_mesh(record, resolution=8)
    ...     points = project_to_geographic(hypocenter, mesh)
    ...     color = color_for_depth(record.depth(hypocenter), palette_size=256, repeat_interval_km=100.0)
"""

from .colors import DepthRange, color_for_depth, hsv_palette
from .config import DEFAULT_FILE_FILTERS, FileFilter, PipelineOptions, ViewOptions
from .exceptions import EllipsoidError, InvalidParameterError, ParseError, ParseFormatError, SingularMatrixError
from .feedback import LoggingFeedback, NoFeedback
from .geodesy import geodesic_direct, project_to_geographic
from .interfaces import IFeedback, IFileSelector, IRenderer
from .io import parse_ellipsoid_file
from .mesh import build_mesh
from .pipeline import BatchResult, EllipsoidPipeline, EllipsoidSource, EllipsoidSurface, run_batch
from .renderers import SurfaceCollector
from .selection import GlobFileSelector
from .types import EllipsoidMesh, EllipsoidRecord, GeographicGrid, GeographicPoint, Hypocenter

__all__ = [
    "BatchResult",
    "DEFAULT_FILE_FILTERS",
    "DepthRange",
    "EllipsoidError",
    "EllipsoidMesh",
    "EllipsoidPipeline",
    "EllipsoidRecord",
    "EllipsoidSource",
    "EllipsoidSurface",
    "FileFilter",
    "GeographicGrid",
    "GeographicPoint",
    "GlobFileSelector",
    "Hypocenter",
    "IFeedback",
    "IFileSelector",
    "IRenderer",
    "InvalidParameterError",
    "LoggingFeedback",
    "NoFeedback",
    "ParseError",
    "ParseFormatError",
    "PipelineOptions",
    "SingularMatrixError",
    "SurfaceCollector",
    "ViewOptions",
    "build_mesh",
    "color_for_depth",
    "geodesic_direct",
    "hsv_palette",
    "parse_ellipsoid_file",
    "project_to_geographic",
    "run_batch",
]
