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

"""The ellipsoid reconstruction pipeline.

For every record of every input file: build the local mesh, project it to
geographic coordinates, pick its colour, and hand the result to a renderer.

Example:
    >>> from mlocate_ellipsoids import run_batch, SurfaceCollector
    >>> collector = SurfaceCollector()
    >>> result = run_batch(["example.ellipse"], renderer=collector)
    >>> zmin, zmax = result.depth_range.as_tuple()
    >>> df = collector.to_dataframe()
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from . import logging
from .colors import DepthRange, color_for_depth, hsv_palette
from .config import FileFilter, PipelineOptions, ViewOptions
from .exceptions import InvalidParameterError, SingularMatrixError
from .feedback import NoFeedback, iter_with_fb
from .geodesy import project_to_geographic
from .interfaces import IFeedback, IFileSelector, IRenderer
from .io import parse_ellipsoid_file
from .mesh import build_mesh
from .selection import resolve_paths
from .types import EllipsoidRecord, GeographicGrid, Hypocenter

__all__ = [
    "BatchResult",
    "EllipsoidPipeline",
    "EllipsoidSource",
    "EllipsoidSurface",
    "run_batch",
]

logger = logging.getLogger(__name__)


class EllipsoidSource:
    """The records of a set of ellipsoid files, as one flat sequence.

    Iterating yields ``(hypocenter, record)`` pairs in file order and then record
    order. Files are read lazily, one at a time, and each file is parsed completely
    before any of its records are yielded. Every new iteration reads the files again.
    """

    def __init__(self, paths: Iterable[str | Path]) -> None:
        self.paths: tuple[Path, ...] = tuple(Path(p) for p in paths)

    def __len__(self) -> int:
        """The number of files."""
        return len(self.paths)

    def iter_files(self) -> Iterator[tuple[Path, Hypocenter, list[EllipsoidRecord]]]:
        for path in self.paths:
            hypocenter, records = parse_ellipsoid_file(path)
            yield path, hypocenter, records

    def __iter__(self) -> Iterator[tuple[Hypocenter, EllipsoidRecord]]:
        for _, hypocenter, records in self.iter_files():
            for record in records:
                yield hypocenter, record


@dataclass(frozen=True, eq=False)
class EllipsoidSurface:
    """One projected ellipsoid, ready to draw."""

    hypocenter: Hypocenter
    record: EllipsoidRecord
    points: GeographicGrid
    color_index: int
    color: tuple[float, float, float]
    """RGB in [0, 1]."""

    path: Path | None = None
    """The file the record came from."""

    record_index: int | None = None
    """Position of the record within its file."""


@dataclass
class BatchResult:
    """Summary of a completed batch."""

    n_files: int
    n_surfaces: int
    depth_range: DepthRange = field(default_factory=DepthRange)


class EllipsoidPipeline:
    """Turns ellipsoid records into coloured geographic surfaces.

    The pipeline keeps a :class:`DepthRange` of every projected point depth it has
    produced. That accumulator is the only state shared between records.
    """

    def __init__(self, options: PipelineOptions | None = None) -> None:
        self.options = options or PipelineOptions()
        self.palette = hsv_palette(self.options.palette_size)
        self.depth_range = DepthRange()

    def surface_for(
        self,
        hypocenter: Hypocenter,
        record: EllipsoidRecord,
        path: Path | None = None,
        record_index: int | None = None,
    ) -> EllipsoidSurface:
        """Build, project and colour a single record.

        Raises:
            SingularMatrixError: If the record's orientation is not invertible.
            InvalidParameterError: If the record has a negative semi-axis.
        """
        where = f"{path}, record {record_index}" if path is not None else f"record {record_index}"
        try:
            mesh = build_mesh(record, self.options.resolution)
        except SingularMatrixError as e:
            raise SingularMatrixError(f"{where}: {e}", record_index) from e
        except InvalidParameterError as e:
            raise InvalidParameterError(f"{where}: {e}") from e

        points = project_to_geographic(hypocenter, mesh)
        self.depth_range.update(points.depth)

        color_index = color_for_depth(
            record.depth(hypocenter),
            palette_size=self.options.palette_size,
            repeat_interval_km=self.options.repeat_interval_km,
        )
        r, g, b = (float(v) for v in self.palette[color_index])
        return EllipsoidSurface(
            hypocenter=hypocenter,
            record=record,
            points=points,
            color_index=color_index,
            color=(r, g, b),
            path=path,
            record_index=record_index,
        )

    def iter_surfaces(self, source: EllipsoidSource, fb: IFeedback = NoFeedback) -> Iterator[EllipsoidSurface]:
        """Lazily produce a surface for every record in ``source``.

        Errors propagate immediately; nothing is produced for the failing file or any file after it.
        """
        for (_, file_fb), (path, hypocenter, records) in zip(iter_with_fb(source.paths, fb), source.iter_files()):
            file_fb.progress(0.0, f"Processing {path.name}")
            for index, record in enumerate(records):
                yield self.surface_for(hypocenter, record, path, index)
                file_fb.progress((index + 1) / len(records))


def run_batch(
    paths: Iterable[str | Path] | None = None,
    renderer: IRenderer | None = None,
    *,
    selector: IFileSelector | None = None,
    file_filter: FileFilter | None = None,
    options: PipelineOptions | None = None,
    view: ViewOptions | None = None,
    fb: IFeedback = NoFeedback,
) -> BatchResult:
    """Process ellipsoid files and send every surface to a renderer.

    Args:
        paths: Files to read, in order. When empty, ``selector`` chooses them.
        renderer: Receives each surface, then ``finish`` once. May be omitted to only compute the depth range.
        selector: Collaborator used to choose files when no paths are given.
        file_filter: Patterns passed to ``selector``.
        options: Mesh resolution and colour settings.
        view: Global view settings passed to ``renderer.finish``.
        fb: Progress feedback.

    Returns:
        BatchResult with the counts and the depth range of all projected points.

    Raises:
        FileNotFoundError, ParseFormatError, SingularMatrixError, InvalidParameterError:
            The first error aborts the batch.
    """
    files: Sequence[Path] = resolve_paths(paths, selector, file_filter)
    pipeline = EllipsoidPipeline(options)
    source = EllipsoidSource(files)

    n_surfaces = 0
    for surface in pipeline.iter_surfaces(source, fb):
        if renderer is not None:
            renderer.add_surface(surface)
        n_surfaces += 1

    if renderer is not None:
        renderer.finish(view or ViewOptions())

    result = BatchResult(n_files=len(files), n_surfaces=n_surfaces, depth_range=pipeline.depth_range)
    logger.info(
        f"Processed {n_surfaces} ellipsoid(s) from {len(files)} file(s); "
        f"depth range {_format_range(result.depth_range)}"
    )
    return result


def _format_range(depth_range: DepthRange) -> str:
    if depth_range.is_empty:
        return "empty"
    return f"{depth_range.minimum:.2f} to {depth_range.maximum:.2f} km"
