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

"""Command line front end: reconstruct ellipsoids from MLOCATE files and export them."""

from __future__ import annotations

import argparse
import logging as std_logging
from collections.abc import Sequence
from pathlib import Path

from . import logging
from .config import PipelineOptions, ViewOptions
from .exceptions import EllipsoidError
from .feedback import LoggingFeedback
from .interfaces import IRenderer
from .pipeline import EllipsoidSurface, run_batch
from .renderers import SurfaceCollector
from .selection import GlobFileSelector

__all__ = [
    "build_parser",
    "main",
]

logger = logging.getLogger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mlocate-ellipsoids",
        description="Project MLOCATE confidence ellipsoids onto geographic coordinates.",
    )
    parser.add_argument("paths", nargs="*", type=Path, help="ellipsoid files; defaults to all matches in --directory")
    parser.add_argument(
        "--directory", type=Path, default=Path("."), help="where to look for *.ellipse and *.mlocate files"
    )
    parser.add_argument("--resolution", type=int, default=None, help="mesh intervals per direction (default 8)")
    parser.add_argument("--palette-size", type=int, default=None, help="number of colours (default 256)")
    parser.add_argument(
        "--repeat-interval", type=float, default=None, help="depth in km over which colours repeat (default 100)"
    )
    parser.add_argument("--csv", type=Path, default=None, help="write every projected point to this CSV file")
    parser.add_argument("--html", type=Path, default=None, help="write an interactive Plotly figure to this file")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging (-vv for debug)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = {0: std_logging.WARNING, 1: std_logging.INFO}.get(args.verbose, std_logging.DEBUG)
    logging.setup_logging(level)

    try:
        options = PipelineOptions.from_mapping(
            {
                "resolution": args.resolution,
                "palette_size": args.palette_size,
                "repeat_interval_km": args.repeat_interval,
            }
        )

        collector = SurfaceCollector()
        renderers: list[IRenderer] = [collector]
        plotly_renderer = None
        if args.html is not None:
            from .viz import PlotlyRenderer

            plotly_renderer = PlotlyRenderer()
            renderers.append(plotly_renderer)

        result = run_batch(
            args.paths,
            renderer=_Fanout(renderers),
            selector=GlobFileSelector(args.directory),
            options=options,
            fb=LoggingFeedback(logger),
        )
    except (EllipsoidError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1

    if args.csv is not None:
        collector.to_dataframe().to_csv(args.csv, index=False)
        logger.info(f"Wrote {args.csv}")
    if plotly_renderer is not None:
        plotly_renderer.figure.write_html(args.html)
        logger.info(f"Wrote {args.html}")

    zmin, zmax = result.depth_range.as_tuple()
    print(f"{result.n_surfaces} ellipsoid(s) from {result.n_files} file(s)")
    if not result.depth_range.is_empty:
        print(f"depth range: {zmin:.2f} to {zmax:.2f} km")
    return 0


class _Fanout(IRenderer):
    """Forwards every call to several renderers."""

    def __init__(self, renderers: list[IRenderer]) -> None:
        self._renderers = renderers

    def add_surface(self, surface: EllipsoidSurface) -> None:
        for renderer in self._renderers:
            renderer.add_surface(surface)

    def finish(self, view: ViewOptions) -> None:
        for renderer in self._renderers:
            renderer.finish(view)
