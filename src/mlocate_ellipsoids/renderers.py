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

import pandas as pd

from .colors import to_hex
from .config import ViewOptions
from .interfaces import IRenderer
from .pipeline import EllipsoidSurface

__all__ = [
    "SurfaceCollector",
]

_COLUMNS = ["surface", "path", "record", "latitude", "longitude", "depth", "color_index", "color"]


class SurfaceCollector(IRenderer):
    """A renderer that keeps the surfaces it is given, for export or inspection.

    Example:
        >>> collector = SurfaceCollector()
        >>> run_batch(["example.ellipse"], renderer=collector)
        >>> collector.to_dataframe().to_csv("ellipsoids.csv", index=False)
    """

    def __init__(self) -> None:
        self.surfaces: list[EllipsoidSurface] = []
        self.view: ViewOptions | None = None

    def add_surface(self, surface: EllipsoidSurface) -> None:
        self.surfaces.append(surface)

    def finish(self, view: ViewOptions) -> None:
        self.view = view

    def __len__(self) -> int:
        return len(self.surfaces)

    def to_dataframe(self) -> pd.DataFrame:
        """All collected points, one row per point.

        Columns are 'surface' (running surface number), 'path', 'record' (index within its file),
        'latitude', 'longitude', 'depth', 'color_index' and 'color' (``#rrggbb``).
        """
        if not self.surfaces:
            return pd.DataFrame(columns=_COLUMNS)
        frames = [
            surface.points.to_dataframe(
                surface=number,
                path=str(surface.path) if surface.path is not None else None,
                record=surface.record_index,
                color_index=surface.color_index,
                color=to_hex(surface.color),
            )
            for number, surface in enumerate(self.surfaces)
        ]
        return pd.concat(frames, ignore_index=True)[_COLUMNS]
