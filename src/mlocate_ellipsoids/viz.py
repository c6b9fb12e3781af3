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

"""Interactive 3D display of ellipsoid surfaces using Plotly.

Each ellipsoid becomes one ``go.Surface`` trace drawn in its single depth colour,
with latitude, longitude and depth on the x, y and z axes.

Requires: pip install mlocate-ellipsoids[viz]

Example:
    >>> from mlocate_ellipsoids import run_batch
    >>> from mlocate_ellipsoids.viz import PlotlyRenderer
    >>> renderer = PlotlyRenderer()
    >>> run_batch(["example.ellipse"], renderer=renderer)
    >>> renderer.figure.show()
"""

from __future__ import annotations

from typing import Any

try:
    import plotly.graph_objects as go
except ImportError as e:
    raise ImportError(
        "Ellipsoid visualization requires plotly. Install with: pip install mlocate-ellipsoids[viz]"
    ) from e

from .colors import to_hex
from .config import ViewOptions
from .interfaces import IRenderer
from .pipeline import EllipsoidSurface

__all__ = [
    "PlotlyRenderer",
]

# Plotly lighting presets standing in for the material names in ViewOptions
_MATERIALS: dict[str, dict[str, float]] = {
    "shiny": {"ambient": 0.3, "diffuse": 0.6, "specular": 0.9, "roughness": 0.2, "fresnel": 0.2},
    "dull": {"ambient": 0.3, "diffuse": 0.8, "specular": 0.0, "roughness": 1.0, "fresnel": 0.0},
    "metal": {"ambient": 0.3, "diffuse": 0.3, "specular": 1.0, "roughness": 0.1, "fresnel": 0.5},
    "default": {"ambient": 0.3, "diffuse": 0.6, "specular": 0.5, "roughness": 0.5, "fresnel": 0.2},
}

_LIGHT_DISTANCE = 1e5


class PlotlyRenderer(IRenderer):
    """Collects ellipsoid surfaces into a Plotly figure.

    The figure is available as :attr:`figure` as soon as the renderer is created, and
    gets its axes, aspect and lighting when :meth:`finish` is called.
    """

    def __init__(self, opacity: float = 1.0, show_edges: bool = False) -> None:
        self.figure = go.Figure()
        self.opacity = opacity
        self.show_edges = show_edges

    def add_surface(self, surface: EllipsoidSurface) -> None:
        color = to_hex(surface.color)
        points = surface.points
        name = f"{surface.path.name if surface.path else 'ellipsoid'} #{surface.record_index}"
        self.figure.add_trace(
            go.Surface(
                x=points.latitude,
                y=points.longitude,
                z=points.depth,
                surfacecolor=[[0.0] * points.shape[1]] * points.shape[0],
                colorscale=[[0.0, color], [1.0, color]],
                showscale=False,
                opacity=self.opacity,
                name=name,
                hovertemplate=(
                    "lat %{x:.4f}<br>lon %{y:.4f}<br>depth %{z:.2f} km"
                    f"<br>magnitude {surface.record.magnitude:.2f}<extra>{name}</extra>"
                ),
                contours={"x": {"show": self.show_edges}, "y": {"show": self.show_edges}},
            )
        )

    def finish(self, view: ViewOptions) -> None:
        lighting = dict(_MATERIALS.get(view.material, _MATERIALS["default"]))
        self.figure.update_traces(lighting=lighting, selector={"type": "surface"})

        if view.lights:
            # Plotly supports a single light source; use the first of the configured directions.
            x, y, z = view.lights[0]
            self.figure.update_traces(
                lightposition={"x": x * _LIGHT_DISTANCE, "y": y * _LIGHT_DISTANCE, "z": z * _LIGHT_DISTANCE},
                selector={"type": "surface"},
            )

        scene: dict[str, Any] = {
            "xaxis": {"title": {"text": view.x_title}},
            "yaxis": {"title": {"text": view.y_title}, "autorange": "reversed" if view.reverse_y else True},
            "zaxis": {"title": {"text": view.z_title}, "autorange": "reversed" if view.reverse_z else True},
            "aspectmode": "cube",
        }
        self.figure.update_layout(scene=scene, showlegend=False)
