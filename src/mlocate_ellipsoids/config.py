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

"""Explicit configuration values for the ellipsoid pipeline and its collaborators.

Nothing in this package reads global state or the environment; every option travels
through one of the values defined here.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any

import pydantic
from pydantic import TypeAdapter

from .exceptions import InvalidParameterError

__all__ = [
    "DEFAULT_FILE_FILTERS",
    "FileFilter",
    "PipelineOptions",
    "ViewOptions",
    "validate_resolution",
]

Resolution = Annotated[int, pydantic.Strict(), pydantic.Field(ge=1)]
PaletteSize = Annotated[int, pydantic.Strict(), pydantic.Field(ge=1)]
RepeatInterval = Annotated[float, pydantic.Field(gt=0, allow_inf_nan=False)]

_RESOLUTION_ADAPTER = TypeAdapter(Resolution)
_PALETTE_SIZE_ADAPTER = TypeAdapter(PaletteSize)
_REPEAT_INTERVAL_ADAPTER = TypeAdapter(RepeatInterval)


def _validate(adapter: TypeAdapter, name: str, value: Any) -> Any:
    try:
        return adapter.validate_python(value)
    except pydantic.ValidationError as ve:
        message = ve.errors()[0]["msg"]
        raise InvalidParameterError(f"Invalid {name} {value!r}: {message}") from ve


def validate_resolution(value: Any) -> int:
    """Check a mesh resolution, which must be an integer of at least 1."""
    return _validate(_RESOLUTION_ADAPTER, "resolution", value)


def validate_palette_size(value: Any) -> int:
    return _validate(_PALETTE_SIZE_ADAPTER, "palette size", value)


def validate_repeat_interval(value: Any) -> float:
    return _validate(_REPEAT_INTERVAL_ADAPTER, "repeat interval", value)


@dataclass(frozen=True)
class PipelineOptions:
    """Options controlling how each ellipsoid is meshed and coloured.

    Example:
        >>> options = PipelineOptions(resolution=16, repeat_interval_km=50.0)
    """

    resolution: int = 8
    """Number of parametric intervals in each direction; a mesh has ``(resolution + 1) ** 2`` points."""

    palette_size: int = 256
    """Number of entries in the cyclic HSV colour table."""

    repeat_interval_km: float = 100.0
    """Depth interval over which the colour table repeats, in km."""

    def __post_init__(self) -> None:
        validate_resolution(self.resolution)
        validate_palette_size(self.palette_size)
        # Store ints given for the interval as floats.
        object.__setattr__(self, "repeat_interval_km", validate_repeat_interval(self.repeat_interval_km))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> PipelineOptions:
        """Build options from loosely typed input, such as parsed JSON or command line values.

        Keys that are ``None`` are ignored so that the defaults apply. Unknown keys are rejected.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise InvalidParameterError(f"Unknown pipeline option(s): {', '.join(sorted(unknown))}")
        return cls(**{key: value for key, value in values.items() if value is not None})


@dataclass(frozen=True)
class FileFilter:
    """A set of filename patterns used when asking a collaborator to choose input files."""

    patterns: tuple[str, ...]
    description: str = ""

    @classmethod
    def parse(cls, text: str, description: str = "") -> FileFilter:
        """Parse a ``;``-separated pattern list such as ``"*.ellipse;*.ELLIPSE"``."""
        patterns = tuple(part.strip() for part in text.split(";") if part.strip())
        if not patterns:
            raise InvalidParameterError(f"File filter {text!r} contains no patterns")
        return cls(patterns=patterns, description=description)

    def __str__(self) -> str:
        return ";".join(self.patterns)


DEFAULT_FILE_FILTERS: tuple[FileFilter, ...] = (
    FileFilter.parse("*.ellipse;*.ELLIPSE", "ELLIPSE Files (*.ellipse,*.ELLIPSE)"),
    FileFilter.parse("*.mlocate;*.MLOCATE", "MLOCATE Files (*.mlocate,*.MLOCATE)"),
)
"""Filters offered when input files are selected rather than given."""


@dataclass(frozen=True)
class ViewOptions:
    """Global view and lighting settings handed to a renderer once all surfaces are added."""

    x_title: str = "Latitude (deg)"
    y_title: str = "Longitude (deg)"
    z_title: str = "Depth (km)"
    reverse_y: bool = True
    """Draw longitude increasing towards the viewer."""

    reverse_z: bool = True
    """Draw depth increasing downwards."""

    lighting: str = "gouraud"
    material: str = "shiny"
    lights: tuple[tuple[float, float, float], ...] = field(
        default=((1.0, -1.0, 0.0), (1.0, 1.0, 0.0), (-1.0, 0.0, 0.0))
    )
    """Directions of infinite light sources."""
