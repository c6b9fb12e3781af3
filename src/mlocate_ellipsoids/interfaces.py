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

"""Interfaces for the collaborators the pipeline talks to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import FileFilter, ViewOptions
    from .pipeline import EllipsoidSurface

__all__ = [
    "IFeedback",
    "IFileSelector",
    "IRenderer",
]


class IFeedback(ABC):
    """Receives progress updates from long-running operations."""

    @abstractmethod
    def progress(self, progress: float, message: str | None = None) -> None:
        """Report progress.

        :param progress: The progress value, between 0 and 1.
        :param message: An optional message to display.
        """


class IRenderer(ABC):
    """Draws ellipsoid surfaces.

    The pipeline calls :meth:`add_surface` once per ellipsoid, in file and record
    order, and :meth:`finish` once after the last surface.
    """

    @abstractmethod
    def add_surface(self, surface: EllipsoidSurface) -> None:
        """Add one ellipsoid: a 2-D grid of geographic points drawn in a single colour."""

    @abstractmethod
    def finish(self, view: ViewOptions) -> None:
        """Apply the global view and lighting settings after all surfaces have been added."""


class IFileSelector(ABC):
    """Chooses input files when none are given explicitly."""

    @abstractmethod
    def select_files(self, file_filter: FileFilter) -> Sequence[Path]:
        """Return the chosen files, in processing order.

        :param file_filter: The filename patterns to offer.
        """
