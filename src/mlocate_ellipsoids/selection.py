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

from collections.abc import Iterable, Sequence
from pathlib import Path

from . import logging
from .config import DEFAULT_FILE_FILTERS, FileFilter
from .exceptions import InvalidParameterError
from .interfaces import IFileSelector

__all__ = [
    "GlobFileSelector",
    "resolve_paths",
]

logger = logging.getLogger(__name__)


class GlobFileSelector(IFileSelector):
    """Selects every file in a directory that matches the filter's patterns."""

    def __init__(self, directory: str | Path = ".", recursive: bool = False) -> None:
        self.directory = Path(directory)
        self.recursive = recursive

    def select_files(self, file_filter: FileFilter) -> list[Path]:
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Not a directory: {self.directory}")
        found: set[Path] = set()
        for pattern in file_filter.patterns:
            matches = self.directory.rglob(pattern) if self.recursive else self.directory.glob(pattern)
            found.update(path for path in matches if path.is_file())
        selected = sorted(found)
        logger.info(f"Selected {len(selected)} file(s) matching {file_filter} in {self.directory}")
        return selected


def resolve_paths(
    paths: Iterable[str | Path] | None,
    selector: IFileSelector | None = None,
    file_filter: FileFilter | None = None,
) -> Sequence[Path]:
    """Work out which files to process.

    Explicit paths win. Without them the selector is asked, using ``file_filter`` (by
    default the combination of the ellipse and mlocate filters).

    Raises:
        InvalidParameterError: If there are no paths and no selector.
    """
    explicit = [Path(p) for p in paths] if paths is not None else []
    if explicit:
        return explicit
    if selector is None:
        raise InvalidParameterError("No input files given and no file selector to choose them")
    if file_filter is None:
        file_filter = FileFilter(
            patterns=tuple(pattern for f in DEFAULT_FILE_FILTERS for pattern in f.patterns),
            description="Ellipsoid Files",
        )
    return list(selector.select_files(file_filter))
