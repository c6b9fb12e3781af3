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

from pathlib import Path

__all__ = [
    "EllipsoidError",
    "InvalidParameterError",
    "ParseError",
    "ParseFormatError",
    "SingularMatrixError",
]


class EllipsoidError(Exception):
    """Base class for all errors raised while reconstructing ellipsoids."""


class ParseError(EllipsoidError):
    """An ellipsoid file could not be read.

    :param path: The file being parsed.
    :param line: The 1-based line number of the offending line, if known.
    :param detail: A description of what was wrong with the line.
    :param record_index: The 0-based index of the record block containing the line, if the line belongs to one.
    """

    def __init__(self, path: str | Path, line: int | None, detail: str, record_index: int | None = None) -> None:
        self.path = Path(path)
        self.line = line
        self.detail = detail
        self.record_index = record_index
        super().__init__(str(self))

    def __str__(self) -> str:
        location = str(self.path)
        if self.line is not None:
            location += f", line {self.line}"
        if self.record_index is not None:
            location += f" (record {self.record_index})"
        return f"Had trouble reading ellipse file {location}: {self.detail}"

    def __reduce__(self):
        return type(self), (self.path, self.line, self.detail, self.record_index)


class ParseFormatError(ParseError):
    """A line does not match the expected fields at the expected position."""


class SingularMatrixError(EllipsoidError):
    """An orientation matrix cannot be inverted, so the ellipsoid cannot be de-rotated."""

    def __init__(self, message: str, record_index: int | None = None) -> None:
        self.record_index = record_index
        super().__init__(message)


class InvalidParameterError(EllipsoidError, ValueError):
    """A caller-supplied value is outside its valid range."""
