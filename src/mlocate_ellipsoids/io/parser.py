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

"""Reader for MLOCATE ellipsoid location files.

The format is strict and positional::

    line 1        free text, ignored
    line 2        %10.4f%10.4f%10.4f            hypocenter latitude, longitude, depth
    lines 3-7     free text, ignored
    then, for every ellipsoid, a block of five lines:
                  %4d-%2d-%2d-%2d:%2d-%5.2f     year, month, day, hour, minute, seconds/magnitude
                  %8.2f%8.2f%8.2f               north, east, depth offset of the centre (km)
                  %10.5f%10.5f%10.5f%10.5f      orientation row 1, semi-axis 1
                  %10.5f%10.5f%10.5f%10.5f      orientation row 2, semi-axis 2
                  %10.5f%10.5f%10.5f%10.5f      orientation row 3, semi-axis 3
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from .. import logging
from ..exceptions import ParseFormatError
from ..types import EllipsoidRecord, Hypocenter
from .scanner import LineFormat, ScanError

__all__ = [
    "HEADER_LINES",
    "LINES_PER_RECORD",
    "parse_ellipsoid_file",
    "parse_ellipsoid_lines",
]

logger = logging.getLogger(__name__)

HEADER_LINES = 7
"""Lines before the first record block, including the hypocenter line."""

LINES_PER_RECORD = 5

HYPOCENTER_LINE = 2

HYPOCENTER_FORMAT = LineFormat("%10.4f%10.4f%10.4f")
TIMESTAMP_FORMAT = LineFormat("%4d-%2d-%2d-%2d:%2d-%5.2f")
OFFSET_FORMAT = LineFormat("%8.2f%8.2f%8.2f")
AXIS_FORMAT = LineFormat(" %10.5f%10.5f%10.5f%10.5f")


def _scan(fmt: LineFormat, lines: list[str], index: int, path: Path, record_index: int | None = None) -> tuple:
    try:
        return fmt.scan(lines[index])
    except ScanError as se:
        raise ParseFormatError(path, index + 1, str(se), record_index) from se


def _parse_record(lines: list[str], start: int, path: Path, record_index: int) -> EllipsoidRecord:
    year, month, day, hour, minute, seconds = _scan(TIMESTAMP_FORMAT, lines, start, path, record_index)
    north_dev, east_dev, depth_dev = _scan(OFFSET_FORMAT, lines, start + 1, path, record_index)

    rows = []
    semi_axes = []
    for row in range(3):
        *direction, distance = _scan(AXIS_FORMAT, lines, start + 2 + row, path, record_index)
        rows.append(direction)
        semi_axes.append(distance)

    return EllipsoidRecord(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        seconds=seconds,
        north_dev=north_dev,
        east_dev=east_dev,
        depth_dev=depth_dev,
        orientation=np.array(rows, dtype=np.float64),
        semi_axes=(semi_axes[0], semi_axes[1], semi_axes[2]),
    )


def parse_ellipsoid_lines(lines: list[str], path: str | Path = "<memory>") -> tuple[Hypocenter, list[EllipsoidRecord]]:
    """Parse the lines of an ellipsoid file.

    :param lines: The file's lines, with or without line terminators.
    :param path: The name used in error messages.

    :returns: The hypocenter and the records in file order.

    :raises ParseFormatError: On the first line that does not match its format, or if the last
        record block is incomplete.
    """
    path = Path(path)
    lines = [line.rstrip("\r\n") for line in lines]
    while lines and not lines[-1].strip():
        lines.pop()

    if len(lines) < HYPOCENTER_LINE:
        raise ParseFormatError(
            path, None, f"Expected a hypocenter on line {HYPOCENTER_LINE}, file has {len(lines)} line(s)"
        )
    latitude, longitude, depth = _scan(HYPOCENTER_FORMAT, lines, HYPOCENTER_LINE - 1, path)
    hypocenter = Hypocenter(latitude=latitude, longitude=longitude, depth=depth)

    body = len(lines) - HEADER_LINES
    if body <= 0:
        return hypocenter, []

    n_records, leftover = divmod(body, LINES_PER_RECORD)
    if leftover:
        raise ParseFormatError(
            path,
            len(lines),
            f"Truncated record: expected {LINES_PER_RECORD} lines but found {leftover}",
            n_records,
        )

    records = []
    for record_index in range(n_records):
        record = _parse_record(lines, HEADER_LINES + record_index * LINES_PER_RECORD, path, record_index)
        logger.debug(f"{path.name}: record {record_index} at {record.local_offset.tolist()} axes {record.semi_axes}")
        records.append(record)
    return hypocenter, records


def parse_ellipsoid_file(path: str | Path) -> tuple[Hypocenter, list[EllipsoidRecord]]:
    """Read an MLOCATE ellipsoid file.

    The whole file is parsed before anything is returned; a malformed line anywhere in it fails the file.

    :param path: Path to a ``.ellipse`` or ``.mlocate`` file.

    :returns: The hypocenter and the ellipsoid records in file order.

    :raises FileNotFoundError: If the file does not exist.
    :raises ParseFormatError: If the file does not follow the format.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8", errors="replace") as f:
        lines = f.readlines()

    hypocenter, records = parse_ellipsoid_lines(lines, path)
    logger.info(
        f"Read {len(records)} ellipsoid(s) from {path.name} "
        f"(hypocenter {hypocenter.latitude:.4f}, {hypocenter.longitude:.4f}, {hypocenter.depth:.4f} km)"
    )
    return hypocenter, records
