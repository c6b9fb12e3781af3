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

"""Width-aware scanning of fixed-format text lines.

A :class:`LineFormat` is compiled from a ``scanf``-style format string made of
``%<width>d`` and ``%<width>.<precision>f`` conversions, literal characters and
whitespace. Scanning follows ``scanf`` rules:

- a numeric conversion skips leading whitespace, which does not count towards its width;
- at most ``width`` characters are consumed, and the longest valid number in them is taken;
- a literal character must match exactly, with no whitespace skipped before it;
- whitespace in the format matches any run of whitespace, including none.

So two maximum-width fields with no space between them are still split correctly:

    >>> LineFormat("%8.2f%8.2f").scan("   12.34-1234.56")
    (12.34, -1234.56)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "LineFormat",
    "ScanError",
]

_DIRECTIVE = re.compile(r"%(?P<width>\d+)(?:\.(?P<precision>\d+))?(?P<kind>[df])")

_NUMBER_PATTERNS = {
    "d": re.compile(r"[+-]?\d+"),
    "f": re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"),
}


class ScanError(ValueError):
    """A line does not match its format.

    :param column: The 1-based column at which scanning failed.
    """

    def __init__(self, message: str, column: int) -> None:
        self.column = column
        super().__init__(f"{message} at column {column}")


@dataclass(frozen=True)
class _Conversion:
    kind: str
    width: int
    precision: int | None

    def __str__(self) -> str:
        if self.precision is None:
            return f"%{self.width}{self.kind}"
        return f"%{self.width}.{self.precision}{self.kind}"


@dataclass(frozen=True)
class _Literal:
    char: str


class _Whitespace:
    pass


_Item = _Conversion | _Literal | _Whitespace


def _compile(fmt: str) -> tuple[_Item, ...]:
    items: list[_Item] = []
    pos = 0
    while pos < len(fmt):
        char = fmt[pos]
        if char == "%":
            match = _DIRECTIVE.match(fmt, pos)
            if match is None:
                raise ValueError(f"Unsupported conversion in format {fmt!r} at position {pos}")
            precision = match.group("precision")
            items.append(
                _Conversion(
                    kind=match.group("kind"),
                    width=int(match.group("width")),
                    precision=int(precision) if precision is not None else None,
                )
            )
            pos = match.end()
        elif char.isspace():
            # Consecutive whitespace collapses into one directive.
            if not items or not isinstance(items[-1], _Whitespace):
                items.append(_Whitespace())
            pos += 1
        else:
            items.append(_Literal(char))
            pos += 1
    return tuple(items)


def _fraction_digits(token: str) -> int | None:
    mantissa = re.split(r"[eE]", token)[0]
    if "." not in mantissa:
        return None
    return len(mantissa.split(".", 1)[1])


class LineFormat:
    """A compiled fixed-width line format."""

    def __init__(self, fmt: str) -> None:
        self.format = fmt
        self._items = _compile(fmt)

    @property
    def n_fields(self) -> int:
        """The number of values produced by a successful scan."""
        return sum(1 for item in self._items if isinstance(item, _Conversion))

    def __repr__(self) -> str:
        return f"LineFormat({self.format!r})"

    def scan(self, line: str) -> tuple[int | float, ...]:
        """Read the values of one line.

        :param line: The line, with or without its line terminator.

        :returns: One value per conversion, ``int`` for ``%d`` and ``float`` for ``%f``.

        :raises ScanError: If a field is missing, is not numeric, has an ambiguous boundary with
            the next field, or if anything other than whitespace follows the last field.
        """
        line = line.rstrip("\r\n")
        values: list[int | float] = []
        pos = 0
        for item in self._items:
            if isinstance(item, _Whitespace):
                while pos < len(line) and line[pos].isspace():
                    pos += 1
            elif isinstance(item, _Literal):
                if pos >= len(line) or line[pos] != item.char:
                    found = repr(line[pos]) if pos < len(line) else "end of line"
                    raise ScanError(f"Expected {item.char!r} but found {found}", pos + 1)
                pos += 1
            else:
                value, pos = self._convert(item, line, pos)
                values.append(value)

        if line[pos:].strip():
            raise ScanError(f"Unexpected content {line[pos:].strip()!r} after {len(values)} field(s)", pos + 1)
        return tuple(values)

    @staticmethod
    def _convert(conversion: _Conversion, line: str, pos: int) -> tuple[int | float, int]:
        while pos < len(line) and line[pos].isspace():
            pos += 1
        if pos >= len(line):
            raise ScanError(f"Missing {conversion} field", pos + 1)

        window = line[pos : pos + conversion.width]
        # A field never extends over whitespace.
        window = re.split(r"\s", window, maxsplit=1)[0]
        match = _NUMBER_PATTERNS[conversion.kind].match(window)
        if match is None:
            raise ScanError(f"Expected a {conversion} number but found {window!r}", pos + 1)
        token = match.group()
        end = pos + len(token)

        if conversion.kind == "f" and len(token) == conversion.width and end < len(line):
            following = line[end]
            if (following.isdigit() or following == ".") and _fraction_digits(token) != conversion.precision:
                raise ScanError(
                    f"Ambiguous field boundary between {token!r} and {following!r} for {conversion}", end + 1
                )

        if conversion.kind == "d":
            return int(token), end
        return float(token), end
