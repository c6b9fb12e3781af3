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
import unittest

from parameterized import parameterized

from mlocate_ellipsoids.io import LineFormat, ScanError


class TestLineFormat(unittest.TestCase):
    @parameterized.expand(
        [
            ("%10.4f%10.4f%10.4f", "   15.1234  145.5678  100.0000", (15.1234, 145.5678, 100.0)),
            ("%8.2f%8.2f%8.2f", "    1.50   -2.25   12.50", (1.5, -2.25, 12.5)),
            ("%8.2f%8.2f%8.2f", "   12.34-1234.56   -5.00", (12.34, -1234.56, -5.0)),
            ("%8.2f%8.2f", "-1234.56-1234.56", (-1234.56, -1234.56)),
            ("%4d-%2d-%2d-%2d:%2d-%5.2f", "2009-03-06-12:34-05.60", (2009, 3, 6, 12, 34, 5.6)),
            (" %10.5f%10.5f%10.5f%10.5f", "     -0.70711   0.70711   0.00000   1.00000", (-0.70711, 0.70711, 0.0, 1.0)),
        ]
    )
    def test_scan(self, fmt, line, expected):
        self.assertEqual(LineFormat(fmt).scan(line), expected)

    def test_value_types(self):
        values = LineFormat("%4d-%2d-%5.2f").scan("2009-03-05.60")
        self.assertEqual([type(v) for v in values], [int, int, float])

    def test_line_terminator_ignored(self):
        self.assertEqual(LineFormat("%8.2f").scan("    1.00\r\n"), (1.0,))

    def test_trailing_whitespace_ignored(self):
        self.assertEqual(LineFormat("%8.2f").scan("    1.00    "), (1.0,))

    def test_n_fields(self):
        self.assertEqual(LineFormat("%4d-%2d-%2d-%2d:%2d-%5.2f").n_fields, 6)
        self.assertEqual(LineFormat(" %10.5f%10.5f%10.5f%10.5f").n_fields, 4)

    def test_missing_field(self):
        with self.assertRaises(ScanError) as cm:
            LineFormat("%8.2f%8.2f%8.2f").scan("    1.00    2.00")
        self.assertEqual(cm.exception.column, 17)
        self.assertIn("Missing", str(cm.exception))

    def test_non_numeric_field(self):
        with self.assertRaises(ScanError) as cm:
            LineFormat("%8.2f%8.2f").scan("    1.00    abcd")
        self.assertEqual(cm.exception.column, 13)

    def test_literal_mismatch(self):
        with self.assertRaises(ScanError) as cm:
            LineFormat("%4d-%2d").scan("2009/03")
        self.assertEqual(cm.exception.column, 5)
        self.assertIn("'-'", str(cm.exception))

    def test_trailing_content(self):
        with self.assertRaises(ScanError) as cm:
            LineFormat("%8.2f").scan("    1.00    2.00")
        self.assertIn("after 1 field(s)", str(cm.exception))

    def test_ambiguous_boundary(self):
        # A full-width field followed by a digit must carry exactly the declared decimals.
        with self.assertRaises(ScanError) as cm:
            LineFormat("%8.2f%8.2f").scan("123.45678.00")
        self.assertIn("Ambiguous", str(cm.exception))

    def test_unsupported_conversion(self):
        with self.assertRaises(ValueError):
            LineFormat("%s")


if __name__ == "__main__":
    unittest.main()
