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
import math
import unittest

import numpy as np
import numpy.testing as npt
from parameterized import parameterized

from mlocate_ellipsoids.colors import DepthRange, color_for_depth, hsv_palette, to_hex
from mlocate_ellipsoids.exceptions import InvalidParameterError


class TestHsvPalette(unittest.TestCase):
    def test_shape_and_range(self):
        palette = hsv_palette(256)
        self.assertEqual(palette.shape, (256, 3))
        self.assertTrue(np.all((palette >= 0.0) & (palette <= 1.0)))

    @parameterized.expand(
        [
            (0, [1.0, 0.0, 0.0]),
            (1, [1.0, 1.0, 0.0]),
            (2, [0.0, 1.0, 0.0]),
            (3, [0.0, 1.0, 1.0]),
            (4, [0.0, 0.0, 1.0]),
            (5, [1.0, 0.0, 1.0]),
        ]
    )
    def test_primary_hues(self, index, expected):
        npt.assert_allclose(hsv_palette(6)[index], expected)

    def test_full_saturation(self):
        palette = hsv_palette(256)
        npt.assert_allclose(palette.max(axis=1), 1.0)
        npt.assert_allclose(palette.min(axis=1), 0.0)

    def test_single_colour(self):
        npt.assert_allclose(hsv_palette(1), [[1.0, 0.0, 0.0]])

    @parameterized.expand([(0,), (-1,), (2.0,)])
    def test_invalid_size(self, size):
        with self.assertRaises(InvalidParameterError):
            hsv_palette(size)


class TestColorForDepth(unittest.TestCase):
    @parameterized.expand(
        [
            (0.0, 0),
            (10.0, 26),
            (50.0, 128),
            (99.0, 253),
            (100.0, 0),
            (112.5, 32),
            (250.0, 128),
        ]
    )
    def test_default_mapping(self, depth, expected):
        self.assertEqual(color_for_depth(depth), expected)

    @parameterized.expand([(-3.0,), (0.0,), (12.34,), (57.1,), (99.9,)])
    def test_cyclic(self, depth):
        base = color_for_depth(depth)
        for k in (1, 2, 5):
            self.assertEqual(color_for_depth(depth + k * 100.0), base)

    def test_in_range(self):
        for depth in np.linspace(-500.0, 500.0, 1001):
            index = color_for_depth(float(depth))
            self.assertGreaterEqual(index, 0)
            self.assertLess(index, 256)

    def test_negative_depth_wraps(self):
        self.assertEqual(color_for_depth(-50.0), 128)
        self.assertEqual(color_for_depth(-1.0), 253)

    def test_halves_round_away_from_zero(self):
        # 0.5 and 1.5 palette steps
        self.assertEqual(color_for_depth(0.5, palette_size=100, repeat_interval_km=100.0), 1)
        self.assertEqual(color_for_depth(1.5, palette_size=100, repeat_interval_km=100.0), 2)
        self.assertEqual(color_for_depth(-0.5, palette_size=100, repeat_interval_km=100.0), 99)

    def test_custom_interval(self):
        self.assertEqual(color_for_depth(25.0, palette_size=8, repeat_interval_km=50.0), 4)

    @parameterized.expand(
        [
            ("nan_depth", math.nan, 256, 100.0),
            ("inf_depth", math.inf, 256, 100.0),
            ("zero_palette", 10.0, 0, 100.0),
            ("zero_interval", 10.0, 256, 0.0),
            ("negative_interval", 10.0, 256, -100.0),
        ]
    )
    def test_invalid(self, _name, depth, palette_size, repeat_interval_km):
        with self.assertRaises(InvalidParameterError):
            color_for_depth(depth, palette_size=palette_size, repeat_interval_km=repeat_interval_km)


class TestToHex(unittest.TestCase):
    @parameterized.expand(
        [
            ((1.0, 0.0, 0.0), "#ff0000"),
            ((0.0, 1.0, 1.0), "#00ffff"),
            ((0.5, 0.5, 0.5), "#808080"),
            ((1.2, -0.1, 0.0), "#ff0000"),
        ]
    )
    def test_to_hex(self, color, expected):
        self.assertEqual(to_hex(color), expected)


class TestDepthRange(unittest.TestCase):
    def test_starts_empty(self):
        depth_range = DepthRange()
        self.assertTrue(depth_range.is_empty)
        self.assertTrue(all(math.isnan(v) for v in depth_range.as_tuple()))

    def test_update(self):
        depth_range = DepthRange()
        depth_range.update([[12.0, 3.5], [7.0, 99.0]])
        depth_range.update([50.0])
        depth_range.update([-1.0, 2.0])
        self.assertEqual(depth_range.as_tuple(), (-1.0, 99.0))

    def test_update_ignores_nan(self):
        depth_range = DepthRange()
        depth_range.update([math.nan])
        self.assertTrue(depth_range.is_empty)
        depth_range.update([math.nan, 4.0])
        self.assertEqual(depth_range.as_tuple(), (4.0, 4.0))

    def test_merge(self):
        a = DepthRange(1.0, 5.0)
        b = DepthRange(-2.0, 3.0)
        c = DepthRange(4.0, 10.0)
        self.assertEqual(a.merge(b).as_tuple(), (-2.0, 5.0))
        self.assertEqual(a.merge(b).merge(c).as_tuple(), a.merge(b.merge(c)).as_tuple())
        self.assertEqual(a.merge(c).as_tuple(), c.merge(a).as_tuple())

    def test_merge_with_empty(self):
        a = DepthRange(1.0, 5.0)
        self.assertEqual(a.merge(DepthRange()).as_tuple(), (1.0, 5.0))
        self.assertEqual(DepthRange().merge(a).as_tuple(), (1.0, 5.0))
        self.assertTrue(DepthRange().merge(DepthRange()).is_empty)

    def test_merge_does_not_modify(self):
        a = DepthRange(1.0, 5.0)
        a.merge(DepthRange(-10.0, 10.0))
        self.assertEqual(a.as_tuple(), (1.0, 5.0))


if __name__ == "__main__":
    unittest.main()
