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
from datetime import datetime

import numpy as np
import numpy.testing as npt

from mlocate_ellipsoids.exceptions import InvalidParameterError
from mlocate_ellipsoids.types import EllipsoidMesh, EllipsoidRecord, GeographicGrid, GeographicPoint, Hypocenter


def make_record(**kwargs) -> EllipsoidRecord:
    values = dict(
        year=2009,
        month=3,
        day=6,
        hour=12,
        minute=34,
        seconds=5.6,
        north_dev=1.0,
        east_dev=2.0,
        depth_dev=3.0,
        orientation=np.eye(3),
        semi_axes=(4.0, 2.0, 1.0),
    )
    values.update(kwargs)
    return EllipsoidRecord(**values)


class TestEllipsoidRecord(unittest.TestCase):
    def test_orientation_is_read_only(self):
        record = make_record()
        with self.assertRaises(ValueError):
            record.orientation[0, 0] = 2.0

    def test_orientation_is_copied(self):
        orientation = np.eye(3)
        record = make_record(orientation=orientation)
        orientation[0, 0] = 5.0
        self.assertEqual(record.orientation[0, 0], 1.0)

    def test_orientation_shape(self):
        with self.assertRaises(InvalidParameterError):
            make_record(orientation=np.eye(2))

    def test_semi_axes_count(self):
        with self.assertRaises(InvalidParameterError):
            make_record(semi_axes=(1.0, 2.0))

    def test_equality(self):
        self.assertEqual(make_record(), make_record())
        self.assertNotEqual(make_record(), make_record(orientation=np.diag([1.0, 1.0, -1.0])))
        self.assertNotEqual(make_record(), make_record(seconds=5.7))

    def test_origin_time(self):
        self.assertEqual(make_record().origin_time, datetime(2009, 3, 6, 12, 34, 5, 600000))

    def test_invalid_origin_time(self):
        with self.assertRaises(InvalidParameterError):
            _ = make_record(month=13).origin_time

    def test_magnitude_shares_seconds_field(self):
        self.assertEqual(make_record(seconds=4.25).magnitude, 4.25)

    def test_depth(self):
        self.assertEqual(make_record(depth_dev=-2.5).depth(Hypocenter(0.0, 0.0, 10.0)), 7.5)


class TestEllipsoidMesh(unittest.TestCase):
    def test_points(self):
        mesh = EllipsoidMesh(north=[[1.0, 2.0]], east=[[3.0, 4.0]], depth=[[5.0, 6.0]])
        self.assertEqual(mesh.shape, (1, 2))
        self.assertEqual(len(mesh), 2)
        npt.assert_array_equal(mesh.points, [[1.0, 3.0, 5.0], [2.0, 4.0, 6.0]])

    def test_mismatched_shapes(self):
        with self.assertRaises(InvalidParameterError):
            EllipsoidMesh(north=[[1.0, 2.0]], east=[[3.0]], depth=[[5.0, 6.0]])


class TestGeographicGrid(unittest.TestCase):
    def setUp(self):
        self.grid = GeographicGrid(
            latitude=[[10.0, 11.0], [12.0, 13.0]],
            longitude=[[20.0, 21.0], [22.0, 23.0]],
            depth=[[1.0, 2.0], [3.0, 4.0]],
        )

    def test_iteration(self):
        points = list(self.grid)
        self.assertEqual(len(points), 4)
        self.assertEqual(points[1], GeographicPoint(11.0, 21.0, 2.0))

    def test_to_dataframe(self):
        df = self.grid.to_dataframe(surface=7)
        self.assertEqual(list(df.columns), ["latitude", "longitude", "depth", "surface"])
        self.assertEqual(len(df), 4)
        npt.assert_array_equal(df["depth"], [1.0, 2.0, 3.0, 4.0])
        self.assertTrue((df["surface"] == 7).all())


if __name__ == "__main__":
    unittest.main()
