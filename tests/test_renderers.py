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
from pathlib import Path

import numpy.testing as npt

from mlocate_ellipsoids.config import PipelineOptions, ViewOptions
from mlocate_ellipsoids.pipeline import run_batch
from mlocate_ellipsoids.renderers import SurfaceCollector

EXAMPLE = Path(__file__).parent / "data" / "example.ellipse"


class TestSurfaceCollector(unittest.TestCase):
    def setUp(self):
        self.collector = SurfaceCollector()
        run_batch([EXAMPLE], renderer=self.collector, options=PipelineOptions(resolution=4))

    def test_collects_in_order(self):
        self.assertEqual(len(self.collector), 3)
        self.assertEqual([s.record_index for s in self.collector.surfaces], [0, 1, 2])
        self.assertEqual(self.collector.view, ViewOptions())

    def test_to_dataframe(self):
        df = self.collector.to_dataframe()
        self.assertEqual(
            list(df.columns),
            ["surface", "path", "record", "latitude", "longitude", "depth", "color_index", "color"],
        )
        self.assertEqual(len(df), 3 * 25)
        self.assertEqual(df["surface"].tolist(), [0] * 25 + [1] * 25 + [2] * 25)
        self.assertEqual(set(df["path"]), {str(EXAMPLE)})
        self.assertEqual(df.groupby("surface")["color_index"].first().tolist(), [0, 32, 243])
        self.assertEqual(df["color"].iloc[0], "#ff0000")

    def test_dataframe_matches_points(self):
        df = self.collector.to_dataframe()
        surface = self.collector.surfaces[1]
        rows = df[df["surface"] == 1]
        npt.assert_array_equal(rows["latitude"], surface.points.latitude.ravel())
        npt.assert_array_equal(rows["depth"], surface.points.depth.ravel())

    def test_empty(self):
        df = SurfaceCollector().to_dataframe()
        self.assertTrue(df.empty)
        self.assertIn("latitude", df.columns)


if __name__ == "__main__":
    unittest.main()
