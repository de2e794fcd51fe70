import math
import unittest

from osm_buildings.io.osm_document import OSMDocument
from osm_buildings.models.node_table import NodeTable
from osm_buildings.projection import HomeProjector, IProjector, create_projector, reposition_point


class RepositionPointTests(unittest.TestCase):
    def test_home_point_maps_to_origin(self):
        home = (-75.1234, 40.5678)
        x, y = reposition_point(home, home)
        self.assertAlmostEqual(x, 0.0, places=6)
        self.assertAlmostEqual(y, 0.0, places=6)

    def test_points_mirrored_across_home_meridian(self):
        home = (10.0, 45.0)
        east = reposition_point((10.01, 45.02), home)
        west = reposition_point((9.99, 45.02), home)
        self.assertAlmostEqual(east[0], -west[0], places=6)
        self.assertAlmostEqual(east[1], west[1], places=6)

    def test_axes_point_east_and_north(self):
        home = (10.0, 45.0)
        x, y = reposition_point((10.001, 45.0), home)
        self.assertGreater(x, 0)
        x, y = reposition_point((10.0, 45.001), home)
        self.assertGreater(y, 0)
        self.assertAlmostEqual(x, 0.0, places=9)

    def test_one_millidegree_north_is_about_111_metres(self):
        home = (10.0, 45.0)
        _, y = reposition_point((10.0, 45.001), home)
        self.assertAlmostEqual(y, 111.195, delta=0.01)

    def test_nan_input_propagates(self):
        x, y = reposition_point((float('nan'), 45.0), (10.0, 45.0))
        self.assertTrue(math.isnan(x))
        self.assertTrue(math.isnan(y))


class HomeProjectorTests(unittest.TestCase):
    def test_factory_returns_projector_interface(self):
        projector = create_projector((10.0, 45.0))
        self.assertIsInstance(projector, IProjector)
        self.assertEqual(projector.home, (10.0, 45.0))

    def test_project_takes_lat_lon(self):
        projector = HomeProjector(home_lon=10.0, home_lat=45.0)
        self.assertEqual(projector.project(45.002, 10.003), reposition_point((10.003, 45.002), (10.0, 45.0)))

    def test_unproject_inverts_project(self):
        projector = HomeProjector(home_lon=10.0, home_lat=45.0)
        lat, lon = projector.unproject(*projector.project(45.003, 10.004))
        self.assertAlmostEqual(lat, 45.003, places=9)
        self.assertAlmostEqual(lon, 10.004, places=9)


class NodeTableTests(unittest.TestCase):
    XML = """<osm>
      <node id="1" lat="45.0" lon="10.0"/>
      <node id="2" lat="45.001" lon="10.001"/>
    </osm>"""

    def test_raw_entries_are_lon_lat(self):
        table = NodeTable.from_document(OSMDocument.from_string(self.XML))
        self.assertEqual(table[2], (10.001, 45.001))
        self.assertEqual(len(table), 2)
        self.assertFalse(table.projected)

    def test_reposition_rewrites_in_place_once(self):
        table = NodeTable.from_document(OSMDocument.from_string(self.XML))
        table.reposition(create_projector((10.0, 45.0)))
        self.assertTrue(table.projected)
        self.assertAlmostEqual(table[1][0], 0.0, places=6)
        self.assertAlmostEqual(table[1][1], 0.0, places=6)
        self.assertGreater(table[2][0], 70)
        with self.assertRaises(RuntimeError):
            table.reposition(create_projector((10.0, 45.0)))

    def test_missing_node_lookup(self):
        table = NodeTable.from_document(OSMDocument.from_string(self.XML))
        self.assertIsNone(table.get(3))
        self.assertNotIn(3, table)


if __name__ == "__main__":
    unittest.main()
