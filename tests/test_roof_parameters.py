import math
import unittest

from osm_buildings.exceptions import UnsupportedRoofShapeError
from osm_buildings.generators.roof_parameters import parameterize_roof, wall_extrusion
from osm_buildings.generators.roof_pyramidal import generate_pyramidal_roof
from osm_buildings.models.enums import RoofShape
from osm_buildings.models.geometry import Point2D, Polygon
from osm_buildings.models.options import BLANK_OPTIONS, ResolutionContext, read_specified_options, resolve_options
from osm_buildings.utils.polygon_utils import inscribed_radius


def square(size=10.0, clockwise=False):
    ring = [Point2D(0, 0), Point2D(size, 0), Point2D(size, size), Point2D(0, size), Point2D(0, 0)]
    if clockwise:
        ring.reverse()
    return Polygon(ring)


def options_for(tags, footprint):
    ctx = ResolutionContext(tags=tags, radius=lambda: inscribed_radius(footprint))
    return resolve_options(read_specified_options(tags), BLANK_OPTIONS, ctx)


def parameterize(tags, footprint=None):
    footprint = footprint or square()
    options = options_for(tags, footprint)
    return parameterize_roof(footprint, options, lambda: inscribed_radius(footprint), osm_id=1), options


class RoofParameterTests(unittest.TestCase):
    def test_flat_roof_has_no_geometry(self):
        roof, options = parameterize({'height': '12'})
        self.assertIsNone(roof)
        self.assertEqual(wall_extrusion(options), 12.0)

    def test_pyramidal_default_height_is_inscribed_radius(self):
        roof, options = parameterize({'roof:shape': 'pyramidal', 'height': '10'})
        self.assertAlmostEqual(options.roof.height, 5.0)
        self.assertAlmostEqual(roof.depth, 5.0)

    def test_pyramidal_fan(self):
        roof, options = parameterize({'roof:shape': 'pyramidal', 'roof:height': '3', 'height': '10'})
        self.assertEqual(roof.shape, RoofShape.PYRAMIDAL)
        self.assertEqual(roof.elevation, 7.0)
        self.assertEqual(roof.mesh.triangle_count(), 4)

        apex = roof.mesh.vertices[0]
        self.assertAlmostEqual(apex[0], 5.0)
        self.assertAlmostEqual(apex[1], 5.0)
        self.assertAlmostEqual(apex[2], 3.0)
        self.assertEqual(wall_extrusion(options), 7.0)

    def test_dome(self):
        roof, _ = parameterize({'roof:shape': 'dome', 'roof:height': '4', 'height': '10'})
        self.assertAlmostEqual(roof.radius, 5.0)
        self.assertAlmostEqual(roof.vertical_scale, 0.8)
        self.assertAlmostEqual(roof.elevation, 6.0)
        self.assertAlmostEqual(roof.phi_length, math.pi / 2)
        self.assertAlmostEqual(roof.center.x, 5.0)
        self.assertAlmostEqual(roof.center.y, 5.0)

    def test_onion_without_height_uses_radius(self):
        roof, options = parameterize({'roof:shape': 'onion', 'height': '20'})
        self.assertEqual(options.roof.height, 0.0)
        self.assertAlmostEqual(roof.depth, 5.0)
        self.assertAlmostEqual(roof.vertical_scale, 1.0)
        self.assertAlmostEqual(roof.elevation, 15.0)
        self.assertEqual(roof.phi_length, 2.53)

    def test_skillion(self):
        roof, _ = parameterize({'roof:shape': 'skillion', 'roof:direction': 'E',
                                'roof:height': '2', 'roof:angle': '15', 'height': '10'})
        self.assertAlmostEqual(roof.angle, 1.5 * math.pi)
        self.assertEqual(roof.pitch, 15)
        self.assertEqual(roof.depth, 2.0)
        self.assertEqual(roof.elevation, 8.0)

    def test_skillion_without_direction_faces_north(self):
        roof, _ = parameterize({'roof:shape': 'skillion', 'roof:height': '2'})
        self.assertAlmostEqual(roof.angle, 2 * math.pi)

    def test_gabled_is_unsupported(self):
        with self.assertRaises(UnsupportedRoofShapeError):
            parameterize({'roof:shape': 'gabled'})

    def test_unknown_shape_is_unsupported(self):
        with self.assertRaises(UnsupportedRoofShapeError) as ctx:
            parameterize({'roof:shape': 'gambrel'})
        self.assertEqual(ctx.exception.shape, 'gambrel')

    def test_wall_extrusion_stands_on_min_height(self):
        _, options = parameterize({'roof:shape': 'dome', 'roof:height': '4',
                                   'height': '20', 'min_height': '5'})
        self.assertEqual(wall_extrusion(options), 11.0)


class PyramidalRoofTests(unittest.TestCase):
    def test_clockwise_ring_is_rewound(self):
        mesh = generate_pyramidal_roof(square(clockwise=True), 3.0)
        self.assertEqual(mesh.triangle_count(), 4)

        for face in mesh.faces:
            a, b, apex = (mesh.vertices[i] for i in face)
            normal_z = (b[0] - a[0]) * (apex[1] - a[1]) - (b[1] - a[1]) * (apex[0] - a[0])
            self.assertGreater(normal_z, 0)

    def test_triangle_count_follows_point_count(self):
        ring = [Point2D(0, 0), Point2D(4, 0), Point2D(6, 3), Point2D(3, 6), Point2D(0, 4), Point2D(0, 0)]
        mesh = generate_pyramidal_roof(Polygon(ring), 2.0)
        self.assertEqual(mesh.triangle_count(), len(ring) - 1)
        self.assertEqual(mesh.vertex_count(), len(ring) + 1)


if __name__ == "__main__":
    unittest.main()
