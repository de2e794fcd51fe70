import unittest

from osm_buildings.generators.materials import (
    DEFAULT_MATERIAL,
    WHITE,
    get_base_material,
    resolve_roof_material,
    resolve_wall_material,
)
from osm_buildings.models.options import BuildingOptions, OptionSet, RoofOptions


class MaterialTests(unittest.TestCase):
    def test_base_material_table(self):
        self.assertEqual(get_base_material('glass').colour, 0x00374a)
        self.assertEqual(get_base_material('Brick').colour, 0xcb4154)
        self.assertEqual(get_base_material('metal').colour, 0xaaaaaa)
        self.assertEqual(get_base_material('metal').name, 'metal')
        self.assertIs(get_base_material('wood'), DEFAULT_MATERIAL)
        self.assertIs(get_base_material(None), DEFAULT_MATERIAL)

    def test_untagged_walls_are_white(self):
        material = resolve_wall_material(OptionSet())
        self.assertEqual(material.name, 'default')
        self.assertEqual(material.colour, WHITE)

    def test_colour_overrides_material(self):
        options = OptionSet(building=BuildingOptions(material='concrete', colour='#336699'))
        material = resolve_wall_material(options)
        self.assertEqual(material.name, 'concrete')
        self.assertEqual(material.colour, '#336699')

    def test_roof_falls_back_to_wall_material(self):
        options = OptionSet(building=BuildingOptions(material='marble'))
        self.assertEqual(resolve_roof_material(options).name, 'marble')

    def test_roof_material_and_colour(self):
        options = OptionSet(
            building=BuildingOptions(material='brick'),
            roof=RoofOptions(material='copper', colour='green'),
        )
        material = resolve_roof_material(options)
        self.assertEqual(material.name, 'copper')
        self.assertEqual(material.colour, 'green')

    def test_to_dict_formats_colours(self):
        data = get_base_material('grass').to_dict()
        self.assertEqual(data['colour'], '#7ec850')
        self.assertEqual(data['emissive'], '#000000')


if __name__ == "__main__":
    unittest.main()
