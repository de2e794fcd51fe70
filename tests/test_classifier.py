import unittest

from osm_buildings.io.osm_document import OSMDocument
from osm_buildings.models.enums import BuildingKind
from osm_buildings.processing.classifier import classify, is_valid_data, resolve_outline

DATA = """<osm>
  <node id="1" lat="0" lon="0"/>
  <node id="2" lat="0" lon="1"/>
  <node id="3" lat="1" lon="1"/>
  <way id="10"><nd ref="1"/><nd ref="2"/><nd ref="3"/><nd ref="1"/><tag k="building" v="yes"/></way>
  <way id="11"><nd ref="1"/><nd ref="2"/><nd ref="3"/><tag k="building" v="yes"/></way>
  <way id="12"><tag k="building" v="yes"/></way>
  <way id="13"><nd ref="1"/><nd ref="2"/><nd ref="3"/><nd ref="1"/><tag k="landuse" v="grass"/></way>
  <way id="14"><nd ref="1"/><nd ref="2"/><nd ref="3"/><nd ref="1"/><tag k="building:part" v="yes"/></way>
  <relation id="20">
    <member type="way" ref="10" role="outer"/>
    <member type="way" ref="14" role="part"/>
    <tag k="type" v="multipolygon"/>
    <tag k="building" v="yes"/>
  </relation>
  <relation id="21">
    <member type="way" ref="10" role="outline"/>
    <member type="way" ref="14" role="part"/>
    <member type="way" ref="999" role="part"/>
    <tag k="type" v="building"/>
  </relation>
  <relation id="22">
    <member type="way" ref="10" role="outline"/>
    <member type="relation" ref="23" role="part"/>
    <tag k="type" v="building"/>
  </relation>
  <relation id="23">
    <member type="way" ref="11" role="part"/>
    <member type="relation" ref="23" role="part"/>
    <tag k="type" v="building"/>
  </relation>
  <relation id="24">
    <member type="way" ref="14" role="part"/>
    <tag k="type" v="building"/>
  </relation>
  <relation id="25">
    <member type="way" ref="998" role="outline"/>
    <tag k="type" v="building"/>
  </relation>
</osm>"""


class ClassifyTests(unittest.TestCase):
    def setUp(self):
        self.document = OSMDocument.from_string(DATA)

    def test_way_is_way(self):
        self.assertEqual(classify(self.document.ways[10]), BuildingKind.WAY)

    def test_multipolygon_with_part_member_is_multipolygon(self):
        self.assertEqual(classify(self.document.relations[20]), BuildingKind.MULTIPOLYGON)

    def test_other_relation_is_relation(self):
        self.assertEqual(classify(self.document.relations[21]), BuildingKind.RELATION)

    def test_resolve_outline(self):
        self.assertIs(resolve_outline(self.document.relations[21], self.document), self.document.ways[10])
        self.assertIsNone(resolve_outline(self.document.relations[25], self.document))


class ValidationTests(unittest.TestCase):
    def setUp(self):
        self.document = OSMDocument.from_string(DATA)

    def test_closed_building_way_is_valid(self):
        self.assertTrue(is_valid_data(self.document.ways[10], self.document))

    def test_unclosed_way_is_invalid(self):
        self.assertFalse(is_valid_data(self.document.ways[11], self.document))

    def test_empty_way_is_invalid(self):
        self.assertFalse(is_valid_data(self.document.ways[12], self.document))

    def test_way_without_building_tag_is_invalid(self):
        self.assertFalse(is_valid_data(self.document.ways[13], self.document))

    def test_dangling_part_is_skipped(self):
        with self.assertLogs('osm_buildings.processing.classifier', level='WARNING') as logs:
            self.assertTrue(is_valid_data(self.document.relations[21], self.document))
        self.assertTrue(any('999' in line for line in logs.output))

    def test_nested_part_relation_is_validated(self):
        # relation 23 refers to itself and holds an unclosed part
        self.assertFalse(is_valid_data(self.document.relations[22], self.document))

    def test_relation_without_outline_is_invalid(self):
        self.assertFalse(is_valid_data(self.document.relations[24], self.document))
        self.assertFalse(is_valid_data(self.document.relations[25], self.document))

    def test_multipolygon_needs_no_outline(self):
        self.assertTrue(is_valid_data(self.document.relations[20], self.document))


if __name__ == "__main__":
    unittest.main()
