import unittest

from osm_buildings.io.osm_document import OSMDocument
from osm_buildings.models.node_table import NodeTable
from osm_buildings.processing.extents import EMPTY_EXTENTS, collect_node_ids, get_extents

SQUARES = """<osm>
  <node id="1" lat="0" lon="0"/>
  <node id="2" lat="0" lon="1"/>
  <node id="3" lat="1" lon="1"/>
  <node id="4" lat="1" lon="0"/>
  <node id="5" lat="2" lon="2"/>
  <node id="6" lat="2" lon="3"/>
  <node id="7" lat="3" lon="3"/>
  <node id="8" lat="3" lon="2"/>
  <way id="10"><nd ref="1"/><nd ref="2"/><nd ref="3"/><nd ref="4"/><nd ref="1"/></way>
  <way id="11"><nd ref="5"/><nd ref="6"/><nd ref="7"/><nd ref="8"/><nd ref="5"/></way>
  <relation id="20">
    <member type="way" ref="10" role="outer"/>
    <member type="way" ref="11" role="outer"/>
    <tag k="type" v="multipolygon"/>
  </relation>
  <relation id="21">
    <tag k="type" v="building"/>
  </relation>
  <relation id="22">
    <member type="relation" ref="23" role="part"/>
    <member type="way" ref="10" role="outline"/>
    <tag k="type" v="building"/>
  </relation>
  <relation id="23">
    <member type="relation" ref="22" role="part"/>
    <member type="way" ref="11" role="part"/>
    <tag k="type" v="building"/>
  </relation>
</osm>"""


class ExtentsTests(unittest.TestCase):
    def setUp(self):
        self.document = OSMDocument.from_string(SQUARES)
        self.nodes = NodeTable.from_document(self.document)

    def test_unit_square_way(self):
        self.assertEqual(get_extents(10, self.document, self.nodes), [0.0, 0.0, 1.0, 1.0])

    def test_multipolygon_is_union_of_outer_members(self):
        union = get_extents(20, self.document, self.nodes)
        self.assertEqual(union, [0.0, 0.0, 3.0, 3.0])

        for way_id in (10, 11):
            left, bottom, right, top = get_extents(way_id, self.document, self.nodes)
            self.assertLessEqual(union[0], left)
            self.assertLessEqual(union[1], bottom)
            self.assertGreaterEqual(union[2], right)
            self.assertGreaterEqual(union[3], top)

    def test_empty_relation_keeps_inverted_seed(self):
        self.assertEqual(get_extents(21, self.document, self.nodes), EMPTY_EXTENTS)

    def test_relation_cycle_terminates(self):
        self.assertEqual(get_extents(22, self.document, self.nodes), [0.0, 0.0, 3.0, 3.0])
        self.assertEqual(sorted(set(collect_node_ids(self.document.relations[23], self.document))),
                         [1, 2, 3, 4, 5, 6, 7, 8])

    def test_unknown_element(self):
        with self.assertRaises(KeyError):
            get_extents(99, self.document, self.nodes)


if __name__ == "__main__":
    unittest.main()
