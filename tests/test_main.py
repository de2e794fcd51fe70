import io
import json
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

from osm_buildings.main import main

DATA_DIR = Path(__file__).parent / 'data'


@patch('osm_buildings.main.setup_logging')
class MainTests(unittest.TestCase):
    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def test_json_snapshot(self, setup_logging):
        code, out = self.run_main('way', '200', '--osm-file', str(DATA_DIR / 'way_with_parts.osm'), '--json')
        self.assertEqual(code, 0)
        report = json.loads(out)
        self.assertEqual(report['id'], 200)
        self.assertEqual([part['id'] for part in report['parts']], [201, 202, 203])
        self.assertNotIn('bundles', report)

    def test_bundles_and_unscoped_scan(self, setup_logging):
        code, out = self.run_main('way', '200', '--osm-file', str(DATA_DIR / 'way_with_parts.osm'),
                                  '--json', '--bundles', '--no-scope-parts')
        self.assertEqual(code, 0)
        report = json.loads(out)
        self.assertEqual(len(report['bundles']), 4)

    def test_summary(self, setup_logging):
        code, out = self.run_main('relation', '400', '--osm-file', str(DATA_DIR / 'multipolygon.osm'))
        self.assertEqual(code, 0)
        self.assertIn('Multipolygon 400', out)
        self.assertIn('roof skillion', out)

    def test_invalid_building_exit_code(self, setup_logging):
        code, _ = self.run_main('way', '999', '--osm-file', str(DATA_DIR / 'simple_way.osm'))
        self.assertEqual(code, 1)

    def test_bad_config_exit_code(self, setup_logging):
        code, _ = self.run_main('way', '100', '--timeout', '0')
        self.assertEqual(code, 2)


if __name__ == "__main__":
    unittest.main()
