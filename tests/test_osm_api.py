import unittest
import urllib.error
from pathlib import Path
from unittest.mock import MagicMock, patch

from osm_buildings.config import ModelConfig
from osm_buildings.exceptions import OSMApiError
from osm_buildings.io.osm_api import (
    FileDocumentSource,
    OSMApiClient,
    create_document_source,
    validate_bbox,
)

DATA_DIR = Path(__file__).parent / 'data'


def response(body=b'<osm/>'):
    mock = MagicMock()
    mock.__enter__.return_value.read.return_value = body
    return mock


class ValidateBBoxTests(unittest.TestCase):
    def test_valid_bbox(self):
        self.assertEqual(validate_bbox(-75.0, 40.0, -74.99, 40.01), (True, ""))

    def test_degenerate_bbox_is_allowed(self):
        self.assertTrue(validate_bbox(10.0, 45.0, 10.0, 45.0)[0])

    def test_rejects_out_of_range_and_swapped(self):
        self.assertFalse(validate_bbox(0, -91, 1, 1)[0])
        self.assertFalse(validate_bbox(2, 0, 1, 1)[0])

    def test_rejects_large_area(self):
        is_valid, error = validate_bbox(0, 0, 1, 1)
        self.assertFalse(is_valid)
        self.assertIn('too large', error)


@patch('osm_buildings.io.osm_api.time.sleep')
@patch('osm_buildings.io.osm_api.urllib.request.urlopen')
class OSMApiClientTests(unittest.TestCase):
    def setUp(self):
        self.client = OSMApiClient(ModelConfig(api_servers=['https://a.example/api/0.6', 'https://b.example/api/0.6/']))

    def test_way_url(self, urlopen, sleep):
        urlopen.return_value = response(b'<osm version="0.6"/>')
        self.assertEqual(self.client.get_way_data(42), '<osm version="0.6"/>')
        request = urlopen.call_args[0][0]
        self.assertEqual(request.full_url, 'https://a.example/api/0.6/way/42/full')
        self.assertEqual(request.get_header('User-agent'), 'OSMBuildings/0.1')

    def test_relation_and_bbox_urls(self, urlopen, sleep):
        urlopen.return_value = response()
        self.client.get_relation_data(7)
        self.assertEqual(urlopen.call_args[0][0].full_url, 'https://a.example/api/0.6/relation/7/full')
        self.client.get_inner_data(10.0, 45.0, 10.01, 45.01)
        self.assertEqual(urlopen.call_args[0][0].full_url,
                         'https://a.example/api/0.6/map?bbox=10.0,45.0,10.01,45.01')

    def test_retry_rotates_servers(self, urlopen, sleep):
        urlopen.side_effect = [urllib.error.URLError('down'), response()]
        self.assertEqual(self.client.get_way_data(1), '<osm/>')
        self.assertEqual(urlopen.call_args[0][0].full_url, 'https://b.example/api/0.6/way/1/full')
        sleep.assert_called_once_with(1)

    def test_gives_up_after_retries(self, urlopen, sleep):
        urlopen.side_effect = urllib.error.URLError('down')
        with self.assertRaises(OSMApiError):
            self.client.get_way_data(1)
        self.assertEqual(urlopen.call_count, 3)

    def test_missing_element_is_not_retried(self, urlopen, sleep):
        urlopen.side_effect = urllib.error.HTTPError('url', 404, 'Not Found', None, None)
        with self.assertRaises(OSMApiError):
            self.client.get_way_data(1)
        self.assertEqual(urlopen.call_count, 1)

    def test_oversized_bbox_is_not_fetched(self, urlopen, sleep):
        with self.assertRaises(OSMApiError):
            self.client.get_inner_data(0, 0, 1, 1)
        urlopen.assert_not_called()


class FileDocumentSourceTests(unittest.TestCase):
    def test_every_call_returns_the_file(self):
        source = FileDocumentSource(str(DATA_DIR / 'simple_way.osm'))
        text = source.get_way_data(100)
        self.assertIn('<way id="100">', text)
        self.assertEqual(source.get_inner_data(0, 0, 0, 0), text)

    def test_missing_file(self):
        with self.assertRaises(OSMApiError):
            FileDocumentSource(str(DATA_DIR / 'missing.osm')).get_way_data(1)

    def test_factory_prefers_file(self):
        source = create_document_source(ModelConfig(osm_path='x.osm'))
        self.assertIsInstance(source, FileDocumentSource)
        self.assertIsInstance(create_document_source(ModelConfig()), OSMApiClient)


class ModelConfigTests(unittest.TestCase):
    def test_rejects_bad_values(self):
        with self.assertRaises(ValueError):
            ModelConfig(api_servers=[])
        with self.assertRaises(ValueError):
            ModelConfig(timeout=0)
        with self.assertRaises(ValueError):
            ModelConfig(retry_count=-1)


if __name__ == "__main__":
    unittest.main()
