"""
Unit tests for geohash_utils module.

Tests integer geohash encoding, decoding, neighbor lookup, and distances.
"""

import math
import unittest

import deal

from geohash_ranges.api.core.constants import EARTH_RADIUS_KM
from geohash_ranges.api.geohash_utils import (
    bounding_box_int,
    decode_int,
    encode_int,
    haversine_km,
    neighbors_int,
)


class TestEncodeInt(unittest.TestCase):
    """Test suite for encode_int function"""

    def test_encode_corners(self):
        """Test that the corners of the map map to the extreme codes"""
        self.assertEqual(encode_int(-90.0, -180.0, 4), 0)
        self.assertEqual(encode_int(90.0, 180.0, 4), 15)
        self.assertEqual(encode_int(90.0, 180.0, 64), (1 << 64) - 1)

    def test_encode_quadrants(self):
        """Test 2-bit codes: longitude is the high bit, latitude the low bit"""
        self.assertEqual(encode_int(-45.0, -90.0, 2), 0b00)
        self.assertEqual(encode_int(45.0, -90.0, 2), 0b01)
        self.assertEqual(encode_int(-45.0, 90.0, 2), 0b10)
        self.assertEqual(encode_int(45.0, 90.0, 2), 0b11)

    def test_encode_known_value(self):
        """Test a hand-computed 16-bit code"""
        # lat (40 + 90) / 180 * 256 -> 184, lon (-75 + 180) / 360 * 256 -> 74
        self.assertEqual(encode_int(40.0, -75.0, 16), 0x65C8)

    def test_coarse_code_is_prefix_of_fine_code(self):
        """Test that a coarse code is the high bits of the full-precision code"""
        lat, lon = 40.7128, -74.0060  # New York
        full = encode_int(lat, lon, 64)
        for bits in range(2, 65, 2):
            self.assertEqual(encode_int(lat, lon, bits), full >> (64 - bits))

    def test_encode_range(self):
        """Test that codes stay within [0, 2**bits)"""
        for bits in (1, 2, 7, 16, 33, 64):
            code = encode_int(12.34, 56.78, bits)
            self.assertGreaterEqual(code, 0)
            self.assertLess(code, 1 << bits)

    def test_encode_clamping(self):
        """Test that coordinates are clamped to valid ranges"""
        self.assertEqual(encode_int(100.0, 0.0, 10), encode_int(90.0, 0.0, 10))
        self.assertEqual(encode_int(-100.0, 0.0, 10), encode_int(-90.0, 0.0, 10))
        self.assertEqual(encode_int(0.0, 200.0, 10), encode_int(0.0, 180.0, 10))
        self.assertEqual(encode_int(0.0, -200.0, 10), encode_int(0.0, -180.0, 10))

    def test_encode_invalid_bits(self):
        """Test that precisions outside 1-64 violate the contract"""
        with self.assertRaises(deal.PreContractError):
            encode_int(0.0, 0.0, 0)
        with self.assertRaises(deal.PreContractError):
            encode_int(0.0, 0.0, 65)


class TestBoundingBox(unittest.TestCase):
    """Test suite for bounding_box_int function"""

    def test_box_contains_point(self):
        """Test that the cell of a point contains the point"""
        lat, lon = 40.7128, -74.0060
        for bits in (4, 16, 40, 64):
            lat_min, lat_max, lon_min, lon_max = bounding_box_int(encode_int(lat, lon, bits), bits)
            self.assertTrue(lat_min - 1e-9 <= lat <= lat_max + 1e-9)
            self.assertTrue(lon_min - 1e-9 <= lon <= lon_max + 1e-9)

    def test_box_size(self):
        """Test cell size for even and odd precisions"""
        lat_min, lat_max, lon_min, lon_max = bounding_box_int(0, 40)
        self.assertAlmostEqual(lat_max - lat_min, 180.0 / 2**20)
        self.assertAlmostEqual(lon_max - lon_min, 360.0 / 2**20)

        # An odd bit count has one more longitude bit than latitude bits
        lat_min, lat_max, lon_min, lon_max = bounding_box_int(0, 3)
        self.assertAlmostEqual(lat_max - lat_min, 90.0)
        self.assertAlmostEqual(lon_max - lon_min, 90.0)

    def test_first_cell(self):
        """Test that code 0 starts at the south-west corner"""
        lat_min, _, lon_min, _ = bounding_box_int(0, 20)
        self.assertEqual(lat_min, -90.0)
        self.assertEqual(lon_min, -180.0)


class TestDecodeInt(unittest.TestCase):
    """Test suite for decode_int function"""

    def test_decode_quadrant_center(self):
        """Test that decoding returns the center of the cell"""
        self.assertEqual(decode_int(0, 2), (-45.0, -90.0))
        self.assertEqual(decode_int(3, 2), (45.0, 90.0))

    def test_decode_roundtrip(self):
        """Test that encode/decode roundtrip works approximately"""
        original_lat, original_lon = 48.8566, 2.3522  # Paris
        lat, lon = decode_int(encode_int(original_lat, original_lon, 40), 40)
        self.assertLessEqual(abs(lat - original_lat), 180.0 / 2**20)
        self.assertLessEqual(abs(lon - original_lon), 360.0 / 2**20)

    def test_decode_full_precision(self):
        """Test that a 64-bit code decodes to within centimeters of the point"""
        lat, lon = decode_int(encode_int(-33.8688, 151.2093, 64), 64)
        self.assertAlmostEqual(lat, -33.8688, places=6)
        self.assertAlmostEqual(lon, 151.2093, places=6)


class TestNeighborsInt(unittest.TestCase):
    """Test suite for neighbors_int function"""

    def test_neighbors_count(self):
        """Test that neighbors returns 8 distinct cells away from the edges"""
        code = encode_int(10.0, 10.0, 20)
        result = neighbors_int(code, 20)
        self.assertEqual(len(result), 8)
        self.assertEqual(len(set(result)), 8)
        self.assertNotIn(code, result)

    def test_neighbors_are_adjacent(self):
        """Test that north and east neighbors share an edge with the cell"""
        code = encode_int(10.0, 10.0, 20)
        lat_min, lat_max, lon_min, lon_max = bounding_box_int(code, 20)
        north, _, east = neighbors_int(code, 20)[:3]

        n_lat_min, _, n_lon_min, _ = bounding_box_int(north, 20)
        self.assertAlmostEqual(n_lat_min, lat_max)
        self.assertAlmostEqual(n_lon_min, lon_min)

        e_lat_min, _, e_lon_min, _ = bounding_box_int(east, 20)
        self.assertAlmostEqual(e_lat_min, lat_min)
        self.assertAlmostEqual(e_lon_min, lon_max)

    def test_neighbors_at_pole(self):
        """Test that the northern row collapses onto itself at the pole"""
        code = encode_int(90.0, 0.0, 10)
        north, north_east, east = neighbors_int(code, 10)[:3]
        self.assertEqual(north, code)
        self.assertEqual(north_east, east)

    def test_neighbors_wrap_date_line(self):
        """Test that the east neighbor of the last column is the first column"""
        code = encode_int(0.0, 179.9, 10)
        east = neighbors_int(code, 10)[2]
        _, _, lon_min, _ = bounding_box_int(east, 10)
        self.assertEqual(lon_min, -180.0)

        west = neighbors_int(encode_int(0.0, -179.9, 10), 10)[6]
        _, _, _, lon_max = bounding_box_int(west, 10)
        self.assertAlmostEqual(lon_max, 180.0)


class TestHaversine(unittest.TestCase):
    """Test suite for haversine_km function"""

    def test_same_point(self):
        """Test zero distance for identical points"""
        self.assertEqual(haversine_km(40.0, -75.0, 40.0, -75.0), 0.0)

    def test_one_degree_at_equator(self):
        """Test one degree of longitude along the equator"""
        self.assertAlmostEqual(haversine_km(0.0, 0.0, 0.0, 1.0), 111.226, delta=0.01)

    def test_symmetry(self):
        """Test that distance does not depend on argument order"""
        d1 = haversine_km(51.5074, -0.1278, 48.8566, 2.3522)
        d2 = haversine_km(48.8566, 2.3522, 51.5074, -0.1278)
        self.assertAlmostEqual(d1, d2)
        # London to Paris is roughly 344 km
        self.assertAlmostEqual(d1, 344.0, delta=3.0)

    def test_antipodal_points(self):
        """Test that antipodal points give half the circumference instead of a domain error"""
        half_circumference = math.pi * EARTH_RADIUS_KM
        self.assertAlmostEqual(haversine_km(-12.0, 0.0, 12.0, 180.0), half_circumference, places=3)
        for lat in (-89.0, -45.0, -12.0, 0.0, 33.3, 73.125):
            for lon in (-168.75, -90.0, 0.0, 45.5):
                distance = haversine_km(lat, lon, -lat, lon + 180.0)
                self.assertAlmostEqual(distance, half_circumference, places=3)


if __name__ == "__main__":
    unittest.main()
