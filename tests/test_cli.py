"""
Unit tests for the command-line interface.

Runs the Typer app in-process with typer.testing.CliRunner.
"""

import json
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from geohash_ranges.api.geohash_utils import encode_int
from geohash_ranges.api.tuple_layer import Subspace
from geohash_ranges.cli.main import app


runner = CliRunner()


class TestQueryCommands(unittest.TestCase):
    """Test suite for ranges, precision and within commands"""

    def test_ranges_table(self):
        result = runner.invoke(app, ["ranges", "--radius", "50", "--lat", "40", "--lon", "-75"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Key ranges within 50 km", result.output)

    def test_ranges_json(self):
        result = runner.invoke(app, ["ranges", "-r", "100", "--lat", "40", "--lon", "-75", "--format", "json"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('"search_bits": 16', result.output)
        self.assertIn('"ranges"', result.output)

    def test_ranges_default_namespace(self):
        """Test that printed ranges use the same "geo" subspace as stored keys"""
        result = runner.invoke(app, ["ranges", "-r", "50", "--lat", "40", "--lon", "-75", "--format", "json"])
        self.assertEqual(result.exit_code, 0, result.output)
        ranges = json.loads(result.output)["ranges"]
        prefix = Subspace(("geo",)).key().hex()
        self.assertTrue(all(r["begin"].startswith(prefix) and r["end"].startswith(prefix) for r in ranges))

        key = Subspace(("geo",)).pack((encode_int(40.0, -75.0, 64), "liberty-bell"))
        self.assertTrue(any(bytes.fromhex(r["begin"]) <= key < bytes.fromhex(r["end"]) for r in ranges))

    def test_ranges_without_namespace(self):
        args = ["ranges", "-r", "50", "--lat", "40", "--lon", "-75", "--namespace", "", "--format", "json"]
        result = runner.invoke(app, args)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(all(r["begin"].startswith("1c") for r in json.loads(result.output)["ranges"]))

    def test_ranges_invalid_latitude(self):
        result = runner.invoke(app, ["ranges", "--radius", "50", "--lat", "95", "--lon", "-75"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Failed to build ranges", result.output)

    def test_ranges_invalid_bits(self):
        result = runner.invoke(app, ["ranges", "--radius", "50", "--lat", "40", "--lon", "-75", "--bits", "15"])
        self.assertEqual(result.exit_code, 1)

    def test_precision(self):
        result = runner.invoke(app, ["precision", "--radius", "100"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("16 bits", result.output)

    def test_within(self):
        code = encode_int(40.0, -75.0, 16)
        args = ["within", str(code), "--bits", "16", "--radius", "200", "--lat", "40", "--lon", "-75"]
        result = runner.invoke(app, args)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("is within", result.output)

    def test_not_within(self):
        code = encode_int(40.7128, -74.0060, 64)
        result = runner.invoke(app, ["within", str(code), "--radius", "10", "--lat", "39.95", "--lon", "-75.16"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("is not within", result.output)

    def test_within_invalid_query(self):
        result = runner.invoke(app, ["within", "0", "--radius", "10", "--lat", "0", "--lon", "200"])
        self.assertEqual(result.exit_code, 2)

    def test_within_default_bits(self):
        """Test that zero bits means a full 64-bit code"""
        code = encode_int(40.0, -75.0, 64)
        args = ["within", str(code), "--bits", "0", "--radius", "1", "--lat", "40", "--lon", "-75"]
        result = runner.invoke(app, args)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("is within", result.output)

    def test_within_code_too_wide(self):
        """Test that a code wider than its precision is rejected"""
        args = ["within", "70000", "--bits", "16", "--radius", "100", "--lat", "40", "--lon", "-75"]
        result = runner.invoke(app, args)
        self.assertEqual(result.exit_code, 2)
        self.assertIn("does not fit in 16 bits", result.output)

    def test_version(self):
        result = runner.invoke(app, ["version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("0.1.0", result.output)


class TestIndexCommands(unittest.TestCase):
    """Test suite for the index command group"""

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.db = str(Path(self._tmpdir.name) / "cli.db")

    def tearDown(self):
        self._tmpdir.cleanup()

    def invoke(self, *args):
        return runner.invoke(app, ["--db", self.db, "index", *args])

    def test_add_query_remove(self):
        result = self.invoke("add", "liberty-bell", "--lat", "39.9496", "--lon", "-75.1503", "--value", "bell")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Stored liberty-bell", result.output)

        result = self.invoke("count")
        self.assertIn("1 points", result.output)

        result = self.invoke("query", "--radius", "10", "--lat", "39.95", "--lon", "-75.16")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("liberty-bell", result.output)

        result = self.invoke("remove", "liberty-bell", "--lat", "39.9496", "--lon", "-75.1503")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Removed liberty-bell", result.output)

        result = self.invoke("count")
        self.assertIn("0 points", result.output)

    def test_query_no_results(self):
        result = self.invoke("query", "--radius", "10", "--lat", "0", "--lon", "0")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No points within 10 km", result.output)

    def test_add_invalid_coordinates(self):
        result = self.invoke("add", "nowhere", "--lat", "91", "--lon", "0")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Failed to store nowhere", result.output)


if __name__ == "__main__":
    unittest.main()
