"""
Tests for the command-line interface.
"""

import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout

import main
from tests.helpers import remove_file, write_temp_csv


def run_cli(*argv):
    stdout = io.StringIO()
    stderr = io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        exit_code = main.main(list(argv))
    return exit_code, stdout.getvalue().splitlines(), stderr.getvalue()


class TestCommandLine(unittest.TestCase):
    """Test cases for the subcommands."""

    def test_cities(self):
        exit_code, lines, _ = run_cli("cities")

        self.assertEqual(exit_code, 0)
        self.assertEqual(lines, ["Barcelona", "Madrid"])

    def test_neighborhoods_of_district(self):
        _, lines, _ = run_cli("neighborhoods", "Barcelona", "--district", "Les Corts")

        self.assertEqual(lines, ["Les Corts", "La Maternitat i Sant Ramon", "Pedralbes"])

    def test_expand_and_resolve(self):
        _, lines, _ = run_cli("expand", "Barcelona (Todos los barrios)", "--city", "Barcelona")
        self.assertEqual(len(lines), 73)

        _, lines, _ = run_cli("resolve", "Sant Martí", "--city", "Barcelona")
        self.assertEqual(lines[0], "Sant Martí")
        self.assertEqual(lines[1], "/neighborhoods/Sant%20Mart%C3%AD")

        _, lines, _ = run_cli("resolve", "Nonexistent Place", "--city", "Barcelona")
        self.assertEqual(lines, ["(no results)"])

    def test_search(self):
        _, lines, _ = run_cli("search", "ribera")
        self.assertEqual(lines, ["Sant Pere, Santa Caterina i la Ribera, Ciutat Vella, Barcelona"])

        _, lines, _ = run_cli("--no-fuzzy", "search", "barcelonetta")
        self.assertEqual(lines, ["(no results)"])

        _, lines, _ = run_cli("search", "sant", "--limit", "3")
        self.assertEqual(len(lines), 3)

    def test_validate(self):
        exit_code, lines, _ = run_cli("validate")

        self.assertEqual(exit_code, 0)
        self.assertEqual(lines, ["Cities: 2", "Districts: 31", "Neighborhoods: 203"])

    def test_invalid_data_file(self):
        path = write_temp_csv("""
            city,district,neighborhood
            Alpha,North,Harbor
            Alpha,South,Harbor
        """)
        try:
            exit_code, _, stderr = run_cli("--data-file", path, "validate")
        finally:
            remove_file(path)

        self.assertEqual(exit_code, 1)
        self.assertIn("Error:", stderr)
        self.assertIn("Harbor", stderr)

    def test_missing_data_file(self):
        exit_code, _, stderr = run_cli("--data-file", "/nonexistent/locations.csv", "cities")

        self.assertEqual(exit_code, 1)
        self.assertIn("not found", stderr)

    def test_ratings_json(self):
        path = write_temp_csv("""
            neighborhood,district,city,security,parking,family_friendly,public_transport,green_spaces,services,user_id
            Goya,,Madrid,8,6,7,9,5,8,1
            Goya,Salamanca,Madrid,6,6,7,9,5,8,2
        """)
        try:
            exit_code, lines, _ = run_cli("ratings", path, "--json")
        finally:
            remove_file(path)

        self.assertEqual(exit_code, 0)
        summaries = json.loads("\n".join(lines))
        self.assertEqual(len(summaries), 1)
        self.assertEqual(summaries[0]['district'], 'Salamanca')
        self.assertEqual(summaries[0]['count'], 2)
        self.assertEqual(summaries[0]['security'], 7.0)

    def test_ratings_json_with_skipped_rows_stays_parseable(self):
        path = write_temp_csv("""
            neighborhood,district,city,security,parking,family_friendly,public_transport,green_spaces,services,user_id
            Goya,,Madrid,8,6,7,9,5,8,1
            Goya,,Madrid,99,6,7,9,5,8,2
        """)
        try:
            exit_code, lines, stderr = run_cli("ratings", path, "--json")
        finally:
            remove_file(path)

        self.assertEqual(exit_code, 0)
        summaries = json.loads("\n".join(lines))
        self.assertEqual(summaries[0]['count'], 1)
        self.assertIn("Skipping rating on line 3", stderr)
        self.assertIn("DATA QUALITY", stderr)

    def test_info_logging_goes_to_stderr(self):
        exit_code, lines, stderr = run_cli("--log-level", "INFO", "cities")

        self.assertEqual(exit_code, 0)
        self.assertEqual(lines, ["Barcelona", "Madrid"])
        self.assertIn("Location hierarchy loaded from", stderr)


if __name__ == '__main__':
    unittest.main()
