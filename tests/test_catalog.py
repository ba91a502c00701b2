"""
Tests for Catalog Parsing

Run with:
    python -m pytest tests/test_catalog.py -v
"""

import unittest

from pydantic import ValidationError

from spacetrash.catalog import Catalog, count_groups, iter_element_sets, parse_catalog, split_lines
from tests.helpers import ISS_LINE1, ISS_LINE2, three_le


class TestParseCatalog(unittest.TestCase):
    """Grouping of 3LE text into records."""

    def test_ids_follow_input_order(self):
        records = parse_catalog(three_le("A", "B", "C", "D"))

        self.assertEqual(len(records), 4)
        self.assertEqual([r.id for r in records], ["0", "1", "2", "3"])
        self.assertEqual([r.name for r in records], ["A", "B", "C", "D"])
        for record in records:
            self.assertEqual(record.line1, ISS_LINE1)
            self.assertEqual(record.line2, ISS_LINE2)

    def test_crlf_and_trailing_blank_lines(self):
        text = three_le("A", "B").replace("\n", "\r\n") + "\r\n\r\n"
        records = parse_catalog(text)

        self.assertEqual([r.name for r in records], ["A", "B"])
        self.assertEqual(records[1].line2, ISS_LINE2)

    def test_empty_element_line_skips_whole_triple(self):
        text = "\n".join([
            "A", ISS_LINE1, ISS_LINE2,
            "B", "", ISS_LINE2,
            "C", ISS_LINE1, "   ",
            "D", ISS_LINE1, ISS_LINE2,
        ])
        records = parse_catalog(text)

        self.assertEqual([r.name for r in records], ["A", "D"])
        # Ids stay contiguous: skipped triples never get one
        self.assertEqual([r.id for r in records], ["0", "1"])

    def test_trailing_incomplete_group_ignored(self):
        text = three_le("A") + "B\n" + ISS_LINE1 + "\n"
        records = parse_catalog(text)

        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].name, "A")

    def test_element_lines_not_validated(self):
        records = parse_catalog("JUNK\nnot a tle\nstill not a tle\n")

        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].line1, "not a tle")

    def test_empty_text(self):
        self.assertEqual(parse_catalog(""), [])
        self.assertEqual(parse_catalog("\n\n\n"), [])

    def test_append_to_existing_catalog(self):
        catalog = Catalog()
        parse_catalog(three_le("A", "B"), catalog=catalog)
        added = parse_catalog(three_le("C"), catalog=catalog)

        self.assertEqual(len(catalog), 3)
        self.assertEqual(added[0].id, "2")
        self.assertEqual([r.name for r in catalog], ["A", "B", "C"])

    def test_records_are_immutable(self):
        record = parse_catalog(three_le("A"))[0]

        with self.assertRaises(ValidationError):
            record.name = "B"


class TestTwoLineLayout(unittest.TestCase):
    """Name-less catalogs."""

    def test_named_after_catalog_number(self):
        text = "\n".join([ISS_LINE1, ISS_LINE2, ISS_LINE1, ISS_LINE2])
        records = parse_catalog(text, layout="2le")

        self.assertEqual(len(records), 2)
        self.assertEqual(records[0].name, "NORAD 25544")
        self.assertEqual(records[1].id, "1")

    def test_unknown_layout(self):
        with self.assertRaises(ValueError):
            list(iter_element_sets("", layout="4le"))


class TestLineHelpers(unittest.TestCase):

    def test_split_lines_strips(self):
        self.assertEqual(split_lines("  a \r\nb\rc\n\n"), ["a", "b", "c"])

    def test_count_groups(self):
        self.assertEqual(count_groups(three_le("A", "B")), 2)
        self.assertEqual(count_groups(three_le("A") + "B\n"), 1)


if __name__ == "__main__":
    unittest.main()
