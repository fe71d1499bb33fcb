import os
import sys
import unittest
from datetime import date

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from event_search.errors import InvalidDateRangeError
from event_search.models.event import FoundEvent
from event_search.models.search import ALL_PROVIDERS, SearchRequest
from event_search.utils import parse_date, split_terms, to_date_string, to_iso_instant


class TestDateHelpers(unittest.TestCase):

    def test_parse_date(self):
        self.assertEqual(parse_date(" 2025-06-01 "), date(2025, 6, 1))

    def test_parse_date_rejects_other_formats(self):
        for text in ("01/06/2025", "2025-13-01", "", None):
            with self.subTest(text=text):
                with self.assertRaises(InvalidDateRangeError):
                    parse_date(text)

    def test_wire_formats(self):
        self.assertEqual(to_iso_instant(date(2025, 6, 1)), "2025-06-01T00:00:00Z")
        self.assertEqual(to_iso_instant(date(2025, 6, 30), end_of_day=True), "2025-06-30T23:59:59Z")
        self.assertEqual(to_date_string(date(2025, 6, 1)), "2025-06-01")


class TestSplitTerms(unittest.TestCase):

    def test_split_terms(self):
        self.assertEqual(split_terms("Rock, Jazz,,Pop "), ["Rock", "Jazz", "Pop"])

    def test_duplicates_keep_first(self):
        self.assertEqual(split_terms("Manchester, manchester, Leeds"), ["Manchester", "Leeds"])

    def test_empty(self):
        self.assertEqual(split_terms(""), [])
        self.assertEqual(split_terms(None), [])


class TestSearchRequest(unittest.TestCase):

    def test_from_text(self):
        request = SearchRequest.from_text(
            cities="Manchester, Leeds",
            genres="Techno",
            date_from="2025-06-01",
            date_to="2025-06-30",
            providers="Ticketmaster, skiddle",
        )

        self.assertEqual(request.cities, ("Manchester", "Leeds"))
        self.assertEqual(request.genres, ("Techno",))
        self.assertEqual(request.date_from, date(2025, 6, 1))
        self.assertEqual(request.enabled_providers, frozenset({"ticketmaster", "skiddle"}))

    def test_all_providers_by_default(self):
        request = SearchRequest.from_text("Manchester", "", "2025-06-01", "2025-06-30")
        self.assertEqual(request.enabled_providers, ALL_PROVIDERS)
        self.assertEqual(request.genres, ())

    def test_unparseable_date(self):
        with self.assertRaises(InvalidDateRangeError):
            SearchRequest.from_text("Manchester", "Techno", "June 1st", "2025-06-30")

    def test_date_problems(self):
        request = SearchRequest(("Manchester",), ("Techno",), date(2025, 6, 30), date(2025, 6, 1))

        self.assertEqual(len(request.date_problems(today=date(2025, 7, 1))), 2)
        self.assertEqual(len(request.date_problems(today=date(2025, 6, 1))), 1)

    def test_valid_window_has_no_problems(self):
        request = SearchRequest(("Manchester",), (), date(2025, 6, 1), date(2025, 6, 1))
        self.assertEqual(request.date_problems(today=date(2025, 6, 1)), [])


class TestFoundEvent(unittest.TestCase):

    def test_is_immutable(self):
        found = FoundEvent(name="Rave", date=date(2025, 6, 1))
        with self.assertRaises(AttributeError):
            found.name = "Other"


if __name__ == '__main__':
    unittest.main()
