import os
import sys
import unittest
from datetime import date
from unittest.mock import MagicMock

import requests

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from event_search.errors import ProviderDecodeError, ProviderError
from event_search.models.event import FoundEvent
from event_search.models.search import Coordinate, SearchRequest
from event_search.services.providers import SkiddleAdapter, TicketmasterAdapter, build_adapters
from event_search.services.providers.skiddle import SKIDDLE_SEARCH_URL
from event_search.services.providers.ticketmaster import TICKETMASTER_EVENTS_URL
from event_search.config import Settings


def json_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


def ticketmaster_event(name, local_date, city="Manchester"):
    return {
        "name": name,
        "url": f"https://www.ticketmaster.co.uk/{name.lower().replace(' ', '-')}",
        "dates": {"start": {"localDate": local_date, "localTime": "19:30:00"}},
        "_embedded": {"venues": [{"name": "Albert Hall", "city": {"name": city}}]},
        "classifications": [{"segment": {"name": "Music"}, "genre": {"name": "Dance/Electronic"}}],
    }


def ticketmaster_page(events, number=0, total_pages=1):
    return {
        "_embedded": {"events": events},
        "page": {"size": 100, "totalElements": len(events), "totalPages": total_pages, "number": number},
    }


class TestTicketmasterAdapter(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.adapter = TicketmasterAdapter("tm-key", session=self.session, timeout=7)
        self.request = SearchRequest(
            cities=("Manchester", "Leeds"),
            genres=("Techno",),
            date_from=date(2099, 6, 1),
            date_to=date(2099, 6, 30),
        )

    def test_build_query(self):
        query = self.adapter.build_query(self.request, "Techno,House")

        self.assertEqual(query.url, TICKETMASTER_EVENTS_URL)
        self.assertEqual(query.params["apikey"], "tm-key")
        self.assertEqual(query.params["city"], "Manchester,Leeds")
        self.assertEqual(query.params["classificationName"], "Techno,House")
        self.assertEqual(query.params["startDateTime"], "2099-06-01T00:00:00Z")
        self.assertEqual(query.params["endDateTime"], "2099-06-30T23:59:59Z")
        self.assertEqual(query.params["size"], 100)

    def test_build_query_without_genres(self):
        query = self.adapter.build_query(self.request, "")
        self.assertNotIn("classificationName", query.params)

    def test_build_query_without_cities_omits_city_filter(self):
        request = SearchRequest(
            cities=(),
            genres=(),
            date_from=date(2099, 6, 1),
            date_to=date(2099, 6, 30),
        )
        with self.assertLogs("event_search.services.providers.ticketmaster", level="WARNING"):
            query = self.adapter.build_query(request, "")

        self.assertNotIn("city", query.params)
        self.assertEqual(query.params["startDateTime"], "2099-06-01T00:00:00Z")

    def test_parse(self):
        events = self.adapter.parse(ticketmaster_page([ticketmaster_event("Warehouse Project", "2099-06-07")]))

        self.assertEqual(events, [FoundEvent(
            name="Warehouse Project",
            date=date(2099, 6, 7),
            city="Manchester",
            ticket_url="https://www.ticketmaster.co.uk/warehouse-project",
            genre="Music",
            subgenre="Dance/Electronic",
        )])

    def test_parse_without_embedded_is_empty(self):
        self.assertEqual(self.adapter.parse({"page": {"totalPages": 0, "number": 0}}), [])

    def test_parse_tolerates_missing_venue_and_classification(self):
        raw = {"name": "Mystery Gig", "dates": {"start": {"localDate": "2099-06-02"}}}
        events = self.adapter.parse({"_embedded": {"events": [raw]}})
        self.assertEqual(events, [FoundEvent(name="Mystery Gig", date=date(2099, 6, 2))])

    def test_parse_skips_events_without_date(self):
        raw = ticketmaster_event("No Date", "TBA")
        with self.assertLogs("event_search.services.providers.ticketmaster", level="WARNING"):
            events = self.adapter.parse(ticketmaster_page([raw, ticketmaster_event("Ok", "2099-06-03")]))
        self.assertEqual([event.name for event in events], ["Ok"])

    def test_parse_rejects_wrong_shape(self):
        for payload in (["not", "an", "object"], {"_embedded": {"events": "nope"}}):
            with self.subTest(payload=payload):
                with self.assertRaises(ProviderDecodeError):
                    self.adapter.parse(payload)

    def test_execute_walks_pages(self):
        self.session.get.side_effect = [
            json_response(ticketmaster_page([ticketmaster_event("One", "2099-06-01")], 0, 2)),
            json_response(ticketmaster_page([ticketmaster_event("Two", "2099-06-02")], 1, 2)),
        ]
        query = self.adapter.build_query(self.request, "Techno")

        events = self.adapter.execute(query)

        self.assertEqual([event.name for event in events], ["One", "Two"])
        pages = [call.kwargs["params"]["page"] for call in self.session.get.call_args_list]
        self.assertEqual(pages, [0, 1])
        self.assertEqual(self.session.get.call_args.kwargs["timeout"], 7)

    def test_execute_stops_at_max_pages(self):
        adapter = TicketmasterAdapter("tm-key", session=self.session, max_pages=1)
        self.session.get.return_value = json_response(
            ticketmaster_page([ticketmaster_event("One", "2099-06-01")], 0, 10)
        )
        events = adapter.execute(adapter.build_query(self.request, ""))
        self.assertEqual(len(events), 1)
        self.session.get.assert_called_once()

    def test_failed_page_fails_invocation(self):
        self.session.get.side_effect = [
            json_response(ticketmaster_page([ticketmaster_event("One", "2099-06-01")], 0, 2)),
            json_response({"fault": "rate limited"}, status_code=429),
        ]
        with self.assertRaises(ProviderError):
            self.adapter.execute(self.adapter.build_query(self.request, ""))

    def test_non_success_status(self):
        self.session.get.return_value = json_response({"fault": "invalid key"}, status_code=401)
        with self.assertRaises(ProviderError):
            self.adapter.execute(self.adapter.build_query(self.request, ""))

    def test_undecodable_body(self):
        response = json_response(None)
        response.json.side_effect = ValueError("Expecting value")
        self.session.get.return_value = response
        with self.assertRaises(ProviderDecodeError):
            self.adapter.execute(self.adapter.build_query(self.request, ""))

    def test_timeout_is_a_provider_error(self):
        self.session.get.side_effect = requests.Timeout("read timed out")
        with self.assertRaises(ProviderError):
            self.adapter.execute(self.adapter.build_query(self.request, ""))

    def test_missing_api_key(self):
        adapter = TicketmasterAdapter(None, session=self.session)
        with self.assertRaises(ProviderError):
            adapter.execute(adapter.build_query(self.request, ""))
        self.session.get.assert_not_called()


class TestSkiddleAdapter(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.adapter = SkiddleAdapter("sk-key", session=self.session, radius=8)
        self.request = SearchRequest(
            cities=("Manchester",),
            genres=("Techno",),
            date_from=date(2099, 6, 1),
            date_to=date(2099, 6, 30),
        )
        self.coordinate = Coordinate(longitude=-2.2446, latitude=53.4808)

    def test_build_query(self):
        query = self.adapter.build_query(self.request, "3,1", self.coordinate, scope="Manchester")

        self.assertEqual(query.url, SKIDDLE_SEARCH_URL)
        self.assertEqual(query.scope, "Manchester")
        self.assertEqual(query.params["api_key"], "sk-key")
        self.assertEqual(query.params["longitude"], "-2.244600")
        self.assertEqual(query.params["latitude"], "53.480800")
        self.assertEqual(query.params["radius"], 8)
        self.assertEqual(query.params["minDate"], "2099-06-01")
        self.assertEqual(query.params["maxDate"], "2099-06-30")
        self.assertEqual(query.params["description"], 1)
        self.assertEqual(query.params["g"], "3,1")

    def test_build_query_omits_empty_genres(self):
        query = self.adapter.build_query(self.request, "", self.coordinate)
        self.assertNotIn("g", query.params)

    def test_build_query_requires_coordinate(self):
        with self.assertRaises(ValueError):
            self.adapter.build_query(self.request, "3")

    def test_execute(self):
        self.session.get.return_value = json_response({
            "error": 0,
            "totalcount": "1",
            "results": [{
                "EventCode": "CLUB",
                "eventname": "Techno Tuesday",
                "venue": {"name": "Soup Kitchen", "town": "Manchester"},
                "link": "https://www.skiddle.com/whats-on/Manchester/techno-tuesday/",
                "date": "2099-06-10",
                "genres": [{"genreid": "3", "name": "Techno"}],
            }],
        })

        events = self.adapter.execute(self.adapter.build_query(self.request, "3", self.coordinate))

        self.assertEqual(events, [FoundEvent(
            name="Techno Tuesday",
            date=date(2099, 6, 10),
            city="Manchester",
            ticket_url="https://www.skiddle.com/whats-on/Manchester/techno-tuesday/",
            genre="CLUB",
            subgenre="Techno",
        )])

    def test_api_error_payload(self):
        with self.assertRaises(ProviderDecodeError):
            self.adapter.parse({"error": 1, "errormessage": "Invalid API key"})

    def test_missing_results(self):
        with self.assertRaises(ProviderDecodeError):
            self.adapter.parse({"error": 0})

    def test_skips_events_without_date(self):
        with self.assertLogs("event_search.services.providers.skiddle", level="WARNING"):
            events = self.adapter.parse({"results": [{"eventname": "Someday", "date": ""}]})
        self.assertEqual(events, [])


class TestBuildAdapters(unittest.TestCase):

    def test_registry(self):
        settings = Settings(
            ticketmaster_api_key="tm",
            skiddle_api_key="sk",
            request_timeout=3,
            ticketmaster_max_pages=2,
            skiddle_radius=15,
        )
        adapters = build_adapters(settings, session=MagicMock())

        self.assertEqual(list(adapters), ["ticketmaster", "skiddle"])
        self.assertFalse(adapters["ticketmaster"].requires_coordinates)
        self.assertTrue(adapters["skiddle"].requires_coordinates)
        self.assertEqual(adapters["ticketmaster"].max_pages, 2)
        self.assertEqual(adapters["skiddle"].radius, 15)
        self.assertEqual(adapters["skiddle"].timeout, 3)


if __name__ == '__main__':
    unittest.main()
