"""
Tests for neighborhood ratings and their aggregates.
"""

import logging
import unittest

from location_hierarchy.exceptions import DataLoadError, FileAccessError, ValidationError
from location_hierarchy.hierarchy import LocationHierarchy
from location_hierarchy.locations import DEFAULT_HIERARCHY
from location_hierarchy.models import LocationKey
from location_hierarchy.ratings import (
    SCORE_FIELDS,
    NeighborhoodRating,
    RatingStore
)
from tests.helpers import remove_file, small_cities, write_temp_csv


def make_payload(**overrides):
    payload = {
        'neighborhood': 'El Raval',
        'city': 'Barcelona',
        'security': 8,
        'parking': 5,
        'family_friendly': 6,
        'public_transport': 9,
        'green_spaces': 4,
        'services': 7,
        'user_id': 1
    }
    payload.update(overrides)
    return payload


class TestNeighborhoodRating(unittest.TestCase):
    """Test validation of rating submissions."""

    def test_from_dict(self):
        rating = NeighborhoodRating.from_dict(make_payload())

        self.assertEqual(rating.neighborhood, 'El Raval')
        self.assertIsNone(rating.district)
        self.assertEqual(rating.security, 8.0)
        self.assertEqual(rating.user_id, 1)
        self.assertEqual(set(rating.scores()), set(SCORE_FIELDS))

    def test_camel_case_keys(self):
        payload = make_payload()
        for snake, camel in [('family_friendly', 'familyFriendly'),
                             ('public_transport', 'publicTransport'),
                             ('green_spaces', 'greenSpaces'),
                             ('user_id', 'userId')]:
            payload[camel] = payload.pop(snake)

        rating = NeighborhoodRating.from_dict(payload)

        self.assertEqual(rating.green_spaces, 4.0)
        self.assertEqual(rating.user_id, 1)

    def test_numeric_strings_and_anonymous_users(self):
        rating = NeighborhoodRating.from_dict(make_payload(security=" 7.5 ", user_id="-3"))

        self.assertEqual(rating.security, 7.5)
        self.assertEqual(rating.user_id, -3)

    def test_blank_district_is_none(self):
        rating = NeighborhoodRating.from_dict(make_payload(district="  "))

        self.assertIsNone(rating.district)

    def test_invalid_scores(self):
        for value in [0, 11, True, "high", None, float('nan')]:
            with self.subTest(value=value):
                with self.assertRaises(ValidationError) as ctx:
                    NeighborhoodRating.from_dict(make_payload(parking=value))
                self.assertEqual(ctx.exception.field_name, 'parking')

    def test_invalid_names_and_user(self):
        with self.assertRaises(ValidationError):
            NeighborhoodRating.from_dict(make_payload(neighborhood="  "))
        with self.assertRaises(ValidationError):
            NeighborhoodRating.from_dict(make_payload(city=None))
        with self.assertRaises(ValidationError):
            NeighborhoodRating.from_dict(make_payload(user_id=1.5))
        with self.assertRaises(ValidationError):
            NeighborhoodRating.from_dict(make_payload(user_id=False))

    def test_missing_field(self):
        payload = make_payload()
        del payload['services']

        with self.assertRaises(ValidationError) as ctx:
            NeighborhoodRating.from_dict(payload)

        self.assertEqual(ctx.exception.field_name, 'services')

    def test_not_a_mapping(self):
        with self.assertRaises(ValidationError):
            NeighborhoodRating.from_dict(["El Raval"])


class TestRatingStore(unittest.TestCase):
    """Test storing and aggregating ratings."""

    def setUp(self):
        self.store = RatingStore(DEFAULT_HIERARCHY, logging.getLogger("test_ratings"))

    def test_add_fills_canonical_key(self):
        stored = self.store.add_rating(NeighborhoodRating.from_dict(make_payload()))

        self.assertEqual(stored.district, 'Ciutat Vella')
        self.assertEqual(stored.id, 1)
        self.assertIsNotNone(stored.created_at)
        self.assertEqual(len(self.store), 1)

        second = self.store.add_rating(NeighborhoodRating.from_dict(make_payload(user_id=2)))
        self.assertEqual(second.id, 2)

    def test_unknown_location_is_rejected(self):
        for overrides in [{'city': 'Madrid'},
                          {'neighborhood': 'Nonexistent Place'},
                          {'district': 'Eixample'}]:
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValidationError):
                    self.store.add_rating(NeighborhoodRating.from_dict(make_payload(**overrides)))

        self.assertEqual(len(self.store), 0)

    def test_summarize_merges_with_and_without_district(self):
        self.store.add_rating(NeighborhoodRating.from_dict(make_payload()))
        self.store.add_rating(NeighborhoodRating.from_dict(
            make_payload(district='Ciutat Vella', security=9, user_id=2)
        ))

        summary = self.store.summarize(LocationKey('El Raval', None, 'Barcelona'))

        self.assertEqual(summary.key, LocationKey('El Raval', 'Ciutat Vella', 'Barcelona'))
        self.assertEqual(summary.count, 2)
        self.assertEqual(summary.averages['security'], 8.5)
        self.assertEqual(summary.averages['parking'], 5.0)
        # (8.5 + 5 + 6 + 9 + 4 + 7) / 6
        self.assertEqual(summary.overall, 6.6)
        self.assertEqual(summary.to_dict()['district'], 'Ciutat Vella')

    def test_summarize_without_ratings(self):
        self.assertIsNone(self.store.summarize(LocationKey('El Raval', None, 'Barcelona')))

        self.store.add_rating(NeighborhoodRating.from_dict(make_payload()))
        self.assertIsNone(self.store.summarize(LocationKey('Goya', None, 'Madrid')))
        self.assertIsNone(self.store.summarize(LocationKey('Nonexistent Place', None, 'Madrid')))

    def test_summaries_in_order_of_first_rating(self):
        self.store.add_rating(NeighborhoodRating.from_dict(
            make_payload(neighborhood='Goya', city='Madrid')
        ))
        self.store.add_rating(NeighborhoodRating.from_dict(make_payload()))
        self.store.add_rating(NeighborhoodRating.from_dict(
            make_payload(neighborhood='Goya', city='Madrid', user_id=2)
        ))

        summaries = self.store.summaries()

        self.assertEqual(
            [(s.key.neighborhood, s.count) for s in summaries],
            [('Goya', 2), ('El Raval', 1)]
        )
        self.assertEqual(summaries[0].key.district, 'Salamanca')

    def test_get_ratings(self):
        self.store.add_rating(NeighborhoodRating.from_dict(make_payload()))

        self.assertEqual(len(self.store.get_ratings('El Raval')), 1)
        self.assertEqual(self.store.get_ratings('El Raval', 'Madrid'), [])

    def test_to_dataframe(self):
        self.assertTrue(self.store.to_dataframe().empty)

        self.store.add_rating(NeighborhoodRating.from_dict(make_payload()))
        df = self.store.to_dataframe()

        self.assertEqual(len(df), 1)
        self.assertEqual(df.iloc[0]['district'], 'Ciutat Vella')

    def test_custom_hierarchy(self):
        store = RatingStore(LocationHierarchy(small_cities()))
        stored = store.add_rating(NeighborhoodRating.from_dict(
            make_payload(neighborhood='Hillcrest', city='Beta')
        ))

        self.assertEqual(stored.district, 'North')


class TestRatingImport(unittest.TestCase):
    """Test importing ratings from CSV."""

    def setUp(self):
        self.store = RatingStore(DEFAULT_HIERARCHY, logging.getLogger("test_ratings"))
        self.paths = []

    def tearDown(self):
        for path in self.paths:
            remove_file(path)

    def _csv(self, content):
        path = write_temp_csv(content)
        self.paths.append(path)
        return path

    def test_load_csv_skips_bad_rows(self):
        path = self._csv("""
            neighborhood,district,city,security,parking,familyFriendly,publicTransport,greenSpaces,services,userId
            El Raval,,Barcelona,8,5,6,9,4,7,1
            El Raval,Ciutat Vella,Barcelona,9,5,6,9,4,7,2
            El Raval,,Madrid,8,5,6,9,4,7,3
            Goya,Salamanca,Madrid,11,5,6,9,4,7,4
        """)

        with self.assertLogs("test_ratings", level="WARNING") as logs:
            stored, skipped = self.store.load_csv(path, show_progress=False)

        self.assertEqual((stored, skipped), (2, 2))
        self.assertEqual(len(logs.records), 2)
        self.assertIn("line 4", logs.output[0])

        summary = self.store.summarize(LocationKey('El Raval', 'Ciutat Vella', 'Barcelona'))
        self.assertEqual(summary.averages['security'], 8.5)

    def test_load_csv_missing_file(self):
        with self.assertRaises(FileAccessError):
            self.store.load_csv("/nonexistent/ratings.csv", show_progress=False)

    def test_load_csv_empty_file(self):
        with self.assertRaises(DataLoadError):
            self.store.load_csv(self._csv(""), show_progress=False)


if __name__ == '__main__':
    unittest.main()
