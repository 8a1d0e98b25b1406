import math
import unittest
from datetime import datetime, timedelta, timezone

import ephem

from star_tracker.sidereal import (
    days_since_j2000,
    local_sidereal_time,
    normalize_degrees,
    universal_time_hours,
)


def angle_diff(a, b):
    return (a - b + 180.0) % 360.0 - 180.0


class TestNormalize(unittest.TestCase):
    def test_range_and_idempotence(self):
        for x in [-1e9, -720.5, -360.0, -1e-17, 0.0, 359.999, 360.0, 725.25, 1e9]:
            n = normalize_degrees(x)
            self.assertGreaterEqual(n, 0.0, x)
            self.assertLess(n, 360.0, x)
            self.assertEqual(normalize_degrees(n), n)

    def test_multi_cycle_values(self):
        self.assertAlmostEqual(normalize_degrees(725.25), 5.25)
        self.assertAlmostEqual(normalize_degrees(-725.25), 354.75)
        self.assertEqual(normalize_degrees(360.0), 0.0)
        self.assertEqual(normalize_degrees(-1e-17), 0.0)

    def test_non_finite(self):
        with self.assertRaises(ValueError):
            normalize_degrees(float("nan"))
        with self.assertRaises(ValueError):
            normalize_degrees(float("inf"))


class TestTimeBasis(unittest.TestCase):
    def test_days_since_j2000(self):
        self.assertEqual(days_since_j2000(datetime(2000, 1, 1, 13)), 0)
        self.assertEqual(days_since_j2000(datetime(2000, 1, 1, 11)), -1)
        self.assertEqual(days_since_j2000(datetime(2000, 1, 11, 13)), 10)
        self.assertEqual(days_since_j2000(datetime(1999, 12, 30, 13)), -2)

    def test_aware_instants_are_converted_to_utc(self):
        # 2000-01-01 11:00 UTC, i.e. before the epoch
        aware = datetime(2000, 1, 2, 1, 0, tzinfo=timezone(timedelta(hours=14)))
        self.assertEqual(days_since_j2000(aware), -1)
        self.assertEqual(days_since_j2000(aware.replace(tzinfo=None)), 0)

    def test_universal_time_hours(self):
        self.assertAlmostEqual(universal_time_hours(datetime(2024, 3, 1, 21, 30)), 21.5)
        cest = timezone(timedelta(hours=2))
        self.assertAlmostEqual(
            universal_time_hours(datetime(2024, 3, 1, 23, 30, tzinfo=cest)), 21.5
        )

    def test_formula(self):
        # d = 10, UT = 13h
        lst = local_sidereal_time(datetime(2000, 1, 11, 13, 0), 0.0)
        self.assertAlmostEqual(lst, 100.46 + 0.985647 * 10 + 15 * 13)
        lst_east = local_sidereal_time(datetime(2000, 1, 11, 13, 0), 19.94)
        self.assertAlmostEqual(lst_east, normalize_degrees(lst + 19.94))

    def test_range_for_extreme_longitudes(self):
        t = datetime(2031, 7, 4, 23, 59)
        for lon in (-180.0, -90.0, 0.0, 90.0, 180.0):
            lst = local_sidereal_time(t, lon)
            self.assertTrue(0.0 <= lst < 360.0)

    def test_one_day_later(self):
        """
        Description:
            Same clock time on consecutive days advances LST by the sidereal
            drift of 0.985647 degrees (360.985647 before wrapping).
        """
        t1 = datetime(2024, 3, 1, 20, 15)
        t2 = t1 + timedelta(days=1)
        lst1 = local_sidereal_time(t1, 19.94)
        lst2 = local_sidereal_time(t2, 19.94)
        self.assertAlmostEqual(normalize_degrees(lst2 - lst1), 0.985647, places=6)

    def test_increases_through_the_day(self):
        t = datetime(2024, 3, 1, 13, 0)
        prev = local_sidereal_time(t, 0.0)
        for minutes in range(10, 600, 10):
            cur = local_sidereal_time(t + timedelta(minutes=minutes), 0.0)
            self.assertAlmostEqual(normalize_degrees(cur - prev), 2.5, places=6)
            prev = cur

    def test_agrees_with_ephem(self):
        """
        Description:
            The low precision formula stays within a small fraction of a
            degree of ephem's apparent sidereal time shortly after 12:00 UTC,
            where dropping the day fraction costs least.
        """
        instant = datetime(2024, 3, 1, 12, 30)
        obs = ephem.Observer()
        obs.lat = "50.06"
        obs.lon = "19.94"
        obs.date = ephem.Date(instant)
        expected = math.degrees(float(obs.sidereal_time()))
        lst = local_sidereal_time(instant, 19.94)
        self.assertLess(abs(angle_diff(lst, expected)), 0.1)


if __name__ == "__main__":
    unittest.main()
