import unittest
from datetime import datetime, timezone

from star_tracker.coordinates import GeographicPosition
from star_tracker.errors import LocationUnavailableError
from star_tracker.providers import (
    FixedClock,
    StaticLocationProvider,
    SystemClock,
    location_from_config,
)


class TestClocks(unittest.TestCase):
    def test_system_clock_is_utc(self):
        now = SystemClock().now()
        self.assertEqual(now.utcoffset().total_seconds(), 0)

    def test_fixed_clock(self):
        t = datetime(2024, 3, 1, 21, 0, tzinfo=timezone.utc)
        clock = FixedClock(t)
        self.assertEqual(clock.now(), t)
        self.assertEqual(clock.now(), t)


class TestLocation(unittest.IsolatedAsyncioTestCase):
    async def test_no_fix(self):
        with self.assertRaises(LocationUnavailableError):
            await StaticLocationProvider().get_position()

    async def test_failed_fix_keeps_previous(self):
        provider = StaticLocationProvider(GeographicPosition(50.0, 20.0))
        provider.fail("timeout")
        self.assertEqual(await provider.get_position(), GeographicPosition(50.0, 20.0))

    async def test_from_config(self):
        provider = location_from_config({"observer": {"latitude": 51.5, "longitude": -0.1}})
        self.assertEqual(await provider.get_position(), GeographicPosition(51.5, -0.1))

    async def test_from_config_never_defaults_to_zero(self):
        for config in ({}, {"observer": None}, {"observer": {"latitude": 51.5}}):
            with self.assertRaises(LocationUnavailableError):
                await location_from_config(config).get_position()


if __name__ == "__main__":
    unittest.main()
