import datetime as dt
import unittest

from yeargrid.months import build_year
from yeargrid.validate import ConfigurationError


class TestMonthGridContract(unittest.TestCase):
    def test_twelve_ascending_months_with_exactly_one_flag(self) -> None:
        now = dt.date(2024, 6, 15)
        for year in (1, 1999, 2023, 2024, 2025, 9999):
            cells = build_year(year, now)
            self.assertEqual(len(cells), 12)
            self.assertEqual([c.date for c in cells], [dt.date(year, m, 1) for m in range(1, 13)])
            self.assertEqual([c.month_index for c in cells], list(range(12)))
            for c in cells:
                self.assertEqual(sum([c.is_past, c.is_current, c.is_future]), 1, c)

    def test_flags_relative_to_now(self) -> None:
        cells = build_year(2024, dt.date(2024, 6, 15))
        self.assertTrue(all(c.is_past for c in cells[:5]))
        self.assertTrue(cells[5].is_current)
        self.assertTrue(all(c.is_future for c in cells[6:]))

        self.assertTrue(all(c.is_past for c in build_year(2023, dt.date(2024, 1, 1))))
        self.assertTrue(all(c.is_future for c in build_year(2025, dt.date(2024, 12, 31))))

    def test_now_may_be_a_datetime(self) -> None:
        cells = build_year(2024, dt.datetime(2024, 2, 29, 23, 59))
        self.assertTrue(cells[1].is_current)

    def test_year_end_months(self) -> None:
        cells = build_year(2024, dt.date(2024, 6, 15), {11})
        self.assertEqual([c.month_index for c in cells if c.is_year_end], [11])

        cells = build_year(2024, dt.date(2024, 6, 15), [2, 5])
        self.assertEqual([c.month_index for c in cells if c.is_year_end], [2, 5])

    def test_defaults_for_consumer_fields(self) -> None:
        for c in build_year(2024, dt.date(2024, 6, 15)):
            self.assertIsNone(c.css_class)
            self.assertFalse(c.drag_over)

    def test_deterministic(self) -> None:
        now = dt.date(2024, 6, 15)
        self.assertEqual(build_year(2024, now, {11}), build_year(2024, now, {11}))

    def test_invalid_inputs(self) -> None:
        now = dt.date(2024, 6, 15)
        with self.assertRaises(ConfigurationError):
            build_year(2024, now, {12})
        with self.assertRaises(ConfigurationError):
            build_year(2024, now, {-1})
        with self.assertRaises(ConfigurationError):
            build_year(0, now)
        with self.assertRaises(ConfigurationError):
            build_year("2024", now)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main(verbosity=2)
