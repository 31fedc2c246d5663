import datetime as dt
import unittest

from yeargrid.interaction import InteractionSessionManager, column_width, round_half_away_from_zero
from yeargrid.model import Event
from yeargrid.validate import ConfigurationError, InvalidStateError

D = dt.datetime


class TestResizeProtocolContract(unittest.TestCase):
    def setUp(self) -> None:
        self.mgr = InteractionSessionManager()
        self.ev = Event(id="e1", start=D(2024, 3, 15, 10, 30), end=D(2024, 4, 2, 18, 0))

    def test_left_edge_moves_start_by_whole_days(self) -> None:
        self.mgr.begin_resize(self.ev, "left", 2, 3, column_width=30)
        self.assertEqual(self.mgr.update_resize(self.ev, -30), (1, 4))
        change = self.mgr.end_resize(self.ev)
        self.assertEqual(change.new_start, D(2024, 3, 14, 10, 30))
        self.assertEqual(change.new_end, self.ev.end)
        self.assertIs(change.event, self.ev)
        self.assertFalse(self.mgr.has_session(self.ev))

    def test_right_edge_moves_end(self) -> None:
        self.mgr.begin_resize(self.ev, "right", 2, 1)
        self.assertEqual(self.mgr.update_resize(self.ev, 65, 30), (2, 3))
        change = self.mgr.end_resize(self.ev)
        self.assertEqual(change.new_start, self.ev.start)
        self.assertEqual(change.new_end, D(2024, 4, 4, 18, 0))

    def test_right_edge_without_end_keeps_dates(self) -> None:
        ev = Event(id="e2", start=D(2024, 3, 15))
        self.mgr.begin_resize(ev, "right", 2, 1, column_width=30)
        self.mgr.update_resize(ev, 30)
        change = self.mgr.end_resize(ev)
        self.assertEqual(change.new_start, ev.start)
        self.assertIsNone(change.new_end)

    def test_no_movement_yields_unchanged_dates(self) -> None:
        self.mgr.begin_resize(self.ev, "left", 4, 2, column_width=30)
        change = self.mgr.end_resize(self.ev)
        self.assertEqual((change.new_start, change.new_end), (self.ev.start, self.ev.end))

    def test_rounding_is_half_away_from_zero(self) -> None:
        self.mgr.begin_resize(self.ev, "left", 2, 3, column_width=30)
        self.assertEqual(self.mgr.update_resize(self.ev, -45), (0, 5))
        self.assertEqual(self.mgr.update_resize(self.ev, 14), (2, 3))
        self.assertEqual(self.mgr.update_resize(self.ev, 15), (3, 2))

        self.assertEqual(round_half_away_from_zero(2.5), 3)
        self.assertEqual(round_half_away_from_zero(-2.5), -3)
        self.assertEqual(round_half_away_from_zero(0.49), 0)
        self.assertEqual(round_half_away_from_zero(-0.49), 0)

    def test_updates_are_relative_to_the_original_geometry(self) -> None:
        self.mgr.begin_resize(self.ev, "right", 0, 2, column_width=10)
        self.mgr.update_resize(self.ev, 30)
        self.assertEqual(self.mgr.update_resize(self.ev, 10), (0, 3))

    def test_zero_width_candidates_are_rejected(self) -> None:
        self.mgr.begin_resize(self.ev, "left", 2, 1, column_width=30)
        self.assertEqual(self.mgr.update_resize(self.ev, 60), (2, 1))
        self.assertEqual(self.mgr.update_resize(self.ev, 30), (2, 1))

    def test_validate_resize_predicate_gates_candidates(self) -> None:
        seen = []

        def allow(c) -> bool:
            seen.append(c)
            return c.offset >= 1

        mgr = InteractionSessionManager(validate_resize=allow)
        mgr.begin_resize(self.ev, "left", 2, 3, column_width=30)
        self.assertEqual(mgr.update_resize(self.ev, -60), (2, 3))
        self.assertEqual(mgr.update_resize(self.ev, -30), (1, 4))
        self.assertEqual(seen[0].edge, "left")
        self.assertEqual(seen[0].pixel_delta, -60.0)
        self.assertIs(seen[0].event, self.ev)

    def test_protocol_violations(self) -> None:
        with self.assertRaises(InvalidStateError):
            self.mgr.end_resize(self.ev)
        with self.assertRaises(InvalidStateError):
            self.mgr.update_resize(self.ev, 10, 30)

        self.mgr.begin_resize(self.ev, "left", 2, 3)
        with self.assertRaises(InvalidStateError):
            self.mgr.begin_resize(self.ev, "right", 2, 3)
        with self.assertRaises(ConfigurationError):
            self.mgr.update_resize(self.ev, 10)
        with self.assertRaises(ConfigurationError):
            self.mgr.update_resize(self.ev, 10, 0)

        self.mgr.end_resize(self.ev)
        with self.assertRaises(InvalidStateError):
            self.mgr.end_resize(self.ev)

    def test_invalid_begin_arguments(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.mgr.begin_resize(self.ev, "top", 2, 3)
        with self.assertRaises(ConfigurationError):
            self.mgr.begin_resize(self.ev, "left", -1, 3)
        with self.assertRaises(ConfigurationError):
            self.mgr.begin_resize(self.ev, "left", 0, 0)
        self.assertFalse(self.mgr.has_session(self.ev))

    def test_resize_cannot_leave_the_grid(self) -> None:
        seen = []

        def allow(c) -> bool:
            seen.append(c)
            return True

        mgr = InteractionSessionManager(validate_resize=allow)
        mgr.begin_resize(self.ev, "left", 0, 1, column_width=100, grid_length=12)
        self.assertEqual(mgr.update_resize(self.ev, -300), (0, 1))
        self.assertEqual(seen, [])
        self.assertEqual(mgr.end_resize(self.ev).new_start, self.ev.start)

        late = Event(id="e3", start=D(2024, 11, 2), end=D(2024, 11, 4))
        mgr.begin_resize(late, "right", 10, 1, column_width=100, grid_length=12)
        self.assertEqual(mgr.update_resize(late, 100), (10, 2))
        self.assertEqual(mgr.update_resize(late, 300), (10, 2))
        self.assertEqual(len(seen), 1)

    def test_begin_resize_checks_grid_length(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.mgr.begin_resize(self.ev, "right", 11, 2, grid_length=12)
        with self.assertRaises(ConfigurationError):
            self.mgr.begin_resize(self.ev, "right", 0, 1, grid_length=0)
        self.assertFalse(self.mgr.has_session(self.ev))

    def test_concurrent_resizes_for_different_events(self) -> None:
        other = Event(id="e2", start=D(2024, 6, 1), end=D(2024, 6, 3))
        self.mgr.begin_resize(self.ev, "left", 2, 3, column_width=30)
        self.mgr.begin_resize(other, "right", 5, 1, column_width=30)
        self.mgr.update_resize(other, 30)
        self.assertEqual(self.mgr.end_resize(other).new_end, D(2024, 6, 4))
        self.assertTrue(self.mgr.is_resizing(self.ev))
        self.mgr.end_resize(self.ev)
        self.assertFalse(self.mgr.resize_active)


class TestDragProtocolContract(unittest.TestCase):
    def setUp(self) -> None:
        self.mgr = InteractionSessionManager()
        self.ev = Event(id="d1", start=D(2024, 1, 1), end=D(2024, 1, 5), draggable=True)

    def test_drag_shifts_start_and_end(self) -> None:
        self.mgr.begin_drag(self.ev)
        change = self.mgr.end_drag(self.ev, 90, 30)
        self.assertEqual(change.new_start, D(2024, 1, 4))
        self.assertEqual(change.new_end, D(2024, 1, 8))
        self.assertFalse(self.mgr.is_dragging(self.ev))

    def test_drag_backwards_rounds_away_from_zero(self) -> None:
        self.mgr.begin_drag(self.ev, column_width=30)
        change = self.mgr.end_drag(self.ev, -45)
        self.assertEqual(change.new_start, D(2023, 12, 30))
        self.assertEqual(change.new_end, D(2024, 1, 3))

    def test_drag_keeps_time_of_day_and_missing_end(self) -> None:
        ev = Event(id="d2", start=D(2024, 2, 28, 9, 45))
        self.mgr.begin_drag(ev)
        change = self.mgr.end_drag(ev, 60, 30)
        self.assertEqual(change.new_start, D(2024, 3, 1, 9, 45))
        self.assertIsNone(change.new_end)

    def test_vertical_displacement_is_ignored(self) -> None:
        self.mgr.begin_drag(self.ev, column_width=30)
        self.assertTrue(self.mgr.update_drag(self.ev, 30, 500))
        change = self.mgr.end_drag(self.ev, 30)
        self.assertEqual(change.new_start, D(2024, 1, 2))

    def test_drag_blocked_while_any_resize_is_open(self) -> None:
        other = Event(id="r1", start=D(2024, 5, 1), end=D(2024, 5, 2))
        self.mgr.begin_resize(other, "right", 4, 1)
        self.assertFalse(self.mgr.validate_drag_move(self.ev, 10, 0))
        with self.assertRaises(InvalidStateError):
            self.mgr.begin_drag(self.ev)
        self.mgr.end_resize(other)
        self.mgr.begin_drag(self.ev)
        self.assertTrue(self.mgr.is_dragging(self.ev))

    def test_drag_and_resize_exclusive_per_event(self) -> None:
        self.mgr.begin_drag(self.ev)
        with self.assertRaises(InvalidStateError):
            self.mgr.begin_resize(self.ev, "left", 0, 1)
        with self.assertRaises(InvalidStateError):
            self.mgr.begin_drag(self.ev)

    def test_resize_of_other_event_allowed_during_drag(self) -> None:
        other = Event(id="r1", start=D(2024, 5, 1), end=D(2024, 5, 2))
        self.mgr.begin_drag(self.ev)
        self.mgr.begin_resize(other, "right", 4, 1)
        self.assertTrue(self.mgr.is_dragging(self.ev))
        self.assertTrue(self.mgr.resize_active)

    def test_validate_drag_predicate(self) -> None:
        mgr = InteractionSessionManager(validate_drag=lambda c: c.dx >= 0)
        mgr.begin_drag(self.ev, column_width=30)
        self.assertFalse(mgr.update_drag(self.ev, -10))
        self.assertTrue(mgr.update_drag(self.ev, 10))

    def test_end_drag_defaults_to_last_accepted_move(self) -> None:
        mgr = InteractionSessionManager(validate_drag=lambda c: c.dx <= 60)
        mgr.begin_drag(self.ev, column_width=30)
        self.assertTrue(mgr.update_drag(self.ev, 60))
        self.assertFalse(mgr.update_drag(self.ev, 120))
        change = mgr.end_drag(self.ev)
        self.assertEqual(change.new_start, D(2024, 1, 3))
        self.assertEqual(change.new_end, D(2024, 1, 7))

    def test_end_drag_without_moves_keeps_dates(self) -> None:
        self.mgr.begin_drag(self.ev, column_width=30)
        change = self.mgr.end_drag(self.ev)
        self.assertEqual((change.new_start, change.new_end), (self.ev.start, self.ev.end))

    def test_end_without_session(self) -> None:
        with self.assertRaises(InvalidStateError):
            self.mgr.end_drag(self.ev, 30, 30)
        with self.assertRaises(InvalidStateError):
            self.mgr.update_drag(self.ev, 30)
        self.mgr.begin_drag(self.ev)
        self.mgr.end_drag(self.ev, 30, 30)
        with self.assertRaises(InvalidStateError):
            self.mgr.end_drag(self.ev, 30, 30)

    def test_end_drag_requires_column_width(self) -> None:
        self.mgr.begin_drag(self.ev)
        with self.assertRaises(ConfigurationError):
            self.mgr.end_drag(self.ev, 30)
        self.assertTrue(self.mgr.is_dragging(self.ev))


class TestSessionCancellationContract(unittest.TestCase):
    def test_abort_discards_without_change(self) -> None:
        mgr = InteractionSessionManager()
        ev = Event(id=1, start=D(2024, 1, 1))
        mgr.begin_resize(ev, "right", 0, 1)
        self.assertTrue(mgr.abort(ev))
        self.assertFalse(mgr.abort(ev))
        with self.assertRaises(InvalidStateError):
            mgr.end_resize(ev)

    def test_prune_drops_sessions_of_removed_events(self) -> None:
        mgr = InteractionSessionManager()
        a = Event(id="a", start=D(2024, 1, 1))
        b = Event(id="b", start=D(2024, 2, 1))
        c = Event(id="c", start=D(2024, 3, 1))
        mgr.begin_drag(a)
        mgr.begin_resize(b, "left", 1, 1)
        mgr.begin_resize(c, "left", 2, 1)
        self.assertEqual(sorted(mgr.prune(["a", "c"])), ["b"])
        self.assertTrue(mgr.has_session("a"))
        self.assertFalse(mgr.has_session("b"))
        mgr.reset()
        self.assertFalse(mgr.has_session("a") or mgr.has_session("c"))


class TestColumnWidthContract(unittest.TestCase):
    def test_floor_of_container_over_grid(self) -> None:
        self.assertEqual(column_width(365, 12), 30)
        self.assertEqual(column_width(400, 4), 100)
        self.assertEqual(column_width(10, 12), 0)

    def test_invalid(self) -> None:
        with self.assertRaises(ConfigurationError):
            column_width(100, 0)
        with self.assertRaises(ConfigurationError):
            column_width(-1, 4)


if __name__ == "__main__":
    unittest.main(verbosity=2)
