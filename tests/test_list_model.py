from __future__ import annotations

import unittest

from wiper.list_model import SelectableList


class SelectableListTests(unittest.TestCase):
    def test_empty_list_has_no_cursor_and_navigation_is_noop(self) -> None:
        items: SelectableList[str] = SelectableList()
        items.next()
        items.previous()
        items.toggle_at_cursor()

        self.assertIsNone(items.cursor)
        self.assertIsNone(items.current())
        self.assertEqual(items.selected, frozenset())
        self.assertEqual(len(items), 0)

    def test_set_items_resets_cursor_and_clears_selection(self) -> None:
        items = SelectableList(["a", "b", "c"])
        items.next()
        items.toggle_at_cursor()
        self.assertEqual(items.selected, frozenset({1}))

        items.set_items(["x", "y"])

        self.assertEqual(items.cursor, 0)
        self.assertEqual(items.selected, frozenset())
        self.assertEqual(items.items, ("x", "y"))

        items.set_items([])
        self.assertIsNone(items.cursor)

    def test_cursor_wraps_in_both_directions(self) -> None:
        items = SelectableList(["a", "b", "c"])

        items.previous()
        self.assertEqual(items.cursor, 2)
        items.next()
        self.assertEqual(items.cursor, 0)
        items.next()
        items.next()
        self.assertEqual(items.current(), "c")

    def test_toggle_flips_membership_and_selected_items_keep_list_order(self) -> None:
        items = SelectableList(["a", "b", "c"])
        items.previous()
        items.toggle_at_cursor()
        items.next()
        items.toggle_at_cursor()

        self.assertEqual(items.selected_items(), ["a", "c"])

        items.toggle_at_cursor()
        self.assertEqual(items.selected_items(), ["c"])

    def test_selected_accessor_is_a_snapshot(self) -> None:
        items = SelectableList(["a"])
        snapshot = items.selected
        items.toggle_at_cursor()

        self.assertEqual(snapshot, frozenset())
        self.assertEqual(items.selected, frozenset({0}))


if __name__ == "__main__":
    unittest.main()
