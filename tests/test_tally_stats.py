# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from kalori.menu.catalog import SAMPLE_MENU
from kalori.menu.models import CategoryId, MenuCategory, MenuItem
from kalori.menu.stats import compute_menu_stats
from kalori.menu.tally import CalorieTally


def _item(item_id: str, calories: int, hidden: bool = False) -> MenuItem:
    return MenuItem(
        id=item_id,
        name=item_id,
        calories=calories,
        image_path="/placeholder.svg",
        category_id=CategoryId.camilan,
        hidden=hidden,
    )


class TestCalorieTally(unittest.TestCase):
    def test_totals(self) -> None:
        tally = CalorieTally.for_menu(SAMPLE_MENU)
        tally.increment("mu-1")
        tally.increment("mu-1")
        tally.increment("mn-1")
        self.assertEqual(tally.total_calories, 350 * 2 + 90)
        self.assertEqual([(line.item_id, line.subtotal) for line in tally.lines()], [("mu-1", 700), ("mn-1", 90)])

    def test_decrement_never_negative(self) -> None:
        tally = CalorieTally.for_menu(SAMPLE_MENU)
        self.assertEqual(tally.decrement("cm-1"), 0)
        tally.increment("cm-1")
        self.assertEqual(tally.decrement("cm-1"), 0)
        self.assertEqual(tally.quantities, {})

    def test_hidden_and_unknown_items_count_zero(self) -> None:
        tally = CalorieTally([_item("a", 100), _item("b", 900, hidden=True)])
        hidden_only = CalorieTally.for_menu([MenuCategory(id=CategoryId.camilan, label="Camilan", items=[_item("b", 900, hidden=True)])])
        hidden_only.set_quantity("b", 2)
        self.assertEqual(hidden_only.total_calories, 0)
        tally.set_quantity("zz", 3)
        self.assertEqual(tally.total_calories, 0)
        self.assertEqual(tally.lines(), [])

    def test_clear(self) -> None:
        tally = CalorieTally.for_menu(SAMPLE_MENU)
        tally.set_quantity("mu-2", 3)
        tally.clear()
        self.assertEqual(tally.total_calories, 0)


class TestMenuStats(unittest.TestCase):
    def test_sample_menu_bands(self) -> None:
        stats = compute_menu_stats(SAMPLE_MENU)
        self.assertEqual(stats.total_items, 20)
        self.assertEqual(stats.total_categories, 3)
        self.assertEqual((stats.low, stats.medium, stats.high), (6, 14, 0))
        self.assertEqual(stats.hidden_total, 0)

    def test_band_edges_and_hidden_counts(self) -> None:
        category = MenuCategory(
            id=CategoryId.camilan,
            label="Camilan",
            items=[_item("a", 150), _item("b", 151, hidden=True), _item("c", 500), _item("d", 501, hidden=True)],
        )
        stats = compute_menu_stats([category])
        self.assertEqual((stats.low, stats.medium, stats.high), (1, 2, 1))
        self.assertEqual((stats.hidden_low, stats.hidden_medium, stats.hidden_high), (0, 1, 1))
        self.assertEqual(stats.hidden_total, 2)
        self.assertEqual(stats.hidden_by_category[0].count, 2)


if __name__ == "__main__":
    unittest.main()
