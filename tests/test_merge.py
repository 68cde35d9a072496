# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from kalori.admin.dragdrop import DragGesture, DragPhase
from kalori.menu.catalog import SAMPLE_MENU
from kalori.menu.merge import (
    MenuOverride,
    OverrideState,
    apply_order,
    apply_override,
    apply_state,
    insert_after,
    is_order_dirty,
    move_item,
    visible_only,
)
from kalori.menu.models import CategoryId, MenuItem


def _item(item_id: str, name: str = "", calories: int = 100, hidden: bool = False) -> MenuItem:
    return MenuItem(
        id=item_id,
        name=name or item_id.upper(),
        calories=calories,
        image_path="/placeholder.svg",
        category_id=CategoryId.camilan,
        hidden=hidden,
    )


class TestApplyOrder(unittest.TestCase):
    def test_listed_first_rest_appended(self) -> None:
        items = [_item("a"), _item("b"), _item("c")]
        self.assertEqual([i.id for i in apply_order(items, ["c"])], ["c", "a", "b"])
        self.assertEqual([i.id for i in apply_order(items, ["b", "a"])], ["b", "a", "c"])

    def test_unknown_and_duplicate_ids_ignored(self) -> None:
        items = [_item("a"), _item("b")]
        self.assertEqual([i.id for i in apply_order(items, ["zz", "b", "b"])], ["b", "a"])

    def test_no_order_keeps_input(self) -> None:
        items = [_item("a"), _item("b")]
        self.assertEqual(apply_order(items, None), items)
        self.assertEqual(apply_order(items, []), items)

    def test_idempotent(self) -> None:
        items = [_item("a"), _item("b"), _item("c")]
        once = apply_order(items, ["c", "a"])
        self.assertEqual(apply_order(once, ["c", "a"]), once)

    def test_every_item_kept_exactly_once(self) -> None:
        items = [_item(x) for x in "abcdef"]
        result = apply_order(items, ["f", "x", "a", "f"])
        self.assertEqual(sorted(i.id for i in result), list("abcdef"))


class TestApplyState(unittest.TestCase):
    def test_override_and_order(self) -> None:
        state = OverrideState(
            overrides={"cm-2": MenuOverride(name="Martabak Telur", calories=500, hidden=True)},
            order={CategoryId.camilan.value: ["cm-3", "cm-2"]},
        )
        merged = apply_state(SAMPLE_MENU, state)
        camilan = next(c for c in merged if c.id == CategoryId.camilan)
        self.assertEqual([i.id for i in camilan.items][:3], ["cm-3", "cm-2", "cm-1"])
        martabak = camilan.items[1]
        self.assertEqual((martabak.name, martabak.calories, martabak.hidden), ("Martabak Telur", 500, True))
        # Canonical data is untouched.
        self.assertEqual(SAMPLE_MENU[1].items[1].name, "Martabak Manis")

    def test_image_override_replaces_path(self) -> None:
        item = apply_override(_item("a"), MenuOverride(image_data_url="data:image/png;base64,AAAA"))
        self.assertEqual(item.image_path, "data:image/png;base64,AAAA")
        self.assertIs(apply_override(item, None), item)

    def test_visible_only(self) -> None:
        state = OverrideState(overrides={"mn-1": MenuOverride(hidden=True)})
        visible = visible_only(apply_state(SAMPLE_MENU, state))
        minuman = next(c for c in visible if c.id == CategoryId.minuman)
        self.assertNotIn("mn-1", [i.id for i in minuman.items])
        self.assertEqual(len(minuman.items), 5)

    def test_override_from_dict_drops_bad_values(self) -> None:
        override = MenuOverride.from_dict({"name": 5, "calories": -3, "hidden": "yes", "image_data_url": "x"})
        self.assertEqual(override.to_dict(), {"image_data_url": "x"})


class TestOrderEditing(unittest.TestCase):
    def test_is_order_dirty(self) -> None:
        self.assertFalse(is_order_dirty(None, ["a", "b"]))
        self.assertFalse(is_order_dirty(["a", "b"], ["a", "b"]))
        self.assertTrue(is_order_dirty(["b", "a"], ["a", "b"]))
        self.assertTrue(is_order_dirty(["a"], ["a", "b"]))

    def test_move_item(self) -> None:
        self.assertEqual(move_item(["a", "b", "c"], "a", "c"), ["b", "c", "a"])
        self.assertEqual(move_item(["a", "b", "c"], "c", "a"), ["c", "a", "b"])
        self.assertIsNone(move_item(["a", "b"], "a", "a"))
        self.assertIsNone(move_item(["a", "b"], "a", "zz"))

    def test_insert_after(self) -> None:
        self.assertEqual(insert_after(["a", "b"], "n", "a"), ["a", "n", "b"])
        self.assertEqual(insert_after(["a", "b"], "n", None), ["n", "a", "b"])
        self.assertEqual(insert_after(["a", "b"], "n", "gone"), ["n", "a", "b"])
        self.assertEqual(insert_after(["a", "n", "b"], "n", "b"), ["a", "b", "n"])


class TestDragGesture(unittest.TestCase):
    def test_full_gesture(self) -> None:
        gesture = DragGesture()
        gesture.start("a")
        self.assertEqual(gesture.state.phase, DragPhase.DRAGGING)
        gesture.over("c")
        self.assertEqual((gesture.state.phase, gesture.state.target_id), (DragPhase.HOVERING, "c"))
        self.assertEqual(gesture.drop("c", ["a", "b", "c"]), ["b", "c", "a"])
        self.assertEqual(gesture.state.phase, DragPhase.IDLE)

    def test_drop_on_itself_is_noop(self) -> None:
        gesture = DragGesture()
        gesture.start("a")
        self.assertIsNone(gesture.drop("a", ["a", "b"]))
        self.assertEqual(gesture.state.phase, DragPhase.IDLE)

    def test_over_and_drop_without_start(self) -> None:
        gesture = DragGesture()
        gesture.over("b")
        self.assertEqual(gesture.state.phase, DragPhase.IDLE)
        self.assertIsNone(gesture.drop("b", ["a", "b"]))

    def test_end_cancels(self) -> None:
        gesture = DragGesture()
        gesture.start("a")
        gesture.end()
        self.assertIsNone(gesture.drop("b", ["a", "b"]))


if __name__ == "__main__":
    unittest.main()
