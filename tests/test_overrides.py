# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from kalori.menu.merge import MenuOverride
from kalori.menu.models import CategoryId, MenuItem
from kalori.menu.overrides import LocalOverrideStore


class TestLocalOverrideStore(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.path = Path(tmp.name) / "admin-menu-overrides-v1.json"

    def test_missing_file_is_empty(self) -> None:
        store = LocalOverrideStore(self.path)
        self.assertEqual(store.state.overrides, {})
        self.assertEqual(store.state.order, {})

    def test_corrupt_file_degrades_to_empty(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("kalori.menu.overrides", level="WARNING"):
            store = LocalOverrideStore(self.path)
        self.assertEqual(store.state.overrides, {})

    def test_wrong_shapes_are_dropped(self) -> None:
        self.path.write_text(json.dumps({"overrides": {"a": "x", "b": {"calories": 10}}, "order": {"camilan": "a"}}))
        store = LocalOverrideStore(self.path)
        self.assertEqual(list(store.state.overrides), ["b"])
        self.assertEqual(store.state.order, {})

    def test_mutations_rewrite_document(self) -> None:
        store = LocalOverrideStore(self.path)
        store.update_item("cm-1", MenuOverride(name="Pisang Keju"))
        store.update_item("cm-1", MenuOverride(calories=220))
        store.set_order(CategoryId.camilan.value, ["cm-2", "cm-1"])

        document = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(document["overrides"]["cm-1"], {"name": "Pisang Keju", "calories": 220})
        self.assertEqual(document["order"]["camilan"], ["cm-2", "cm-1"])

        reloaded = LocalOverrideStore(self.path)
        self.assertEqual(reloaded.state.overrides["cm-1"].calories, 220)

    def test_remove_item_clears_order(self) -> None:
        store = LocalOverrideStore(self.path)
        store.remember_item(
            MenuItem(id="cm-1", name="Pisang", calories=180, image_path="/x.png", category_id=CategoryId.camilan)
        )
        store.set_order("camilan", ["cm-2", "cm-1"])
        store.remove_item("cm-1")
        self.assertNotIn("cm-1", store.state.overrides)
        self.assertEqual(store.state.order["camilan"], ["cm-2"])

    def test_write_failure_is_logged(self) -> None:
        self.path.mkdir()
        store = LocalOverrideStore(self.path)
        with self.assertLogs("kalori.menu.overrides", level="WARNING"):
            store.set_order("camilan", ["cm-1"])
        self.assertEqual(store.state.order["camilan"], ["cm-1"])


if __name__ == "__main__":
    unittest.main()
