# -*- coding: utf-8 -*-

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from kalori.menu.catalog import SAMPLE_MENU, get_canonical_menu, parse_filename, scan_menu_dir
from kalori.menu.models import CategoryId


class TestParseFilename(unittest.TestCase):
    def test_name_and_calories(self) -> None:
        item = parse_filename("nasi_goreng-350.png", CategoryId.makanan_utama)
        self.assertIsNotNone(item)
        self.assertEqual(item.id, "makanan-utama-nasi_goreng")
        self.assertEqual(item.name, "Nasi Goreng")
        self.assertEqual(item.calories, 350)
        self.assertEqual(item.image_path, "/menu/makanan-utama/nasi_goreng-350.png")

    def test_suffixes(self) -> None:
        self.assertIsNotNone(parse_filename("es_teh-90.JPG", CategoryId.minuman))
        self.assertIsNotNone(parse_filename("es_teh-90.jpeg", CategoryId.minuman))
        self.assertIsNone(parse_filename("es_teh-90.gif", CategoryId.minuman))

    def test_rejects_bad_names(self) -> None:
        self.assertIsNone(parse_filename("tanpa_kalori.png", CategoryId.camilan))
        self.assertIsNone(parse_filename("tahu-abc.png", CategoryId.camilan))

    def test_leading_digits_only(self) -> None:
        item = parse_filename("kopi_susu-150kcal.png", CategoryId.minuman)
        self.assertEqual(item.calories, 150)


class TestCanonicalMenu(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)

    def test_scan_sorts_by_name(self) -> None:
        folder = self.root / "camilan"
        folder.mkdir()
        for name in ("tahu_goreng-120.png", "onde_onde-160.jpg", "notes.txt"):
            (folder / name).write_bytes(b"x")
        categories = scan_menu_dir(self.root)
        self.assertEqual([c.id for c in categories], list(CategoryId))
        camilan = categories[1]
        self.assertEqual([i.name for i in camilan.items], ["Onde Onde", "Tahu Goreng"])
        self.assertEqual(categories[0].items, [])

    def test_empty_dir_falls_back_to_sample(self) -> None:
        self.assertIs(get_canonical_menu(self.root), SAMPLE_MENU)
        self.assertIs(get_canonical_menu(None), SAMPLE_MENU)

    def test_sample_menu_shape(self) -> None:
        self.assertEqual([len(c.items) for c in SAMPLE_MENU], [8, 6, 6])
        self.assertEqual(SAMPLE_MENU[0].items[0].name, "Nasi Goreng")
        self.assertEqual(SAMPLE_MENU[0].items[0].calories, 350)


if __name__ == "__main__":
    unittest.main()
