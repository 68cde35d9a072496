# -*- coding: utf-8 -*-
"""Canonical menu source.

Menu images live in one folder per category and carry the item data in their
file name: ``nasi_goreng-350.png`` is "Nasi Goreng", 350 kcal. When no images
are present the bundled sample menu is used instead.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from .models import CATEGORY_LABELS, CategoryId, MenuCategory, MenuItem

_IMAGE_SUFFIX_RE = re.compile(r"\.(png|jpg|jpeg)$", re.IGNORECASE)


def _title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def parse_filename(filename: str, category: CategoryId) -> Optional[MenuItem]:
    if not _IMAGE_SUFFIX_RE.search(filename):
        return None
    stem = _IMAGE_SUFFIX_RE.sub("", filename)
    name_part, dash, calories_part = stem.rpartition("-")
    if not dash:
        return None
    match = re.match(r"^\s*[+-]?\d+", calories_part)
    if not match:
        return None
    calories = int(match.group(0))
    if calories < 0:
        return None
    return MenuItem(
        id=f"{category.value}-{name_part}",
        name=_title_case(name_part.replace("_", " ")),
        calories=calories,
        image_path=f"/menu/{category.value}/{filename}",
        category_id=category,
    )


def scan_menu_dir(root: Path) -> List[MenuCategory]:
    categories: List[MenuCategory] = []
    for category, label in CATEGORY_LABELS.items():
        folder = root / category.value
        items: List[MenuItem] = []
        if folder.is_dir():
            for path in folder.iterdir():
                if not path.is_file():
                    continue
                item = parse_filename(path.name, category)
                if item is not None:
                    items.append(item)
        items.sort(key=lambda i: i.name.casefold())
        categories.append(MenuCategory(id=category, label=label, items=items))
    return categories


def _sample(category: CategoryId, prefix: str, rows: List[tuple]) -> MenuCategory:
    return MenuCategory(
        id=category,
        label=CATEGORY_LABELS[category],
        items=[
            MenuItem(
                id=f"{prefix}-{idx}",
                name=name,
                calories=calories,
                image_path="/placeholder.svg",
                category_id=category,
            )
            for idx, (name, calories) in enumerate(rows, start=1)
        ],
    )


SAMPLE_MENU: List[MenuCategory] = [
    _sample(
        CategoryId.makanan_utama,
        "mu",
        [
            ("Nasi Goreng", 350),
            ("Mie Ayam", 420),
            ("Soto Ayam", 280),
            ("Gado Gado", 320),
            ("Rendang", 450),
            ("Ayam Bakar", 380),
            ("Ikan Goreng", 290),
            ("Bakso", 340),
        ],
    ),
    _sample(
        CategoryId.camilan,
        "cm",
        [
            ("Pisang Goreng", 180),
            ("Martabak Manis", 450),
            ("Risoles", 150),
            ("Tahu Goreng", 120),
            ("Kue Lapis", 200),
            ("Onde Onde", 160),
        ],
    ),
    _sample(
        CategoryId.minuman,
        "mn",
        [
            ("Es Teh Manis", 90),
            ("Es Jeruk", 120),
            ("Kopi Susu", 150),
            ("Es Campur", 280),
            ("Jus Alpukat", 220),
            ("Es Kelapa Muda", 80),
        ],
    ),
]


def get_canonical_menu(menu_dir: Optional[Path] = None) -> List[MenuCategory]:
    """Real menu from ``menu_dir`` when it has any items, else the sample menu."""
    if menu_dir is not None:
        scanned = scan_menu_dir(menu_dir)
        if any(c.items for c in scanned):
            return scanned
    return SAMPLE_MENU
