# -*- coding: utf-8 -*-
"""Client preference flags with an explicit load/save boundary."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict

from .events import Observable

logger = logging.getLogger(__name__)

THEMES = {"light", "dark"}
LANGUAGES = {"id", "en"}


@dataclass(frozen=True)
class ClientSettings:
    guest_access: bool = False
    split_view_enabled: bool = False
    theme: str = "light"
    language: str = "id"
    profile_setup_visible: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientSettings":
        defaults = cls()
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = data.get(f.name, getattr(defaults, f.name))
            default = getattr(defaults, f.name)
            if isinstance(default, bool):
                values[f.name] = raw if isinstance(raw, bool) else default
            else:
                values[f.name] = raw if isinstance(raw, str) else default
        if values["theme"] not in THEMES:
            values["theme"] = defaults.theme
        if values["language"] not in LANGUAGES:
            values["language"] = defaults.language
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SettingsStore:
    """Loads/saves ClientSettings as JSON and notifies subscribers on change."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.changes: Observable[ClientSettings] = Observable()
        self._current = self.load()

    @property
    def current(self) -> ClientSettings:
        return self._current

    def load(self) -> ClientSettings:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return ClientSettings()
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable client settings %s: %s", self.path, exc)
            return ClientSettings()
        if not isinstance(raw, dict):
            return ClientSettings()
        return ClientSettings.from_dict(raw)

    def save(self, value: ClientSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(value.to_dict(), indent=2), encoding="utf-8")

    def update(self, **changes: Any) -> ClientSettings:
        unknown = set(changes) - {f.name for f in fields(ClientSettings)}
        if unknown:
            raise KeyError(f"Unknown settings: {', '.join(sorted(unknown))}")
        updated = ClientSettings.from_dict({**self._current.to_dict(), **changes})
        if updated == self._current:
            return updated
        self.save(updated)
        self._current = updated
        self.changes.publish(updated)
        return updated

    def toggle(self, name: str) -> ClientSettings:
        value = getattr(self._current, name)
        if not isinstance(value, bool):
            raise TypeError(f"{name} is not a flag")
        return self.update(**{name: not value})
