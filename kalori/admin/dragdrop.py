# -*- coding: utf-8 -*-
"""Drag-and-drop gesture: idle -> dragging -> hovering -> idle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ..menu.merge import move_item


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING = "hovering"


@dataclass(frozen=True)
class DragState:
    phase: DragPhase = DragPhase.IDLE
    source_id: Optional[str] = None
    target_id: Optional[str] = None


IDLE = DragState()


class DragGesture:
    def __init__(self) -> None:
        self.state = IDLE

    def start(self, source_id: str) -> DragState:
        self.state = DragState(DragPhase.DRAGGING, source_id=source_id)
        return self.state

    def over(self, target_id: str) -> DragState:
        if self.state.phase is DragPhase.IDLE:
            return self.state
        self.state = DragState(DragPhase.HOVERING, source_id=self.state.source_id, target_id=target_id)
        return self.state

    def drop(self, target_id: str, ids: Sequence[str]) -> Optional[List[str]]:
        """Finish the gesture; the reordered ids, or None when nothing moves."""
        source_id = self.state.source_id
        self.state = IDLE
        if source_id is None:
            return None
        return move_item(ids, source_id, target_id)

    def end(self) -> DragState:
        self.state = IDLE
        return self.state
