"""Solve history: the most recent solved boards, persisted as a JSON list."""

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .model import Grid
from .parser import grid_to_dict, parse_grid
from src.utils.io import load_json, save_json

MAX_HISTORY_ITEMS = 50


@dataclass
class HistoryItem:
    id: str
    timestamp: str
    duration_ms: float
    grid: Grid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "duration": self.duration_ms,
            "grid": grid_to_dict(self.grid),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "HistoryItem":
        return cls(
            id=str(payload["id"]),
            timestamp=str(payload.get("timestamp", "")),
            duration_ms=float(payload.get("duration", 0.0)),
            grid=parse_grid(payload.get("grid") or {}),
        )


class SolveHistory:
    """Newest-first list of solved grids, capped at MAX_HISTORY_ITEMS."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.items: List[HistoryItem] = self._load()

    def _load(self) -> List[HistoryItem]:
        if not self.path.exists():
            return []
        try:
            payload = load_json(self.path)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            print(f"Warning: ignoring unreadable history file {self.path}: {e}")
            return []
        if not isinstance(payload, list):
            return []
        items = []
        for entry in payload:
            if isinstance(entry, dict) and "id" in entry:
                items.append(HistoryItem.from_dict(entry))
        return items

    def save(self) -> None:
        save_json(self.path, [item.to_dict() for item in self.items])

    def add(self, grid: Grid, duration_ms: float) -> HistoryItem:
        item = HistoryItem(
            id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc).isoformat(),
            duration_ms=duration_ms,
            grid=grid.copy(),
        )
        self.items = [item, *self.items][:MAX_HISTORY_ITEMS]
        self.save()
        return item

    def delete(self, item_id: str) -> bool:
        remaining = [item for item in self.items if item.id != item_id]
        removed = len(remaining) != len(self.items)
        if removed:
            self.items = remaining
            self.save()
        return removed

    def clear(self) -> None:
        self.items = []
        if self.path.exists():
            self.path.unlink()
