"""High score persistence and management."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class HighScoreEntry:
    score: int
    cells: int
    won: bool
    time: float
    date: str


class HighScoreManager:
    """Loads, saves, and queries finished runs from a JSON file.

    Runs are ranked by how far they got, then by how fast.
    """

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._scores: dict[str, list[HighScoreEntry]] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if not self.filepath.exists():
            return
        data = json.loads(self.filepath.read_text())
        for size_key, entries in data.items():
            self._scores[size_key] = [HighScoreEntry(**e) for e in entries]
        logger.info("Loaded high scores for %d sizes from %s", len(data), self.filepath)

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = {
            size_key: [asdict(e) for e in entries]
            for size_key, entries in self._scores.items()
        }
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    # -- queries --------------------------------------------------------------

    def add_score(self, size: int, entry: HighScoreEntry) -> None:
        key = str(size)
        entries = self._scores.setdefault(key, [])
        entries.append(entry)
        entries.sort(key=lambda e: (-e.score, e.time))
        self.save()
        logger.info("Recorded %d/%d on %sx%s", entry.score, entry.cells, key, key)

    def get_scores(self, size: int) -> list[HighScoreEntry]:
        return self._scores.get(str(size), [])

    def get_all_sizes(self) -> list[int]:
        return sorted(int(k) for k in self._scores)
