from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

from multidict import MultiDict

if TYPE_CHECKING:
    from beatmapcheck.difficulty.load import DifficultyBody
    from beatmapcheck.info.schema import MapInfo


@dataclass
class ExtractedInfo:
    """Everything the validation learns about a package on the way. One
    instance per package, filled in during a single validation pass and handed
    back to the caller afterwards.

    `md` is the running sha1 of Info.dat followed by every difficulty file, in
    the order they are read. `diffs` maps a characteristic name to the decoded
    bodies of its difficulties, keyed by difficulty name"""

    map_info: Optional[MapInfo] = None
    duration: Optional[float] = None
    thumbnail: Optional[bytes] = None
    md: Any = field(default_factory=hashlib.sha1)
    diffs: Dict[str, MultiDict[DifficultyBody]] = field(default_factory=dict)

    @property
    def hexdigest(self) -> str:
        return str(self.md.hexdigest())

    def max_beat(self) -> Optional[float]:
        """Last beat the song audio can reach, None if the duration or the
        tempo is unknown"""
        if self.duration is None or self.duration <= 0:
            return None
        if self.map_info is None or self.map_info.beats_per_minute is None:
            return None

        return (self.duration / 60) * self.map_info.beats_per_minute

    def add_difficulty(
        self,
        characteristic: Optional[str],
        difficulty: Optional[str],
        body: DifficultyBody,
    ) -> None:
        by_difficulty = self.diffs.setdefault(characteristic or "", MultiDict())
        by_difficulty.add(difficulty or "", body)
