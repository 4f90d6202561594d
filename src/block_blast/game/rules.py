from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from .board import LineClearResult


@dataclass(frozen=True)
class ScoringRules:
    points_per_block: int = 10
    points_per_line: int = 50
    points_per_cell_cleared: int = 0
    multi_line_bonus: int = 40  # applied when two or more lines clear in one move

    @classmethod
    def with_overrides(cls, overrides: Optional[Mapping[str, Any]] = None) -> "ScoringRules":
        base = cls()
        if not overrides:
            return base
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"unknown scoring rule(s): {', '.join(sorted(unknown))}")
        return replace(base, **dict(overrides))

    def score_for_move(self, blocks_placed: int, cleared: LineClearResult) -> int:
        lines = cleared.lines
        total = blocks_placed * self.points_per_block
        total += lines * self.points_per_line
        total += cleared.cleared_count * self.points_per_cell_cleared
        if lines >= 2:
            total += self.multi_line_bonus
        return total
