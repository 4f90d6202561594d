from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path
from typing import Union


logger = logging.getLogger(__name__)


class BestScoreStore:
    """Best score kept across sessions in a small JSON file."""

    def __init__(self, path: Union[str, os.PathLike]) -> None:
        self.path = Path(path)

    def load(self) -> int:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            raw = data["best_score"]
            if isinstance(raw, int) and not isinstance(raw, bool):
                value = raw
            else:
                value = float(raw)
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, KeyError, TypeError, OverflowError) as exc:
            logger.warning("ignoring unreadable best score file %s: %s", self.path, exc)
            return 0
        if (isinstance(value, float) and not math.isfinite(value)) or value < 0:
            logger.warning("ignoring invalid best score %r in %s", value, self.path)
            return 0
        return int(value)

    def save(self, value: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps({"best_score": int(value)}), encoding="utf-8")
        os.replace(tmp, self.path)
