from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from .base import Message


class TranscriptStore:
    """
    JSON-file store for exported chat histories.

    - File per transcript: transcript_{name}.json
    - Atomic writes: write temp file then replace
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def transcript_path(self, name: str) -> Path:
        return self.output_dir / f"transcript_{name}.json"

    def save(self, name: str, messages: Sequence[Message]) -> Path:
        path = self.transcript_path(name)
        tmp_path = path.with_suffix(path.suffix + ".tmp")

        tmp_path.write_text(json.dumps(list(messages), indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(path)
        return path

    def load(self, name: str) -> list[Message] | None:
        path = self.transcript_path(name)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))
