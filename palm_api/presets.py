from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .base import ConfigurationError, Example


@dataclass(frozen=True)
class ChatPreset:
    context: str = ""
    examples: list[Example] = field(default_factory=list)

    def to_options(self) -> dict[str, Any]:
        """Keyword arguments for `PaLM.create_chat` / `PaLM.ask`."""
        return {"context": self.context, "examples": [tuple(ex) for ex in self.examples]}


class PresetLoader:
    """
    Minimal chat preset loader (YAML).

    Preset file structure:
      presets/{name}.yaml
        context: |-
          ...
        examples:
          - ["input", "output"]
    """

    def __init__(self, presets_dir: Path):
        self.presets_dir = Path(presets_dir)
        self._cache: dict[str, ChatPreset] = {}

    def load(self, name: str) -> ChatPreset:
        if name in self._cache:
            return self._cache[name]

        path = self.presets_dir / f"{name}.yaml"
        if not path.exists():
            raise FileNotFoundError(f"Preset file not found: {name} (dir={self.presets_dir})")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        preset = self._coerce_preset(name, data)
        self._cache[name] = preset
        return preset

    def _coerce_preset(self, name: str, data: Any) -> ChatPreset:
        if not isinstance(data, dict):
            raise ConfigurationError(f"Preset {name} must be a mapping with keys: context, examples")

        context = data.get("context") or ""
        if not isinstance(context, str):
            raise ConfigurationError(f"Preset {name}: context must be a string")

        examples: list[Example] = []
        for ex in data.get("examples") or []:
            if not isinstance(ex, (list, tuple)) or len(ex) != 2:
                raise ConfigurationError(f"Preset {name}: each example must be an [input, output] pair")
            examples.append((str(ex[0]), str(ex[1])))

        return ChatPreset(context=context, examples=examples)
