from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class HierarchyConfig:
    max_depth: int = int(os.getenv("CATEGORY_HIERARCHY_MAX_DEPTH", "5"))

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")


DEFAULT_HIERARCHY_CONFIG = HierarchyConfig()
