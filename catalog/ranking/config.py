from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingConfig:
    """
    Tuning values for the weighted rating.

    ``confidence_threshold`` is the review count at which a business's own
    rating weighs as much as the catalog-wide ``global_mean`` prior.
    """

    confidence_threshold: int = 10
    global_mean: float = 3.5

    def __post_init__(self) -> None:
        if self.confidence_threshold < 1:
            raise ValueError(
                f"confidence_threshold must be >= 1, got {self.confidence_threshold}"
            )


def load_ranking_config() -> RankingConfig:
    """Build a config from ``RANKING_CONFIDENCE_THRESHOLD`` / ``RANKING_GLOBAL_MEAN``."""
    return RankingConfig(
        confidence_threshold=int(os.getenv("RANKING_CONFIDENCE_THRESHOLD", "10")),
        global_mean=float(os.getenv("RANKING_GLOBAL_MEAN", "3.5")),
    )


_current_config: RankingConfig = load_ranking_config()


def get_current_ranking_config() -> RankingConfig:
    return _current_config


def set_current_ranking_config(config: RankingConfig) -> None:
    """Swap the process-wide snapshot (hot reload)."""
    global _current_config
    logger.info(
        "Ranking config updated: confidence_threshold=%d, global_mean=%.3f",
        config.confidence_threshold, config.global_mean,
    )
    _current_config = config
