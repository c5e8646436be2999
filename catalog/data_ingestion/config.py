from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IngestionConfig:
    """
    Location of the catalog CSV snapshots.
    """

    data_dir: Path = Path(__file__).resolve().parent.parent / "data"
    categories_filename: str = "categories.csv"
    businesses_filename: str = "businesses.csv"

    @property
    def categories_path(self) -> Path:
        return self.data_dir / self.categories_filename

    @property
    def businesses_path(self) -> Path:
        return self.data_dir / self.businesses_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
