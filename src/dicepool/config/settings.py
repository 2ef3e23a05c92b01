from pydantic_settings import BaseSettings
from pathlib import Path
from typing import List

from src.dicepool.models import STANDARD_COLORS

class Settings(BaseSettings):
    # Paths
    data_dir: Path = Path("data")
    faces_file: str = "dice_faces.json"

    # Face table validation
    required_colors: List[str] = list(STANDARD_COLORS)

    # Rolling
    seed: int | None = None

    # Logging
    log_level: str = "WARNING"
    log_file: Path | None = None
    enable_color: bool = True

    @property
    def faces_path(self) -> Path:
        return self.data_dir / self.faces_file

    class Config:
        env_file = ".env"
        env_prefix = "DICEPOOL_"

settings = Settings()
