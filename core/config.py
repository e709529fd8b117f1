# core/config.py
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from core.models import Category

HIGH_PRIORITY_THRESHOLD = 0.7
MEDIUM_PRIORITY_THRESHOLD = 0.5
WEIGHT_SUM_TOLERANCE = 0.001

ENV_PATH = Path(__file__).resolve().parents[1] / ".env"  # project root


# -------------------------
# Load .env on first settings read
# -------------------------
def load_env(env_path: Optional[Path] = None):
    env_path = env_path or ENV_PATH
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        os.environ.setdefault(k.strip(), v.strip())


@dataclass(frozen=True)
class CategoryThresholds:
    """Inclusive lower bounds: score >= high is High, score >= medium is Medium."""
    high: float = HIGH_PRIORITY_THRESHOLD
    medium: float = MEDIUM_PRIORITY_THRESHOLD

    def __post_init__(self):
        if self.medium > self.high:
            raise ValueError(
                f"medium threshold ({self.medium}) must not exceed high threshold ({self.high})"
            )

    def categorize(self, score: float) -> Category:
        if score >= self.high:
            return Category.HIGH
        if score >= self.medium:
            return Category.MEDIUM
        return Category.LOW


@dataclass(frozen=True)
class Settings:
    thresholds: CategoryThresholds = field(default_factory=CategoryThresholds)
    weight_tolerance: float = WEIGHT_SUM_TOLERANCE
    log_level: str = "INFO"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def get_settings() -> Settings:
    load_env()
    return Settings(
        thresholds=CategoryThresholds(
            high=_env_float("TOPSIS_HIGH_THRESHOLD", HIGH_PRIORITY_THRESHOLD),
            medium=_env_float("TOPSIS_MEDIUM_THRESHOLD", MEDIUM_PRIORITY_THRESHOLD),
        ),
        weight_tolerance=_env_float("TOPSIS_WEIGHT_TOLERANCE", WEIGHT_SUM_TOLERANCE),
        log_level=(os.getenv("TOPSIS_LOG_LEVEL") or "INFO").strip().upper(),
    )
