import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_CSV_PATH = Path(__file__).resolve().parents[1] / "data" / "street_trees.csv"


@dataclass(frozen=True)
class Settings:
    csv_path: str
    host: str
    port: int
    debug: bool
    progress_every: int


def _get_env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(csv_path: Optional[str] = None) -> Settings:
    """Read settings from STREET_TREES_* environment variables."""
    path = csv_path or os.getenv("STREET_TREES_CSV_PATH", str(DEFAULT_CSV_PATH))
    return Settings(
        csv_path=path.strip(),
        host=os.getenv("STREET_TREES_HOST", "127.0.0.1").strip() or "127.0.0.1",
        port=_get_env_int("STREET_TREES_PORT", 5000),
        debug=_get_env_bool("STREET_TREES_DEBUG", False),
        progress_every=max(0, _get_env_int("STREET_TREES_PROGRESS_EVERY", 100000)),
    )
