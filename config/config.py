from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


LOG_DIR = Path(os.getenv("SPLITTT_LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("SPLITTT_LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = _env_flag("SPLITTT_LOG_TO_FILE", True)

SETTINGS_PATH = Path(
    os.getenv("SPLITTT_SETTINGS", str(BASE_DIR / "config" / "settings.yaml"))
)

try:
    DEFAULT_WORKERS = int(os.getenv("SPLITTT_WORKERS", "1"))
except ValueError as e:
    raise ValueError(f"SPLITTT_WORKERS must be an integer: {e}")
if DEFAULT_WORKERS < 1:
    raise ValueError("SPLITTT_WORKERS must be at least 1.")

DEFAULT_OVERWRITE = _env_flag("SPLITTT_OVERWRITE", False)
