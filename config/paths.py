import os
from pathlib import Path

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# === Configuration ===
CONFIG_DIR = PROJECT_ROOT / "config"
CONSTANTS_PATH = CONFIG_DIR / "constants.json"

# === Run logs (ROSTER_LOG_DIR overrides, e.g. a mounted volume in docker) ===
LOG_DIR = Path(os.getenv("ROSTER_LOG_DIR", PROJECT_ROOT / "logs"))
LOG_PATH = LOG_DIR / "roster_run.log"
