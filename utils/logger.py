# utils/logger.py
import logging
import os
import sys
from config.paths import LOG_PATH

"""
Service logger shared by the API layer. Engine modules log through `logging.getLogger(__name__)`;
this one adds the run-log file and stdout handlers. ROSTER_LOG_LEVEL sets the level (default INFO).
"""

LOG_LEVEL = os.getenv("ROSTER_LOG_LEVEL", "INFO").upper()

LOG_PATH.parent.mkdir(parents=True, exist_ok=True)

logger = logging.getLogger("roster")
logger.setLevel(LOG_LEVEL)
logger.propagate = False

# Handlers are attached once, even when the module is reloaded by uvicorn
if not logger.handlers:
    run_log = logging.FileHandler(LOG_PATH, encoding="utf-8")
    run_log.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    # stdout -> docker logs
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter("[%(levelname)s] roster: %(message)s"))

    logger.addHandler(run_log)
    logger.addHandler(console)
