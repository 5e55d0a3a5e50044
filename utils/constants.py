import json
from config.paths import CONSTANTS_PATH

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change weights or defaults; import from utils.constants to use in code.
"""

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Expose constants as variables
EMPTY_STAFF_ID = _constants["EMPTY_STAFF_ID"]
EMPTY_STAFF_NAME = _constants["EMPTY_STAFF_NAME"]
ANY_GROUP = _constants["ANY_GROUP"]
DEFAULT_GROUP = _constants["DEFAULT_GROUP"]
MAX_LOG_LINES = _constants["MAX_LOG_LINES"]

CLINICAL_MAX_RETRIES = _constants["CLINICAL_MAX_RETRIES"]
NURSING_MAX_RETRIES = _constants["NURSING_MAX_RETRIES"]
DAILY_TOTAL_TARGET = _constants["DAILY_TOTAL_TARGET"]

POPULATION_SIZE = _constants["POPULATION_SIZE"]
GENERATIONS = _constants["GENERATIONS"]
ELITISM_COUNT = _constants["ELITISM_COUNT"]
CROSSOVER_RATE = _constants["CROSSOVER_RATE"]
UNFILLED_FITNESS_WEIGHT = _constants["UNFILLED_FITNESS_WEIGHT"]

DAY_PRIORITY = _constants["DAY_PRIORITY"]
SLOT_DIFFICULTY = _constants["SLOT_DIFFICULTY"]
OFF_DAYS_AVAILABILITY_LIMIT = _constants["OFF_DAYS_AVAILABILITY_LIMIT"]

SENIOR_TIER = _constants["SENIOR_TIER"]
MIDDLE_TIER = _constants["MIDDLE_TIER"]
JUNIOR_TIER = _constants["JUNIOR_TIER"]
SENIOR_DAILY_CAP = _constants["SENIOR_DAILY_CAP"]
SENIOR_DAILY_CAP_DESPERATE = _constants["SENIOR_DAILY_CAP_DESPERATE"]

FATIGUE = _constants["FATIGUE"]

SPECIALIST_MAX_FLEXIBILITY = _constants["SPECIALIST_MAX_FLEXIBILITY"]
FLEXIBLE_MIN_FLEXIBILITY = _constants["FLEXIBLE_MIN_FLEXIBILITY"]
GENERIC_SLOT_MIN_ELIGIBLE = _constants["GENERIC_SLOT_MIN_ELIGIBLE"]

CLINICAL_WEIGHTS = _constants["CLINICAL_WEIGHTS"]
NURSING_WEIGHTS = _constants["NURSING_WEIGHTS"]
