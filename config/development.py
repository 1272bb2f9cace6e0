import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# JSON export of the document store (one array per collection)
DATA_PATH = os.getenv("DATA_PATH", "data/snapshot.json")

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))

DEFAULT_HOURS_PER_DAY = float(os.getenv("DEFAULT_HOURS_PER_DAY", "8"))
TRAINING_EXPIRY_DAYS = int(os.getenv("TRAINING_EXPIRY_DAYS", "365"))
VARIATION_THRESHOLD_PCT = float(os.getenv("VARIATION_THRESHOLD_PCT", "5"))
RECENT_CASES_LIMIT = int(os.getenv("RECENT_CASES_LIMIT", "5"))
TOP_AREAS_LIMIT = int(os.getenv("TOP_AREAS_LIMIT", "5"))
