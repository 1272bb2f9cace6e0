import os

SECRET_KEY = "test-secret"

DATA_PATH = os.getenv("DATA_PATH", "tests/fixtures/snapshot.json")

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_JSON = False
