import os
import tempfile

SECRET_KEY = "test-secret"

DATA_DIR = os.getenv("DATA_DIR", os.path.join(tempfile.gettempdir(), "work_tracker_test"))

DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_TO_FILE = False
