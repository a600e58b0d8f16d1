import os
from pathlib import Path

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATA_DIR = os.getenv("DATA_DIR", str(Path.home() / ".work_tracker"))

DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE") or None
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_TO_FILE = bool(int(os.getenv("LOG_TO_FILE", "1")))
