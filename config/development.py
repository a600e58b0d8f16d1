import os
from pathlib import Path

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# dev data lives next to the checkout
DATA_DIR = os.getenv("DATA_DIR", str(Path(__file__).resolve().parents[1] / "data"))

DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE") or None
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_TO_FILE = bool(int(os.getenv("LOG_TO_FILE", "1")))
