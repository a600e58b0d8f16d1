from __future__ import annotations

import importlib
import logging
import os
from logging.handlers import TimedRotatingFileHandler
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .tracker.controller import register as register_tracker


def configure_logging(*, level: str, log_dir: Optional[str]) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not log_dir:
        return

    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "tracker.log")
    if any(getattr(h, "baseFilename", None) == os.path.abspath(log_file) for h in root.handlers):
        return
    # Rotates every 30 days, keeps 6 old files (180 days)
    handler = TimedRotatingFileHandler(log_file, when="D", interval=30, backupCount=6, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s"))
    root.addHandler(handler)


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    data_dir = str(getattr(settings, "DATA_DIR"))
    log_to_file = bool(getattr(settings, "LOG_TO_FILE", True))
    configure_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        log_dir=os.path.join(data_dir, "logs") if log_to_file else None,
    )

    container = build_container(
        data_dir=data_dir,
        default_timezone=getattr(settings, "DEFAULT_TIMEZONE", None),
        page_size=int(getattr(settings, "PAGE_SIZE", 10)),
    )
    app.extensions["work_tracker"] = container

    register_tracker(app, container)

    app.logger.info("Work tracker started (settings=%s, data_dir=%s)", settings_module, data_dir)
    return app
