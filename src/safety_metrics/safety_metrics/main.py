from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging_config import setup_logging
from .container import build_container
from .dashboard.controller import register as register_dashboard
from .data.repository import SafetyDataRepository

logger = logging.getLogger(__name__)

ENGINE_OPTIONS = (
    "DEFAULT_HOURS_PER_DAY",
    "TRAINING_EXPIRY_DAYS",
    "VARIATION_THRESHOLD_PCT",
    "RECENT_CASES_LIMIT",
    "TOP_AREAS_LIMIT",
)


def create_app(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    repository: Optional[SafetyDataRepository] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in dir(settings) if name.isupper()}
    values.update(overrides or {})

    app.secret_key = values.get("SECRET_KEY")
    app.config["DEBUG"] = bool(values.get("DEBUG", False))
    app.config["TESTING"] = bool(values.get("TESTING", False))

    setup_logging(str(values.get("LOG_LEVEL", "INFO")), json_output=bool(values.get("LOG_JSON", True)))
    logger.info("settings loaded from %s", settings_module)

    options = {name: values[name] for name in ENGINE_OPTIONS if values.get(name) is not None}
    container = build_container(data_path=values.get("DATA_PATH"), options=options, repository=repository)

    register_dashboard(app, container)

    return app
