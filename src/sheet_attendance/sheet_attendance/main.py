from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS

from config import get_settings_module

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .history.controller import register as register_history
from .upload.controller import register as register_upload
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # googleapiclient logs every discovery/cache lookup at INFO.
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    _configure_logging(app.config["DEBUG"])

    CORS(app, resources={r"/api/*": {"origins": getattr(settings, "CORS_ORIGINS", "*")}})

    if container is None:
        sheets_config = getattr(settings, "SHEETS_CONFIG")
        logger.info(
            "settings=%s users_sheet=%s history_sheet=%s",
            settings_module,
            sheets_config.get("users_spreadsheet_id") or "-",
            sheets_config.get("history_spreadsheet_id") or "-",
        )
        container = build_container(sheets_config=sheets_config)
    app.extensions["container"] = container

    @app.after_request
    def log_request(response):
        logger.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "message": "server is running", "status": "server is running"})

    register_users(app, container)
    register_upload(app, container)
    register_attendance(app, container)
    register_history(app, container)

    return app
