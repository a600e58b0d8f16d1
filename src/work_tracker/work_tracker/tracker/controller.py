from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_timestamp, parse_timestamp
from ..core.constants import REFRESH_INTERVAL_SECONDS
from ..core.exceptions import (
    ConsistencyError,
    DataImportError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from ..container import Container

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ConsistencyError, 409),
    (ValidationError, 400),
    (DataImportError, 400),
    (StorageError, 500),
)


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def register(app: Flask, container: Container) -> None:
    tracker = container.tracker_service

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(e, kind)), 400)
                if status >= 500:
                    logger.error("Storage failure: %s", e, exc_info=True)
                return jsonify({"success": False, "message": str(e)}), status
            except Exception:
                logger.exception("Unhandled error in %s", view.__name__)
                return jsonify({"success": False, "message": "Internal error"}), 500

        return wrapper

    @app.route("/api/status", methods=["GET"], endpoint="api_status")
    @json_errors
    def api_status():
        status = tracker.get_status(request.args.get("date") or None)
        return jsonify({"success": True, "status": status.to_dict()})

    @app.route("/api/punches", methods=["POST"], endpoint="api_punch_create")
    @json_errors
    def api_punch_create():
        data = request.get_json(silent=True) or {}
        raw_timestamp = data.get("timestamp")
        if raw_timestamp:
            try:
                instant = parse_timestamp(str(raw_timestamp), container.settings_service.timezone())
            except ValueError:
                raise ValidationError("timestamp must be an ISO-8601 date-time")
        else:
            instant = tracker.effective_instant(data.get("manual_time") or None)

        outcome = tracker.register_punch(str(data.get("type") or ""), instant)
        return (
            jsonify(
                {
                    "success": True,
                    "message": f"{outcome.record.kind.label} saved",
                    "record": outcome.record.to_json(),
                    "justification_suggested": outcome.justification_suggested,
                    "journey": outcome.journey.to_dict() if outcome.journey else None,
                }
            ),
            201,
        )

    @app.route("/api/punches/<int:punch_id>", methods=["PATCH"], endpoint="api_punch_update")
    @json_errors
    def api_punch_update(punch_id: int):
        data = request.get_json(silent=True) or {}
        record = tracker.edit_justification_and_time(
            punch_id,
            data.get("justification"),
            new_time=data.get("time") or None,
            new_date=data.get("date") or None,
        )
        return jsonify({"success": True, "record": record.to_json()})

    @app.route("/api/punches/<int:punch_id>", methods=["DELETE"], endpoint="api_punch_delete")
    @json_errors
    def api_punch_delete(punch_id: int):
        confirmed = _truthy(request.args.get("confirm"))
        if not confirmed:
            return jsonify({"success": False, "message": "Deleting a record needs confirm=1"}), 400
        deleted = tracker.delete_record(punch_id, confirm=lambda _message: confirmed)
        return jsonify({"success": True, "deleted": deleted})

    @app.route("/api/statistics", methods=["GET"], endpoint="api_statistics")
    @json_errors
    def api_statistics():
        stats = tracker.get_statistics(request.args.get("period"))
        return jsonify({"success": True, "statistics": stats.to_dict()})

    @app.route("/api/history", methods=["GET"], endpoint="api_history")
    @json_errors
    def api_history():
        page = request.args.get("page", "1")
        history = tracker.get_paginated_history(
            request.args.get("period") or "today",
            int(page) if page.isdigit() else 1,
        )
        return jsonify({"success": True, "history": history.to_dict()})

    @app.route("/api/settings", methods=["GET", "PUT"], endpoint="api_settings")
    @json_errors
    def api_settings():
        if request.method == "PUT":
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ValidationError("Settings body must be a JSON object")
            settings = tracker.update_settings(data)
        else:
            settings = tracker.get_settings()
        return jsonify({"success": True, "settings": settings.to_json()})

    @app.route("/api/refresh", methods=["GET"], endpoint="api_refresh")
    @json_errors
    def api_refresh():
        result = tracker.refresh()
        return jsonify(
            {
                "success": True,
                "now": format_timestamp(result.now),
                "status": result.status.to_dict(),
                "journey": result.journey.to_dict() if result.journey else None,
                "next_refresh_seconds": REFRESH_INTERVAL_SECONDS,
            }
        )

    @app.route("/api/export", methods=["GET"], endpoint="api_export")
    @json_errors
    def api_export():
        export = tracker.export_records()
        return app.response_class(
            export.content.encode("utf-8"),
            mimetype="application/json",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )

    @app.route("/api/import", methods=["POST"], endpoint="api_import")
    @json_errors
    def api_import():
        upload = request.files.get("file")
        payload = upload.read() if upload is not None else request.get_data()

        confirmed = _truthy(request.args.get("confirm"))
        count = tracker.import_records(payload, confirm=lambda _message: confirmed)
        if count is None:
            return jsonify({"success": False, "message": "Importing replaces all records, pass confirm=1"}), 400
        return jsonify({"success": True, "imported": count})
