from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import AttendanceErrorKind, Role
from ..core.exceptions import AttendanceError, ValidationError
from ..enrollment.model import FaceSample
from ..geofence.model import GeoPoint

logger = logging.getLogger(__name__)

HTTP_STATUS_BY_KIND = {
    AttendanceErrorKind.INVALID_INPUT: 400,
    AttendanceErrorKind.NOT_ENROLLED: 404,
    AttendanceErrorKind.NO_LOCATION_ASSIGNED: 409,
    AttendanceErrorKind.ALREADY_CHECKED_IN: 409,
    AttendanceErrorKind.ALREADY_CHECKED_OUT: 409,
    AttendanceErrorKind.NO_CHECK_IN_FOUND: 404,
    AttendanceErrorKind.FACE_MISMATCH: 401,
    AttendanceErrorKind.OUTSIDE_GEOFENCE: 403,
    AttendanceErrorKind.VERIFICATION_UNAVAILABLE: 503,
}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Authentication required"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def rejection_response(exc: AttendanceError):
    body = {"success": False, "error": exc.kind.value, "message": exc.message}
    if exc.retryable:
        body["retryable"] = True
    return jsonify(body), HTTP_STATUS_BY_KIND.get(exc.kind, 400)


def register(app: Flask, container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="api_checkin")
    @login_required
    def api_checkin():
        user_id = int(session["user_id"])
        data = request.get_json(silent=True) or {}
        try:
            point = None
            if data.get("latitude") is not None and data.get("longitude") is not None:
                point = GeoPoint.from_raw(data["latitude"], data["longitude"])
            sample = FaceSample.from_base64(data["snapshotImage"]) if data.get("snapshotImage") else None
        except ValidationError as e:
            return jsonify({"success": False, "error": AttendanceErrorKind.INVALID_INPUT.value, "message": str(e)}), 400

        try:
            record = service.attempt_check_in(user_id, point, sample)
        except AttendanceError as e:
            return rejection_response(e)
        except Exception:
            logger.exception("Check-in failed for user %s", user_id)
            return jsonify({"success": False, "message": "Server error during check-in"}), 500

        return jsonify({"success": True, "message": "Check-in successful!", "attendance": record.to_dict()}), 201

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="api_checkout")
    @login_required
    def api_checkout():
        user_id = int(session["user_id"])
        data = request.get_json(silent=True) or {}
        try:
            sample = FaceSample.from_base64(data["snapshotImage"]) if data.get("snapshotImage") else None
        except ValidationError as e:
            return jsonify({"success": False, "error": AttendanceErrorKind.INVALID_INPUT.value, "message": str(e)}), 400

        try:
            record = service.attempt_check_out(user_id, sample)
        except AttendanceError as e:
            return rejection_response(e)
        except Exception:
            logger.exception("Check-out failed for user %s", user_id)
            return jsonify({"success": False, "message": "Server error during check-out"}), 500

        return jsonify({"success": True, "message": "Check-out successful!", "attendance": record.to_dict()}), 200

    @app.route("/api/attendance/me/today", methods=["GET"], endpoint="api_today")
    @login_required
    def api_today():
        record = service.get_today_record(int(session["user_id"]))
        return jsonify(record.to_dict() if record else None), 200

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    @admin_required
    def api_attendance_list():
        limit = request.args.get("limit", default=200, type=int)
        records = service.list_records(limit=max(1, min(limit, 1000)))
        return jsonify([r.to_dict() for r in records]), 200

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="api_attendance_delete")
    @admin_required
    def api_attendance_delete(record_id: int):
        try:
            service.delete_record(record_id)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        return jsonify({"success": True, "message": "Attendance record deleted successfully."}), 200
