from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session
from werkzeug.utils import secure_filename

from ..attendance.controller import admin_required, login_required
from ..core.exceptions import ValidationError, VerificationServiceError
from .model import FaceSample

logger = logging.getLogger(__name__)


def _uploaded_sample(default_name: str):
    """Read the multipart ``face`` file; returns (sample, error_response)."""

    upload = request.files.get("face")
    if upload is None or not upload.filename:
        return None, (jsonify({"success": False, "message": "No image file provided."}), 400)

    image = upload.read()
    if not image:
        return None, (jsonify({"success": False, "message": "Uploaded image is empty."}), 400)

    return FaceSample(image=image, filename=secure_filename(upload.filename) or default_name), None


def register(app: Flask, container) -> None:
    service = container.enrollment_service
    gateway = container.face_gateway

    @app.route("/api/face/enroll/<int:user_id>", methods=["POST"], endpoint="api_face_enroll")
    @admin_required
    def api_face_enroll(user_id: int):
        sample, error = _uploaded_sample("face.jpg")
        if error:
            return error

        try:
            dims = service.enroll(user_id, sample)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except VerificationServiceError:
            logger.warning("Face service unavailable while enrolling user %s", user_id)
            return jsonify({"success": False, "message": "Face service unavailable. Please try again.", "retryable": True}), 503

        return jsonify({"success": True, "message": "Face enrolled successfully.", "dimensions": dims}), 200

    @app.route("/api/face/verify", methods=["POST"], endpoint="api_face_verify")
    @login_required
    def api_face_verify():
        user_id = int(session["user_id"])
        sample, error = _uploaded_sample("verify.jpg")
        if error:
            return error

        if not gateway.has_enrollment(user_id):
            return jsonify({"verified": False, "message": "Your face is not enrolled. Please contact an administrator."}), 404

        try:
            result = gateway.verify_sample(user_id, sample)
        except VerificationServiceError:
            logger.warning("Face service unavailable while verifying user %s", user_id)
            return jsonify({"verified": False, "message": "Face service unavailable. Please try again.", "retryable": True}), 503

        if not result.is_match:
            return jsonify({"verified": False, "message": result.reason or "Face did not match."}), 401
        return jsonify({"verified": True, "message": "Face verified successfully."}), 200
