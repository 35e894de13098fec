from __future__ import annotations

import json
import logging
import threading
from typing import Any, Optional, Sequence

import requests

from ..core.constants import DEFAULT_FACE_SERVICE_TIMEOUT
from ..core.exceptions import ServiceUnavailableError, ValidationError, VerificationTimeoutError
from ..users.repository import UserRepository
from .gateway import EnrollmentGateway
from .model import FaceSample, VerificationResult

logger = logging.getLogger(__name__)


class HttpFaceGateway(EnrollmentGateway):
    """Talks to the remote face service (``/generate-embedding``, ``/compare-faces``).

    The service may cold-start, so the timeout is generous. Templates are stored on our
    side and sent along with each comparison. Each worker thread gets its own
    ``requests.Session`` unless one is injected.
    """

    def __init__(
        self,
        base_url: str,
        users: UserRepository,
        *,
        timeout: float = DEFAULT_FACE_SERVICE_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._users = users
        self._timeout = float(timeout)
        self._session = session
        self._local = threading.local()

    def has_enrollment(self, user_id: int) -> bool:
        return bool(self._users.get_face_template(user_id))

    def verify_sample(self, user_id: int, sample: FaceSample) -> VerificationResult:
        template = self._users.get_face_template(user_id)
        if not template:
            return VerificationResult(is_match=False, reason="Face is not enrolled")

        response = self._post(
            "/compare-faces",
            files={"face": (sample.filename, sample.image, "application/octet-stream")},
            data={"stored_embedding": json.dumps(list(template))},
        )
        body = self._json(response)

        if 400 <= response.status_code < 500:
            reason = body.get("reason") or body.get("message") or body.get("error") or "Face could not be verified"
            return VerificationResult(is_match=False, reason=str(reason))

        is_match = body.get("is_match", body.get("match"))
        if is_match is None:
            raise ServiceUnavailableError("Face service returned no match decision")

        distance = body.get("distance")
        return VerificationResult(
            is_match=bool(is_match),
            reason=body.get("reason") or (None if is_match else "Face did not match"),
            distance=float(distance) if distance is not None else None,
        )

    def generate_template(self, sample: FaceSample) -> Sequence[float]:
        response = self._post(
            "/generate-embedding",
            files={"face": (sample.filename, sample.image, "application/octet-stream")},
        )
        body = self._json(response)
        embedding = body.get("embedding")
        if 400 <= response.status_code < 500 or not embedding:
            raise ValidationError(str(body.get("message") or "No face detected in the image"))
        return [float(v) for v in embedding]

    def _post(self, path: str, **kwargs) -> requests.Response:
        url = f"{self._base_url}{path}"
        try:
            response = self._http().post(url, timeout=self._timeout, **kwargs)
        except requests.Timeout as exc:
            logger.warning("Face service timed out after %ss: %s", self._timeout, url)
            raise VerificationTimeoutError(f"Face service did not respond within {self._timeout:g}s") from exc
        except requests.RequestException as exc:
            logger.warning("Face service unreachable: %s (%s)", url, exc)
            raise ServiceUnavailableError("Face service is unavailable") from exc

        if response.status_code >= 500:
            logger.warning("Face service error %s: %s", response.status_code, url)
            raise ServiceUnavailableError(f"Face service responded with {response.status_code}")
        return response

    def _http(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    @staticmethod
    def _json(response: requests.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            raise ServiceUnavailableError("Face service returned a non-JSON body") from exc
        if not isinstance(body, dict):
            raise ServiceUnavailableError("Face service returned an unexpected payload")
        return body
