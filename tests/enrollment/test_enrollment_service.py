from __future__ import annotations

import base64

import pytest

from src.geo_attendance.geo_attendance.core.exceptions import ValidationError
from src.geo_attendance.geo_attendance.enrollment.model import FaceSample
from src.geo_attendance.geo_attendance.enrollment.service import EnrollmentService


class FakeGenerator:
    def __init__(self, template):
        self.template = template
        self.samples = []

    def generate_template(self, sample):
        self.samples.append(sample)
        return self.template


def test_enroll_stores_template_and_enables_checkin_gate(users, gateway):
    svc = EnrollmentService(users, FakeGenerator([0.9, 0.8]))

    assert gateway.has_enrollment(2) is False
    dims = svc.enroll(2, FaceSample(image=b"img"))

    assert dims == 2
    assert users.get_face_template(2) == [0.9, 0.8]
    assert gateway.has_enrollment(2) is True


def test_enroll_unknown_user(users):
    generator = FakeGenerator([0.1])
    with pytest.raises(ValidationError):
        EnrollmentService(users, generator).enroll(99, FaceSample(image=b"img"))
    assert generator.samples == []


def test_enroll_without_embedding(users):
    with pytest.raises(ValidationError):
        EnrollmentService(users, FakeGenerator([])).enroll(2, FaceSample(image=b"img"))
    assert users.get_face_template(2) is None


def test_sample_from_base64_and_data_url():
    raw = b"\x89PNG-bytes"
    encoded = base64.b64encode(raw).decode()

    assert FaceSample.from_base64(encoded).image == raw
    assert FaceSample.from_base64("data:image/png;base64," + encoded).image == raw


@pytest.mark.parametrize("value", ["", "   ", "not base64!!", 12345, ["x"], None])
def test_sample_from_bad_base64(value):
    with pytest.raises(ValidationError):
        FaceSample.from_base64(value)


def test_sample_reference_is_content_addressed():
    a = FaceSample(image=b"same")
    b = FaceSample(image=b"same", filename="other.jpg")
    assert a.reference == b.reference
    assert a.reference.startswith("sha256:")
    assert FaceSample(image=b"different").reference != a.reference
