"""Tests for the SQLAlchemy submission sink."""

import pytest

from udyam_form.config import UdyamFormConfig
from udyam_form.errors import SinkUnavailable
from udyam_form.models.submission import SubmissionRecord
from udyam_form.storage.models import UdyamSubmission
from udyam_form.storage.repository import SubmissionRepository
from udyam_form.validation.constants import MAX_NAME_LENGTH
from udyam_form.validation.sanitizer import sanitize


@pytest.fixture
def record():
    return SubmissionRecord(
        aadhaarNumber="234567890123",
        entrepreneurName="Asha Rao",
        consent=True,
        otp="123456",
        otpVerified=True,
        organisationType="proprietary",
        panNumber="ABCDE1234F",
        panHolderName="Asha Rao",
        dob="1990-04-12",
        panConsent=True,
        pincode="560011",
        state="Karnataka",
        city="Bengaluru",
    )


class TestSubmissionRepository:
    """Tests for storing and reading submissions."""

    def test_from_config_without_database(self):
        assert SubmissionRepository.from_config(UdyamFormConfig(database_url=None)) is None

    def test_from_config_with_database(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'udyam.db'}"
        repository = SubmissionRepository.from_config(UdyamFormConfig(database_url=url))
        assert repository.database_url == url

    def test_save_and_get(self, tmp_path, record):
        repository = SubmissionRepository(f"sqlite:///{tmp_path / 'udyam.db'}")
        submission_id = repository.save(record)
        assert len(submission_id) == 32

        row = repository.get(submission_id)
        assert row.pan_number == "ABCDE1234F"
        assert row.otp_verified is True
        assert row.state == "Karnataka"
        assert row.status == "pending"
        assert row.created_at is not None

    def test_ids_are_unique(self, tmp_path, record):
        repository = SubmissionRepository(f"sqlite:///{tmp_path / 'udyam.db'}")
        assert repository.save(record) != repository.save(record)

    def test_get_missing(self, tmp_path):
        repository = SubmissionRepository(f"sqlite:///{tmp_path / 'udyam.db'}")
        assert repository.get("0" * 32) is None

    def test_unreachable_database(self, tmp_path, record):
        repository = SubmissionRepository(f"sqlite:///{tmp_path / 'missing' / 'udyam.db'}")
        with pytest.raises(SinkUnavailable):
            repository.save(record)

    def test_invalid_url(self, record):
        repository = SubmissionRepository("not-a-database-url")
        with pytest.raises(SinkUnavailable):
            repository.save(record)

    def test_escaped_name_at_length_limit(self, tmp_path, record):
        name = ("O'Brien & Sons " + "a" * MAX_NAME_LENGTH)[:MAX_NAME_LENGTH]
        escaped = sanitize(record.model_copy(update={"entrepreneur_name": name}))
        assert len(escaped.entrepreneur_name) > MAX_NAME_LENGTH

        repository = SubmissionRepository(f"sqlite:///{tmp_path / 'udyam.db'}")
        row = repository.get(repository.save(escaped))
        assert row.entrepreneur_name == escaped.entrepreneur_name

    @pytest.mark.parametrize(
        "column",
        ["entrepreneur_name", "organisation_type", "pan_holder_name", "dob", "state", "city"],
    )
    def test_free_text_columns_unbounded(self, column):
        assert getattr(UdyamSubmission.__table__.c[column].type, "length", None) is None
