"""Register-new-user use case and create-user controller tests."""

import logging

import pytest

from registration.controllers.create_user import (
    EMAIL_PATTERN,
    CreateUserController,
    validate_payload,
)
from registration.errors import DuplicateEmail, ErrorKind, StorageUnavailable, ValidationFailed
from registration.repositories.mock import MockUserRepository
from registration.schemas.user import NewUser
from registration.use_cases.create_new_user import CreateNewUserUseCase

VALID_PAYLOAD = {
    "name": "Jean",
    "lastname": "Dupont",
    "mail": "jean@example.com",
    "password": "hunter22",
}


@pytest.fixture
def repository():
    return MockUserRepository()


@pytest.fixture
def use_case(repository):
    return CreateNewUserUseCase(repository)


@pytest.fixture
def controller(use_case):
    return CreateUserController(use_case)


def test_use_case_creates_user(use_case, repository):
    """Test a new email is registered."""
    created = use_case.execute(NewUser(**VALID_PAYLOAD))
    assert created.mail == "jean@example.com"
    assert repository.get_user_by_id(created.id) == created


def test_use_case_rejects_duplicate(use_case, repository):
    """Test an existing email is refused before any insert."""
    use_case.execute(NewUser(**VALID_PAYLOAD))
    with pytest.raises(DuplicateEmail):
        use_case.execute(NewUser(**VALID_PAYLOAD))
    assert len(repository.get_all_users()) == 1


def test_use_case_duplicate_from_storage():
    """Test a duplicate that slips past the lookup is still refused."""

    class RacingRepository(MockUserRepository):
        def get_user_by_mail(self, mail):
            return None

    racing = RacingRepository()
    use_case = CreateNewUserUseCase(racing)
    use_case.execute(NewUser(**VALID_PAYLOAD))
    with pytest.raises(DuplicateEmail):
        use_case.execute(NewUser(**VALID_PAYLOAD))
    assert len(racing.get_all_users()) == 1


def test_controller_success(controller):
    """Test a valid payload yields the created user."""
    result = controller.handle(VALID_PAYLOAD)
    assert result.success is True
    assert result.error is None
    assert result.data.name == "Jean"
    assert "password" not in result.data.model_dump()


@pytest.mark.parametrize(
    "field, value",
    [
        ("name", "Jea"),
        ("lastname", ""),
        ("mail", "jean@"),
        ("mail", "jean example.com"),
        ("password", "short"),
        ("password", 12345678),
    ],
)
def test_controller_rejects_invalid_payload(controller, repository, field, value):
    """Test invalid fields short-circuit before the use case runs."""
    result = controller.handle({**VALID_PAYLOAD, field: value})
    assert result.success is False
    assert result.error_kind == ErrorKind.VALIDATION_FAILED
    assert result.data is None
    assert repository.get_all_users() == []


def test_controller_rejects_non_mapping(controller):
    """Test a payload that is not an object is invalid."""
    result = controller.handle("jean@example.com")
    assert result.success is False
    assert result.error == "invalid payload"


def test_controller_reports_duplicate(controller):
    """Test a duplicate email comes back as a typed failure."""
    controller.handle(VALID_PAYLOAD)
    result = controller.handle(VALID_PAYLOAD)
    assert result.success is False
    assert result.error_kind == ErrorKind.DUPLICATE_EMAIL
    assert result.error == "User already exists"


def test_controller_reports_storage_failure(repository, monkeypatch):
    """Test storage errors are reported, not raised."""

    def unavailable(payload):
        raise StorageUnavailable("Failed to create account")

    monkeypatch.setattr(repository, "create_user", unavailable)
    result = CreateUserController(CreateNewUserUseCase(repository)).handle(VALID_PAYLOAD)
    assert result.success is False
    assert result.error_kind == ErrorKind.STORAGE_UNAVAILABLE


def test_controller_reports_unexpected_error(repository, monkeypatch):
    """Test unexpected exceptions never escape the controller."""

    def broken(mail):
        raise RuntimeError("boom")

    monkeypatch.setattr(repository, "get_user_by_mail", broken)
    result = CreateUserController(CreateNewUserUseCase(repository)).handle(VALID_PAYLOAD)
    assert result.success is False
    assert result.error_kind == ErrorKind.INTERNAL
    assert result.error == "boom"


def test_validate_payload_keeps_field_errors():
    """Test field-level detail stays on the exception."""
    with pytest.raises(ValidationFailed) as exc_info:
        validate_payload({**VALID_PAYLOAD, "name": "Al"})
    assert exc_info.value.message == "invalid payload"
    assert exc_info.value.details[0]["loc"] == ("name",)


def test_controller_keeps_submitted_email(controller):
    """Test the address is not normalised before storage."""
    result = controller.handle({**VALID_PAYLOAD, "mail": "Jean.Dupont@Example.COM"})
    assert result.success is True
    assert result.data.mail == "Jean.Dupont@Example.COM"


def test_validate_payload_rejects_display_name_form():
    """Test the regex pass rejects what the grammar check lets through."""
    with pytest.raises(ValidationFailed) as exc_info:
        validate_payload({**VALID_PAYLOAD, "mail": "Jean <jean@example.com>"})
    assert exc_info.value.message == "Invalid email format"


@pytest.mark.parametrize(
    "mail, matches",
    [
        ("jean@example.com", True),
        ("jean@EXAMPLE.com", True),
        ("jean@example", False),
        ("jean example@example.com", False),
        ("@example.com", False),
        ("jean@@example.com", False),
    ],
)
def test_email_pattern(mail, matches):
    """Test the regex email check on its own."""
    assert bool(EMAIL_PATTERN.match(mail)) is matches


def test_duplicate_email_not_logged_at_info(controller, caplog):
    """Test email addresses stay out of info-level logs."""
    caplog.set_level(logging.INFO)
    controller.handle(VALID_PAYLOAD)
    controller.handle(VALID_PAYLOAD)
    info_messages = [r.getMessage() for r in caplog.records if r.levelno >= logging.INFO]
    assert info_messages
    assert not any(VALID_PAYLOAD["mail"] in message for message in info_messages)
