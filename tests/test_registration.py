import pytest

from accounts.credential_store import ACCESS_TOKEN_KEY, InMemoryCredentialStore
from accounts.registration import REGISTER_PATH, RegistrationService
from accounts.session_manager import LOGIN_PATH, SessionManager
from common.exceptions import ValidationError

FORM = {
    "username": "jdoe",
    "email": "jdoe@example.com",
    "password": "hunter22",
    "password2": "hunter22",
    "first_name": "Jane",
    "last_name": "Doe",
}


@pytest.fixture
def anonymous_session(gateway):
    return SessionManager(InMemoryCredentialStore(), gateway=gateway)


class TestRegistrationService:
    def test_registers_and_logs_in(self, anonymous_session, gateway):
        gateway.reply("POST", REGISTER_PATH, (201, {"id": 5, "username": "jdoe"}))
        gateway.reply("POST", LOGIN_PATH, (200, {"access": "a", "refresh": "r"}))

        user = RegistrationService(anonymous_session).register(FORM)

        assert user == {"id": 5, "username": "jdoe"}
        assert anonymous_session.store.get(ACCESS_TOKEN_KEY) == "a"
        assert gateway.calls("POST", REGISTER_PATH)[0].json == FORM
        assert gateway.calls("POST", LOGIN_PATH)[0].json == {"username": "jdoe", "password": "hunter22"}

    def test_password_mismatch_is_caught_locally(self, anonymous_session, gateway):
        with pytest.raises(ValidationError) as excinfo:
            RegistrationService(anonymous_session).register(dict(FORM, password2="hunter23"))
        assert excinfo.value.message == "Passwords do not match."
        assert gateway.sent == []

    def test_backend_errors_surface_first_field_message(self, anonymous_session, gateway):
        gateway.reply(
            "POST",
            REGISTER_PATH,
            (400, {"username": ["A user with that username already exists."]}),
        )
        with pytest.raises(ValidationError) as excinfo:
            RegistrationService(anonymous_session).register(FORM)
        assert excinfo.value.message == "A user with that username already exists."
        assert gateway.calls("POST", LOGIN_PATH) == []
