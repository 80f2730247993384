"""
Tests for the credential service over the SQL user repository.
"""

import pytest

from stockroom.auth.service import CredentialService
from stockroom.core.errors import DuplicateUsernameError, InputError, InvalidCredentialsError
from stockroom.storage.sql import SqlUserRepository


@pytest.fixture
def users(db):
    return SqlUserRepository(db)


@pytest.fixture
def service(users, issuer):
    return CredentialService(users=users, issuer=issuer)


class TestSignUp:
    def test_returns_valid_token(self, service, guard):
        token = service.sign_up("alice", "pw1")

        result = guard.verify(token)
        assert result.ok
        assert result.identity.username == "alice"

    def test_stores_hash_not_plaintext(self, service, users):
        service.sign_up("alice", "pw1")

        stored = users.find_by_username("alice")
        assert stored is not None
        assert stored.password_hash != "pw1"
        assert stored.password_hash.startswith("$2")

    def test_token_carries_stored_id(self, service, users, guard):
        token = service.sign_up("alice", "pw1")

        stored = users.find_by_username("alice")
        assert guard.verify(token).identity.id == stored.id

    def test_duplicate_username(self, service):
        service.sign_up("alice", "pw1")

        with pytest.raises(DuplicateUsernameError) as exc_info:
            service.sign_up("alice", "pw2")

        assert isinstance(exc_info.value, InputError)
        assert exc_info.value.status_code == 400

    def test_store_usable_after_duplicate(self, service, users):
        service.sign_up("alice", "pw1")
        with pytest.raises(DuplicateUsernameError):
            service.sign_up("alice", "pw2")

        service.sign_up("bob", "pw3")
        assert users.find_by_username("bob") is not None


class TestLogIn:
    def test_correct_password(self, service, guard):
        service.sign_up("alice", "pw1")

        token = service.log_in("alice", "pw1")

        assert guard.verify(token).identity.username == "alice"

    def test_wrong_password(self, service):
        service.sign_up("alice", "pw1")

        with pytest.raises(InvalidCredentialsError):
            service.log_in("alice", "wrong")

    def test_unknown_user(self, service):
        with pytest.raises(InvalidCredentialsError):
            service.log_in("bob", "anything")

    def test_failures_are_indistinguishable(self, service):
        service.sign_up("alice", "pw1")

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            service.log_in("alice", "wrong")
        with pytest.raises(InvalidCredentialsError) as unknown_user:
            service.log_in("bob", "anything")

        assert str(wrong_password.value) == str(unknown_user.value) == "Invalid credentials"
        assert wrong_password.value.status_code == unknown_user.value.status_code == 401
