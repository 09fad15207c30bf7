import pytest

from core.errors import DuplicateUsername, InvalidCredentials, InvalidInput
from core.security import AuthService
from core.store import find_user_by_username


@pytest.fixture
def auth() -> AuthService:
    return AuthService(rounds=4)


def test_register_then_login_returns_identity(auth, db):
    user_id = auth.register(db, "alice", "secret123")

    identity = auth.login(db, "alice", "secret123")

    assert identity.id == user_id
    assert identity.username == "alice"


def test_password_is_stored_hashed(auth, db):
    auth.register(db, "alice", "secret123")

    user = find_user_by_username(db, "alice")

    assert user.password != "secret123"
    assert user.password.startswith("$2b$")
    assert auth.verify_password("secret123", user.password)


def test_default_work_factor_is_ten():
    hashed = AuthService().get_password_hash("secret123")
    assert hashed.startswith("$2b$10$")


def test_wrong_password_and_unknown_user_fail_identically(auth, db):
    auth.register(db, "alice", "secret123")

    with pytest.raises(InvalidCredentials) as wrong_password:
        auth.login(db, "alice", "not-the-password")
    with pytest.raises(InvalidCredentials) as unknown_user:
        auth.login(db, "mallory", "secret123")

    assert type(wrong_password.value) is type(unknown_user.value)
    assert str(wrong_password.value) == str(unknown_user.value) == "Invalid Credentials"


def test_duplicate_username_is_rejected(auth, db):
    auth.register(db, "alice", "secret123")

    with pytest.raises(DuplicateUsername):
        auth.register(db, "alice", "another-password")

    assert auth.login(db, "alice", "secret123").username == "alice"


@pytest.mark.parametrize("username, password", [
    ("", "secret123"),
    ("alice", ""),
    (None, "secret123"),
    ("alice", None),
])
def test_register_requires_both_fields(auth, db, username, password):
    with pytest.raises(InvalidInput):
        auth.register(db, username, password)


def test_login_with_missing_fields_is_invalid_credentials(auth, db):
    auth.register(db, "alice", "secret123")

    with pytest.raises(InvalidCredentials):
        auth.login(db, "alice", None)


def test_unknown_user_still_runs_a_hash(auth, db, monkeypatch):
    calls = []
    original = auth.pwd_context.dummy_verify

    def spy(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(auth.pwd_context, "dummy_verify", spy)

    with pytest.raises(InvalidCredentials):
        auth.login(db, "nobody", "secret123")

    assert len(calls) == 1


def test_known_user_does_not_run_dummy_hash(auth, db, monkeypatch):
    auth.register(db, "alice", "secret123")
    calls = []
    monkeypatch.setattr(auth.pwd_context, "dummy_verify", lambda *a, **kw: calls.append(a))

    with pytest.raises(InvalidCredentials):
        auth.login(db, "alice", "wrong")

    assert calls == []
