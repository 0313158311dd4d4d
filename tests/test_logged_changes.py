from userstore import UserRepository, logged_changes


def test_reports_changed_field():
    assert logged_changes({"username": "b"}, {"username": "a"}) == {
        "username": "a => b"
    }


def test_password_is_never_reported():
    changes = logged_changes(
        {"username": "a", "password": "x"}, {"username": "a", "password": "y"}
    )
    assert changes == {}


def test_password_excluded_without_previous_values():
    changes = logged_changes({"password": "secret123", "role": "admin"})
    assert "password" not in changes
    assert changes == {"role": "None => admin"}


def test_unchanged_fields_are_skipped():
    prev = {"username": "alice", "role": "default"}
    assert logged_changes({"username": "alice", "role": "admin"}, prev) == {
        "role": "default => admin"
    }


def test_available_on_repository():
    assert UserRepository.logged_changes({"role": "admin"}, {"role": "default"}) == {
        "role": "default => admin"
    }
