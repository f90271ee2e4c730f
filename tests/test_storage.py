import json

from portal.client.storage import CredentialStore, FileCredentialStore

USER = {"id": "u1", "name": "Ada", "email": "ada@example.com", "role": "operator"}


def test_clear_session_keeps_refresh_token():
    store = CredentialStore()
    store.save_login("a", "r", USER)

    store.clear_session()

    assert store.access_token is None
    assert store.user is None
    assert store.refresh_token == "r"


def test_clear_drops_everything():
    store = CredentialStore()
    store.save_login("a", "r", USER)

    store.clear()

    assert (store.access_token, store.refresh_token, store.user) == (None, None, None)


def test_set_access_token_keeps_refresh_unless_rotated():
    store = CredentialStore()
    store.save_login("a", "r", USER)

    store.set_access_token("a2")
    assert store.refresh_token == "r"

    store.set_access_token("a3", "r3")
    assert (store.access_token, store.refresh_token) == ("a3", "r3")


def test_file_store_round_trips_through_disk(tmp_path):
    path = tmp_path / "session.json"
    store = FileCredentialStore(path)
    store.save_login("a", "r", USER)

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {"accessToken": "a", "refreshToken": "r", "user": USER}

    restored = FileCredentialStore(path)
    assert restored.access_token == "a"
    assert restored.user == USER


def test_file_store_removes_file_on_logout(tmp_path):
    path = tmp_path / "session.json"
    store = FileCredentialStore(path)
    store.save_login("a", "r", USER)

    store.clear()

    assert not path.exists()


def test_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    store = FileCredentialStore(path)

    assert store.access_token is None
