"""
Unit tests for session storage and the per-request session object
"""

from datetime import timedelta

import pytest

from snippetbox.core.sessions import Session
from snippetbox.core.utils.session_store import MemorySessionStore, SQLSessionStore
from snippetbox.db.base import utcnow


@pytest.fixture(params=["memory", "sql"])
def store(request):
    if request.param == "memory":
        return MemorySessionStore()
    return SQLSessionStore(request.getfixturevalue("test_db"))


class TestSessionStore:
    def test_commit_and_find(self, store):
        store.commit("token-1", {"authenticated_user_id": 1, "flash": "hi"}, utcnow() + timedelta(hours=1))

        assert store.find("token-1") == {"authenticated_user_id": 1, "flash": "hi"}

    def test_commit_replaces(self, store):
        expiry = utcnow() + timedelta(hours=1)
        store.commit("token-1", {"flash": "first"}, expiry)
        store.commit("token-1", {"flash": "second"}, expiry)

        assert store.find("token-1") == {"flash": "second"}

    def test_find_unknown(self, store):
        assert store.find("nope") is None

    def test_find_expired(self, store):
        store.commit("token-1", {"flash": "hi"}, utcnow() - timedelta(seconds=1))

        assert store.find("token-1") is None

    def test_delete(self, store):
        store.commit("token-1", {}, utcnow() + timedelta(hours=1))
        store.delete("token-1")
        store.delete("token-1")

        assert store.find("token-1") is None

    def test_delete_expired(self, store):
        store.commit("old", {}, utcnow() - timedelta(seconds=1))
        store.commit("new", {}, utcnow() + timedelta(hours=1))

        assert store.delete_expired() == 1
        assert store.find("new") == {}


class TestSession:
    def test_untouched_session_is_not_modified(self):
        session = Session({"csrf_token": "abc"}, token="t")

        assert session.get("csrf_token") == "abc"
        assert not session.modified

    def test_pop_string(self):
        session = Session({"flash": "Snippet successfully created!"})

        assert session.pop_string("flash") == "Snippet successfully created!"
        assert session.pop_string("flash") == ""
        assert session.modified

    def test_pop_missing_key_does_not_modify(self):
        session = Session()

        assert session.pop("flash", None) is None
        assert not session.modified

    def test_renew_token(self):
        session = Session({"csrf_token": "abc"}, token="t")
        session.renew_token()

        assert session.renewed
        assert session.modified
        assert session["csrf_token"] == "abc"

    def test_destroy(self):
        session = Session({"authenticated_user_id": 1}, token="t")
        session.destroy()

        assert session.destroyed
        assert dict(session) == {}
