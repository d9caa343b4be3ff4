"""
Unit tests for the SQL-backed snippet store
"""

from datetime import timedelta

import pytest
from sqlalchemy import update

from snippetbox.db.base import utcnow
from snippetbox.db.models.snippet import Snippet
from snippetbox.db.repositories import NoRecordError, PersistenceError, SnippetModel
from snippetbox.db.repositories.snippets import LATEST_LIMIT
from snippetbox.db.session import make_session_factory, open_db


@pytest.fixture
def snippets(test_db):
    return SnippetModel(test_db)


def expire(session_factory, snippet_id):
    with session_factory() as db:
        db.execute(
            update(Snippet).where(Snippet.id == snippet_id).values(expires=utcnow() - timedelta(seconds=1))
        )
        db.commit()


class TestSnippetModel:
    def test_insert_and_get(self, snippets):
        snippet_id = snippets.insert("O snail", "O snail\nClimb Mount Fuji,\nBut slowly, slowly!", 7)

        snippet = snippets.get(snippet_id)

        assert snippet.id == snippet_id
        assert snippet.title == "O snail"
        assert snippet.content.startswith("O snail\n")
        assert snippet.expires - snippet.created == timedelta(days=7)

    def test_ids_are_sequential(self, snippets):
        first = snippets.insert("one", "1", 1)
        second = snippets.insert("two", "2", 1)

        assert first >= 1
        assert second == first + 1

    def test_get_missing(self, snippets):
        with pytest.raises(NoRecordError):
            snippets.get(999)

    def test_get_expired(self, snippets, test_db):
        snippet_id = snippets.insert("gone", "soon", 1)
        expire(test_db, snippet_id)

        with pytest.raises(NoRecordError):
            snippets.get(snippet_id)

    def test_latest_is_newest_first_and_limited(self, snippets):
        ids = [snippets.insert(f"snippet {i}", "content", 365) for i in range(LATEST_LIMIT + 2)]

        latest = snippets.latest()

        assert [s.id for s in latest] == list(reversed(ids))[:LATEST_LIMIT]

    def test_latest_skips_expired(self, snippets, test_db):
        kept = snippets.insert("kept", "content", 365)
        gone = snippets.insert("gone", "content", 365)
        expire(test_db, gone)

        assert [s.id for s in snippets.latest()] == [kept]

    def test_latest_empty(self, snippets):
        assert snippets.latest() == []

    def test_database_failure(self):
        # No schema: every query fails
        engine = open_db("sqlite://")
        snippets = SnippetModel(make_session_factory(engine))

        with pytest.raises(PersistenceError):
            snippets.latest()
        with pytest.raises(PersistenceError):
            snippets.get(1)

        engine.dispose()
