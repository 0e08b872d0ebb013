from collections import namedtuple
from unittest.mock import MagicMock

from app.rag.retriever import (
    build_context,
    chunk_to_source,
    select_sources,
    similarity_search_companies,
)

Row = namedtuple("Row", ["CompanyChunk", "distance"])


def test_similarity_search_returns_chunks_with_distance(make_chunk):
    acme = make_chunk("Acme")
    globex = make_chunk("Globex")
    session = MagicMock()
    session.execute.return_value.all.return_value = [Row(acme, 0.12), Row(globex, 0.3)]
    get_embedding = MagicMock(return_value=[0.1, 0.2, 0.3])

    results = similarity_search_companies(session, "B2B software", k=5, get_embedding=get_embedding)

    get_embedding.assert_called_once_with("B2B software")
    assert results == [(acme, 0.12), (globex, 0.3)]


def test_build_context_joins_with_separator():
    assert build_context(["a", "b", "c"]) == "a\n---\nb\n---\nc"
    assert build_context([]) == ""


def test_build_context_truncates_but_keeps_first():
    assert build_context(["x" * 50, "y" * 50], max_chars=60) == "x" * 50
    assert build_context(["x" * 100], max_chars=10) == "x" * 100


def test_chunk_to_source_excludes_vector(make_chunk):
    chunk = make_chunk("Acme", text="Company Name: Acme.", chunk_id="abc_0", Industry="Software")
    assert chunk_to_source(chunk) == {
        "_id": "abc_0",
        "Company": "Acme",
        "Website": "acme.com",
        "Industry": "Software",
        "text": "Company Name: Acme.",
    }


def test_select_sources(make_chunk):
    acme_a = make_chunk("Acme", chunk_id="a_0")
    acme_b = make_chunk("Acme", chunk_id="a_1")
    globex = make_chunk("Globex", chunk_id="g_0")

    assert select_sources([]) == []
    assert select_sources([acme_a, acme_b]) == []
    sources = select_sources([globex, acme_a, acme_b])
    assert [s["_id"] for s in sources] == ["g_0"]
