from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from app.db.models import CompanyChunk
from app.ingest.load_companies import (
    build_company_text,
    load_companies,
    main,
    read_companies_csv,
)

ACME = {
    "Company": "Acme",
    "Website": "acme.com",
    "Industry": "Software",
    "Product/Service Category": "ERP",
    "Business Type (B2B, B2B2C)": "B2B",
    "Employees Count": "45",
    "Year Founded": "2001",
    "Owner's Email": "jane@acme.com",
}


def _fake_embeddings(texts):
    return [[0.1, 0.2, 0.3] for _ in texts]


def test_build_company_text():
    text = build_company_text(ACME)
    assert text.startswith("Company Name: Acme. Website: acme.com. Industry: Software.")
    assert "Business Type: B2B." in text
    assert "Year Founded: 2001." in text
    assert text.endswith(
        "This company operates in the Software industry with a focus on ERP. They target the B2B market."
    )
    assert "  " not in text
    assert "\n" not in text


def test_build_company_text_missing_fields():
    text = build_company_text({"Company": "Bare", "Website": "  "})
    assert "Website: Not available." in text
    assert "Employee Count: Not available." in text
    assert "operates in the industry with a focus on ." in text


def test_read_companies_csv_keeps_strings(tmp_path):
    path = tmp_path / "companies.csv"
    path.write_text(
        'Company,Website,Employees Count,Year Founded\n'
        'Acme,acme.com,45,2001\n'
        'Globex,,,\n',
        encoding="utf-8",
    )
    rows = read_companies_csv(str(path))
    assert rows == [
        {"Company": "Acme", "Website": "acme.com", "Employees Count": "45", "Year Founded": "2001"},
        {"Company": "Globex", "Website": "", "Employees Count": "", "Year Founded": ""},
    ]


def test_load_companies_inserts_one_document_per_chunk():
    session = MagicMock()
    report = load_companies(session, [ACME], get_embeddings=_fake_embeddings, chunk_size=120, chunk_overlap=20)

    added = [obj for call in session.add_all.call_args_list for obj in call.args[0]]
    assert report["companies"] == 1
    assert report["chunks"] == len(added) > 1
    assert report["failed"] == []
    assert all(isinstance(obj, CompanyChunk) for obj in added)
    assert all(obj.company == "Acme" and obj.record == ACME for obj in added)
    assert all(obj.embedding == [0.1, 0.2, 0.3] for obj in added)
    assert len({obj.id for obj in added}) == len(added)
    session.commit.assert_called_once()


def test_failed_company_does_not_stop_the_batch():
    session = MagicMock()
    globex = {**ACME, "Company": "Globex"}

    def flaky_embeddings(texts):
        if any("Globex" in t for t in texts):
            raise RuntimeError("rate limited")
        return _fake_embeddings(texts)

    report = load_companies(session, [globex, ACME], get_embeddings=flaky_embeddings)

    assert report["companies"] == 1
    assert report["failed"] == [{"company": "Globex", "error": "rate limited"}]
    session.rollback.assert_called_once()
    session.commit.assert_called_once()


def test_cli_rejects_missing_csv(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "missing.csv")])
    assert result.exit_code != 0
    assert "does not exist" in result.output


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "companies.csv"
    path.write_text(
        "Company,Website,Industry\n"
        "Acme,acme.com,Software\n",
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def patched_db():
    with patch("app.db.database.init_db") as init_db, \
            patch("app.db.database.SessionLocal") as session_factory, \
            patch("app.rag.embeddings.get_embeddings", side_effect=_fake_embeddings):
        yield init_db, session_factory.return_value.__enter__.return_value


def test_cli_default_run_recreates_collection(csv_file, patched_db):
    init_db, session = patched_db
    result = CliRunner().invoke(main, [csv_file])

    assert result.exit_code == 0, result.output
    init_db.assert_called_once_with(reset=True)
    session.commit.assert_called_once()
    assert "Indexed 1 of 1 companies" in result.output


def test_cli_keep_existing_does_not_reset(csv_file, patched_db):
    init_db, _ = patched_db
    result = CliRunner().invoke(main, [csv_file, "--keep-existing"])

    assert result.exit_code == 0, result.output
    init_db.assert_called_once_with(reset=False)


def test_cli_rejects_overlap_before_touching_db(csv_file, patched_db):
    init_db, session = patched_db
    result = CliRunner().invoke(main, [csv_file, "--chunk-size", "100", "--chunk-overlap", "100"])

    assert result.exit_code == 2
    assert "--chunk-overlap" in result.output
    init_db.assert_not_called()
    session.add_all.assert_not_called()


def test_cli_exits_non_zero_when_a_company_fails(csv_file, patched_db):
    with patch("app.rag.embeddings.get_embeddings", side_effect=RuntimeError("rate limited")):
        result = CliRunner().invoke(main, [csv_file])

    assert result.exit_code == 1
    assert "Failed companies: Acme" in result.output
