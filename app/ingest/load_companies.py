"""
Carga masiva de empresas desde un CSV al vector store.

Por cada fila:
1. Construye un párrafo descriptivo con los campos principales.
2. Lo divide en chunks (tamaño/solapamiento fijos).
3. Calcula los embeddings en batch.
4. Inserta un CompanyChunk por chunk (con la fila completa del CSV como record).

Si una empresa falla (API de embeddings, BD...), se hace rollback solo de esa
empresa, se registra el error y se continúa con la siguiente.

Uso:
    company-loader companies_data.csv
    python -m app.ingest.load_companies companies_data.csv --keep-existing
"""
import logging
import os
import re
import sys
import uuid
from typing import Iterable

from dotenv import load_dotenv
load_dotenv()

import click
import pandas as pd

from app.db.models import CompanyChunk
from app.rag.chunking import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, chunk_text

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not available"
DEFAULT_CSV_PATH = "./companies_data.csv"


def _field(row: dict, key: str) -> str:
    value = row.get(key)
    if value is None:
        return ""
    return str(value).strip()


def build_company_text(row: dict) -> str:
    """
    Texto que se indexa para una empresa.
    Los campos vacíos se rellenan con "Not available"; los espacios se colapsan a uno.
    """
    def field_or_na(key: str) -> str:
        return _field(row, key) or NOT_AVAILABLE

    combined = f"""
        Company Name: {field_or_na("Company")}.
        Website: {field_or_na("Website")}.
        Industry: {field_or_na("Industry")}.
        Product/Service Category: {field_or_na("Product/Service Category")}.
        Business Type: {field_or_na("Business Type (B2B, B2B2C)")}.
        Employee Count: {field_or_na("Employees Count")}.
        Year Founded: {field_or_na("Year Founded")}.
        Additional Description: This company operates in the {_field(row, "Industry")} industry with a focus on {_field(row, "Product/Service Category")}. They target the {_field(row, "Business Type (B2B, B2B2C)")} market.
    """
    return re.sub(r"\s+", " ", combined.strip())


def read_companies_csv(path: str) -> list[dict]:
    """Lee el CSV con todas las columnas como texto (celdas vacías -> "")."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
    df.columns = [str(c).strip() for c in df.columns]
    return df.to_dict(orient="records")


def load_companies(
    session,
    rows: Iterable[dict],
    get_embeddings=None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> dict:
    """
    Indexa las empresas en company_chunks. Commit por empresa.

    Returns:
        {"companies": empresas indexadas, "chunks": chunks insertados,
         "failed": [{"company": ..., "error": ...}]}
    """
    if get_embeddings is None:
        from app.rag.embeddings import get_embeddings as _ge
        get_embeddings = _ge

    rows = list(rows)
    total = len(rows)
    indexed = 0
    inserted_chunks = 0
    failed = []

    for counter, row in enumerate(rows, start=1):
        company = _field(row, "Company")
        logger.info("Processing company %d of %d: %s", counter, total, company)
        try:
            chunks = chunk_text(build_company_text(row), chunk_size=chunk_size, chunk_overlap=chunk_overlap)
            embeddings = get_embeddings(chunks)
            if len(embeddings) != len(chunks):
                raise RuntimeError("Número de embeddings no coincide con número de chunks")

            base_id = str(uuid.uuid4())
            session.add_all([
                CompanyChunk(
                    id=f"{base_id}_{i}",
                    company=company,
                    website=_field(row, "Website") or None,
                    record=dict(row),
                    text=chunk,
                    embedding=embedding,
                )
                for i, (chunk, embedding) in enumerate(zip(chunks, embeddings))
            ])
            # Commit por empresa: si esta va bien, se persiste aunque la siguiente falle
            session.commit()
            indexed += 1
            inserted_chunks += len(chunks)
        except Exception as e:
            session.rollback()
            logger.exception("Failed to process company %s", company)
            failed.append({"company": company, "error": str(e)})

    return {"companies": indexed, "chunks": inserted_chunks, "failed": failed}


@click.command()
@click.argument("csv_path", default=DEFAULT_CSV_PATH, type=click.Path(exists=True, dir_okay=False))
@click.option("--keep-existing", is_flag=True, help="No borrar la colección antes de cargar.")
@click.option("--chunk-size", default=DEFAULT_CHUNK_SIZE, show_default=True, help="Tamaño de chunk en caracteres.")
@click.option("--chunk-overlap", default=DEFAULT_CHUNK_OVERLAP, show_default=True, help="Solapamiento en caracteres.")
def main(csv_path: str, keep_existing: bool, chunk_size: int, chunk_overlap: int):
    """Carga CSV_PATH (por defecto ./companies_data.csv) en la BD vectorial."""
    # Validar antes de tocar la BD: init_db(reset=True) borra la colección
    if chunk_overlap >= chunk_size:
        raise click.BadParameter("must be smaller than --chunk-size", param_hint="'--chunk-overlap'")

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    from app.db.database import SessionLocal, init_db

    init_db(reset=not keep_existing)

    rows = read_companies_csv(csv_path)
    logger.info("Successfully loaded %d rows from CSV", len(rows))

    with SessionLocal() as session:
        report = load_companies(session, rows, chunk_size=chunk_size, chunk_overlap=chunk_overlap)

    logger.info(
        "Indexed %d companies (%d chunks); %d failed",
        report["companies"], report["chunks"], len(report["failed"]),
    )
    click.echo(f"Indexed {report['companies']} of {len(rows)} companies ({report['chunks']} chunks).")
    if report["failed"]:
        click.echo(f"Failed companies: {', '.join(f['company'] for f in report['failed'])}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
