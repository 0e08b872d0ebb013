import os

from sqlalchemy import select

from app.db.models import CompanyChunk

RETRIEVAL_TOP_K = int(os.getenv("RETRIEVAL_TOP_K", "5"))
MAX_CONTEXT_CHARS = int(os.getenv("MAX_CONTEXT_CHARS", "32000"))
CONTEXT_SEPARATOR = "\n---\n"


def similarity_search_companies(
    session,
    question: str,
    k: int = RETRIEVAL_TOP_K,
    get_embedding=None,
) -> list[tuple[CompanyChunk, float]]:
    """
    Busca los k chunks de empresas más parecidos a la pregunta.

    Usa CompanyChunk.embedding.cosine_distance() (pgvector) para ordenar por
    distancia coseno. Menor distancia = más similar.

    Args:
        session: Sesión SQLAlchemy (con register_vector en la conexión).
        question: Texto de la pregunta.
        k: Número máximo de chunks a devolver.
        get_embedding: Función (str) -> list[float]. Si no se pasa, se usa app.rag.embeddings.get_embedding.

    Returns:
        Lista de tuplas (CompanyChunk, distancia).
    """
    if get_embedding is None:
        from app.rag.embeddings import get_embedding as _ge
        get_embedding = _ge
    query_embedding = get_embedding(question)

    distance_col = CompanyChunk.embedding.cosine_distance(query_embedding)
    stmt = (
        select(CompanyChunk, distance_col.label("distance"))
        .order_by(distance_col)
        .limit(k)
    )
    rows = session.execute(stmt).all()
    return [(row[0], float(row.distance)) for row in rows]


def build_context(texts: list[str], max_chars: int = MAX_CONTEXT_CHARS) -> str:
    """
    Une los textos con separadores '---'.
    Si se supera max_chars se corta, pero siempre entra al menos el primer texto.
    """
    parts = []
    total_len = 0
    for t in texts:
        add_len = (len(CONTEXT_SEPARATOR) if parts else 0) + len(t)
        if total_len + add_len > max_chars and parts:
            break
        parts.append(t)
        total_len += add_len
    return CONTEXT_SEPARATOR.join(parts)


def chunk_to_source(chunk: CompanyChunk) -> dict:
    """Documento tal como se guardó (fila del CSV + _id + text), sin el vector."""
    return {"_id": chunk.id, **(chunk.record or {}), "text": chunk.text}


def select_sources(chunks: list[CompanyChunk]) -> list[dict]:
    """
    Fuentes que acompañan la respuesta del chat.
    - Todos los chunks son de la misma empresa (pregunta de detalle): ninguna fuente.
    - Varias empresas (recomendación): solo el primer documento recuperado.
    """
    if not chunks:
        return []
    if len({c.company for c in chunks}) == 1:
        return []
    return [chunk_to_source(chunks[0])]
