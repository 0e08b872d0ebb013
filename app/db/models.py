from datetime import datetime
from sqlalchemy import String, Text, DateTime, JSON, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid import uuid4
from pgvector.sqlalchemy import Vector

from app.rag.embeddings import EMBEDDING_DIMENSION


class Base(DeclarativeBase):
    pass


class CompanyChunk(Base):
    """
    Un fragmento del texto de una empresa con su embedding.
    record guarda la fila original del CSV (mismas claves: "Company", "Website", ...).
    """
    __tablename__ = "company_chunks"
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))
    company: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    website: Mapped[str | None] = mapped_column(String(512), nullable=True)
    record: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)

    __table_args__ = (
        # Métrica coseno para la búsqueda por similitud
        Index(
            "ix_company_chunks_embedding",
            "embedding",
            postgresql_using="hnsw",
            postgresql_with={"m": 16, "ef_construction": 64},
            postgresql_ops={"embedding": "vector_cosine_ops"},
        ),
    )
