import os
import logging

import psycopg2
from sqlalchemy import event, text
from sqlalchemy import create_engine
from typing import Generator
from sqlalchemy.orm import sessionmaker, Session
from app.db.models import Base, CompanyChunk
from pgvector.psycopg2 import register_vector

logger = logging.getLogger(__name__)

ENV = os.getenv("ENV", "development")
if ENV == "development":
    DB_URL = os.getenv("DATABASE_URL_LOCAL") or os.getenv("DATABASE_URL")
else:
    DB_URL = os.getenv("DATABASE_URL")

if not DB_URL:
    raise ValueError("DATABASE_URL is not set")
engine = create_engine(DB_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine)

# Registrar el tipo pgvector en conexiones psycopg2 (para que list[float] -> vector funcione bien)
@event.listens_for(engine, "connect")
def _register_vector(dbapi_connection, connection_record):
    # La extensión puede no existir todavía en la primera conexión (init_db la crea)
    try:
        register_vector(dbapi_connection)
    except psycopg2.ProgrammingError:
        dbapi_connection.rollback()
        logger.warning("pgvector type not registered yet; run init_db() to create the extension")


def init_db(reset: bool = False) -> None:
    """
    Crea la extensión vector y las tablas.
    Con reset=True elimina la colección de chunks y la vuelve a crear vacía.
    """
    with engine.begin() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    # Nuevas conexiones ya pueden registrar el tipo vector
    engine.dispose()
    if reset:
        CompanyChunk.__table__.drop(bind=engine, checkfirst=True)
        logger.info("Old collection '%s' deleted", CompanyChunk.__tablename__)
    Base.metadata.create_all(bind=engine)
    logger.info("Collection '%s' ready", CompanyChunk.__tablename__)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
