"""
Embeddings vía LangChain.

Por defecto usa la API de OpenAI (text-embedding-3-small, 1536 dimensiones).
Con EMBEDDING_PROVIDER=huggingface se usa un modelo sentence-transformers local.
La dimensión debe coincidir con la columna vector de company_chunks.
"""
import os
from functools import lru_cache

from langchain_core.embeddings import Embeddings
from langchain_openai import OpenAIEmbeddings

EMBEDDING_PROVIDER = os.getenv("EMBEDDING_PROVIDER", "openai").lower()

_DEFAULTS = {
    "openai": ("text-embedding-3-small", 1536),
    "huggingface": ("sentence-transformers/paraphrase-multilingual-MiniLM-L12-v2", 384),
}

if EMBEDDING_PROVIDER not in _DEFAULTS:
    raise ValueError(f"EMBEDDING_PROVIDER must be one of: {', '.join(sorted(_DEFAULTS))}")

EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", _DEFAULTS[EMBEDDING_PROVIDER][0])
EMBEDDING_DIMENSION = int(os.getenv("EMBEDDING_DIMENSION", str(_DEFAULTS[EMBEDDING_PROVIDER][1])))


@lru_cache(maxsize=1)
def get_langchain_embeddings() -> Embeddings:
    """
    Instancia de Embeddings compatible con LangChain.
    Se crea una sola vez en la primera llamada.
    """
    if EMBEDDING_PROVIDER == "huggingface":
        # Solo se importa si se usa (extra opcional "huggingface")
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(
            model_name=EMBEDDING_MODEL,
            model_kwargs={"device": "cpu"},
            encode_kwargs={"normalize_embeddings": True},
        )

    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY is not set")
    return OpenAIEmbeddings(model=EMBEDDING_MODEL, api_key=api_key)


def get_embedding(text: str) -> list[float]:
    """Devuelve el embedding de un texto como lista de floats."""
    return get_langchain_embeddings().embed_query(text)


def get_embeddings(texts: list[str]) -> list[list[float]]:
    """Devuelve una lista de embeddings para una lista de textos."""
    if not texts:
        return []
    return get_langchain_embeddings().embed_documents(texts)
