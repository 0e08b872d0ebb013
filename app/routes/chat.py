"""
Endpoint de chat RAG: embedding de la pregunta + 5 empresas más similares + respuesta con LLM.
El historial lo mantiene el frontend y lo envía en cada petición (chatHistory).
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.llm.groq_client import generate_chat_answer
from app.rag.embeddings import get_embedding
from app.rag.retriever import (
    RETRIEVAL_TOP_K,
    build_context,
    select_sources,
    similarity_search_companies,
)
from app.schemas import ChatRequest, ChatResponse, ErrorResponse

router = APIRouter()
logger = logging.getLogger(__name__)

NO_MATCHES_ANSWER = "Sorry, I couldn't find any companies matching that criteria in the database."


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Preguntar al analista sobre la base de empresas",
    response_description="Respuesta generada y, si es una recomendación, el primer documento recuperado.",
)
def chat(request: ChatRequest, db: Session = Depends(get_db)):
    """
    Responde una pregunta usando **búsqueda semántica** sobre las empresas indexadas.

    Flujo:
    1. Embedding de la pregunta.
    2. Recupera los 5 chunks más cercanos (distancia coseno, pgvector).
    3. Une sus textos como contexto y genera la respuesta con Groq LLM usando solo ese contexto.

    **Fuentes:** si todos los chunks son de la misma empresa (pregunta de detalle) no se
    devuelven fuentes; si hay varias empresas se devuelve solo el primer documento.
    """
    if not request.message or not request.message.strip():
        raise HTTPException(status_code=400, detail="Message cannot be empty.")

    docs_with_scores = similarity_search_companies(
        db, request.message, k=RETRIEVAL_TOP_K, get_embedding=get_embedding
    )
    if not docs_with_scores:
        logger.info("No companies matched the question")
        return ChatResponse(answer=NO_MATCHES_ANSWER, sources=[])

    chunks = [chunk for chunk, _ in docs_with_scores]
    context = build_context([chunk.text for chunk in chunks])

    history = [m.model_dump() for m in request.chat_history] if request.chat_history else None
    answer = generate_chat_answer(question=request.message, context=context, history=history)

    return ChatResponse(answer=answer, sources=select_sources(chunks))
