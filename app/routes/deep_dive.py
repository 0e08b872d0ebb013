"""
Intelligence Brief a partir de una URL recién enviada (scraping en tiempo real + resumen LLM).
"""
import logging

from fastapi import APIRouter, HTTPException

from app.llm.groq_client import generate_intelligence_brief
from app.schemas import DeepDiveRequest, ErrorResponse, SummaryResponse
from app.scraping.web_scraper import ScrapeError, scrape_website

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_SCRAPED_CHARS = 2000


@router.post(
    "/deep-dive",
    response_model=SummaryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Generar un Intelligence Brief desde el website de una empresa",
)
def deep_dive(request: DeepDiveRequest):
    if not request.url or not request.company_name:
        raise HTTPException(status_code=400, detail="URL and company name are required.")

    try:
        scraped_text = scrape_website(request.url, max_chars=MAX_SCRAPED_CHARS)
    except ScrapeError as e:
        logger.warning("Deep dive for %s aborted: %s", request.company_name, e.reason)
        # Sin texto no hay nada que resumir: se devuelve el fallo como resumen
        return SummaryResponse(summary=e.user_message)

    summary = generate_intelligence_brief(request.company_name, request.url, scraped_text)
    return SummaryResponse(summary=summary)
