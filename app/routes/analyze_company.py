"""
Executive Brief de una empresa: datos internos (enviados por el frontend) + scraping del website.
"""
import logging

from fastapi import APIRouter, HTTPException

from app.llm.groq_client import generate_executive_brief
from app.schemas import AnalyzeCompanyRequest, ErrorResponse, SummaryResponse
from app.scraping.web_scraper import ScrapeError, scrape_website

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_SCRAPED_CHARS = 2500


@router.post(
    "/analyze-company",
    response_model=SummaryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Generar un Executive Brief de una empresa",
)
def analyze_company(request: AnalyzeCompanyRequest):
    """
    Requiere `companyData` con al menos `Company` y `Website`.

    Si el scraping falla, el LLM recibe el mensaje de fallo en lugar del texto y
    el informe se basa solo en los datos de la BD.
    """
    company = request.company_data
    if company is None or not company.website or not company.company:
        raise HTTPException(status_code=400, detail="Incomplete company data.")

    try:
        scraped_text = scrape_website(company.website, max_chars=MAX_SCRAPED_CHARS)
    except ScrapeError as e:
        logger.warning("Website of %s not available, using database data only", company.company)
        scraped_text = e.user_message

    summary = generate_executive_brief(company.to_record(), scraped_text)
    return SummaryResponse(summary=summary)
