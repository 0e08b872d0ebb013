"""
Scraping "best effort" de la página principal de una empresa.

Descarga el HTML con timeout fijo, quita navegación, cabeceras, pies y scripts,
y devuelve el texto del body con los espacios colapsados y recortado a max_chars.
"""
import logging
import os
import re

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

SCRAPE_TIMEOUT_SECONDS = float(os.getenv("SCRAPE_TIMEOUT_SECONDS", "8"))

# Navegador de escritorio para evitar bloqueos simples
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

NOISE_SELECTOR = 'nav, footer, script, style, header, [role="navigation"], [role="banner"]'

_WHITESPACE_RUNS = re.compile(r"\s\s+")


class ScrapeError(Exception):
    """No se pudo obtener el contenido de la URL."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Error scraping {url}: {reason}")
        self.url = url
        self.reason = reason

    @property
    def user_message(self) -> str:
        return f"Failed to scrape {self.url}. The site may be inaccessible or protected."


def normalize_url(url: str) -> str:
    """Añade http:// si la URL no lo trae."""
    url = url.strip()
    return url if url.startswith("http") else f"http://{url}"


def extract_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.select(NOISE_SELECTOR):
        tag.decompose()
    root = soup.body or soup
    return _WHITESPACE_RUNS.sub(" ", root.get_text()).strip()


def scrape_website(url: str, max_chars: int, timeout: float = SCRAPE_TIMEOUT_SECONDS) -> str:
    """
    Devuelve como mucho max_chars caracteres de texto limpio de la página.

    Raises:
        ScrapeError: timeout, error de red o respuesta no 2xx.
    """
    full_url = normalize_url(url)
    try:
        response = requests.get(full_url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    except requests.RequestException as e:
        logger.error("Error scraping %s: %s", url, e)
        raise ScrapeError(url, str(e)) from e

    if not response.ok:
        logger.error("Error scraping %s: HTTP %s %s", url, response.status_code, response.reason)
        raise ScrapeError(url, f"Failed to fetch URL: {response.reason}")

    return extract_text(response.text)[:max_chars]
