from unittest.mock import patch

from app.scraping.web_scraper import ScrapeError


def test_requires_url_and_company_name(client):
    for payload in ({}, {"url": "acme.com"}, {"companyName": "Acme"}, {"url": "", "companyName": "Acme"}):
        r = client.post("/api/deep-dive", json=payload)
        assert r.status_code == 400
        assert r.json() == {"error": "URL and company name are required."}


def test_intelligence_brief(client):
    with patch("app.routes.deep_dive.scrape_website", return_value="Acme sells ERP.") as scrape, \
            patch("app.routes.deep_dive.generate_intelligence_brief", return_value="# Intelligence Brief: Acme") as brief:
        r = client.post("/api/deep-dive", json={"url": "https://acme.com", "companyName": "Acme"})

    assert r.status_code == 200
    assert r.json() == {"summary": "# Intelligence Brief: Acme"}
    scrape.assert_called_once_with("https://acme.com", max_chars=2000)
    brief.assert_called_once_with("Acme", "https://acme.com", "Acme sells ERP.")


def test_scrape_failure_is_returned_without_llm_call(client):
    with patch("app.routes.deep_dive.scrape_website", side_effect=ScrapeError("acme.com", "HTTP 403")), \
            patch("app.routes.deep_dive.generate_intelligence_brief") as brief:
        r = client.post("/api/deep-dive", json={"url": "acme.com", "companyName": "Acme"})

    assert r.status_code == 200
    assert r.json() == {"summary": "Failed to scrape acme.com. The site may be inaccessible or protected."}
    brief.assert_not_called()
