from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ClientMessage(BaseModel):
    """Mensaje del historial tal como lo envía el frontend."""
    role: str = Field(..., description="'user' o 'ai'.")
    content: str = Field(..., description="Contenido del mensaje.")


class ChatRequest(BaseModel):
    """Cuerpo de la petición para el endpoint /api/chat."""
    model_config = ConfigDict(populate_by_name=True)

    message: str | None = Field(
        default=None,
        description="Pregunta del analista.",
        examples=["Find B2B companies in the software industry"],
    )
    chat_history: list[ClientMessage] | None = Field(
        default=None,
        alias="chatHistory",
        description="Historial opcional de la conversación en orden cronológico.",
    )


class ChatResponse(BaseModel):
    """Respuesta del endpoint POST /api/chat."""
    answer: str = Field(..., description="Respuesta generada por el LLM.")
    sources: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Documento recomendado (fila del CSV + _id + text). Vacío en preguntas sobre una sola empresa.",
    )


class CompanyData(BaseModel):
    """
    Datos internos de una empresa, con los nombres de columna del CSV.
    Se aceptan columnas extra (Revenue, City, Owner's Email, ...).
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    company: str | None = Field(default=None, alias="Company")
    website: str | None = Field(default=None, alias="Website")
    industry: str | None = Field(default=None, alias="Industry")
    category: str | None = Field(default=None, alias="Product/Service Category")
    business_type: str | None = Field(default=None, alias="Business Type (B2B, B2B2C)")
    employees_count: str | None = Field(default=None, alias="Employees Count")

    def to_record(self) -> dict[str, Any]:
        """Diccionario con las claves originales del CSV."""
        return self.model_dump(by_alias=True)


class AnalyzeCompanyRequest(BaseModel):
    """Cuerpo de la petición para el endpoint /api/analyze-company."""
    model_config = ConfigDict(populate_by_name=True)

    company_data: CompanyData | None = Field(default=None, alias="companyData")


class DeepDiveRequest(BaseModel):
    """Cuerpo de la petición para el endpoint /api/deep-dive."""
    model_config = ConfigDict(populate_by_name=True)

    url: str | None = Field(default=None, description="Website de la empresa (con o sin http://).")
    company_name: str | None = Field(default=None, alias="companyName")


class SummaryResponse(BaseModel):
    """Respuesta de /api/analyze-company y /api/deep-dive."""
    summary: str = Field(..., description="Informe en Markdown o mensaje de fallo del scraping.")


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    """Respuesta de GET /api/health."""
    status: str = Field(..., description="'ok' si el servicio está en marcha.")
