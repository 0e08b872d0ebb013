"""
Cliente Groq LLM para el chat RAG y los informes de empresa.

- generate_chat_answer: respuesta de analista usando solo el contexto recuperado
  y, opcionalmente, el historial de chat del cliente.
- generate_executive_brief: "Executive Brief" con datos de la BD + texto del website.
- generate_intelligence_brief: "Intelligence Brief" solo con el texto del website.
"""
import os

from groq import Groq

from app.llm.prompts import (
    CHAT_SYSTEM_PROMPT,
    CHAT_USER_TEMPLATE,
    EXECUTIVE_BRIEF_SYSTEM_PROMPT,
    EXECUTIVE_BRIEF_USER_TEMPLATE,
    INTELLIGENCE_BRIEF_SYSTEM_PROMPT,
    INTELLIGENCE_BRIEF_USER_TEMPLATE,
)

DEFAULT_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
CHAT_TEMPERATURE = 0.3
BRIEF_TEMPERATURE = 0.4
# Máximo de mensajes de historial a enviar al LLM (por límite de contexto)
MAX_HISTORY_MESSAGES = int(os.getenv("GROQ_MAX_HISTORY_MESSAGES", "10"))

CHAT_FALLBACK = "Sorry, an error occurred while processing your request."
EXECUTIVE_BRIEF_FALLBACK = "Could not generate summary."
INTELLIGENCE_BRIEF_FALLBACK = "Could not generate a summary."


def get_groq_client():
    api_key = os.getenv("GROQ_API_KEY")
    if not api_key:
        raise RuntimeError("GROQ_API_KEY is not set")
    return Groq(api_key=api_key)


def complete(
    messages: list[dict],
    temperature: float,
    model: str = DEFAULT_MODEL,
) -> str:
    """Llama a chat completions y devuelve el contenido ("" si el modelo no devuelve nada)."""
    client = get_groq_client()
    completion = client.chat.completions.create(
        model=model,
        messages=messages,
        temperature=temperature,
    )
    content = completion.choices[0].message.content if completion.choices else None
    return (content or "").strip()


def to_llm_history(chat_history: list[dict] | None) -> list[dict]:
    """
    Convierte el historial del frontend al formato del LLM.
    El rol "ai" pasa a "assistant"; cualquier otro rol se envía como "user".
    """
    if not chat_history:
        return []
    messages = [
        {
            "role": "assistant" if msg["role"] == "ai" else "user",
            "content": msg["content"],
        }
        for msg in chat_history
    ]
    # Enviar solo los últimos N mensajes para no exceder contexto
    return messages[-MAX_HISTORY_MESSAGES:] if MAX_HISTORY_MESSAGES > 0 else []


def generate_chat_answer(
    question: str,
    context: str,
    history: list[dict] | None = None,
    model: str = DEFAULT_MODEL,
) -> str:
    """
    Genera la respuesta del analista.
    history: lista de {"role": "user"|"ai", "content": str} (orden cronológico).
    """
    messages = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
    messages.extend(to_llm_history(history))
    messages.append({
        "role": "user",
        "content": CHAT_USER_TEMPLATE.format(context=context, question=question),
    })
    return complete(messages, temperature=CHAT_TEMPERATURE, model=model) or CHAT_FALLBACK


def generate_executive_brief(company: dict, scraped_text: str, model: str = DEFAULT_MODEL) -> str:
    """company usa las claves del CSV ("Company", "Website", "Industry", ...)."""
    user_content = EXECUTIVE_BRIEF_USER_TEMPLATE.format(
        company=company.get("Company"),
        industry=company.get("Industry"),
        category=company.get("Product/Service Category"),
        business_type=company.get("Business Type (B2B, B2B2C)"),
        employees=company.get("Employees Count"),
        website=company.get("Website"),
        scraped_text=scraped_text,
    )
    messages = [
        {"role": "system", "content": EXECUTIVE_BRIEF_SYSTEM_PROMPT},
        {"role": "user", "content": user_content},
    ]
    return complete(messages, temperature=BRIEF_TEMPERATURE, model=model) or EXECUTIVE_BRIEF_FALLBACK


def generate_intelligence_brief(
    company_name: str,
    url: str,
    scraped_text: str,
    model: str = DEFAULT_MODEL,
) -> str:
    messages = [
        {"role": "system", "content": INTELLIGENCE_BRIEF_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": INTELLIGENCE_BRIEF_USER_TEMPLATE.format(
                company_name=company_name, url=url, scraped_text=scraped_text
            ),
        },
    ]
    return complete(messages, temperature=BRIEF_TEMPERATURE, model=model) or INTELLIGENCE_BRIEF_FALLBACK
