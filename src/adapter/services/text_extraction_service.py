"""OpenAI-compatible Free-Text Extraction Service Implementation

Sends the user's text to a chat completions endpoint and expects a JSON
object back. Works with OpenAI and any server exposing the same API
(set LLM_BASE_URL).
"""

import json
import logging
from datetime import date
from typing import Any, Dict, Optional

from openai import AsyncOpenAI, OpenAIError

from src.app.services.text_extraction_service import TextExtractionService, ExtractionError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an invoice data extraction assistant. Parse the user's natural language input into structured invoice data.

Return a JSON object with this structure:
{
  "client_name": "client/company name",
  "invoice_date": "YYYY-MM-DD (today if not specified)",
  "due_date": "YYYY-MM-DD if mentioned, else null",
  "currency": "USD, EUR, GBP, etc. (default USD)",
  "payment_terms": "payment terms if mentioned, else null",
  "notes": "any additional notes, else null",
  "line_items": [
    {
      "description": "service/product description",
      "quantity": number (default 1),
      "unit_price": number (from hourly rate, price, etc.),
      "tax_rate": number (percentage, default 0)
    }
  ]
}

Examples:
- "Invoice John for 5 hours at $100/hr" -> John, 5 hours consulting, 100 each
- "Bill ABC Corp for web design $2500" -> ABC Corp, web design service, 2500
- "Create invoice for TechCo: 10 licenses at 50 dollars, 8% tax" -> TechCo, 10 licenses, 50, 8% tax

Return ONLY valid JSON, no additional text or markdown."""


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if the model added one"""
    text = text.strip()
    if text.startswith("```"):
        first_newline = text.find("\n")
        text = text[first_newline + 1:] if first_newline != -1 else text[3:]
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


class OpenAITextExtractionService(TextExtractionService):
    """
    OpenAI SDK implementation of TextExtractionService

    A preconfigured AsyncOpenAI client can be injected (used by tests).
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.client = client or AsyncOpenAI(
            api_key=api_key or "not-configured",
            base_url=base_url,
            timeout=timeout,
        )

    async def extract(self, text: str) -> Dict[str, Any]:
        """
        Extract invoice fields from free text

        Raises:
            ExtractionError: On API failure or a reply that is not a JSON object
        """
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                temperature=0,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": f"Today is {date.today().isoformat()}.\n\n{text}"},
                ],
            )
        except OpenAIError as e:
            logger.error(f"Language model request failed: {e}")
            raise ExtractionError(f"Language model request failed: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise ExtractionError("Language model returned an empty response")

        try:
            payload = json.loads(strip_code_fences(content))
        except json.JSONDecodeError as e:
            raise ExtractionError("Failed to parse JSON from the model's response") from e

        if not isinstance(payload, dict):
            raise ExtractionError("Model response is not a JSON object")

        return payload
