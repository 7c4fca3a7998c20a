"""
Layout oracle backed by Google Gemini (google-genai SDK).
"""

import os
from typing import Optional

from google import genai
from google.genai import types

from slideforge.errors import OracleError
from slideforge.oracle.base import LayoutOracle
from slideforge.oracle.schema import RESPONSE_SCHEMA, SYSTEM_INSTRUCTION, OracleRequest


class GeminiLayoutOracle(LayoutOracle):
    """
    Ask Gemini for a slide layout using structured JSON output.

    The response schema is enforced server-side and validated again locally.
    """

    DEFAULT_MODEL = "gemini-2.0-flash"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = 0.0,
        debug: bool = False,
    ):
        super().__init__(debug=debug)
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not self.api_key:
            raise ValueError(
                "Gemini API key required. Set GEMINI_API_KEY env var or pass api_key parameter."
            )

        self.client = genai.Client(api_key=self.api_key)
        self.model = model or self.DEFAULT_MODEL
        self.temperature = temperature

    def complete(self, request: OracleRequest) -> str:
        print(
            f"[Oracle] Analyzing slide {request.page_index + 1} with {self.model} "
            f"({len(request.text_runs)} text runs)"
        )
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_bytes(data=request.image, mime_type="image/jpeg"),
                    request.user_prompt(),
                ],
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_INSTRUCTION,
                    temperature=self.temperature,
                    response_mime_type="application/json",
                    response_schema=RESPONSE_SCHEMA,
                ),
            )
            return response.text
        except Exception as e:
            raise OracleError(f"Gemini request failed: {e}") from e
