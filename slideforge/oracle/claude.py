"""
Layout oracle backed by Claude (Anthropic Messages API).
"""

import base64
import os
from typing import Optional

from anthropic import Anthropic

from slideforge.errors import OracleError
from slideforge.oracle.base import LayoutOracle
from slideforge.oracle.schema import SYSTEM_INSTRUCTION, OracleRequest

OUTPUT_FORMAT = """

Return valid JSON only, no markdown code blocks and no explanations:
{
  "backgroundColor": "#RRGGBB",
  "elements": [
    {"kind": "shape", "x": 0, "y": 0, "w": 100, "h": 20, "bgColor": "#RRGGBB", "shapeKind": "rect|ellipse|line"},
    {"kind": "image", "x": 10, "y": 30, "w": 40, "h": 50},
    {"kind": "text", "x": 5, "y": 5, "w": 90, "h": 10, "content": "...", "color": "#RRGGBB", "fontSize": 44, "bold": true, "align": "left|center|right"}
  ]
}
Required on every element: kind, x, y, w, h."""


class ClaudeLayoutOracle(LayoutOracle):
    """Ask Claude for a slide layout; the JSON shape is described in the prompt."""

    DEFAULT_MODEL = "claude-sonnet-4-5"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: int = 8192,
        debug: bool = False,
    ):
        super().__init__(debug=debug)
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ValueError(
                "Anthropic API key required. Set ANTHROPIC_API_KEY env var or pass api_key parameter."
            )

        self.client = Anthropic(api_key=self.api_key)
        self.model = model or self.DEFAULT_MODEL
        self.temperature = temperature
        self.max_tokens = max_tokens

    def complete(self, request: OracleRequest) -> str:
        print(
            f"[Oracle] Analyzing slide {request.page_index + 1} with {self.model} "
            f"({len(request.text_runs)} text runs)"
        )
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=SYSTEM_INSTRUCTION + OUTPUT_FORMAT,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": "image/jpeg",
                                    "data": base64.b64encode(request.image).decode("ascii"),
                                },
                            },
                            {"type": "text", "text": request.user_prompt()},
                        ],
                    }
                ],
            )
        except Exception as e:
            raise OracleError(f"Claude request failed: {e}") from e

        return "".join(block.text for block in response.content if block.type == "text")
