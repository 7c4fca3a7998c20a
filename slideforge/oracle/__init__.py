"""
Layout oracles: multimodal LLMs that propose a structured slide layout
from a page raster and its text layer.
"""

from typing import Optional

from slideforge.oracle.base import LayoutOracle
from slideforge.oracle.schema import OracleLayout, OracleRequest, parse_layout_response


def create_oracle(
    name: str, model: Optional[str] = None, temperature: float = 0.0, debug: bool = False
) -> LayoutOracle:
    """Build a layout oracle by backend name ("gemini" or "claude")."""
    if name == "gemini":
        from slideforge.oracle.gemini import GeminiLayoutOracle

        return GeminiLayoutOracle(model=model, temperature=temperature, debug=debug)
    elif name == "claude":
        from slideforge.oracle.claude import ClaudeLayoutOracle

        return ClaudeLayoutOracle(model=model, temperature=temperature, debug=debug)
    else:
        raise ValueError(f"Unknown layout oracle: {name}")


__all__ = [
    "LayoutOracle",
    "OracleLayout",
    "OracleRequest",
    "parse_layout_response",
    "create_oracle",
]
