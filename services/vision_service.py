"""
Vision Service - asks Claude what is in the fridge and what to cook.

This service is pure Python with no Streamlit dependencies.

Claude receives the photo plus instructions and must answer through the
report_fridge_analysis tool, whose input schema mirrors our Recipe model.
Forcing the tool call gives us structured JSON instead of prose. The
payload is then validated with pydantic before anything reaches the
session.

Failures are returned, not raised:
- TRANSPORT: connection problems or an API error status
- TIMEOUT: the request took longer than the configured timeout
- EMPTY: Claude answered without a usable payload
- MALFORMED: the payload does not match the Recipe/Ingredient shape
"""

import base64
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Union

import anthropic
from pydantic import ValidationError

from config.settings import Settings, get_settings
from models.entities import AnalysisResult, DietaryFilter

logger = logging.getLogger(__name__)


class GatewayFailureKind(str, Enum):
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    EMPTY = "empty"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class GatewayFailure:
    """Why an analysis request produced no recipes."""
    kind: GatewayFailureKind
    message: str


AnalysisOutcome = Union[AnalysisResult, GatewayFailure]


class InferenceGateway(Protocol):
    """Anything that can turn a fridge photo into recipes."""

    async def analyze(self, image_bytes: bytes, media_type: str = "image/jpeg") -> AnalysisOutcome:
        ...


_INGREDIENT_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "quantity": {"type": "string", "description": "Amount needed, e.g. '2 cups'"},
        "is_missing": {
            "type": "boolean",
            "description": "True if required but NOT visible in the image",
        },
    },
    "required": ["name", "quantity", "is_missing"],
}

_RECIPE_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "description": {"type": "string"},
        "difficulty": {"type": "string", "enum": ["Easy", "Medium", "Hard"]},
        "prep_time": {"type": "string", "description": "e.g. '30 mins'"},
        "calories": {"type": "integer", "minimum": 0},
        "tags": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Dietary tags like Vegetarian, Vegan, Keto, Gluten-Free",
        },
        "ingredients": {"type": "array", "items": _INGREDIENT_SCHEMA},
        "steps": {"type": "array", "items": {"type": "string"}},
    },
    "required": [
        "name", "description", "difficulty", "prep_time",
        "calories", "tags", "ingredients", "steps",
    ],
}


class ClaudeVisionGateway:
    """Inference gateway backed by Claude's vision support."""

    TOOL_NAME = "report_fridge_analysis"

    ANALYSIS_PROMPT = """Analyze this image of a fridge or food ingredients.
1. Identify the visible ingredients.
2. Suggest {recipe_count} distinct culinary recipes that use these ingredients.
   Ensure a mix of dietary types ({dietary_labels}) if possible.
3. For each recipe, list all required ingredients. Mark an ingredient with is_missing true if it is NOT seen in the image but is required (like spices, oils, or secondary items not visible).
4. Provide step-by-step cooking instructions. Each step is one short sentence that reads well aloud.

Report your answer by calling the {tool_name} tool.
"""

    ANALYSIS_TOOLS = [
        {
            "name": TOOL_NAME,
            "description": "Report the ingredients seen in the photo and the suggested recipes.",
            "input_schema": {
                "type": "object",
                "properties": {
                    "detected_ingredients": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "List of ingredients identified in the image",
                    },
                    "recipes": {"type": "array", "items": _RECIPE_SCHEMA},
                },
                "required": ["detected_ingredients", "recipes"],
            },
        }
    ]

    def __init__(
        self,
        client: Optional[anthropic.AsyncAnthropic] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.client = client or anthropic.AsyncAnthropic(
            api_key=self.settings.anthropic_api_key,
            timeout=self.settings.gateway_timeout_seconds,
            max_retries=0,  # One attempt only; the user retries from the UI
        )
        self.model = self.settings.claude_model

    def _build_prompt(self) -> str:
        labels = ", ".join(f.label for f in DietaryFilter if f is not DietaryFilter.ALL)
        return self.ANALYSIS_PROMPT.format(
            recipe_count=self.settings.recipe_count,
            dietary_labels=labels,
            tool_name=self.TOOL_NAME,
        )

    async def analyze(self, image_bytes: bytes, media_type: str = "image/jpeg") -> AnalysisOutcome:
        """
        Detect ingredients and propose recipes for a photo.

        Args:
            image_bytes: Raw image data (JPEG, PNG, WebP or GIF)
            media_type: MIME type of the image

        Returns:
            AnalysisResult on success, GatewayFailure otherwise
        """
        if not image_bytes:
            return GatewayFailure(GatewayFailureKind.EMPTY, "No image data to analyze")

        encoded = base64.standard_b64encode(image_bytes).decode("ascii")

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.settings.gateway_max_tokens,
                tools=self.ANALYSIS_TOOLS,
                tool_choice={"type": "tool", "name": self.TOOL_NAME},
                messages=[{
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": media_type,
                                "data": encoded,
                            },
                        },
                        {"type": "text", "text": self._build_prompt()},
                    ],
                }],
            )
        except anthropic.APITimeoutError as e:
            logger.error(f"Claude vision request timed out: {e}")
            return GatewayFailure(GatewayFailureKind.TIMEOUT, "The analysis took too long")
        except anthropic.APIError as e:
            logger.error(f"Claude vision request failed: {e}")
            return GatewayFailure(GatewayFailureKind.TRANSPORT, str(e))

        return self._parse_response(response)

    def _parse_response(self, response) -> AnalysisOutcome:
        """Extract and validate the analysis payload from a Claude response."""
        payload = None
        for block in response.content:
            if block.type == "tool_use" and block.name == self.TOOL_NAME:
                payload = block.input
                break
            if block.type == "text" and block.text.strip():
                payload = block.text

        if not payload:
            logger.warning("Claude returned no analysis payload")
            return GatewayFailure(GatewayFailureKind.EMPTY, "No response from the model")

        try:
            if isinstance(payload, str):
                return AnalysisResult.model_validate_json(_strip_code_fence(payload))
            return AnalysisResult.model_validate(payload)
        except (ValidationError, json.JSONDecodeError) as e:
            logger.error(f"Failed to parse recipe data: {e}")
            return GatewayFailure(GatewayFailureKind.MALFORMED, "Failed to parse recipe data")


def _strip_code_fence(text: str) -> str:
    """Remove a ```json fence if the model wrapped its JSON in one."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        text = text.rsplit("```", 1)[0]
    return text.strip()
