"""
Analyzer response parsing.

Parses and validates the model's JSON response into an AnalysisDraft.
"""

import json
import logging
import re

from pydantic import ValidationError

from archflow.schemas import AnalysisDraft, MalformedFlowError

logger = logging.getLogger(__name__)

_CODE_BLOCK = re.compile(r"```(?:json)?\s*\n([\s\S]*?)\n```")


class AnalysisParseError(ValueError):
    """The model response is not a usable analysis."""


def extract_json_text(response_text: str) -> str:
    """
    Locate the JSON object in a model response.

    Handles:
    - Raw JSON objects
    - JSON in markdown code blocks
    - JSON surrounded by extra prose (first ``{`` to last ``}``)
    """
    text = response_text.strip()

    match = _CODE_BLOCK.search(text)
    if match:
        return match.group(1).strip()

    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace != -1 and last_brace > first_brace:
        return text[first_brace : last_brace + 1]
    return text


def parse_analysis_response(response_text: str) -> AnalysisDraft:
    """
    Parse the model's response text into a validated draft.

    Raises:
        AnalysisParseError: If the JSON is invalid, required fields are missing,
            or any flow breaks the 1..n step numbering
    """
    json_text = extract_json_text(response_text)

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON from analyzer response: {json_text[:500]!r}")
        raise AnalysisParseError(f"Failed to parse analyzer response as JSON: {e.msg}") from e

    if not isinstance(data, dict) or not data.get("diagram") or "flows" not in data:
        raise AnalysisParseError("Analyzer response missing required fields (diagram or flows)")

    try:
        draft = AnalysisDraft.model_validate(data)
    except ValidationError as e:
        raise AnalysisParseError(f"Analyzer response has invalid structure: {e.error_count()} errors") from e

    try:
        for flow in draft.flows:
            flow.validate_sequence()
    except MalformedFlowError as e:
        raise AnalysisParseError(str(e)) from e

    return draft
