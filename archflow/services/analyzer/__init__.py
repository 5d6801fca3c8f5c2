"""
Architecture analyzer package.

- service.py: ArchitectureAnalyzer (model call or placeholder)
- prompts.py: Prompt construction
- parser.py: Response parsing and validation
- placeholder.py: Deterministic fallback artifact
"""

from archflow.services.analyzer.parser import (
    AnalysisParseError,
    extract_json_text,
    parse_analysis_response,
)
from archflow.services.analyzer.placeholder import build_placeholder_analysis
from archflow.services.analyzer.prompts import build_analysis_prompt
from archflow.services.analyzer.service import ArchitectureAnalyzer

__all__ = [
    "AnalysisParseError",
    "ArchitectureAnalyzer",
    "build_analysis_prompt",
    "build_placeholder_analysis",
    "extract_json_text",
    "parse_analysis_response",
]
