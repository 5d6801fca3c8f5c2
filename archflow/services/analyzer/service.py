"""
Architecture analyzer: repository snapshot -> diagram + flows.

Uses Claude with extended thinking. When no API key is configured, or the
snapshot is empty (mock mode), a deterministic placeholder is returned so the
rest of the pipeline behaves identically.
"""

import logging
from typing import Any, cast

import anthropic

from archflow.config import settings
from archflow.schemas import AnalysisDraft, RepoRef
from archflow.services.analyzer.parser import AnalysisParseError, parse_analysis_response
from archflow.services.analyzer.placeholder import build_placeholder_analysis
from archflow.services.analyzer.prompts import build_analysis_prompt
from archflow.services.snapshot import RepoSnapshot

logger = logging.getLogger(__name__)


class ArchitectureAnalyzer:
    """
    Produce an AnalysisDraft for a repository.

    The model must return flows whose steps are numbered 1..n and whose node
    names are word prefixes of rendered node labels; the parser enforces the
    numbering and rejects anything else.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        thinking_budget: int | None = None,
    ) -> None:
        key = settings.anthropic_api_key if api_key is None else api_key
        self.client: anthropic.AsyncAnthropic | None = anthropic.AsyncAnthropic(api_key=key) if key else None
        self.model = model or settings.analyzer_model
        self.max_tokens = max_tokens or settings.analyzer_max_tokens
        self.thinking_budget = thinking_budget or settings.analyzer_thinking_budget

    async def analyze(self, repo: RepoRef, snapshot: RepoSnapshot) -> AnalysisDraft:
        """
        Analyze a repository snapshot.

        Args:
            repo: Repository identity (used in the prompt and placeholder)
            snapshot: Extracted file listing and key-file samples

        Returns:
            AnalysisDraft with diagram markup and flows

        Raises:
            AnalysisParseError: If the model response is unusable
            anthropic.APIError: If the model call fails
        """
        if self.client is None or snapshot.is_empty:
            logger.info(f"Using placeholder analysis for {repo.key} (no API key or empty snapshot)")
            return build_placeholder_analysis(repo)

        prompt = build_analysis_prompt(repo, snapshot)
        logger.info(f"Analyzing {repo.key} with {self.model} ({len(snapshot.files)} files)")

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            thinking=cast(Any, {"type": "enabled", "budget_tokens": self.thinking_budget}),
            messages=[{"role": "user", "content": prompt}],
        )

        text = self._response_text(response)
        draft = parse_analysis_response(text)
        logger.info(f"Generated diagram for {repo.key} with {len(draft.flows)} flows")
        return draft

    @staticmethod
    def _response_text(response: anthropic.types.Message) -> str:
        for block in response.content:
            if block.type == "text":
                return block.text
        raise AnalysisParseError("No text response from analyzer model")
