"""
Mermaid diagram rendering.

Layout is delegated to the Mermaid rendering service (mermaid.ink), which
takes base64url-encoded markup in the path and returns the SVG produced by
Mermaid itself, so node/edge classes match what the animation engine expects.
"""

import base64
import logging

import httpx

from archflow.config import settings

logger = logging.getLogger(__name__)


class DiagramRenderError(Exception):
    """The rendering service could not produce an SVG."""


def encode_diagram(markup: str) -> str:
    """Encode Mermaid markup for the rendering service URL."""
    return base64.urlsafe_b64encode(markup.encode("utf-8")).decode("ascii")


class DiagramRenderer:
    """Render Mermaid markup to SVG over HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        theme: str = "dark",
    ) -> None:
        self.base_url = (base_url or settings.mermaid_render_url).rstrip("/")
        self._client = client
        self.theme = theme

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(30.0, connect=5.0))
        return self._client

    async def render_svg(self, markup: str) -> str:
        """
        Render Mermaid markup.

        Returns:
            SVG document text

        Raises:
            DiagramRenderError: On transport errors or non-SVG responses
        """
        url = f"{self.base_url}/{encode_diagram(markup)}"
        try:
            response = await self._get_client().get(url, params={"theme": self.theme})
        except httpx.HTTPError as e:
            raise DiagramRenderError(f"Diagram renderer unreachable: {e}") from e

        if response.status_code != 200:
            logger.warning(f"Diagram renderer returned {response.status_code}")
            raise DiagramRenderError(f"Diagram renderer returned {response.status_code}")

        if "<svg" not in response.text:
            raise DiagramRenderError("Diagram renderer did not return SVG")

        return response.text

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
