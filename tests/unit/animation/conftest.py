"""Fixtures for animation tests: a Mermaid-shaped SVG and artifact builders."""

from __future__ import annotations

import pytest

from archflow.animation import SvgDiagram
from archflow.schemas import AnalysisArtifact, AnimationStep, Flow, RepoRef

# Trimmed-down output of Mermaid's flowchart renderer (HTML labels on).
MERMAID_SVG = """<svg id="mermaid-1" width="100%" xmlns="http://www.w3.org/2000/svg" viewBox="0 0 420 620">
<g class="root">
<g class="clusters"></g>
<g class="edgePaths">
<path d="M100,80L100,160" id="L_Client_API_0" class="edge-thickness-normal edge-pattern-solid flowchart-link" style="fill:none;"></path>
<path d="M100,220L100,300" id="L_API_DB_1" class="edge-thickness-normal edge-pattern-solid flowchart-link" style="fill:none;"></path>
<path d="M140,300L140,220" id="L_DB_API_2" class="edge-thickness-normal edge-pattern-solid flowchart-link"></path>
</g>
<g class="edgeLabels">
<g class="edgeLabel"><g class="label"><foreignObject><div><span class="edgeLabel">HTTP Request</span></div></foreignObject></g></g>
</g>
<g class="nodes">
<g class="node default" id="flowchart-Client-0" transform="translate(100, 50)">
<rect class="basic label-container" style="fill:#3498db !important;stroke:#2980b9 !important" x="-70" y="-30" width="140" height="60"></rect>
<g class="label"><foreignObject width="120" height="48"><div><span class="nodeLabel"><p>🖥️ Client<br>Browser</p></span></div></foreignObject></g>
</g>
<g class="node default" id="flowchart-API-1" transform="translate(100, 190)">
<rect class="basic label-container" x="-80" y="-30" width="160" height="60"></rect>
<g class="label"><foreignObject width="140" height="48"><div><span class="nodeLabel"><p>⚙️ API Server<br>Express</p></span></div></foreignObject></g>
</g>
<g class="node default" id="flowchart-DB-2" transform="translate(100, 330)">
<path d="M0,0 a40,8 0,0,0 80,0" class="basic label-container" style="fill:#e74c3c !important"></path>
<g class="label"><foreignObject width="100" height="24"><div><span class="nodeLabel"><p>🗄️ Database<br>PostgreSQL</p></span></div></foreignObject></g>
</g>
<g class="node default" id="flowchart-Chat-3" transform="translate(300, 190)">
<rect class="basic label-container" x="-80" y="-30" width="160" height="60"></rect>
<g class="label"><foreignObject width="140" height="24"><div><span class="nodeLabel"><p>Channels Group Chat</p></span></div></foreignObject></g>
</g>
</g>
</g>
</svg>"""

# Older Mermaid releases: plain text labels and edges under g.edgePath.
LEGACY_SVG = """<svg xmlns="http://www.w3.org/2000/svg">
<g class="edgePaths">
<g class="edgePath"><path class="path" d="M0,0L1,1"></path></g>
<g class="edgePath"><path class="path" d="M1,1L2,2"></path></g>
</g>
<g class="nodes">
<g class="node" id="A"><circle r="20"></circle><text><tspan>Queue</tspan><tspan>Worker</tspan></text></g>
<g class="node" id="B"><polygon points="0,0 1,1 2,0"></polygon><text>Decision</text></g>
</g>
</svg>"""


@pytest.fixture
def diagram() -> SvgDiagram:
    return SvgDiagram(MERMAID_SVG)


def _make_artifact(*flows: list[tuple[str, int]]) -> AnalysisArtifact:
    """Build an artifact with one flow per argument, each a list of (node, duration_ms)."""
    return AnalysisArtifact(
        diagram="flowchart TD",
        flows=[
            Flow(
                name=f"Flow {index + 1}",
                steps=[
                    AnimationStep(step=number, node=node, message=f"{node} works", duration=duration)
                    for number, (node, duration) in enumerate(steps, start=1)
                ],
                nodes=sorted({node for node, _ in steps}),
            )
            for index, steps in enumerate(flows)
        ],
        timestamp=0,
        repo=RepoRef(owner="acme", name="widgets"),
    )


@pytest.fixture
def make_artifact():
    return _make_artifact


@pytest.fixture
def legacy_diagram() -> SvgDiagram:
    return SvgDiagram(LEGACY_SVG)
