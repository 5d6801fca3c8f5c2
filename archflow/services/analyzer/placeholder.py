"""Deterministic placeholder analysis used when no model is available."""

from archflow.schemas import AnalysisDraft, AnimationStep, Flow, RepoRef


def build_placeholder_analysis(repo: RepoRef) -> AnalysisDraft:
    """One flow, four steps; edges are declared in step order."""
    diagram = f"""flowchart TD
    Client["🖥️ Client<br/>Browser"]
    Server["⚙️ Server<br/>{repo.name}"]
    DB[("🗄️ Database")]
    Cache[("💾 Cache")]

    Client -->|Request| Server
    Server -->|Query| DB
    DB -->|Data| Server
    Server -->|Response| Client
    Server -->|Read/Write| Cache
    Cache -->|Data| Server

    style Client fill:#3498db,stroke:#2980b9,stroke-width:3px,color:#fff
    style Server fill:#2ecc71,stroke:#27ae60,stroke-width:3px,color:#fff
    style DB fill:#e74c3c,stroke:#c0392b,stroke-width:3px,color:#fff
    style Cache fill:#f39c12,stroke:#e67e22,stroke-width:3px,color:#fff"""

    return AnalysisDraft(
        diagram=diagram,
        flows=[
            Flow(
                name="User Request Flow",
                description="A typical user request through the system",
                steps=[
                    AnimationStep(step=1, node="Client", message="User initiates request", duration=800),
                    AnimationStep(step=2, node="Server", message="Server queries the database", duration=800),
                    AnimationStep(step=3, node="Database", message="Database returns matching rows", duration=1000),
                    AnimationStep(step=4, node="Server", message="Server formats and returns the response", duration=800),
                ],
                nodes=["Client", "Server", "Database"],
            )
        ],
    )
