"""
Prompt construction for architecture analysis.

The model returns a single JSON object with a Mermaid flowchart and 2-4
animated flows. Step ``node`` values must be the leading words of a rendered
node label because the animation engine resolves them by word prefix.
"""

from archflow.schemas import RepoRef
from archflow.services.snapshot import RepoSnapshot

MAX_LISTED_FILES = 50

EXAMPLE_DIAGRAM = """flowchart TD
    Client["🖥️ Client<br/>Browser"]
    API["⚙️ API Server<br/>Express/Fastify"]
    DB[("🗄️ Database<br/>PostgreSQL")]
    Cache[("💾 Cache<br/>Redis")]

    Client -->|HTTP Request| API
    API -->|Query| DB
    API -->|Get/Set| Cache
    DB -->|Data| API
    Cache -->|Data| API
    API -->|Response| Client

    style Client fill:#3498db,stroke:#2980b9,stroke-width:3px,color:#fff
    style API fill:#2ecc71,stroke:#27ae60,stroke-width:3px,color:#fff
    style DB fill:#e74c3c,stroke:#c0392b,stroke-width:3px,color:#fff
    style Cache fill:#f39c12,stroke:#e67e22,stroke-width:3px,color:#fff"""

EXAMPLE_RESPONSE = """{
  "diagram": "flowchart TD\\n    Client[\\"🖥️ Client<br/>Browser\\"]\\n    ...",
  "flows": [
    {
      "name": "Creating a Blog Post",
      "description": "User publishes a new blog post through the admin interface",
      "steps": [
        {"step": 1, "node": "Client", "message": "User clicks 'Publish' in the admin UI", "duration": 800},
        {"step": 2, "node": "API Server", "message": "Validates auth token and routes request", "request": "POST /api/posts\\nAuthorization: Bearer eyJ...", "duration": 800},
        {"step": 3, "node": "Database", "message": "Creates new post record", "request": "INSERT INTO posts (title, content, author_id) VALUES (...)", "duration": 1000},
        {"step": 4, "node": "Cache", "message": "Invalidates cached post list", "request": "DEL posts:list", "duration": 600},
        {"step": 5, "node": "Client", "message": "Shows success and redirects", "response": "201 Created\\nLocation: /posts/123", "duration": 800}
      ],
      "nodes": ["Client", "API Server", "Database", "Cache"]
    }
  ]
}"""


def _format_samples(samples: dict[str, str]) -> str:
    return "\n".join(f"\n=== {path} ===\n{content}" for path, content in samples.items())


def build_analysis_prompt(repo: RepoRef, snapshot: RepoSnapshot) -> str:
    """Build the analysis prompt for one repository."""
    listing = "\n".join(snapshot.files[:MAX_LISTED_FILES])

    sections = [
        f"You are analyzing the {repo.owner}/{repo.name} GitHub repository to create an "
        "interactive, animated architecture diagram.",
        "",
        "## Repository structure",
        "",
        listing,
        "",
        "## Key files",
        _format_samples(snapshot.samples),
        "",
        "---",
        "",
        "## Task",
        "",
        "1. Identify the main components, services, data stores and external APIs.",
        "2. Create a Mermaid flowchart showing entry points, application components, "
        "storage layers, external services and request/response paths.",
        "3. Define 2-4 animated flows, each a CONCRETE user scenario "
        "(e.g. 'User logs in', 'Payment processing'), not a generic description.",
        "",
        "### Diagram requirements",
        "",
        "- Use `flowchart TD` orientation and meaningful node IDs (Client, API, Database, Cache)",
        "- Start node labels with an emoji, then the component name, e.g. \"🖥️ Client\"",
        "- Rectangles for services, cylinders for data stores",
        "- Style nodes with distinct colors per layer",
        "- Label every arrow with the interaction it represents",
        "- Declare edges in the same order as the steps of the first flow traverse them",
        "",
        "Example:",
        "```",
        EXAMPLE_DIAGRAM,
        "```",
        "",
        "### Flow requirements",
        "",
        "- `step` numbers start at 1 and increase by exactly 1",
        "- `node` must be the leading words of the target node's label, without the emoji "
        "(label \"⚙️ API Server<br/>Express\" -> node \"API Server\")",
        "- `message` says what concretely happens at that component",
        "- `duration` is the highlight time in milliseconds (600-1200)",
        "- Add `request` for outgoing operations (HTTP requests, SQL, cache commands) and "
        "`response` for returned data where applicable",
        "- `nodes` lists every node referenced by the flow",
        "",
        "## Output format",
        "",
        "Respond with ONLY a JSON object of this shape, no prose, no markdown fences:",
        "",
        EXAMPLE_RESPONSE,
        "",
        "Make the diagram accurate to the architecture actually found in the code.",
    ]
    return "\n".join(sections)
