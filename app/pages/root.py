"""Root landing page with a short description and API links."""

from html import escape


def render_root_page(app_name: str, app_version: str) -> str:
    """Return HTML for the root landing page."""
    name = escape(app_name)
    version = escape(app_version)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name} API</title>
    <style>
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            padding: 2rem 1rem;
            background: #0b0b0b;
            color: #e0e0e0;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ font-size: 2.25rem; margin: 0 0 0.25rem 0; color: #fff; }}
        .tagline {{ color: #999; margin: 0 0 2rem 0; }}
        .card {{
            background: #141414;
            border: 1px solid #222;
            padding: 1.25rem 1.5rem;
            margin-bottom: 1rem;
        }}
        .card h2 {{
            font-size: 0.75rem;
            text-transform: uppercase;
            letter-spacing: 0.08em;
            color: #777;
            margin: 0 0 0.75rem 0;
        }}
        a {{ color: #7cc4ff; }}
        code {{ font-family: ui-monospace, monospace; color: #ccc; }}
        ul {{ margin: 0; padding-left: 1.25rem; line-height: 1.8; }}
        footer {{ color: #555; font-size: 0.8rem; margin-top: 2rem; }}
    </style>
</head>
<body>
<div class="wrap">
    <h1>{name}</h1>
    <p class="tagline">Find which phone models share a screen guard, case or camera lens.</p>
    <div class="card">
        <h2>API documentation</h2>
        <ul>
            <li><a href="/docs">Swagger UI</a></li>
            <li><a href="/redoc">ReDoc</a></li>
            <li><a href="/openapi.json">OpenAPI schema</a></li>
        </ul>
    </div>
    <div class="card">
        <h2>Start here</h2>
        <ul>
            <li><code>GET /api/v1/search?term=A52&amp;category=Tempered%20Glass</code></li>
            <li><code>GET /api/v1/categories</code></li>
            <li><code>GET /api/v1/leaderboard</code></li>
            <li><code>GET /api/v1/health</code></li>
        </ul>
    </div>
    <footer>v{version}</footer>
</div>
</body>
</html>
"""
