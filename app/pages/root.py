"""Root landing page with links to the API documentation."""

from html import escape

_AREAS = [
    ("Sales", "quotations, cost estimates, clients and bookings"),
    ("Logistics", "job orders, service assignments and site reports"),
    ("Finance", "collectibles, finance requests and petty cash"),
    ("LED sites", "screen schedules and player controls"),
]


def render_root_page(app_name: str, version: str) -> str:
    """Return HTML for the root landing page."""
    areas = "\n".join(
        f"            <li><strong>{escape(name)}</strong>: {escape(desc)}</li>"
        for name, desc in _AREAS
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(app_name)}</title>
    <style>
        body {{ font-family: system-ui, sans-serif; max-width: 560px; margin: 3rem auto; padding: 0 1rem; color: #1f2937; }}
        h1 {{ color: #1d4ed8; margin-bottom: 0.25rem; }}
        .version {{ color: #6b7280; font-size: 0.9rem; }}
        a {{ color: #1d4ed8; }}
        li {{ margin: 0.3rem 0; }}
    </style>
</head>
<body>
    <h1>{escape(app_name)}</h1>
    <div class="version">v{escape(version)}</div>
    <p>Back-office API for billboard sales, logistics and finance.</p>
    <ul>
{areas}
    </ul>
    <p>
        <a href="/docs">Swagger UI</a> &middot;
        <a href="/redoc">ReDoc</a> &middot;
        <a href="/api/v1/health">Health</a>
    </p>
</body>
</html>
"""
