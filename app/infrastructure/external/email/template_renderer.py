"""HTML layouts for document emails (Jinja)."""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, Template

_BASE_LAYOUT = """\
<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; color: #1f2937; line-height: 1.5;">
  <div style="max-width: 640px; margin: 0 auto; padding: 24px;">
    <h2 style="color: #1d4ed8; margin-top: 0;">{{ company_name }}</h2>
    <div>{{ body_html }}</div>
    {% block details %}{% endblock %}
    <p style="margin-top: 32px; color: #6b7280; font-size: 12px;">
      {% if sender_name %}Sent by {{ sender_name | e }} via {% endif %}{{ company_name }}
    </p>
  </div>
</body>
</html>
"""

# kind -> details block rendered under the user's message
_DETAILS: dict[str, str] = {
    "quotation": """\
<table style="margin-top: 24px; border-collapse: collapse;">
  <tr><td style="padding: 4px 12px 4px 0;">Quotation</td><td><strong>{{ document_number | e }}</strong></td></tr>
  <tr><td style="padding: 4px 12px 4px 0;">Total</td><td><strong>{{ total }}</strong></td></tr>
</table>
<p>The quotation is attached to this email.</p>
""",
    "CE": """\
<table style="margin-top: 24px; border-collapse: collapse;">
  <tr><td style="padding: 4px 12px 4px 0;">Cost estimate</td><td><strong>{{ document_number | e }}</strong></td></tr>
  <tr><td style="padding: 4px 12px 4px 0;">Total</td><td><strong>{{ total }}</strong></td></tr>
</table>
{% if link %}
<p><a href="{{ link }}" style="color: #1d4ed8;">View the cost estimate online</a>
{% if password %} (access code: <strong>{{ password }}</strong>){% endif %}</p>
{% endif %}
""",
    "report": """\
<p style="margin-top: 24px;">The report <strong>{{ document_number | e }}</strong> is attached.</p>
""",
    "general": "",
}


class EmailTemplateRenderer:
    """Renders the HTML email for a document kind.

    ``body_html`` must already be sanitized; it is inserted as-is.
    """

    def __init__(self, details: dict[str, str] | None = None) -> None:
        self._env = Environment(autoescape=False)
        self._compiled: dict[str, Template] = {}
        for kind, block in (details or _DETAILS).items():
            source = _BASE_LAYOUT.replace(
                "{% block details %}{% endblock %}", block
            )
            self._compiled[kind] = self._env.from_string(source)

    def render(self, kind: str, context: dict[str, Any]) -> str:
        """Render the layout for kind. Raises KeyError if kind unknown."""
        if kind not in self._compiled:
            raise KeyError(f"Unknown email template: {kind}")
        return self._compiled[kind].render(**context)
