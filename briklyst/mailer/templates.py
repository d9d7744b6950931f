"""Static HTML bodies for transactional email.

Values are HTML-escaped before substitution. Styling is fixed per template,
only the primary color comes from the storefront.
"""
from __future__ import annotations

import html
from typing import Any

TEMPLATES: dict[str, dict[str, str]] = {
    "click_alert": {
        "subject": "New click on {product_title}",
        "html": (
            '<div style="font-family: Arial, sans-serif; color: #111827;">'
            '<h2 style="color: {primary_color};">Someone clicked your product</h2>'
            "<p><strong>{product_title}</strong> was clicked at {clicked_at}.</p>"
            '<p><a href="{dashboard_url}" style="background: {primary_color}; color: #ffffff; '
            'padding: 10px 16px; border-radius: 6px; text-decoration: none;">View analytics</a></p>'
            "</div>"
        ),
    },
    "weekly_report": {
        "subject": "Your weekly Briklyst report",
        "html": (
            '<div style="font-family: Arial, sans-serif; color: #111827;">'
            '<h2 style="color: {primary_color};">{storefront_title}: this week</h2>'
            "<p>Total clicks this week: <strong>{weekly_clicks}</strong></p>"
            "<p>All-time clicks: <strong>{total_clicks}</strong></p>"
            '<table style="border-collapse: collapse; width: 100%;">{product_rows}</table>'
            '<p><a href="{dashboard_url}" style="color: {primary_color};">Open your dashboard</a></p>'
            "</div>"
        ),
    },
    "weekly_report_row": {
        "subject": "",
        "html": (
            '<tr><td style="padding: 6px 0; border-bottom: 1px solid #e5e7eb;">{product_title}</td>'
            '<td style="padding: 6px 0; border-bottom: 1px solid #e5e7eb; text-align: right;">{clicks}</td></tr>'
        ),
    },
}

# already-rendered fragments that must not be escaped again
RAW_FIELDS = {"product_rows"}


def render_template(name: str, **values: Any) -> tuple[str, str]:
    template = TEMPLATES.get(name)
    if not template:
        raise KeyError(f"Unknown email template: {name}")

    escaped = {
        key: (str(value) if key in RAW_FIELDS else html.escape(str(value)))
        for key, value in values.items()
    }
    subject_values = {key: str(value) for key, value in values.items()}
    return template["subject"].format(**subject_values), template["html"].format(**escaped)
