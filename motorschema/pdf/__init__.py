"""HTML assembly for motor PDFs."""

from motorschema.pdf.html import motor_sheet_html, schema_section_html

__all__ = ["motor_sheet_html", "schema_section_html"]
