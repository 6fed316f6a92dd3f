# File: studyhub_app/modules/summaries/config.py

from flask import current_app, has_app_context


class SummariesModuleDefaultConfig:
    """Default configuration for the summaries module."""

    # Sections every new module starts with, in display order
    SUMMARY_SECTION_TYPES = (
        ('schwerpunkte', 'Inhaltliche Schwerpunkte'),
        ('begriffe', 'Schlüsselbegriffe'),
        ('beispiele', 'Beispiele'),
        ('fragen', 'Fragen'),
        ('fazit', 'Fazit'),
    )

    SUMMARY_ALLOWED_EXTENSIONS = {'.pdf'}
    SUMMARY_PDF_MAX_BYTES = 20 * 1024 * 1024
    SUMMARY_PDF_SIGNATURE = b'%PDF'


def get_summaries_setting(key: str):
    default = getattr(SummariesModuleDefaultConfig, key)
    if not has_app_context():
        return default
    return current_app.config.get(key, default)
