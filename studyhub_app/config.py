# File: studyhub_app/config.py
# Application configuration, read from the environment (.env supported).

import os

from dotenv import load_dotenv

load_dotenv()

# Project root: studyhub_app/ sits directly below it.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATABASE_PATH = os.path.join(BASE_DIR, "database", "studyhub.db")


class Config:
    """Configuration for the StudyHub Flask app."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Development fallback, set SECRET_KEY in production
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(BASE_DIR, 'uploads')
    SUMMARY_PDF_FOLDER = os.path.join(UPLOAD_FOLDER, 'summaries', 'pdfs')
    MAX_CONTENT_LENGTH = 32 * 1024 * 1024

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    LOG_JSON_FORMAT = os.environ.get('LOG_JSON_FORMAT', '').lower() in ('1', 'true', 'yes')

    # Background scheduler (prunes idle quiz play sessions)
    SCHEDULER_ENABLED = True
    SCHEDULER_API_ENABLED = False

    @classmethod
    def init_app(cls, app):
        """Create the directories the app writes to."""
        database_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
        if database_uri == f'sqlite:///{DATABASE_PATH}':
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
        os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)
        os.makedirs(app.config['SUMMARY_PDF_FOLDER'], exist_ok=True)
