import os
from dotenv import load_dotenv

# Load the .env file immediately
load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    # 1. Security
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-fallback-key'

    # 2. Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'app.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 3. Payloads (documents arrive base64-encoded inside JSON)
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    # 4. HTTP
    # Comma-separated list of allowed origins; empty allows all (local dev)
    CORS_ORIGIN = os.environ.get('CORS_ORIGIN', '')
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    # Request bodies are JSON, CSRF tokens do not apply
    WTF_CSRF_ENABLED = False

    # 5. Email Configuration
    NOTIFY_BY_EMAIL = os.environ.get('NOTIFY_BY_EMAIL') == 'True'
    MAIL_SERVER = os.environ.get('MAIL_SERVER') or 'smtp.gmail.com'
    MAIL_PORT = int(os.environ.get('MAIL_PORT') or 587)
    MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS') == 'True'
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER') or MAIL_USERNAME

    # 6. Celery Configuration
    CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL') or 'redis://localhost:6379/0'
    CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND') or 'redis://localhost:6379/0'
    CELERY_TASK_ALWAYS_EAGER = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    NOTIFY_BY_EMAIL = False
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = 'noreply@docflow.local'
    CELERY_TASK_ALWAYS_EAGER = True
