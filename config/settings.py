"""
Configuration settings for different environments
"""
import logging
import os
import secrets
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _require_in_production(var_name, default):
    """Return env var value. Outside development, warn loudly if still using default."""
    value = os.environ.get(var_name, '')
    if value:
        return value
    env = os.environ.get('FLASK_ENV', 'development')
    if env not in ('development', 'testing'):
        logging.getLogger(__name__).warning(
            '%s is using an insecure default. Set it via environment variable!', var_name
        )
    return default


def _split_env(var_name, default):
    """Read a comma-separated env var into a tuple of trimmed items."""
    raw = os.environ.get(var_name)
    if raw is None:
        return tuple(default)
    return tuple(item.strip() for item in raw.split(',') if item.strip())


class Config:
    """Base configuration"""
    SECRET_KEY = _require_in_production('SECRET_KEY', 'dev-only-' + secrets.token_hex(16))

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///courseware.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT (identity is supplied by the caller as a bearer token)
    JWT_SECRET_KEY = _require_in_production('JWT_SECRET_KEY', 'dev-only-' + secrets.token_hex(32))
    JWT_ALGORITHM = 'HS256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get('JWT_EXPIRES_HOURS', 24)))

    # CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    # Rate limiting
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '100 per minute')
    ANNOUNCEMENT_CREATE_RATELIMIT = os.environ.get('ANNOUNCEMENT_CREATE_RATELIMIT', '10 per minute')

    # Pagination
    MAX_ITEMS_PER_PAGE = 100

    # Input sanitization
    SANITIZE_RICH_TEXT_FIELDS = frozenset(
        _split_env('SANITIZE_RICH_TEXT_FIELDS', ('body', 'content', 'description'))
    )
    SANITIZE_SKIP_PREFIXES = _split_env(
        'SANITIZE_SKIP_PREFIXES', ('/api/uploads/', '/api/webhooks/')
    )
    SANITIZE_MAX_DEPTH = int(os.environ.get('SANITIZE_MAX_DEPTH', 32))

    # File uploads and retention
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(os.getcwd(), 'uploads')
    UPLOAD_MAX_AGE_DAYS = int(os.environ.get('UPLOAD_MAX_AGE_DAYS', 7))
    UPLOAD_MIN_SIZE_BYTES = int(os.environ.get('UPLOAD_MIN_SIZE_BYTES', 100))
    UPLOAD_CLEANUP_INTERVAL_HOURS = int(os.environ.get('UPLOAD_CLEANUP_INTERVAL_HOURS', 24))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    # Enforce HTTPS
    SESSION_COOKIE_SECURE = True

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 20,
        'max_overflow': 40,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
