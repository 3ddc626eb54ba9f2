"""
Application error types and their JSON error handlers
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base error carrying an HTTP status code"""

    status_code = 500

    def __init__(self, message='An error occurred', status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message='Validation error', errors=None):
        super().__init__(message)
        self.errors = errors or []


class UnauthorizedError(AppError):
    status_code = 401

    def __init__(self, message='Unauthorized access'):
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = 403

    def __init__(self, message='Forbidden access'):
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, message='Resource not found'):
        super().__init__(message)


class ConflictError(AppError):
    status_code = 409

    def __init__(self, message='Resource conflict'):
        super().__init__(message)


def register_error_handlers(app):
    """Render every error as a JSON body of the form {"error": message}"""

    @app.errorhandler(AppError)
    def handle_app_error(error):
        if error.status_code >= 500:
            logger.error('Server error: %s', error.message, exc_info=error)
        else:
            logger.warning('Client error (%d): %s', error.status_code, error.message)

        body = {'error': error.message}
        if getattr(error, 'errors', None):
            body['details'] = error.errors
        return jsonify(body), error.status_code

    @app.errorhandler(429)
    def ratelimit_handler(e):
        # Retry-After header is set by Flask-Limiter; read it back.
        retry_after = dict(e.get_headers()).get('Retry-After') if hasattr(e, 'get_headers') else None
        retry_after_seconds = int(retry_after) if retry_after else 60
        return jsonify({
            'error': 'Too many requests. Please try again later.',
            'retry_after': retry_after_seconds,
        }), 429

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception('Unhandled exception')
        return jsonify({'error': 'Internal server error'}), 500
