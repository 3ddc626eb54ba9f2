"""
Input sanitization middleware (XSS / injection prevention)

Every JSON body is sanitized before a route handler sees it. Fields named in
SANITIZE_RICH_TEXT_FIELDS keep their safe markup; everything else is
HTML-escaped.
"""
import logging

from flask import current_app, request

from app.errors import ValidationError
from sanitize import InputTooDeeplyNested, sanitize_value

logger = logging.getLogger(__name__)


def sanitize_payload(data, rich_text_fields=(), max_depth=None):
    """Sanitize a decoded JSON body.

    Top-level keys listed in ``rich_text_fields`` are sanitized as markup,
    all other values as plain text. Non-dict bodies are sanitized as text.
    """
    kwargs = {} if max_depth is None else {'max_depth': max_depth}
    if isinstance(data, dict):
        return {
            key: sanitize_value(value, html_mode=key in rich_text_fields, **kwargs)
            for key, value in data.items()
        }
    return sanitize_value(data, **kwargs)


def init_sanitizer(app):
    """Register the before_request hook that rewrites incoming JSON"""

    @app.before_request
    def sanitize_json_input():
        """Sanitize all string values in incoming JSON bodies.

        Skips paths under SANITIZE_SKIP_PREFIXES so that uploads and
        third-party webhook payloads are not corrupted.
        """
        if request.path.startswith(tuple(current_app.config['SANITIZE_SKIP_PREFIXES'])):
            return None

        if not request.is_json:
            return None

        raw = request.get_json(silent=True)
        if raw is None:
            # Malformed JSON is left for the route handler to reject.
            return None

        try:
            sanitized = sanitize_payload(
                raw,
                rich_text_fields=current_app.config['SANITIZE_RICH_TEXT_FIELDS'],
                max_depth=current_app.config['SANITIZE_MAX_DEPTH'],
            )
        except InputTooDeeplyNested as e:
            logger.warning('Rejected request body on %s: %s', request.path, e)
            raise ValidationError('Request body is too deeply nested')

        # Replace the parsed JSON cache (silent and non-silent slots) so that
        # downstream calls to request.get_json() return clean values.
        request._cached_json = (sanitized, sanitized)
        return None
