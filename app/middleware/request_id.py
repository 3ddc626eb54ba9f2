"""
Request ID hooks for request tracing and logging
"""
import logging
import uuid

from flask import g, has_request_context, request

REQUEST_ID_HEADER = 'X-Request-ID'


class RequestIdFilter(logging.Filter):
    """Attach the current request ID (or '-') to every log record"""

    def filter(self, record):
        if has_request_context():
            record.request_id = getattr(g, 'request_id', '-')
        else:
            record.request_id = '-'
        return True


def init_request_id(app):
    """
    Give every request a unique ID

    Reuses an incoming X-Request-ID header when present so IDs can be
    followed across services, and echoes it back on the response.
    """

    @app.before_request
    def assign_request_id():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

    @app.after_request
    def echo_request_id(response):
        request_id = getattr(g, 'request_id', None)
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response
