"""
Logging setup shared by the web app, CLI commands and the scheduler
"""
import logging

from app.middleware.request_id import RequestIdFilter

LOG_FORMAT = '%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s'


def configure_logging(app):
    """Install a single stream handler on the root logger at LOG_LEVEL"""
    level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    for handler in root.handlers:
        if getattr(handler, '_courseware', False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._courseware = True
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())

    root.addHandler(handler)
    root.setLevel(level)
