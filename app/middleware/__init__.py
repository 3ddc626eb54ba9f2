"""Middleware package"""
from .request_id import RequestIdFilter, init_request_id
from .sanitize import init_sanitizer, sanitize_payload
from .security_headers import init_security_headers

__all__ = [
    'RequestIdFilter',
    'init_request_id',
    'init_sanitizer',
    'init_security_headers',
    'sanitize_payload',
]
