"""
Security headers added to every response
"""


def init_security_headers(app):

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        if not (app.debug or app.testing):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response
