"""
Error handling tests
"""
from app.errors import (
    AppError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


class TestErrorResponses:

    def test_unknown_route_is_json(self, client):
        """Test Werkzeug 404s are rendered as JSON"""
        response = client.get('/api/nothing-here')

        assert response.status_code == 404
        assert 'error' in response.get_json()

    def test_wrong_method_is_json(self, client):
        """Test 405s are rendered as JSON"""
        response = client.put('/health')

        assert response.status_code == 405
        assert 'error' in response.get_json()

    def test_error_status_codes(self):
        """Test each error type carries its status code"""
        assert ValidationError().status_code == 400
        assert UnauthorizedError().status_code == 401
        assert ForbiddenError().status_code == 403
        assert NotFoundError().status_code == 404
        assert ConflictError().status_code == 409
        assert AppError('boom').status_code == 500
        assert AppError('teapot', status_code=418).status_code == 418

    def test_validation_details(self):
        """Test validation details are kept"""
        error = ValidationError('Bad input', errors=['title is required'])

        assert error.message == 'Bad input'
        assert error.errors == ['title is required']

    def test_auth_failures_use_error_handlers(self, client, student_headers):
        """Test 401 and 403 from the auth decorators share the JSON error shape"""
        response = client.get('/api/announcements')
        assert response.status_code == 401
        assert response.get_json() == {'error': 'Missing authorization header'}

        response = client.delete('/api/announcements/some-id', headers=student_headers)
        assert response.status_code == 403
        assert response.get_json() == {'error': 'Insufficient permissions'}
