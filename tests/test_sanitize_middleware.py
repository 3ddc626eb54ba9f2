"""
Tests for the JSON sanitization hook
Checks that request bodies reach route handlers already sanitized
"""
import pytest
from flask import request

from app.errors import ValidationError
from app.middleware import sanitize_payload


def run_hooks(app, path, **kwargs):
    """Run the before_request hooks for a fake request and return its JSON"""
    with app.test_request_context(path, method='POST', **kwargs):
        app.preprocess_request()
        return request.get_json(silent=True)


class TestSanitizePayload:
    """Test field-aware sanitization of decoded bodies"""

    def test_rich_text_fields_keep_markup(self):
        """Test designated fields go through the markup sanitizer"""
        data = {
            'title': '<b>Exam</b>',
            'body': '<b>Exam</b><script>x()</script>',
        }
        result = sanitize_payload(data, rich_text_fields={'body'})
        assert result == {
            'title': '&lt;b&gt;Exam&lt;&#x2F;b&gt;',
            'body': '<b>Exam</b>',
        }

    def test_nested_values_follow_their_top_level_key(self):
        """Test a rich field's nested strings are sanitized as markup"""
        data = {'body': ['<i>a</i>', {'x': '<i onclick="y">b</i>'}], 'tags': ['<i>']}
        result = sanitize_payload(data, rich_text_fields={'body'})
        assert result == {
            'body': ['<i>a</i>', {'x': '<i >b</i>'}],
            'tags': ['&lt;i&gt;'],
        }

    def test_non_dict_body_uses_text_mode(self):
        """Test list bodies are escaped"""
        assert sanitize_payload(['<a>'], rich_text_fields={'body'}) == ['&lt;a&gt;']


class TestSanitizeHook:
    """Test the before_request hook"""

    def test_json_body_sanitized(self, app):
        """Test text fields are escaped and rich fields stripped"""
        received = run_hooks(app, '/api/announcements', json={
            'name': '<img src=x onerror=alert(1)>',
            'body': '<p onclick="x()">Hi</p><script>evil()</script>',
            'count': 3,
            'missing': None,
        })

        assert received == {
            'name': '&lt;img src=x onerror=alert(1)&gt;',
            'body': '<p >Hi</p>',
            'count': 3,
            'missing': None,
        }

    def test_skip_prefix_left_untouched(self, app):
        """Test webhook payloads are not rewritten"""
        payload = {'signature': '<abc/def>'}

        assert run_hooks(app, '/api/webhooks/provider', json=payload) == payload

    def test_non_json_body_ignored(self, app):
        """Test form posts are not touched"""
        with app.test_request_context('/api/announcements', method='POST',
                                      data={'title': '<b>'}):
            app.preprocess_request()
            assert request.form['title'] == '<b>'

    def test_too_deeply_nested_body_rejected(self, app):
        """Test absurd nesting is turned into a validation error"""
        data = 'x'
        for _ in range(app.config['SANITIZE_MAX_DEPTH'] + 1):
            data = [data]

        with pytest.raises(ValidationError) as excinfo:
            run_hooks(app, '/api/announcements', json={'payload': data})
        assert excinfo.value.status_code == 400

    def test_too_deeply_nested_body_returns_400(self, client, teacher_headers, app):
        """Test the API answers 400 for absurd nesting"""
        data = 'x'
        for _ in range(app.config['SANITIZE_MAX_DEPTH'] + 1):
            data = [data]

        response = client.post('/api/announcements', json={'title': data},
                               headers=teacher_headers)

        assert response.status_code == 400
        assert 'nested' in response.get_json()['error']

    def test_malformed_json_left_for_handler(self, client, teacher_headers):
        """Test invalid JSON is rejected by the route, not the hook"""
        response = client.post('/api/announcements', data='{not json',
                               headers=teacher_headers)

        assert response.status_code == 400


class TestResponseHeaders:
    """Test headers added to every response"""

    def test_security_headers(self, client):
        """Test security headers are present"""
        response = client.get('/health')

        assert response.status_code == 200
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'

    def test_request_id_echoed(self, client):
        """Test an incoming request id is echoed back"""
        response = client.get('/health', headers={'X-Request-ID': 'abc-123'})

        assert response.headers['X-Request-ID'] == 'abc-123'

    def test_request_id_generated(self, client):
        """Test a request id is generated when none is sent"""
        response = client.get('/health')

        assert response.headers.get('X-Request-ID')
