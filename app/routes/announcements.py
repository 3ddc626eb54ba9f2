import logging

from flask import Blueprint, current_app, request, jsonify
from sqlalchemy import or_

from app import db
from extensions import limiter
from app.errors import ForbiddenError, NotFoundError, ValidationError
from app.models import Announcement
from app.utils import require_auth, require_role, paginate_query, serialize_model
from sanitize import escape_search_term

logger = logging.getLogger(__name__)

announcements_bp = Blueprint('announcements', __name__)

EDITABLE_FIELDS = ('title', 'body', 'attachments')


def _get_announcement_or_404(announcement_id):
    announcement = Announcement.active().filter_by(id=announcement_id).first()
    if not announcement:
        raise NotFoundError('Announcement not found')
    return announcement


def _validate_attachments(attachments):
    if not isinstance(attachments, list) or not all(isinstance(a, str) for a in attachments):
        raise ValidationError('attachments must be a list of strings')
    return attachments


def _validate_text(field, value):
    if not isinstance(value, str) or not value:
        raise ValidationError(f'{field} must be a non-empty string')
    max_length = Announcement.__table__.c[field].type.length
    if max_length and len(value) > max_length:
        raise ValidationError(f'{field} must be at most {max_length} characters')
    return value


@announcements_bp.route('', methods=['GET'])
@require_auth
def list_announcements():
    """
    List announcements, newest first
    GET /api/announcements?course_code=CS101&search=exam&page=1&per_page=20
    """
    query = Announcement.active()

    course_code = request.args.get('course_code')
    if course_code:
        query = query.filter_by(course_code=course_code)

    search = escape_search_term(request.args.get('search'))
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(
            Announcement.title.ilike(pattern, escape='\\'),
            Announcement.body.ilike(pattern, escape='\\'),
        ))

    query = query.order_by(Announcement.created_at.desc())

    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('per_page', 20, type=int)

    result = paginate_query(query, page, per_page)
    result['items'] = [serialize_model(a) for a in result['items']]

    return jsonify(result), 200


@announcements_bp.route('', methods=['POST'])
@limiter.limit(lambda: current_app.config['ANNOUNCEMENT_CREATE_RATELIMIT'])
@require_auth
@require_role('teacher', 'admin')
def create_announcement():
    """
    Create an announcement
    POST /api/announcements
    Body: {
        "course_code": "CS101",
        "title": "Midterm moved",
        "body": "<p>The midterm is now on <b>Friday</b>.</p>",
        "attachments": ["https://cdn.example.com/syllabus.pdf"]
    }

    The body has already been through the sanitization hook: ``body`` as
    rich text, everything else HTML-escaped.
    """
    data = request.get_json() or {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    required = ['course_code', 'title', 'body']
    missing = [field for field in required if not data.get(field)]
    if missing:
        raise ValidationError(f'Missing required fields: {", ".join(missing)}')

    announcement = Announcement(
        course_code=_validate_text('course_code', data['course_code']),
        title=_validate_text('title', data['title']),
        body=_validate_text('body', data['body']),
        attachments=_validate_attachments(data.get('attachments', [])),
        author_id=request.user_id,
    )
    db.session.add(announcement)
    db.session.commit()

    logger.info('Announcement %s created in %s by %s',
                announcement.id, announcement.course_code, request.user_id)
    return jsonify(serialize_model(announcement)), 201


@announcements_bp.route('/<announcement_id>', methods=['GET'])
@require_auth
def get_announcement(announcement_id):
    """GET /api/announcements/<id>"""
    announcement = _get_announcement_or_404(announcement_id)
    return jsonify(serialize_model(announcement)), 200


@announcements_bp.route('/<announcement_id>', methods=['PATCH'])
@require_auth
@require_role('teacher', 'admin')
def update_announcement(announcement_id):
    """
    Update title, body or attachments
    PATCH /api/announcements/<id>
    """
    announcement = _get_announcement_or_404(announcement_id)
    if not announcement.is_editable_by(request.user_id, request.user_role):
        raise ForbiddenError('Only the author or an admin can edit this announcement')

    data = request.get_json() or {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    for field in EDITABLE_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field == 'attachments':
            value = _validate_attachments(value)
        else:
            value = _validate_text(field, value)
        setattr(announcement, field, value)

    db.session.commit()
    return jsonify(serialize_model(announcement)), 200


@announcements_bp.route('/<announcement_id>', methods=['DELETE'])
@require_auth
@require_role('teacher', 'admin')
def delete_announcement(announcement_id):
    """DELETE /api/announcements/<id> (soft delete)"""
    announcement = _get_announcement_or_404(announcement_id)
    if not announcement.is_editable_by(request.user_id, request.user_role):
        raise ForbiddenError('Only the author or an admin can delete this announcement')

    announcement.soft_delete()
    logger.info('Announcement %s deleted by %s', announcement_id, request.user_id)
    return jsonify({'message': 'Announcement deleted'}), 200
