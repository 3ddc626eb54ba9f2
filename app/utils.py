import uuid
import jwt
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Optional
from flask import request, current_app

from app.errors import ForbiddenError, UnauthorizedError

ROLES = ('student', 'teacher', 'admin')


def generate_unique_id() -> str:
    """Generate a unique UUID string"""
    return str(uuid.uuid4())


def generate_token(user_id: str, role: str, expires_in: Optional[timedelta] = None) -> str:
    """Generate JWT token carrying the user's identity and role"""
    if expires_in is None:
        expires_in = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    now = datetime.now(timezone.utc)
    payload = {
        'user_id': user_id,
        'role': role,
        'exp': now + expires_in,
        'iat': now
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET_KEY'],
        algorithm=current_app.config['JWT_ALGORITHM']
    )


def decode_token(token: str) -> dict:
    """Decode and verify JWT token"""
    try:
        return jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=[current_app.config['JWT_ALGORITHM']]
        )
    except jwt.ExpiredSignatureError:
        raise ValueError('Token has expired')
    except jwt.InvalidTokenError:
        raise ValueError('Invalid token')


def require_auth(f):
    """Decorator to require a role-bearing bearer token for routes"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            raise UnauthorizedError('Missing authorization header')

        try:
            # Extract token from "Bearer <token>"
            token = auth_header.split(' ')[1] if ' ' in auth_header else auth_header
            payload = decode_token(token)

            # Attach user info to request
            request.user_id = payload['user_id']
            request.user_role = payload['role']

        except ValueError as e:
            raise UnauthorizedError(str(e))
        except (IndexError, KeyError):
            raise UnauthorizedError('Invalid token')

        if request.user_role not in ROLES:
            raise UnauthorizedError('Invalid token')

        return f(*args, **kwargs)

    return decorated_function


def require_role(*roles):
    """Decorator to require specific role(s) for routes"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not hasattr(request, 'user_role'):
                raise UnauthorizedError('Authentication required')

            if request.user_role not in roles:
                raise ForbiddenError('Insufficient permissions')

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def paginate_query(query, page=1, per_page=20):
    """Helper to paginate SQLAlchemy queries"""
    max_per_page = current_app.config.get('MAX_ITEMS_PER_PAGE', 100)
    page = max(1, page)
    per_page = min(max_per_page, max(1, per_page))

    paginated = query.paginate(page=page, per_page=per_page, error_out=False)

    return {
        'items': paginated.items,
        'total': paginated.total,
        'page': page,
        'per_page': per_page,
        'pages': paginated.pages,
        'has_next': paginated.has_next,
        'has_prev': paginated.has_prev
    }


def serialize_model(model, exclude=()):
    """Convert SQLAlchemy model to dict"""
    if model is None:
        return None

    result = {}
    for column in model.__table__.columns:
        if column.name in exclude:
            continue
        value = getattr(model, column.name)

        if isinstance(value, datetime):
            result[column.name] = value.isoformat()
        else:
            result[column.name] = value

    return result
