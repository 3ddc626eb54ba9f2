"""
Base model with common fields and methods
"""
from app import db
from app.utils import generate_unique_id
from datetime import datetime, timezone


def utcnow():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    """Abstract base model with common fields"""
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=generate_unique_id)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True)

    def soft_delete(self):
        """Soft delete by setting deleted_at timestamp"""
        self.deleted_at = utcnow()
        db.session.commit()

    @classmethod
    def active(cls):
        """Query only non-deleted records"""
        return cls.query.filter(cls.deleted_at.is_(None))
