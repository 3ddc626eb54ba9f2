"""Announcement model"""
from app import db
from .base import BaseModel


class Announcement(BaseModel):
    """
    Announcement model - a course-wide post from a teacher

    ``title`` is stored HTML-escaped; ``body`` is rich text and keeps the
    markup that survived sanitization.
    """
    __tablename__ = 'announcements'

    course_code = db.Column(db.String(50), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    body = db.Column(db.Text, nullable=False)
    attachments = db.Column(db.JSON, nullable=False, default=list)

    author_id = db.Column(db.String(64), nullable=False, index=True)

    __table_args__ = (
        db.Index('idx_announcements_course_created', 'course_code', 'created_at'),
    )

    def __repr__(self):
        return f'<Announcement {self.id} course={self.course_code}>'

    def is_editable_by(self, user_id, role):
        """Authors may edit their own announcements; admins may edit any."""
        return role == 'admin' or self.author_id == user_id
