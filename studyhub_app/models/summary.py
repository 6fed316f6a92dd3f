"""Summary modules: structured text sections plus PDF attachments."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.sql import func

from ..db_instance import db


class SummaryModule(db.Model):
    """A study module with its summary sections and documents."""

    __tablename__ = 'summary_modules'

    module_id = db.Column(db.Integer, primary_key=True)
    creator_user_id = db.Column(db.Integer, db.ForeignKey('users.user_id'), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    added_by = db.Column(db.String(120))
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())

    creator = db.relationship('User', backref='summary_modules', lazy=True)
    sections = db.relationship(
        'SummarySection',
        backref='module',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='SummarySection.position',
    )
    pdfs = db.relationship(
        'SummaryPdf',
        backref='module',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='SummaryPdf.uploaded_at',
    )

    def to_dict(self, include_children: bool = False) -> dict[str, object]:
        data = {
            'id': self.module_id,
            'title': self.title,
            'description': self.description,
            'added_by': self.added_by,
            'creator_user_id': self.creator_user_id,
            'section_count': len(self.sections),
            'pdf_count': len(self.pdfs),
        }
        if include_children:
            data['sections'] = [section.to_dict() for section in self.sections]
            data['pdfs'] = [pdf.to_dict() for pdf in self.pdfs]
        return data


class SummarySection(db.Model):
    """One typed block of a summary (key points, terms, examples, ...)."""

    __tablename__ = 'summary_sections'

    section_id = db.Column(db.Integer, primary_key=True)
    module_id = db.Column(db.Integer, db.ForeignKey('summary_modules.module_id'), nullable=False)
    section_type = db.Column(db.String(30), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False, default='')
    position = db.Column(db.Integer, nullable=False, default=0)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.section_id,
            'type': self.section_type,
            'title': self.title,
            'content': self.content,
            'position': self.position,
        }


class SummaryPdf(db.Model):
    """A PDF document attached to a summary module."""

    __tablename__ = 'summary_pdfs'

    pdf_id = db.Column(db.Integer, primary_key=True)
    module_id = db.Column(db.Integer, db.ForeignKey('summary_modules.module_id'), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    stored_name = db.Column(db.String(255), nullable=False, unique=True)
    uploaded_by = db.Column(db.Integer, db.ForeignKey('users.user_id'), nullable=True)
    uploaded_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.pdf_id,
            'name': self.name,
            'upload_date': self.uploaded_at.date().isoformat() if self.uploaded_at else None,
        }
