"""
Summary Service - module creation and section editing.
"""
from flask import current_app

from studyhub_app.core.error_handlers import NotFoundError
from studyhub_app.core.signals import content_created
from studyhub_app.models import SummaryModule, SummarySection, db

from ..config import get_summaries_setting


class SummaryService:
    """Service for summary module operations."""

    @staticmethod
    def list_modules():
        modules = SummaryModule.query.order_by(SummaryModule.created_at.desc(), SummaryModule.module_id.desc()).all()
        return [module.to_dict() for module in modules]

    @staticmethod
    def get_module_or_404(module_id):
        module = db.session.get(SummaryModule, module_id)
        if module is None:
            raise NotFoundError('Summary module not found', resource='summary_module')
        return module

    @staticmethod
    def create_module(user, title, description=None):
        """
        Create a module with one empty section per configured section type.
        """
        module = SummaryModule(
            creator_user_id=user.user_id,
            title=title,
            description=description or None,
            added_by=user.username,
        )
        for position, (section_type, section_title) in enumerate(get_summaries_setting('SUMMARY_SECTION_TYPES')):
            module.sections.append(SummarySection(
                section_type=section_type,
                title=section_title,
                content='',
                position=position,
            ))
        db.session.add(module)
        db.session.commit()

        current_app.logger.info(f"Summary module created: {title} ({module.module_id})")
        try:
            content_created.send(
                current_app._get_current_object(),
                user_id=user.user_id,
                content_type='summary_module',
                content_id=module.module_id,
                title=module.title,
            )
        except Exception as e:
            current_app.logger.error(f"Error emitting content_created signal: {e}")
        return module

    @staticmethod
    def update_section(module, section_id, content):
        section = db.session.get(SummarySection, section_id)
        if section is None or section.module_id != module.module_id:
            raise NotFoundError('Section not found', resource='summary_section')
        section.content = content or ''
        db.session.commit()
        return section
