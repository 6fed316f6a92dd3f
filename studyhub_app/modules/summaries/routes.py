# File: studyhub_app/modules/summaries/routes.py
# Purpose: JSON endpoints for summary modules, their sections and PDFs.

from flask import Blueprint, request
from flask_login import current_user, login_required

from ...core.error_handlers import success_response
from ...utils.forms import json_form, validate_or_raise
from .forms import SectionContentForm, SummaryModuleForm
from .services import PdfService, SummaryService

summaries_bp = Blueprint('summaries', __name__)


@summaries_bp.route('/api/modules', methods=['GET'])
def list_modules():
    return success_response(data=SummaryService.list_modules())


@summaries_bp.route('/api/modules', methods=['POST'])
@login_required
def create_module():
    form = json_form(SummaryModuleForm)
    validate_or_raise(form)
    module = SummaryService.create_module(current_user, form.title.data.strip(), form.description.data)
    return success_response(data=module.to_dict(include_children=True), message='Modul erstellt.', status_code=201)


@summaries_bp.route('/api/modules/<int:module_id>', methods=['GET'])
def get_module(module_id):
    module = SummaryService.get_module_or_404(module_id)
    return success_response(data=module.to_dict(include_children=True))


@summaries_bp.route('/api/modules/<int:module_id>/sections/<int:section_id>', methods=['PUT'])
@login_required
def update_section(module_id, section_id):
    module = SummaryService.get_module_or_404(module_id)
    form = json_form(SectionContentForm)
    validate_or_raise(form)
    section = SummaryService.update_section(module, section_id, form.content.data)
    return success_response(data=section.to_dict(), message='Abschnitt gespeichert.')


@summaries_bp.route('/api/modules/<int:module_id>/pdfs', methods=['POST'])
@login_required
def upload_pdf(module_id):
    """Multipart upload, file field ``pdf_file``."""
    module = SummaryService.get_module_or_404(module_id)
    pdf = PdfService.save_upload(module, request.files.get('pdf_file'), current_user)
    return success_response(data=pdf.to_dict(), message='PDF hochgeladen.', status_code=201)


@summaries_bp.route('/api/modules/<int:module_id>/pdfs/<int:pdf_id>', methods=['GET'])
def download_pdf(module_id, pdf_id):
    module = SummaryService.get_module_or_404(module_id)
    return PdfService.send(PdfService.get_pdf_or_404(module, pdf_id))


@summaries_bp.route('/api/modules/<int:module_id>/pdfs/<int:pdf_id>', methods=['DELETE'])
@login_required
def delete_pdf(module_id, pdf_id):
    module = SummaryService.get_module_or_404(module_id)
    PdfService.delete(PdfService.get_pdf_or_404(module, pdf_id))
    return success_response(message='PDF gelöscht.')
