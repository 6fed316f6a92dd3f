"""
PDF Service - storing, serving and removing summary PDFs on disk.
"""
import os
from uuid import uuid4

from flask import current_app, send_from_directory
from werkzeug.utils import secure_filename

from studyhub_app.core.error_handlers import NotFoundError, ValidationError
from studyhub_app.models import SummaryPdf, db

from ..config import get_summaries_setting


def _pdf_folder():
    folder = current_app.config['SUMMARY_PDF_FOLDER']
    os.makedirs(folder, exist_ok=True)
    return folder


def _stream_size(file_storage):
    stream = file_storage.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


class PdfService:
    """Service for summary PDF attachments."""

    @staticmethod
    def save_upload(module, file_storage, user=None):
        """
        Validate and store an uploaded PDF for ``module``.

        Returns:
            The new SummaryPdf row.
        Raises:
            ValidationError for a missing, mistyped or oversized file.
        """
        if file_storage is None or not file_storage.filename:
            raise ValidationError('Keine Datei ausgewählt.')

        filename = secure_filename(file_storage.filename)
        ext = os.path.splitext(filename)[1].lower()
        if not filename or ext not in get_summaries_setting('SUMMARY_ALLOWED_EXTENSIONS'):
            raise ValidationError(f'Dateiformat "{ext or file_storage.filename}" wird nicht unterstützt.')

        size = _stream_size(file_storage)
        max_bytes = get_summaries_setting('SUMMARY_PDF_MAX_BYTES')
        if size > max_bytes:
            raise ValidationError('Die Datei ist zu groß.', errors={'size': size, 'max_bytes': max_bytes})

        signature = get_summaries_setting('SUMMARY_PDF_SIGNATURE')
        if file_storage.stream.read(len(signature)) != signature:
            raise ValidationError('Die Datei ist kein gültiges PDF.')
        file_storage.stream.seek(0)

        base_name = os.path.splitext(filename)[0]
        stored_name = f"{base_name}_{uuid4().hex[:8]}{ext}"
        file_storage.save(os.path.join(_pdf_folder(), stored_name))

        pdf = SummaryPdf(
            module_id=module.module_id,
            name=file_storage.filename,
            stored_name=stored_name,
            uploaded_by=user.user_id if user is not None else None,
        )
        db.session.add(pdf)
        db.session.commit()

        current_app.logger.info(f"PDF {stored_name} ({size} bytes) attached to module {module.module_id}")
        return pdf

    @staticmethod
    def get_pdf_or_404(module, pdf_id):
        pdf = db.session.get(SummaryPdf, pdf_id)
        if pdf is None or pdf.module_id != module.module_id:
            raise NotFoundError('PDF not found', resource='summary_pdf')
        return pdf

    @staticmethod
    def send(pdf):
        return send_from_directory(
            _pdf_folder(),
            pdf.stored_name,
            mimetype='application/pdf',
            as_attachment=True,
            download_name=pdf.name,
        )

    @staticmethod
    def delete(pdf):
        path = os.path.join(_pdf_folder(), pdf.stored_name)
        db.session.delete(pdf)
        db.session.commit()
        try:
            os.remove(path)
        except FileNotFoundError:
            current_app.logger.warning(f"PDF file {path} was already missing")
