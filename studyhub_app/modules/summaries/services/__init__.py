from .pdf_service import PdfService
from .summary_service import SummaryService

__all__ = ['PdfService', 'SummaryService']
