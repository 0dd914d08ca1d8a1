# apps/crops/services/__init__.py

from .report_service import FinancialReportService
from .year_service import CropYearService

__all__ = ['FinancialReportService', 'CropYearService']
