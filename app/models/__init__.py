from .app import App, Category
from .base import Base
from .report import Report, ReportReason

__all__ = [
    "Base",
    "App",
    "Category",
    "Report",
    "ReportReason",
]
