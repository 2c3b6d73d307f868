from .app import AppRepo
from .report import ReportRepo

__all__ = [
    "AppRepo",
    "ReportRepo",
]
