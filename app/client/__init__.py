"""
Python client for the directory API: HTTP access, view state and the admin console.
"""

from .admin_console import AdminConsole, AdminTab
from .admin_gate import AdminGate
from .directory_client import DirectoryClient
from .listing import ALL_CATEGORIES, SortOption
from .view_controller import DirectoryViewController, ViewState

__all__ = [
    "ALL_CATEGORIES",
    "AdminConsole",
    "AdminGate",
    "AdminTab",
    "DirectoryClient",
    "DirectoryViewController",
    "SortOption",
    "ViewState",
]
