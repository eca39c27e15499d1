"""Platform layer: configuration, dashboard session and user intents."""

__version__ = "1.0.0"

from .config import LedgerSettings, load_settings, normalize_address
from .dashboard import DashboardSession, create_dashboard
from .facade import CrowdfundingFacade

__all__ = [
    "__version__",
    "CrowdfundingFacade",
    "DashboardSession",
    "LedgerSettings",
    "create_dashboard",
    "load_settings",
    "normalize_address",
]
