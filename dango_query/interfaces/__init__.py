"""Protocol interfaces for the query client."""
from .app_config import AppConfigProvider
from .signer import Signer
from .transport import Transport

__all__ = ["AppConfigProvider", "Signer", "Transport"]
