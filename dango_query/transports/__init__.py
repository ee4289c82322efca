"""Network transports for the query client."""
from .http import HttpTransport

__all__ = ["HttpTransport"]
