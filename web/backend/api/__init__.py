"""API routes for the certificate and credential designer"""

from web.backend.api import designs, export_api, preview

__all__ = ["designs", "export_api", "preview"]
