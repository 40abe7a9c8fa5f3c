"""
catalog_stack.api

API package for the Catalog/User Service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and problem-details mapping.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: parameter binding + delegation to services.
