"""
catalog_stack.services

Service-layer package.

Responsibilities:
- Own transaction boundaries for product writes.
- Translate backend outcomes into tagged results (Ok / NotFound / BackendError).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake clients/sessions.
