"""
catalog_stack.db

Persistence package for products (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, schema-ensure and repositories.
"""

# Package marker.
