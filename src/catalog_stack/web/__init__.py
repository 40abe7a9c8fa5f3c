"""
catalog_stack.web

HTML frontend started by the composition host as `webfrontend`.

Responsibilities:
- Render product and user listings fetched from the API service over HTTP.
"""

# Package marker.
