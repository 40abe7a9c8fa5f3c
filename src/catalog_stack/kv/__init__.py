"""
catalog_stack.kv

Key-value persistence package (Redis, asyncio client).

Responsibilities:
- Build the process-wide Redis client from settings.
- Provide the namespaced user store.
"""

# Package marker.
