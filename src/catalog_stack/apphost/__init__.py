"""
catalog_stack.apphost

Composition host: declares the catalog's runtime resources, resolves the
dependency graph once, then starts everything in dependency order.

Responsibilities:
- Declaration API (`builder`) and immutable model (`model`).
- Pure resolution into an execution plan (`resolver`).
- Side-effecting start/stop of child processes (`launcher`).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Resolution is pure; only `launcher.apply` spawns processes.
