"""
catalog_stack.api.routers

HTTP routers: health/metrics, products, users.
"""
