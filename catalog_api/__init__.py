"""Product catalog API.

Catalog search with filtering and offset pagination, product
management endpoints, and a client-side state store.
"""

__version__ = "0.1.0"
