"""
Catalog service package.

It exposes subpackages for API routers, core utilities, peer clients,
domain models, repositories, and the product and category services.
"""
