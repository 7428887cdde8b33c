"""
Catalog Service

Album catalog microservice: in-memory album collection, CRUD endpoints,
cover image uploads and static cover serving.

Port: 5000
"""

__version__ = "1.0.0"
__service_name__ = "catalog_service"
__service_port__ = 5000
