# Este archivo marca el paquete bootcamp_server y expone la versión del proyecto.

"""
DevOps Bootcamp server - a minimal HTTP service with a welcome page and a
health endpoint.
"""

__version__ = "0.1.0"
__description__ = "Minimal HTTP server for the DevOps Bootcamp"

# Expose main components for easier imports
from .server import create_server, serve, main

__all__ = ["create_server", "serve", "main", "__version__"]
