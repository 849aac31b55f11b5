# Este archivo permite ejecutar el servidor como módulo Python usando: python -m bootcamp_server

"""
Entry point for running the bootcamp server as a Python module.

Usage:
    python -m bootcamp_server
"""

from .server import main

if __name__ == "__main__":
    main()
