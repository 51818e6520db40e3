"""
HTTP API for the Udyam registration form.
"""

from udyam_form.api.app import create_app, run_server

__all__ = [
    "create_app",
    "run_server",
]
