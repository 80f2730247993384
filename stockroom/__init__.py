"""
Stockroom - products and providers REST API.

Authentication is handled by `stockroom.auth`; the HTTP application is
built by `stockroom.api.app.create_app`.
"""

__version__ = "0.1.0"
