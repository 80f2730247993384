"""
HTTP API: application factory and route modules.
"""
