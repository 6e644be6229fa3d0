"""
querydesk - connection profile store and query orchestration for a
natural-language database client
"""
__version__ = "0.1.0"
