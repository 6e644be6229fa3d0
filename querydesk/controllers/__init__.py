"""
Controllers - MVC2 Pattern
All controllers (routes) organized by layer
"""
from querydesk.controllers import profiles_controller
from querydesk.controllers import queries_controller

__all__ = [
    "profiles_controller",
    "queries_controller",
]
