"""
Web API.
"""
from .server import create_app, find_free_port

__all__ = ['create_app', 'find_free_port']
