"""
Local web page for the Spotify top tracks client.

Serves the page the OAuth redirect lands on, drives the session controller
and renders the top tracks.
"""
from .app import app, create_app
from .server import WebServer

__version__ = "1.0.0"

__all__ = [
    'WebServer',
    'app',
    'create_app',
]
