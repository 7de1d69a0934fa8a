"""Session controller and browser navigation seam"""

from .controller import SessionController, SessionState, redirect_uri_for
from .navigator import Navigator, RequestNavigator

__all__ = [
    "SessionController",
    "SessionState",
    "redirect_uri_for",
    "Navigator",
    "RequestNavigator",
]
