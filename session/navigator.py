"""Browser navigation seam used by the session controller"""

from typing import Optional


class Navigator:
    """What the controller may do to the page's location"""

    def navigate(self, url: str) -> None:
        """Full-page redirect to ``url``"""
        raise NotImplementedError

    def replace_url(self, url: str) -> None:
        """Replace the visible URL without reloading"""
        raise NotImplementedError


class RequestNavigator(Navigator):
    """Records navigation requested while handling one HTTP request

    The web layer turns ``redirect_to`` into an HTTP redirect and
    ``replaced_url`` into a history.replaceState call in the rendered page.
    """

    def __init__(self):
        self.redirect_to: Optional[str] = None
        self.replaced_url: Optional[str] = None

    def navigate(self, url: str) -> None:
        self.redirect_to = url

    def replace_url(self, url: str) -> None:
        self.replaced_url = url
