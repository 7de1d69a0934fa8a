"""
Page, login and logout endpoints.
"""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from session.controller import SessionController, redirect_uri_for
from session.navigator import RequestNavigator
from spotify_oauth.errors import ConfigurationError
from ..dependencies import get_controller
from ..rendering import render_page

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse, name="index")
async def index(request: Request, controller: SessionController = Depends(get_controller)):
    """Page load: finish a pending redirect handshake or resume the stored session"""
    navigator = RequestNavigator()
    await controller.handle_load(str(request.url), navigator)
    return HTMLResponse(render_page(controller, replaced_url=navigator.replaced_url))


@router.get("/login")
async def login(request: Request, controller: SessionController = Depends(get_controller)):
    """Send the browser to Spotify's consent page"""
    navigator = RequestNavigator()
    page_url = redirect_uri_for(str(request.url_for("index")))
    try:
        controller.login(page_url, navigator)
    except ConfigurationError as e:
        logger.error(f"Login refused: {e}")
        return HTMLResponse(render_page(controller), status_code=500)
    return RedirectResponse(navigator.redirect_to, status_code=302)


@router.api_route("/logout", methods=["GET", "POST"])
async def logout(controller: SessionController = Depends(get_controller)):
    """Forget the session and go back to the landing page"""
    controller.logout()
    return RedirectResponse("/", status_code=303)
