"""
Authentication status endpoint.
"""
from fastapi import APIRouter, Depends

from session.controller import SessionController
from ..dependencies import get_controller

router = APIRouter()


@router.get("/auth/status")
async def auth_status(controller: SessionController = Depends(get_controller)):
    """Get token status without exposing secrets"""
    status = controller.token_manager.storage.get_status()
    status["session_state"] = controller.state.value
    return status
