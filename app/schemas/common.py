from typing import Optional, Any, Dict
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Acknowledgement for state-changing actions"""
    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Body of every error response"""
    success: bool = False
    message: str
    error: Optional[Dict[str, Any]] = None
