from pydantic import BaseModel
from datetime import datetime


class ErrorResponse(BaseModel):
    """Standard error envelope returned by the API"""
    error: str
    message: str
    status: int
    timestamp: datetime
