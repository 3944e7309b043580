"""
Response envelope shared by every operation

    {success: bool, data?: [...], message?: str, orderId?: str, error?: str}
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ResponseEnvelope(BaseModel):
    """Uniform response body; None fields are omitted on the wire"""

    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    message: Optional[str] = None
    order_id: Optional[str] = Field(None, serialization_alias="orderId")
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def ok(cls, data: List[Dict[str, Any]]) -> "ResponseEnvelope":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, message: str, error: Optional[str] = None) -> "ResponseEnvelope":
        return cls(success=False, message=message, error=error)
