"""
Bulk request response schemas.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServiceFault(BaseModel):
    """Fault reported by the metadata service for one request of a batch."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    message: str = Field("", alias="Message")
    error_code: Optional[int] = Field(None, alias="ErrorCode")

    @field_validator("message", mode="before")
    @classmethod
    def null_message_to_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v


class BulkResponseItem(BaseModel):
    """Outcome of one request, indexed by its position in the batch."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    request_index: int = Field(..., alias="RequestIndex")
    fault: Optional[ServiceFault] = Field(None, alias="Fault")


class BulkResponse(BaseModel):
    """
    Response of one bulk submission.

    With ``ReturnResponses`` disabled the service only lists the requests that
    faulted, so ``responses`` is usually empty for a fully accepted batch.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    is_faulted: bool = Field(False, alias="IsFaulted")
    responses: List[BulkResponseItem] = Field(default_factory=list, alias="Responses")

    @property
    def faults(self) -> List[BulkResponseItem]:
        """Response items carrying a fault, in response order."""
        return [item for item in self.responses if item.fault is not None]
