"""
Bulk write result schemas.

Dependencies: pydantic
System role: Per-document write outcomes
"""

from pydantic import BaseModel, Field


class BulkItemResult(BaseModel):
    """Outcome for one submitted document."""

    index_name: str
    doc_id: str
    success: bool
    status: int | None = Field(default=None, description="HTTP status reported for the item")
    error: str | None = None
    error_kind: str | None = Field(
        default=None,
        description="item, timeout, connection, overloaded, or write",
    )
    retryable: bool = False


class BulkResult(BaseModel):
    """Outcome for a write call, one item per submitted document, in order."""

    items: list[BulkItemResult] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(not item.success for item in self.items)

    @property
    def failed(self) -> list[BulkItemResult]:
        return [item for item in self.items if not item.success]
