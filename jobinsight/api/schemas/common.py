"""
Common API schemas.

Every endpoint answers with ``{success, data, error}``; failures keep a
well-formed ``data`` so dashboards can render an empty state.
"""

from typing import Any, Generic, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from jobinsight.application.dto import OverviewData
from jobinsight.application.dto.base import CamelModel

T = TypeVar("T")


class Envelope(CamelModel, Generic[T]):
    """Response envelope."""

    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None


class OverviewEnvelope(Envelope[OverviewData]):
    """Overview envelope; ``source`` tells whether a snapshot was served."""

    source: str = "computed"


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, mode="json")
    if isinstance(data, list):
        return [_dump(item) for item in data]
    return data


def failure_response(
    status_code: int, message: str, data: Any = None, **extra: Any
) -> JSONResponse:
    """Error envelope carrying the operation's empty-but-valid data."""
    content = {"success": False, "data": _dump(data), "error": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)
