"""Typed shapes of the calculator API responses."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr

# Opaque identifier: shown and sent back, never interpreted.
Identifier = Union[StrictStr, StrictInt, StrictFloat]


class ExpressionRecord(BaseModel):
    """One submitted expression as the service reports it."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: Identifier
    expression: str
    status: str
    result: Optional[Any] = None

    def as_received(self) -> Dict[str, Any]:
        """Fields exactly as the service sent them, extras included."""
        data = {name: getattr(self, name) for name in type(self).model_fields if name in self.model_fields_set}
        data.update(self.model_extra or {})
        return data


class SubmitResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Identifier


class ExpressionListResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    expressions: List[ExpressionRecord]


class ExpressionDetailResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    expression: ExpressionRecord
