"""
Pydantic schemas for the solving service and the board API.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator, model_validator


# ---- Solving service wire format ---------------------------------------------

class SolveRequest(BaseModel):
    """Body posted to the solving service."""
    model_config = ConfigDict(populate_by_name=True)

    image: str
    variables: Dict[str, str] = Field(default_factory=dict, alias="dict_of_vars")


class SolveResultItem(BaseModel):
    """One solved expression returned by the service."""
    model_config = ConfigDict(frozen=True)

    expr: StrictStr
    result: StrictStr
    assign: StrictBool

    @field_validator("result", mode="before")
    @classmethod
    def numbers_as_text(cls, value):
        """Services sometimes answer with bare numbers; keep them as text."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class SolveResponse(BaseModel):
    """Envelope returned by the solving service."""
    message: Optional[str] = None
    status: Optional[str] = None
    data: List[SolveResultItem]

    @model_validator(mode="before")
    @classmethod
    def wrap_bare_list(cls, value):
        """Accept a bare JSON list of results as well as the enveloped form."""
        if isinstance(value, list):
            return {"data": value}
        return value


# ---- Board API ---------------------------------------------------------------

class PointRequest(BaseModel):
    """Pointer position on the board."""
    x: float
    y: float


class ColorRequest(BaseModel):
    """Pen color change."""
    color: str


class PointResponse(BaseModel):
    x: float
    y: float


class AnnotationResponse(BaseModel):
    """Result annotation as rendered by the client."""
    id: str
    text: str
    position: PointResponse


class BoardStateResponse(BaseModel):
    """Snapshot of the board session."""
    status: str
    color: str
    is_drawing: bool
    canvas: Dict[str, int]
    overlays: List[AnnotationResponse]
    variables: Dict[str, str]
    latest_result: Optional[Dict[str, str]] = None
    last_error: Optional[str] = None
    dragging: Optional[str] = None


class SubmitResponse(BaseModel):
    """Acknowledgement for a fire-and-forget submission."""
    status: str
    generation: int
