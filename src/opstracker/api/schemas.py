from typing import Any, Dict, List
from pydantic import BaseModel, Field, StrictBool, StrictStr

from opstracker.engine.alerts import AlertLevel

# --- Calendar ---

class SprintWindowResponse(BaseModel):
    label: str
    range: str
    close: str

    class Config:
        from_attributes = True

class MonthConfigResponse(BaseModel):
    month: str
    sprint_windows: List[SprintWindowResponse]
    reporting_periods: List[str]

# --- Progress ---

class ProgressResponse(BaseModel):
    done: int
    total: int
    percent: int

    class Config:
        from_attributes = True

class MemberOverviewResponse(BaseModel):
    member: str
    customers: List[str]
    months: Dict[str, ProgressResponse]

class AlertResponse(BaseModel):
    level: AlertLevel
    message: str

    class Config:
        from_attributes = True

# --- Mutations ---

class SetFieldRequest(BaseModel):
    path: str | List[str] = Field(..., description="Dotted path or list of segments, e.g. planning.narrativeArc.notes")
    value: StrictBool | StrictStr | List[StrictStr]

class ToggleFieldRequest(BaseModel):
    path: str | List[str] = Field(..., description="Dotted path or list of segments to a boolean leaf")

class RecordResponse(BaseModel):
    member: str
    month: str
    record: Dict[str, Any]
    progress: ProgressResponse
