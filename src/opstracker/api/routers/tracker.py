"""
Router for tracker endpoints.

Endpoints:
- GET  /roster, /months, /months/{month}/config
- GET  /records/{member}/{month}, /progress/{member}/{month}, /overview
- GET  /alerts
- PUT  /records/{member}/{month}/field
- POST /records/{member}/{month}/toggle
- POST /records/{member}/{month}/emotional-codes/{code}
"""

from datetime import datetime
from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from opstracker.api import schemas
from opstracker.api.dependencies import get_tracker_service
from opstracker.engine.errors import InvalidPathError, TypeMismatchError
from opstracker.engine.tracker_service import TrackerService
from opstracker.platform.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

Service = Annotated[TrackerService, Depends(get_tracker_service)]


def _record_response(service: TrackerService, member: str, month: str) -> schemas.RecordResponse:
    record = service.get_record(member, month)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No record for {member} in {month}")
    return schemas.RecordResponse(
        member=member,
        month=month,
        record=record.model_dump(mode="json", by_alias=True),
        progress=schemas.ProgressResponse.model_validate(service.get_progress(member, month)),
    )


def _mutation_error(e: Exception, member: str, month: str) -> HTTPException:
    logger.warning("Rejected tracker mutation", member=member, month=month, error=str(e))
    if isinstance(e, InvalidPathError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))


@router.get("/roster")
async def get_roster(service: Service) -> Dict[str, List[str]]:
    return service.roster


@router.get("/months")
async def list_months(service: Service) -> List[str]:
    return list(service.months)


@router.get("/months/{month}/config", response_model=schemas.MonthConfigResponse)
async def get_month_config(month: str, service: Service):
    """Sprint windows and reporting periods for a month (empty sprints for unknown months)."""
    config = service.month_config(month)
    return schemas.MonthConfigResponse(
        month=month,
        sprint_windows=[schemas.SprintWindowResponse.model_validate(w) for w in config.sprint_windows],
        reporting_periods=list(config.reporting_periods),
    )


@router.get("/records/{member}/{month}", response_model=schemas.RecordResponse)
async def get_record(member: str, month: str, service: Service):
    return _record_response(service, member, month)


@router.get("/progress/{member}/{month}", response_model=schemas.ProgressResponse)
async def get_progress(member: str, month: str, service: Service):
    return service.get_progress(member, month)


@router.get("/overview", response_model=List[schemas.MemberOverviewResponse])
async def get_overview(service: Service):
    return [
        schemas.MemberOverviewResponse(
            member=row.member,
            customers=row.customers,
            months={
                month: schemas.ProgressResponse.model_validate(p)
                for month, p in row.months.items()
            },
        )
        for row in service.team_overview()
    ]


@router.get("/alerts", response_model=List[schemas.AlertResponse])
async def get_alerts(
    service: Service,
    now: Optional[datetime] = Query(None, description="Evaluate as of this time (defaults to server time)"),
):
    return service.get_due_alerts(now or datetime.now())


@router.put("/records/{member}/{month}/field", response_model=schemas.RecordResponse)
async def set_field(member: str, month: str, request: schemas.SetFieldRequest, service: Service):
    try:
        service.set_field(member, month, request.path, request.value)
    except (InvalidPathError, TypeMismatchError) as e:
        raise _mutation_error(e, member, month)
    return _record_response(service, member, month)


@router.post("/records/{member}/{month}/toggle", response_model=schemas.RecordResponse)
async def toggle_field(member: str, month: str, request: schemas.ToggleFieldRequest, service: Service):
    try:
        service.toggle_field(member, month, request.path)
    except (InvalidPathError, TypeMismatchError) as e:
        raise _mutation_error(e, member, month)
    return _record_response(service, member, month)


@router.post("/records/{member}/{month}/emotional-codes/{code}", response_model=schemas.RecordResponse)
async def toggle_emotional_code(member: str, month: str, code: str, service: Service):
    try:
        service.toggle_emotional_code(member, month, code)
    except (InvalidPathError, TypeMismatchError) as e:
        raise _mutation_error(e, member, month)
    return _record_response(service, member, month)
