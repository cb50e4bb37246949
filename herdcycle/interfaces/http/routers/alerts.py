from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from herdcycle.application.use_cases.alerts import get_alerts, list_milestones
from herdcycle.config.settings import Settings
from herdcycle.infrastructure.auth.context import AuthContext
from herdcycle.interfaces.http.deps import get_app_settings, get_auth_context, get_uow
from herdcycle.interfaces.http.schemas.alerts import CalendarViewResponse, MilestoneResponse

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=CalendarViewResponse)
async def get_alerts_endpoint(
    anchor: date | None = None,
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    view = await get_alerts.execute(
        uow,
        context.tenant_id,
        anchor,
        past_due_limit=settings.alerts_past_due_limit,
    )
    return CalendarViewResponse.model_validate(view)


@router.get("/milestones", response_model=list[MilestoneResponse])
async def list_milestones_endpoint(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    items = await list_milestones.execute(uow, context.tenant_id)
    return [MilestoneResponse.model_validate(item) for item in items]
