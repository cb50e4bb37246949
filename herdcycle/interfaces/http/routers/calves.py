from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from herdcycle.application.errors import OverrideRequired
from herdcycle.application.use_cases.calves import (
    get_calf_maturity,
    graduate_calf,
    graduate_due_calves,
)
from herdcycle.infrastructure.auth.context import AuthContext
from herdcycle.interfaces.http.deps import get_auth_context, get_uow
from herdcycle.interfaces.http.schemas.calves import (
    AdultRef,
    CalfMaturityResponse,
    CalfResponse,
    GraduateDueResponse,
    GraduateRequest,
    GraduationResponse,
)

router = APIRouter(prefix="/calves", tags=["calves"])


@router.post("/graduate-due", response_model=GraduateDueResponse)
async def graduate_due_calves_endpoint(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    if not context.can_override:
        raise OverrideRequired("Override required")
    result = await graduate_due_calves.execute(uow, context.tenant_id)
    await uow.commit()
    return GraduateDueResponse(promoted=result.promoted, adult_ids=result.adult_ids)


@router.get("/{calf_id}/maturity", response_model=CalfMaturityResponse)
async def get_calf_maturity_endpoint(
    calf_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    result = await get_calf_maturity.execute(uow, context.tenant_id, calf_id)
    return CalfMaturityResponse.model_validate(result)


@router.post("/{calf_id}/graduate", response_model=GraduationResponse)
async def graduate_calf_endpoint(
    calf_id: UUID,
    payload: GraduateRequest | None = None,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    result = await graduate_calf.execute(
        uow,
        context.tenant_id,
        calf_id,
        forced=bool(payload and payload.forced),
        override=context.can_override,
        actor_user_id=context.user_id,
    )
    await uow.commit()
    return GraduationResponse(
        calf=CalfResponse.model_validate(result.calf),
        adult=AdultRef(id=result.adult.id, type=result.adult_type),
    )
