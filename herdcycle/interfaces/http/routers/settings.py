from __future__ import annotations

from fastapi import APIRouter, Depends

from herdcycle.application.errors import PermissionDenied
from herdcycle.application.use_cases.settings import get_timing_config, update_timing_config
from herdcycle.infrastructure.auth.context import AuthContext
from herdcycle.interfaces.http.deps import get_auth_context, get_uow
from herdcycle.interfaces.http.schemas.settings import TimingConfigResponse, TimingConfigUpdate

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/timing", response_model=TimingConfigResponse)
async def get_timing_settings(
    context: AuthContext = Depends(get_auth_context), uow=Depends(get_uow)
):
    config = await get_timing_config.execute(uow, context.tenant_id)
    return TimingConfigResponse.model_validate(config)


@router.put("/timing", response_model=TimingConfigResponse)
async def update_timing_settings(
    payload: TimingConfigUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    if not context.role.can_manage_settings():
        raise PermissionDenied("Only admin can update timing settings")
    updated = await update_timing_config.execute(
        uow, context.tenant_id, payload.model_dump(exclude_unset=True)
    )
    await uow.commit()
    return TimingConfigResponse.model_validate(updated)
