from __future__ import annotations

from dataclasses import replace
from datetime import tzinfo
from uuid import UUID

from fastapi import APIRouter, Depends, status

from herdcycle.application.use_cases.reproduction import (
    clear_calving,
    delete_latest_insemination,
    get_reproductive_state,
    list_audit,
    record_calving,
    record_insemination,
    record_pregnancy_check,
    restore_calving,
    restore_insemination,
)
from herdcycle.infrastructure.auth.context import AuthContext
from herdcycle.interfaces.http.deps import get_auth_context, get_default_tz, get_uow
from herdcycle.interfaces.http.schemas.calves import CalfResponse
from herdcycle.interfaces.http.schemas.reproduction import (
    AuditEntryResponse,
    CalvingChangeResponse,
    CalvingCreate,
    CowReproductionResponse,
    CowResponse,
    InseminationCreate,
    InseminationDeletedResponse,
    InseminationResponse,
    ReproInfoResponse,
)
from herdcycle.utils.datetime_tz import localize

router = APIRouter(prefix="/cows", tags=["reproduction"])


@router.get("/{cow_id}/reproduction", response_model=CowReproductionResponse)
async def get_reproduction_endpoint(
    cow_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    result = await get_reproductive_state.execute(uow, context.tenant_id, cow_id)
    return CowReproductionResponse(
        cow=CowResponse.model_validate(result.cow),
        reproduction=ReproInfoResponse.model_validate(result.reproduction),
        inseminations=[InseminationResponse.model_validate(i) for i in result.inseminations],
        override=context.can_override,
    )


@router.get("/{cow_id}/audit", response_model=list[AuditEntryResponse])
async def list_audit_endpoint(
    cow_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    items = await list_audit.execute(uow, context.tenant_id, cow_id)
    return [AuditEntryResponse.model_validate(item) for item in items]


@router.post(
    "/{cow_id}/inseminations",
    response_model=InseminationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_insemination_endpoint(
    cow_id: UUID,
    payload: InseminationCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    tz: tzinfo = Depends(get_default_tz),
):
    insemination = await record_insemination.execute(
        uow,
        context.tenant_id,
        record_insemination.RecordInseminationInput(
            cow_id=cow_id,
            service_date=localize(payload.service_date, tz),
            forced=payload.forced,
            notes=payload.notes,
        ),
        override=context.can_override,
        actor_user_id=context.user_id,
    )
    await uow.commit()
    return InseminationResponse.model_validate(insemination)


# Declared before the pregnancy-check route so "restore" is not read as an attempt id
@router.post(
    "/{cow_id}/inseminations/restore/{audit_id}",
    response_model=InseminationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def restore_insemination_endpoint(
    cow_id: UUID,
    audit_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    insemination = await restore_insemination.execute(
        uow,
        context.tenant_id,
        cow_id,
        audit_id,
        override=context.can_override,
        actor_user_id=context.user_id,
    )
    await uow.commit()
    return InseminationResponse.model_validate(insemination)


@router.post(
    "/{cow_id}/inseminations/{insemination_id}/{result}",
    response_model=InseminationResponse,
)
async def record_pregnancy_check_endpoint(
    cow_id: UUID,
    insemination_id: UUID,
    result: record_pregnancy_check.PregnancyCheckResult,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    insemination = await record_pregnancy_check.execute(
        uow,
        context.tenant_id,
        cow_id,
        insemination_id,
        result,
        override=context.can_override,
        actor_user_id=context.user_id,
    )
    await uow.commit()
    return InseminationResponse.model_validate(insemination)


@router.delete(
    "/{cow_id}/inseminations/{insemination_id}",
    response_model=InseminationDeletedResponse,
)
async def delete_insemination_endpoint(
    cow_id: UUID,
    insemination_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    result = await delete_latest_insemination.execute(
        uow,
        context.tenant_id,
        cow_id,
        insemination_id,
        override=context.can_override,
        actor_user_id=context.user_id,
    )
    await uow.commit()
    return InseminationDeletedResponse.model_validate(result)


@router.post("/{cow_id}/calving")
async def record_calving_endpoint(
    cow_id: UUID,
    payload: CalvingCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    tz: tzinfo = Depends(get_default_tz),
):
    calf = None
    if payload.calf is not None:
        calf = record_calving.NewbornCalfInput(**payload.calf.model_dump())
        calf = replace(calf, birth_date=localize(calf.birth_date, tz))
    result = await record_calving.execute(
        uow,
        context.tenant_id,
        record_calving.RecordCalvingInput(
            cow_id=cow_id,
            calved_at=localize(payload.calved_at, tz),
            notes=payload.notes,
            calf=calf,
        ),
        override=context.can_override,
        actor_user_id=context.user_id,
    )
    await uow.commit()
    return {
        "cow": CowResponse.model_validate(result.cow).model_dump(mode="json"),
        "audit_id": str(result.audit_id),
        "calf": CalfResponse.model_validate(result.calf).model_dump(mode="json")
        if result.calf
        else None,
    }


@router.delete("/{cow_id}/calving", response_model=CalvingChangeResponse)
async def clear_calving_endpoint(
    cow_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    result = await clear_calving.execute(
        uow,
        context.tenant_id,
        cow_id,
        override=context.can_override,
        actor_user_id=context.user_id,
    )
    await uow.commit()
    return CalvingChangeResponse(
        cow=CowResponse.model_validate(result.cow), audit_id=result.audit_id
    )


@router.post("/{cow_id}/calving/restore/{audit_id}", response_model=CalvingChangeResponse)
async def restore_calving_endpoint(
    cow_id: UUID,
    audit_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    result = await restore_calving.execute(
        uow,
        context.tenant_id,
        cow_id,
        audit_id,
        override=context.can_override,
        actor_user_id=context.user_id,
    )
    await uow.commit()
    return CalvingChangeResponse(
        cow=CowResponse.model_validate(result.cow), audit_id=result.audit_id
    )
