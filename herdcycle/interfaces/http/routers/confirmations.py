from __future__ import annotations

from datetime import date, tzinfo
from uuid import UUID

from fastapi import APIRouter, Depends, status

from herdcycle.application.use_cases.confirmations import (
    create_confirmation,
    list_confirmations,
    list_confirmations_in_range,
    undo_confirmation,
)
from herdcycle.infrastructure.auth.context import AuthContext
from herdcycle.interfaces.http.deps import get_auth_context, get_default_tz, get_uow
from herdcycle.interfaces.http.schemas.confirmations import (
    ConfirmationCreate,
    ConfirmationResponse,
    NamedConfirmationResponse,
)
from herdcycle.utils.datetime_tz import localize, to_utc

router = APIRouter(prefix="/confirmations", tags=["confirmations"])


@router.post("", response_model=ConfirmationResponse, status_code=status.HTTP_201_CREATED)
async def create_confirmation_endpoint(
    payload: ConfirmationCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    tz: tzinfo = Depends(get_default_tz),
):
    confirmation = await create_confirmation.execute(
        uow,
        context.tenant_id,
        create_confirmation.CreateConfirmationInput(
            entity_type=payload.entity_type,
            entity_id=payload.entity_id,
            type=payload.type,
            when=to_utc(payload.when, tz),
            alert_on=localize(payload.alert_on, tz),
            note=payload.note,
        ),
    )
    await uow.commit()
    return ConfirmationResponse.model_validate(confirmation)


@router.post("/{confirmation_id}/undo", response_model=ConfirmationResponse)
async def undo_confirmation_endpoint(
    confirmation_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    confirmation = await undo_confirmation.execute(uow, context.tenant_id, confirmation_id)
    await uow.commit()
    return ConfirmationResponse.model_validate(confirmation)


@router.get("", response_model=list[ConfirmationResponse])
async def list_confirmations_endpoint(
    entity_type: str,
    entity_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    items = await list_confirmations.execute(uow, context.tenant_id, entity_type, entity_id)
    return [ConfirmationResponse.model_validate(item) for item in items]


@router.get("/range", response_model=list[NamedConfirmationResponse])
async def list_confirmations_in_range_endpoint(
    date_from: date,
    date_to: date,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    items = await list_confirmations_in_range.execute(uow, context.tenant_id, date_from, date_to)
    return [
        NamedConfirmationResponse(
            **ConfirmationResponse.model_validate(item.confirmation).model_dump(),
            entity_name=item.entity_name,
        )
        for item in items
    ]
