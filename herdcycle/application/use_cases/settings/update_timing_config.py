from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from herdcycle.application.errors import ValidationError
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.settings import get_timing_config
from herdcycle.domain.models.timing_config import TIMING_DEFAULTS, TimingConfig, max_timing_value
from herdcycle.utils.datetime_tz import utcnow


def _is_valid(name: str, value: Any) -> bool:
    if name not in TIMING_DEFAULTS or isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= max_timing_value(name)


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    changes: Mapping[str, Any],
) -> TimingConfig:
    """Merge `changes` over the stored config; omitted or null fields keep their value."""
    invalid = {
        name: value
        for name, value in changes.items()
        if value is not None and not _is_valid(name, value)
    }
    if invalid:
        raise ValidationError(
            "Timing values must be whole numbers within their allowed range",
            details={
                "fields": sorted(invalid),
                "max": {
                    name: max_timing_value(name)
                    for name in sorted(invalid)
                    if name in TIMING_DEFAULTS
                },
            },
        )

    current = await get_timing_config.execute(uow, tenant_id)
    merged = current.as_dict()
    merged.update({name: value for name, value in changes.items() if value is not None})
    config = TimingConfig.from_mapping(merged, tenant_id=tenant_id, updated_at=utcnow())
    return await uow.timing_config.upsert(config)
