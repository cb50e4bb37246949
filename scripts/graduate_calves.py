#!/usr/bin/env python3
"""
Graduate every calf that has reached maturity into an adult cow or bull.

Meant to be run once a day by an external scheduler (cron, systemd timer,
Kubernetes CronJob).

Usage:
  python scripts/graduate_calves.py [--tenant-id UUID ...]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from uuid import UUID

sys.path.insert(0, str(Path(__file__).parent.parent))

from herdcycle.config.settings import get_settings
from herdcycle.infrastructure.db.session import create_engine, create_session_factory
from herdcycle.infrastructure.scheduler.graduation_tasks import graduate_due_calves_all_tenants


async def run(tenant_ids: list[UUID] | None) -> int:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    try:
        promoted = await graduate_due_calves_all_tenants(session_factory, tenant_ids)
    finally:
        await engine.dispose()
    for tenant_id, count in promoted.items():
        print(f"{tenant_id}: {count} promoted")
    return 0 if tenant_ids is None or len(promoted) == len(tenant_ids) else 1


def main():
    parser = argparse.ArgumentParser(description="Graduate mature calves into adult records")
    parser.add_argument(
        "--tenant-id",
        type=UUID,
        action="append",
        dest="tenant_ids",
        help="Limit the run to this tenant (repeatable). Defaults to every tenant with calves.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    sys.exit(asyncio.run(run(args.tenant_ids)))


if __name__ == "__main__":
    main()
