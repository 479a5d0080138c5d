"""Payout repository."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from nestquarter.models.payout import Payout


class PayoutRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, payout_id: UUID) -> Payout | None:
        result = await self.db.execute(select(Payout).where(Payout.id == payout_id))
        return result.scalar_one_or_none()

    async def existing_booking_ids(self, booking_ids: list[UUID]) -> set[UUID]:
        """IDs among ``booking_ids`` that already have a payout."""
        if not booking_ids:
            return set()
        result = await self.db.execute(
            select(Payout.booking_id).where(Payout.booking_id.in_(booking_ids))
        )
        return set(result.scalars().all())

    async def insert_many(self, rows: list[dict[str, Any]]) -> list[Payout]:
        """Insert payouts in one flush; a duplicate booking_id raises IntegrityError."""
        payouts = [Payout(**row) for row in rows]
        self.db.add_all(payouts)
        await self.db.flush()
        for payout in payouts:
            await self.db.refresh(payout)
        return payouts

    async def list_for_host(
        self,
        host_id: UUID,
        *,
        status: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Payout], int]:
        query = select(Payout).where(Payout.host_id == host_id)
        if status:
            query = query.where(Payout.payout_status == status)

        count_result = await self.db.execute(select(func.count()).select_from(query.subquery()))
        total = count_result.scalar() or 0

        offset = (page - 1) * limit
        query = query.order_by(Payout.created_at.desc(), Payout.id).offset(offset).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all()), total
