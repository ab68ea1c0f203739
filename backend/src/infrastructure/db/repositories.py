# src/infrastructure/db/repositories.py
from typing import List, Optional, Protocol

from sqlalchemy import or_, select, text, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.catalog.errors import PersistenceError
from infrastructure.db.models import ProposalTemplate
from infrastructure.db.seed.schema import TemplateRow


class TemplateStore(Protocol):
    """Persistence collaborator of the template reconciler."""

    async def select_by_job_type_id(self, job_type_id: str) -> Optional[TemplateRow]: ...

    # False when nothing was written (another writer already holds the system row)
    async def insert(self, row: TemplateRow) -> bool: ...

    async def update_activation(self, job_type_id: str, is_active: bool) -> None: ...


class TemplateRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _rollback_and_wrap(self, e: SQLAlchemyError, what: str) -> PersistenceError:
        await self.session.rollback()
        return PersistenceError(f"{what}: {e}")

    # ---------- reconciler surface (system rows only) ----------
    async def select_by_job_type_id(self, job_type_id: str) -> Optional[TemplateRow]:
        q = select(ProposalTemplate).where(
            ProposalTemplate.job_type_id == job_type_id,
            ProposalTemplate.is_default.is_(True),
        )
        try:
            row = (await self.session.execute(q.limit(1))).scalars().first()
        except SQLAlchemyError as e:
            raise await self._rollback_and_wrap(e, f"select template {job_type_id}") from e
        return None if row is None else TemplateRow.model_validate(row)

    async def insert(self, row: TemplateRow) -> bool:
        values = row.model_dump(exclude={"id", "created_at", "updated_at"})
        # a concurrent process may have inserted the same system row since our select
        stmt = (
            pg_insert(ProposalTemplate)
            .values(**values)
            .on_conflict_do_nothing(
                index_elements=[ProposalTemplate.job_type_id],
                index_where=ProposalTemplate.is_default.is_(True),
            )
            .returning(ProposalTemplate.id)
        )
        try:
            res = await self.session.execute(stmt)
            new_id = res.scalar_one_or_none()
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._rollback_and_wrap(e, f"insert template {row.job_type_id}") from e
        return new_id is not None

    async def update_activation(self, job_type_id: str, is_active: bool) -> None:
        stmt = (
            update(ProposalTemplate)
            .where(
                ProposalTemplate.job_type_id == job_type_id,
                ProposalTemplate.is_default.is_(True),
            )
            .values(is_active=is_active, updated_at=text("NOW()"))
        )
        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._rollback_and_wrap(e, f"update activation {job_type_id}") from e

    # ---------- API surface ----------
    async def list_visible(self, *, user_id: Optional[str] = None, trade_id: Optional[str] = None) -> List[TemplateRow]:
        """
        Active templates: system rows, plus the caller's own rows when known.
        Ordered by usage (desc), then trade name, job type name.
        """
        q = select(ProposalTemplate).where(ProposalTemplate.is_active.is_(True))
        if user_id:
            q = q.where(or_(ProposalTemplate.created_by.is_(None), ProposalTemplate.created_by == user_id))
        else:
            q = q.where(ProposalTemplate.created_by.is_(None))
        if trade_id:
            q = q.where(ProposalTemplate.trade_id == trade_id)
        q = q.order_by(
            ProposalTemplate.usage_count.desc(),
            ProposalTemplate.trade_name.asc(),
            ProposalTemplate.job_type_name.asc(),
        )
        try:
            rows = (await self.session.execute(q)).scalars().all()
        except SQLAlchemyError as e:
            raise await self._rollback_and_wrap(e, "list templates") from e
        return [TemplateRow.model_validate(r) for r in rows]

    async def get_by_id(self, template_id: int) -> Optional[TemplateRow]:
        try:
            row = await self.session.get(ProposalTemplate, template_id)
        except SQLAlchemyError as e:
            raise await self._rollback_and_wrap(e, f"get template {template_id}") from e
        return None if row is None else TemplateRow.model_validate(row)

    async def increment_usage(self, template_id: int) -> bool:
        stmt = (
            update(ProposalTemplate)
            .where(ProposalTemplate.id == template_id)
            .values(usage_count=ProposalTemplate.usage_count + 1)
            .returning(ProposalTemplate.id)
        )
        try:
            res = await self.session.execute(stmt)
            updated = res.scalar_one_or_none()
            await self.session.commit()
        except SQLAlchemyError as e:
            raise await self._rollback_and_wrap(e, f"increment usage {template_id}") from e
        return updated is not None
