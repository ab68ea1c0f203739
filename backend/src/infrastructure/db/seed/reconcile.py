# src/infrastructure/db/seed/reconcile.py
import argparse
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from infrastructure.db.repositories import TemplateStore
from infrastructure.db.seed.registry import TemplateRegistry
from infrastructure.db.seed.schema import TemplateRow

LOGGER = logging.getLogger("template.reconcile")


@dataclass
class ReconciliationState:
    """
    Process-local guard: NotStarted (completed_at is None) | Completed(at).
    Owned by the app bootstrap and handed to the reconciler; not a distributed lock.
    """

    completed_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def mark_completed(self, at: Optional[datetime] = None) -> None:
        self.completed_at = at or datetime.now(timezone.utc)

    def reset(self) -> None:
        self.completed_at = None


@dataclass
class ReconcileResult:
    inserted: int = 0
    activated: int = 0


class TemplateReconciler:
    """
    Makes sure every registry template has an active system row in the store.

    Per job type (registry order, strictly sequential):
      missing         -> insert (is_active, is_default, usage_count=0)
      exists/inactive -> activate; every other column left as-is
      exists/active   -> no-op
    Rows are never deleted and their content is never rewritten.
    """

    def __init__(
        self,
        registry: TemplateRegistry,
        state: ReconciliationState,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.registry = registry
        self.state = state
        self.clock = clock

    async def reconcile(self, store: TemplateStore, *, force: bool = False, dry_run: bool = False) -> ReconcileResult:
        result = ReconcileResult()
        if self.state.is_completed and not force:
            LOGGER.debug("Reconciliation already attempted at %s; skipping", self.state.completed_at)
            return result
        if not dry_run:
            # attempted, not necessarily successful: a failed pass is retried with force or on restart
            self.state.mark_completed(self.clock())

        try:
            for tpl in self.registry:
                existing = await store.select_by_job_type_id(tpl.job_type_id)
                if existing is None:
                    if not dry_run and not await store.insert(TemplateRow.from_default(tpl)):
                        LOGGER.info("Skipped: %s (system row written concurrently)", tpl.job_type_id)
                        continue
                    result.inserted += 1
                    LOGGER.info("%sInserted: %s", "[DRY] " if dry_run else "", tpl.job_type_id)
                elif not existing.is_active:
                    if not dry_run:
                        await store.update_activation(tpl.job_type_id, True)
                    result.activated += 1
                    LOGGER.info("%sActivated: %s", "[DRY] " if dry_run else "", tpl.job_type_id)
        except Exception as e:
            LOGGER.exception("Error reconciling templates (stopping this pass): %s", e)

        if result.inserted or result.activated:
            LOGGER.info("Reconcile done. inserted=%d activated=%d", result.inserted, result.activated)
        return result


# ===== CLI =====
def _parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Reconcile default estimate templates into proposal_templates.")
    ap.add_argument("--templates", default=None, help="Path to a default templates YAML (default: packaged)")
    ap.add_argument("--dry-run", action="store_true", help="Do not write to DB; only show what would change")
    return ap.parse_args()


async def _run(templates_path: Optional[str], dry_run: bool) -> ReconcileResult:
    from infrastructure.db.database import get_session
    from infrastructure.db.repositories import TemplateRepository

    reconciler = TemplateReconciler(TemplateRegistry.load(templates_path), ReconciliationState())
    async for session in get_session():
        return await reconciler.reconcile(TemplateRepository(session), dry_run=dry_run)
    return ReconcileResult()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    args = _parse_args()
    res = asyncio.run(_run(args.templates, args.dry_run))
    LOGGER.info("inserted=%d activated=%d", res.inserted, res.activated)


if __name__ == "__main__":
    main()
