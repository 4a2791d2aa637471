# prodmedia/services/ingest/dispatcher.py
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol

from prodmedia.common.concurrency.thread_manager import ThreadManager
from prodmedia.common.logging import get_logger
from prodmedia.common.settings import get_settings
from prodmedia.domain.dataclasses.reports import DispatchReport
from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.domain.entities.product_media import ProductMediaRecord
from prodmedia.domain.enums.asset_kind import AssetKind
from prodmedia.domain.enums.asset_status import AssetStatus
from prodmedia.domain.enums.pipeline_variant import PipelineVariant
from prodmedia.domain.enums.processing_status import ProcessingStatus
from prodmedia.domain.errors import RecordNotFoundError, error_message
from prodmedia.domain.policies.aggregation import aggregate, failure_updates
from prodmedia.domain.policies.asset_planner import plan_assets
from prodmedia.domain.policies.processing_gate import expected_pre_states, should_process, status_field
from prodmedia.domain.ports.records import ProductRecordPort

logger = get_logger(__name__)


class AssetStrategy(Protocol):
    def process(self, asset: AssetDescriptor) -> AssetDescriptor: ...


class MediaDispatcher:
    """
    Entry point for one product-creation event.

    Flow: gate (idempotency + has media) -> plan descriptors -> fan out one task per
    asset and wait for all of them -> aggregate -> exactly one compare-and-swap write.
    A skipped run writes nothing. Anything escaping the run itself marks the whole
    record failed with failureReason.
    """

    def __init__(
        self,
        *,
        records: ProductRecordPort,
        image_strategy: AssetStrategy,
        video_strategy: AssetStrategy,
        variant: PipelineVariant | str = PipelineVariant.store_as_is,
        bucket: Optional[str] = None,
        workers: Optional[int] = None,
        main_rendition: Optional[str] = None,
    ) -> None:
        cfg = get_settings()
        self.records = records
        self.image_strategy = image_strategy
        self.video_strategy = video_strategy
        self.variant = PipelineVariant(variant)
        self.bucket = bucket
        self.workers = int(workers or cfg.concurrency.asset_workers)
        self.main_rendition = main_rendition or cfg.imaging.main_rendition

    # ---- public API -----------------------------------------------------------
    def handle_created(self, product_id: str, document: Mapping[str, Any] | None) -> DispatchReport:
        """Process the snapshot delivered with a creation event."""
        rpt = DispatchReport(product_id=product_id, variant=self.variant.value)
        rpt.start()

        try:
            record = ProductMediaRecord.from_document(product_id, document)
            gate = should_process(record, self.variant)
            if not gate.proceed:
                logger.info("product %s: skipped (%s)", product_id, gate.reason)
                return rpt.skip(gate.reason)

            assets = plan_assets(record, self.variant, bucket=self.bucket)
            logger.info("product %s: processing %d asset(s) [%s]", product_id, len(assets), self.variant.value)
            self._run_assets(assets)
            rpt.absorb(assets)

            agg = aggregate(assets, self.variant, main_rendition=self.main_rendition)
            rpt.status = agg.status
            rpt.updates = agg.updates
            rpt.written = self._commit(product_id, agg.updates)
            rpt.conflict = not rpt.written
            if rpt.conflict:
                logger.warning("product %s: status changed during the run; result not written", product_id)
            else:
                logger.info(
                    "product %s: %s (%d ok, %d failed)", product_id, agg.status.value, agg.succeeded, agg.failed
                )
        except Exception as ex:
            logger.exception("product %s: processing failed", product_id)
            self._mark_failed(rpt, ex)

        rpt.stop()
        return rpt

    def process(self, product_id: str) -> DispatchReport:
        """Re-trigger from the record's current state; still subject to the idempotency gate."""
        document = self.records.get(product_id)
        if document is None:
            raise RecordNotFoundError(product_id)
        return self.handle_created(product_id, document)

    # ---- internals ------------------------------------------------------------
    def _strategy_for(self, asset: AssetDescriptor) -> AssetStrategy:
        return self.video_strategy if asset.kind is AssetKind.video else self.image_strategy

    def _process_one(self, asset: AssetDescriptor) -> AssetDescriptor:
        return self._strategy_for(asset).process(asset)

    def _run_assets(self, assets: List[AssetDescriptor]) -> None:
        if not assets:
            return
        with ThreadManager(name="assets", max_workers=min(self.workers, len(assets))) as tm:
            settled = tm.map_settled(self._process_one, assets)
        # Strategies convert their own errors; this only catches escapes so the run still settles
        for asset, outcome in zip(assets, settled):
            if not outcome.ok and asset.status is AssetStatus.pending:
                asset.mark_failed(error_message(outcome.error))

    def _commit(self, product_id: str, updates: Mapping[str, Any]) -> bool:
        return self.records.commit(
            product_id,
            updates,
            status_field=status_field(self.variant),
            expected=expected_pre_states(self.variant),
        )

    def _mark_failed(self, rpt: DispatchReport, ex: BaseException) -> None:
        reason = error_message(ex)
        rpt.status = ProcessingStatus.failed
        rpt.failure_reason = reason
        rpt.add_error("record", reason)
        rpt.updates = failure_updates(self.variant, reason)
        # A vanished record cannot be marked; let the caller see it
        rpt.written = self._commit(rpt.product_id, rpt.updates)
        rpt.conflict = not rpt.written
