from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional

from prodmedia.domain.entities.product_media import ProductMediaRecord
from prodmedia.domain.enums.pipeline_variant import PipelineVariant
from prodmedia.domain.enums.processing_status import ProcessingStatus

STATUS_FIELDS = {
    PipelineVariant.store_as_is: "imageStatus",
    PipelineVariant.multi_resolution: "imageProcessingStatus",
}

# Statuses the record may hold when the aggregate is committed (None = field absent)
_EXPECTED_PRE_STATES = {
    PipelineVariant.store_as_is: frozenset({None, ProcessingStatus.not_started, ProcessingStatus.pending}),
    PipelineVariant.multi_resolution: frozenset({ProcessingStatus.pending}),
}


@dataclass(frozen=True)
class GateDecision:
    proceed: bool
    reason: str = ""


def status_field(variant: PipelineVariant) -> str:
    return STATUS_FIELDS[PipelineVariant(variant)]


def current_status(record: ProductMediaRecord, variant: PipelineVariant) -> Optional[ProcessingStatus]:
    if PipelineVariant(variant) is PipelineVariant.multi_resolution:
        return record.image_processing_status
    return record.image_status


def expected_pre_states(variant: PipelineVariant) -> FrozenSet[Optional[ProcessingStatus]]:
    return _EXPECTED_PRE_STATES[PipelineVariant(variant)]


def should_process(record: ProductMediaRecord, variant: PipelineVariant) -> GateDecision:
    """
    Idempotency + content preconditions. A negative decision is a silent no-op, not an error.

    store_as_is: anything but a terminal imageStatus is eligible.
    multi_resolution: only an explicit imageProcessingStatus == "pending" is eligible.
    """
    variant = PipelineVariant(variant)
    status = current_status(record, variant)
    if status not in expected_pre_states(variant):
        return GateDecision(False, f"{status_field(variant)}={status.value if status else None}")
    if not record.has_media:
        return GateDecision(False, "no source media")
    return GateDecision(True)
