# prodmedia/services/mappers/processing.py
from __future__ import annotations

from typing import List

from prodmedia.domain.dataclasses.reports import DispatchReport
from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.services.schemas.processing import AssetResultSchema, DispatchResponse


def to_asset_schema(asset: AssetDescriptor) -> AssetResultSchema:
    return AssetResultSchema(
        role=asset.role,
        kind=asset.kind.value,
        source_url=asset.source_url,
        path=asset.path,
        is_main=asset.is_main,
        type=asset.type.value,
        status=asset.status.value,
        url=asset.url,
        urls=dict(asset.urls),
        error=asset.error,
    )


def to_dispatch_response(report: DispatchReport) -> DispatchResponse:
    assets: List[AssetResultSchema] = [to_asset_schema(a) for a in report.assets]
    return DispatchResponse(
        product_id=report.product_id,
        variant=report.variant,
        skipped=report.skipped,
        skip_reason=report.skip_reason,
        status=report.status.value if report.status else None,
        written=report.written,
        conflict=report.conflict,
        failure_reason=report.failure_reason,
        started_at=report.started_at,
        finished_at=report.finished_at,
        planned=report.planned,
        succeeded=report.succeeded,
        failed=report.failed,
        assets=assets,
        error_details=[f"{subject}: {msg}" for subject, msg in report.error_details],
    )
