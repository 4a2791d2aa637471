# prodmedia/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from prodmedia.domain.entities.asset_descriptor import AssetDescriptor
from prodmedia.domain.enums.processing_status import ProcessingStatus


# ---------------------------------------------------------------------------
# Base report (shared fields + utilities)
# ---------------------------------------------------------------------------
@dataclass
class BaseReport:
    """Common report base:
    - timing: started_at / finished_at
    - error capture: error_details
    - helpers: start(), stop(), add_error()
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    # Each tuple is (subject, message), e.g. ("gallery_1", "Image download failed: 404")
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def add_error(self, subject: str, message: str) -> None:
        self.error_details.append((subject, message))


# ---------------------------------------------------------------------------
# Dispatcher run report
# ---------------------------------------------------------------------------
@dataclass
class DispatchReport(BaseReport):
    product_id: str = ""
    variant: str = ""
    skipped: bool = False
    skip_reason: str = ""
    status: Optional[ProcessingStatus] = None  # None when skipped
    planned: int = 0
    succeeded: int = 0
    failed: int = 0
    written: bool = False       # the single record write happened
    conflict: bool = False      # compare-and-swap lost: record moved on under us
    failure_reason: Optional[str] = None
    updates: Dict[str, Any] = field(default_factory=dict)
    assets: List[AssetDescriptor] = field(default_factory=list)

    def skip(self, reason: str) -> "DispatchReport":
        self.skipped = True
        self.skip_reason = reason
        self.stop()
        return self

    def absorb(self, assets: List[AssetDescriptor]) -> None:
        self.assets = list(assets)
        self.planned = len(assets)
        self.succeeded = sum(1 for a in assets if a.succeeded)
        self.failed = sum(1 for a in assets if a.failed)
        for a in assets:
            if a.failed:
                self.add_error(a.role, a.error or "")
