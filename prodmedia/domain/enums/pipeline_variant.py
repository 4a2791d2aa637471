from __future__ import annotations
from enum import StrEnum


class PipelineVariant(StrEnum):
    store_as_is = "store_as_is"
    multi_resolution = "multi_resolution"
