from prodmedia.services.schemas.processing import (
    AssetResultSchema,
    DispatchResponse,
    NormalizeRequest,
    NormalizeResponse,
    ProductCreatedEvent,
)

__all__ = [
    "AssetResultSchema",
    "DispatchResponse",
    "NormalizeRequest",
    "NormalizeResponse",
    "ProductCreatedEvent",
]
