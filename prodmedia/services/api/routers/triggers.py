# prodmedia/services/api/routers/triggers.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from prodmedia.common.settings import get_settings
from prodmedia.domain.errors import RecordNotFoundError
from prodmedia.services.api.deps import get_dispatcher
from prodmedia.services.ingest.dispatcher import MediaDispatcher
from prodmedia.services.mappers.processing import to_dispatch_response
from prodmedia.services.schemas.processing import DispatchResponse, ProductCreatedEvent

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}", tags=["processing"])


@router.post("/triggers/product-created", response_model=DispatchResponse)
def product_created(
    event: ProductCreatedEvent,
    dispatcher: MediaDispatcher = Depends(get_dispatcher),
) -> DispatchResponse:
    try:
        report = dispatcher.handle_created(event.product_id, event.document)
    except RecordNotFoundError as ex:
        raise HTTPException(status_code=404, detail=str(ex)) from ex
    return to_dispatch_response(report)


@router.post("/products/{product_id}/process", response_model=DispatchResponse)
def reprocess_product(
    product_id: str,
    dispatcher: MediaDispatcher = Depends(get_dispatcher),
) -> DispatchResponse:
    try:
        report = dispatcher.process(product_id)
    except RecordNotFoundError as ex:
        raise HTTPException(status_code=404, detail=str(ex)) from ex
    return to_dispatch_response(report)
