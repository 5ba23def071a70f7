"""Invoice endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Response, status

from stockbook.api.dependencies import get_create_invoice_use_case, get_inv_store
from stockbook.application.dto.requests import CreateInvoiceRequest
from stockbook.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
)
from stockbook.application.use_cases import CreateInvoiceUseCase
from stockbook.core.entities.base import ensure_aware
from stockbook.core.exceptions import InvoiceNotFoundError, ValidationError
from stockbook.core.interfaces import IInvoiceStore

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    phone: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    store: IInvoiceStore = Depends(get_inv_store),
) -> InvoiceListResponse:
    """List invoices newest first, by customer phone or date range."""
    if phone and (start or end):
        raise ValidationError("phone", "cannot be combined with a date range", phone)

    if phone:
        invoices = await store.list_by_customer_phone(phone)
    elif start or end:
        if not (start and end):
            raise ValidationError("start", "start and end must be given together")
        invoices = await store.list_by_date_range(ensure_aware(start), ensure_aware(end))
    else:
        invoices = await store.get_all()

    return InvoiceListResponse(
        invoices=[InvoiceResponse.from_entity(i) for i in invoices],
        total=len(invoices),
    )


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def create_invoice(
    request: CreateInvoiceRequest,
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """Checkout: deduct stock for every line and issue an invoice."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_id: str,
    store: IInvoiceStore = Depends(get_inv_store),
) -> InvoiceResponse:
    invoice = await store.get(invoice_id)
    if invoice is None:
        raise InvoiceNotFoundError(invoice_id)
    return InvoiceResponse.from_entity(invoice)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_invoice(
    invoice_id: str,
    store: IInvoiceStore = Depends(get_inv_store),
) -> Response:
    """Delete an invoice. Product counters are not rolled back."""
    if await store.get(invoice_id) is None:
        raise InvoiceNotFoundError(invoice_id)
    await store.delete(invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
