"""Customer endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Response, status

from stockbook.api.dependencies import get_cust_store, get_customer_analytics_use_case
from stockbook.application.dto.requests import CreateCustomerRequest
from stockbook.application.dto.responses import (
    CustomerAnalyticsListResponse,
    CustomerListResponse,
    CustomerResponse,
    ErrorResponse,
)
from stockbook.application.use_cases import GetCustomerAnalyticsUseCase
from stockbook.core.entities import Customer
from stockbook.core.exceptions import CustomerNotFoundError
from stockbook.core.interfaces import ICustomerStore

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    q: str | None = None,
    store: ICustomerStore = Depends(get_cust_store),
) -> CustomerListResponse:
    """List registered customers, optionally filtered by name or phone."""
    customers = await store.get_all()
    if q:
        needle = q.lower()
        customers = [
            c for c in customers if needle in c.name.lower() or needle in c.phone
        ]
    return CustomerListResponse(
        customers=[CustomerResponse.from_entity(c) for c in customers],
        total=len(customers),
    )


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    request: CreateCustomerRequest,
    store: ICustomerStore = Depends(get_cust_store),
) -> CustomerResponse:
    customer = await store.save(Customer(name=request.name, phone=request.phone))
    return CustomerResponse.from_entity(customer)


@router.get("/analytics", response_model=CustomerAnalyticsListResponse)
async def customer_analytics(
    q: str | None = None,
    sort: Literal["revenue", "visits", "recent"] = "revenue",
    use_case: GetCustomerAnalyticsUseCase = Depends(get_customer_analytics_use_case),
) -> CustomerAnalyticsListResponse:
    """Lifetime metrics per customer phone, with visit frequency."""
    result = await use_case.execute(query=q, sort_by=sort)
    return use_case.to_response(result)


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_customer(
    customer_id: str,
    store: ICustomerStore = Depends(get_cust_store),
) -> CustomerResponse:
    customer = await store.get(customer_id)
    if customer is None:
        raise CustomerNotFoundError(customer_id)
    return CustomerResponse.from_entity(customer)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_customer(
    customer_id: str,
    store: ICustomerStore = Depends(get_cust_store),
) -> Response:
    """Delete a customer record. Invoices keep their name and phone."""
    if await store.get(customer_id) is None:
        raise CustomerNotFoundError(customer_id)
    await store.delete(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
