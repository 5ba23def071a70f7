"""Product catalog endpoints."""

from fastapi import APIRouter, Depends, Response, status

from stockbook.api.dependencies import (
    get_adjust_stock_use_case,
    get_prod_store,
    get_product_analytics_use_case,
    get_record_sale_use_case,
)
from stockbook.application.dto.requests import (
    AdjustStockRequest,
    CreateProductRequest,
    RecordSaleRequest,
    UpdateProductRequest,
)
from stockbook.application.dto.responses import (
    ErrorResponse,
    ProductAnalyticsResponse,
    ProductListResponse,
    ProductResponse,
    SaleResponse,
    StockAdjustmentResponse,
    TransactionResponse,
)
from stockbook.application.use_cases import (
    AdjustStockUseCase,
    GetProductAnalyticsUseCase,
    RecordSaleUseCase,
)
from stockbook.core.entities import Product, StockClass
from stockbook.core.exceptions import ProductNotFoundError
from stockbook.core.interfaces import IProductStore
from stockbook.core.services import (
    filter_by_category,
    find_by_code,
    products_in_class,
    search_products,
    sort_products,
)
from stockbook.core.services.product_catalog import ProductSort

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    q: str | None = None,
    category: str | None = None,
    stock: StockClass | None = None,
    sort: ProductSort | None = None,
    store: IProductStore = Depends(get_prod_store),
) -> ProductListResponse:
    """List products with optional search, category, stock class and sort."""
    products = await store.get_all()
    if q:
        products = search_products(products, q)
    if category:
        products = filter_by_category(products, category)
    if stock:
        products = products_in_class(products, {stock})
    if sort:
        products = sort_products(products, sort)
    return ProductListResponse(
        products=[ProductResponse.from_entity(p) for p in products],
        total=len(products),
    )


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    request: CreateProductRequest,
    store: IProductStore = Depends(get_prod_store),
) -> ProductResponse:
    """Add a product to the catalog."""
    product = await store.save(Product(**request.model_dump()))
    return ProductResponse.from_entity(product)


@router.get(
    "/by-code/{code}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product_by_code(
    code: str,
    store: IProductStore = Depends(get_prod_store),
) -> ProductResponse:
    """Look up a product by SKU or barcode."""
    product = find_by_code(await store.get_all(), code)
    if product is None:
        raise ProductNotFoundError(code)
    return ProductResponse.from_entity(product)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: str,
    store: IProductStore = Depends(get_prod_store),
) -> ProductResponse:
    product = await store.get(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return ProductResponse.from_entity(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_product(
    product_id: str,
    request: UpdateProductRequest,
    store: IProductStore = Depends(get_prod_store),
) -> ProductResponse:
    """Update the fields present in the request body."""
    product = await store.get(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    updated = product.model_copy(update=request.model_dump(exclude_unset=True))
    # re-validate the merged record
    updated = Product.model_validate(updated.model_dump())
    return ProductResponse.from_entity(await store.save(updated))


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: str,
    store: IProductStore = Depends(get_prod_store),
) -> Response:
    """Delete a product. Its invoice history is kept."""
    if await store.get(product_id) is None:
        raise ProductNotFoundError(product_id)
    await store.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{product_id}/sales",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_sale(
    product_id: str,
    request: RecordSaleRequest,
    use_case: RecordSaleUseCase = Depends(get_record_sale_use_case),
) -> SaleResponse:
    """Record a sale without issuing an invoice."""
    result = await use_case.execute(
        product_id,
        request.quantity,
        selling_price=request.selling_price,
        cost_price=request.cost_price,
    )
    return use_case.to_response(result)


@router.post(
    "/{product_id}/stock",
    response_model=StockAdjustmentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def adjust_stock(
    product_id: str,
    request: AdjustStockRequest,
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> StockAdjustmentResponse:
    """Restock or remove units."""
    result = await use_case.execute(product_id, request)
    return use_case.to_response(result)


@router.get(
    "/{product_id}/analytics",
    response_model=ProductAnalyticsResponse,
    responses={404: {"model": ErrorResponse}},
)
async def product_analytics(
    product_id: str,
    use_case: GetProductAnalyticsUseCase = Depends(get_product_analytics_use_case),
) -> ProductAnalyticsResponse:
    """Stock class, margin and the invoice ledger of one product."""
    result = await use_case.execute(product_id)
    return use_case.to_response(result)


@router.get(
    "/{product_id}/transactions",
    response_model=list[TransactionResponse],
)
async def product_transactions(
    product_id: str,
    use_case: GetProductAnalyticsUseCase = Depends(get_product_analytics_use_case),
) -> list[TransactionResponse]:
    """Invoice ledger only. Available after the product is deleted."""
    history = await use_case.get_history(product_id)
    return use_case.history_response(history)
