"""Backup, restore and reset endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Response, status

from stockbook.api.dependencies import get_data_transfer_use_case
from stockbook.application.dto.responses import ImportDataResponse
from stockbook.application.use_cases import DataSnapshot, DataTransferUseCase

router = APIRouter(prefix="/api/data", tags=["data"])


@router.get("/export")
async def export_data(
    use_case: DataTransferUseCase = Depends(get_data_transfer_use_case),
) -> dict[str, Any]:
    """Full snapshot in the camelCase JSON shape."""
    snapshot = await use_case.export()
    return snapshot.to_json_dict()


@router.post("/import", response_model=ImportDataResponse)
async def import_data(
    snapshot: DataSnapshot,
    use_case: DataTransferUseCase = Depends(get_data_transfer_use_case),
) -> ImportDataResponse:
    """Replace all data with an exported snapshot."""
    result = await use_case.import_snapshot(snapshot)
    return use_case.to_response(result)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def reset_data(
    use_case: DataTransferUseCase = Depends(get_data_transfer_use_case),
) -> Response:
    """Delete all products, invoices and customers; restore default categories."""
    await use_case.reset()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
