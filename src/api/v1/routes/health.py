"""
API Routes: Health Check
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.v1.schemas import HealthResponse
from api.v1.dependencies import get_storage, get_optional_store
from application.ports.storage import IStorage
from application.ports.transaction_store import ITransactionStore


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: Optional[ITransactionStore] = Depends(get_optional_store),
    storage: IStorage = Depends(get_storage)
):
    """Health check endpoint"""

    # Check storage type
    storage_type = "s3" if hasattr(storage, 's3_client') else "local"

    # Check database health
    if store is None:
        database_status = "unavailable"
    else:
        try:
            healthy = await store.health_check()
            database_status = "connected" if healthy else "unreachable"
        except Exception as e:
            database_status = f"error: {str(e)}"

    return HealthResponse(
        status="healthy" if database_status == "connected" else "degraded",
        service="receipt-statement-extractor",
        version="1.0.0",
        storage_type=storage_type,
        database_status=database_status
    )
