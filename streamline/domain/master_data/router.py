"""Master data router - Admin lookup endpoints for form dropdowns"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...shared.responses import success_response
from .service import MasterDataService

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin Master Data"],
    dependencies=[Depends(get_current_admin)],
)


def get_master_data_service(db: Session = Depends(get_db)) -> MasterDataService:
    """Dependency injection for MasterDataService"""
    return MasterDataService(db)


@router.get("/users/hosts")
async def get_hosts(service: MasterDataService = Depends(get_master_data_service)):
    """Get all hosts, alphabetical by display name"""
    return success_response(service.list_hosts())


@router.get("/products")
async def get_products(
    search: Optional[str] = Query(None, description="Case-insensitive match on SKU or name"),
    service: MasterDataService = Depends(get_master_data_service),
):
    """Get products with optional search"""
    return success_response(service.list_products(search))


@router.get("/vouchers")
async def get_vouchers(service: MasterDataService = Depends(get_master_data_service)):
    """Get all active vouchers"""
    return success_response(service.list_vouchers())
