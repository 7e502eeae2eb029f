# storefront/backend/api/v1/endpoints/settings.py
"""
Site settings endpoints. Reads are public, writes need an admin token.
"""

from fastapi import APIRouter, Depends

from storefront.backend.api import deps
from storefront.schemas.settings_schema import FlashSaleSettings, HomeSettings

router = APIRouter()


@router.get("/home")
async def get_home_settings(services: deps.BackendServices = Depends(deps.get_services)):
    return services.site.home.to_wire()


@router.put("/home", dependencies=[Depends(deps.require_admin)])
async def update_home_settings(home: HomeSettings, services: deps.BackendServices = Depends(deps.get_services)):
    return services.site.update_home(home).to_wire()


@router.get("/flash-sale")
async def get_flash_sale_settings(services: deps.BackendServices = Depends(deps.get_services)):
    return services.site.flash_sale.to_wire()


@router.put("/flash-sale", dependencies=[Depends(deps.require_admin)])
async def update_flash_sale_settings(
    flash_sale: FlashSaleSettings, services: deps.BackendServices = Depends(deps.get_services)
):
    return services.site.update_flash_sale(flash_sale).to_wire()
