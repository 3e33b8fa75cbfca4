"""Catalog query endpoint."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from lawnmower_api.models import InvalidFilterError, ProductFilters
from lawnmower_api.services import CatalogQueryError, CatalogService, ProductNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["products"])


def get_catalog_service(request: Request) -> CatalogService:
    """Catalog service created by the app factory."""
    return request.app.state.catalog_service


@router.get("/products", response_model=None)
def list_products(
    request: Request,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    Query the lawnmower catalog.

    Filters come from the query string (productId, keywords, category, brand,
    powerSource, driveType, cuttingWidthCm, hasRearRoller, minPrice, maxPrice,
    sortBy, order). Always answers with a JSON array on success; identifier
    lookups produce a single-element array.
    """
    try:
        filters = ProductFilters.from_query_params(request.query_params)
    except InvalidFilterError as e:
        logger.info(f"Rejected product query: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})

    try:
        products = catalog.query(filters)
    except ProductNotFoundError:
        return JSONResponse(status_code=404, content={"error": "Product not found"})
    except CatalogQueryError:
        logger.exception("Database query failed")
        return JSONResponse(status_code=500, content={"error": "Database query failed"})

    return [product.to_api_dict() for product in products]
