"""
catalog_stack.api.routers.products

Product CRUD endpoints (relational store).

Responsibilities:
- Bind path/body parameters and delegate to `ProductService`.
- Map results to HTTP once via `api.problems`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from catalog_stack.api.deps import product_service
from catalog_stack.api.problems import created, no_content, to_response
from catalog_stack.schemas import Product
from catalog_stack.services.products import ProductService

router = APIRouter(prefix="/produtos", tags=["produtos"])


@router.get("", response_model=list[Product])
async def list_products(svc: ProductService = Depends(product_service)) -> Response:
    return to_response(await svc.list_products())


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: int,
    svc: ProductService = Depends(product_service),
) -> Response:
    return to_response(await svc.get_product(product_id))


@router.post("", response_model=Product, status_code=201)
async def create_product(
    body: Product,
    svc: ProductService = Depends(product_service),
) -> Response:
    result = await svc.create_product(body)
    return created(result, location=f"/produtos/{result.value.id}")


@router.put("/{product_id}", status_code=204)
async def update_product(
    product_id: int,
    body: Product,
    svc: ProductService = Depends(product_service),
) -> Response:
    return no_content(await svc.update_product(product_id, body))


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: int,
    svc: ProductService = Depends(product_service),
) -> Response:
    return no_content(await svc.delete_product(product_id))


# --- Module Notes -----------------------------------------------------------
# Paths keep the Portuguese resource names (`produtos`) as part of the public contract.
