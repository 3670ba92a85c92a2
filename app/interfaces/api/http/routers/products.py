"""
===============================================================================
TARJETA CRC — app/interfaces/api/http/routers/products.py
===============================================================================

Class/Module:
    Products Router

Responsibilities:
    - Exponer endpoints HTTP del catálogo (listar, ver, crear, editar,
      eliminar lógicamente, restaurar).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir ProductError -> RFC7807.
    - Enforce de auth/rol en el borde (capa HTTP).

Collaborators:
    - app.application.usecases (Create/Update/Delete/Restore/Get/List)
    - app.container (factories DI)
    - dependencies (current_user, current_admin, parse_product_id)
    - error_mapping.raise_product_error
    - schemas.products (DTOs Pydantic)

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
    - Error Mapping
===============================================================================
"""

from __future__ import annotations

from app.application.usecases import (
    CreateProductInput,
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsQuery,
    ListProductsUseCase,
    RestoreProductUseCase,
    UpdateProductUseCase,
)
from app.container import (
    get_create_product_use_case,
    get_delete_product_use_case,
    get_get_product_use_case,
    get_list_products_use_case,
    get_restore_product_use_case,
    get_update_product_use_case,
)
from app.crosscutting.pagination import PageRequest, Pagination
from app.domain.entities import ProductSortField, SortOrder
from app.identity.users import User
from fastapi import APIRouter, Depends, Query

from ..dependencies import (
    current_admin,
    current_user,
    parse_product_id,
    to_product_actor,
)
from ..error_mapping import raise_product_error
from ..schemas.products import (
    CreateProductReq,
    CreateProductRes,
    MessageRes,
    ProductRes,
    ProductsPageRes,
    UpdateProductReq,
)

router = APIRouter()


# =============================================================================
# Queries
# =============================================================================


@router.get("/products", response_model=ProductsPageRes, tags=["products"])
def list_products(
    page: int | None = Query(None, description="Página (1-indexed)"),
    limit: int | None = Query(None, description="Items por página (1..100)"),
    search: str | None = Query(None, max_length=200),
    sort_by: ProductSortField = Query(ProductSortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
    include_deleted: bool = Query(False, alias="includeDeleted"),
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
    user: User = Depends(current_user),
):
    """
    Lista productos paginados.

    includeDeleted=true (solo admin) devuelve SOLO productos eliminados.
    Para no-admins el flag se ignora.
    """
    result = use_case.execute(
        ListProductsQuery(
            page=page,
            limit=limit,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
            include_deleted=include_deleted,
        ),
        viewer_is_admin=user.is_admin,
    )
    if result.error is not None:
        raise_product_error(result.error)

    return ProductsPageRes(
        data=[ProductRes.from_product(p) for p in result.products],
        pagination=Pagination.build(
            PageRequest(page=result.page, limit=result.limit), result.total
        ),
    )


@router.get("/products/{product_id}", response_model=ProductRes, tags=["products"])
def get_product(
    product_id: str,
    use_case: GetProductUseCase = Depends(get_get_product_use_case),
    user: User = Depends(current_user),
):
    """Un producto eliminado solo es visible para admins (404 para el resto)."""
    result = use_case.execute(
        parse_product_id(product_id), viewer_is_admin=user.is_admin
    )
    if result.error is not None:
        raise_product_error(result.error)
    return ProductRes.from_product(result.product)


# =============================================================================
# Commands (admin)
# =============================================================================


@router.post(
    "/products",
    response_model=CreateProductRes,
    status_code=201,
    tags=["products"],
)
def create_product(
    req: CreateProductReq,
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
    admin: User = Depends(current_admin),
):
    result = use_case.execute(
        CreateProductInput(
            name=req.name,
            price=req.price,
            description=req.description,
            image_url=req.image_url,
        ),
        to_product_actor(admin),
    )
    if result.error is not None:
        raise_product_error(result.error)
    return CreateProductRes(id=result.product.id)


@router.put("/products/{product_id}", response_model=ProductRes, tags=["products"])
def update_product(
    product_id: str,
    req: UpdateProductReq,
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
    admin: User = Depends(current_admin),
):
    """Actualiza solo los campos presentes en el body."""
    result = use_case.execute(
        parse_product_id(product_id),
        req.model_dump(exclude_unset=True),
        to_product_actor(admin),
    )
    if result.error is not None:
        raise_product_error(result.error)
    return ProductRes.from_product(result.product)


@router.delete("/products/{product_id}", response_model=MessageRes, tags=["products"])
def delete_product(
    product_id: str,
    use_case: DeleteProductUseCase = Depends(get_delete_product_use_case),
    admin: User = Depends(current_admin),
):
    """Soft delete: is_deleted=True (no hay borrado físico)."""
    result = use_case.execute(parse_product_id(product_id), to_product_actor(admin))
    if result.error is not None:
        raise_product_error(result.error)
    return MessageRes(message="Product deleted successfully")


@router.patch(
    "/products/{product_id}/restore", response_model=MessageRes, tags=["products"]
)
def restore_product(
    product_id: str,
    use_case: RestoreProductUseCase = Depends(get_restore_product_use_case),
    admin: User = Depends(current_admin),
):
    result = use_case.execute(parse_product_id(product_id), to_product_actor(admin))
    if result.error is not None:
        raise_product_error(result.error)
    return MessageRes(message="Product restored successfully")
