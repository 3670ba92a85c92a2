"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/product.py
============================================================
Class: PostgresProductRepository

Responsibilities:
- Implementar el Product Store en PostgreSQL (SQL crudo, parametrizado).
- Listados filtrados (search / sort / activos vs eliminados) + conteo.
- Transiciones de estado como UPDATE condicional (compare-and-swap):
  WHERE id = %s AND is_deleted = <esperado>; sin fila -> None.
- updated_at siempre avanza: GREATEST(clock_timestamp(), updated_at + 1µs).

Collaborators:
- domain.entities.Product, ProductFilter
- crosscutting.exceptions.DatabaseError (vía PostgresRepositoryBase)
- Tabla: products

Constraints / Notes:
- Sin lógica de negocio aquí: la validación vive en los casos de uso.
- Columnas de ORDER BY y SET salen de whitelists, nunca del input.
============================================================
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import (
    UPDATABLE_FIELDS,
    Product,
    ProductFilter,
    ProductSortField,
    SortOrder,
)
from .connection import PostgresRepositoryBase

_PRODUCT_COLUMNS = (
    "id, name, price, description, image_url, is_deleted, "
    "created_by, created_at, updated_at"
)

_SORT_COLUMNS: dict[ProductSortField, str] = {
    ProductSortField.NAME: "lower(name)",
    ProductSortField.PRICE: "price",
    ProductSortField.CREATED_AT: "created_at",
}

# R: updated_at estrictamente creciente aun con dos writes en el mismo tick.
_BUMP_UPDATED_AT = (
    "updated_at = GREATEST(clock_timestamp(), updated_at + interval '1 microsecond')"
)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresProductRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del Product Store."""

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_product(row: tuple) -> Product:
        (
            product_id,
            name,
            price,
            description,
            image_url,
            is_deleted,
            created_by,
            created_at,
            updated_at,
        ) = row
        return Product(
            id=product_id,
            name=name,
            price=price,
            description=description,
            image_url=image_url,
            is_deleted=is_deleted,
            created_by=created_by,
            created_at=created_at,
            updated_at=updated_at,
        )

    @staticmethod
    def _where(product_filter: ProductFilter) -> tuple[str, list[object]]:
        conditions = ["is_deleted = %s"]
        params: list[object] = [product_filter.deleted_only]

        term = product_filter.search_term
        if term:
            pattern = f"%{_escape_like(term)}%"
            conditions.append(
                "(name ILIKE %s ESCAPE '\\' OR description ILIKE %s ESCAPE '\\')"
            )
            params.extend([pattern, pattern])

        return "WHERE " + " AND ".join(conditions), params

    # =========================================================
    # Public API
    # =========================================================
    def create_product(self, product: Product) -> Product:
        row = self._fetchone(
            query=f"""
                INSERT INTO products
                    (id, name, price, description, image_url, is_deleted, created_by)
                VALUES (%s, %s, %s, %s, %s, FALSE, %s)
                RETURNING {_PRODUCT_COLUMNS}
            """,
            params=(
                product.id,
                product.name,
                product.price,
                product.description,
                product.image_url,
                product.created_by,
            ),
            context_msg="PostgresProductRepository: create_product failed",
            extra={"product_id": str(product.id)},
        )
        if row is None:
            # INSERT ... RETURNING siempre devuelve fila; explícito por contrato.
            raise DatabaseError("PostgresProductRepository: create_product returned no row")
        return self._row_to_product(row)

    def get_product(self, product_id: UUID) -> Optional[Product]:
        row = self._fetchone(
            query=f"SELECT {_PRODUCT_COLUMNS} FROM products WHERE id = %s",
            params=(product_id,),
            context_msg="PostgresProductRepository: get_product failed",
            extra={"product_id": str(product_id)},
        )
        return self._row_to_product(row) if row else None

    def list_products(
        self, product_filter: ProductFilter, *, limit: int, offset: int
    ) -> list[Product]:
        where_sql, params = self._where(product_filter)
        column = _SORT_COLUMNS[product_filter.sort_by]
        direction = "ASC" if product_filter.sort_order == SortOrder.ASC else "DESC"

        rows = self._fetchall(
            query=f"""
                SELECT {_PRODUCT_COLUMNS}
                FROM products
                {where_sql}
                ORDER BY {column} {direction}, id ASC
                LIMIT %s OFFSET %s
            """,
            params=[*params, limit, offset],
            context_msg="PostgresProductRepository: list_products failed",
            extra={
                "sort_by": product_filter.sort_by.value,
                "deleted_only": product_filter.deleted_only,
                "limit": limit,
                "offset": offset,
            },
        )
        return [self._row_to_product(r) for r in rows]

    def count_products(self, product_filter: ProductFilter) -> int:
        where_sql, params = self._where(product_filter)
        row = self._fetchone(
            query=f"SELECT COUNT(*) FROM products {where_sql}",
            params=params,
            context_msg="PostgresProductRepository: count_products failed",
            extra={"deleted_only": product_filter.deleted_only},
        )
        return int(row[0]) if row else 0

    def update_product(
        self, product_id: UUID, changes: Mapping[str, Any]
    ) -> Optional[Product]:
        # R: solo columnas editables; el orden lo fija UPDATABLE_FIELDS.
        fields = [f for f in UPDATABLE_FIELDS if f in changes]
        if not fields:
            return None

        set_sql = ", ".join([*(f"{f} = %s" for f in fields), _BUMP_UPDATED_AT])
        row = self._fetchone(
            query=f"""
                UPDATE products
                SET {set_sql}
                WHERE id = %s AND is_deleted = FALSE
                RETURNING {_PRODUCT_COLUMNS}
            """,
            params=[*(changes[f] for f in fields), product_id],
            context_msg="PostgresProductRepository: update_product failed",
            extra={"product_id": str(product_id), "fields": fields},
        )
        return self._row_to_product(row) if row else None

    def set_deleted(self, product_id: UUID, *, is_deleted: bool) -> Optional[Product]:
        row = self._fetchone(
            query=f"""
                UPDATE products
                SET is_deleted = %s, {_BUMP_UPDATED_AT}
                WHERE id = %s AND is_deleted = %s
                RETURNING {_PRODUCT_COLUMNS}
            """,
            params=(is_deleted, product_id, not is_deleted),
            context_msg="PostgresProductRepository: set_deleted failed",
            extra={"product_id": str(product_id), "is_deleted": is_deleted},
        )
        return self._row_to_product(row) if row else None
