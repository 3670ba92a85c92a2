"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_catalog_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema del catálogo desde cero (migración fundacional).
  - Definir tablas users / products / audit_logs con sus constraints.
  - Crear índices para listados (orden + filtro is_deleted) y auditoría.

Collaborators:
  - PostgreSQL 14+
  - Alembic (framework de migraciones)
  - infrastructure/repositories/postgres/* (usan este esquema como contrato)

Policy:
  - Esta es una migración BASELINE. Downgrade solo para entornos locales.
  - Convención de nombres (constraints / indexes):
      pk_<tabla>                         - Primary keys
      uq_<tabla>_<col>                   - Unique constraints
      ix_<tabla>_<col>                   - Indexes
      fk_<tabla>_<col>__<ref_tabla>      - Foreign keys
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_catalog_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """
    Orden por dependencias de FK:
      1) Identity (users)
      2) Products
      3) Audit logs
    """

    # =========================================================
    # 1) USERS
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'user'"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.CheckConstraint("role IN ('admin', 'user')", name="ck_users_role"),
    )
    # Unicidad case-insensitive: el lookup siempre es por lower(email).
    op.execute("CREATE UNIQUE INDEX uq_users_email_lower ON users (lower(email))")
    op.create_index("ix_users_created_at", "users", ["created_at"])

    # =========================================================
    # 2) PRODUCTS
    # =========================================================
    op.create_table(
        "products",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(2048), nullable=True),
        sa.Column(
            "is_deleted",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("created_by", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_products"),
        sa.ForeignKeyConstraint(
            ["created_by"],
            ["users.id"],
            name="fk_products_created_by__users",
        ),
        sa.CheckConstraint("price > 0", name="ck_products_price_positive"),
        sa.CheckConstraint(
            "length(btrim(name)) > 0", name="ck_products_name_not_blank"
        ),
    )
    # Listados: siempre filtran por is_deleted y ordenan por una columna.
    op.create_index(
        "ix_products_is_deleted_created_at", "products", ["is_deleted", "created_at"]
    )
    op.create_index("ix_products_is_deleted_name", "products", ["is_deleted", "name"])
    op.create_index(
        "ix_products_is_deleted_price", "products", ["is_deleted", "price"]
    )
    op.create_index("ix_products_created_by", "products", ["created_by"])

    # =========================================================
    # 3) AUDIT LOGS (append-only)
    # =========================================================
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        # user_email desnormalizado: sobrevive al borrado del usuario.
        sa.Column("user_email", sa.String(320), nullable=False),
        sa.Column("product_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("product_name", sa.String(100), nullable=True),
        sa.Column("details", sa.Text, nullable=True),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.text("clock_timestamp()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_audit_logs"),
        sa.ForeignKeyConstraint(
            ["product_id"],
            ["products.id"],
            name="fk_audit_logs_product_id__products",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "action IN ('create', 'update', 'delete', 'restore')",
            name="ck_audit_logs_action",
        ),
    )
    # Orden del listado: timestamp DESC, id DESC.
    op.execute(
        "CREATE INDEX ix_audit_logs_timestamp_id ON audit_logs (timestamp DESC, id DESC)"
    )
    op.create_index("ix_audit_logs_product_id", "audit_logs", ["product_id"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("products")
    op.drop_table("users")
