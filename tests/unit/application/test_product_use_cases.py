"""
Name: Product Lifecycle Use Case Tests

Responsibilities:
  - Validate create/update/delete/restore transitions and their guards
  - Ensure every successful mutation appends exactly one audit entry
  - Ensure rejected mutations perform zero writes
  - Ensure an audit failure rolls back the paired product write
"""

import logging
from decimal import Decimal
from uuid import uuid4

import pytest

from app.application.usecases import (
    CreateProductInput,
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ProductErrorCode,
    RestoreProductUseCase,
    UpdateProductUseCase,
)
from app.crosscutting.exceptions import DatabaseError
from app.domain.audit import AuditAction
from app.domain.product_policy import ProductActor
from app.identity.users import UserRole
from app.infrastructure.repositories import (
    InMemoryAuditLogRepository,
    InMemoryCatalogUnitOfWork,
    InMemoryProductRepository,
)

pytestmark = pytest.mark.unit


class _FailingAuditLogRepository(InMemoryAuditLogRepository):
    def record(self, entry):
        raise DatabaseError("audit store unavailable")


@pytest.fixture
def products():
    return InMemoryProductRepository()


@pytest.fixture
def audit_logs():
    return InMemoryAuditLogRepository()


@pytest.fixture
def uow(products, audit_logs):
    return InMemoryCatalogUnitOfWork(products=products, audit_logs=audit_logs)


@pytest.fixture
def admin():
    return ProductActor(user_id=uuid4(), email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def viewer():
    return ProductActor(user_id=uuid4(), email="user@example.com", role=UserRole.USER)


def _create(uow, admin, name="Widget", price="9.99", **extra):
    result = CreateProductUseCase(uow).execute(
        CreateProductInput(name=name, price=price, **extra), admin
    )
    assert result.error is None
    return result.product


def _actions(audit_logs):
    return [e.action for e in audit_logs.list_entries(limit=100, offset=0)]


# =============================================================================
# Create
# =============================================================================


class TestCreateProduct:
    def test_creates_active_product_with_one_audit_entry(self, uow, admin, audit_logs):
        result = CreateProductUseCase(uow).execute(
            CreateProductInput(name="  Widget  ", price=9.99, description="Blue"),
            admin,
        )

        assert result.error is None
        assert result.product.name == "Widget"
        assert result.product.price == Decimal("9.99")
        assert result.product.is_deleted is False
        assert result.product.created_by == admin.user_id
        assert result.audit_entry.action == AuditAction.CREATE
        assert "Widget" in result.audit_entry.details
        assert _actions(audit_logs) == [AuditAction.CREATE]

    @pytest.mark.parametrize(
        "name,price",
        [(None, "1.00"), ("", "1.00"), ("   ", "1.00"), ("Widget", None)],
    )
    def test_missing_name_or_price_is_invalid_input(
        self, uow, admin, products, audit_logs, name, price
    ):
        result = CreateProductUseCase(uow).execute(
            CreateProductInput(name=name, price=price), admin
        )

        assert result.error.code == ProductErrorCode.INVALID_INPUT
        assert result.error.message == "Name and price are required"
        assert products.snapshot() == {}
        assert audit_logs.count_entries() == 0

    @pytest.mark.parametrize("price", [0, -5, "-0.01", "NaN", "Infinity", True])
    def test_non_positive_or_non_finite_price_is_rejected(
        self, uow, admin, audit_logs, price
    ):
        result = CreateProductUseCase(uow).execute(
            CreateProductInput(name="Widget", price=price), admin
        )

        assert result.error.code == ProductErrorCode.INVALID_INPUT
        assert result.error.message == "Price must be greater than 0"
        assert audit_logs.count_entries() == 0

    @pytest.mark.parametrize("price", ["10000000000", 1e20, "1e40"])
    def test_price_beyond_column_precision_has_its_own_message(
        self, uow, admin, audit_logs, price
    ):
        result = CreateProductUseCase(uow).execute(
            CreateProductInput(name="Widget", price=price), admin
        )

        assert result.error.code == ProductErrorCode.INVALID_INPUT
        assert result.error.message == "Price must not exceed 9999999999.99"
        assert audit_logs.count_entries() == 0

    def test_name_longer_than_100_chars_is_rejected(self, uow, admin):
        result = CreateProductUseCase(uow).execute(
            CreateProductInput(name="x" * 101, price="1.00"), admin
        )

        assert result.error.code == ProductErrorCode.INVALID_INPUT

    def test_non_admin_is_forbidden(self, uow, viewer, audit_logs):
        result = CreateProductUseCase(uow).execute(
            CreateProductInput(name="Widget", price="1.00"), viewer
        )

        assert result.error.code == ProductErrorCode.FORBIDDEN
        assert audit_logs.count_entries() == 0

    def test_audit_failure_rolls_back_insert(self, products, admin):
        uow = InMemoryCatalogUnitOfWork(
            products=products, audit_logs=_FailingAuditLogRepository()
        )

        with pytest.raises(DatabaseError):
            CreateProductUseCase(uow).execute(
                CreateProductInput(name="Widget", price="1.00"), admin
            )

        assert products.snapshot() == {}


# =============================================================================
# Update
# =============================================================================


class TestUpdateProduct:
    def test_only_supplied_fields_change(self, uow, admin, products, audit_logs):
        created = _create(uow, admin, description="Original")

        result = UpdateProductUseCase(uow).execute(
            created.id, {"price": "12.50"}, admin
        )

        assert result.error is None
        assert result.product.price == Decimal("12.50")
        assert result.product.name == "Widget"
        assert result.product.description == "Original"
        assert result.product.created_by == created.created_by
        assert result.product.updated_at > created.updated_at
        assert result.audit_entry.action == AuditAction.UPDATE
        assert result.audit_entry.details == "Product updated: price"
        assert _actions(audit_logs) == [AuditAction.UPDATE, AuditAction.CREATE]

    def test_name_change_is_summarized_in_details(self, uow, admin):
        created = _create(uow, admin)

        result = UpdateProductUseCase(uow).execute(
            created.id, {"name": "Gadget", "price": "1.00"}, admin
        )

        assert result.audit_entry.details == "Product updated: name -> Gadget, price"
        assert result.audit_entry.product_name == "Gadget"

    def test_unknown_product_is_not_found(self, uow, admin):
        result = UpdateProductUseCase(uow).execute(uuid4(), {"name": "X"}, admin)

        assert result.error.code == ProductErrorCode.NOT_FOUND

    def test_deleted_product_is_invalid_state(self, uow, admin, audit_logs):
        created = _create(uow, admin)
        DeleteProductUseCase(uow).execute(created.id, admin)

        result = UpdateProductUseCase(uow).execute(created.id, {"name": "X"}, admin)

        assert result.error.code == ProductErrorCode.INVALID_STATE
        assert result.error.message == "Cannot update deleted product"
        assert audit_logs.count_entries() == 2

    @pytest.mark.parametrize("price", [-5, 0, None, "abc"])
    def test_invalid_price_changes_nothing(self, uow, admin, products, audit_logs, price):
        created = _create(uow, admin)
        before = products.get_product(created.id)

        result = UpdateProductUseCase(uow).execute(
            created.id, {"name": "Renamed", "price": price}, admin
        )

        assert result.error.code == ProductErrorCode.INVALID_PRICE
        assert products.get_product(created.id) == before
        assert audit_logs.count_entries() == 1

    def test_too_large_price_is_invalid_price(self, uow, admin, products, audit_logs):
        created = _create(uow, admin)

        result = UpdateProductUseCase(uow).execute(created.id, {"price": 1e20}, admin)

        assert result.error.code == ProductErrorCode.INVALID_PRICE
        assert result.error.message == "Price must not exceed 9999999999.99"
        assert products.get_product(created.id).price == Decimal("9.99")
        assert audit_logs.count_entries() == 1

    def test_no_recognized_fields(self, uow, admin, audit_logs):
        created = _create(uow, admin)

        result = UpdateProductUseCase(uow).execute(
            created.id, {"is_deleted": True, "created_by": str(uuid4())}, admin
        )

        assert result.error.code == ProductErrorCode.NO_FIELDS_TO_UPDATE
        assert audit_logs.count_entries() == 1

    def test_explicit_null_clears_optional_field(self, uow, admin):
        created = _create(uow, admin, description="Something")

        result = UpdateProductUseCase(uow).execute(
            created.id, {"description": None}, admin
        )

        assert result.error is None
        assert result.product.description is None

    def test_non_admin_is_forbidden(self, uow, admin, viewer):
        created = _create(uow, admin)

        result = UpdateProductUseCase(uow).execute(created.id, {"name": "X"}, viewer)

        assert result.error.code == ProductErrorCode.FORBIDDEN


# =============================================================================
# Delete / Restore
# =============================================================================


class TestDeleteAndRestore:
    def test_delete_marks_deleted_and_audits_once(self, uow, admin, audit_logs):
        created = _create(uow, admin)

        result = DeleteProductUseCase(uow).execute(created.id, admin)

        assert result.error is None
        assert result.product.is_deleted is True
        assert result.product.updated_at > created.updated_at
        assert result.audit_entry.action == AuditAction.DELETE
        assert _actions(audit_logs).count(AuditAction.DELETE) == 1

    def test_second_delete_is_already_deleted_with_zero_writes(
        self, uow, admin, products, audit_logs
    ):
        created = _create(uow, admin)
        DeleteProductUseCase(uow).execute(created.id, admin)
        before = products.get_product(created.id)

        result = DeleteProductUseCase(uow).execute(created.id, admin)

        assert result.error.code == ProductErrorCode.ALREADY_DELETED
        assert result.error.message == "Product is already deleted"
        assert products.get_product(created.id) == before
        assert _actions(audit_logs).count(AuditAction.DELETE) == 1

    def test_delete_unknown_is_not_found(self, uow, admin):
        result = DeleteProductUseCase(uow).execute(uuid4(), admin)

        assert result.error.code == ProductErrorCode.NOT_FOUND

    def test_restore_active_is_not_deleted_with_zero_writes(
        self, uow, admin, audit_logs
    ):
        created = _create(uow, admin)

        result = RestoreProductUseCase(uow).execute(created.id, admin)

        assert result.error.code == ProductErrorCode.NOT_DELETED
        assert audit_logs.count_entries() == 1

    def test_restore_deleted_product(self, uow, admin, audit_logs):
        created = _create(uow, admin)
        deleted = DeleteProductUseCase(uow).execute(created.id, admin).product

        result = RestoreProductUseCase(uow).execute(created.id, admin)

        assert result.error is None
        assert result.product.is_deleted is False
        assert result.product.updated_at > deleted.updated_at
        assert _actions(audit_logs) == [
            AuditAction.RESTORE,
            AuditAction.DELETE,
            AuditAction.CREATE,
        ]

    def test_restore_unknown_is_not_found(self, uow, admin):
        result = RestoreProductUseCase(uow).execute(uuid4(), admin)

        assert result.error.code == ProductErrorCode.NOT_FOUND

    def test_update_after_restore_is_allowed(self, uow, admin):
        created = _create(uow, admin)
        DeleteProductUseCase(uow).execute(created.id, admin)
        RestoreProductUseCase(uow).execute(created.id, admin)

        result = UpdateProductUseCase(uow).execute(created.id, {"name": "Back"}, admin)

        assert result.error is None
        assert result.product.name == "Back"

    def test_audit_failure_rolls_back_delete(self, products, audit_logs, admin):
        uow = InMemoryCatalogUnitOfWork(products=products, audit_logs=audit_logs)
        created = _create(uow, admin)
        failing = InMemoryCatalogUnitOfWork(
            products=products, audit_logs=_FailingAuditLogRepository()
        )

        with pytest.raises(DatabaseError):
            DeleteProductUseCase(failing).execute(created.id, admin)

        assert products.get_product(created.id).is_deleted is False

    def test_delete_and_restore_forbidden_for_non_admin(self, uow, admin, viewer):
        created = _create(uow, admin)

        assert (
            DeleteProductUseCase(uow).execute(created.id, viewer).error.code
            == ProductErrorCode.FORBIDDEN
        )
        assert (
            RestoreProductUseCase(uow).execute(created.id, viewer).error.code
            == ProductErrorCode.FORBIDDEN
        )


# =============================================================================
# Get
# =============================================================================


class TestGetProduct:
    def test_deleted_product_hidden_from_non_admin(self, uow, admin, products):
        created = _create(uow, admin)
        DeleteProductUseCase(uow).execute(created.id, admin)

        hidden = GetProductUseCase(products).execute(created.id, viewer_is_admin=False)
        visible = GetProductUseCase(products).execute(created.id, viewer_is_admin=True)

        assert hidden.error.code == ProductErrorCode.NOT_FOUND
        assert hidden.error.message == "Product not found"
        assert visible.product.is_deleted is True

    def test_unknown_product_is_not_found(self, products):
        result = GetProductUseCase(products).execute(uuid4(), viewer_is_admin=True)

        assert result.error.code == ProductErrorCode.NOT_FOUND


# =============================================================================
# Logging
# =============================================================================


class TestTransitionLogging:
    def test_each_transition_logs_at_info_with_its_audit_id(self, uow, admin, caplog):
        caplog.set_level(logging.INFO, logger="catalog-api")

        created = _create(uow, admin)
        UpdateProductUseCase(uow).execute(created.id, {"price": "5.00"}, admin)
        DeleteProductUseCase(uow).execute(created.id, admin)
        RestoreProductUseCase(uow).execute(created.id, admin)

        records = [
            r
            for r in caplog.records
            if r.name == "catalog-api" and r.levelno == logging.INFO
        ]
        messages = [r.getMessage() for r in records]
        assert messages == [
            "Product created",
            "Product updated",
            "Product soft deleted",
            "Product restored",
        ]
        assert all(r.product_id == str(created.id) for r in records)
        assert [r.audit_id for r in records] == [1, 2, 3, 4]

    def test_rejected_transition_is_not_logged_as_done(self, uow, admin, caplog):
        created = _create(uow, admin)
        caplog.set_level(logging.INFO, logger="catalog-api")

        DeleteProductUseCase(uow).execute(created.id, admin)
        DeleteProductUseCase(uow).execute(created.id, admin)

        deleted_lines = [
            r for r in caplog.records if r.getMessage() == "Product soft deleted"
        ]
        assert len(deleted_lines) == 1
