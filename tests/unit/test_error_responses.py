"""Unit tests for error_responses module and product error mapping."""

import pytest

from app.application.usecases import ProductError, ProductErrorCode
from app.crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    ErrorDetail,
    bad_request,
    conflict,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)
from app.interfaces.api.http.error_mapping import raise_product_error

pytestmark = pytest.mark.unit


class TestErrorFactories:
    """Test error factory functions."""

    def test_validation_error_is_400(self):
        exc = validation_error("Invalid input", [{"field": "name", "msg": "required"}])
        assert exc.status_code == 400
        assert exc.code == ErrorCode.VALIDATION_ERROR
        assert exc.errors == [{"field": "name", "msg": "required"}]

    def test_bad_request_keeps_code(self):
        exc = bad_request(ErrorCode.ALREADY_DELETED, "Product is already deleted")
        assert exc.status_code == 400
        assert exc.code == ErrorCode.ALREADY_DELETED

    def test_not_found(self):
        exc = not_found("Product not found")
        assert exc.status_code == 404
        assert exc.code == ErrorCode.NOT_FOUND
        assert exc.detail == "Product not found"

    def test_conflict_is_400(self):
        exc = conflict("User already exists")
        assert exc.status_code == 400
        assert exc.code == ErrorCode.CONFLICT

    def test_unauthorized(self):
        exc = unauthorized()
        assert exc.status_code == 401
        assert exc.code == ErrorCode.UNAUTHORIZED

    def test_forbidden(self):
        exc = forbidden("Admin only")
        assert exc.status_code == 403
        assert exc.code == ErrorCode.FORBIDDEN

    def test_internal_error(self):
        exc = internal_error()
        assert exc.status_code == 500
        assert exc.code == ErrorCode.INTERNAL_ERROR


class TestErrorDetail:
    def test_serializes_without_empty_fields(self):
        detail = ErrorDetail(
            title="Not Found", status=404, detail="Product not found", code=ErrorCode.NOT_FOUND
        )

        dumped = detail.model_dump(mode="json", exclude_none=True)

        assert dumped == {
            "type": "about:blank",
            "title": "Not Found",
            "status": 404,
            "detail": "Product not found",
            "code": "NOT_FOUND",
        }


class TestProductErrorMapping:
    @pytest.mark.parametrize(
        "code,status,http_code",
        [
            (ProductErrorCode.NOT_FOUND, 404, ErrorCode.NOT_FOUND),
            (ProductErrorCode.FORBIDDEN, 403, ErrorCode.FORBIDDEN),
            (ProductErrorCode.ALREADY_DELETED, 400, ErrorCode.ALREADY_DELETED),
            (ProductErrorCode.NOT_DELETED, 400, ErrorCode.NOT_DELETED),
            (ProductErrorCode.INVALID_STATE, 400, ErrorCode.INVALID_STATE),
            (ProductErrorCode.INVALID_INPUT, 400, ErrorCode.INVALID_INPUT),
            (ProductErrorCode.INVALID_PRICE, 400, ErrorCode.INVALID_PRICE),
            (ProductErrorCode.NO_FIELDS_TO_UPDATE, 400, ErrorCode.NO_FIELDS_TO_UPDATE),
        ],
    )
    def test_every_code_maps_to_a_status(self, code, status, http_code):
        with pytest.raises(AppHTTPException) as exc_info:
            raise_product_error(ProductError(code=code, message="msg"))

        assert exc_info.value.status_code == status
        assert exc_info.value.code == http_code
        assert exc_info.value.detail == "msg"
