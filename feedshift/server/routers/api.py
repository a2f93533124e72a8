"""JSON API routes: /health, /api/v1/*."""

from fastapi import APIRouter, HTTPException, Query

from ...config import get_settings
from ...core.api import (
    check_literal_overrides,
    describe_field,
    list_categories,
    list_fields,
    process_product,
    validate_feed_entry,
    validate_literal,
)
from ...core.catalog import ProductContext, ProductFlags
from ...core.errors import InvalidOverrideError, UnknownFieldError
from ...core.spec import get_field_spec
from ..schemas import LiteralValidationRequest, ProductFlagsPayload, ResolveRequest, ValidateRequest

settings = get_settings()
router = APIRouter()


def _flags(payload: ProductFlagsPayload) -> ProductFlags:
    return ProductFlags(search_enabled=payload.enable_search, checkout_enabled=payload.enable_checkout)


@router.get("/health")
def health() -> dict:
    return {"status": "ok", "app": settings.app_name}


@router.get("/api/v1/fields")
def fields(category: str | None = Query(None, description="Restrict to one field category")) -> dict:
    try:
        specs = list_fields(category)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"Unknown field category: {category}") from exc
    return {"fields": specs, "categories": list_categories()}


@router.get("/api/v1/fields/{attribute}")
def field_detail(attribute: str) -> dict:
    try:
        spec = get_field_spec(attribute)
    except UnknownFieldError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return describe_field(spec)


@router.post("/api/v1/resolve")
def resolve(payload: ResolveRequest) -> dict:
    try:
        if settings.check_literal_overrides:
            rejected = check_literal_overrides(payload.overrides)
            if rejected:
                raise HTTPException(status_code=422, detail={"overrides": rejected})
        result = process_product(
            payload.item,
            shop=payload.shop,
            overrides=payload.overrides,
            flags=_flags(payload.flags),
            strict=payload.strict,
        )
    except (InvalidOverrideError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return result.to_dict()


@router.post("/api/v1/validate")
def validate(payload: ValidateRequest) -> dict:
    flags = _flags(payload.flags)
    if payload.item is not None:
        context = ProductContext.from_item(payload.item, flags)
    else:
        context = ProductContext(flags=flags)
    outcome = validate_feed_entry(
        payload.entry,
        context=context,
        strict=payload.strict,
        skip_fields=payload.skip_fields,
        validate_optional=payload.validate_optional,
    )
    return {**outcome.to_dict(), "grouped": outcome.to_snapshot()}


@router.post("/api/v1/validate/literal")
def validate_literal_value(payload: LiteralValidationRequest) -> dict:
    try:
        check = validate_literal(payload.attribute, payload.value)
    except UnknownFieldError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return check.to_dict()
