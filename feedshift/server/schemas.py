from typing import Any

from pydantic import BaseModel, Field, model_validator


class ProductFlagsPayload(BaseModel):
    enable_search: bool = Field(default=True)
    enable_checkout: bool = Field(default=False)

    @model_validator(mode="before")
    @classmethod
    def _compat_flag_names(cls, data: Any) -> Any:
        """Accept ``search_enabled``/``checkout_enabled`` as aliases."""
        if isinstance(data, dict):
            if "search_enabled" in data and "enable_search" not in data:
                data["enable_search"] = data.pop("search_enabled")
            if "checkout_enabled" in data and "enable_checkout" not in data:
                data["enable_checkout"] = data.pop("checkout_enabled")
        return data


class ResolveRequest(BaseModel):
    item: dict[str, Any] = Field(
        ...,
        description="Raw catalog item as delivered by the source store.",
    )
    shop: dict[str, Any] | None = Field(default=None, description="Shop-level settings and field mappings.")
    overrides: dict[str, Any] = Field(
        default_factory=dict,
        examples=[{"color": {"type": "static", "value": "Red"}, "material": {"type": "mapping", "value": None}}],
    )
    flags: ProductFlagsPayload = Field(default_factory=ProductFlagsPayload)
    strict: bool | None = Field(default=None)


class ValidateRequest(BaseModel):
    entry: dict[str, Any] = Field(..., description="Resolved feed entry keyed by feed attribute.")
    item: dict[str, Any] | None = Field(
        default=None,
        description="Optional raw catalog item, used to decide variant-only rules.",
    )
    flags: ProductFlagsPayload = Field(default_factory=ProductFlagsPayload)
    strict: bool | None = Field(default=None)
    skip_fields: list[str] = Field(default_factory=list)
    validate_optional: bool = Field(default=True)


class LiteralValidationRequest(BaseModel):
    attribute: str = Field(..., examples=["price"])
    value: str | None = Field(default=None, examples=["79.99 USD"])


__all__ = [
    "LiteralValidationRequest",
    "ProductFlagsPayload",
    "ResolveRequest",
    "ValidateRequest",
]
