"""Alt text generation and apply schemas."""

from pydantic import BaseModel, Field, field_validator


class GenerateItemRequest(BaseModel):
    """An image to generate alt text for."""

    product_id: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1)
    image_id: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    vendor: str | None = None
    product_type: str | None = None
    tags: list[str] | None = None
    description: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        """Accept tags as a comma separated string as well as a list."""
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return value


class GenerateRequest(BaseModel):
    """Bulk generation request."""

    items: list[GenerateItemRequest] = Field(default_factory=list)


class GenerateItemError(BaseModel):
    """An image that did not get alt text."""

    product_id: str
    image_id: str
    error: str


class GenerateResponse(BaseModel):
    """Result of bulk generation."""

    success: bool = True
    success_count: int
    message: str
    errors: list[GenerateItemError] = Field(default_factory=list)


class ApplyItemRequest(BaseModel):
    """An image whose stored alt text should be applied."""

    product_id: str = Field(..., min_length=1)
    image_id: str = Field(..., min_length=1)


class ApplyRequest(BaseModel):
    """Bulk apply request."""

    items: list[ApplyItemRequest] = Field(default_factory=list)


class ApplyResponse(BaseModel):
    """Result of bulk apply."""

    success: bool = True
    applied_count: int
    message: str
    errors: list[str] = Field(default_factory=list)


class AltTextEditRequest(BaseModel):
    """Hand-edited alt text for one image."""

    product_id: str = Field(..., min_length=1)
    image_id: str = Field(..., min_length=1)
    alt_text: str = Field(..., min_length=1, max_length=1000)


class AltTextEditResponse(BaseModel):
    """Acknowledgement of a local edit."""

    success: bool = True
    updated: bool
