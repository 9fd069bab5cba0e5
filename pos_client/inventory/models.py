"""
Catalog schemas: categories, products and their variants.

Response models are lenient (server data is trusted, missing optional
fields get defaults). Request models carry the form rules that are checked
before anything is sent.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import AliasChoices, Field, field_validator, model_validator

from pos_client.core.models import WireModel

DEFAULT_VARIANT_ID = "default"

MAIN_LEVEL = 1
SUB_LEVEL = 2
SUB_SUB_LEVEL = 3

MAX_PRODUCT_IMAGES = 3


class Category(WireModel):
    """
    Node of the category tree.

    Level 1 categories are main categories and have no parent; level 2 and 3
    categories point at a parent one level shallower.
    """

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    level: int = MAIN_LEVEL
    parent_id: Optional[str] = None
    sub_categories: List["Category"] = Field(default_factory=list)

    @field_validator("sub_categories", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


Category.model_rebuild()


class CreateCategoryRequest(WireModel):
    name: str = Field(min_length=1)
    level: int = Field(MAIN_LEVEL, ge=MAIN_LEVEL, le=SUB_SUB_LEVEL)
    parent_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_parent(self):
        if self.level == MAIN_LEVEL and self.parent_id:
            raise ValueError("Main categories cannot have a parent")
        if self.level > MAIN_LEVEL and not self.parent_id:
            raise ValueError(f"Level {self.level} categories require a parent category")
        return self


class UpdateCategoryRequest(WireModel):
    name: Optional[str] = Field(None, min_length=1)
    level: Optional[int] = Field(None, ge=MAIN_LEVEL, le=SUB_SUB_LEVEL)
    parent_id: Optional[str] = None


class AvailableOptions(WireModel):
    """Option values per variant axis."""

    color: List[str] = Field(default_factory=list)
    ram: List[str] = Field(default_factory=list)
    storage: List[str] = Field(default_factory=list)

    @field_validator("color", "ram", "storage", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


class ProductVariant(WireModel):
    """One priced, stocked combination of axis values."""

    id: str = DEFAULT_VARIANT_ID
    color: Optional[str] = None
    ram: Optional[str] = None
    storage: Optional[str] = None
    purchased_price: float = Field(0, ge=0)
    selling_price: float = Field(0, ge=0)
    stock: int = Field(0, ge=0)


class Product(WireModel):
    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    name: str
    brand: str = ""
    base_price: float = 0
    purchased_price: float = 0
    selling_price: float = 0
    main_category: str = ""
    sub_category: Optional[str] = None
    sub_sub_category: Optional[str] = None
    description: str = ""
    images: List[str] = Field(default_factory=list)
    specifications: Dict[str, str] = Field(default_factory=dict)
    available_options: AvailableOptions = Field(default_factory=AvailableOptions)
    variants: List[ProductVariant] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("images", "variants", "specifications", mode="before")
    @classmethod
    def _none_as_empty(cls, value, info):
        if value is None:
            return {} if info.field_name == "specifications" else []
        return value

    @property
    def category_ids(self) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        return (self.main_category, self.sub_category, self.sub_sub_category)

    @property
    def default_variant(self) -> Optional[ProductVariant]:
        """The variant sold from the POS screen: the first one."""
        return self.variants[0] if self.variants else None

    @property
    def total_stock(self) -> int:
        return sum(variant.stock for variant in self.variants)

    @property
    def in_stock(self) -> bool:
        return any(variant.stock > 0 for variant in self.variants)


class VariantForm(ProductVariant):
    purchased_price: float = Field(ge=0.01)
    selling_price: float = Field(ge=0.01)


class ProductCreateRequest(WireModel):
    """New-product form."""

    name: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    main_category: str = Field(min_length=1)
    sub_category: Optional[str] = None
    sub_sub_category: Optional[str] = None
    base_price: float = Field(ge=0.01)
    purchased_price: float = Field(ge=0.01)
    selling_price: float = Field(ge=0.01)
    description: str = Field(min_length=1)
    images: List[str] = Field(min_length=1, max_length=MAX_PRODUCT_IMAGES)
    specifications: Dict[str, str] = Field(default_factory=dict)
    available_options: AvailableOptions = Field(default_factory=AvailableOptions)
    variants: List[VariantForm] = Field(default_factory=list)


class UpdateProductRequest(WireModel):
    """Edit-product form; only the fields that were set are sent."""

    name: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = Field(None, min_length=1)
    base_price: Optional[float] = Field(None, ge=0)
    purchased_price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)
    main_category: Optional[str] = Field(None, min_length=1)
    sub_category: Optional[str] = None
    sub_sub_category: Optional[str] = None
    description: Optional[str] = None
    images: Optional[List[str]] = Field(None, min_length=1, max_length=MAX_PRODUCT_IMAGES)
    specifications: Optional[Dict[str, str]] = None
    available_options: Optional[AvailableOptions] = None
    variants: Optional[List[ProductVariant]] = None


class PricingUpdate(WireModel):
    purchased_price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)
    base_price: Optional[float] = Field(None, ge=0)
