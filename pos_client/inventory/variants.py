"""
Variant matrix generation.

A product's variants are the Cartesian product of its option axes (color,
RAM, storage). Axes without values add no dimension. Adding or removing an
option value, or changing a form price, regenerates the whole matrix;
per-variant price and stock edits are lost unless the matrix was created
with preserve_edits=True, in which case they are carried over to variants
whose id still exists.
"""

import itertools
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Union

from pos_client.core.exceptions import DuplicateOptionError, ImageLimitError
from pos_client.core.formatting_utils import Number
from pos_client.core.models import validate_form

from .models import DEFAULT_VARIANT_ID, MAX_PRODUCT_IMAGES, AvailableOptions, ProductVariant

logger = logging.getLogger(__name__)

AXES = ("color", "ram", "storage")

ID_SEPARATOR = "-"

# Editable per-variant fields, by wire name and attribute name
EDITABLE_FIELDS = {
    "purchasedPrice": "purchased_price",
    "purchased_price": "purchased_price",
    "sellingPrice": "selling_price",
    "selling_price": "selling_price",
    "stock": "stock",
}


def variant_id(
    color: Optional[str] = None, ram: Optional[str] = None, storage: Optional[str] = None
) -> str:
    """
    Deterministic id for a combination of axis values.

    Examples:
        >>> variant_id(color="Red", ram="8GB")
        'color-Red-ram-8GB'
        >>> variant_id()
        'default'
    """
    parts = [
        f"{axis}{ID_SEPARATOR}{value}"
        for axis, value in zip(AXES, (color, ram, storage))
        if value
    ]
    return ID_SEPARATOR.join(parts) or DEFAULT_VARIANT_ID


def generate_variants(
    colors: Sequence[str],
    rams: Sequence[str],
    storages: Sequence[str],
    purchased_price: Number = 0,
    selling_price: Number = 0,
    previous: Optional[Sequence[ProductVariant]] = None,
) -> List[ProductVariant]:
    """
    Build the variant matrix for the given option axes.

    Args:
        colors, rams, storages: Option values per axis; empty axes are skipped
        purchased_price: Default purchase price for every variant
        selling_price: Default selling price for every variant
        previous: Variants to take price and stock from when the id matches

    Returns:
        One "default" variant when every axis is empty, otherwise one variant
        per combination with colors outermost and storages innermost.
    """
    present = [(axis, values) for axis, values in zip(AXES, (colors, rams, storages)) if values]
    carried = {variant.id: variant for variant in previous or []}

    variants = []
    # With no axes, product() yields a single empty combination: the default variant
    for combination in itertools.product(*(values for _, values in present)):
        values = dict(zip((axis for axis, _ in present), combination))
        vid = variant_id(**values)

        if vid in carried:
            old = carried[vid]
            purchased, selling, stock = old.purchased_price, old.selling_price, old.stock
        else:
            purchased, selling, stock = float(purchased_price), float(selling_price), 0

        variants.append(
            ProductVariant(
                id=vid,
                purchased_price=purchased,
                selling_price=selling,
                stock=stock,
                **values,
            )
        )

    return variants


def update_variant_field(
    variants: Sequence[ProductVariant],
    target_id: str,
    field: str,
    value: Number,
) -> List[ProductVariant]:
    """
    Return a copy of `variants` with one field of one variant replaced.

    Args:
        variants: Current variants
        target_id: Id of the variant to change
        field: purchasedPrice, sellingPrice or stock (snake_case accepted)
        value: New value

    Raises:
        ValueError: If the field is not editable
        ClientValidationError: If the value is not a number, a price or stock
            is negative, or a stock is not a whole number
    """
    attribute = EDITABLE_FIELDS.get(field)
    if attribute is None:
        raise ValueError(f"Variant field '{field}' cannot be edited")

    return [
        validate_form(ProductVariant, {**variant.model_dump(), attribute: value})
        if variant.id == target_id
        else variant
        for variant in variants
    ]


class VariantMatrix:
    """
    Option axes and generated variants for one product form.

    Prices given here are the form-level defaults copied onto newly generated
    variants. The selling price falls back to the base price when unset.
    Changing a price through set_prices() regenerates the matrix like an
    option change does, so every variant carries the current form price;
    preserve_edits decides whether per-variant overrides survive.
    """

    def __init__(
        self,
        options: Optional[AvailableOptions] = None,
        variants: Optional[Sequence[ProductVariant]] = None,
        base_price: Number = 0,
        purchased_price: Number = 0,
        selling_price: Number = 0,
        preserve_edits: bool = False,
    ):
        options = options or AvailableOptions()
        self.options: Dict[str, List[str]] = {
            "color": list(options.color),
            "ram": list(options.ram),
            "storage": list(options.storage),
        }
        self.variants: List[ProductVariant] = list(variants or [])
        self.base_price = base_price
        self.purchased_price = purchased_price
        self.selling_price = selling_price
        self.preserve_edits = preserve_edits

    @property
    def default_selling_price(self) -> Number:
        return self.selling_price or self.base_price or 0

    def set_prices(
        self,
        base_price: Optional[Number] = None,
        purchased_price: Optional[Number] = None,
        selling_price: Optional[Number] = None,
    ) -> List[ProductVariant]:
        """Change the form defaults and regenerate the variants if any price changed."""
        before = (self.base_price, self.purchased_price, self.selling_price)
        if base_price is not None:
            self.base_price = base_price
        if purchased_price is not None:
            self.purchased_price = purchased_price
        if selling_price is not None:
            self.selling_price = selling_price

        if (self.base_price, self.purchased_price, self.selling_price) != before:
            return self.regenerate()
        return self.variants

    def _axis(self, axis: str) -> List[str]:
        if axis not in self.options:
            raise ValueError(f"Unknown variant axis '{axis}'")
        return self.options[axis]

    def add_option(self, axis: str, value: str) -> List[ProductVariant]:
        """
        Add an option value to an axis and regenerate the variants.

        Blank values are ignored.

        Raises:
            DuplicateOptionError: If the value is already on the axis
        """
        values = self._axis(axis)
        value = (value or "").strip()
        if not value:
            return self.variants
        if value in values:
            raise DuplicateOptionError(f"{axis} option '{value}' already exists")

        values.append(value)
        return self.regenerate()

    def remove_option(self, axis: str, value: str) -> List[ProductVariant]:
        self.options[axis] = [v for v in self._axis(axis) if v != value]
        return self.regenerate()

    def regenerate(self) -> List[ProductVariant]:
        previous = self.variants if self.preserve_edits else None
        if self.variants and not self.preserve_edits:
            logger.debug(f"Regenerating {len(self.variants)} variants; per-variant edits are reset")

        self.variants = generate_variants(
            self.options["color"],
            self.options["ram"],
            self.options["storage"],
            purchased_price=self.purchased_price or 0,
            selling_price=self.default_selling_price,
            previous=previous,
        )
        return self.variants

    def update_variant(self, target_id: str, field: str, value: Number) -> List[ProductVariant]:
        self.variants = update_variant_field(self.variants, target_id, field, value)
        return self.variants

    def available_options(self) -> AvailableOptions:
        return AvailableOptions(
            color=list(self.options["color"]),
            ram=list(self.options["ram"]),
            storage=list(self.options["storage"]),
        )


SpecificationRow = Union[Dict[str, str], Sequence[str]]


def build_specifications(rows: Iterable[SpecificationRow]) -> Dict[str, str]:
    """
    Collapse key/value rows from the specification editor into a mapping.

    Rows with an empty key or value are skipped; a later row wins on a
    repeated key.
    """
    specifications = {}
    for row in rows:
        if isinstance(row, dict):
            key, value = row.get("key", ""), row.get("value", "")
        else:
            key, value = row
        if key and value:
            specifications[key] = value
    return specifications


def add_images(existing: Sequence[str], new: Sequence[str]) -> List[str]:
    """
    Append image URLs, keeping at most three per product.

    Raises:
        ImageLimitError: If the result would exceed the limit (nothing is added)
    """
    if len(existing) + len(new) > MAX_PRODUCT_IMAGES:
        raise ImageLimitError(f"Maximum {MAX_PRODUCT_IMAGES} images allowed")
    return list(existing) + list(new)
