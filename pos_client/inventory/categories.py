"""
Category hierarchy resolution.

Categories arrive from the backend as a tree of main categories with nested
sub_categories. Products reference up to three categories by id
(main/sub/sub-sub). These helpers answer:
- does a product belong to a category or any of its descendants
- which categories sit at a given level (parent candidates)
- which products match the catalog filters
"""

from typing import Iterator, List, Optional, Sequence

from .models import MAIN_LEVEL, Category, Product


def iter_categories(tree: Sequence[Category]) -> Iterator[Category]:
    """Walk the tree depth-first in document order (parent before children)."""
    for category in tree:
        yield category
        yield from iter_categories(category.sub_categories)


def find_category(tree: Sequence[Category], category_id: str) -> Optional[Category]:
    """Return the first node with this id in depth-first order, or None."""
    for category in iter_categories(tree):
        if category.id == category_id:
            return category
    return None


def _in_hierarchy(product: Product, category: Category) -> bool:
    if category.id in product.category_ids:
        return True
    return any(_in_hierarchy(product, child) for child in category.sub_categories)


def belongs_to_category(product: Product, category_id: str, tree: Sequence[Category]) -> bool:
    """
    Check whether a product is in a category or in one of its descendants.

    Args:
        product: Product to test
        category_id: Selected category; an empty value means "no filter"
        tree: Category tree as returned by the backend

    Returns:
        True for an empty category_id or a direct match on any of the
        product's three category fields; otherwise True only if the category
        exists in the tree and the product references it or a descendant.
    """
    if not category_id:
        return True
    if category_id in product.category_ids:
        return True

    selected = find_category(tree, category_id)
    if selected is None:
        return False

    return _in_hierarchy(product, selected)


def flatten_at_level(tree: Sequence[Category], level: int) -> List[Category]:
    """Every category at `level`, anywhere in the tree, in document order."""
    return [category for category in iter_categories(tree) if category.level == level]


def available_parent_categories(tree: Sequence[Category], level: int) -> List[Category]:
    """Parent candidates for a new category at `level` (none for main categories)."""
    if level <= MAIN_LEVEL:
        return []
    return flatten_at_level(tree, level - 1)


def sub_categories(tree: Sequence[Category], main_category_id: str) -> List[Category]:
    """Children of a main category, for the cascading selector."""
    for category in tree:
        if category.id == main_category_id:
            return list(category.sub_categories)
    return []


def sub_sub_categories(
    tree: Sequence[Category], main_category_id: str, sub_category_id: str
) -> List[Category]:
    for category in sub_categories(tree, main_category_id):
        if category.id == sub_category_id:
            return list(category.sub_categories)
    return []


def matches_search(product: Product, search_query: str) -> bool:
    """Case-insensitive substring match on the product name or main category."""
    query = (search_query or "").lower()
    return query in (product.name or "").lower() or query in (product.main_category or "").lower()


def filter_products(
    products: Sequence[Product],
    tree: Sequence[Category],
    search_query: str = "",
    category_id: str = "",
) -> List[Product]:
    """Products matching both the search box and the category filter."""
    return [
        product
        for product in products
        if matches_search(product, search_query)
        and belongs_to_category(product, category_id, tree)
    ]


def available_products(products: Sequence[Product], search_query: str = "") -> List[Product]:
    """Products offered on the sale screen: something in stock and matching the search."""
    return [
        product
        for product in products
        if product.in_stock and matches_search(product, search_query)
    ]
