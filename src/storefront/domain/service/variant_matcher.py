"""Domain service: Variant Matcher.

Resolves a client-supplied variant descriptor against a product's live
variants. Equality is exact on variant id, size and color: a variant with
the right id but a different size is *not* a match and is never silently
substituted, because it is a different physical SKU.
"""

from __future__ import annotations

from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import VariantDescriptor


def match_variant(product: Product, descriptor: VariantDescriptor) -> Variant | None:
    variant = product.find_variant(descriptor.variant_id)
    if variant is None or not variant.matches(descriptor):
        return None
    return variant
