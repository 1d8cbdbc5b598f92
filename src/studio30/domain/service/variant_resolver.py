"""Resolution of a caller-supplied (colour, size) pair to an inventory cell.

Each lookup runs an explicit pipeline and reports which step matched, so
callers (and tests) can see exactly how a free-text selection was mapped:

    colour:  EXACT -> GENERIC_COLOR -> DEFAULT_COLOR -> SOLE_VARIANT* -> CREATED*
    size:    EXACT -> CREATED*

Steps marked ``*`` only run when restoring stock: returning inventory must
never fail outright, while reserving it must never guess.

The resolvers never mutate the product they are given. A ``CREATED``
result carries the new, detached ``Variant`` / ``SizeStock``; attaching it
is up to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from studio30.domain.exceptions import SizeNotFoundError, VariantNotFoundError
from studio30.domain.model.product import Product, SizeStock, Variant
from studio30.domain.model.value_objects import StockDirection, normalize_label

logger = logging.getLogger(__name__)

GENERIC_COLOR_LABELS = frozenset({"", "padrão", "padrao"})
ONE_SIZE_LABELS = frozenset({"u", "un", "unico", "único"})


class MatchKind(Enum):
    EXACT = "exact"
    GENERIC_COLOR = "generic_color"
    DEFAULT_COLOR = "default_color"
    SOLE_VARIANT = "sole_variant"
    CREATED = "created"


@dataclass(frozen=True)
class VariantMatch:
    kind: MatchKind
    index: int | None  # None when the variant was created
    variant: Variant


@dataclass(frozen=True)
class SizeMatch:
    kind: MatchKind
    index: int | None
    cell: SizeStock


def sizes_equal(a: object, b: object) -> bool:
    """Normalized size comparison; all "one size" spellings are equal."""
    na, nb = normalize_label(a), normalize_label(b)
    if na == nb:
        return True
    return na in ONE_SIZE_LABELS and nb in ONE_SIZE_LABELS


def _find_color(variants: list[Variant], color: object) -> int | None:
    wanted = normalize_label(color)
    for i, variant in enumerate(variants):
        if normalize_label(variant.color_name) == wanted:
            return i
    return None


def resolve_variant(
    product: Product, color: str, direction: StockDirection
) -> VariantMatch:
    """Find the variant of ``product`` that ``color`` refers to.

    Raises VariantNotFoundError (reserve only) listing the available colours.
    """
    variants = product.variants

    idx = _find_color(variants, color)
    if idx is not None:
        logger.debug("Product %s: color %r matched exactly", product.id, color)
        return VariantMatch(MatchKind.EXACT, idx, variants[idx])

    if normalize_label(color) in GENERIC_COLOR_LABELS and variants:
        idx = _find_color(variants, product.color)
        if idx is None:
            idx = 0
        logger.warning(
            "Product %s (%s): generic color %r resolved to variant %r",
            product.id, product.name, color, variants[idx].color_name,
        )
        return VariantMatch(MatchKind.GENERIC_COLOR, idx, variants[idx])

    if normalize_label(product.color):
        idx = _find_color(variants, product.color)
        if idx is not None:
            logger.warning(
                "Product %s (%s): color %r not found, using default color %r",
                product.id, product.name, color, product.color,
            )
            return VariantMatch(MatchKind.DEFAULT_COLOR, idx, variants[idx])

    if direction is StockDirection.RESERVE:
        raise VariantNotFoundError(
            product.id, product.name, color, product.color_names
        )

    if len(variants) == 1:
        logger.warning(
            "Product %s (%s): color %r not found, restoring into its only variant %r",
            product.id, product.name, color, variants[0].color_name,
        )
        return VariantMatch(MatchKind.SOLE_VARIANT, 0, variants[0])

    created = Variant(color_name=str(color).strip())
    logger.warning(
        "Product %s (%s): creating variant %r to restore stock",
        product.id, product.name, created.color_name,
    )
    return VariantMatch(MatchKind.CREATED, None, created)


def resolve_size(
    product: Product, variant: Variant, size: str, direction: StockDirection
) -> SizeMatch:
    """Find the cell of ``variant`` that ``size`` refers to.

    Raises SizeNotFoundError (reserve only) listing the available sizes.
    """
    for i, cell in enumerate(variant.size_stock):
        if sizes_equal(cell.size, size):
            logger.debug(
                "Product %s: size %r matched %r in %r",
                product.id, size, cell.size, variant.color_name,
            )
            return SizeMatch(MatchKind.EXACT, i, cell)

    if direction is StockDirection.RESERVE:
        raise SizeNotFoundError(product.id, variant.color_name, size, variant.sizes)

    created = SizeStock(size=str(size).strip(), quantity=0)
    logger.warning(
        "Product %s (%s): creating size %r in %r to restore stock",
        product.id, product.name, created.size, variant.color_name,
    )
    return SizeMatch(MatchKind.CREATED, None, created)
