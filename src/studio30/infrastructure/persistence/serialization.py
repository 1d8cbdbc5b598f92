"""Wire layout of ``products.variants``.

The variants tree is stored as JSON with the storefront's camelCase keys:

    [{"colorName": "Preto", "images": [...],
      "sizeStock": [{"size": "M", "quantity": 3}]}]

Legacy rows may miss ``images`` / ``sizeStock`` or carry ``null``
quantities; those read as empty lists and zero.
"""

from __future__ import annotations

from typing import Any

from studio30.domain.model.product import Product, SizeStock, Variant


def variants_to_raw(variants: list[Variant]) -> list[dict[str, Any]]:
    return [
        {
            "colorName": v.color_name,
            "images": list(v.images),
            "sizeStock": [
                {"size": cell.size, "quantity": cell.quantity} for cell in v.size_stock
            ],
        }
        for v in variants
    ]


def variants_from_raw(raw: list[dict[str, Any]] | None) -> list[Variant]:
    return [
        Variant(
            color_name=str(v.get("colorName") or ""),
            images=list(v.get("images") or []),
            size_stock=[
                SizeStock(size=str(s.get("size") or ""), quantity=int(s.get("quantity") or 0))
                for s in v.get("sizeStock") or []
            ],
        )
        for v in raw or []
    ]


def product_from_raw(raw: dict[str, Any]) -> Product:
    """Catalog fields of a stored or imported product row.

    ``stock`` is taken as stored; concurrency fields are left at their
    defaults for the caller to fill in.
    """
    return Product(
        id=int(raw["id"]),
        name=str(raw["name"]),
        color=raw.get("color") or "",
        variants=variants_from_raw(raw.get("variants")),
        stock=raw.get("stock") or 0,
    )
