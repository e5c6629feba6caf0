"""Storefront product catalog"""

import hashlib
import json
from decimal import Decimal
from typing import Optional
from ..models.product import Product, ProductCategory, Variant

# Mock product catalog
PRODUCTS: dict[str, Product] = {
    "fashion-1": Product(
        id="fashion-1",
        name="Minimal Cotton Shirt",
        category=ProductCategory.FASHION,
        description="Premium cotton shirt with clean lines and minimal design.",
        images=["/static/images/cotton-shirt-white.jpg", "/static/images/cotton-shirt-black.jpg"],
        price=Decimal("0"),
        featured=True,
        variants=[
            Variant(
                id="fashion-1-white-s",
                sku="MCS-WHT-S",
                attributes={"color": "White", "size": "S"},
                image="/static/images/cotton-shirt-white.jpg",
                price=Decimal("89"),
            ),
            Variant(
                id="fashion-1-white-m",
                sku="MCS-WHT-M",
                attributes={"color": "White", "size": "M"},
                image="/static/images/cotton-shirt-white.jpg",
                price=Decimal("89"),
            ),
            Variant(
                id="fashion-1-black-s",
                sku="MCS-BLK-S",
                attributes={"color": "Black", "size": "S"},
                image="/static/images/cotton-shirt-black.jpg",
                price=Decimal("89"),
                in_stock=False,
            ),
            Variant(
                id="fashion-1-black-m",
                sku="MCS-BLK-M",
                attributes={"color": "Black", "size": "M"},
                image="/static/images/cotton-shirt-black.jpg",
                price=Decimal("89"),
            ),
        ],
    ),
    "electronics-1": Product(
        id="electronics-1",
        name="Redmi Case",
        category=ProductCategory.ELECTRONICS,
        description="Premium protective case for Redmi phones.",
        images=["/static/images/redmi-case-clear.jpg", "/static/images/redmi-case-black.jpg"],
        price=Decimal("0"),
        featured=True,
        variants=[
            Variant(
                id="electronics-1-note14-clear",
                sku="RC-N14-CLR",
                attributes={"model": "Note 14", "color": "Clear"},
                image="/static/images/redmi-case-clear.jpg",
                price=Decimal("25"),
            ),
            Variant(
                id="electronics-1-note14plus-clear",
                sku="RC-N14P-CLR",
                attributes={"model": "Note 14+", "color": "Clear"},
                image="/static/images/redmi-case-clear.jpg",
                price=Decimal("30"),
            ),
            Variant(
                id="electronics-1-note14-black",
                sku="RC-N14-BLK",
                attributes={"model": "Note 14", "color": "Black"},
                image="/static/images/redmi-case-black.jpg",
                price=Decimal("25"),
                in_stock=False,
            ),
        ],
    ),
    "fashion-2": Product(
        id="fashion-2",
        name="Minimal Wool Sweater",
        category=ProductCategory.FASHION,
        description="Luxurious merino wool sweater with timeless design.",
        images=["/static/images/wool-sweater.jpg"],
        price=Decimal("149"),
        featured=True,
    ),
    "fashion-3": Product(
        id="fashion-3",
        name="Clean Linen Trousers",
        category=ProductCategory.FASHION,
        description="Relaxed-fit linen trousers for warm days.",
        images=["/static/images/linen-trousers.jpg"],
        price=Decimal("119"),
    ),
    "electronics-2": Product(
        id="electronics-2",
        name="Smart Watch",
        category=ProductCategory.ELECTRONICS,
        description="Slim smart watch with heart-rate tracking and a week of battery life.",
        images=["/static/images/smart-watch.jpg"],
        price=Decimal("249"),
    ),
    "electronics-3": Product(
        id="electronics-3",
        name="Digital Earbuds",
        category=ProductCategory.ELECTRONICS,
        description="Wireless earbuds with a compact charging case.",
        images=["/static/images/earbuds.jpg"],
        price=Decimal("79.50"),
    ),
}


class ProductDatabase:
    """In-memory product catalog for the storefront"""

    def __init__(self, products: Optional[dict[str, Product]] = None):
        source = PRODUCTS if products is None else products
        self.products = {pid: p.model_copy(deep=True) for pid, p in source.items()}

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def search_products(
        self,
        query: Optional[str] = None,
        category: Optional[ProductCategory] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        featured_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """
        Search products with filters.

        Price filters apply to the product price, or to the cheapest
        variant for products with variants.

        Returns:
            Tuple of (matching products, total count)
        """
        results = list(self.products.values())

        # Filter by search query
        if query:
            query_lower = query.lower()
            results = [
                p for p in results
                if query_lower in p.name.lower() or query_lower in p.description.lower()
            ]

        # Filter by category
        if category:
            results = [p for p in results if p.category == category]

        # Filter by price range
        if min_price is not None:
            results = [p for p in results if self._display_price(p) >= min_price]
        if max_price is not None:
            results = [p for p in results if self._display_price(p) <= max_price]

        if featured_only:
            results = [p for p in results if p.featured]

        # Get total before pagination
        total = len(results)

        # Apply pagination
        results = results[offset : offset + limit]

        return results, total

    def get_all_products(self) -> list[Product]:
        """Get all products"""
        return list(self.products.values())

    def catalog_hash(self) -> str:
        """
        Fingerprint of the catalog.

        Changes whenever any product, variant or price changes, so carts
        built against an older catalog can be detected.
        """
        payload = [
            p.model_dump(mode="json")
            for p in sorted(self.products.values(), key=lambda p: p.id)
        ]
        encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(encoded.encode("utf-8")).hexdigest()

    @staticmethod
    def _display_price(product: Product) -> Decimal:
        if product.variants:
            return min(v.price for v in product.variants)
        return product.price


# Singleton instance
product_db = ProductDatabase()
