"""Placeholder presentation data for product pages.

Values are drawn from an injected ``random.Random`` so callers choose between
a seeded (reproducible) stream and an unseeded one. Nothing is cached: two
calls for the same product return different numbers.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from storefront.models.product import ProductDetails, ProductReview, ProductVariant
from storefront.services.catalog.conversion import (
    compute_price_breakdown,
    format_discount,
    format_price,
)

DEFAULT_BRAND = "Storefront Brand"
SELLER = "Storefront Seller"
DELIVERY_INFO = "Free delivery by tomorrow"
RETURN_POLICY = "7 days return policy"
WARRANTY = "1 year warranty"

SPECIFICATIONS = {
    "Material": "Premium Quality",
    "Color": "Multiple Options",
    "Size": "Standard",
    "Weight": "Lightweight",
    "Care": "Easy to maintain",
}

VARIANT_SIZES = (("Small", 15), ("Medium", 20), ("Large", 10))

MOCK_CATEGORIES = ("Electronics", "Fashion", "Home", "Beauty", "Sports")
MOCK_SUB_CATEGORIES = ("Smartphones", "Clothing", "Furniture", "Skincare", "Fitness")

REVIEW_AUTHORS = ("Rahul K.", "Priya S.", "Amit M.", "Neha P.", "Vikram R.")
REVIEW_TITLES = (
    "Great product!",
    "Excellent quality",
    "Worth the money",
    "Good value for money",
    "Happy with purchase",
)
REVIEW_COMMENTS = (
    "Really happy with this purchase. Quality is excellent!",
    "Good product, fast delivery. Would recommend!",
    "Value for money. Meets all expectations.",
    "Great quality and perfect fit. Very satisfied!",
    "Excellent product with good features.",
)
REVIEWS_PER_PRODUCT = 5


class SyntheticProductData:
    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        currency_symbol: str = "₹",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.currency_symbol = currency_symbol
        self._clock = clock or (lambda: datetime.now(UTC))

    def enrich(self, product: ProductDetails) -> ProductDetails:
        """Fill the presentation fields the relational store does not hold."""
        product.rating = self.rating()
        product.reviews = self.rng.randint(100, 10099)
        product.stock = self.rng.randint(10, 59)
        product.brand = product.brand or DEFAULT_BRAND
        product.seller = SELLER
        product.delivery_info = DELIVERY_INFO
        product.return_policy = RETURN_POLICY
        product.warranty = WARRANTY
        product.specifications = dict(SPECIFICATIONS)
        product.variants = self.variants(product.price)
        product.reviews_list = self.reviews(product.product_id)
        return product

    def mock_product(self, product_id: str, main_image: str) -> ProductDetails:
        """Build an entirely placeholder product for an id the store lacks."""
        price = self.rng.randint(100, 1099)
        original_price = price + self.rng.randint(100, 599)
        pricing = compute_price_breakdown(price, original_price)
        category = self.rng.choice(MOCK_CATEGORIES)
        sub_category = self.rng.choice(MOCK_SUB_CATEGORIES)
        name = f"Premium {category} {sub_category} with excellent features"

        product = ProductDetails(
            product_id=product_id,
            catalog_id=f"CAT{self.rng.randrange(1000000)}",
            title=name,
            description=name,
            category=category,
            sub_category=sub_category,
            price=format_price(pricing.price, self.currency_symbol),
            original_price=format_price(pricing.original_price, self.currency_symbol),
            discount=format_discount(pricing.discount, self.currency_symbol),
            discount_percent=pricing.discount_percent,
            main_image=main_image,
            images=[main_image],
        )
        return self.enrich(product)

    def rating(self) -> float:
        return round(3.5 + self.rng.random() * 1.5, 1)

    def variants(self, price: str) -> list[ProductVariant]:
        return [
            ProductVariant(
                id=str(index),
                name="Size",
                value=size,
                price=price,
                stock=stock,
                selected=index == 1,
            )
            for index, (size, stock) in enumerate(VARIANT_SIZES, start=1)
        ]

    def reviews(self, product_id: str) -> list[ProductReview]:
        now = self._clock()
        return [
            ProductReview(
                id=f"review_{product_id}_{index}",
                user_id=f"user_{self.rng.randrange(1000)}",
                user_name=self.rng.choice(REVIEW_AUTHORS),
                rating=self.rng.randint(3, 5),
                title=self.rng.choice(REVIEW_TITLES),
                comment=self.rng.choice(REVIEW_COMMENTS),
                date=now - timedelta(days=self.rng.randrange(30)),
                # roughly 70% of reviews come from verified buyers
                verified=self.rng.random() > 0.3,
                helpful=self.rng.randrange(50),
            )
            for index in range(1, REVIEWS_PER_PRODUCT + 1)
        ]
