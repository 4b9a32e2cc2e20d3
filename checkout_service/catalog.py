"""
catalog.py — Demo product catalogue and initial stock levels.
"""

from typing import Dict, List, Optional

from .models import Product

DEMO_PRODUCTS: List[Product] = [
    Product(id="p1", name="Coffee beans 1kg", price_cents=1499),
    Product(id="p2", name="Ceramic mug", price_cents=999),
    Product(id="p3", name="Reusable filter", price_cents=699),
]

DEMO_STOCK: Dict[str, int] = {"p1": 20, "p2": 10, "p3": 15}


def find_product(product_id: str, products: Optional[List[Product]] = None) -> Optional[Product]:
    for product in DEMO_PRODUCTS if products is None else products:
        if product.id == product_id:
            return product
    return None
