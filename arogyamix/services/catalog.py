from typing import Dict, List, Optional

from arogyamix.schemas.product import CategoryResponse, Product

CATEGORY_NAMES = {
    "all": "All Products",
    "millets": "Millets",
    "grains": "Grains",
    "dryfruits": "Dry Fruits",
}

PRODUCTS: List[Product] = [
    Product(
        id=1,
        name="Organic Foxtail Millet",
        category="millets",
        price=180,
        original_price=220,
        discount=18,
        rating=4.8,
        reviews=124,
        description="Premium quality foxtail millet, rich in protein and fiber",
        benefits=["High Protein", "Gluten-Free", "Rich in Iron"],
        farmer_name="Ravi Kumar",
        location="Andhra Pradesh",
        in_stock=True,
    ),
    Product(
        id=2,
        name="Himalayan Almonds",
        category="dryfruits",
        price=850,
        original_price=950,
        discount=11,
        rating=4.9,
        reviews=89,
        description="Premium Himalayan almonds, naturally sweet and nutritious",
        benefits=["Vitamin E", "Healthy Fats", "Brain Health"],
        farmer_name="Suresh Patel",
        location="Kashmir",
        in_stock=True,
    ),
    Product(
        id=3,
        name="Organic Brown Rice",
        category="grains",
        price=120,
        original_price=140,
        discount=14,
        rating=4.7,
        reviews=156,
        description="Organically grown brown rice with complete nutrition",
        benefits=["High Fiber", "Magnesium", "Complex Carbs"],
        farmer_name="Lakshmi Devi",
        location="Tamil Nadu",
        in_stock=True,
    ),
    Product(
        id=4,
        name="Premium Dates",
        category="dryfruits",
        price=400,
        original_price=480,
        discount=17,
        rating=4.6,
        reviews=92,
        description="Medjool dates - natural sweetener packed with nutrients",
        benefits=["Natural Energy", "Potassium", "Antioxidants"],
        farmer_name="Ahmed Khan",
        location="Rajasthan",
        in_stock=False,
    ),
    Product(
        id=5,
        name="Finger Millet (Ragi)",
        category="millets",
        price=160,
        original_price=190,
        discount=16,
        rating=4.8,
        reviews=203,
        description="Calcium-rich finger millet for strong bones",
        benefits=["High Calcium", "Gluten-Free", "Iron Rich"],
        farmer_name="Geetha Rao",
        location="Karnataka",
        in_stock=True,
    ),
    Product(
        id=6,
        name="Mixed Dry Fruits",
        category="dryfruits",
        price=1200,
        original_price=1400,
        discount=14,
        rating=4.9,
        reviews=67,
        description="Premium mix of almonds, cashews, walnuts, and raisins",
        benefits=["Complete Nutrition", "Heart Health", "Brain Power"],
        farmer_name="Collective",
        location="Multiple States",
        in_stock=True,
    ),
]

CATALOG: Dict[int, Product] = {product.id: product for product in PRODUCTS}


def get_product(product_id: int, catalog: Optional[Dict[int, Product]] = None) -> Optional[Product]:
    return (catalog if catalog is not None else CATALOG).get(product_id)


def search_products(search: str | None = None, category: str | None = None) -> List[Product]:
    """Case-insensitive name search, optionally narrowed to one category ("all" means no filter)."""
    needle = (search or "").strip().lower()
    results = []
    for product in PRODUCTS:
        if needle and needle not in product.name.lower():
            continue
        if category and category != "all" and product.category != category:
            continue
        results.append(product)
    return results


def list_categories(products: List[Product] | None = None) -> List[CategoryResponse]:
    products = PRODUCTS if products is None else products
    counts: Dict[str, int] = {}
    for product in products:
        counts[product.category] = counts.get(product.category, 0) + 1
    return [
        CategoryResponse(
            id=category_id,
            name=name,
            count=len(products) if category_id == "all" else counts.get(category_id, 0),
        )
        for category_id, name in CATEGORY_NAMES.items()
    ]
