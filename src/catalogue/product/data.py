"""Seed catalog for the Holiday Rush storefront."""

_IMAGE = "https://images.unsplash.com/{photo}?w=400&h=400&fit=crop&crop=center"

PRODUCTS = [
    {
        "id": "1",
        "name": "Cozy Winter Sweater",
        "description": "Perfect for chilly holiday evenings. Made with premium wool blend for ultimate comfort.",
        "price": "89.99",
        "original_price": "129.99",
        "image": _IMAGE.format(photo="photo-1551028719-00167b16eac5"),
        "category": "clothing",
        "stock": 25,
        "featured": True,
        "tags": ["winter", "sweater", "cozy", "sale"],
    },
    {
        "id": "2",
        "name": "Holiday Ornament Set",
        "description": "Beautiful handcrafted ornaments to make your tree shine. Set of 12 assorted designs.",
        "price": "34.99",
        "image": _IMAGE.format(photo="photo-1512389098783-66b81f86e199"),
        "category": "decorations",
        "stock": 50,
        "featured": True,
        "tags": ["ornaments", "christmas", "decorations", "handcrafted"],
    },
    {
        "id": "3",
        "name": "Festive Candle Collection",
        "description": "Set of 3 scented candles with pine, cinnamon, and vanilla fragrances.",
        "price": "24.99",
        "image": _IMAGE.format(photo="photo-1602487429187-8ff8d7d7a250"),
        "category": "home",
        "stock": 30,
        "tags": ["candles", "scented", "ambiance", "gift"],
    },
    {
        "id": "4",
        "name": "Warm Winter Gloves",
        "description": "Touchscreen-compatible gloves to keep your hands warm while staying connected.",
        "price": "19.99",
        "original_price": "29.99",
        "image": _IMAGE.format(photo="photo-1544966503-7cc5ac882d5d"),
        "category": "accessories",
        "stock": 40,
        "tags": ["gloves", "winter", "touchscreen", "warm"],
    },
    {
        "id": "5",
        "name": "Hot Chocolate Gift Set",
        "description": "Premium hot chocolate mix with marshmallows and peppermint stirrers.",
        "price": "29.99",
        "image": _IMAGE.format(photo="photo-1578662996442-48f60103fc96"),
        "category": "food",
        "stock": 60,
        "featured": True,
        "tags": ["hot chocolate", "gift", "winter", "warm drink"],
    },
    {
        "id": "6",
        "name": "Holiday Wreath",
        "description": "Fresh evergreen wreath with red berries and gold ribbon. 24-inch diameter.",
        "price": "45.99",
        "image": _IMAGE.format(photo="photo-1544947950-fa07a98d237f"),
        "category": "decorations",
        "stock": 20,
        "tags": ["wreath", "evergreen", "door", "traditional"],
    },
    {
        "id": "7",
        "name": "Cozy Throw Blanket",
        "description": "Ultra-soft fleece throw blanket perfect for snuggling by the fireplace.",
        "price": "39.99",
        "original_price": "59.99",
        "image": _IMAGE.format(photo="photo-1586075010923-2dd4570fb338"),
        "category": "home",
        "stock": 35,
        "tags": ["blanket", "cozy", "fleece", "comfort"],
    },
    {
        "id": "8",
        "name": "Winter Boot Collection",
        "description": "Waterproof winter boots with premium insulation. Available in multiple sizes.",
        "price": "119.99",
        "image": _IMAGE.format(photo="photo-1544966503-7cc5ac882d5d"),
        "category": "footwear",
        "stock": 15,
        "tags": ["boots", "winter", "waterproof", "insulated"],
    },
    {
        "id": "9",
        "name": "Holiday Cookie Kit",
        "description": (
            "Everything you need to bake perfect holiday cookies. Includes cookie cutters and decorating supplies."
        ),
        "price": "22.99",
        "image": _IMAGE.format(photo="photo-1449824913935-59a10b8d2000"),
        "category": "food",
        "stock": 45,
        "tags": ["baking", "cookies", "kit", "family fun"],
    },
    {
        "id": "10",
        "name": "Festive String Lights",
        "description": "LED string lights with warm white glow. Perfect for indoor and outdoor decoration.",
        "price": "16.99",
        "image": _IMAGE.format(photo="photo-1482517967863-00e15c9b44be"),
        "category": "decorations",
        "stock": 100,
        "tags": ["lights", "LED", "decoration", "warm white"],
    },
    {
        "id": "11",
        "name": "Premium Coffee Blend",
        "description": "Special holiday blend with notes of cinnamon and nutmeg. Perfect for cold mornings.",
        "price": "18.99",
        "image": _IMAGE.format(photo="photo-1559056199-641a0ac8b55e"),
        "category": "food",
        "stock": 55,
        "tags": ["coffee", "premium", "blend", "morning"],
    },
    {
        "id": "12",
        "name": "Holiday Puzzle Set",
        "description": "1000-piece holiday-themed jigsaw puzzles. Perfect for family game nights.",
        "price": "14.99",
        "image": _IMAGE.format(photo="photo-1513475382585-d06e58bcb0e0"),
        "category": "entertainment",
        "stock": 75,
        "tags": ["puzzle", "family", "game", "holiday theme"],
    },
]

# Display order and names for category navigation
CATEGORY_NAMES = {
    "all": "All Products",
    "clothing": "Clothing",
    "decorations": "Decorations",
    "home": "Home & Living",
    "food": "Food & Drinks",
    "accessories": "Accessories",
    "footwear": "Footwear",
    "entertainment": "Entertainment",
}
