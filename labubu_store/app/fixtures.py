"""Static sample catalog.

Plain dicts so a config subclass can swap the whole table in tests. They are
validated into `Product` models when the catalog extension is initialized.
"""

SERIES_OPTIONS = (
    "Dreamy Series",
    "Summer Fun",
    "Enchanted Forest",
    "Spooky Cute",
    "Classic Collection",
)

HERO_BANNER = {
    "title": "Welcome to the Labubu Universe!",
    "subtitle": "Discover enchanting Labubu dolls, new arrivals, and exclusive collections. Your adventure starts here!",
    "cta_text": "Explore Collections",
    "cta_link": "/api/products",
    "image_url": "https://placehold.co/1600x700/fce7f3/db2777?text=Labubu+Magic!&font=pacifico",
}

PRODUCTS = (
    {
        "id": "1",
        "slug": "sleepy-cloud-labubu",
        "sku": "LBB-DC-001",
        "name": "Sleepy Cloud Labubu",
        "price": "29.99",
        "image_url": "https://placehold.co/300x300/fbcfe8/9d174d?text=Sleepy+Cloud&font=lora",
        "is_new": True,
        "series": "Dreamy Series",
        "short_description": "A dreamy companion in a fluffy cloud outfit, ready for cuddles.",
        "description": (
            "Drift into dreams with the Sleepy Cloud Labubu, adorned in a fluffy cloud-themed outfit. "
            "This charming doll is perfect for gentle cuddles and imaginative play."
        ),
        "tags": ["Cloud", "Sleepy", "Blue", "Cute"],
    },
    {
        "id": "2",
        "slug": "sunny-day-labubu",
        "name": "Sunny Day Labubu",
        "price": "32.50",
        "image_url": "https://placehold.co/300x300/fef08a/c026d3?text=Sunny+Day&font=lora",
        "series": "Summer Fun",
    },
    {
        "id": "3",
        "slug": "forest-sprite-labubu",
        "name": "Forest Sprite Labubu",
        "price": "28.00",
        "image_url": "https://placehold.co/300x300/dcfce7/15803d?text=Forest+Sprite&font=lora",
        "is_out_of_stock": True,
        "series": "Enchanted Forest",
    },
    {
        "id": "4",
        "slug": "mini-monster-labubu",
        "name": "Mini Monster Labubu",
        "price": "25.99",
        "image_url": "https://placehold.co/300x300/e0e7ff/3730a3?text=Mini+Monster&font=lora",
        "series": "Spooky Cute",
    },
    {
        "id": "5",
        "slug": "dreamy-galaxy-labubu",
        "name": "Dreamy Galaxy Labubu",
        "price": "35.00",
        "image_url": "https://placehold.co/300x300/f3e8ff/581c87?text=Dreamy+Galaxy&font=lora",
        "is_new": True,
        "series": "Dreamy Series",
    },
    {
        "id": "6",
        "slug": "adventure-time-labubu",
        "name": "Adventure Time Labubu",
        "price": "31.00",
        "image_url": "https://placehold.co/300x300/fee2e2/9f1239?text=Adventure+Time&font=lora",
        "series": "Summer Fun",
    },
    {
        "id": "7",
        "slug": "winter-wonder-labubu",
        "name": "Winter Wonder Labubu",
        "price": "33.00",
        "image_url": "https://placehold.co/300x300/e0f2fe/075985?text=Winter+Wonder&font=lora",
        "series": "Enchanted Forest",
    },
    {
        "id": "8",
        "slug": "robo-buddy-labubu",
        "name": "Robo Buddy Labubu",
        "price": "38.00",
        "image_url": "https://placehold.co/300x300/d1d5db/1f2937?text=Robo+Buddy&font=lora",
        "series": "Spooky Cute",
    },
    {
        "id": "9",
        "slug": "strawberry-bliss-labubu",
        "sku": "LBB-SB-002",
        "name": "Strawberry Bliss Labubu",
        "price": "32.50",
        "image_url": "https://placehold.co/300x300/FCE7F3/DB2777?text=Strawberry+Bliss&font=lora",
        "is_new": True,
        "series": "Summer Fun",
        "short_description": "A berry sweet Labubu in a strawberry outfit.",
        "description": "Sweet and delightful, the Strawberry Bliss Labubu is a treat for the eyes.",
    },
    {
        "id": "10",
        "slug": "forest-explorer-labubu",
        "name": "Forest Explorer Labubu",
        "price": "28.00",
        "image_url": "https://placehold.co/300x300/D1FAE5/059669?text=Forest+Explorer&font=lora",
        "series": "Enchanted Forest",
    },
    {
        "id": "11",
        "slug": "cosmic-star-labubu",
        "name": "Cosmic Star Labubu",
        "price": "35.00",
        "image_url": "https://placehold.co/300x300/E0E7FF/4338CA?text=Cosmic+Star&font=lora",
        "is_out_of_stock": True,
        "series": "Dreamy Series",
    },
    {
        "id": "12",
        "slug": "spring-flower-labubu",
        "name": "Spring Flower Labubu",
        "price": "30.00",
        "image_url": "https://placehold.co/300x300/FEF3C7/F59E0B?text=Spring+Flower&font=lora",
    },
    {
        "id": "13",
        "slug": "rainbow-fairy-labubu",
        "name": "Rainbow Fairy Labubu",
        "price": "29.99",
        "image_url": "https://placehold.co/300x300/e0f2fe/0ea5e9?text=Rainbow+Fairy&font=lora",
    },
    {
        "id": "14",
        "slug": "forest-adventure-labubu",
        "name": "Forest Adventure Labubu",
        "price": "22.50",
        "image_url": "https://placehold.co/300x300/dcfce7/16a34a?text=Forest+Adventure&font=lora",
        "series": "Enchanted Forest",
    },
)
