import os
from decimal import Decimal

from dotenv import load_dotenv

from labubu_store.app.fixtures import HERO_BANNER, PRODUCTS, SERIES_OPTIONS

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")

    # Comma-separated list
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "8080"))

    # Listing / homepage
    PAGE_SIZE = int(os.getenv("PAGE_SIZE", "6"))
    FEATURED_COUNT = int(os.getenv("FEATURED_COUNT", "4"))
    RELATED_COUNT = int(os.getenv("RELATED_COUNT", "4"))

    # Shipping rates (currency units)
    FLAT_SHIPPING = Decimal(os.getenv("FLAT_SHIPPING", "5.00"))
    STANDARD_SHIPPING = Decimal(os.getenv("STANDARD_SHIPPING", "5.00"))
    EXPRESS_SHIPPING = Decimal(os.getenv("EXPRESS_SHIPPING", "15.00"))

    # Static catalog
    CATALOG_PRODUCTS = PRODUCTS
    CATALOG_SERIES = SERIES_OPTIONS
    HERO_BANNER = HERO_BANNER
