from flask import Flask

from labubu_store.modules.catalog.routes import bp as catalog_bp
from labubu_store.modules.cart.routes import bp as cart_bp
from labubu_store.modules.checkout.routes import bp as checkout_bp


def register_api_blueprints(app: Flask) -> None:
    app.register_blueprint(catalog_bp, url_prefix="/api")
    app.register_blueprint(cart_bp, url_prefix="/api")
    app.register_blueprint(checkout_bp, url_prefix="/api")

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "Labubu Store API",
            "version": "0.1.0",
            "endpoints": {
                "catalog": ["/home", "/series", "/products", "/products/<slug>"],
                "listing": ["/listing", "/listing/search", "/listing/series", "/listing/sort", "/listing/page"],
                "cart": ["/cart", "/cart/items", "/cart/items/<line_id>"],
                "checkout": [
                    "/checkout",
                    "/checkout/shipping-address",
                    "/checkout/shipping-method",
                    "/checkout/payment",
                    "/checkout/step",
                ],
            },
        }, 200
