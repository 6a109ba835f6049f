# run with: pytest tests/test_cart_module.py -v


def add(client, product_id, quantity=1):
    return client.post("/api/cart/items", json={"product_id": product_id, "quantity": quantity})


# CART-001: add product to cart
def test_add_to_cart(client):
    response = add(client, "1", 2)

    assert response.status_code == 201
    assert response.json["events"][0]["name"] == "cart-updated"
    cart = client.get("/api/cart").json
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 2
    assert cart["items"][0]["line_total"] == "59.98"


# CART-002: add product by slug
def test_add_by_slug(client):
    response = client.post("/api/cart/items", json={"slug": "sunny-day-labubu"})

    assert response.status_code == 201
    assert response.json["items"][0]["product_id"] == "2"
    assert response.json["items"][0]["quantity"] == 1


# CART-003: get cart shows correct totals
def test_get_cart_totals(client):
    add(client, "4", 1)   # 25.99
    add(client, "13", 2)  # 29.99
    add(client, "14", 1)  # 22.50

    cart = client.get("/api/cart").json

    assert len(cart["items"]) == 3
    assert cart["summary"]["subtotal"] == "108.47"
    assert cart["summary"]["shipping"] == "5.00"
    assert cart["summary"]["total"] == "113.47"
    assert cart["summary"]["item_count"] == 4


# CART-004: update cart item with PUT
def test_update_cart_put(client):
    add(client, "1", 2)

    response = client.put("/api/cart/items/1", json={"quantity": 5})

    assert response.status_code == 200
    cart = client.get("/api/cart").json
    assert cart["items"][0]["quantity"] == 5


# CART-005: update cart item with PATCH
def test_update_cart_patch(client):
    add(client, "1", 3)

    client.patch("/api/cart/items/1", json={"quantity": 7})

    cart = client.get("/api/cart").json
    assert cart["items"][0]["quantity"] == 7


# CART-006: quantity below 1 is ignored, not a removal
def test_update_quantity_zero_is_ignored(client):
    add(client, "1", 2)

    response = client.put("/api/cart/items/1", json={"quantity": 0})

    assert response.status_code == 400
    assert response.json["error"]["code"] == "invalid_quantity"
    cart = client.get("/api/cart").json
    assert cart["items"][0]["quantity"] == 2


# CART-007: delete cart item
def test_delete_cart_item(client):
    add(client, "1", 1)

    response = client.delete("/api/cart/items/1")

    assert response.status_code == 200
    cart = client.get("/api/cart").json
    assert len(cart["items"]) == 0
    assert cart["summary"]["shipping"] == "0.00"
    assert cart["summary"]["total"] == "0.00"


# CART-008: deleting a missing line is a no-op
def test_delete_missing_item(client):
    response = client.delete("/api/cart/items/1")
    assert response.status_code == 204


# CART-009: adding same product increases quantity
def test_add_same_product_increases_quantity(client):
    add(client, "1", 2)
    add(client, "1", 3)

    cart = client.get("/api/cart").json
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 5


# CART-010: unknown product
def test_add_unknown_product(client):
    response = add(client, "999")
    assert response.status_code == 404
    assert response.json["error"]["code"] == "not_found"


# CART-011: sold out products cannot be added
def test_add_out_of_stock(client):
    response = add(client, "3")
    assert response.status_code == 409
    assert client.get("/api/cart").json["items"] == []


# CART-012: bad quantities on add
def test_add_invalid_quantity(client):
    assert add(client, "1", 0).status_code == 400
    assert add(client, "1", "lots").status_code == 400
    assert client.post("/api/cart/items", json={"quantity": 1}).status_code == 400


# CART-013: updating a line that is not in the cart
def test_update_missing_item(client):
    response = client.put("/api/cart/items/1", json={"quantity": 2})
    assert response.status_code == 404


# CART-014: clear cart
def test_clear_cart(client):
    add(client, "1")
    add(client, "2")

    response = client.delete("/api/cart")

    assert response.status_code == 200
    assert response.json["items"] == []


# CART-015: carts are per session
def test_cart_is_per_session(app, client):
    add(client, "1")
    other = app.test_client()
    assert other.get("/api/cart").json["items"] == []
