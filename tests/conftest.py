import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from labubu_store.app.config import Config
from labubu_store.app.factory import create_app
from labubu_store.app.fixtures import PRODUCTS
from labubu_store.modules.catalog.store import FixtureRepository


class StoreTestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"


@pytest.fixture()
def app():
    return create_app(StoreTestConfig)


@pytest.fixture()
def client(app):
    # cookies (and so the session cart/checkout) persist across requests
    with app.test_client() as client:
        yield client


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def repo():
    return FixtureRepository(PRODUCTS)


@pytest.fixture()
def products(repo):
    return repo.all()


@pytest.fixture()
def shipping_form():
    return {
        "full_name": "Labubu Lover",
        "email": "lover@labubu.shop",
        "address_line1": "123 Cuddle Lane",
        "address_line2": "",
        "city": "Toyville",
        "postal_code": "12345",
        "country": "US",
        "phone_number": "",
    }


@pytest.fixture()
def payment_form():
    return {
        "cardholder_name": "Labubu Lover",
        "card_number": "4242 4242 4242 4242",
        "expiry_date": "12/29",
        "cvc": "123",
        "billing_same_as_shipping": True,
    }
