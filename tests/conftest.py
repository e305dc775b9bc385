"""
Pytest configuration and fixtures for ShopDesk testing.
"""
import os
import pytest

# Set test environment variables before importing app
os.environ['FLASK_ENV'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite://'

from wsgi import create_app
from shopdesk.config import TestingConfig
from shopdesk.db import db
from shopdesk.models import (
    Location, Category, Product, Sale, SaleItem, Seller,
    SellerCategoryRate, Commission, User, Wallet, ExchangeRate,
)
from shopdesk.utils.auth import create_token


@pytest.fixture
def app():
    """Flask app with a fresh in-memory database per test."""
    flask_app = create_app(TestingConfig)

    with flask_app.app_context():
        yield flask_app

        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create a test client for making requests."""
    return app.test_client()


class Factory:
    """Builders for the rows the commission logic reads."""

    def __init__(self):
        self._locations = 0

    def location(self, name=None):
        self._locations += 1
        location = Location(name=name or f"Store {self._locations}")
        db.session.add(location)
        db.session.commit()
        return location

    def category(self, name):
        category = Category(name=name)
        db.session.add(category)
        db.session.commit()
        return category

    def product(self, name, category=None, is_combo=False):
        product = Product(name=name, category_id=category.id if category else None, is_combo=is_combo)
        db.session.add(product)
        db.session.commit()
        return product

    def seller(self, location, name="Seller", commission_rate=10.0):
        seller = Seller(name=name, location_id=location.id, commission_rate=commission_rate)
        db.session.add(seller)
        db.session.commit()
        return seller

    def rate(self, seller, category, commission_rate):
        row = SellerCategoryRate(seller_id=seller.id, category_id=category.id, commission_rate=commission_rate)
        db.session.add(row)
        db.session.commit()
        return row

    def sale(self, location, total_amount, items, currency="USD", exchange_rate=40.0):
        """items: list of (product, subtotal) or (product, quantity, unit_price, subtotal)"""
        sale = Sale(
            location_id=location.id,
            currency=currency,
            total_amount=total_amount,
            exchange_rate=exchange_rate,
        )
        db.session.add(sale)
        db.session.flush()
        for entry in items:
            if len(entry) == 2:
                product, subtotal = entry
                quantity, unit_price = 1, subtotal
            else:
                product, quantity, unit_price, subtotal = entry
            db.session.add(SaleItem(
                sale_id=sale.id,
                product_id=product.id,
                quantity=quantity,
                unit_price=unit_price,
                subtotal=subtotal,
            ))
        db.session.commit()
        return sale

    def commission(self, sale, seller, category, amount, paid=False, currency=None):
        commission = Commission(
            sale_id=sale.id,
            seller_id=seller.id,
            location_id=sale.location_id,
            category_id=category.id if category else None,
            commission_amount=amount,
            currency=currency or sale.currency,
            paid=paid,
        )
        db.session.add(commission)
        db.session.commit()
        return commission

    def user(self, email, role="admin", password="secret123", is_active=True):
        user = User(email=email, name=email.split("@")[0], role=role, is_active=is_active)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    def wallet(self, location, currency, balance, name="Cash"):
        wallet = Wallet(name=name, location_id=location.id, currency=currency, balance=balance)
        db.session.add(wallet)
        db.session.commit()
        return wallet

    def exchange_rate(self, rate):
        row = ExchangeRate(from_currency="USD", to_currency="SRD", rate=rate)
        db.session.add(row)
        db.session.commit()
        return row


@pytest.fixture
def factory(app):
    return Factory()


@pytest.fixture
def admin_user(factory):
    return factory.user("admin@example.com", role="admin")


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_token(admin_user)}"}


@pytest.fixture
def staff_headers(factory):
    staff = factory.user("staff@example.com", role="staff")
    return {"Authorization": f"Bearer {create_token(staff)}"}


@pytest.fixture
def two_category_sale(factory):
    """Sale of 100.00 USD: category A 60.00, category B 40.00."""
    location = factory.location()
    seller = factory.seller(location)
    cat_a = factory.category("A")
    cat_b = factory.category("B")
    sale = factory.sale(location, 100.0, [
        (factory.product("Shirt", cat_a), 60.0),
        (factory.product("Cable", cat_b), 40.0),
    ])
    factory.rate(seller, cat_a, 10)
    factory.rate(seller, cat_b, 5)
    return {"location": location, "seller": seller, "cat_a": cat_a, "cat_b": cat_b, "sale": sale}


# Markers for categorizing tests
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (fast)"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (slower)"
    )
