"""
Basic smoke tests for the ShopDesk application.
"""
import pytest

from wsgi import create_app, ensure_admin_user
from shopdesk.config import TestingConfig
from shopdesk.models import User


@pytest.mark.unit
def test_app_is_testing(app):
    assert app.config['TESTING'] is True
    assert app.config['COMMISSION_TOLERANCE'] == 0.01


@pytest.mark.integration
def test_health_endpoint(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


@pytest.mark.integration
def test_admin_user_bootstrap(app):
    app.config["ADMIN_EMAIL"] = "Boss@Example.com"
    app.config["ADMIN_PASSWORD"] = "bootstrap"

    ensure_admin_user(app)
    ensure_admin_user(app)

    admins = User.query.filter_by(role="admin").all()
    assert [u.email for u in admins] == ["boss@example.com"]
    assert admins[0].check_password("bootstrap")


@pytest.mark.unit
def test_blueprints_registered():
    flask_app = create_app(TestingConfig)

    assert {"auth", "commissions", "seller_rates", "sales"} <= set(flask_app.blueprints)
