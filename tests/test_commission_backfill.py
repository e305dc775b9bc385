"""
Tests for creating missing commissions for a sale.
"""
import pytest
from sqlalchemy.exc import IntegrityError

from shopdesk.db import db
from shopdesk.models import ComboComponent, Commission
from shopdesk.services import commission_backfill
from shopdesk.services.commission_backfill import backfill_sale, ALREADY_EXISTS, NO_RATE
from shopdesk.services.errors import SaleNotFoundError, SellerResolutionError


@pytest.fixture
def three_category_sale(factory):
    location = factory.location()
    seller = factory.seller(location)
    existing_cat = factory.category("Existing")
    rated_cat = factory.category("Rated")
    unrated_cat = factory.category("Unrated")
    sale = factory.sale(location, 90.0, [
        (factory.product("P1", existing_cat), 30.0),
        (factory.product("P2", rated_cat), 2, 10.0, 20.0),
        (factory.product("P3", rated_cat), 10.0),
        (factory.product("P4", unrated_cat), 30.0),
    ])
    factory.rate(seller, existing_cat, 10)
    factory.rate(seller, rated_cat, 10)
    existing = factory.commission(sale, seller, existing_cat, 3.0)
    return {
        "sale": sale,
        "seller": seller,
        "existing": existing,
        "existing_cat": existing_cat,
        "rated_cat": rated_cat,
        "unrated_cat": unrated_cat,
    }


@pytest.mark.integration
def test_backfill_creates_only_missing_rated_categories(three_category_sale):
    ctx = three_category_sale

    report = backfill_sale(ctx["sale"].id)

    assert report["seller_id"] == ctx["seller"].id
    assert len(report["created"]) == 1
    created = report["created"][0]
    assert created["category_id"] == ctx["rated_cat"].id
    assert created["category_total"] == 30.0
    assert created["commission_amount"] == 3.0
    assert created["currency"] == "USD"

    reasons = {s["category_id"]: s["reason"] for s in report["skipped"]}
    assert reasons == {
        ctx["existing_cat"].id: ALREADY_EXISTS,
        ctx["unrated_cat"].id: NO_RATE,
    }
    already = next(s for s in report["skipped"] if s["reason"] == ALREADY_EXISTS)
    assert already["commission_id"] == ctx["existing"].id

    commission = db.session.get(Commission, created["commission_id"])
    assert commission.paid is False
    assert commission.location_id == ctx["sale"].location_id


@pytest.mark.integration
def test_backfill_never_duplicates(three_category_sale):
    ctx = three_category_sale

    backfill_sale(ctx["sale"].id)
    second = backfill_sale(ctx["sale"].id)

    assert second["created"] == []
    assert Commission.query.filter_by(sale_id=ctx["sale"].id).count() == 2


@pytest.mark.integration
def test_backfill_zero_rate_creates_zero_commission(factory):
    location = factory.location()
    seller = factory.seller(location)
    free = factory.category("Free")
    sale = factory.sale(location, 50.0, [(factory.product("Sample", free), 50.0)])
    factory.rate(seller, free, 0)

    report = backfill_sale(sale.id)

    assert report["skipped"] == []
    assert report["created"][0]["commission_amount"] == 0.0


@pytest.mark.integration
def test_backfill_uses_direct_path_even_when_items_do_not_reconcile(factory):
    location = factory.location()
    seller = factory.seller(location)
    combos = factory.category("Combos")
    sale = factory.sale(location, 100.0, [(factory.product("Combo", combos, is_combo=True), 80.0)])
    factory.rate(seller, combos, 10)

    report = backfill_sale(sale.id)

    assert report["created"][0]["commission_amount"] == 8.0


@pytest.mark.integration
def test_backfill_records_sale_currency(factory):
    location = factory.location()
    seller = factory.seller(location)
    cat = factory.category("Food")
    sale = factory.sale(location, 400.0, [(factory.product("Rice", cat), 400.0)], currency="SRD")
    factory.rate(seller, cat, 5)

    report = backfill_sale(sale.id)

    assert report["created"][0]["currency"] == "SRD"
    assert report["created"][0]["commission_amount"] == 20.0


@pytest.mark.integration
def test_backfill_reports_uncategorized_items_as_unrated(factory):
    location = factory.location()
    factory.seller(location)
    sale = factory.sale(location, 10.0, [(factory.product("Loose"), 10.0)])

    report = backfill_sale(sale.id)

    assert report["created"] == []
    assert report["skipped"] == [{"category_id": None, "reason": NO_RATE}]


@pytest.mark.integration
def test_backfill_unknown_sale(app):
    with pytest.raises(SaleNotFoundError):
        backfill_sale(9999)


@pytest.mark.integration
def test_backfill_without_seller_for_location(factory):
    location = factory.location()
    sale = factory.sale(location, 10.0, [])

    with pytest.raises(SellerResolutionError, match="No seller found"):
        backfill_sale(sale.id)


@pytest.mark.integration
def test_backfill_with_ambiguous_sellers_requires_explicit_seller(factory):
    location = factory.location()
    factory.seller(location, name="First")
    second = factory.seller(location, name="Second")
    cat = factory.category("Shoes")
    sale = factory.sale(location, 20.0, [(factory.product("Boot", cat), 20.0)])
    factory.rate(second, cat, 10)

    with pytest.raises(SellerResolutionError, match="seller_id is required"):
        backfill_sale(sale.id)

    report = backfill_sale(sale.id, seller_id=second.id)
    assert report["seller_id"] == second.id
    assert report["created"][0]["commission_amount"] == 2.0


@pytest.mark.integration
def test_backfill_rejects_seller_from_other_location(factory):
    location = factory.location("Store A")
    other = factory.location("Store B")
    factory.seller(location)
    outsider = factory.seller(other, name="Outsider")
    sale = factory.sale(location, 10.0, [])

    with pytest.raises(SellerResolutionError, match="does not belong"):
        backfill_sale(sale.id, seller_id=outsider.id)


@pytest.mark.integration
def test_commission_triple_is_unique_even_without_category(factory):
    location = factory.location()
    seller = factory.seller(location)
    sale = factory.sale(location, 10.0, [])
    factory.commission(sale, seller, None, 1.0)

    db.session.add(Commission(
        sale_id=sale.id,
        seller_id=seller.id,
        category_id=None,
        commission_amount=2.0,
        currency="USD",
    ))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


@pytest.mark.integration
def test_combo_commission_uses_combo_category_not_components(factory):
    location = factory.location()
    seller = factory.seller(location)
    bundles = factory.category("Bundles")
    drinks = factory.category("Drinks")
    combo = factory.product("Lunch Combo", bundles, is_combo=True)
    soda = factory.product("Soda", drinks)
    db.session.add(ComboComponent(combo_id=combo.id, product_id=soda.id, quantity=2))
    db.session.commit()
    factory.rate(seller, bundles, 10)
    factory.rate(seller, drinks, 50)
    sale = factory.sale(location, 12.0, [(combo, 12.0)])

    report = backfill_sale(sale.id)

    assert [c["category_id"] for c in report["created"]] == [bundles.id]
    assert report["created"][0]["commission_amount"] == 1.2
    assert [c.product_id for c in combo.components] == [soda.id]


@pytest.mark.integration
def test_concurrent_insert_is_reported_as_existing(factory, monkeypatch):
    location = factory.location()
    seller = factory.seller(location)
    category = factory.category("Shoes")
    factory.rate(seller, category, 10)
    sale = factory.sale(location, 90.0, [(factory.product("Boot", category), 90.0)])
    sale_id, seller_id, category_id = sale.id, seller.id, category.id

    original = commission_backfill.resolve_rate

    def resolve_after_other_writer(seller_id_, category_id_):
        # Another request creates the same commission between the lookup and the insert
        db.session.add(Commission(
            sale_id=sale_id,
            seller_id=seller_id,
            location_id=location.id,
            category_id=category_id,
            commission_amount=9.0,
            currency="USD",
        ))
        db.session.commit()
        return original(seller_id_, category_id_)

    monkeypatch.setattr(commission_backfill, "resolve_rate", resolve_after_other_writer)

    report = backfill_sale(sale_id)

    assert report["created"] == []
    assert report["skipped"] == [{"category_id": category_id, "reason": ALREADY_EXISTS}]
    rows = Commission.query.filter_by(sale_id=sale_id).all()
    assert [(r.seller_id, r.commission_amount) for r in rows] == [(seller_id, 9.0)]
