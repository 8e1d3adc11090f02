import pytest

from src.models import Booking, Package

PACKAGES_URL = "/api/packages"


def package_body(**changes):
    body = {
        "slug": "paro-valley",
        "title": "Paro Valley",
        "description": "Monasteries and rice terraces",
        "priceNU": 900,
        "durationDays": 5,
        "location": "Paro",
        "type": "cultural",
    }
    body.update(changes)
    return body


class TestPackageCatalogue:
    def test_create_derives_minor_units_from_major(self, client, auth_headers, db):
        response = client.post(PACKAGES_URL, json=package_body(), headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["slug"] == "paro-valley"
        package = db.query(Package).filter(Package.slug == "paro-valley").one()
        assert package.price_nu == 900
        assert package.price_cents == 90000
        assert package.currency == "NU"
        assert package.duration_text == "5D/4N"

    def test_create_derives_major_units_from_minor(self, client, auth_headers, db):
        body = package_body(priceCents=123456)
        del body["priceNU"]

        assert client.post(PACKAGES_URL, json=body, headers=auth_headers).status_code == 201

        package = db.query(Package).filter(Package.slug == "paro-valley").one()
        assert package.price_cents == 123456
        assert package.price_nu == 1235

    def test_create_requires_a_price(self, client, auth_headers):
        body = package_body(priceNU="")

        response = client.post(PACKAGES_URL, json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "priceNU or priceCents required"

    def test_create_requires_core_fields(self, client, auth_headers):
        body = package_body()
        del body["description"]

        assert client.post(PACKAGES_URL, json=body, headers=auth_headers).status_code == 400

    def test_duration_parsed_from_text(self, client, auth_headers, db):
        body = package_body(durationText="7D/6N")
        del body["durationDays"]

        assert client.post(PACKAGES_URL, json=body, headers=auth_headers).status_code == 201

        package = db.query(Package).filter(Package.slug == "paro-valley").one()
        assert package.duration_days == 7
        assert package.duration_text == "7D/6N"

    def test_includes_accepts_comma_separated_text(self, client, auth_headers, db):
        body = package_body(includes="Guide, Hotel,, Meals ")

        client.post(PACKAGES_URL, json=body, headers=auth_headers)

        package = db.query(Package).filter(Package.slug == "paro-valley").one()
        assert package.includes == ["Guide", "Hotel", "Meals"]

    def test_duplicate_slug_conflicts(self, client, auth_headers):
        client.post(PACKAGES_URL, json=package_body(), headers=auth_headers)

        response = client.post(PACKAGES_URL, json=package_body(title="Again"), headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "Slug already exists"

    def test_writes_require_operator(self, client, make_package):
        make_package(slug="trek")

        assert client.post(PACKAGES_URL, json=package_body()).status_code == 401
        assert client.patch(f"{PACKAGES_URL}/trek", json={"title": "x"}).status_code == 401
        assert client.delete(f"{PACKAGES_URL}/trek").status_code == 401

    def test_public_listing_and_lookup(self, client, make_package):
        make_package(slug="trek", title="Trek", price_cents=150000, price_nu=1500)

        listing = client.get(PACKAGES_URL)
        single = client.get(f"{PACKAGES_URL}/trek")

        assert listing.status_code == 200
        assert [p["slug"] for p in listing.json()] == ["trek"]
        assert single.json()["priceNU"] == 1500
        assert single.json()["priceCents"] == 150000
        assert client.get(f"{PACKAGES_URL}/missing").status_code == 404

    def test_update_renormalizes_price(self, client, auth_headers, db, make_package):
        package = make_package(slug="trek")

        response = client.patch(f"{PACKAGES_URL}/trek", json={"priceNU": 1200}, headers=auth_headers)

        assert response.json() == {"ok": True}
        db.refresh(package)
        assert package.price_nu == 1200
        assert package.price_cents == 120000

    def test_update_reparses_duration_text(self, client, auth_headers, db, make_package):
        package = make_package(slug="trek")

        client.patch(f"{PACKAGES_URL}/trek", json={"durationText": "10D/9N"}, headers=auth_headers)

        db.refresh(package)
        assert package.duration_days == 10

    def test_update_unknown_package(self, client, auth_headers):
        response = client.patch(f"{PACKAGES_URL}/missing", json={"title": "x"}, headers=auth_headers)

        assert response.status_code == 404

    def test_delete_keeps_bookings(self, client, auth_headers, db, make_package, make_booking):
        package = make_package(slug="trek")
        package_id = package.id
        booking_id = make_booking(package_id).id

        response = client.delete(f"{PACKAGES_URL}/trek", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"ok": True, "deletedPackageId": package_id, "slug": "trek"}
        db.expire_all()
        assert db.query(Package).count() == 0
        assert db.get(Booking, booking_id).package_id == package_id

    def test_delete_unknown_package(self, client, auth_headers):
        assert client.delete(f"{PACKAGES_URL}/missing", headers=auth_headers).status_code == 404


@pytest.mark.parametrize("price_nu,price_cents,expected", [
    (None, 99950, (1000, 99950)),
    ("750", None, (750, 75000)),
    (12.5, None, (13, 1250)),
])
def test_create_price_pairs(client, auth_headers, db, price_nu, price_cents, expected):
    body = package_body(priceNU=price_nu)
    if price_cents is not None:
        body["priceCents"] = price_cents

    assert client.post(PACKAGES_URL, json=body, headers=auth_headers).status_code == 201

    package = db.query(Package).filter(Package.slug == "paro-valley").one()
    assert (package.price_nu, package.price_cents) == expected
