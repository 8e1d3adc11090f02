from datetime import datetime

import pytest

from src.stats.analytics_service import AnalyticsService

STATS_URL = "/api/stats"


@pytest.fixture
def analytics(db):
    return AnalyticsService(db)


class TestAnalyticsService:
    def test_empty_database(self, analytics):
        assert analytics.total_packages() == 0
        assert analytics.total_confirmed_bookings() == 0
        assert analytics.total_customers().model_dump() == {"total_travelers": 0, "bookings": 0}
        assert analytics.total_revenue().model_dump() == {
            "by_currency": [], "overall_cents": 0, "overall_amount": 0
        }
        assert analytics.most_booked_package() is None
        assert analytics.revenue_by_month() == []

    def test_only_confirmed_bookings_count(self, analytics, make_package, make_booking):
        package = make_package()
        make_booking(package.id, status="CONFIRMED", travelers=2, total_group_cents=20000)
        for status in ("PENDING", "REJECTED", "CANCELLED"):
            make_booking(package.id, status=status, travelers=5, total_group_cents=99999)

        assert analytics.total_confirmed_bookings() == 1
        assert analytics.total_customers().total_travelers == 2
        assert analytics.total_revenue().overall_cents == 20000

    def test_pending_booking_enters_revenue_once_confirmed(self, db, analytics, make_package, make_booking):
        booking = make_booking(make_package().id, status="PENDING", total_group_cents=45000)
        assert analytics.total_revenue().by_currency == []

        booking.apply_status("CONFIRMED")
        db.commit()

        assert analytics.total_revenue().overall_cents == 45000

    def test_revenue_grouped_by_currency_largest_first(self, analytics, make_package, make_booking):
        package = make_package()
        make_booking(package.id, currency="NU", total_group_cents=10050)
        make_booking(package.id, currency="USD", total_group_cents=30000)
        make_booking(package.id, currency="USD", total_group_cents=25000)
        make_booking(package.id, currency=None, total_group_cents=1000)

        revenue = analytics.total_revenue()

        assert [(r.currency, r.total_cents, r.amount, r.bookings) for r in revenue.by_currency] == [
            ("USD", 55000, 550, 2),
            ("NU", 10050, 101, 1),
            ("UNKNOWN", 1000, 10, 1),
        ]
        assert revenue.overall_cents == 66050
        assert revenue.overall_amount == 661

    def test_most_booked_package_breaks_ties_on_travelers(self, analytics, make_package, make_booking):
        small = make_package(slug="small", title="Small Groups")
        large = make_package(slug="large", title="Large Groups")
        make_booking(small.id, travelers=1)
        make_booking(small.id, travelers=1)
        make_booking(large.id, travelers=3)
        make_booking(large.id, travelers=2)
        make_booking(large.id, travelers=4, status="PENDING")

        top = analytics.most_booked_package()

        assert top.package_id == large.id
        assert top.slug == "large"
        assert top.title == "Large Groups"
        assert top.image == large.image
        assert top.bookings == 2
        assert top.travelers == 5

    def test_most_booked_package_prefers_booking_count(self, analytics, make_package, make_booking):
        frequent = make_package(slug="frequent")
        crowded = make_package(slug="crowded")
        for _ in range(3):
            make_booking(frequent.id, travelers=1)
        make_booking(crowded.id, travelers=10)

        assert analytics.most_booked_package().slug == "frequent"

    def test_most_booked_package_survives_deleted_package(self, db, analytics, make_package, make_booking):
        package = make_package()
        make_booking(package.id, travelers=2)
        package_id = package.id
        db.delete(package)
        db.commit()

        top = analytics.most_booked_package()

        assert top.package_id == package_id
        assert top.slug is None
        assert top.title is None
        assert top.bookings == 1
        assert top.travelers == 2

    def test_revenue_by_month(self, analytics, make_package, make_booking):
        package = make_package()
        make_booking(package.id, total_group_cents=20000, updated_at=datetime(2024, 3, 2, 9, 0))
        make_booking(package.id, total_group_cents=30000, updated_at=datetime(2024, 3, 28, 18, 0))
        make_booking(package.id, total_group_cents=10000, updated_at=datetime(2024, 4, 10, 12, 0))
        make_booking(package.id, status="PENDING", total_group_cents=70000,
                     updated_at=datetime(2024, 3, 5))

        rows = analytics.revenue_by_month()

        assert [r.model_dump() for r in rows] == [
            {"month": "2024-03", "currency": "NU", "total_cents": 50000, "amount": 500, "bookings": 2},
            {"month": "2024-04", "currency": "NU", "total_cents": 10000, "amount": 100, "bookings": 1},
        ]

    def test_revenue_by_month_splits_currencies_and_respects_window(self, analytics, make_package, make_booking):
        package = make_package()
        make_booking(package.id, currency="USD", total_group_cents=500, updated_at=datetime(2024, 2, 29, 23))
        make_booking(package.id, currency="USD", total_group_cents=700, updated_at=datetime(2024, 3, 1))
        make_booking(package.id, currency="NU", total_group_cents=900, updated_at=datetime(2024, 3, 15))
        make_booking(package.id, currency="NU", total_group_cents=100, updated_at=datetime(2024, 4, 1))

        rows = analytics.revenue_by_month(datetime(2024, 3, 1), datetime(2024, 4, 1))

        assert [(r.month, r.currency, r.total_cents) for r in rows] == [
            ("2024-03", "NU", 900),
            ("2024-03", "USD", 700),
        ]

    def test_month_window_includes_booking_stamped_at_its_lower_bound(self, db, analytics, make_package, make_booking):
        booking = make_booking(make_package().id, total_group_cents=4200)
        db.expire(booking)
        stamped = booking.updated_at.replace(tzinfo=None)

        rows = analytics.revenue_by_month(stamped, None)

        assert [r.total_cents for r in rows] == [4200]


class TestStatsEndpoints:
    def test_stats_require_operator(self, client):
        assert client.get(f"{STATS_URL}/overview").status_code == 401
        assert client.get(f"{STATS_URL}/total-revenue").status_code == 401

    def test_invalid_token_is_rejected(self, client):
        response = client.get(f"{STATS_URL}/total-packages", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_counts(self, client, auth_headers, make_package, make_booking):
        package = make_package()
        make_package()
        make_booking(package.id)
        make_booking(package.id, status="PENDING")

        assert client.get(f"{STATS_URL}/total-packages", headers=auth_headers).json() == {"total": 2}
        assert client.get(f"{STATS_URL}/confirmed-bookings", headers=auth_headers).json() == {"total": 1}

    def test_total_revenue_and_customers_payloads(self, client, auth_headers, make_package, make_booking):
        package = make_package()
        make_booking(package.id, travelers=3, total_group_cents=270000)

        revenue = client.get(f"{STATS_URL}/total-revenue", headers=auth_headers).json()
        customers = client.get(f"{STATS_URL}/total-customers", headers=auth_headers).json()

        assert revenue == {
            "byCurrency": [{"currency": "NU", "totalCents": 270000, "amount": 2700, "bookings": 1}],
            "overallCents": 270000,
            "overallAmount": 2700,
        }
        assert customers == {"totalTravelers": 3, "bookings": 1}

    def test_most_booked_package_without_data(self, client, auth_headers):
        response = client.get(f"{STATS_URL}/most-booked-package", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "No confirmed bookings yet"}

    def test_most_booked_package_payload(self, client, auth_headers, make_package, make_booking):
        package = make_package(slug="paro", title="Paro")
        make_booking(package.id, travelers=2)

        body = client.get(f"{STATS_URL}/most-booked-package", headers=auth_headers).json()

        assert body == {
            "packageId": package.id,
            "slug": "paro",
            "title": "Paro",
            "image": package.image,
            "bookings": 1,
            "travelers": 2,
        }

    def test_revenue_by_month_query_bounds(self, client, auth_headers, make_package, make_booking):
        package = make_package()
        make_booking(package.id, total_group_cents=100, updated_at=datetime(2024, 1, 20))
        make_booking(package.id, total_group_cents=200, updated_at=datetime(2024, 2, 20))

        body = client.get(
            f"{STATS_URL}/revenue-by-month",
            params={"from": "2024-02-01", "to": "2024-03-01"},
            headers=auth_headers
        ).json()

        assert body == [{"month": "2024-02", "currency": "NU", "totalCents": 200, "amount": 2, "bookings": 1}]

    def test_overview(self, client, auth_headers, make_package, make_booking):
        paro = make_package(slug="paro", title="Paro")
        make_package(slug="trek")
        make_booking(paro.id, travelers=2, total_group_cents=180000)
        make_booking(paro.id, travelers=1, total_group_cents=90000, currency="USD")
        make_booking(paro.id, status="PENDING", travelers=9, total_group_cents=5)

        response = client.get(f"{STATS_URL}/overview", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["totals"] == {"packages": 2, "confirmedBookings": 2, "customers": 3}
        assert body["revenue"]["overallCents"] == 270000
        assert [r["currency"] for r in body["revenue"]["byCurrency"]] == ["NU", "USD"]
        assert body["mostBookedPackage"]["slug"] == "paro"
        assert body["mostBookedPackage"]["bookings"] == 2

    def test_overview_without_bookings(self, client, auth_headers):
        body = client.get(f"{STATS_URL}/overview", headers=auth_headers).json()

        assert body["totals"] == {"packages": 0, "confirmedBookings": 0, "customers": 0}
        assert body["mostBookedPackage"] is None

    def test_overview_fails_as_a_whole(self, client, auth_headers, monkeypatch):
        def broken(self):
            raise RuntimeError("storage down")

        monkeypatch.setattr(AnalyticsService, "total_customers", broken)

        response = client.get(f"{STATS_URL}/overview", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to compute overview"
