import pytest
from sqlalchemy.exc import SQLAlchemyError

from streamline.domain.schedules.admin_service import AdminScheduleService
from streamline.domain.schedules.repository import ScheduleRepository
from streamline.domain.schedules.schemas import ScheduleWrite
from streamline.models import Product, ScheduleProduct, TalkingPoint, Voucher
from streamline.shared.errors import InternalError


@pytest.fixture
def catalog(db_session, seeded):
    products = {p.sku: p.id for p in db_session.query(Product).all()}
    vouchers = {v.code: v.id for v in db_session.query(Voucher).all()}
    return {"products": products, "vouchers": vouchers}


@pytest.fixture
def payload(seeded, catalog):
    return {
        "hostId": seeded["user_ids"]["rina"],
        "title": "Payday Mega Live",
        "platform": "TOKOPEDIA_PLAY",
        "storeName": "TIMELESS_BEAUTY",
        "scheduledAt": "2025-01-15T19:30:00",
        "salesTarget": "5000000",
        "products": [
            {"productId": catalog["products"]["GROGLO-SERUM-001"], "promoPrice": 129000},
            {"productId": str(catalog["products"]["TKIS-PILLOW-001"]), "promoPrice": "249000"},
        ],
        "vouchers": [{"voucherId": catalog["vouchers"]["NEWUSER20"]}],
        "talkingPoints": [
            {"text": "Open with the payday countdown", "order": 1},
            {"text": "Bundle the serum with the pillow", "order": 2},
            {"text": "Close with voucher NEWUSER20", "order": 3},
        ],
    }


def create(client, admin_headers, payload) -> dict:
    response = client.post("/api/admin/schedules", json=payload, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ============================================================================
# CREATE / READ
# ============================================================================


def test_create_then_get_returns_submitted_children(client, admin_headers, payload):
    created = create(client, admin_headers, payload)

    response = client.get(f"/api/admin/schedules/{created['id']}", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()["data"]

    assert data["host"]["username"] == "rina"
    assert data["salesTarget"] == 5000000
    assert data["scheduledAt"].startswith("2025-01-15T19:30:00")
    assert {(p["productId"], p["promoPrice"]) for p in data["products"]} == {
        (int(p["productId"]), float(p["promoPrice"])) for p in payload["products"]
    }
    assert all(p["product"]["sku"] for p in data["products"])
    assert [v["voucherId"] for v in data["vouchers"]] == [payload["vouchers"][0]["voucherId"]]
    assert data["vouchers"][0]["voucher"]["code"] == "NEWUSER20"
    assert [tp["text"] for tp in data["talkingPoints"]] == [tp["text"] for tp in payload["talkingPoints"]]


def test_create_orders_talking_points_by_order(client, admin_headers, payload):
    payload["talkingPoints"] = [
        {"text": "third", "order": 3},
        {"text": "first", "order": 1},
        {"text": "second", "order": "2"},
    ]
    created = create(client, admin_headers, payload)
    assert [tp["text"] for tp in created["talkingPoints"]] == ["first", "second", "third"]


def test_create_numbers_missing_talking_point_order(client, admin_headers, payload):
    payload["talkingPoints"] = [{"text": "a"}, {"text": "b"}]
    created = create(client, admin_headers, payload)
    assert [tp["order"] for tp in created["talkingPoints"]] == [1, 2]


def test_create_keeps_wall_clock_time(client, admin_headers, payload):
    payload["scheduledAt"] = "2025-01-15T10:00:00.000Z"
    created = create(client, admin_headers, payload)
    assert created["scheduledAt"].startswith("2025-01-15T10:00:00")


def test_create_unparsable_sales_target_defaults_to_zero(client, admin_headers, payload):
    payload["salesTarget"] = "lots"
    assert create(client, admin_headers, payload)["salesTarget"] == 0


@pytest.mark.parametrize("field", ["hostId", "title", "platform", "storeName", "scheduledAt"])
def test_create_requires_fields(client, admin_headers, payload, field):
    payload[field] = ""
    response = client.post("/api/admin/schedules", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert field in response.json()["message"]


def test_create_rejects_unknown_platform(client, admin_headers, payload):
    payload["platform"] = "YOUTUBE_LIVE"
    response = client.post("/api/admin/schedules", json=payload, headers=admin_headers)
    assert response.status_code == 400


def test_create_platform_must_match_exactly(client, admin_headers, payload):
    payload["platform"] = "tokopedia_play"
    response = client.post("/api/admin/schedules", json=payload, headers=admin_headers)
    assert response.status_code == 400


def test_create_rejects_unknown_references(client, admin_headers, payload):
    payload["products"] = [{"productId": 99999, "promoPrice": 1000}]
    response = client.post("/api/admin/schedules", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert "99999" in response.json()["message"]


def test_get_missing_schedule(client, admin_headers):
    response = client.get("/api/admin/schedules/nope", headers=admin_headers)
    assert response.status_code == 404


# ============================================================================
# LIST FILTERS
# ============================================================================


def test_list_all_includes_host_and_is_sorted(client, admin_headers, seeded):
    data = client.get("/api/admin/schedules", headers=admin_headers).json()["data"]

    assert len(data) == 3
    assert [s["scheduledAt"] for s in data] == sorted(s["scheduledAt"] for s in data)
    assert set(data[0]["host"]) == {"id", "displayName", "username"}


def test_list_date_filter_is_inclusive_local_day(client, admin_headers, payload):
    moments = {
        "day-before": "2025-01-14T23:59:59.999",
        "start": "2025-01-15T00:00:00.000",
        "end": "2025-01-15T23:59:59.999",
        "day-after": "2025-01-16T00:00:00.000",
    }
    for title, moment in moments.items():
        create(client, admin_headers, {**payload, "title": title, "scheduledAt": moment})

    response = client.get("/api/admin/schedules", params={"date": "2025-01-15"}, headers=admin_headers)

    assert response.status_code == 200
    assert [s["title"] for s in response.json()["data"]] == ["start", "end"]


def test_list_host_and_platform_filters(client, admin_headers, seeded):
    siti = seeded["user_ids"]["siti"]

    by_host = client.get("/api/admin/schedules", params={"hostId": siti}, headers=admin_headers).json()["data"]
    assert {s["host"]["id"] for s in by_host} == {siti}
    assert len(by_host) == 2

    by_platform = client.get(
        "/api/admin/schedules", params={"platform": "SHOPEE_LIVE"}, headers=admin_headers
    ).json()["data"]
    assert len(by_platform) == 2
    assert {s["platform"] for s in by_platform} == {"SHOPEE_LIVE"}

    both = client.get(
        "/api/admin/schedules",
        params={"hostId": siti, "platform": "TIKTOK_LIVE"},
        headers=admin_headers,
    ).json()["data"]
    assert len(both) == 1


@pytest.mark.parametrize(
    "params",
    [{"date": "15-01-2025x"}, {"hostId": "abc"}, {"platform": "MYSPACE"}, {"platform": "shopee_live"}],
)
def test_list_rejects_bad_filters(client, admin_headers, params):
    response = client.get("/api/admin/schedules", params=params, headers=admin_headers)
    assert response.status_code == 400


# ============================================================================
# UPDATE
# ============================================================================


def test_update_with_empty_products_clears_them(client, admin_headers, payload):
    created = create(client, admin_headers, payload)

    response = client.put(
        f"/api/admin/schedules/{created['id']}",
        json={"products": []},
        headers=admin_headers,
    )
    assert response.status_code == 200

    data = client.get(f"/api/admin/schedules/{created['id']}", headers=admin_headers).json()["data"]
    assert data["products"] == []


def test_update_partial_scalars_and_full_child_replacement(client, admin_headers, payload, catalog):
    created = create(client, admin_headers, payload)
    new_product = catalog["products"]["TKIS-BEDSHEET-001"]

    response = client.put(
        f"/api/admin/schedules/{created['id']}",
        json={
            "title": "Payday Mega Live (extended)",
            "salesTarget": 7500000,
            "products": [{"productId": new_product, "promoPrice": 450000}],
            "talkingPoints": [{"text": "Only point", "order": 1}],
        },
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]

    assert data["title"] == "Payday Mega Live (extended)"
    assert data["salesTarget"] == 7500000
    # Untouched scalars keep their values
    assert data["platform"] == "TOKOPEDIA_PLAY"
    assert data["storeName"] == "TIMELESS_BEAUTY"
    assert data["host"]["username"] == "rina"
    assert [(p["productId"], p["promoPrice"]) for p in data["products"]] == [(new_product, 450000)]
    assert [tp["text"] for tp in data["talkingPoints"]] == ["Only point"]
    # vouchers were omitted, which replaces them with nothing
    assert data["vouchers"] == []


def test_update_missing_schedule(client, admin_headers):
    response = client.put("/api/admin/schedules/nope", json={"title": "x"}, headers=admin_headers)
    assert response.status_code == 404


def test_update_invalid_reference_leaves_schedule_untouched(client, admin_headers, payload):
    created = create(client, admin_headers, payload)

    response = client.put(
        f"/api/admin/schedules/{created['id']}",
        json={"title": "changed", "vouchers": [{"voucherId": 424242}]},
        headers=admin_headers,
    )
    assert response.status_code == 400

    data = client.get(f"/api/admin/schedules/{created['id']}", headers=admin_headers).json()["data"]
    assert data["title"] == payload["title"]
    assert len(data["products"]) == 2
    assert len(data["vouchers"]) == 1


def test_update_rolls_back_when_recreate_fails(database, seeded, monkeypatch):
    schedule_id = seeded["siti_schedule_ids"][0]
    session = database.session()
    service = AdminScheduleService(session)

    def fail(*args, **kwargs):
        raise SQLAlchemyError("insert failed")

    monkeypatch.setattr(ScheduleRepository, "add_children", staticmethod(fail))

    with pytest.raises(InternalError):
        service.update(schedule_id, ScheduleWrite(title="Should not stick", products=[]))
    session.close()

    verify = database.session()
    try:
        schedule = ScheduleRepository.get_schedule_with_children(verify, schedule_id)
        assert schedule.title == "Flash Sale Groglo 11.11! 🔥"
        assert len(schedule.products) == 3
        assert len(schedule.vouchers) == 2
        assert len(schedule.talking_points) == 4
    finally:
        verify.close()


# ============================================================================
# DELETE
# ============================================================================


def test_delete_cascades_to_children(client, admin_headers, payload, db_session):
    created = create(client, admin_headers, payload)

    response = client.delete(f"/api/admin/schedules/{created['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True

    assert client.get(f"/api/admin/schedules/{created['id']}", headers=admin_headers).status_code == 404
    db_session.expire_all()
    assert db_session.query(ScheduleProduct).filter(ScheduleProduct.schedule_id == created["id"]).count() == 0
    assert db_session.query(TalkingPoint).filter(TalkingPoint.schedule_id == created["id"]).count() == 0
    # Catalog rows are only referenced, never deleted
    assert db_session.query(Product).count() == 5


def test_delete_missing_schedule(client, admin_headers):
    assert client.delete("/api/admin/schedules/nope", headers=admin_headers).status_code == 404
