from datetime import datetime, timedelta

from streamline.domain.schedules.repository import ScheduleRepository
from streamline.models import Platform, Schedule


def test_list_my_schedules_only_mine_and_sorted(client, host_headers, seeded):
    response = client.get("/api/schedules", headers=host_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert [s["id"] for s in data] == seeded["siti_schedule_ids"]
    times = [s["scheduledAt"] for s in data]
    assert times == sorted(times)
    assert set(data[0]) == {
        "id",
        "title",
        "platform",
        "storeName",
        "scheduledAt",
        "salesTarget",
        "acknowledgedAt",
    }


def test_list_excludes_past_days(client, host_headers, seeded, db_session):
    db_session.add(
        Schedule(
            host_id=seeded["user_ids"]["siti"],
            title="Yesterday's stream",
            platform=Platform.LAZADA_LIVE.value,
            store_name="PET_JOY",
            scheduled_at=datetime.now() - timedelta(days=1),
        )
    )
    db_session.commit()

    data = client.get("/api/schedules", headers=host_headers).json()["data"]
    assert "Yesterday's stream" not in [s["title"] for s in data]
    assert len(data) == 2


def test_detail_is_full_briefing(client, host_headers, seeded):
    schedule_id = seeded["siti_schedule_ids"][0]

    response = client.get(f"/api/schedules/{schedule_id}", headers=host_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == schedule_id
    assert data["salesTarget"] == 5000000
    assert {p["sku"] for p in data["products"]} == {
        "GROGLO-SERUM-001",
        "GROGLO-CREAM-001",
        "GROGLO-TONER-001",
    }
    serum = next(p for p in data["products"] if p["sku"] == "GROGLO-SERUM-001")
    assert serum["defaultPrice"] == 199000
    assert serum["promoPrice"] == 99000
    assert {v["code"] for v in data["vouchers"]} == {"GGMG1111", "FLASHSALE50"}
    assert [tp["order"] for tp in data["talkingPoints"]] == [1, 2, 3, 4]


def test_detail_of_other_hosts_schedule_is_forbidden(client, host_headers, seeded):
    response = client.get(f"/api/schedules/{seeded['rina_schedule_ids'][0]}", headers=host_headers)
    assert response.status_code == 403
    assert response.json()["success"] is False


def test_detail_of_missing_schedule_is_not_found_not_forbidden(client, host_headers, seeded):
    response = client.get("/api/schedules/does-not-exist", headers=host_headers)
    assert response.status_code == 404


def test_acknowledge_sets_timestamp_once(client, host_headers, seeded):
    schedule_id = seeded["siti_schedule_ids"][0]

    first = client.post(f"/api/schedules/{schedule_id}/acknowledge", headers=host_headers)
    assert first.status_code == 200
    acknowledged_at = first.json()["data"]["acknowledgedAt"]
    assert first.json()["data"]["id"] == schedule_id

    second = client.post(f"/api/schedules/{schedule_id}/acknowledge", headers=host_headers)
    assert second.status_code == 400
    body = second.json()
    assert body["success"] is False
    assert datetime.fromisoformat(body["data"]["acknowledgedAt"]) == datetime.fromisoformat(acknowledged_at)

    detail = client.get(f"/api/schedules/{schedule_id}", headers=host_headers).json()["data"]
    assert datetime.fromisoformat(detail["acknowledgedAt"]) == datetime.fromisoformat(acknowledged_at)


def test_acknowledge_already_acknowledged_seed(client, other_host_headers, seeded):
    schedule_id = seeded["rina_schedule_ids"][0]
    response = client.post(f"/api/schedules/{schedule_id}/acknowledge", headers=other_host_headers)
    assert response.status_code == 400
    assert response.json()["data"]["acknowledgedAt"] is not None


def test_acknowledge_ownership_and_existence(client, host_headers, seeded):
    assert client.post("/api/schedules/missing/acknowledge", headers=host_headers).status_code == 404
    response = client.post(
        f"/api/schedules/{seeded['rina_schedule_ids'][0]}/acknowledge", headers=host_headers
    )
    assert response.status_code == 403


def test_mark_acknowledged_is_compare_and_set(db_session, seeded):
    schedule_id = seeded["siti_schedule_ids"][1]
    first_time = datetime(2025, 1, 15, 9, 0)

    assert ScheduleRepository.mark_acknowledged(db_session, schedule_id, first_time) is True
    assert ScheduleRepository.mark_acknowledged(db_session, schedule_id, datetime(2025, 1, 15, 9, 5)) is False

    db_session.expire_all()
    assert ScheduleRepository.get_schedule(db_session, schedule_id).acknowledged_at == first_time
