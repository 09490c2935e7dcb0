from typing import Dict

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from trade_journal import models


def test_create_entry(
    client: TestClient,
    normal_user_token_headers: Dict[str, str],
    test_user: models.User,
) -> None:
    response = client.put(
        "/api/daily-entries/2024-03-15",
        headers=normal_user_token_headers,
        json={
            "profit_loss": 250.75,
            "trades_count": 4,
            "amount_invested": 5000,
            "roi_percent": 5.015,
            "notes": "Trend day, followed the plan.",
        },
    )
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["trade_date"] == "2024-03-15"
    assert data["user_id"] == test_user.id
    assert data["profit_loss"] == 250.75
    assert data["trades_count"] == 4
    assert data["amount_invested"] == 5000
    assert data["notes"] == "Trend day, followed the plan."
    assert "id" in data


def test_upsert_replaces_existing_entry(
    client: TestClient,
    normal_user_token_headers: Dict[str, str],
    db_session: Session,
    make_entry,
) -> None:
    first = make_entry(client, normal_user_token_headers, "2024-03-18", 100, 2, amount_invested=1000)
    second = make_entry(client, normal_user_token_headers, "2024-03-18", -40, 1)

    assert second["id"] == first["id"]
    assert second["profit_loss"] == -40
    assert second["trades_count"] == 1
    # Omitted optional fields are cleared, not merged
    assert second["amount_invested"] is None
    assert db_session.query(models.DailyEntry).count() == 1


def test_upsert_requires_profit_loss_and_trades_count(
    client: TestClient, normal_user_token_headers: Dict[str, str]
) -> None:
    response = client.put(
        "/api/daily-entries/2024-03-15",
        headers=normal_user_token_headers,
        json={"profit_loss": 10},
    )
    assert response.status_code == 422

    response = client.put(
        "/api/daily-entries/2024-03-15",
        headers=normal_user_token_headers,
        json={"trades_count": 1},
    )
    assert response.status_code == 422


def test_upsert_rejects_negative_counts(
    client: TestClient, normal_user_token_headers: Dict[str, str]
) -> None:
    response = client.put(
        "/api/daily-entries/2024-03-15",
        headers=normal_user_token_headers,
        json={"profit_loss": 10, "trades_count": -2},
    )
    assert response.status_code == 422

    response = client.put(
        "/api/daily-entries/2024-03-15",
        headers=normal_user_token_headers,
        json={"profit_loss": 10, "trades_count": 1, "amount_invested": -5},
    )
    assert response.status_code == 422


def test_upsert_rejects_bad_dates(
    client: TestClient, normal_user_token_headers: Dict[str, str]
) -> None:
    payload = {"profit_loss": 1, "trades_count": 1}
    for bad in ("15-03-2024", "2024-3-5", "2024-13-01", "2024-02-30"):
        response = client.put(
            f"/api/daily-entries/{bad}", headers=normal_user_token_headers, json=payload
        )
        assert response.status_code == 422, bad


def test_entries_require_auth(client: TestClient) -> None:
    assert client.get("/api/daily-entries?year=2024&month=3").status_code == 401
    assert (
        client.put(
            "/api/daily-entries/2024-03-15", json={"profit_loss": 1, "trades_count": 1}
        ).status_code
        == 401
    )


def test_read_month(
    client: TestClient, normal_user_token_headers: Dict[str, str], make_entry
) -> None:
    make_entry(client, normal_user_token_headers, "2024-03-20", 30)
    make_entry(client, normal_user_token_headers, "2024-03-01", 10)
    make_entry(client, normal_user_token_headers, "2024-03-31", 20)
    make_entry(client, normal_user_token_headers, "2024-04-01", 99)
    make_entry(client, normal_user_token_headers, "2024-02-29", 99)

    response = client.get(
        "/api/daily-entries?year=2024&month=3", headers=normal_user_token_headers
    )
    assert response.status_code == 200, response.text
    dates = [entry["trade_date"] for entry in response.json()]
    assert dates == ["2024-03-01", "2024-03-20", "2024-03-31"]


def test_read_december_rolls_into_next_year(
    client: TestClient, normal_user_token_headers: Dict[str, str], make_entry
) -> None:
    make_entry(client, normal_user_token_headers, "2023-12-31", 5)
    make_entry(client, normal_user_token_headers, "2024-01-01", 6)

    response = client.get(
        "/api/daily-entries?year=2023&month=12", headers=normal_user_token_headers
    )
    assert [e["trade_date"] for e in response.json()] == ["2023-12-31"]


def test_read_month_validates_query(
    client: TestClient, normal_user_token_headers: Dict[str, str]
) -> None:
    for query in ("", "?year=2024", "?month=3", "?year=2024&month=13", "?year=2024&month=0", "?year=abc&month=1"):
        response = client.get(f"/api/daily-entries{query}", headers=normal_user_token_headers)
        assert response.status_code == 422, query


def test_entries_are_scoped_to_user(
    client: TestClient,
    normal_user_token_headers: Dict[str, str],
    other_user_token_headers: Dict[str, str],
    make_entry,
) -> None:
    make_entry(client, normal_user_token_headers, "2024-03-05", 100)
    make_entry(client, other_user_token_headers, "2024-03-05", -100)

    mine = client.get(
        "/api/daily-entries?year=2024&month=3", headers=normal_user_token_headers
    ).json()
    theirs = client.get(
        "/api/daily-entries?year=2024&month=3", headers=other_user_token_headers
    ).json()

    assert [e["profit_loss"] for e in mine] == [100]
    assert [e["profit_loss"] for e in theirs] == [-100]


def test_read_single_entry(
    client: TestClient, normal_user_token_headers: Dict[str, str], make_entry
) -> None:
    make_entry(client, normal_user_token_headers, "2024-03-07", 12.5, 3)

    response = client.get("/api/daily-entries/2024-03-07", headers=normal_user_token_headers)
    assert response.status_code == 200
    assert response.json()["profit_loss"] == 12.5

    missing = client.get("/api/daily-entries/2024-03-08", headers=normal_user_token_headers)
    assert missing.status_code == 404


def test_delete_entry(
    client: TestClient, normal_user_token_headers: Dict[str, str], make_entry
) -> None:
    make_entry(client, normal_user_token_headers, "2024-03-09", 1)

    response = client.delete("/api/daily-entries/2024-03-09", headers=normal_user_token_headers)
    assert response.status_code == 204

    response = client.delete("/api/daily-entries/2024-03-09", headers=normal_user_token_headers)
    assert response.status_code == 404


def test_cannot_delete_other_users_entry(
    client: TestClient,
    normal_user_token_headers: Dict[str, str],
    other_user_token_headers: Dict[str, str],
    make_entry,
) -> None:
    make_entry(client, other_user_token_headers, "2024-03-10", 50)

    response = client.delete("/api/daily-entries/2024-03-10", headers=normal_user_token_headers)
    assert response.status_code == 404
    assert (
        client.get("/api/daily-entries/2024-03-10", headers=other_user_token_headers).status_code
        == 200
    )


def test_available_months(
    client: TestClient, normal_user_token_headers: Dict[str, str], make_entry
) -> None:
    empty = client.get("/api/daily-entries/months", headers=normal_user_token_headers)
    assert empty.status_code == 200
    assert empty.json() == {"months": []}

    for day in ("2024-01-03", "2024-01-20", "2023-11-30", "2024-03-01"):
        make_entry(client, normal_user_token_headers, day, 1)

    response = client.get("/api/daily-entries/months", headers=normal_user_token_headers)
    assert response.json() == {"months": ["2024-03", "2024-01", "2023-11"]}
