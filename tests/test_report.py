"""Report tests."""

from datetime import date, timedelta

from ecobite.models.inventory import InventoryItem
from ecobite.services.report import summarize
from ecobite.services.status import current_date

TODAY = date(2026, 6, 1)


def item(category: str, offset: int, state: str = "normal") -> InventoryItem:
    return InventoryItem(
        name="x",
        quantity=1,
        category=category,
        expiry_date=TODAY + timedelta(days=offset),
        state=state,
    )


def test_summarize_counts():
    """Test per-category and per-status counting."""
    items = [
        item("Refrigerated", -1),
        item("Refrigerated", 0),
        item("Pantry", 3),
        item("Pantry", 4),
        item("Frozen", 100),
        item("Frozen", -5, state="donated"),
    ]

    report = summarize(items, TODAY)
    assert report.Refrigerated == 2
    assert report.Pantry == 2
    assert report.Frozen == 2
    assert report.Expired == 1
    assert report.NearExpiry == 2
    assert report.Available == 2
    assert report.Donated == 1
    assert report.total == 6


def test_status_counts_sum_to_total():
    """Test that each item lands in exactly one status bucket."""
    items = [
        item(category, offset, state)
        for category in ("Refrigerated", "Pantry", "Frozen", "Unknown")
        for offset in range(-5, 8)
        for state in ("normal", "donated")
    ]

    report = summarize(items, TODAY)
    assert report.Donated + report.Expired + report.NearExpiry + report.Available == len(items)
    assert report.Refrigerated + report.Pantry + report.Frozen == len(items) * 3 // 4


def test_summarize_empty():
    """Test an empty inventory."""
    report = summarize([], TODAY)
    assert report.model_dump() == {
        "Refrigerated": 0,
        "Pantry": 0,
        "Frozen": 0,
        "Donated": 0,
        "Expired": 0,
        "NearExpiry": 0,
        "Available": 0,
        "total": 0,
    }


def test_report_endpoint(client, db, auth_headers, other_auth_headers):
    """Test the report over the user's visible items."""
    today = current_date()
    for payload in [
        {"name": "Milk", "quantity": 1, "category": "Refrigerated", "expiry_date": today},
        {"name": "Peas", "quantity": 1, "category": "Frozen", "expiry_date": today + timedelta(30)},
    ]:
        payload["expiry_date"] = payload["expiry_date"].isoformat()
        client.post("/inventory", headers=auth_headers, json=payload)

    db.add_all(
        [
            InventoryItem(
                user_id=auth_headers.user_id,
                name="Old bread",
                quantity=1,
                category="Pantry",
                expiry_date=today - timedelta(days=2),
                state="normal",
            ),
            InventoryItem(
                user_id=None,
                name="Shared soup",
                quantity=4,
                category="Pantry",
                expiry_date=today + timedelta(days=10),
                state="donated",
            ),
            InventoryItem(
                user_id=other_auth_headers.user_id,
                name="Not mine",
                quantity=1,
                category="Frozen",
                expiry_date=today + timedelta(days=10),
                state="normal",
            ),
        ]
    )
    db.commit()

    response = client.get("/report", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "Refrigerated": 1,
        "Pantry": 2,
        "Frozen": 1,
        "Donated": 1,
        "Expired": 1,
        "NearExpiry": 1,
        "Available": 1,
        "total": 4,
    }
