"""Expenses, ownership isolation and the per-owner aggregates."""
from decimal import Decimal

import pytest
import pytest_asyncio

from expense_tracker.core.exceptions import CategoryNotFound, IdentityNotFound
from expense_tracker.schemas.expense import ExpenseCreate
from expense_tracker.services import expense as expense_service

BASE = "/api/expenses"


def expense_body(category_id, description="Lunch", amount="12.50", expense_date="2024-05-01", **extra):
    return {
        "description": description,
        "amount": amount,
        "expense_date": expense_date,
        "category_id": category_id,
        **extra,
    }


async def create(client, headers, category_id, **kwargs):
    response = await client.post(BASE, json=expense_body(category_id, **kwargs), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def travel_body():
    return {"name": "Travel", "color": "#F7DC6F", "icon": "fas fa-plane"}


@pytest_asyncio.fixture
async def travel(client, admin_headers, travel_body):
    response = await client.post("/api/expense-categories", json=travel_body, headers=admin_headers)
    assert response.status_code == 201
    return response.json()


class TestCreate:
    async def test_create_and_total(self, client, alice_headers, food):
        expense = await create(client, alice_headers, food["id"])
        assert isinstance(expense["id"], int)
        assert Decimal(expense["amount"]) == Decimal("12.50")
        assert expense["category"]["id"] == food["id"]
        assert expense["category"]["name"] == "Food"
        assert expense["payment_method"] == "CASH"
        assert expense["is_recurring"] is False

        total = await client.get(f"{BASE}/total", headers=alice_headers)
        assert total.status_code == 200
        assert Decimal(total.json()["total"]) == Decimal("12.50")

    async def test_total_without_expenses_is_zero(self, client, alice_headers):
        response = await client.get(f"{BASE}/total", headers=alice_headers)
        assert response.status_code == 200
        assert Decimal(response.json()["total"]) == Decimal("0")

    async def test_optional_fields(self, client, alice_headers, food):
        expense = await create(
            client, alice_headers, food["id"],
            notes="monthly",
            payment_method="CREDIT_CARD",
            is_recurring=True,
            recurring_frequency="MONTHLY",
            receipt_url="https://example.com/r/1.png",
        )
        assert expense["notes"] == "monthly"
        assert expense["receipt_url"] == "https://example.com/r/1.png"
        assert expense["payment_method"] == "CREDIT_CARD"
        assert expense["recurring_frequency"] == "MONTHLY"

    @pytest.mark.parametrize("amount", ["0", "-5.00", "1.234", "100000000.00"])
    async def test_invalid_amounts(self, client, alice_headers, food, amount):
        response = await client.post(BASE, json=expense_body(food["id"], amount=amount), headers=alice_headers)
        assert response.status_code == 400
        assert "error" in response.json()

    async def test_description_required(self, client, alice_headers, food):
        response = await client.post(BASE, json=expense_body(food["id"], description="x"), headers=alice_headers)
        assert response.status_code == 400

    async def test_unknown_category(self, client, alice_headers):
        response = await client.post(BASE, json=expense_body(999), headers=alice_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Category not found: 999"}

    async def test_service_resolves_owner_and_category(self, db, alice, food):
        ex_in = ExpenseCreate(**expense_body(food["id"]))
        with pytest.raises(IdentityNotFound):
            await expense_service.create_expense(ex_in, "ghost", db)
        with pytest.raises(CategoryNotFound):
            await expense_service.create_expense(ExpenseCreate(**expense_body(999)), "alice", db)


class TestOwnership:
    async def test_other_owner_gets_not_found(self, client, alice_headers, bob_headers, food):
        expense = await create(client, alice_headers, food["id"])
        response = await client.get(f"{BASE}/{expense['id']}", headers=bob_headers)
        assert response.status_code == 404
        assert response.json() == {"error": f"Expense not found with id: {expense['id']}"}

    async def test_other_owner_cannot_delete(self, client, alice_headers, bob_headers, food):
        expense = await create(client, alice_headers, food["id"])
        response = await client.delete(f"{BASE}/{expense['id']}", headers=bob_headers)
        assert response.status_code == 404

        still_there = await client.get(f"{BASE}/{expense['id']}", headers=alice_headers)
        assert still_there.status_code == 200

    async def test_service_delete_reports_false(self, client, db, alice_headers, bob, food):
        expense = await create(client, alice_headers, food["id"])
        assert await expense_service.delete_expense(expense["id"], "bob", db) is False
        assert await expense_service.get_expense(expense["id"], "alice", db) is not None

    async def test_other_owner_cannot_update(self, client, alice_headers, bob_headers, food):
        expense = await create(client, alice_headers, food["id"])
        response = await client.put(
            f"{BASE}/{expense['id']}", json=expense_body(food["id"], description="Hijacked"), headers=bob_headers
        )
        assert response.status_code == 404

        unchanged = await client.get(f"{BASE}/{expense['id']}", headers=alice_headers)
        assert unchanged.json()["description"] == "Lunch"

    async def test_lists_and_totals_are_per_owner(self, client, alice_headers, bob_headers, food):
        await create(client, alice_headers, food["id"], amount="10.00")
        await create(client, bob_headers, food["id"], amount="99.00")

        alice_list = await client.get(BASE, headers=alice_headers)
        bob_total = await client.get(f"{BASE}/total", headers=bob_headers)
        alice_count = await client.get(f"{BASE}/count", headers=alice_headers)
        assert len(alice_list.json()) == 1
        assert Decimal(bob_total.json()["total"]) == Decimal("99.00")
        assert alice_count.json() == {"count": 1}


class TestUpdateAndDelete:
    async def test_update_replaces_fields(self, client, alice_headers, food, travel):
        expense = await create(client, alice_headers, food["id"])
        response = await client.put(
            f"{BASE}/{expense['id']}",
            json=expense_body(travel["id"], description="Train", amount="40.00", expense_date="2024-06-02"),
            headers=alice_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == expense["id"]
        assert body["description"] == "Train"
        assert Decimal(body["amount"]) == Decimal("40.00")
        assert body["expense_date"] == "2024-06-02"
        assert body["category"]["name"] == "Travel"

    async def test_update_with_unknown_category(self, client, alice_headers, food):
        expense = await create(client, alice_headers, food["id"])
        response = await client.put(f"{BASE}/{expense['id']}", json=expense_body(999), headers=alice_headers)
        assert response.status_code == 404

    async def test_update_missing(self, client, alice_headers, food):
        response = await client.put(f"{BASE}/999", json=expense_body(food["id"]), headers=alice_headers)
        assert response.status_code == 404

    async def test_delete(self, client, alice_headers, food):
        expense = await create(client, alice_headers, food["id"])
        response = await client.delete(f"{BASE}/{expense['id']}", headers=alice_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Expense deleted successfully"}

        gone = await client.get(f"{BASE}/{expense['id']}", headers=alice_headers)
        assert gone.status_code == 404


class TestQueries:
    async def test_list_is_newest_first(self, client, alice_headers, food):
        await create(client, alice_headers, food["id"], description="Older", expense_date="2024-01-01")
        await create(client, alice_headers, food["id"], description="Newer", expense_date="2024-03-01")
        response = await client.get(BASE, headers=alice_headers)
        assert [e["description"] for e in response.json()] == ["Newer", "Older"]

    async def test_pagination(self, client, alice_headers, food):
        for day in range(1, 6):
            await create(client, alice_headers, food["id"], description=f"Day {day}", expense_date=f"2024-05-0{day}")

        response = await client.get(f"{BASE}/paginated", params={"page": 1, "size": 2}, headers=alice_headers)
        assert response.status_code == 200
        page = response.json()
        assert [e["description"] for e in page["content"]] == ["Day 3", "Day 2"]
        assert page["total_elements"] == 5
        assert page["total_pages"] == 3
        assert page["page"] == 1
        assert page["size"] == 2
        assert page["number_of_elements"] == 2
        assert page["first"] is False
        assert page["last"] is False

        tail = (await client.get(f"{BASE}/paginated", params={"page": 2, "size": 2}, headers=alice_headers)).json()
        assert tail["number_of_elements"] == 1
        assert tail["last"] is True

    async def test_pagination_rejects_bad_size(self, client, alice_headers):
        response = await client.get(f"{BASE}/paginated", params={"size": 0}, headers=alice_headers)
        assert response.status_code == 400

    async def test_date_range_is_inclusive(self, client, alice_headers, food):
        for day in ("2024-04-30", "2024-05-01", "2024-05-15", "2024-05-31", "2024-06-01"):
            await create(client, alice_headers, food["id"], description=f"On {day}", amount="10.00", expense_date=day)

        params = {"start_date": "2024-05-01", "end_date": "2024-05-31"}
        listed = await client.get(f"{BASE}/date-range", params=params, headers=alice_headers)
        assert [e["expense_date"] for e in listed.json()] == ["2024-05-31", "2024-05-15", "2024-05-01"]

        total = await client.get(f"{BASE}/total/date-range", params=params, headers=alice_headers)
        assert Decimal(total.json()["total"]) == Decimal("30.00")

    async def test_reversed_date_range(self, client, alice_headers):
        params = {"start_date": "2024-06-01", "end_date": "2024-05-01"}
        response = await client.get(f"{BASE}/date-range", params=params, headers=alice_headers)
        assert response.status_code == 400

    async def test_by_category(self, client, alice_headers, food, travel):
        await create(client, alice_headers, food["id"], description="Lunch")
        await create(client, alice_headers, travel["id"], description="Taxi")
        response = await client.get(f"{BASE}/category/{travel['id']}", headers=alice_headers)
        assert [e["description"] for e in response.json()] == ["Taxi"]

        missing = await client.get(f"{BASE}/category/999", headers=alice_headers)
        assert missing.status_code == 404

    async def test_search_ignores_case(self, client, alice_headers, food):
        await create(client, alice_headers, food["id"], description="Team LUNCH")
        await create(client, alice_headers, food["id"], description="Dinner")
        response = await client.get(f"{BASE}/search", params={"description": "lunch"}, headers=alice_headers)
        assert [e["description"] for e in response.json()] == ["Team LUNCH"]

    @pytest.mark.parametrize("term,expected", [("_", ["gift_card"]), ("%", ["50% off"]), ("/", [])])
    async def test_search_treats_wildcards_literally(self, client, alice_headers, food, term, expected):
        await create(client, alice_headers, food["id"], description="Lunch", expense_date="2024-05-01")
        await create(client, alice_headers, food["id"], description="gift_card", expense_date="2024-05-02")
        await create(client, alice_headers, food["id"], description="50% off", expense_date="2024-05-03")
        response = await client.get(f"{BASE}/search", params={"description": term}, headers=alice_headers)
        assert response.status_code == 200
        assert [e["description"] for e in response.json()] == expected

    async def test_recurring(self, client, alice_headers, food):
        await create(client, alice_headers, food["id"], description="Gym", is_recurring=True, recurring_frequency="MONTHLY")
        await create(client, alice_headers, food["id"], description="Coffee")
        response = await client.get(f"{BASE}/recurring", headers=alice_headers)
        assert [e["description"] for e in response.json()] == ["Gym"]

    async def test_recent_returns_latest_ten(self, client, alice_headers, food):
        for n in range(12):
            await create(client, alice_headers, food["id"], description=f"Item {n}", expense_date="2024-01-01")
        response = await client.get(f"{BASE}/recent", headers=alice_headers)
        descriptions = [e["description"] for e in response.json()]
        assert len(descriptions) == 10
        assert descriptions[0] == "Item 11"
        assert "Item 0" not in descriptions
        assert "Item 1" not in descriptions

    async def test_total_matches_listed_amounts(self, client, alice_headers, food):
        for amount in ("0.10", "0.20", "19.99"):
            await create(client, alice_headers, food["id"], amount=amount)
        listed = (await client.get(BASE, headers=alice_headers)).json()
        total = (await client.get(f"{BASE}/total", headers=alice_headers)).json()["total"]
        assert Decimal(total) == sum(Decimal(e["amount"]) for e in listed)
        assert Decimal(total) == Decimal("20.29")


class TestSummaries:
    async def test_by_category(self, client, alice_headers, food, travel):
        await create(client, alice_headers, food["id"], amount="5.00")
        await create(client, alice_headers, food["id"], amount="7.50")
        await create(client, alice_headers, travel["id"], amount="100.00")
        response = await client.get(f"{BASE}/summary/by-category", headers=alice_headers)
        assert response.status_code == 200
        rows = [(r["category"], Decimal(r["total"])) for r in response.json()]
        assert rows == [("Travel", Decimal("100.00")), ("Food", Decimal("12.50"))]

    async def test_monthly(self, client, alice_headers, food):
        await create(client, alice_headers, food["id"], amount="5.00", expense_date="2024-04-10")
        await create(client, alice_headers, food["id"], amount="6.00", expense_date="2024-05-01")
        await create(client, alice_headers, food["id"], amount="4.00", expense_date="2024-05-20")
        response = await client.get(f"{BASE}/summary/monthly", headers=alice_headers)
        rows = [(r["year"], r["month"], Decimal(r["total"])) for r in response.json()]
        assert rows == [(2024, 5, Decimal("10.00")), (2024, 4, Decimal("5.00"))]
