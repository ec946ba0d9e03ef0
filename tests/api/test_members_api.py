"""
API tests for member, cash and holding endpoints.

Tests cover:
- Joining a group with cash and seeded holdings
- Editing and removing members
- Deposits, clamped withdrawals and rejected withdrawals
- Buying (including insufficient funds), editing and selling holdings
- Price updates
"""

from decimal import Decimal

from fastapi.testclient import TestClient

from league.config.settings import Settings, set_settings
from league.domain.models import WithdrawalPolicy


def _create_group(client: TestClient, name: str = "Wall Street Bets") -> str:
    return client.post("/groups", json={"name": name}).json()["group_id"]


def _join(client: TestClient, group_id: str, name: str = "Alice", cash: str = "1000", **extra) -> dict:
    response = client.post(
        f"/groups/{group_id}/members",
        json={"name": name, "initial_cash": cash, **extra},
    )
    assert response.status_code == 201
    return response.json()


def _buy(client: TestClient, group_id: str, member_id: str, symbol: str, quantity: str, price: str):
    return client.post(
        f"/groups/{group_id}/members/{member_id}/holdings",
        json={"symbol": symbol, "quantity": quantity, "price": price},
    )


# =============================================================================
# MEMBER TESTS
# =============================================================================


class TestCreateProfileAPI:
    """Tests for POST /groups/{group_id}/members."""

    def test_join_with_cash(self, client: TestClient):
        """
        GIVEN an empty group
        WHEN I join with $1,000
        THEN cash, net deposits and the baseline are all 1,000
        """
        group_id = _create_group(client)

        member = _join(client, group_id, color_hue=90)

        assert member["name"] == "Alice"
        assert member["color_hue"] == 90
        assert Decimal(member["cash_balance"]) == Decimal("1000")
        assert Decimal(member["net_deposits"]) == Decimal("1000")
        assert Decimal(member["initial_value"]) == Decimal("1000")

    def test_join_with_seeded_holdings(self, client: TestClient):
        group_id = _create_group(client)

        member = _join(
            client,
            group_id,
            cash="200",
            holdings=[{"symbol": "msft", "quantity": "2", "price": "400"}],
        )

        group = client.get(f"/groups/{group_id}").json()
        assert Decimal(member["initial_value"]) == Decimal("1000")
        assert Decimal(member["cash_balance"]) == Decimal("200")
        assert [h["symbol"] for h in group["holdings"]] == ["MSFT"]

    def test_negative_cash_returns_422(self, client: TestClient):
        group_id = _create_group(client)

        response = client.post(f"/groups/{group_id}/members", json={"name": "Alice", "initial_cash": "-1"})

        assert response.status_code == 422

    def test_unknown_group_returns_404(self, client: TestClient):
        response = client.post("/groups/ghost/members", json={"name": "Alice"})

        assert response.status_code == 404


class TestEditMemberAPI:

    def test_rename(self, client: TestClient):
        group_id = _create_group(client)
        member = _join(client, group_id)

        response = client.patch(
            f"/groups/{group_id}/members/{member['member_id']}",
            json={"name": "Alicia"},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Alicia"

    def test_remove_member(self, client: TestClient):
        group_id = _create_group(client)
        member = _join(client, group_id)
        _buy(client, group_id, member["member_id"], "AAPL", "1", "100")

        response = client.delete(f"/groups/{group_id}/members/{member['member_id']}")

        assert response.status_code == 204
        group = client.get(f"/groups/{group_id}").json()
        assert group["members"] == []
        assert group["holdings"] == []

    def test_remove_unknown_member_returns_404(self, client: TestClient):
        group_id = _create_group(client)

        response = client.delete(f"/groups/{group_id}/members/ghost")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "NOT_FOUND"


# =============================================================================
# CASH TESTS
# =============================================================================


class TestCashAPI:

    def test_deposit(self, client: TestClient):
        group_id = _create_group(client)
        member = _join(client, group_id)

        response = client.post(
            f"/groups/{group_id}/members/{member['member_id']}/deposit",
            json={"amount": "250.50", "note": "payday"},
        )

        assert response.status_code == 200
        assert Decimal(response.json()["cash_balance"]) == Decimal("1250.50")
        events = client.get(f"/groups/{group_id}/activity").json()["events"]
        assert events[0]["event_type"] == "DEPOSIT"
        assert events[0]["description"] == "payday"

    def test_zero_deposit_returns_422(self, client: TestClient):
        group_id = _create_group(client)
        member = _join(client, group_id)

        response = client.post(
            f"/groups/{group_id}/members/{member['member_id']}/deposit",
            json={"amount": "0"},
        )

        assert response.status_code == 422

    def test_withdraw_applied(self, client: TestClient):
        group_id = _create_group(client)
        member = _join(client, group_id)

        response = client.post(
            f"/groups/{group_id}/members/{member['member_id']}/withdraw",
            json={"amount": "300"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "APPLIED"
        assert Decimal(data["withdrawn"]) == Decimal("300")
        assert Decimal(data["cash_balance"]) == Decimal("700")

    def test_withdraw_more_than_balance_is_clamped(self, client: TestClient):
        """
        GIVEN a member with $1,000 cash
        WHEN I withdraw $5,000
        THEN the balance floors at 0 and the response says CLAMPED
        """
        group_id = _create_group(client)
        member = _join(client, group_id)

        response = client.post(
            f"/groups/{group_id}/members/{member['member_id']}/withdraw",
            json={"amount": "5000"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "CLAMPED"
        assert Decimal(data["requested"]) == Decimal("5000")
        assert Decimal(data["withdrawn"]) == Decimal("1000")
        assert Decimal(data["cash_balance"]) == Decimal("0")

    def test_withdraw_more_than_balance_is_rejected_under_reject_policy(self, client: TestClient):
        """
        GIVEN the reject withdrawal policy and a member with $1,000 cash
        WHEN I withdraw $5,000
        THEN the request fails and the detail carries the REJECTED withdrawal
        """
        set_settings(Settings(database_url="sqlite:///:memory:", withdrawal_policy=WithdrawalPolicy.REJECT))
        group_id = _create_group(client)
        member = _join(client, group_id)

        response = client.post(
            f"/groups/{group_id}/members/{member['member_id']}/withdraw",
            json={"amount": "5000"},
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "INSUFFICIENT_FUNDS"
        assert detail["value"]["outcome"] == "REJECTED"
        assert Decimal(detail["value"]["requested"]) == Decimal("5000")
        assert Decimal(detail["value"]["withdrawn"]) == Decimal("0")
        assert Decimal(detail["value"]["cash_balance"]) == Decimal("1000")
        members = client.get(f"/groups/{group_id}").json()["members"]
        assert Decimal(members[0]["cash_balance"]) == Decimal("1000")


# =============================================================================
# HOLDING TESTS
# =============================================================================


class TestHoldingsAPI:

    def test_buy_within_funds(self, client: TestClient):
        group_id = _create_group(client)
        member = _join(client, group_id)

        response = _buy(client, group_id, member["member_id"], "aapl", "5", "100")

        assert response.status_code == 201
        holding = response.json()
        assert holding["symbol"] == "AAPL"
        assert Decimal(holding["quantity"]) == Decimal("5")
        stored = client.get(f"/groups/{group_id}").json()["members"][0]
        assert Decimal(stored["cash_balance"]) == Decimal("500")

    def test_buy_exceeding_funds_returns_400(self, client: TestClient):
        """
        GIVEN a member with $100 cash
        WHEN I buy 5 units at $100
        THEN response is 400 INSUFFICIENT_FUNDS and nothing is bought
        """
        group_id = _create_group(client)
        member = _join(client, group_id, cash="100")

        response = _buy(client, group_id, member["member_id"], "AAPL", "5", "100")

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INSUFFICIENT_FUNDS"
        group = client.get(f"/groups/{group_id}").json()
        assert group["holdings"] == []
        assert Decimal(group["members"][0]["cash_balance"]) == Decimal("100")

    def test_buy_zero_quantity_returns_422(self, client: TestClient):
        group_id = _create_group(client)
        member = _join(client, group_id)

        response = _buy(client, group_id, member["member_id"], "AAPL", "0", "100")

        assert response.status_code == 422

    def test_update_holding(self, client: TestClient):
        group_id = _create_group(client)
        member = _join(client, group_id)
        holding = _buy(client, group_id, member["member_id"], "AAPL", "5", "100").json()

        response = client.patch(
            f"/groups/{group_id}/holdings/{holding['holding_id']}",
            json={"current_price": "130"},
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["current_price"]) == Decimal("130")
        assert Decimal(data["avg_buy_price"]) == Decimal("100")

    def test_sell_holding(self, client: TestClient):
        """
        GIVEN 10 units bought at $50 now priced at $70
        WHEN I sell the holding
        THEN proceeds are 700 and realized P&L is 200
        """
        group_id = _create_group(client)
        member = _join(client, group_id, cash="500")
        holding = _buy(client, group_id, member["member_id"], "NVDA", "10", "50").json()
        client.post(f"/groups/{group_id}/prices", json={"prices": {"NVDA": "70"}})

        response = client.post(f"/groups/{group_id}/holdings/{holding['holding_id']}/sell", json={})

        assert response.status_code == 200
        sale = response.json()
        assert Decimal(sale["proceeds"]) == Decimal("700")
        assert Decimal(sale["realized_pnl"]) == Decimal("200")
        stored = client.get(f"/groups/{group_id}").json()
        assert stored["holdings"] == []
        assert Decimal(stored["members"][0]["cash_balance"]) == Decimal("700")
        assert Decimal(stored["members"][0]["total_realized_pnl"]) == Decimal("200")

    def test_sell_unknown_holding_returns_404(self, client: TestClient):
        group_id = _create_group(client)

        response = client.post(f"/groups/{group_id}/holdings/ghost/sell", json={})

        assert response.status_code == 404

    def test_price_update_reports_changed_holdings(self, client: TestClient):
        group_id = _create_group(client)
        member = _join(client, group_id)
        _buy(client, group_id, member["member_id"], "AAPL", "1", "100")
        _buy(client, group_id, member["member_id"], "MSFT", "1", "100")

        response = client.post(
            f"/groups/{group_id}/prices",
            json={"prices": {"AAPL": "110", "MSFT": "100"}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["updated"][0]["symbol"] == "AAPL"
        assert data["updated"][0]["last_price_update"] is not None
