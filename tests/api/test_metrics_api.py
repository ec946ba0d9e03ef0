"""
API tests for metrics, leaderboard and chart endpoints.

Tests cover:
- Member and group metrics in both modes
- Leaderboard ordering and trade rankings
- Chart series selection and validation
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def league(client: TestClient) -> dict:
    """
    Alice joins with $1,000 and buys 5 AAPL at $100, which then rises to $120.
    Bob joins afterwards with $1,000 cash.
    """
    group_id = client.post("/groups", json={"name": "Metrics League"}).json()["group_id"]
    alice = client.post(f"/groups/{group_id}/members", json={"name": "Alice", "initial_cash": "1000"}).json()
    client.post(
        f"/groups/{group_id}/members/{alice['member_id']}/holdings",
        json={"symbol": "AAPL", "quantity": "5", "price": "100"},
    )
    client.post(f"/groups/{group_id}/prices", json={"prices": {"AAPL": "120"}})
    bob = client.post(f"/groups/{group_id}/members", json={"name": "Bob", "initial_cash": "1000"}).json()
    return {"group_id": group_id, "alice": alice["member_id"], "bob": bob["member_id"]}


def _member_metrics(client: TestClient, league: dict, who: str, **params) -> dict:
    response = client.get(
        f"/groups/{league['group_id']}/members/{league[who]}/metrics",
        params=params,
    )
    assert response.status_code == 200
    return response.json()


# =============================================================================
# METRICS TESTS
# =============================================================================


class TestMemberMetricsAPI:

    def test_all_time_uses_initial_value(self, client: TestClient, league: dict):
        """
        GIVEN Alice started with $1,000 and is now worth $1,100
        WHEN I request all-time metrics
        THEN P&L is +100 (+10%) against the INITIAL_VALUE baseline
        """
        data = _member_metrics(client, league, "alice")

        assert data["mode"] == "allTime"
        assert data["mode_label"] == "All Time"
        assert data["baseline_source"] == "INITIAL_VALUE"
        assert Decimal(data["current_value"]) == Decimal("1100")
        assert Decimal(data["baseline"]) == Decimal("1000")
        assert Decimal(data["pl_abs"]) == Decimal("100")
        assert Decimal(data["pl_pct"]) == Decimal("10")
        assert Decimal(data["unrealized_pl"]) == Decimal("100")
        assert data["has_season_data"] is False

    def test_season_mode_without_season(self, client: TestClient, league: dict):
        data = _member_metrics(client, league, "alice", mode="season")

        assert data["mode_label"] == "No Active Season"
        assert data["baseline_source"] == "CURRENT_VALUE"
        assert Decimal(data["pl_abs"]) == Decimal("0")
        assert data["has_season_data"] is False

    def test_season_mode_uses_season_baseline(self, client: TestClient, league: dict):
        """
        GIVEN a season started while Alice was worth $1,100
        WHEN AAPL moves to $132
        THEN season P&L is +60 against the SEASON_SNAPSHOT baseline
        """
        client.post(f"/groups/{league['group_id']}/seasons/start", json={"caller_id": league["alice"]})
        client.post(f"/groups/{league['group_id']}/prices", json={"prices": {"AAPL": "132"}})

        data = _member_metrics(client, league, "alice", mode="season")

        assert data["mode_label"] == "Season 1"
        assert data["baseline_source"] == "SEASON_SNAPSHOT"
        assert Decimal(data["baseline"]) == Decimal("1100")
        assert Decimal(data["pl_abs"]) == Decimal("60")
        assert data["has_season_data"] is True

    def test_past_season_by_id(self, client: TestClient, league: dict):
        client.post(f"/groups/{league['group_id']}/seasons/start", json={"caller_id": league["alice"]})
        client.post(f"/groups/{league['group_id']}/seasons/end", json={"caller_id": league["alice"]})

        data = _member_metrics(client, league, "bob", mode="season", season_id="season_1")

        assert data["baseline_source"] == "SEASON_SNAPSHOT"
        assert Decimal(data["baseline"]) == Decimal("1000")

    def test_unknown_member_returns_404(self, client: TestClient, league: dict):
        response = client.get(f"/groups/{league['group_id']}/members/ghost/metrics")

        assert response.status_code == 404

    def test_unknown_season_returns_404(self, client: TestClient, league: dict):
        response = client.get(
            f"/groups/{league['group_id']}/members/{league['alice']}/metrics",
            params={"mode": "season", "season_id": "season_9"},
        )

        assert response.status_code == 404

    def test_invalid_mode_returns_422(self, client: TestClient, league: dict):
        response = client.get(
            f"/groups/{league['group_id']}/members/{league['alice']}/metrics",
            params={"mode": "weekly"},
        )

        assert response.status_code == 422


class TestGroupMetricsAPI:

    def test_group_pl_is_derived_from_sums(self, client: TestClient, league: dict):
        """
        GIVEN Alice (+10%) and Bob (0%)
        WHEN I request group metrics
        THEN the group is +100 on 2,000, i.e. +5%, not the mean of percentages
        """
        response = client.get(f"/groups/{league['group_id']}/metrics")

        assert response.status_code == 200
        data = response.json()
        assert data["member_count"] == 2
        assert Decimal(data["current_value"]) == Decimal("2100")
        assert Decimal(data["baseline"]) == Decimal("2000")
        assert Decimal(data["pl_pct"]) == Decimal("5")
        assert Decimal(data["total_cash"]) == Decimal("1500")
        assert Decimal(data["invested_value"]) == Decimal("600")
        assert len(data["members"]) == 2


# =============================================================================
# LEADERBOARD TESTS
# =============================================================================


class TestLeaderboardAPI:

    def test_ranked_by_pl_pct(self, client: TestClient, league: dict):
        response = client.get(f"/groups/{league['group_id']}/leaderboard")

        assert response.status_code == 200
        data = response.json()
        assert data["mode_label"] == "All Time"
        assert [(e["rank"], e["name"]) for e in data["entries"]] == [(1, "Alice"), (2, "Bob")]
        assert data["entries"][0]["holding_count"] == 1
        assert [t["symbol"] for t in data["best_trades"]] == ["AAPL"]
        assert data["worst_trades"] == []

    def test_season_leaderboard_without_season(self, client: TestClient, league: dict):
        data = client.get(f"/groups/{league['group_id']}/leaderboard", params={"mode": "season"}).json()

        assert data["mode"] == "season"
        assert data["mode_label"] == "No Active Season"
        assert all(Decimal(e["pl_pct"]) == Decimal("0") for e in data["entries"])


# =============================================================================
# CHART TESTS
# =============================================================================


class TestChartAPI:

    def test_group_series_by_default(self, client: TestClient, league: dict):
        """
        GIVEN four mutations (join, buy, price update, join)
        WHEN I request the default chart
        THEN the group rollup has one point per mutation, ending at 2,100
        """
        response = client.get(f"/groups/{league['group_id']}/chart")

        assert response.status_code == 200
        data = response.json()
        assert data["range"] == "1M"
        assert data["scope"] == "group"
        assert data["entity_id"] == league["group_id"]
        assert len(data["points"]) == 4
        assert Decimal(data["points"][-1]["total_value"]) == Decimal("2100")

    def test_member_series(self, client: TestClient, league: dict):
        data = client.get(
            f"/groups/{league['group_id']}/chart",
            params={"range": "ALL", "entity_id": league["alice"]},
        ).json()

        assert data["scope"] == "user"
        assert [Decimal(p["total_value"]) for p in data["points"]] == [
            Decimal("1000"),
            Decimal("1000"),
            Decimal("1100"),
        ]

    def test_invalid_range_returns_422(self, client: TestClient, league: dict):
        response = client.get(f"/groups/{league['group_id']}/chart", params={"range": "5Y"})

        assert response.status_code == 422

    def test_invalid_as_of_returns_400(self, client: TestClient, league: dict):
        response = client.get(f"/groups/{league['group_id']}/chart", params={"as_of": "not a date"})

        assert response.status_code == 400

    def test_as_of_excludes_later_points(self, client: TestClient, league: dict):
        """
        GIVEN a league whose history was all recorded today
        WHEN I request the ALL chart as of a date in the past
        THEN no points are returned
        """
        data = client.get(
            f"/groups/{league['group_id']}/chart",
            params={"range": "ALL", "as_of": "2000-01-01T00:00:00"},
        ).json()

        assert data["points"] == []
