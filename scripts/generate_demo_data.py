#!/usr/bin/env python3
"""
Generate a demo group with three months of activity.
Simulates members depositing, buying, selling and prices drifting day by day.
"""

import random
import sys
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from league.config.logging_config import setup_logging
from league.config.settings import get_settings
from league.core.exceptions import ValidationError
from league.core.timezone import EASTERN_TZ
from league.repositories.sqlalchemy import SqlAlchemyGroupRepository, get_session, init_db
from league.services import (
    HistoryLedger,
    HoldingCreate,
    PortfolioService,
    ProfileCreate,
    SeasonService,
)

GROUP_NAME = "Demo League"

# Approximate starting prices
STOCKS = {
    "AAPL": Decimal("180"),
    "MSFT": Decimal("420"),
    "GOOGL": Decimal("160"),
    "AMZN": Decimal("150"),
    "NVDA": Decimal("500"),
    "BTC": Decimal("60000"),
}

MEMBERS = [
    ("Alex", Decimal("10000")),
    ("Sam", Decimal("25000")),
    ("Jordan", Decimal("5000")),
]


def _market_open(day: datetime) -> datetime:
    return EASTERN_TZ.localize(datetime(day.year, day.month, day.day, 9, 30))


def generate_demo_data(days: int = 90, seed: int = 7) -> None:
    """Create the demo group and replay `days` of trading."""
    rng = random.Random(seed)
    settings = get_settings()
    init_db()
    session = get_session()

    try:
        repo = SqlAlchemyGroupRepository(session)
        history = HistoryLedger(
            retention_limit=settings.snapshot_retention_limit,
            policy=settings.snapshot_policy,
        )
        portfolio = PortfolioService(repo, history, settings.withdrawal_policy)
        seasons = SeasonService(repo)

        try:
            group = portfolio.create_group(GROUP_NAME)
        except ValidationError:
            print(f"Group '{GROUP_NAME}' already exists; nothing to do")
            return
        print(f"Created group: {GROUP_NAME}")

        start = datetime.now(EASTERN_TZ) - timedelta(days=days)
        member_ids = []
        for name, cash in MEMBERS:
            member = portfolio.create_profile(
                group.group_id,
                ProfileCreate(name=name, initial_cash=cash),
                at=_market_open(start),
            ).value
            member_ids.append(member.member_id)
            print(f"  {name} joined with ${cash:,.2f}")

        prices = dict(STOCKS)
        for offset in range(1, days + 1):
            day = _market_open(start + timedelta(days=offset))
            if day.weekday() >= 5:
                continue

            # Random walk of roughly +/-2% a day
            for symbol, price in prices.items():
                drift = Decimal(str(round(rng.uniform(-0.02, 0.021), 4)))
                prices[symbol] = (price * (1 + drift)).quantize(Decimal("0.01"))
            portfolio.update_prices(group.group_id, prices, at=day)

            member_id = rng.choice(member_ids)
            roll = rng.random()
            if roll < 0.25:
                symbol = rng.choice(list(prices))
                quantity = Decimal(rng.randint(1, 10))
                if symbol == "BTC":
                    quantity = Decimal("0.05")
                portfolio.buy_holding(
                    group.group_id,
                    member_id,
                    HoldingCreate(symbol=symbol, quantity=quantity, price=prices[symbol]),
                    at=day + timedelta(hours=1),
                )
            elif roll < 0.35:
                owned = portfolio.get_group(group.group_id).holdings_for(member_id)
                if owned:
                    portfolio.sell_holding(
                        group.group_id,
                        rng.choice(owned).holding_id,
                        at=day + timedelta(hours=2),
                    )
            elif roll < 0.40:
                portfolio.deposit_cash(
                    group.group_id,
                    member_id,
                    Decimal(rng.choice([500, 1000, 2500])),
                    at=day + timedelta(hours=3),
                )

            if offset == days // 2:
                seasons.start_season(group.group_id, member_ids[0], at=day + timedelta(hours=4))
                print(f"  Season 1 started on {day.date()}")

        final = portfolio.get_group(group.group_id)
        print("=" * 60)
        print(f"Members: {len(final.members)}")
        print(f"Holdings: {len(final.holdings)}")
        print(f"Activity events: {len(final.activity)}")
        print(f"Snapshots: {len(final.snapshots)}")
    finally:
        session.close()


if __name__ == "__main__":
    setup_logging()
    generate_demo_data()
