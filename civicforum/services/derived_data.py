"""Deterministic, seeded generators for data no public source provides.

Every generator is a pure function of a seed string (a senator's name or
bioguide ID) plus explicit parameters. The seed is the sum of the string's
character codes, so the same input always yields the same series. All
output is tagged ``estimated``.
"""

import math
from enum import Enum

from civicforum.schemas.common import DataSource
from civicforum.schemas.derived import (
    DarkMoneySource,
    HistoricalData,
    IdeologyEstimate,
    Lobbyist,
    NetWorthPoint,
    TimelineEvent,
    TradingActivityPoint,
    TradingPerformancePoint,
    TradingSummary,
)


class GeneratorKind(str, Enum):
    NET_WORTH = "net_worth"
    TRADING_ACTIVITY = "trading_activity"
    TRADING_PERFORMANCE = "trading_performance"
    HISTORICAL = "historical"
    DARK_MONEY = "dark_money"
    LOBBYISTS = "lobbyists"
    TIMELINE = "timeline"
    VOTE_POSITIONS = "vote_positions"


MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# S&P 500 monthly values, normalized so the series starts near 100
SP500_SERIES = [95, 97, 100, 99, 102, 104, 103, 105, 103, 106, 108, 110]

SUPER_PACS = [
    "American Crossroads", "Senate Majority PAC", "Senate Leadership Fund",
    "Priorities USA Action", "Club for Growth Action", "Independence USA PAC",
]
C4_GROUPS = [
    "Americans for Prosperity", "Majority Forward", "One Nation",
    "Crossroads GPS", "American Action Network", "League of Conservation Voters",
]

LOBBYIST_POOL = [
    ("Robert Portman Jr.", "K&L Gates LLP"),
    ("Heather Podesta", "Invariant LLC"),
    ("Thomas Daschle", "Baker Donelson"),
    ("John Ashcroft", "Ashcroft Law Firm"),
    ("Tony Podesta", "Podesta Group"),
    ("Trent Lott", "Squire Patton Boggs"),
    ("John Breaux", "Breaux Lott Leadership"),
    ("Haley Barbour", "BGR Group"),
]

CLIENTS_BY_INDUSTRY = {
    "Technology": [
        ("Amazon.com Inc", ["E-Commerce", "Data Privacy", "Labor"]),
        ("Meta Platforms", ["Content Moderation", "Antitrust"]),
        ("Google LLC", ["Antitrust", "AI Regulation"]),
        ("Microsoft Corp", ["Cloud Computing", "AI"]),
    ],
    "Pharmaceuticals": [
        ("Pfizer Inc", ["Drug Pricing", "Medicare"]),
        ("Johnson & Johnson", ["FDA Regulation", "Healthcare"]),
        ("Merck & Co", ["Patent Reform", "Clinical Trials"]),
    ],
    "Defense": [
        ("Boeing Co", ["Defense Contracts", "Trade"]),
        ("Lockheed Martin", ["Military Spending", "Space"]),
        ("Raytheon", ["Weapons Systems", "Cybersecurity"]),
    ],
    "Finance": [
        ("Goldman Sachs", ["Banking Regulation", "Tax Policy"]),
        ("JPMorgan Chase", ["Consumer Protection", "Fintech"]),
        ("Blackrock", ["ESG", "Asset Management"]),
    ],
    "Energy": [
        ("Exxon Mobil", ["Energy Policy", "Climate"]),
        ("Chevron Corp", ["Drilling Rights", "Pipelines"]),
        ("NextEra Energy", ["Renewable Energy", "Grid"]),
    ],
}

TIMELINE_TICKERS = ["NVDA", "AAPL", "MSFT", "GOOGL", "META", "AMZN", "JPM", "XOM", "LMT", "PFE"]
TIMELINE_AMOUNTS = ["$50K-$100K", "$100K-$250K", "$250K-$500K", "$500K-$1M", "$1M-$5M"]
TIMELINE_COMMITTEES = ["Commerce", "Finance", "Armed Services", "Energy", "Banking", "Health"]

VOTE_POSITION_PATTERN = ["Yea", "Yea", "Yea", "Yea", "Nay", "Yea", "Yea", "Nay", "Yea", "Not Voting"]


def name_seed(text: str) -> int:
    """Sum of character codes. Not cryptographic; collisions are fine."""
    return sum(ord(c) for c in text)


def js_round(value: float) -> int:
    """Round half up, so x.5 always goes toward positive infinity."""
    return math.floor(value + 0.5)


def _round1(value: float) -> float:
    return js_round(value * 10) / 10


def net_worth_history(seed: int, start_year: int = 2019, years: int = 6) -> list[NetWorthPoint]:
    """Compounding net worth with per-year variance, assets and liabilities bands."""
    base = 500000 + (seed % 100) * 500000
    growth = 0.05 + (seed % 20) * 0.005

    points = []
    for i in range(years):
        variance = 0.9 + ((seed + i) % 20) / 100
        net_worth = js_round(base * math.pow(1 + growth, i) * variance)
        points.append(
            NetWorthPoint(
                year=start_year + i,
                net_worth=net_worth,
                assets_min=js_round(net_worth * 0.9),
                assets_max=js_round(net_worth * 1.3),
                liabilities_min=js_round(net_worth * 0.05),
                liabilities_max=js_round(net_worth * 0.15),
            )
        )
    return points


def trading_activity(seed: int) -> list[TradingActivityPoint]:
    """Twelve months of trade counts and a compounding portfolio index from 100."""
    points = []
    cumulative = 100.0
    for i, month in enumerate(MONTHS):
        trades = 2 + (seed + i) % 8
        buys = math.ceil(trades * (0.4 + ((seed + i) % 30) / 100))
        monthly_gain = -3 + (seed + i) % 10
        cumulative *= 1 + monthly_gain / 100
        points.append(
            TradingActivityPoint(
                month=month,
                trades=trades,
                buys=buys,
                sells=trades - buys,
                estimated_value=_round1(cumulative),
                sp500=SP500_SERIES[i],
            )
        )
    return points


def trading_performance(activity: list[TradingActivityPoint]) -> list[TradingPerformancePoint]:
    """Month-over-month returns; the first month is relative to 100 and 95."""
    points = []
    prev_senator, prev_sp500 = 100.0, 95.0
    for i, point in enumerate(activity):
        senator_value = point.estimated_value or 100
        sp500_value = point.sp500 or 95
        if i == 0:
            senator_return = (senator_value - 100) / 100 * 100
            sp500_return = (sp500_value - 95) / 95 * 100
        else:
            senator_return = (senator_value - prev_senator) / prev_senator * 100
            sp500_return = (sp500_value - prev_sp500) / prev_sp500 * 100
        points.append(
            TradingPerformancePoint(
                month=point.month,
                senator_return=_round1(senator_return),
                sp500_return=_round1(sp500_return),
                trade_count=point.trades,
            )
        )
        prev_senator, prev_sp500 = senator_value, sp500_value
    return points


def trading_summary(seed: int, activity: list[TradingActivityPoint]) -> TradingSummary:
    final_value = activity[-1].estimated_value if activity else 100
    final_sp500 = activity[-1].sp500 if activity else 100
    sp500_total = js_round((final_sp500 - 95) / 95 * 10000) / 100
    portfolio_return = js_round((final_value - 100) * 100) / 100
    return TradingSummary(
        total_trades=sum(p.trades for p in activity),
        estimated_gain=js_round((final_value - 100) * 10000),
        win_rate=45 + seed % 30,
        sp500_comparison=js_round((portfolio_return - sp500_total) * 100) / 100,
    )


def historical_data(bioguide_id: str) -> HistoricalData:
    """Net worth, trading activity, performance and summary for one senator."""
    seed = name_seed(bioguide_id)
    activity = trading_activity(seed)
    return HistoricalData(
        bioguide_id=bioguide_id,
        net_worth=net_worth_history(seed),
        trading_activity=activity,
        trading_performance=trading_performance(activity),
        trading_summary=trading_summary(seed, activity),
    )


def format_millions(amount: int) -> str:
    return f"${amount / 1_000_000:.1f}M"


def dark_money_sources(seed: int) -> list[DarkMoneySource]:
    """Super PAC and 501(c)(4) spending; empty for a third of seeds."""
    if seed % 3 == 0:
        return []

    sources = []
    for i in range((seed % 4) + 1):
        is_super = (seed + i) % 2 == 0
        groups = SUPER_PACS if is_super else C4_GROUPS
        amount = (seed * (i + 1)) % 2_000_000 + 500_000
        sources.append(
            DarkMoneySource(
                name=groups[(seed + i) % len(groups)],
                type="super_pac" if is_super else "501c4",
                amount=format_millions(amount),
                amount_value=amount,
                cycle="2024",
                disclosed=(seed + i) % 3 == 0,
            )
        )
    return sources


def lobbyists(seed: int) -> list[Lobbyist]:
    """Two to five lobbyist relationships drawn from fixed pools."""
    industries = list(CLIENTS_BY_INDUSTRY)
    result = []
    for i in range((seed % 4) + 2):
        name, firm = LOBBYIST_POOL[(seed + i) % len(LOBBYIST_POOL)]
        industry = industries[(seed + i) % len(industries)]
        clients = CLIENTS_BY_INDUSTRY[industry]
        client, issues = clients[(seed + i) % len(clients)]
        amount = (seed * (i + 1)) % 800_000 + 200_000
        result.append(
            Lobbyist(
                name=name,
                firm=firm,
                client=client,
                industry=industry,
                amount=f"${amount:,}",
                amount_value=amount,
                issues=list(issues),
                year=2024,
            )
        )
    return result


def timeline_events(seed: int, stock_trades: int, party: str) -> list[TimelineEvent]:
    """Trade, donation, vote and bill events, newest first."""
    events = []

    for i in range(min(stock_trades, 3) or (seed % 3) + 1):
        ticker = TIMELINE_TICKERS[(seed + i) % len(TIMELINE_TICKERS)]
        amount = TIMELINE_AMOUNTS[(seed + i) % len(TIMELINE_AMOUNTS)]
        is_buy = (seed + i) % 2 == 0
        if "$500K" in amount or "$1M" in amount:
            severity = "high"
        elif "$250K" in amount:
            severity = "medium"
        else:
            severity = None
        events.append(
            TimelineEvent(
                date=f"2024-11-{25 - i * 5:02d}",
                type="trade",
                title=f"{'Purchased' if is_buy else 'Sold'} {amount} in {ticker}",
                description=f"Stock {'purchase' if is_buy else 'sale'} disclosed in periodic transaction report",
                severity=severity,
                connection=(
                    f"{TIMELINE_COMMITTEES[(seed + i) % len(TIMELINE_COMMITTEES)]} Committee Member"
                    if severity else None
                ),
            )
        )

    pac_amount = ((seed % 50) + 10) * 1000
    events.append(
        TimelineEvent(
            date="2024-11-10",
            type="donation",
            title=f"Received ${pac_amount:,} from Industry PAC",
            description=f"{'Business' if party == 'R' else 'Labor'} PAC contribution",
            connection="Chamber of Commerce" if party == "R" else "AFL-CIO",
        )
    )
    events.append(
        TimelineEvent(
            date="2024-11-08",
            type="vote",
            title=f"Voted {'YEA' if seed % 2 == 0 else 'NAY'} on Key Legislation",
            description="Legislative vote on committee-related bill",
            severity="medium",
            connection="Potential conflict with stock holdings" if stock_trades > 20 else None,
        )
    )
    events.append(
        TimelineEvent(
            date="2024-10-25",
            type="bill",
            title=f"Co-sponsored S.{seed % 9000 + 1000}",
            description=f"{'Tax reform' if party == 'R' else 'Consumer protection'} legislation",
        )
    )

    # Stable sort keeps generation order for same-day events
    return sorted(events, key=lambda e: e.date, reverse=True)


def vote_positions(seed: int, count: int) -> list[str]:
    return [VOTE_POSITION_PATTERN[(seed + i) % len(VOTE_POSITION_PATTERN)] for i in range(count)]


def voting_profile(seed: int) -> tuple[int, int]:
    """Estimated (party-line vote %, attendance %) when no roll calls are available."""
    return 75 + seed % 24, 90 + seed % 10


def estimate_ideology(party_votes: float, party: str) -> IdeologyEstimate:
    """Place a senator on a 0 (liberal) to 100 (conservative) scale."""
    if party == "D":
        position = 100 - party_votes * 0.5
    elif party == "R":
        position = party_votes * 0.5 + 50
    else:
        position = 50
    position = max(0, min(100, position))

    if position < 20:
        label = "Very Liberal"
    elif position < 40:
        label = "Liberal"
    elif position < 60:
        label = "Moderate"
    elif position < 80:
        label = "Conservative"
    else:
        label = "Very Conservative"
    return IdeologyEstimate(position=position, label=label, source=DataSource.ESTIMATED)


def generate(seed_text: str, kind: GeneratorKind, **params):
    """
    Run one generator for a seed string.

    Args:
        seed_text: Stable identity string (bioguide ID or display name)
        kind: Which dataset to produce
        **params: Extra inputs some generators declare, e.g. ``stock_trades``
            and ``party`` for the timeline or ``count`` for vote positions

    Returns:
        The generated dataset
    """
    seed = name_seed(seed_text)
    if kind is GeneratorKind.NET_WORTH:
        return net_worth_history(seed, start_year=params.get("start_year", 2019))
    if kind is GeneratorKind.TRADING_ACTIVITY:
        return trading_activity(seed)
    if kind is GeneratorKind.TRADING_PERFORMANCE:
        return trading_performance(trading_activity(seed))
    if kind is GeneratorKind.HISTORICAL:
        return historical_data(seed_text)
    if kind is GeneratorKind.DARK_MONEY:
        return dark_money_sources(seed)
    if kind is GeneratorKind.LOBBYISTS:
        return lobbyists(seed)
    if kind is GeneratorKind.TIMELINE:
        return timeline_events(seed, params.get("stock_trades", 0), params.get("party", "D"))
    if kind is GeneratorKind.VOTE_POSITIONS:
        return vote_positions(seed, params.get("count", len(VOTE_POSITION_PATTERN)))
    raise ValueError(f"Unknown generator kind: {kind}")
