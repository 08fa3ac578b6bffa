#!/usr/bin/env python3
"""
Test helper functions and factories for creating test data
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


def _iso(dt: datetime) -> str:
    return dt.strftime('%Y-%m-%dT%H:%MZ')


def create_test_competitor(
    abbreviation: str,
    home_away: str,
    score: str = "0",
    record: Optional[str] = None,
) -> Dict[str, Any]:
    """Factory for one ESPN scoreboard competitor."""
    competitor = {
        'homeAway': home_away,
        'score': score,
        'team': {'abbreviation': abbreviation},
    }
    if record is not None:
        competitor['records'] = [{'name': 'overall', 'summary': record}]
    return competitor


def create_test_event(
    start: datetime,
    home: str = "KC",
    away: str = "BUF",
    state: str = "pre",
    home_score: str = "0",
    away_score: str = "0",
    period: Optional[int] = None,
    clock: str = "",
    detail: str = "",
    completed: bool = False,
    home_record: Optional[str] = None,
    away_record: Optional[str] = None,
    home_first: bool = False,
) -> Dict[str, Any]:
    """Factory function to create an ESPN scoreboard event.

    Args:
        start: Scheduled start time (timezone-aware)
        home: Home team abbreviation
        away: Away team abbreviation
        state: ESPN status state ('pre', 'in' or 'post')
        home_first: Put the home competitor first in the list (ESPN order varies)

    Returns:
        Dictionary shaped like an item of the scoreboard ``events`` list
    """
    competitors = [
        create_test_competitor(away, 'away', away_score, away_record),
        create_test_competitor(home, 'home', home_score, home_record),
    ]
    if home_first:
        competitors.reverse()

    status: Dict[str, Any] = {
        'displayClock': clock,
        'type': {'state': state, 'completed': completed, 'detail': detail},
    }
    if period is not None:
        status['period'] = period

    return {
        'date': _iso(start),
        'name': f"{away} at {home}",
        'competitions': [{'competitors': competitors, 'status': status}],
    }


def create_test_odds_game(
    home_team: str,
    away_team: str,
    quotes: Optional[Dict[str, Tuple[float, float, Optional[Tuple[float, float]], Optional[Tuple[float, float]]]]] = None,
) -> Dict[str, Any]:
    """Factory for one The Odds API game.

    Args:
        home_team: Provider home team name
        away_team: Provider away team name
        quotes: bookmaker key -> (home moneyline, away moneyline,
            home spread (point, price) or None, away spread (point, price) or None)
    """
    bookmakers: List[Dict[str, Any]] = []
    for key, (home_ml, away_ml, home_spread, away_spread) in (quotes or {}).items():
        markets = [{
            'key': 'h2h',
            'outcomes': [
                {'name': home_team, 'price': home_ml},
                {'name': away_team, 'price': away_ml},
            ],
        }]
        spread_outcomes = []
        if home_spread:
            spread_outcomes.append({'name': home_team, 'point': home_spread[0], 'price': home_spread[1]})
        if away_spread:
            spread_outcomes.append({'name': away_team, 'point': away_spread[0], 'price': away_spread[1]})
        if spread_outcomes:
            markets.append({'key': 'spreads', 'outcomes': spread_outcomes})
        bookmakers.append({'key': key, 'title': key.title(), 'markets': markets})

    return {
        'id': f"{away_team}-{home_team}",
        'home_team': home_team,
        'away_team': away_team,
        'bookmakers': bookmakers,
    }


def create_test_article(
    headline: str = "Big trade shakes up the league",
    link: str = "https://www.espn.com/nfl/story/_/id/1",
    published: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Factory for one ESPN news article."""
    article: Dict[str, Any] = {'headline': headline, 'links': {'web': {'href': link}}}
    if published is not None:
        article['published'] = published.strftime('%Y-%m-%dT%H:%M:%SZ')
    return article
