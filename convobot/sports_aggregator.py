#!/usr/bin/env python3
"""
Sports report aggregation for the Convo Bot
Combines ESPN scoreboard and news with bookmaker odds into one chat report
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional

from .clients.base_client import ExternalServiceError
from .clients.espn_client import ESPNClient
from .clients.odds_client import OddsClient
from .clients.sports_mappings import BOOKMAKER_LABELS, LEAGUE_CATALOG, invalid_sport_message
from .enums import GameState
from .models import BookmakerQuote, GameOdds, GameSummary, League, NewsItem, TeamLine
from .utils import (
    format_countdown, format_number, format_signed, format_time_ago,
    parse_iso_datetime, utc_now,
)

LOOKAHEAD = timedelta(hours=24)


def teams_match(abbreviation: str, provider_name: str) -> bool:
    """Case-insensitive substring containment in either direction.

    Scoreboards use abbreviations while the odds provider uses full team names,
    so an exact comparison never matches. Short abbreviations can match more
    than one team; callers take the first hit.
    """
    if not abbreviation or not provider_name:
        return False
    abbr = abbreviation.lower()
    name = provider_name.lower()
    return abbr in name or name in abbr


def parse_odds(game: Dict[str, Any]) -> GameOdds:
    """Reduce one provider game to moneyline and spread quotes per bookmaker"""
    odds = GameOdds(home_team=game.get('home_team', ''), away_team=game.get('away_team', ''))
    for bookmaker in game.get('bookmakers') or []:
        quote = BookmakerQuote(key=bookmaker.get('key', ''))
        for market in bookmaker.get('markets') or []:
            for outcome in market.get('outcomes') or []:
                name = outcome.get('name')
                price = outcome.get('price')
                if name is None or price is None:
                    continue
                if market.get('key') == 'h2h':
                    quote.moneyline[name] = price
                elif market.get('key') == 'spreads' and outcome.get('point') is not None:
                    quote.spreads[name] = (outcome['point'], price)
        odds.bookmakers[quote.key] = quote
    return odds


def find_matching_odds(provider_games: List[Dict[str, Any]], home_abbr: str,
                       away_abbr: str) -> Optional[GameOdds]:
    """Return odds for the first provider game whose home and away teams both match"""
    for game in provider_games:
        if (teams_match(home_abbr, game.get('home_team', ''))
                and teams_match(away_abbr, game.get('away_team', ''))):
            return parse_odds(game)
    return None


class SportsAggregator:
    """Builds the text report for the sports command.

    The aggregator only talks to the ESPN and odds clients; it keeps no state
    between reports.
    """

    def __init__(self, espn_client: ESPNClient, odds_client: OddsClient,
                 leagues: Optional[Mapping[str, League]] = None,
                 bookmakers: Optional[Mapping[str, str]] = None,
                 max_games: int = 3, logger: Optional[logging.Logger] = None):
        self.espn_client = espn_client
        self.odds_client = odds_client
        self.leagues = dict(leagues or LEAGUE_CATALOG)
        self.bookmakers = dict(bookmakers or BOOKMAKER_LABELS)
        self.max_games = max_games
        self.logger = logger or logging.getLogger('ConvoBot')

    async def fetch_league_data(self, league_key: str, now: Optional[datetime] = None) -> str:
        """Fetch, rank and format the report for one league.

        Args:
            league_key: Catalog key such as ``nfl``.
            now: Reference time (defaults to the current UTC time).

        Returns:
            str: The report, or a user-facing message explaining why there is none.
        """
        league = self.leagues.get((league_key or '').lower())
        if league is None:
            return invalid_sport_message()

        label = league.key.upper()
        now = now or utc_now()
        try:
            news = await self._fetch_news(league, now)
            events = await self.espn_client.fetch_scoreboard(league)
            if not events:
                return f"No games found for {label}."

            games = self.select_games(events, now)
            if not games:
                return f"No upcoming or live games in the next 24 hours for {label}."

            lines = [f"🏆 {label} Games:", ""]
            if news:
                lines.append(f"📰 Latest: {news.headline} ({format_time_ago(news.published or now, now)})")
                if news.link:
                    lines.append(f"🔗 {news.link}")
                lines.append("")

            provider_games: Optional[List[Dict[str, Any]]] = None
            for game in games:
                lines.append(self.format_matchup(game))
                status_line = self.format_status_line(game, now)
                if status_line:
                    lines.append(status_line)

                if self._wants_odds(game, now):
                    if provider_games is None:
                        provider_games = await self._fetch_provider_games(league)
                    lines.extend(self._odds_lines(provider_games, game, league))
                lines.append("")

            return "\n".join(lines).strip()
        except Exception as e:
            self.logger.error(f"Error fetching {label} data: {e}")
            return f"Error fetching {label} data. Please try again later."

    async def _fetch_news(self, league: League, now: datetime) -> Optional[NewsItem]:
        try:
            article = await self.espn_client.fetch_latest_article(league)
            if not article:
                return None
            headline = article.get('headline') or ''
            if not headline:
                return None
            return NewsItem(
                headline=headline,
                link=((article.get('links') or {}).get('web') or {}).get('href') or '',
                published=parse_iso_datetime(article.get('published')) or now,
            )
        except (ExternalServiceError, AttributeError, TypeError, KeyError) as e:
            self.logger.warning(f"News fetch failed for {league.key}: {e}")
            return None

    async def _fetch_provider_games(self, league: League) -> List[Dict[str, Any]]:
        try:
            return await self.odds_client.fetch_odds(league)
        except ExternalServiceError as e:
            self.logger.warning(f"Odds fetch failed for {league.key}: {e}")
            return []

    def _odds_lines(self, provider_games: List[Dict[str, Any]], game: GameSummary,
                    league: League) -> List[str]:
        """Match the game against the provider list and format its odds block.

        A malformed provider entry drops the odds block for this game only.
        """
        try:
            game.odds = find_matching_odds(
                provider_games, game.home.abbreviation, game.away.abbreviation
            )
            return self.format_odds_block(game)
        except (AttributeError, TypeError, KeyError, ValueError) as e:
            self.logger.warning(f"Unusable odds data for {league.key}: {e}")
            game.odds = None
            return []

    @staticmethod
    def _event_state(event: Dict[str, Any]) -> str:
        competition = (event.get('competitions') or [{}])[0]
        return ((competition.get('status') or {}).get('type') or {}).get('state', '')

    def select_games(self, events: List[Dict[str, Any]], now: datetime) -> List[GameSummary]:
        """Keep live games and games starting within 24 hours, live first then by start time"""
        horizon = now + LOOKAHEAD
        relevant = []
        for event in events:
            start = parse_iso_datetime(event.get('date'))
            live = self._event_state(event) == GameState.LIVE.value
            upcoming = start is not None and now <= start <= horizon
            if live or upcoming:
                relevant.append((event, start))

        relevant.sort(key=lambda item: (
            self._event_state(item[0]) != GameState.LIVE.value,
            item[1] or now,
        ))
        return [self.parse_game(event) for event, _ in relevant[:self.max_games]]

    def parse_game(self, event: Dict[str, Any]) -> GameSummary:
        """Reduce a scoreboard event to a GameSummary.

        Competitors are located by their ``homeAway`` flag, not list position.
        """
        competition = (event.get('competitions') or [{}])[0]
        competitors = competition.get('competitors') or []
        home = self._team_line(competitors, 'home')
        away = self._team_line(competitors, 'away')

        status = competition.get('status') or {}
        status_type = status.get('type') or {}
        if status_type.get('completed'):
            state = GameState.FINAL
        elif status_type.get('state') == GameState.LIVE.value:
            state = GameState.LIVE
        else:
            state = GameState.UPCOMING

        return GameSummary(
            home=home,
            away=away,
            state=state,
            start_time=parse_iso_datetime(event.get('date')),
            period=status.get('period') or None,
            clock=status.get('displayClock') or '',
            detail=status_type.get('detail') or status_type.get('shortDetail') or '',
        )

    @staticmethod
    def _team_line(competitors: List[Dict[str, Any]], side: str) -> TeamLine:
        competitor = next((c for c in competitors if c.get('homeAway') == side), None)
        if competitor is None:
            return TeamLine(abbreviation=side.upper())
        records = competitor.get('records') or []
        return TeamLine(
            abbreviation=(competitor.get('team') or {}).get('abbreviation', side.upper()),
            score=str(competitor.get('score') or '0'),
            record=records[0].get('summary', '') if records else '',
        )

    def format_status(self, game: GameSummary, now: datetime) -> Optional[str]:
        """Status text: ``{period} {clock}`` live, ``Final`` completed, else a countdown"""
        if game.state == GameState.LIVE:
            if game.period is None and not game.clock:
                return game.detail
            return f"{game.period if game.period is not None else ''} {game.clock}".strip()
        if game.state == GameState.FINAL:
            return 'Final'
        if game.start_time is None:
            return None
        return format_countdown(game.start_time, now)

    @staticmethod
    def format_matchup(game: GameSummary) -> str:
        def side(team: TeamLine) -> str:
            return f"{team.abbreviation} ({team.record})" if team.record else team.abbreviation
        return f"⚔️ {side(game.away)} @ {side(game.home)}"

    def format_status_line(self, game: GameSummary, now: datetime) -> Optional[str]:
        status = self.format_status(game, now)
        score = f"{game.away.abbreviation} {game.away.score} - {game.home.abbreviation} {game.home.score}"
        if game.state == GameState.LIVE:
            return f"🔴 LIVE ({status}): {score}"
        if game.state == GameState.FINAL:
            return f"✅ Final: {score}"
        if status is None:
            return None
        return f"⏰ Starts in {status}"

    @staticmethod
    def _wants_odds(game: GameSummary, now: datetime) -> bool:
        return (
            game.state == GameState.UPCOMING
            and game.start_time is not None
            and game.start_time >= now
        )

    def format_odds_block(self, game: GameSummary) -> List[str]:
        """Odds lines for the away team then the home team"""
        odds = game.odds
        if odds is None:
            return []
        lines = []
        for abbreviation, provider_name in ((game.away.abbreviation, odds.away_team),
                                            (game.home.abbreviation, odds.home_team)):
            lines.append(f"{abbreviation}:")
            for key, label in self.bookmakers.items():
                quote = odds.bookmakers.get(key)
                if quote is None or provider_name not in quote.moneyline:
                    continue
                line = f"   {label}: {format_signed(quote.moneyline[provider_name])}"
                spread = quote.spreads.get(provider_name)
                if spread:
                    point, price = spread
                    line += f" ({format_signed(point)}: {format_number(price)})"
                lines.append(line)
        return lines
