"""
Cross-match statistics for a player's Arena history.

All functions are pure: they take raw match-v5 documents and the queried
player's PUUID and never touch the network or the database.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

import structlog

logger = structlog.get_logger(__name__)

# Teammates need strictly more shared games than this to be reported
MIN_SHARED_GAMES = 2

WINNING_PLACEMENT = 1


@dataclass
class TeammateStat:
    """Shared-game tally between the queried player and one teammate."""

    puuid: str
    summoner_name: str
    wins: int = 0
    total: int = 0

    @property
    def win_rate(self) -> str:
        """Win percentage with two decimals, e.g. ``"66.67"``."""
        if self.total == 0:
            return "0.00"
        return f"{self.wins / self.total * 100:.2f}"


@dataclass
class ChampionProgress:
    """Champion roster split by whether a champion is in the selected set."""

    roster: List[str]
    selected: Set[str]
    completed: List[str] = field(default_factory=list)
    remaining: List[str] = field(default_factory=list)


def find_participant(match: Dict[str, Any], puuid: str) -> Optional[Dict[str, Any]]:
    """Return the participant entry for ``puuid``, or None if absent."""
    participants = match.get("info", {}).get("participants", [])
    by_puuid = {participant.get("puuid"): participant for participant in participants}
    return by_puuid.get(puuid)


def display_name(participant: Dict[str, Any]) -> str:
    """Participant name, falling back to the Riot ID when summonerName is blank."""
    summoner_name = participant.get("summonerName")
    if summoner_name:
        return summoner_name
    game_name = participant.get("riotIdGameName")
    if game_name:
        tag_line = participant.get("riotIdTagline")
        return f"{game_name}#{tag_line}" if tag_line else game_name
    return ""


def collect_teammate_stats(
    matches: Iterable[Dict[str, Any]], puuid: str
) -> Dict[str, TeammateStat]:
    """
    Tally shared games and wins per teammate.

    A teammate is any other participant with the player's ``teamId``. A shared
    game counts as a win when the queried player's own ``win`` flag is set.

    Args:
        matches: Raw match documents
        puuid: Queried player's PUUID

    Returns:
        Mapping from teammate PUUID to tally, in first-seen order
    """
    stats: Dict[str, TeammateStat] = {}
    skipped = 0

    for match in matches:
        player = find_participant(match, puuid)
        if player is None:
            skipped += 1
            continue

        teammates = [
            participant
            for participant in match["info"]["participants"]
            if participant.get("teamId") == player.get("teamId")
            and participant.get("puuid") != puuid
        ]

        for teammate in teammates:
            teammate_puuid = teammate["puuid"]
            stat = stats.get(teammate_puuid)
            if stat is None:
                stat = TeammateStat(
                    puuid=teammate_puuid, summoner_name=display_name(teammate)
                )
                stats[teammate_puuid] = stat

            stat.total += 1
            if player.get("win"):
                stat.wins += 1

    if skipped:
        logger.debug("Matches without the queried player skipped", count=skipped)

    return stats


def teammate_win_rates(
    matches: Iterable[Dict[str, Any]],
    puuid: str,
    min_games: int = MIN_SHARED_GAMES,
) -> List[TeammateStat]:
    """
    Teammates with more than ``min_games`` shared games, most games first.

    Ties keep first-seen order.
    """
    stats = collect_teammate_stats(matches, puuid)
    frequent = [stat for stat in stats.values() if stat.total > min_games]
    return sorted(frequent, key=lambda stat: stat.total, reverse=True)


def champions_played(matches: Iterable[Dict[str, Any]], puuid: str) -> Set[str]:
    """Names of every champion the player has played."""
    played: Set[str] = set()
    for match in matches:
        player = find_participant(match, puuid)
        if player is not None:
            played.add(player["championName"])
    return played


def champions_won(matches: Iterable[Dict[str, Any]], puuid: str) -> Set[str]:
    """Names of champions the player finished first with."""
    won: Set[str] = set()
    for match in matches:
        player = find_participant(match, puuid)
        if player is not None and player.get("placement") == WINNING_PLACEMENT:
            won.add(player["championName"])
    return won


def partition_roster(roster: List[str], selected: Set[str]) -> ChampionProgress:
    """Split ``roster`` into selected and remaining champions, keeping roster order."""
    progress = ChampionProgress(roster=list(roster), selected=set(selected))
    for name in roster:
        if name in selected:
            progress.completed.append(name)
        else:
            progress.remaining.append(name)
    return progress
