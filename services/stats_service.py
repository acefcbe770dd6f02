"""
Win/loss, streak and ladder rank recomputation.

The module-level functions are pure over Player/Match objects (they mutate
the players handed to them and touch nothing else). StatsService wires them
to the repositories and persists the derived fields.

Consistency model: recording a match writes the match and then two player
rows with no transaction around them. If the process dies in between, the
store drifts from the ledger; recalculate_all() rebuilds every player's
stats from the ledger and is the repair path.
"""

import logging
from dataclasses import dataclass, field

from domain.errors import ConsistencyWarning
from domain.models.match import Match
from domain.models.player import Player, compute_win_rate, normalize_id
from repositories.match_repository import MatchRepository
from repositories.player_repository import PlayerRepository

logger = logging.getLogger("ttclub.services.stats")


@dataclass
class ReplayReport:
    """Outcome of a full replay of the match ledger."""

    applied: int = 0
    skipped: list[str] = field(default_factory=list)  # match ids
    warnings: list[ConsistencyWarning] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not self.skipped


def apply_match_result(player1: Player, player2: Player, winner_id) -> tuple[Player, Player]:
    """
    Apply one result to both players in place.

    A win resets a losing streak to zero before counting up, and a loss
    resets a winning streak before counting down.

    Returns:
        (winner, loser)

    Raises:
        ValueError: If winner_id is neither player
    """
    wid = normalize_id(winner_id)
    if wid == player1.id:
        winner, loser = player1, player2
    elif wid == player2.id:
        winner, loser = player2, player1
    else:
        raise ValueError(f"Winner {winner_id} did not play in this match.")

    winner.wins += 1
    loser.losses += 1
    winner.current_streak = max(0, winner.current_streak) + 1
    loser.current_streak = min(0, loser.current_streak) - 1
    winner.win_rate = compute_win_rate(winner.wins, winner.losses)
    loser.win_rate = compute_win_rate(loser.wins, loser.losses)
    return winner, loser


def rank_sort_key(player: Player) -> tuple:
    """Better players sort first: win rate, games played, wins, then fewer losses."""
    return (-player.win_rate, -player.get_total_games(), -player.wins, player.losses)


def re_rank(players: list[Player]) -> list[Player]:
    """
    Assign dense ranks 1..N and return the players in rank order.

    The sort is stable, so players tied on every key keep their relative
    order from the input sequence.
    """
    ordered = sorted(players, key=rank_sort_key)
    for index, player in enumerate(ordered):
        player.rank = index + 1
    return ordered


def reset_stats(players: list[Player]) -> None:
    for player in players:
        player.reset_stats()


def recalculate_all_from_history(players: list[Player], matches: list[Match]) -> ReplayReport:
    """
    Rebuild every player's stats by replaying the ledger in stored order.

    Matches that name a player missing from the roster (or a winner who did
    not play) are skipped and reported instead of aborting the replay.
    Running this twice in a row yields identical stats and ranks.
    """
    by_id = {p.id: p for p in players}
    reset_stats(players)
    report = ReplayReport()

    for match in matches:
        player1 = by_id.get(match.player1_id)
        player2 = by_id.get(match.player2_id)
        if player1 is None or player2 is None:
            missing = match.player1_id if player1 is None else match.player2_id
            warning = ConsistencyWarning(f"Match {match.id} references missing player {missing}")
            report.skipped.append(match.id)
            report.warnings.append(warning)
            logger.warning(str(warning))
            continue
        try:
            apply_match_result(player1, player2, match.winner_id)
        except ValueError as e:
            warning = ConsistencyWarning(f"Match {match.id} skipped: {e}")
            report.skipped.append(match.id)
            report.warnings.append(warning)
            logger.warning(str(warning))
            continue
        report.applied += 1

    re_rank(players)
    return report


class StatsService:
    """Runs the stats engine against the repositories and persists the results."""

    def __init__(self, player_repo: PlayerRepository, match_repo: MatchRepository):
        self.player_repo = player_repo
        self.match_repo = match_repo

    def apply_match(self, match: Match) -> tuple[Player, Player]:
        """Apply a freshly recorded match, persist both players, then re-rank."""
        player1 = self.player_repo.get_by_id(match.player1_id)
        player2 = self.player_repo.get_by_id(match.player2_id)
        winner, loser = apply_match_result(player1, player2, match.winner_id)
        self.player_repo.save_stats([winner, loser])
        self.re_rank()
        logger.info(
            f"Applied match {match.id}: {winner.name} streak {winner.current_streak:+d}, "
            f"{loser.name} streak {loser.current_streak:+d}"
        )
        return winner, loser

    def re_rank(self) -> list[Player]:
        # Start from the current ladder so full ties keep their places
        ordered = re_rank(self.player_repo.get_all())
        self.player_repo.save_stats(ordered)
        return ordered

    def reset_all(self) -> list[Player]:
        """Zero every player's record and re-rank."""
        players = self.player_repo.get_all()
        reset_stats(players)
        ordered = re_rank(players)
        self.player_repo.save_stats(ordered)
        logger.info(f"Reset stats for {len(players)} players")
        return ordered

    def recalculate_all(self) -> ReplayReport:
        """Repair pass: rebuild and persist all stats from the match ledger."""
        players = self.player_repo.get_all()
        report = recalculate_all_from_history(players, self.match_repo.get_in_stored_order())
        self.player_repo.save_stats(players)
        logger.info(
            f"Recalculated stats from {report.applied} matches "
            f"({len(report.skipped)} skipped) for {len(players)} players"
        )
        return report
