"""Team results for one competition, built from its individual leaderboard."""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional

from loguru import logger

from models import LeaderboardEntry, TeamLeaderboardEntry, TeamStatus
from scoring.points import calculate_default_points

STATUS_ORDER = {
    TeamStatus.FINISHED: 0,
    TeamStatus.IN_PROGRESS: 1,
    TeamStatus.NOT_STARTED: 2,
}


@dataclass
class TeamGroup:
    team_id: int
    team_name: str
    members: List[LeaderboardEntry] = field(default_factory=list)
    total_shots: int = 0
    total_relative_score: int = 0
    max_holes_completed: int = 0
    start_time: Optional[str] = None

    @property
    def has_started(self) -> bool:
        return any(m.has_started for m in self.members)

    @property
    def status(self) -> TeamStatus:
        if not self.has_started:
            return TeamStatus.NOT_STARTED
        if all(m.participant.is_locked and not m.has_invalid_round for m in self.members):
            return TeamStatus.FINISHED
        return TeamStatus.IN_PROGRESS

    def valid_scores(self) -> List[int]:
        """Relative-to-par of members with a started, valid round, best first."""
        return sorted(
            m.relative_to_par for m in self.members if m.has_started and not m.has_invalid_round
        )


def group_by_team(entries: Iterable[LeaderboardEntry]) -> List[TeamGroup]:
    """One group per team, in team id order."""
    groups: Dict[int, TeamGroup] = {}
    for entry in entries:
        team_id = entry.participant.team_id
        group = groups.get(team_id)
        if group is None:
            group = groups[team_id] = TeamGroup(team_id, entry.participant.team_name)

        group.members.append(entry)
        if entry.has_started and not entry.has_invalid_round:
            group.total_shots += entry.total_shots
            group.total_relative_score += entry.relative_to_par
        if entry.has_started:
            group.max_holes_completed = max(group.max_holes_completed, entry.holes_played)
        if entry.start_time and (group.start_time is None or entry.start_time < group.start_time):
            group.start_time = entry.start_time

    return [groups[team_id] for team_id in sorted(groups)]


def compare_individual_scores(a: TeamGroup, b: TeamGroup) -> int:
    """Compare members' scores best to worst; a team with more valid scores wins when the other runs out."""
    scores_a = a.valid_scores()
    scores_b = b.valid_scores()
    for i in range(max(len(scores_a), len(scores_b))):
        if i >= len(scores_a):
            return 1
        if i >= len(scores_b):
            return -1
        if scores_a[i] != scores_b[i]:
            return scores_a[i] - scores_b[i]
    return 0


def compare_teams(a: TeamGroup, b: TeamGroup) -> int:
    status_a, status_b = a.status, b.status
    if status_a != status_b:
        return STATUS_ORDER[status_a] - STATUS_ORDER[status_b]

    # Teams that have not started keep their order
    if status_a == TeamStatus.NOT_STARTED:
        return 0

    if a.total_relative_score != b.total_relative_score:
        return a.total_relative_score - b.total_relative_score

    return compare_individual_scores(a, b)


def sort_teams(groups: Iterable[TeamGroup]) -> List[TeamGroup]:
    return sorted(groups, key=cmp_to_key(compare_teams))


def display_progress(group: TeamGroup) -> str:
    status = group.status
    if status == TeamStatus.NOT_STARTED:
        return f"Starts {group.start_time}" if group.start_time else "Starts TBD"
    if status == TeamStatus.FINISHED:
        return "F"
    return f"Thru {group.max_holes_completed}"


def to_team_entry(group: TeamGroup) -> TeamLeaderboardEntry:
    started = group.has_started
    return TeamLeaderboardEntry(
        team_id=group.team_id,
        team_name=group.team_name,
        status=group.status,
        start_time=group.start_time,
        display_progress=display_progress(group),
        total_relative_score=group.total_relative_score if started else None,
        total_shots=group.total_shots if started else None,
        team_points=None,
    )


def assign_team_points(
    teams: List[TeamLeaderboardEntry],
    number_of_teams: int,
    points_multiplier: float = 1,
) -> List[TeamLeaderboardEntry]:
    """
    Points for teams that have started, in sorted order.

    The tie signature is "<total>-<index>", so two teams never compare equal
    and each takes the position of its index, even with identical totals.
    """
    if number_of_teams <= 0:
        return teams

    ranked = []
    current_position = 0
    last_signature = None
    for index, team in enumerate(teams):
        if team.status == TeamStatus.NOT_STARTED:
            ranked.append(team)
            continue
        signature = f"{team.total_relative_score}-{index}"
        if signature != last_signature:
            current_position = index + 1
        last_signature = signature
        points = calculate_default_points(current_position, number_of_teams, points_multiplier)
        ranked.append(team.model_copy(update={"team_points": points}))
    return ranked


def build_team_leaderboard(
    entries: Iterable[LeaderboardEntry],
    number_of_teams: int,
    points_multiplier: float = 1,
) -> List[TeamLeaderboardEntry]:
    """Group individual entries into teams, order them and award points."""
    groups = sort_teams(group_by_team(entries))
    teams = assign_team_points([to_team_entry(g) for g in groups], number_of_teams, points_multiplier)
    logger.debug(f"Team leaderboard: {len(teams)} teams, {number_of_teams} counted for points")
    return teams
