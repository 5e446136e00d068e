from models import LeaderboardEntry, Participant, TeamLeaderboardEntry, TeamStatus
from scoring.teams import (
    assign_team_points,
    build_team_leaderboard,
    compare_individual_scores,
    group_by_team,
)

_ids = iter(range(1, 10_000))


def _entry(team_id, relative_to_par=0, holes=18, locked=True, invalid=False, start_time=None) -> LeaderboardEntry:
    """Helper: a leaderboard line for one team member."""
    score = [4] * holes + [0] * (18 - holes)
    if invalid:
        score[0] = -1
    participant = Participant(
        id=next(_ids),
        team_id=team_id,
        team_name=f"Team {team_id}",
        score=score,
        is_locked=locked,
        start_time=start_time,
    )
    return LeaderboardEntry(
        participant=participant,
        total_shots=72 + relative_to_par if holes else 0,
        holes_played=holes,
        relative_to_par=relative_to_par,
        start_time=start_time,
    )


# ================================================================
# Grouping and status
# ================================================================

def test_group_totals_skip_invalid_and_unstarted_members():
    entries = [
        _entry(1, relative_to_par=2),
        _entry(1, relative_to_par=5, invalid=True),
        _entry(1, holes=0, start_time="09:10"),
        _entry(1, relative_to_par=1, holes=12, locked=False, start_time="09:00"),
    ]
    (group,) = group_by_team(entries)

    assert group.total_relative_score == 3
    assert group.total_shots == 74 + 73
    assert group.max_holes_completed == 18
    assert group.start_time == "09:00"
    assert group.status == TeamStatus.IN_PROGRESS


def test_team_status():
    finished, in_progress, invalid, not_started = group_by_team([
        _entry(1), _entry(1),
        _entry(2), _entry(2, locked=False),
        _entry(3), _entry(3, invalid=True),
        _entry(4, holes=0, locked=False),
    ])
    assert finished.status == TeamStatus.FINISHED
    assert in_progress.status == TeamStatus.IN_PROGRESS
    assert invalid.status == TeamStatus.IN_PROGRESS
    assert not_started.status == TeamStatus.NOT_STARTED


# ================================================================
# Ordering
# ================================================================

def test_status_comes_before_score():
    teams = build_team_leaderboard([
        _entry(1, holes=0, locked=False, start_time="10:00"),
        _entry(2, relative_to_par=-5, holes=9, locked=False),
        _entry(3, relative_to_par=4),
    ], number_of_teams=3)

    assert [t.team_id for t in teams] == [3, 2, 1]
    assert [t.display_progress for t in teams] == ["F", "Thru 9", "Starts 10:00"]


def test_tie_broken_by_best_individual_score():
    teams = build_team_leaderboard([
        _entry(1, relative_to_par=2), _entry(1, relative_to_par=2),
        _entry(2, relative_to_par=1), _entry(2, relative_to_par=3),
    ], number_of_teams=2)

    assert [t.team_id for t in teams] == [2, 1]
    assert teams[0].total_relative_score == teams[1].total_relative_score == 4


def test_more_valid_scores_wins_tie_break():
    a, b = group_by_team([
        _entry(1, relative_to_par=1), _entry(1, relative_to_par=2),
        _entry(2, relative_to_par=1), _entry(2, relative_to_par=2), _entry(2, relative_to_par=0, holes=0),
    ])
    assert compare_individual_scores(a, b) == 0

    a, b = group_by_team([
        _entry(1, relative_to_par=3),
        _entry(2, relative_to_par=3), _entry(2, relative_to_par=5),
    ])
    assert compare_individual_scores(b, a) < 0


def test_not_started_teams_keep_team_order():
    teams = build_team_leaderboard([
        _entry(7, holes=0, locked=False),
        _entry(3, holes=0, locked=False),
        _entry(5, holes=0, locked=False),
    ], number_of_teams=3)
    assert [t.team_id for t in teams] == [3, 5, 7]
    assert all(t.team_points is None for t in teams)
    assert all(t.total_relative_score is None for t in teams)
    assert teams[0].display_progress == "Starts TBD"


# ================================================================
# Points
# ================================================================

def test_points_for_five_teams():
    teams = build_team_leaderboard(
        [_entry(team_id, relative_to_par=team_id) for team_id in range(1, 6)],
        number_of_teams=5,
    )
    assert [t.team_points for t in teams] == [7, 5, 3, 2, 1]


def test_points_floor_at_zero():
    teams = build_team_leaderboard(
        [_entry(team_id, relative_to_par=team_id) for team_id in range(1, 7)],
        number_of_teams=5,
    )
    assert teams[5].team_points == 0


def test_points_multiplier():
    teams = build_team_leaderboard(
        [_entry(1, relative_to_par=0), _entry(2, relative_to_par=1)],
        number_of_teams=4,
        points_multiplier=2,
    )
    assert [t.team_points for t in teams] == [12, 8]


def test_tied_totals_take_index_positions():
    teams = [
        TeamLeaderboardEntry(team_id=i, team_name=f"T{i}", status=TeamStatus.FINISHED,
                             display_progress="F", total_relative_score=0, total_shots=72)
        for i in range(1, 4)
    ]
    ranked = assign_team_points(teams, number_of_teams=3)
    assert [t.team_points for t in ranked] == [5, 3, 1]


def test_no_points_without_team_count():
    teams = build_team_leaderboard([_entry(1)], number_of_teams=0)
    assert teams[0].team_points is None
