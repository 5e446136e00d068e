import datetime as dt

import pytest
from pydantic import ValidationError

from models import (
    Competition,
    Course,
    Participant,
    PointTemplate,
    ScoringMode,
    ScoringType,
    Tour,
    TourCategory,
    TourEnrollment,
)
from scoring.exceptions import NotFoundError
from scoring.standings import compute_tour_standings, final_ranking, rank_competition_results

PARS = [4, 4, 3, 5, 4, 3, 4, 5, 4, 4, 4, 3, 5, 4, 3, 4, 5, 4]
TODAY = dt.date(2026, 6, 1)

PLAYERS = {101: "Alice", 102: "Bob", 103: "Cara"}


def _score(over_par: int):
    """Full round, ``over_par`` strokes spread over the first holes."""
    return [par + (1 if i < over_par else 0) for i, par in enumerate(PARS)]


def _competition(cid: int, date: dt.date, **kwargs) -> Competition:
    data = {"id": cid, "name": f"Round {cid}", "date": date, "course": Course(id=1, pars=PARS), "tour_id": 1}
    data.update(kwargs)
    return Competition(**data)


def _participant(pid: int, player_id: int, **kwargs) -> Participant:
    data = {
        "id": pid,
        "team_id": pid,
        "team_name": f"Team {pid}",
        "player_id": player_id,
        "player_name": PLAYERS.get(player_id),
        "is_locked": True,
    }
    data.update(kwargs)
    return Participant(**data)


def _enrollments(**handicaps):
    categories = {101: (1, "Men"), 102: (1, "Men"), 103: (2, "Ladies")}
    return [
        TourEnrollment(
            player_id=pid,
            player_name=name,
            category_id=categories[pid][0],
            category_name=categories[pid][1],
            player_handicap=handicaps.get(name.lower()),
        )
        for pid, name in PLAYERS.items()
    ]


CATEGORIES = [
    TourCategory(id=1, tour_id=1, name="Men", sort_order=1),
    TourCategory(id=2, tour_id=1, name="Ladies", sort_order=2),
]


def _season():
    competitions = [
        _competition(3, dt.date(2026, 7, 1)),
        _competition(2, dt.date(2026, 5, 15)),
        _competition(1, dt.date(2026, 5, 1)),
    ]
    participants = {
        1: [
            _participant(1, 101, score=_score(0)),
            _participant(2, 102, score=_score(1)),
            _participant(3, 103, score=_score(2)),
        ],
        2: [
            _participant(4, 101, score=_score(2)),
            _participant(5, 102, score=_score(0)),
            _participant(6, 103, score=_score(1)[:9] + [0] * 9, is_locked=False),
        ],
        3: [_participant(7, 101)],
    }
    return competitions, participants


def _standings(**kwargs):
    competitions, participants = _season()
    options = {"today": TODAY, "categories": CATEGORIES}
    options.update(kwargs)
    return compute_tour_standings(
        Tour(id=1, name="Summer Tour"),
        competitions,
        participants,
        _enrollments(),
        **options,
    )


# ================================================================
# Accumulation
# ================================================================

def test_points_accumulate_over_competitions():
    standings = _standings()
    rows = {s.player_name: s for s in standings.player_standings}

    # Round 1: Alice 5, Bob 3, Cara 1. Round 2: Bob 5, Alice 3, Cara unfinished.
    assert (rows["Alice"].total_points, rows["Alice"].competitions_played) == (8, 2)
    assert (rows["Bob"].total_points, rows["Bob"].competitions_played) == (8, 2)
    assert (rows["Cara"].total_points, rows["Cara"].competitions_played) == (1, 1)
    assert standings.total_competitions == 3
    assert standings.selected_scoring_type == ScoringType.GROSS


def test_final_order_and_shared_positions():
    standings = _standings()
    ordered = [(s.position, s.player_name) for s in standings.player_standings]
    assert ordered == [(1, "Alice"), (1, "Bob"), (3, "Cara")]


def test_competition_breakdown():
    standings = _standings()
    alice = standings.player_standings[0]
    assert [c.competition_id for c in alice.competitions] == [2, 1]
    second, first = alice.competitions
    assert (first.position, first.points, first.score_relative_to_par) == (1, 5, 0)
    assert (second.position, second.points, second.score_relative_to_par) == (2, 3, 2)
    assert first.net_score_relative_to_par is None
    assert alice.category_name == "Men"


def test_standings_records_are_immutable():
    standings = _standings()
    with pytest.raises(ValidationError):
        standings.player_standings[0].total_points = 100


def test_future_competition_counts_once_someone_finishes():
    competitions, participants = _season()
    participants[3] = [_participant(7, 101, score=_score(0))]

    standings = compute_tour_standings(
        Tour(id=1), competitions, participants, _enrollments(), CATEGORIES, today=TODAY
    )
    alice = next(s for s in standings.player_standings if s.player_name == "Alice")
    # A finished round counts before the competition date
    assert alice.competitions_played == 3


def test_open_window_closed_counts_unlocked_rounds():
    end = dt.datetime(2026, 5, 20, 20, 0, tzinfo=dt.timezone.utc)
    competition = _competition(4, dt.date(2026, 5, 20), start_mode="open", open_end=end)
    participants = [_participant(8, 101, score=_score(0), is_locked=False)]

    results = rank_competition_results(competition, participants, number_of_players=3,
                                       now=end + dt.timedelta(hours=1))
    assert [(r.player_id, r.position, r.points) for r in results] == [(101, 1, 5)]

    assert rank_competition_results(competition, participants, number_of_players=3,
                                    now=end - dt.timedelta(hours=1)) == []


def test_dq_and_unlinked_participants_do_not_score():
    competition = _competition(4, dt.date(2026, 5, 20))
    participants = [
        _participant(8, 101, score=_score(0), is_dq=True),
        _participant(9, None, score=_score(0)),
        _participant(10, 102, manual_score_total=75, is_locked=False),
        _participant(11, 103, manual_score_total=70, is_dq=True),
    ]
    results = rank_competition_results(competition, participants, number_of_players=3)
    assert [(r.player_id, r.relative_to_par) for r in results] == [(102, 3)]


def test_ties_share_position_and_list_by_name():
    competition = _competition(4, dt.date(2026, 5, 20))
    participants = [
        _participant(8, 102, score=_score(1)),
        _participant(9, 101, score=_score(1)),
        _participant(10, 103, score=_score(3)),
    ]
    results = rank_competition_results(competition, participants, number_of_players=3)
    assert [(r.player_name, r.position, r.points) for r in results] == [
        ("Alice", 1, 5), ("Bob", 1, 5), ("Cara", 3, 1),
    ]


def test_final_ranking_prefers_more_competitions_played():
    standings = _standings()
    alice, bob, cara = standings.player_standings
    fewer = cara.model_copy(update={"total_points": 8, "competitions_played": 1})
    ranked = final_ranking([fewer, bob, alice])
    assert [(s.player_name, s.position) for s in ranked] == [("Alice", 1), ("Bob", 1), ("Cara", 3)]


# ================================================================
# Scoring options
# ================================================================

def test_net_standings_subtract_course_handicap():
    competition = _competition(1, dt.date(2026, 5, 1))
    participants = {1: [
        _participant(1, 101, score=_score(5)),
        _participant(2, 102, score=_score(10)),
        _participant(3, 103, score=_score(2)),
    ]}
    enrollments = _enrollments(alice=0.0, bob=18.0)

    standings = compute_tour_standings(
        Tour(id=1, scoring_mode=ScoringMode.NET), [competition], participants, enrollments,
        CATEGORIES, today=TODAY,
    )
    assert standings.selected_scoring_type == ScoringType.NET
    ordered = [(s.player_name, s.total_points) for s in standings.player_standings]
    # Bob +10 - 18 = -8, Cara has no handicap and plays off scratch (+2), Alice +5
    assert ordered == [("Bob", 5), ("Cara", 3), ("Alice", 1)]

    bob = standings.player_standings[0].competitions[0]
    assert (bob.score_relative_to_par, bob.net_score_relative_to_par, bob.course_handicap) == (10, -8, 18)


def test_gross_override_on_net_tour():
    competition = _competition(1, dt.date(2026, 5, 1))
    participants = {1: [_participant(1, 101, score=_score(5)), _participant(2, 102, score=_score(10))]}
    standings = compute_tour_standings(
        Tour(id=1, scoring_mode=ScoringMode.NET), [competition], participants,
        _enrollments(alice=0.0, bob=18.0), scoring_type=ScoringType.GROSS, today=TODAY,
    )
    assert [s.player_name for s in standings.player_standings] == ["Alice", "Bob"]
    assert standings.scoring_mode == ScoringMode.NET
    assert standings.selected_scoring_type == ScoringType.GROSS


def test_template_points():
    template = PointTemplate(id=9, name="Order of Merit", points_structure={"1": 10, "default": 2})
    tour = Tour(id=1, point_template=template)
    competitions, participants = _season()
    standings = compute_tour_standings(tour, competitions, participants, _enrollments(), today=TODAY)

    rows = {s.player_name: s.total_points for s in standings.player_standings}
    assert rows == {"Alice": 12, "Bob": 12, "Cara": 2}
    assert standings.point_template.name == "Order of Merit"


def test_category_filter():
    standings = _standings(category_id=1)
    rows = {s.player_name: s.total_points for s in standings.player_standings}
    # Two enrolled men: 1st = 4 points, 2nd = 2 points
    assert rows == {"Alice": 6, "Bob": 6}
    assert standings.selected_category_id == 1
    assert [c.name for c in standings.categories] == ["Men", "Ladies"]


def test_category_filter_keeps_field_positions():
    standings = _standings(category_id=2)
    (cara,) = standings.player_standings
    assert cara.competitions[0].position == 3
    assert cara.total_points == 0     # one enrolled lady, third place
    assert cara.position == 1


def test_unknown_category():
    with pytest.raises(NotFoundError, match="Category not found"):
        _standings(category_id=99)


def test_tour_without_competitions():
    standings = compute_tour_standings(Tour(id=1), [], {}, _enrollments(), CATEGORIES, today=TODAY)
    assert standings.player_standings == []
    assert standings.total_competitions == 0
    assert len(standings.categories) == 2
