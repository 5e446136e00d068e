"""Per-competition leaderboard: gross and net results for every participant."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from models import (
    CategoryTeeInfo,
    Competition,
    LeaderboardEntry,
    LeaderboardResponse,
    Participant,
    PointTemplate,
    ScoringMode,
    ScoringType,
    StoredResult,
    Tee,
    TeeInfo,
    TourCategory,
)
from scoring.exceptions import MalformedInputError
from scoring.golf_scoring import is_complete_valid_round, score_metrics
from scoring.handicap import (
    calculate_course_handicap,
    calculate_net_scores,
    calculate_net_total,
    distribute_handicap_strokes,
    get_default_stroke_index,
    round_half_away,
    validate_handicap_index,
)
from scoring.points import calculate_position_points
from scoring.ranking import assign_positions
from scoring.settings import ScoringSettings, scoring_settings


@dataclass(frozen=True)
class EffectiveTee:
    """Ratings and stroke index that apply to one participant."""
    course_rating: float
    slope_rating: int
    stroke_index: List[int]


@dataclass(frozen=True)
class HandicapInfo:
    course_handicap: int
    strokes_per_hole: List[int]


@dataclass(frozen=True)
class NetResult:
    net_total_shots: Optional[int] = None
    net_relative_to_par: Optional[int] = None


class LeaderboardBuilder:
    """Builds the leaderboard of one competition from read-only snapshots.

    player_handicaps maps player_id -> handicap index from the tour
    enrollments (tour playing handicap already preferred over the player's own).
    A handicap captured on the participant itself wins over both.
    """

    def __init__(
        self,
        competition: Competition,
        *,
        scoring_mode: Optional[ScoringMode] = None,
        player_handicaps: Optional[Mapping[int, float]] = None,
        categories: Sequence[TourCategory] = (),
        point_template: Optional[PointTemplate] = None,
        stored_results: Sequence[StoredResult] = (),
        now: Optional[dt.datetime] = None,
        settings: ScoringSettings = scoring_settings,
    ):
        if not competition.course.pars:
            raise MalformedInputError("Invalid course pars data structure, no pars found")

        self.competition = competition
        self.scoring_mode = scoring_mode
        self.player_handicaps = dict(player_handicaps or {})
        self.categories = list(categories)
        self.point_template = competition.point_template or point_template
        self.stored_results = list(stored_results)
        self.settings = settings

        self.pars = competition.course.pars
        self.total_par = competition.course.total_par
        self.window_closed = competition.is_open_window_closed(now)
        self.course_stroke_index = self._course_stroke_index() if self.uses_net else []

    # ================================================================
    # Context
    # ================================================================

    @property
    def uses_net(self) -> bool:
        return self.scoring_mode is not None and self.scoring_mode != ScoringMode.GROSS

    def _course_stroke_index(self) -> List[int]:
        if self.competition.course.stroke_index:
            return list(self.competition.course.stroke_index)
        logger.warning(
            f"Competition {self.competition.id}: course has no stroke index, using default"
        )
        return get_default_stroke_index()

    def _tee_for(self, participant: Participant) -> Optional[Tee]:
        """Category tee when the participant's category has one, else the competition tee."""
        category_tee = self.competition.get_category_tee(participant.category_id)
        if category_tee:
            return category_tee.tee
        return self.competition.tee

    def effective_tee(self, participant: Participant) -> EffectiveTee:
        tee = self._tee_for(participant)
        if tee is None:
            return EffectiveTee(
                course_rating=self.settings.standard_course_rating,
                slope_rating=self.settings.standard_slope_rating,
                stroke_index=self.course_stroke_index,
            )
        course_rating, slope_rating = tee.resolve_ratings(participant.gender)
        stroke_index = list(tee.stroke_index) if tee.stroke_index else self.course_stroke_index
        return EffectiveTee(course_rating, slope_rating, stroke_index)

    def handicap_index_for(self, participant: Participant) -> Optional[float]:
        """Participant snapshot first, then the enrollment map; checked against the configured range."""
        handicap_index = participant.handicap_index
        if handicap_index is None and participant.player_id is not None:
            handicap_index = self.player_handicaps.get(participant.player_id)
        if handicap_index is None:
            return None
        return validate_handicap_index(handicap_index, self.settings)

    def handicap_info_for(self, participant: Participant) -> Optional[HandicapInfo]:
        if not self.uses_net:
            return None
        handicap_index = self.handicap_index_for(participant)
        if handicap_index is None:
            return None

        tee = self.effective_tee(participant)
        course_handicap = calculate_course_handicap(
            handicap_index, tee.slope_rating, tee.course_rating, self.total_par
        )
        return HandicapInfo(
            course_handicap=course_handicap,
            strokes_per_hole=distribute_handicap_strokes(course_handicap, tee.stroke_index),
        )

    # ================================================================
    # Entries
    # ================================================================

    def build_entry(self, participant: Participant) -> LeaderboardEntry:
        handicap = self.handicap_info_for(participant)
        if participant.has_manual_score:
            return self._manual_score_entry(participant, handicap)
        return self._hole_by_hole_entry(participant, handicap)

    def _manual_score_entry(
        self, participant: Participant, handicap: Optional[HandicapInfo]
    ) -> LeaderboardEntry:
        total_shots = participant.manual_score_total
        net = NetResult()
        if handicap is not None:
            net_total = calculate_net_total(total_shots, handicap.course_handicap)
            net = NetResult(net_total, net_total - self.total_par)

        return LeaderboardEntry(
            participant=participant,
            total_shots=total_shots,
            holes_played=self.settings.holes_per_round,
            relative_to_par=total_shots - self.total_par,
            start_time=participant.start_time,
            net_total_shots=net.net_total_shots,
            net_relative_to_par=net.net_relative_to_par,
            course_handicap=handicap.course_handicap if handicap else None,
            handicap_strokes_per_hole=handicap.strokes_per_hole if handicap else None,
        )

    def _hole_by_hole_entry(
        self, participant: Participant, handicap: Optional[HandicapInfo]
    ) -> LeaderboardEntry:
        metrics = score_metrics(participant.score, self.pars)
        net = NetResult()
        if handicap is not None:
            net = self.net_result(participant.score, metrics.gross_score, handicap)

        return LeaderboardEntry(
            participant=participant,
            total_shots=metrics.gross_score,
            holes_played=metrics.holes_played,
            relative_to_par=metrics.relative_to_par,
            start_time=participant.start_time,
            net_total_shots=net.net_total_shots,
            net_relative_to_par=net.net_relative_to_par,
            course_handicap=handicap.course_handicap if handicap else None,
            handicap_strokes_per_hole=handicap.strokes_per_hole if handicap else None,
            is_dnf=self.window_closed and metrics.holes_played < self.settings.holes_per_round,
        )

    def net_result(self, score: Sequence[int], total_shots: int, handicap: HandicapInfo) -> NetResult:
        """Running net score over played holes; the net total only once the round is complete.

        Rounds with a given-up hole (-1) get no net figures.
        """
        metrics = score_metrics(score, self.pars)
        if metrics.holes_played == 0 or metrics.has_invalid_hole:
            return NetResult()

        net_scores = calculate_net_scores(score, handicap.strokes_per_hole)
        played = [(net, par) for gross, net, par in zip(score, net_scores, self.pars) if gross > 0]
        net_score = sum(net for net, _ in played)
        par_played = sum(par for _, par in played)

        net_total = None
        if is_complete_valid_round(score):
            net_total = calculate_net_total(total_shots, handicap.course_handicap)
        return NetResult(net_total, net_score - par_played)

    # ================================================================
    # Ordering and points
    # ================================================================

    @staticmethod
    def sort_key(entry: LeaderboardEntry) -> Tuple:
        """DQ at the bottom by name, DNF above them by holes played, everyone else by score."""
        if entry.participant.is_dq:
            return (2, entry.participant.display_name.casefold())
        if entry.is_dnf:
            return (1, -entry.holes_played)
        return (0, entry.relative_to_par)

    def sort_entries(self, entries: Iterable[LeaderboardEntry]) -> List[LeaderboardEntry]:
        return sorted(entries, key=self.sort_key)

    def _is_finished(self, entry: LeaderboardEntry) -> bool:
        if entry.participant.is_dq or entry.is_dnf:
            return False
        if entry.participant.has_manual_score:
            return True
        return is_complete_valid_round(entry.participant.score)

    def projected_positions(
        self,
        entries: Sequence[LeaderboardEntry],
        score_of: Callable[[LeaderboardEntry], int],
    ) -> Dict[int, Tuple[int, float]]:
        """participant_id -> (position, points) for finished players ranked by ``score_of``."""
        finished = sorted((e for e in entries if self._is_finished(e)), key=score_of)
        structure = self.point_template.points_structure if self.point_template else None
        multiplier = self.competition.points_multiplier

        results: Dict[int, Tuple[int, float]] = {}
        for position, entry in zip(assign_positions(finished, score_of), finished):
            base = calculate_position_points(position, len(finished), structure)
            results[entry.participant.id] = (position, round_half_away(base * multiplier))
        return results

    def add_points(self, entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
        if not self.competition.is_tour_competition:
            return entries
        if self.competition.is_results_final:
            return self._add_stored_points(entries)
        return self._add_projected_points(entries)

    def _add_stored_points(self, entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
        stored = {(r.participant_id, r.scoring_type): r for r in self.stored_results}
        updated = []
        for entry in entries:
            gross = stored.get((entry.participant.id, ScoringType.GROSS))
            net = stored.get((entry.participant.id, ScoringType.NET))
            updated.append(entry.model_copy(update={
                "position": gross.position if gross else 0,
                "points": gross.points if gross else 0,
                "net_position": net.position if net else None,
                "net_points": net.points if net else None,
                "is_projected": False,
            }))
        return updated

    def _add_projected_points(self, entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
        gross = self.projected_positions(entries, lambda e: e.relative_to_par)
        net = None
        if any(e.net_relative_to_par is not None for e in entries):
            net = self.projected_positions(
                entries,
                lambda e: e.net_relative_to_par if e.net_relative_to_par is not None else e.relative_to_par,
            )

        updated = []
        for entry in entries:
            position, points = gross.get(entry.participant.id, (0, 0))
            net_position, net_points = (net or {}).get(entry.participant.id, (None, None))
            updated.append(entry.model_copy(update={
                "position": position,
                "points": points,
                "net_position": net_position,
                "net_points": net_points,
                "is_projected": True,
            }))
        return updated

    # ================================================================
    # Response
    # ================================================================

    def tee_info(self) -> Optional[TeeInfo]:
        """Competition tee, or a "Default" placeholder when scoring net without one."""
        tee = self.competition.tee
        if tee is None:
            if not self.uses_net:
                return None
            return TeeInfo(
                id=0,
                name="Default",
                course_rating=self.settings.standard_course_rating,
                slope_rating=self.settings.standard_slope_rating,
                stroke_index=self.course_stroke_index,
            )

        stroke_index = None
        if self.uses_net:
            stroke_index = list(tee.stroke_index) if tee.stroke_index else self.course_stroke_index
        course_rating, slope_rating = tee.resolve_ratings()
        return TeeInfo(
            id=tee.id or 0,
            name=tee.name,
            color=tee.color,
            course_rating=course_rating,
            slope_rating=slope_rating,
            stroke_index=stroke_index,
        )

    def category_tee_info(self) -> Optional[List[CategoryTeeInfo]]:
        if not self.uses_net or not self.categories or not self.competition.category_tees:
            return None

        infos = []
        for category in self.categories:
            category_tee = self.competition.get_category_tee(category.id)
            if category_tee is None:
                continue
            course_rating, slope_rating = category_tee.tee.resolve_ratings()
            infos.append(CategoryTeeInfo(
                category_id=category.id,
                category_name=category.name,
                tee_id=category_tee.tee.id,
                tee_name=category_tee.tee.name,
                course_rating=course_rating,
                slope_rating=slope_rating,
            ))
        return infos or None

    def build(self, participants: Iterable[Participant]) -> LeaderboardResponse:
        entries = self.sort_entries(self.build_entry(p) for p in participants)
        entries = self.add_points(entries)
        logger.debug(
            f"Competition {self.competition.id}: {len(entries)} leaderboard entries "
            f"(scoring mode {self.scoring_mode.value if self.scoring_mode else 'none'})"
        )
        return LeaderboardResponse(
            entries=entries,
            competition_id=self.competition.id,
            scoring_mode=self.scoring_mode,
            is_tour_competition=self.competition.is_tour_competition,
            is_results_final=self.competition.is_results_final,
            tee=self.tee_info(),
            category_tees=self.category_tee_info(),
            categories=self.categories or None,
        )


def build_leaderboard(
    competition: Competition,
    participants: Iterable[Participant],
    **options,
) -> LeaderboardResponse:
    """Convenience wrapper: ``LeaderboardBuilder(competition, **options).build(participants)``."""
    return LeaderboardBuilder(competition, **options).build(participants)
