# engine/burnout/debt.py
"""
Burnout Debt Accumulator — politique et arithmétique du ledger — ZÉRO accès DB.

Primitive unique :
    apply_delta(current, delta) → (clamp(current + delta, 0, 100), trend)
    trend = increasing si delta > 0, decreasing si delta < 0, stable sinon

Politique quotidienne de référence (daily_delta) — cumulée PUIS bornée une fois :
    assignation hard           +8
    assignation medium         +3
    assignation easy           −5
    week-end                   −5   (ignore assignation et log du jour)
    screen_time > 9h           +5
    breaks_taken ≥ 3           −3
    longest_session > 120 min  +4

La persistance (verrou de ligne + upsert de l'entrée du jour) est dans
modules/burnout/repository.py. Ce module ne fait que calculer.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Optional, Tuple

from app.engine.burnout.signals import as_difficulty
from app.shared.enums import DebtTrend, Difficulty


# ── Bornes ────────────────────────────────────────────────────────────────────

DEBT_MIN: int = 0
DEBT_MAX: int = 100

# ── Politique quotidienne ─────────────────────────────────────────────────────

DIFFICULTY_DELTAS = {
    Difficulty.HARD:   8,
    Difficulty.MEDIUM: 3,
    Difficulty.EASY:  -5,
}
WEEKEND_DELTA:          int = -5
SCREEN_TIME_DELTA:      int = 5
SCREEN_TIME_HOURS:      float = 9.0
RESTED_BREAKS_DELTA:    int = -3
RESTED_BREAKS:          int = 3
LONG_SESSION_DELTA:     int = 4
LONG_SESSION_MINUTES:   int = 120


@dataclass(frozen=True)
class DebtPoint:
    date:  date
    score: int


@dataclass(frozen=True)
class DayActivity:
    """Ce qui s'est passé un jour donné pour un worker (chaque champ optionnel)."""
    day:        date
    assignment: Optional[Any] = None
    work_log:   Optional[Any] = None


def clamp_debt(value: float) -> int:
    return int(max(DEBT_MIN, min(DEBT_MAX, round(value))))


def trend_for(delta: int) -> DebtTrend:
    if delta > 0:
        return DebtTrend.INCREASING
    if delta < 0:
        return DebtTrend.DECREASING
    return DebtTrend.STABLE


def apply_delta(current: int, delta: int) -> Tuple[int, DebtTrend]:
    """Nouvelle dette bornée à [0, 100] + tendance dérivée du signe de delta."""
    return clamp_debt(current + delta), trend_for(delta)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def daily_delta(day: date, assignment: Optional[Any] = None, work_log: Optional[Any] = None) -> int:
    """
    Delta de dette pour une journée, selon la politique de référence.

    Args:
        day:        jour calendaire
        assignment: Assignment du jour (ou None)
        work_log:   WorkLog du jour (ou None)
    """
    if is_weekend(day):
        return WEEKEND_DELTA

    delta = 0
    if assignment is not None:
        delta += DIFFICULTY_DELTAS[as_difficulty(assignment.difficulty)]

    if work_log is not None:
        if work_log.screen_time_hours > SCREEN_TIME_HOURS:
            delta += SCREEN_TIME_DELTA
        if work_log.breaks_taken >= RESTED_BREAKS:
            delta += RESTED_BREAKS_DELTA
        if work_log.longest_session_minutes > LONG_SESSION_MINUTES:
            delta += LONG_SESSION_DELTA

    return delta


def replay(start: int, days: Iterable[DayActivity]) -> List[DebtPoint]:
    """
    Rejoue une suite de journées dans la politique et retourne la série datée.
    Utilisé par le seed pour reconstruire un ledger cohérent avec l'activité.
    """
    debt = clamp_debt(start)
    series: List[DebtPoint] = []
    for activity in days:
        debt, _ = apply_delta(debt, daily_delta(activity.day, activity.assignment, activity.work_log))
        series.append(DebtPoint(date=activity.day, score=debt))
    return series

