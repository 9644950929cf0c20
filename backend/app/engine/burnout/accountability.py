# engine/burnout/accountability.py
"""
Accountability Aggregator — indice d'équité du leader — ZÉRO accès DB.

Indépendant du pipeline worker : lit l'historique brut des assignations
du leader et le nombre d'alertes pending (global, pas filtré par leader).

    fairness = clamp(round(100
                           − max_consecutive × 10
                           − (overrides / max(1, total)) × 30
                           − pending_alerts × 5), 0, 100)

    ignored_recommendations : recommandation présente, différente de la
    difficulté réelle, SANS override déclaré (déviation silencieuse).

Historique 14 jours — chaque jour est indépendant (non cumulatif) :
    day_score = max(0, 100 − hard(jour) × 15 − overrides(jour) × 10)
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

from app.engine.burnout.signals import as_difficulty, leading_hard_streak, round_half_up
from app.shared.enums import Difficulty


# ── Pénalités ─────────────────────────────────────────────────────────────────

STREAK_PENALTY:        int = 10
OVERRIDE_RATE_PENALTY: int = 30
PENDING_ALERT_PENALTY: int = 5

DAY_HARD_PENALTY:     int = 15
DAY_OVERRIDE_PENALTY: int = 10

HISTORY_DAYS: int = 14


@dataclass
class HardStreak:
    worker_id:   int
    worker_name: str
    count:       int


@dataclass
class DayScore:
    date:  date
    score: int


@dataclass
class AccountabilityIndex:
    leader_id:                    int
    fairness_score:               int
    consecutive_hard_assignments: List[HardStreak] = field(default_factory=list)
    override_count:               int = 0
    total_assignments:            int = 0
    ignored_recommendations:      int = 0
    unresolved_alerts:            int = 0
    history:                      List[DayScore] = field(default_factory=list)


def fairness_score(max_consecutive: int, override_count: int, total_assignments: int, pending_alerts: int) -> int:
    score = 100.0
    score -= max_consecutive * STREAK_PENALTY
    score -= (override_count / max(1, total_assignments)) * OVERRIDE_RATE_PENALTY
    score -= pending_alerts * PENDING_ALERT_PENALTY
    return int(max(0, min(100, round_half_up(score))))


def day_score(day_assignments: Sequence[Any]) -> int:
    hard = sum(1 for a in day_assignments if as_difficulty(a.difficulty) == Difficulty.HARD)
    overrides = sum(1 for a in day_assignments if a.was_override)
    return max(0, 100 - hard * DAY_HARD_PENALTY - overrides * DAY_OVERRIDE_PENALTY)


def is_ignored_recommendation(assignment: Any) -> bool:
    recommended = as_difficulty(assignment.recommended_difficulty)
    return (
        recommended is not None
        and as_difficulty(assignment.difficulty) != recommended
        and not assignment.was_override
    )


def hard_streaks(assignments: Sequence[Any], workers: Sequence[Any]) -> List[HardStreak]:
    """Série hard en tête, par worker, sur l'historique du leader trié par date décroissante."""
    by_worker: Dict[int, List[Any]] = defaultdict(list)
    for a in assignments:
        by_worker[a.worker_id].append(a)

    streaks: List[HardStreak] = []
    for worker in workers:
        ordered = sorted(by_worker.get(worker.id, []), key=lambda a: a.date, reverse=True)
        count = leading_hard_streak([a.difficulty for a in ordered])
        if count > 0:
            streaks.append(HardStreak(worker_id=worker.id, worker_name=worker.name, count=count))
    return streaks


def daily_history(assignments: Sequence[Any], today: date, days: int = HISTORY_DAYS) -> List[DayScore]:
    """Les `days` derniers jours calendaires jusqu'à today inclus, du plus ancien au plus récent."""
    by_day: Dict[date, List[Any]] = defaultdict(list)
    for a in assignments:
        by_day[a.date].append(a)

    history = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        history.append(DayScore(date=day, score=day_score(by_day.get(day, []))))
    return history


def compute(
    leader_id: int,
    assignments: Sequence[Any],
    workers: Sequence[Any],
    pending_alert_count: int,
    today: date,
) -> AccountabilityIndex:
    """
    Calcule l'indice d'accountability d'un leader.

    Args:
        assignments:         toutes les assignations faites PAR ce leader
        workers:             tous les workers (id, name)
        pending_alert_count: alertes pending, toutes équipes confondues
        today:               dernier jour de l'historique
    """
    streaks = hard_streaks(assignments, workers)
    max_consecutive = max((s.count for s in streaks), default=0)

    override_count = sum(1 for a in assignments if a.was_override)
    total = len(assignments)

    return AccountabilityIndex(
        leader_id=leader_id,
        fairness_score=fairness_score(max_consecutive, override_count, total, pending_alert_count),
        consecutive_hard_assignments=streaks,
        override_count=override_count,
        total_assignments=total,
        ignored_recommendations=sum(1 for a in assignments if is_ignored_recommendation(a)),
        unresolved_alerts=pending_alert_count,
        history=daily_history(assignments, today),
    )
