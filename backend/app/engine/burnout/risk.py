# engine/burnout/risk.py
"""
Risk Factor Evaluator — score de risque burnout — ZÉRO accès DB.

Reçoit un WorkerHistory, retourne un RiskAssessment.

Modèle additif à points fixes (ordre indifférent) :

    Facteur                  Déclencheur                                          Points
    screen_time_excess       moyenne screen_time des 3 derniers logs > 8h         +20
    consecutive_hard_days    série hard en tête (≥ 2 pour compter)                +10 × n
    long_sessions_no_breaks  un des 3 derniers logs : session > 120 min, < 2 pauses +15
    high_stress_score        dernier survey stress ≥ 4                            +20
    low_energy_score         dernier survey energy ≤ 2                            +10
    poor_work_life_balance   dernier survey balance ≤ 2                           +10
    help_signal_sent         help signal dans les 3 derniers jours                +25
    high_burnout_debt        dette > 60                                           +15

    score = min(100, Σ points)
    niveau : score ≥ 50 → high-risk, score ≥ 25 → warning, sinon safe

Les seuils et points sont des constantes de politique, non calibrées :
toute modification change le comportement observable du produit.

Effet de bord (sans persistance) :
    série hard ≥ 2 → alerte brouillon consecutive-hard (high-risk si ≥ 3).
    La déduplication est la responsabilité du collaborateur
    (modules/alert/service.py::record_drafts).
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import numpy as np

from app.engine.burnout.signals import WorkerHistory, leading_hard_streak, as_utc
from app.shared.enums import AlertStatus, AlertType, RiskLevel


# ── Fenêtres de lecture ───────────────────────────────────────────────────────

LOG_WINDOW:        int = 7
ASSIGNMENT_WINDOW: int = 7
SURVEY_WINDOW:     int = 4
RECENT_LOG_COUNT:  int = 3
HELP_SIGNAL_WINDOW = timedelta(days=3)

# ── Seuils ────────────────────────────────────────────────────────────────────

SCREEN_TIME_LIMIT_HOURS: float = 8.0
LONG_SESSION_MINUTES:    int = 120
MIN_BREAKS:              int = 2
MIN_HARD_STREAK:         int = 2
SEVERE_HARD_STREAK:      int = 3
HIGH_STRESS:             int = 4
LOW_ENERGY:              int = 2
POOR_BALANCE:            int = 2
HIGH_DEBT:               int = 60

# ── Points ────────────────────────────────────────────────────────────────────

POINTS_SCREEN_TIME:   int = 20
POINTS_PER_HARD_DAY:  int = 10
POINTS_LONG_SESSIONS: int = 15
POINTS_HIGH_STRESS:   int = 20
POINTS_LOW_ENERGY:    int = 10
POINTS_POOR_BALANCE:  int = 10
POINTS_HELP_SIGNAL:   int = 25
POINTS_HIGH_DEBT:     int = 15

MAX_SCORE: int = 100

# ── Niveaux ───────────────────────────────────────────────────────────────────

HIGH_RISK_THRESHOLD: int = 50
WARNING_THRESHOLD:   int = 25


@dataclass
class RiskFactors:
    screen_time_excess:      bool = False
    consecutive_hard_days:   int = 0
    long_sessions_no_breaks: bool = False
    high_stress_score:       bool = False
    low_energy_score:        bool = False
    poor_work_life_balance:  bool = False
    help_signal_sent:        bool = False
    high_burnout_debt:       bool = False
    avg_screen_time_hours:   float = 0.0   # Contexte pour les messages, pas un facteur

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class DraftAlert:
    """Alerte proposée par le moteur — persistée (ou non) par le collaborateur."""
    worker_id: int
    type:      AlertType
    severity:  RiskLevel
    message:   str
    details:   str
    status:    AlertStatus = AlertStatus.PENDING


@dataclass
class RiskAssessment:
    worker_id:    int
    risk_level:   RiskLevel
    score:        int
    factors:      RiskFactors
    draft_alerts: List[DraftAlert] = field(default_factory=list)


def classify(score: int) -> RiskLevel:
    """Fonction en escalier pure : 24 → safe, 25 → warning, 50 → high-risk."""
    if score >= HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH_RISK
    if score >= WARNING_THRESHOLD:
        return RiskLevel.WARNING
    return RiskLevel.SAFE


def evaluate(history: WorkerHistory, now: Optional[datetime] = None) -> RiskAssessment:
    """
    Calcule le score de risque d'un worker depuis son historique.

    Args:
        history: instantané WorkerHistory (séquences du plus récent au plus ancien).
                 Les fenêtres (7 logs, 7 assignments, 4 surveys) sont appliquées ici.
        now:     instant de référence pour la fenêtre help signal (défaut : maintenant UTC).
    """
    now = as_utc(now or datetime.now(timezone.utc))

    logs        = list(history.work_logs)[:LOG_WINDOW]
    assignments = list(history.assignments)[:ASSIGNMENT_WINDOW]
    surveys     = list(history.surveys)[:SURVEY_WINDOW]

    factors = compute_factors(history, logs, assignments, surveys, now)
    score   = min(MAX_SCORE, score_factors(factors))

    return RiskAssessment(
        worker_id=history.worker_id,
        risk_level=classify(score),
        score=score,
        factors=factors,
        draft_alerts=_draft_alerts(history.worker_id, factors),
    )


def compute_factors(history: WorkerHistory, logs, assignments, surveys, now: datetime) -> RiskFactors:
    recent_logs = logs[:RECENT_LOG_COUNT]

    avg_screen = float(np.mean([l.screen_time_hours for l in recent_logs])) if recent_logs else 0.0

    long_sessions = any(
        l.longest_session_minutes > LONG_SESSION_MINUTES and l.breaks_taken < MIN_BREAKS
        for l in recent_logs
    )

    # Les valeurs par défaut de SurveyReading ne déclenchent aucun facteur
    latest = history.survey if surveys else None
    help_cutoff = now - HELP_SIGNAL_WINDOW

    return RiskFactors(
        screen_time_excess=avg_screen > SCREEN_TIME_LIMIT_HOURS,
        consecutive_hard_days=leading_hard_streak([a.difficulty for a in assignments]),
        long_sessions_no_breaks=long_sessions,
        high_stress_score=bool(latest and latest.stress_level >= HIGH_STRESS),
        low_energy_score=bool(latest and latest.energy_level <= LOW_ENERGY),
        poor_work_life_balance=bool(latest and latest.work_life_balance <= POOR_BALANCE),
        help_signal_sent=any(as_utc(h.timestamp) > help_cutoff for h in history.help_signals),
        high_burnout_debt=history.debt.current > HIGH_DEBT,
        avg_screen_time_hours=round(avg_screen, 1),
    )


def score_factors(factors: RiskFactors) -> int:
    """Somme brute des points déclenchés (avant plafonnement)."""
    points = 0
    if factors.screen_time_excess:
        points += POINTS_SCREEN_TIME
    if factors.consecutive_hard_days >= MIN_HARD_STREAK:
        points += POINTS_PER_HARD_DAY * factors.consecutive_hard_days
    if factors.long_sessions_no_breaks:
        points += POINTS_LONG_SESSIONS
    if factors.high_stress_score:
        points += POINTS_HIGH_STRESS
    if factors.low_energy_score:
        points += POINTS_LOW_ENERGY
    if factors.poor_work_life_balance:
        points += POINTS_POOR_BALANCE
    if factors.help_signal_sent:
        points += POINTS_HELP_SIGNAL
    if factors.high_burnout_debt:
        points += POINTS_HIGH_DEBT
    return points


def _draft_alerts(worker_id: int, factors: RiskFactors) -> List[DraftAlert]:
    streak = factors.consecutive_hard_days
    if streak < MIN_HARD_STREAK:
        return []
    return [
        DraftAlert(
            worker_id=worker_id,
            type=AlertType.CONSECUTIVE_HARD,
            severity=RiskLevel.HIGH_RISK if streak >= SEVERE_HARD_STREAK else RiskLevel.WARNING,
            message=f"Difficulté hard assignée {streak} jours consécutifs",
            details="Série d'assignations hard détectée. Le risque de burnout augmente.",
        )
    ]
