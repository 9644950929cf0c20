# engine/burnout/recommendation.py
"""
Workload Recommendation Engine — difficulté suggérée pour aujourd'hui — ZÉRO accès DB.

Cascade à trois niveaux, évaluée dans l'ordre strict, premier niveau déclenché gagnant :

    TIER 1 — CRITICAL (force easy)
        Toutes les raisons vérifiées sont cumulées dans la justification :
        help signal récent · risque high-risk · stress ≥ 4 · énergie ≤ 2 ·
        série hard ≥ 3 · dette > 70

    TIER 2 — WARNING (plafonnement), atteint seulement si risk_level = warning
        série hard ≥ 2 OU stress ≥ 3 → easy, sinon medium

    TIER 3 — ADAPTIVE (risk_level = safe), chaîne ordonnée :
        1. série hard ≥ 2                        → easy
        2. dette > 40 ET dernier = hard          → easy
        3. dette > 40                            → medium
        4. écran excessif ET dernier = hard      → medium
        5. dernier = hard                        → medium (jamais deux hard d'affilée)
        6. dernier = easy : santé excellente ET ≥ 2 easy sur 5 → hard, sinon medium
        7. dernier = medium ou aucun historique :
             stress ≤ 2, énergie ≥ 4, dette < 20, ≤ 1 hard sur 5 → hard
             stress ≥ 3 ou énergie ≤ 3 → easy si écran excessif, sinon medium
             sinon medium

Chaque niveau est une liste explicite de règles (prédicat, issue) : les tests
énumèrent les règles et vérifient la précédence sans dépendre de l'implémentation.

Confiance :
    high   si ≥ 2 raisons critiques ou ≥ 3 labels
    low    si < 3 assignations ou aucun survey (prime sur high)
    medium sinon

Fonction pure : mêmes entrées → même sortie.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from app.engine.burnout.risk import ASSIGNMENT_WINDOW, RiskAssessment
from app.engine.burnout.signals import (
    DebtReading,
    SurveyReading,
    WorkerHistory,
    as_difficulty,
)
from app.shared.enums import Confidence, Difficulty, RecommendationTier, RiskLevel


# ── Seuils ────────────────────────────────────────────────────────────────────

RECENT_WINDOW:          int = 5
CRITICAL_STREAK:        int = 3
RECOVERY_STREAK:        int = 2
CRITICAL_DEBT:          int = 70
MODERATE_DEBT:          int = 40
LOW_DEBT:               int = 20
CRITICAL_STRESS:        int = 4
CRITICAL_ENERGY:        int = 2
WARNING_STRESS:         int = 3
MIN_ASSIGNMENTS:        int = 3
HIGH_CONFIDENCE_CRITICAL: int = 2
HIGH_CONFIDENCE_LABELS:   int = 3


@dataclass(frozen=True)
class RecommendationContext:
    """Toutes les entrées de la cascade — aucune autre source n'est lue."""
    worker_id:           int
    risk:                RiskAssessment
    survey:              SurveyReading
    debt:                DebtReading
    recent_difficulties: Sequence[Difficulty]   # 5 dernières, plus récente en premier
    assignment_count:    int                    # Fenêtre de 7
    survey_count:        int                    # Tous les surveys

    @classmethod
    def from_history(cls, history: WorkerHistory, risk: RiskAssessment) -> "RecommendationContext":
        assignments = list(history.assignments)[:ASSIGNMENT_WINDOW]
        return cls(
            worker_id=history.worker_id,
            risk=risk,
            survey=history.survey,
            debt=history.debt,
            recent_difficulties=[as_difficulty(a.difficulty) for a in assignments[:RECENT_WINDOW]],
            assignment_count=len(assignments),
            survey_count=len(history.surveys),
        )

    # ── Dérivés ──────────────────────────────────────────────
    @property
    def latest_difficulty(self) -> Optional[Difficulty]:
        return self.recent_difficulties[0] if self.recent_difficulties else None

    @property
    def hard_streak(self) -> int:
        return self.risk.factors.consecutive_hard_days

    @property
    def hard_count(self) -> int:
        return sum(1 for d in self.recent_difficulties if d == Difficulty.HARD)

    @property
    def easy_count(self) -> int:
        return sum(1 for d in self.recent_difficulties if d == Difficulty.EASY)

    @property
    def moderate_debt(self) -> bool:
        return self.debt.current > MODERATE_DEBT

    @property
    def screen_time_excess(self) -> bool:
        return self.risk.factors.screen_time_excess


@dataclass(frozen=True)
class CriticalRule:
    """Garde-fou Tier 1 — toutes les règles vérifiées sont retenues."""
    name:    str
    applies: Callable[[RecommendationContext], bool]
    reason:  Callable[[RecommendationContext], str]
    label:   Callable[[RecommendationContext], str]


@dataclass(frozen=True)
class Rule:
    """Règle Tiers 2/3 — la première vérifiée gagne."""
    name:       str
    applies:    Callable[[RecommendationContext], bool]
    difficulty: Difficulty
    reasoning:  Callable[[RecommendationContext], str]
    label:      str


@dataclass
class Recommendation:
    worker_id:              int
    recommended_difficulty: Difficulty
    reasoning:              str
    factors:                List[str] = field(default_factory=list)
    confidence:             Confidence = Confidence.MEDIUM
    tier:                   RecommendationTier = RecommendationTier.ADAPTIVE
    rule:                   str = ""


def _always(ctx: RecommendationContext) -> bool:
    return True


# ── TIER 1 : garde-fous critiques → easy ──────────────────────────────────────

CRITICAL_RULES: List[CriticalRule] = [
    CriticalRule(
        name="help_signal",
        applies=lambda c: c.risk.factors.help_signal_sent,
        reason=lambda c: "le worker a envoyé un help signal récemment",
        label=lambda c: "Help signal récent",
    ),
    CriticalRule(
        name="high_risk",
        applies=lambda c: c.risk.risk_level == RiskLevel.HIGH_RISK,
        reason=lambda c: f"risque burnout ÉLEVÉ (score : {c.risk.score}/100)",
        label=lambda c: "Niveau de risque élevé",
    ),
    CriticalRule(
        name="high_stress",
        applies=lambda c: c.survey.observed and c.survey.stress_level >= CRITICAL_STRESS,
        reason=lambda c: f"stress déclaré élevé ({c.survey.stress_level}/5)",
        label=lambda c: "Stress élevé déclaré",
    ),
    CriticalRule(
        name="low_energy",
        applies=lambda c: c.survey.observed and c.survey.energy_level <= CRITICAL_ENERGY,
        reason=lambda c: f"énergie déclarée basse ({c.survey.energy_level}/5)",
        label=lambda c: "Énergie basse déclarée",
    ),
    CriticalRule(
        name="hard_streak",
        applies=lambda c: c.hard_streak >= CRITICAL_STREAK,
        reason=lambda c: f"{c.hard_streak} assignations hard consécutives",
        label=lambda c: f"{c.hard_streak} jours hard consécutifs",
    ),
    CriticalRule(
        name="critical_debt",
        applies=lambda c: c.debt.current > CRITICAL_DEBT,
        reason=lambda c: f"dette burnout critique ({c.debt.current}/100)",
        label=lambda c: "Dette burnout critique",
    ),
]


# ── TIER 2 : risque warning → plafonnement ────────────────────────────────────

WARNING_RULES: List[Rule] = [
    Rule(
        name="warning_with_strain",
        applies=lambda c: c.hard_streak >= RECOVERY_STREAK or c.survey.stress_level >= WARNING_STRESS,
        difficulty=Difficulty.EASY,
        reasoning=lambda c: (
            f"Risque WARNING (score : {c.risk.score}/100) avec indicateurs de stress élevés. "
            "Charge légère conseillée."
        ),
        label="Risque warning + indicateurs de stress",
    ),
    Rule(
        name="warning_cap",
        applies=_always,
        difficulty=Difficulty.MEDIUM,
        reasoning=lambda c: (
            f"Risque WARNING (score : {c.risk.score}/100). "
            "Plafonnement à medium pour éviter l'escalade."
        ),
        label="Niveau de risque warning",
    ),
]


# ── TIER 3 : risque safe → progression adaptative ─────────────────────────────

def _latest_is(*difficulties: Optional[Difficulty]) -> Callable[[RecommendationContext], bool]:
    return lambda c: c.latest_difficulty in difficulties


def _earned_challenge(c: RecommendationContext) -> bool:
    s = c.survey
    return s.stress_level <= 2 and s.energy_level >= 4 and s.work_life_balance >= 4 and c.easy_count >= 2


def _excellent_health(c: RecommendationContext) -> bool:
    s = c.survey
    return s.stress_level <= 2 and s.energy_level >= 4 and c.debt.current < LOW_DEBT and c.hard_count <= 1


def _moderate_wellness(c: RecommendationContext) -> bool:
    return c.survey.stress_level >= 3 or c.survey.energy_level <= 3


ADAPTIVE_RULES: List[Rule] = [
    Rule(
        name="hard_streak_recovery",
        applies=lambda c: c.hard_streak >= RECOVERY_STREAK,
        difficulty=Difficulty.EASY,
        reasoning=lambda c: (
            f"{c.hard_streak} assignations hard consécutives. "
            "Une journée de récupération évitera l'accumulation de dette burnout."
        ),
        label="Récupération après série hard",
    ),
    Rule(
        name="post_hard_debt_recovery",
        applies=lambda c: c.moderate_debt and c.latest_difficulty == Difficulty.HARD,
        difficulty=Difficulty.EASY,
        reasoning=lambda c: (
            f"Dernière assignation hard et dette burnout élevée ({c.debt.current}/100). "
            "Retour à easy pour récupérer."
        ),
        label="Récupération dette post-hard",
    ),
    Rule(
        name="moderate_debt",
        applies=lambda c: c.moderate_debt,
        difficulty=Difficulty.MEDIUM,
        reasoning=lambda c: (
            f"Dette burnout modérément élevée ({c.debt.current}/100). Maintien à medium."
        ),
        label="Dette burnout modérée",
    ),
    Rule(
        name="screen_time_after_hard",
        applies=lambda c: c.screen_time_excess and c.latest_difficulty == Difficulty.HARD,
        difficulty=Difficulty.MEDIUM,
        reasoning=lambda c: (
            "Dernière assignation hard et temps d'écran moyen supérieur à 8h. Retour à medium."
        ),
        label="Temps d'écran + récupération hard",
    ),
    Rule(
        name="alternate_after_hard",
        applies=_latest_is(Difficulty.HARD),
        difficulty=Difficulty.MEDIUM,
        reasoning=lambda c: "Dernière assignation hard. Alternance vers medium pour un rythme durable.",
        label="Hard → Medium",
    ),
    Rule(
        name="earned_challenge",
        applies=lambda c: c.latest_difficulty == Difficulty.EASY and _earned_challenge(c),
        difficulty=Difficulty.HARD,
        reasoning=lambda c: (
            "Stress bas, énergie haute et bon équilibre vie pro/perso après plusieurs jours easy. "
            "Prêt pour un défi."
        ),
        label="Bonne santé + série easy → défi",
    ),
    Rule(
        name="step_up_from_easy",
        applies=_latest_is(Difficulty.EASY),
        difficulty=Difficulty.MEDIUM,
        reasoning=lambda c: "Dernière assignation easy. Passage à medium pour une progression équilibrée.",
        label="Easy → Medium",
    ),
    Rule(
        name="excellent_health",
        applies=lambda c: c.latest_difficulty in (Difficulty.MEDIUM, None) and _excellent_health(c),
        difficulty=Difficulty.HARD,
        reasoning=lambda c: (
            f"Le worker va bien — stress bas ({c.survey.stress_level}/5), "
            f"énergie haute ({c.survey.energy_level}/5), dette minimale. "
            "Peut assumer une assignation hard."
        ),
        label="Excellents indicateurs de santé",
    ),
    Rule(
        name="moderate_stress_screen_time",
        applies=lambda c: _moderate_wellness(c) and c.screen_time_excess,
        difficulty=Difficulty.EASY,
        reasoning=lambda c: "Stress modéré et temps d'écran excessif. Retour à easy.",
        label="Stress modéré + temps d'écran",
    ),
    Rule(
        name="moderate_wellness",
        applies=_moderate_wellness,
        difficulty=Difficulty.MEDIUM,
        reasoning=lambda c: "Indicateurs de bien-être moyens. Maintien à medium.",
        label="Bien-être moyen",
    ),
    Rule(
        name="balanced",
        applies=_always,
        difficulty=Difficulty.MEDIUM,
        reasoning=lambda c: "Conditions normales. Medium maintient un rythme sain.",
        label="Conditions équilibrées",
    ),
]


# ── Cascade ───────────────────────────────────────────────────────────────────

def recommend(ctx: RecommendationContext) -> Recommendation:
    """Évalue la cascade Tier 1 → Tier 2 → Tier 3 et calcule la confiance."""
    critical = [rule for rule in CRITICAL_RULES if rule.applies(ctx)]

    if critical:
        reasons = "; ".join(rule.reason(ctx) for rule in critical)
        labels = [rule.label(ctx) for rule in critical]
        result = Recommendation(
            worker_id=ctx.worker_id,
            recommended_difficulty=Difficulty.EASY,
            reasoning=f"Charge easy requise : {reasons}. La récupération est prioritaire.",
            factors=labels,
            tier=RecommendationTier.CRITICAL,
            rule="+".join(rule.name for rule in critical),
        )
    elif ctx.risk.risk_level == RiskLevel.WARNING:
        result = _apply_first(WARNING_RULES, ctx, RecommendationTier.WARNING)
    else:
        result = _apply_first(ADAPTIVE_RULES, ctx, RecommendationTier.ADAPTIVE)

    result.confidence = _confidence(len(critical), len(result.factors), ctx)
    return result


def first_match(rules: Sequence[Rule], ctx: RecommendationContext) -> Rule:
    """Première règle vérifiée. Chaque liste se termine par une règle _always."""
    return next(rule for rule in rules if rule.applies(ctx))


def _apply_first(rules: Sequence[Rule], ctx: RecommendationContext, tier: RecommendationTier) -> Recommendation:
    rule = first_match(rules, ctx)
    return Recommendation(
        worker_id=ctx.worker_id,
        recommended_difficulty=rule.difficulty,
        reasoning=rule.reasoning(ctx),
        factors=[rule.label],
        tier=tier,
        rule=rule.name,
    )


def _confidence(critical_count: int, label_count: int, ctx: RecommendationContext) -> Confidence:
    confidence = Confidence.MEDIUM
    if critical_count >= HIGH_CONFIDENCE_CRITICAL or label_count >= HIGH_CONFIDENCE_LABELS:
        confidence = Confidence.HIGH
    # Peu de données : prime sur tout le reste
    if ctx.assignment_count < MIN_ASSIGNMENTS or ctx.survey_count == 0:
        confidence = Confidence.LOW
    return confidence
