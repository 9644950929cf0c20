# tests/engine/burnout/test_recommendation.py
"""
Tests unitaires pour engine.burnout.recommendation

Couverture :
    TIER 1 (critical) :
        - Chaque garde-fou isolé → easy, tier critical, règle nommée
        - Prime sur les conditions Tier 3 les plus favorables
        - Raisons multiples concaténées → confiance high

    TIER 2 (warning) :
        - Série hard ≥ 2 ou stress ≥ 3 → easy
        - Sinon plafonnement à medium

    TIER 3 (adaptive) :
        - Chaque règle de la chaîne, dans l'ordre
        - Dernier easy, 5 derniers easy,easy,medium,medium,hard, santé excellente → hard

    Confiance :
        - low si < 3 assignations ou aucun survey (prime sur high)
        - medium par défaut

    Structure :
        - Chaque liste Tier 2/3 se termine par une règle inconditionnelle
        - Même entrée → même sortie
"""
import pytest
from datetime import timedelta

from app.engine.burnout.risk import evaluate
from app.engine.burnout.recommendation import (
    recommend,
    RecommendationContext,
    CRITICAL_RULES,
    WARNING_RULES,
    ADAPTIVE_RULES,
)
from app.shared.enums import Confidence, Difficulty, RecommendationTier, RiskLevel
from tests.conftest import (
    NOW, make_history, make_survey, make_help_signal, make_debt_record,
    assignments_of, logs_of,
)

pytestmark = pytest.mark.engine

H, M, E = Difficulty.HARD, Difficulty.MEDIUM, Difficulty.EASY


def _recommend(**history_kwargs):
    history = make_history(**history_kwargs)
    risk = evaluate(history, now=NOW)
    return recommend(RecommendationContext.from_history(history, risk))


def _healthy(**overrides):
    """Worker en excellente santé, prêt pour un défi (Tier 3 → hard)."""
    kwargs = {
        "assignments": assignments_of(E, E, M, M, H),
        "surveys": [make_survey(stress_level=1, energy_level=5, work_life_balance=5)],
    }
    kwargs.update(overrides)
    return kwargs


# ── TIER 1 ────────────────────────────────────────────────────────────────────

class TestTierCritical:
    def test_reference_sans_garde_fou_donne_hard(self):
        result = _recommend(**_healthy())
        assert result.recommended_difficulty == Difficulty.HARD
        assert result.tier == RecommendationTier.ADAPTIVE

    @pytest.mark.parametrize("overrides,rule", [
        ({"help_signals": [make_help_signal(timestamp=NOW - timedelta(hours=5))]}, "help_signal"),
        ({"surveys": [make_survey(stress_level=4, energy_level=5, work_life_balance=5)]}, "high_stress"),
        ({"surveys": [make_survey(stress_level=1, energy_level=2, work_life_balance=5)]}, "low_energy"),
        ({"assignments": assignments_of(H, H, H, E, E)}, "hard_streak"),
        ({"debt_record": make_debt_record(current_debt=71)}, "critical_debt"),
    ])
    def test_garde_fou_force_easy(self, overrides, rule):
        result = _recommend(**_healthy(**overrides))
        assert result.recommended_difficulty == Difficulty.EASY
        assert result.tier == RecommendationTier.CRITICAL
        assert rule in result.rule.split("+")
        assert result.reasoning.startswith("Charge easy requise")

    def test_risque_eleve_seul(self):
        # écran +20, sessions longues +15, équilibre +10, série hard 2 +20 = 65
        logs = logs_of(9.5, 9.5, 9.5, longest_session_minutes=150, breaks_taken=0)
        result = _recommend(
            work_logs=logs,
            assignments=assignments_of(H, H, M),
            surveys=[make_survey(stress_level=2, energy_level=3, work_life_balance=2)],
        )
        assert result.recommended_difficulty == Difficulty.EASY
        assert result.rule == "high_risk"
        assert "65/100" in result.reasoning

    def test_raisons_multiples_concatenees(self):
        result = _recommend(
            assignments=assignments_of(M, M, M),
            surveys=[make_survey(stress_level=5, energy_level=1)],
        )
        assert result.rule == "high_stress+low_energy"
        assert "; " in result.reasoning
        assert len(result.factors) == 2
        assert result.confidence == Confidence.HIGH

    def test_dette_70_pas_critique(self):
        result = _recommend(**_healthy(debt_record=make_debt_record(current_debt=70)))
        assert result.tier != RecommendationTier.CRITICAL


# ── TIER 2 ────────────────────────────────────────────────────────────────────

class TestTierWarning:
    def test_serie_hard_2_donne_easy(self):
        # série 2 (+20) + équilibre 2 (+10) = 30 → warning
        result = _recommend(
            assignments=assignments_of(H, H, E),
            surveys=[make_survey(stress_level=2, energy_level=3, work_life_balance=2)],
        )
        assert result.tier == RecommendationTier.WARNING
        assert result.recommended_difficulty == Difficulty.EASY
        assert result.rule == "warning_with_strain"

    def test_stress_3_donne_easy(self):
        result = _recommend(
            work_logs=logs_of(9.0, 9.0, 9.0),
            assignments=assignments_of(M, E, M),
            surveys=[make_survey(stress_level=3, energy_level=3, work_life_balance=2)],
        )
        assert result.tier == RecommendationTier.WARNING
        assert result.recommended_difficulty == Difficulty.EASY

    def test_sans_tension_plafonne_a_medium(self):
        result = _recommend(
            work_logs=logs_of(9.0, 9.0, 9.0),
            assignments=assignments_of(E, E, E),
            surveys=[make_survey(stress_level=1, energy_level=5, work_life_balance=2)],
        )
        assert result.tier == RecommendationTier.WARNING
        assert result.recommended_difficulty == Difficulty.MEDIUM
        assert result.rule == "warning_cap"


# ── TIER 3 ────────────────────────────────────────────────────────────────────

class TestTierAdaptive:
    def test_recuperation_apres_serie_hard(self):
        result = _recommend(assignments=assignments_of(H, H, M), surveys=[make_survey()])
        assert result.rule == "hard_streak_recovery"
        assert result.recommended_difficulty == Difficulty.EASY

    def test_dette_moderee_apres_hard(self):
        result = _recommend(
            assignments=assignments_of(H, M, M),
            debt_record=make_debt_record(current_debt=45),
        )
        assert result.rule == "post_hard_debt_recovery"
        assert result.recommended_difficulty == Difficulty.EASY

    def test_dette_moderee(self):
        result = _recommend(
            assignments=assignments_of(M, E, M),
            debt_record=make_debt_record(current_debt=45),
        )
        assert result.rule == "moderate_debt"
        assert result.recommended_difficulty == Difficulty.MEDIUM

    def test_ecran_excessif_apres_hard(self):
        result = _recommend(work_logs=logs_of(9.0, 9.0, 9.0), assignments=assignments_of(H, M, M))
        assert result.rule == "screen_time_after_hard"
        assert result.recommended_difficulty == Difficulty.MEDIUM

    def test_jamais_deux_hard_d_affilee(self):
        result = _recommend(**_healthy(assignments=assignments_of(H, E, E, M, M)))
        assert result.rule == "alternate_after_hard"
        assert result.recommended_difficulty == Difficulty.MEDIUM

    def test_defi_merite_apres_easy(self):
        result = _recommend(**_healthy())
        assert result.recommended_difficulty == Difficulty.HARD
        assert result.rule == "earned_challenge"
        assert result.confidence == Confidence.MEDIUM

    def test_easy_sans_sante_excellente_passe_medium(self):
        result = _recommend(
            assignments=assignments_of(E, E, M),
            surveys=[make_survey(stress_level=2, energy_level=3, work_life_balance=4)],
        )
        assert result.rule == "step_up_from_easy"
        assert result.recommended_difficulty == Difficulty.MEDIUM

    def test_une_seule_easy_ne_suffit_pas(self):
        result = _recommend(**_healthy(assignments=assignments_of(E, M, M, M, M)))
        assert result.rule == "step_up_from_easy"

    def test_excellente_sante_apres_medium(self):
        result = _recommend(
            assignments=assignments_of(M, E, M),
            surveys=[make_survey(stress_level=2, energy_level=4, work_life_balance=3)],
        )
        assert result.rule == "excellent_health"
        assert result.recommended_difficulty == Difficulty.HARD

    def test_stress_modere_et_ecran(self):
        result = _recommend(
            work_logs=logs_of(9.0, 9.0, 9.0),
            assignments=assignments_of(M, E, M),
            surveys=[make_survey(stress_level=3, energy_level=4, work_life_balance=4)],
        )
        assert result.rule == "moderate_stress_screen_time"
        assert result.recommended_difficulty == Difficulty.EASY

    def test_bien_etre_moyen(self):
        result = _recommend(
            assignments=assignments_of(M, E, M),
            surveys=[make_survey(stress_level=3, energy_level=4, work_life_balance=4)],
        )
        assert result.rule == "moderate_wellness"
        assert result.recommended_difficulty == Difficulty.MEDIUM

    def test_conditions_equilibrees(self):
        result = _recommend(
            assignments=assignments_of(M, H, M, H, M),
            surveys=[make_survey(stress_level=1, energy_level=4, work_life_balance=4)],
        )
        assert result.rule == "balanced"
        assert result.recommended_difficulty == Difficulty.MEDIUM

    def test_aucun_historique(self):
        result = _recommend()
        # Valeurs par défaut : stress 2, énergie 3 → bien-être moyen
        assert result.rule == "moderate_wellness"
        assert result.recommended_difficulty == Difficulty.MEDIUM
        assert result.confidence == Confidence.LOW


# ── Confiance ─────────────────────────────────────────────────────────────────

class TestConfidence:
    def test_peu_d_assignations_prime_sur_high(self):
        result = _recommend(
            assignments=assignments_of(M, M),
            surveys=[make_survey(stress_level=5, energy_level=1)],
        )
        assert len(result.factors) == 2
        assert result.confidence == Confidence.LOW

    def test_sans_survey_low(self):
        result = _recommend(assignments=assignments_of(M, M, M, M))
        assert result.confidence == Confidence.LOW

    def test_trois_labels_critiques_high(self):
        result = _recommend(
            assignments=assignments_of(M, M, M),
            surveys=[make_survey(stress_level=5, energy_level=1)],
            debt_record=make_debt_record(current_debt=80),
        )
        assert len(result.factors) == 3
        assert result.confidence == Confidence.HIGH


# ── Structure des règles ──────────────────────────────────────────────────────

class TestRuleLists:
    def test_ordre_des_garde_fous(self):
        assert [r.name for r in CRITICAL_RULES] == [
            "help_signal", "high_risk", "high_stress", "low_energy", "hard_streak", "critical_debt",
        ]

    def test_ordre_de_la_chaine_adaptive(self):
        assert [r.name for r in ADAPTIVE_RULES] == [
            "hard_streak_recovery", "post_hard_debt_recovery", "moderate_debt",
            "screen_time_after_hard", "alternate_after_hard", "earned_challenge",
            "step_up_from_easy", "excellent_health", "moderate_stress_screen_time",
            "moderate_wellness", "balanced",
        ]

    @pytest.mark.parametrize("rules", [WARNING_RULES, ADAPTIVE_RULES])
    def test_derniere_regle_inconditionnelle(self, rules):
        history = make_history()
        ctx = RecommendationContext.from_history(history, evaluate(history, now=NOW))
        assert rules[-1].applies(ctx) is True

    def test_deterministe(self):
        kwargs = _healthy(work_logs=logs_of(7.0, 7.5, 8.5))
        first, second = _recommend(**kwargs), _recommend(**kwargs)
        assert first == second
