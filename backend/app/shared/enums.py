# app/shared/enums.py
"""
Toutes les énumérations du projet Burnout Shield.

Source unique de vérité pour les statuts, rôles et niveaux.
Importé par les modèles, schemas, services et engine.
"""

from enum import Enum

class UserRole(str, Enum):
    WORKER = "worker"
    LEADER = "leader"    # Team leader, assigne les tâches quotidiennes


class Difficulty(str, Enum):
    EASY   = "easy"
    MEDIUM = "medium"
    HARD   = "hard"


class RiskLevel(str, Enum):
    SAFE      = "safe"
    WARNING   = "warning"
    HIGH_RISK = "high-risk"


class AlertStatus(str, Enum):
    PENDING      = "pending"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED     = "resolved"      # Exige explication + action corrective


class AlertType(str, Enum):
    BURNOUT_RISK     = "burnout-risk"
    HIGH_SCREEN_TIME = "high-screen-time"
    CONSECUTIVE_HARD = "consecutive-hard"
    NO_BREAKS        = "no-breaks"
    HIGH_STRESS      = "high-stress"
    HELP_SIGNAL      = "help-signal"
    HIGH_DEBT        = "high-debt"


class DebtTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE     = "stable"


class Confidence(str, Enum):
    HIGH   = "high"
    MEDIUM = "medium"
    LOW    = "low"


class RecommendationTier(str, Enum):
    CRITICAL = "critical"   # Tier 1 : garde-fous de sécurité
    WARNING  = "warning"    # Tier 2 : plafonnement
    ADAPTIVE = "adaptive"   # Tier 3 : progression adaptative


class AlertAction(str, Enum):
    ACKNOWLEDGE = "acknowledge"
    RESOLVE     = "resolve"
