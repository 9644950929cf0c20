# engine/burnout/signals.py
"""
Entrées du moteur burnout — ZÉRO accès DB.

WorkerHistory est un instantané en lecture seule construit par le service
(modules/burnout/service.py) à partir des repositories. Les lignes qu'il contient
sont des objets ORM ou des SimpleNamespace : le moteur ne lit que des attributs.

Ordre : toutes les séquences sont triées du plus récent au plus ancien.

États « pas de donnée » :
    SurveyReading.from_surveys([]) → stress=2, energy=3, balance=3 (observed=False)
    DebtReading.from_record(None)  → current=0                     (observed=False)
Les valeurs par défaut sont choisies pour ne déclencher aucun facteur de risque.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from app.shared.enums import Difficulty


# ── Valeurs par défaut sans survey ────────────────────────────────────────────

DEFAULT_STRESS:  int = 2
DEFAULT_ENERGY:  int = 3
DEFAULT_BALANCE: int = 3


@dataclass(frozen=True)
class SurveyReading:
    """Dernier survey du worker, ou valeurs neutres si aucun n'existe."""
    stress_level:      int
    energy_level:      int
    work_life_balance: int
    observed:          bool = True

    @classmethod
    def from_surveys(cls, surveys: Sequence[Any]) -> "SurveyReading":
        if not surveys:
            return cls(DEFAULT_STRESS, DEFAULT_ENERGY, DEFAULT_BALANCE, observed=False)
        latest = surveys[0]
        return cls(
            stress_level=int(latest.stress_level),
            energy_level=int(latest.energy_level),
            work_life_balance=int(latest.work_life_balance),
        )


@dataclass(frozen=True)
class DebtReading:
    """Dette burnout courante. Sans ledger : 0."""
    current:  int = 0
    observed: bool = False

    @classmethod
    def from_record(cls, record: Optional[Any]) -> "DebtReading":
        if record is None:
            return cls()
        return cls(current=int(record.current_debt), observed=True)


@dataclass
class WorkerHistory:
    """Instantané des lignes lues pour un worker (plus récent en premier)."""
    worker_id:    int
    work_logs:    List[Any] = field(default_factory=list)
    assignments:  List[Any] = field(default_factory=list)
    surveys:      List[Any] = field(default_factory=list)
    help_signals: List[Any] = field(default_factory=list)
    debt_record:  Optional[Any] = None

    @property
    def survey(self) -> SurveyReading:
        return SurveyReading.from_surveys(self.surveys)

    @property
    def debt(self) -> DebtReading:
        return DebtReading.from_record(self.debt_record)


# ── Helpers partagés ──────────────────────────────────────────────────────────

def leading_hard_streak(difficulties: Sequence[Any]) -> int:
    """
    Nombre d'assignations « hard » en tête de liste (plus récent en premier),
    arrêt à la première non-hard. Utilisé par le risk evaluator ET l'accountability.
    """
    count = 0
    for difficulty in difficulties:
        if as_difficulty(difficulty) != Difficulty.HARD:
            break
        count += 1
    return count


def as_difficulty(value: Any) -> Optional[Difficulty]:
    """Accepte un Difficulty, sa valeur str, ou None."""
    if value is None or isinstance(value, Difficulty):
        return value
    return Difficulty(value)


def as_utc(moment: datetime) -> datetime:
    """Les timestamps naïfs (SQLite, seeds) sont interprétés en UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def survey_averages(surveys: Sequence[Any]) -> Tuple[float, float]:
    """(stress moyen, énergie moyenne) arrondis à 0.1 — (0.0, 0.0) sans survey."""
    if not surveys:
        return 0.0, 0.0
    stress = float(np.mean([s.stress_level for s in surveys]))
    energy = float(np.mean([s.energy_level for s in surveys]))
    return round_half_up(stress, 1), round_half_up(energy, 1)


def round_half_up(value: float, digits: int = 0) -> float:
    """Arrondi commercial (92.5 → 93, 3.25 → 3.3), pas l'arrondi bancaire de round()."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
