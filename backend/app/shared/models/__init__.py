# app/shared/models/__init__.py
"""
Point d'entrée unique pour tous les modèles SQLAlchemy.

TOUJOURS importer les modèles depuis ce fichier :
  from app.shared.models import User, WorkLog, Assignment, ...

Jamais directement depuis app.shared.models.User, etc.
→ Garantit que tous les modèles sont enregistrés dans Base.metadata
  avant la création des tables (Alembic, create_all).
"""

from app.shared.models.User        import User
from app.shared.models.Activity    import WorkLog, HelpSignal
from app.shared.models.Assignment  import Assignment
from app.shared.models.Survey      import WellbeingSurvey
from app.shared.models.Alert       import Alert
from app.shared.models.BurnoutDebt import BurnoutDebtScore, BurnoutDebtEntry

__all__ = [
    # Annuaire
    "User",
    # Activité worker
    "WorkLog", "HelpSignal", "WellbeingSurvey",
    # Leader
    "Assignment",
    # Sorties moteur
    "Alert",
    "BurnoutDebtScore", "BurnoutDebtEntry",
]
