# tests/conftest.py
"""
Fixtures et factories partagées sur l'ensemble de la suite de tests.

Trois couches :
    1. Engine  — fonctions pures, aucun mock nécessaire (factories de lignes + WorkerHistory)
    2. Service — mocks AsyncSession + repos via pytest-mock
    3. Router  — httpx.AsyncClient + dependency_overrides FastAPI
"""
import pytest
from types import SimpleNamespace
from datetime import date, datetime, timezone, timedelta
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from app.main import app
from app.core.database import get_db
from app.engine.burnout.signals import WorkerHistory
from app.shared.enums import (
    UserRole, Difficulty, AlertType, AlertStatus, RiskLevel, DebtTrend,
)


# Instant de référence figé pour les tests déterministes
NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)     # vendredi
TODAY = NOW.date()


# ── Factories de modèles ORM (SimpleNamespace — léger, sans ORM) ──────────────

def make_user(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "email": "worker@test.com",
        "name": "Test Worker",
        "role": UserRole.WORKER,
        "team_id": "team-alpha",
        "avatar_url": None,
        "created_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_leader(**kwargs) -> SimpleNamespace:
    defaults = {"id": 100, "email": "leader@test.com", "name": "Test Leader", "role": UserRole.LEADER}
    defaults.update(kwargs)
    return make_user(**defaults)


def make_work_log(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "worker_id": 1,
        "date": TODAY,
        "screen_time_hours": 6.0,
        "tasks_completed": 4,
        "task_descriptions": [],
        "breaks_taken": 3,
        "break_duration_minutes": 30,
        "session_start_time": "09:00",
        "session_end_time": "17:00",
        "longest_session_minutes": 90,
        "created_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_assignment(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "worker_id": 1,
        "assigned_by_id": 100,
        "date": TODAY,
        "difficulty": Difficulty.MEDIUM,
        "task_title": "Tâche sprint",
        "task_description": "",
        "recommended_difficulty": None,
        "was_override": False,
        "override_reason": None,
        "created_at": datetime(2025, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_survey(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "worker_id": 1,
        "week_date": TODAY,
        "stress_level": 2,
        "energy_level": 3,
        "work_life_balance": 3,
        "notes": "",
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_help_signal(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "worker_id": 1,
        "message": "Je suis débordé",
        "timestamp": NOW - timedelta(hours=2),
        "read_by_leader": False,
        "read_at": None,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_debt_record(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "worker_id": 1,
        "current_debt": 0,
        "trend": DebtTrend.STABLE,
        "last_updated": NOW,
        "history": [],
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_alert(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "worker_id": 1,
        "type": AlertType.CONSECUTIVE_HARD,
        "severity": RiskLevel.WARNING,
        "status": AlertStatus.PENDING,
        "message": "Difficulté hard assignée 2 jours consécutifs",
        "details": "",
        "created_at": NOW,
        "acknowledged_at": None,
        "resolved_at": None,
        "leader_explanation": None,
        "corrective_action": None,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


# ── Historique moteur ─────────────────────────────────────────────────────────

def assignments_of(*difficulties: Difficulty, worker_id: int = 1, **kwargs) -> list:
    """Assignations plus récentes d'abord : la première est celle d'aujourd'hui."""
    return [
        make_assignment(id=i + 1, worker_id=worker_id, date=TODAY - timedelta(days=i), difficulty=d, **kwargs)
        for i, d in enumerate(difficulties)
    ]


def logs_of(*screen_hours: float, worker_id: int = 1, **kwargs) -> list:
    return [
        make_work_log(id=i + 1, worker_id=worker_id, date=TODAY - timedelta(days=i), screen_time_hours=h, **kwargs)
        for i, h in enumerate(screen_hours)
    ]


def make_history(**kwargs) -> WorkerHistory:
    defaults = {
        "worker_id": 1,
        "work_logs": [],
        "assignments": [],
        "surveys": [],
        "help_signals": [],
        "debt_record": None,
    }
    defaults.update(kwargs)
    return WorkerHistory(**defaults)


# ── DB mock factory ───────────────────────────────────────────────────────────

def make_async_db() -> AsyncMock:
    """
    AsyncMock simulant une AsyncSession SQLAlchemy.
    Fournit une side_effect sur refresh() pour simuler le SET d'ID par le DB.
    """
    db = AsyncMock(spec=AsyncSession)
    added_objects: list = []

    def capture_add(obj):
        added_objects.append(obj)

    db.add = MagicMock(side_effect=capture_add)
    db.added = added_objects

    async def refresh_side_effect(obj, *args, **kwargs):
        if not getattr(obj, "id", None):
            try:
                obj.id = 1
            except (AttributeError, TypeError):
                pass

    db.refresh = AsyncMock(side_effect=refresh_side_effect)
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.close = AsyncMock()

    return db


# ── Fixtures HTTP (httpx.AsyncClient + dependency_overrides) ─────────────────

@pytest.fixture
async def client():
    """Client HTTP — le service est mocké par test, la session DB est un AsyncMock."""
    mock_db = AsyncMock(spec=AsyncSession)
    app.dependency_overrides[get_db] = lambda: mock_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
