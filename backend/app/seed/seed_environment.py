# seed/seed_environment.py
"""
Seed d'environnement — base de données de démonstration complète.

Contenu :
    1 leader (Priya Sharma) + 5 workers, équipe team-alpha
    14 jours de work logs et d'assignations (jours ouvrés uniquement)
    4 surveys hebdomadaires par worker
    1 help signal + alertes en cours
    Ledger de dette rejoué via engine/burnout/debt.replay (cohérent avec l'activité)

Profils couverts intentionnellement :
    SURCHARGÉ  → Arjun Mehta  (écran 8-11h, sessions longues, 4 jours hard, stress en hausse)
    REPOSÉ     → Kavya Nair   (écran 5-7h, ≥ 3 pauses, easy uniquement, excellent bien-être)
    MIXTE      → Sneha Patel, Rahul Verma, Deepak Singh (aléatoire reproductible)

Usage :
    python -m app.seed.seed_environment
"""
import asyncio
import random
from datetime import date, datetime, timezone, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from app.core.config import settings
from app.engine.burnout import debt as debt_engine
from app.shared.models import (
    User, WorkLog, Assignment, WellbeingSurvey,
    HelpSignal, Alert, BurnoutDebtScore, BurnoutDebtEntry,
)
from app.shared.enums import UserRole, Difficulty, AlertType, AlertStatus, RiskLevel

engine = create_async_engine(settings.DATABASE_URL, echo=False)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)

DAYS = 14
TEAM_ID = "team-alpha"
OVERRIDE_REASON = "Deadline sprint critique — livraison client"

# Dette de départ (avant la fenêtre rejouée)
START_DEBT = {"arjun": 35, "rahul": 20}
DEFAULT_START_DEBT = 10


# ── Helpers ────────────────────────────────────────────────────────────────────

def _now() -> datetime:
    return datetime.now(timezone.utc)

def _ago(days: int) -> datetime:
    return _now() - timedelta(days=days)

def _day(days_ago: int) -> date:
    return _now().date() - timedelta(days=days_ago)


WORKERS = [
    # key,     name,            email,                    avatar
    ("arjun",  "Arjun Mehta",   "arjun@solutioners.io",   "AM"),
    ("sneha",  "Sneha Patel",   "sneha@solutioners.io",   "SP"),
    ("rahul",  "Rahul Verma",   "rahul@solutioners.io",   "RV"),
    ("kavya",  "Kavya Nair",    "kavya@solutioners.io",   "KN"),
    ("deepak", "Deepak Singh",  "deepak@solutioners.io",  "DS"),
]


# ── Génération d'activité ──────────────────────────────────────────────────────

def _work_log_values(key: str, rng: random.Random) -> dict:
    screen  = 6 + rng.random() * 4
    session = 60 + rng.random() * 120
    breaks  = int(rng.random() * 5)

    if key == "arjun":
        screen  = 8 + rng.random() * 3
        session = 120 + rng.random() * 60
        breaks  = int(rng.random() * 2)
    elif key == "kavya":
        screen  = 5 + rng.random() * 2
        session = 50 + rng.random() * 40
        breaks  = 3 + int(rng.random() * 3)

    end_hour = 17 + max(0, int(screen - 8))
    return {
        "screen_time_hours":       round(screen, 1),
        "tasks_completed":         2 + int(rng.random() * 6),
        "task_descriptions":       ["Développement feature", "Code review", "Corrections de bugs"],
        "breaks_taken":            breaks,
        "break_duration_minutes":  breaks * (10 + int(rng.random() * 10)),
        "session_start_time":      "09:00",
        "session_end_time":        f"{end_hour:02d}:{int(rng.random() * 60):02d}",
        "longest_session_minutes": round(session),
    }


def _difficulty(key: str, days_ago: int, rng: random.Random) -> Difficulty:
    if key == "arjun":
        return Difficulty.HARD if days_ago < 4 else rng.choice(list(Difficulty))
    if key == "kavya":
        return Difficulty.EASY
    return rng.choice(list(Difficulty))


def _recommended_for(difficulty: Difficulty) -> Difficulty:
    if difficulty == Difficulty.MEDIUM:
        return Difficulty.EASY
    return Difficulty.MEDIUM


def _survey_values(key: str, week: int, rng: random.Random) -> dict:
    stress  = 2 + int(rng.random() * 2)
    energy  = 3 + int(rng.random() * 2)
    balance = 3 + int(rng.random() * 2)

    if key == "arjun":
        stress, energy, balance = 3 + week, 3 - week, 3 - week
    elif key == "kavya":
        stress, energy, balance = 1, 4, 4

    clamp = lambda v: max(1, min(5, v))
    return {
        "stress_level":      clamp(stress),
        "energy_level":      clamp(energy),
        "work_life_balance": clamp(balance),
        "notes": "Épuisé, trop de deadlines" if key == "arjun" and week == 0 else "",
    }


# ── Seed ───────────────────────────────────────────────────────────────────────

async def seed(db: AsyncSession) -> None:
    print("🌱 Seed environnement démarré...")
    rng = random.Random(42)

    # ── Users ─────────────────────────────────────────────
    leader = User(
        name="Priya Sharma", email="priya@solutioners.io",
        role=UserRole.LEADER, team_id=TEAM_ID, avatar_url="PS",
    )
    db.add(leader)
    workers = {}
    for key, name, email, avatar in WORKERS:
        workers[key] = User(name=name, email=email, role=UserRole.WORKER, team_id=TEAM_ID, avatar_url=avatar)
        db.add(workers[key])
    await db.flush()
    print(f"  ✓ Users : leader {leader.name} (id={leader.id}), {len(workers)} workers")

    # ── Work logs + assignations (jours ouvrés) ───────────
    activity = {key: [] for key in workers}
    n_logs = n_assignments = 0

    for days_ago in range(DAYS - 1, -1, -1):
        day = _day(days_ago)
        for key, worker in workers.items():
            if debt_engine.is_weekend(day):
                activity[key].append(debt_engine.DayActivity(day=day))
                continue

            log = WorkLog(worker_id=worker.id, date=day, **_work_log_values(key, rng))
            difficulty = _difficulty(key, days_ago, rng)
            overridden = key == "arjun" and days_ago < 3
            assignment = Assignment(
                worker_id=worker.id,
                assigned_by_id=leader.id,
                date=day,
                difficulty=difficulty,
                task_title=f"Tâche sprint — jour {DAYS - days_ago}",
                task_description=f"Tâche {difficulty.value} assignée pour la journée",
                recommended_difficulty=_recommended_for(difficulty),
                was_override=overridden,
                override_reason=OVERRIDE_REASON if overridden else None,
            )
            db.add(log)
            db.add(assignment)
            n_logs += 1
            n_assignments += 1
            activity[key].append(debt_engine.DayActivity(day=day, assignment=assignment, work_log=log))

    print(f"  ✓ Activité : {n_logs} work logs, {n_assignments} assignations")

    # ── Surveys (4 derniers vendredis) ────────────────────
    friday_offset = (_now().weekday() - 4) % 7
    for week in range(4):
        week_date = _day(week * 7 + friday_offset)
        for key, worker in workers.items():
            db.add(WellbeingSurvey(worker_id=worker.id, week_date=week_date, **_survey_values(key, week, rng)))
    print("  ✓ Surveys : 4 semaines")

    # ── Help signal + alertes ─────────────────────────────
    arjun, rahul = workers["arjun"], workers["rahul"]
    db.add(HelpSignal(worker_id=arjun.id, message="Je me sens débordé", timestamp=_ago(1)))

    db.add_all([
        Alert(
            worker_id=arjun.id, type=AlertType.CONSECUTIVE_HARD, severity=RiskLevel.HIGH_RISK,
            message="Difficulté hard assignée 3 jours consécutifs",
            details="Série d'assignations hard détectée. Le risque de burnout augmente.",
            status=AlertStatus.PENDING, created_at=_ago(0),
        ),
        Alert(
            worker_id=arjun.id, type=AlertType.HIGH_SCREEN_TIME, severity=RiskLevel.WARNING,
            message=f"{arjun.name} dépasse 9h30 d'écran en moyenne cette semaine",
            details="Temps d'écran supérieur à 8h de façon répétée. Risque de fatigue.",
            status=AlertStatus.PENDING, created_at=_ago(1),
        ),
        Alert(
            worker_id=arjun.id, type=AlertType.HELP_SIGNAL, severity=RiskLevel.HIGH_RISK,
            message=f"{arjun.name} a envoyé un help signal",
            details="Je me sens débordé",
            status=AlertStatus.PENDING, created_at=_ago(1),
        ),
        Alert(
            worker_id=rahul.id, type=AlertType.NO_BREAKS, severity=RiskLevel.WARNING,
            message=f"{rahul.name} a travaillé plus de 3h sans pause",
            details="Session longue sans pause détectée.",
            status=AlertStatus.ACKNOWLEDGED, created_at=_ago(2), acknowledged_at=_ago(2),
            leader_explanation="Session de concentration prolongée. Pauses planifiées dès demain.",
            corrective_action="Rappels de pause obligatoires toutes les 90 minutes.",
        ),
    ])
    print("  ✓ Help signal + 4 alertes")

    # ── Ledger de dette (rejoué par le moteur) ────────────
    for key, worker in workers.items():
        series = debt_engine.replay(START_DEBT.get(key, DEFAULT_START_DEBT), activity[key])
        last, previous = series[-1], series[-2]
        trend = debt_engine.trend_for(last.score - previous.score)
        db.add(BurnoutDebtScore(
            worker_id=worker.id,
            current_debt=last.score,
            trend=trend,
            history=[BurnoutDebtEntry(date=p.date, score=p.score, settled=True) for p in series],
        ))
        print(f"    · {worker.name:<14} dette={last.score:>3} ({trend.value})")

    await db.commit()
    print("✅ Seed environnement terminé.")
    print()
    print("📋 Résumé pour les tests :")
    print(f"   Leader        : {leader.email} (id={leader.id})")
    print(f"   Surchargé     : {arjun.email} (id={arjun.id})")
    print(f"   Reposé        : {workers['kavya'].email} (id={workers['kavya'].id})")


async def main():
    async with AsyncSessionLocal() as db:
        await seed(db)


if __name__ == "__main__":
    asyncio.run(main())
