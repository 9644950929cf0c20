"""initial schema — burnout shield

Revision ID: 001_initial
Create Date: 17/10/2026
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '001_initial'
down_revision = None

# Valeurs des Enums (valeurs persistées, pas les noms Python)
USER_ROLE = ('worker', 'leader')
DIFFICULTY = ('easy', 'medium', 'hard')
RISK_LEVEL = ('safe', 'warning', 'high-risk')
ALERT_STATUS = ('pending', 'acknowledged', 'resolved')
ALERT_TYPE = ('burnout-risk', 'high-screen-time', 'consecutive-hard', 'no-breaks', 'high-stress', 'help-signal', 'high-debt')
DEBT_TREND = ('increasing', 'decreasing', 'stable')


def upgrade() -> None:
    # ── 1. CREATION MANUELLE DES TYPES ENUM (SÉCURISÉE) ──
    enums = {
        "userrole": USER_ROLE,
        "difficulty": DIFFICULTY,
        "risklevel": RISK_LEVEL,
        "alertstatus": ALERT_STATUS,
        "alerttype": ALERT_TYPE,
        "debttrend": DEBT_TREND,
    }

    for name, values in enums.items():
        vals_str = ", ".join([f"'{v}'" for v in values])
        op.execute(f"""
            DO $$
            BEGIN
                IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = '{name}') THEN
                    CREATE TYPE {name} AS ENUM ({vals_str});
                END IF;
            END $$;
        """)

    # ── 2. CREATION DES TABLES ──
    # postgresql.ENUM(..., create_type=False) : types déjà créés ci-dessus.

    op.create_table("users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email", sa.String, nullable=False),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("role", postgresql.ENUM(*USER_ROLE, name='userrole', create_type=False), nullable=False, server_default="worker"),
        sa.Column("team_id", sa.String, nullable=True),
        sa.Column("avatar_url", sa.String, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_team_id", "users", ["team_id"])

    op.create_table("work_logs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("worker_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("screen_time_hours", sa.Float, nullable=False, server_default="0"),
        sa.Column("tasks_completed", sa.Integer, nullable=False, server_default="0"),
        sa.Column("task_descriptions", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("breaks_taken", sa.Integer, nullable=False, server_default="0"),
        sa.Column("break_duration_minutes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("session_start_time", sa.String, nullable=True),
        sa.Column("session_end_time", sa.String, nullable=True),
        sa.Column("longest_session_minutes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("worker_id", "date", name="uq_work_log_worker_date"),
    )
    op.create_index("ix_work_logs_worker_id", "work_logs", ["worker_id"])
    op.create_index("ix_work_logs_date", "work_logs", ["date"])

    op.create_table("help_signals",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("worker_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("message", sa.String, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("read_by_leader", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_help_signals_worker_id", "help_signals", ["worker_id"])

    op.create_table("surveys",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("worker_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("week_date", sa.Date, nullable=False),
        sa.Column("stress_level", sa.Integer, nullable=False),
        sa.Column("energy_level", sa.Integer, nullable=False),
        sa.Column("work_life_balance", sa.Integer, nullable=False),
        sa.Column("notes", sa.String, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("worker_id", "week_date", name="uq_survey_worker_week"),
    )
    op.create_index("ix_surveys_worker_id", "surveys", ["worker_id"])
    op.create_index("ix_surveys_week_date", "surveys", ["week_date"])

    op.create_table("assignments",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("worker_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("assigned_by_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("difficulty", postgresql.ENUM(*DIFFICULTY, name='difficulty', create_type=False), nullable=False),
        sa.Column("task_title", sa.String, nullable=False),
        sa.Column("task_description", sa.String, nullable=False, server_default=""),
        sa.Column("recommended_difficulty", postgresql.ENUM(*DIFFICULTY, name='difficulty', create_type=False), nullable=True),
        sa.Column("was_override", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("override_reason", sa.String, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("worker_id", "date", name="uq_assignment_worker_date"),
    )
    op.create_index("ix_assignments_worker_id", "assignments", ["worker_id"])
    op.create_index("ix_assignments_assigned_by_id", "assignments", ["assigned_by_id"])
    op.create_index("ix_assignments_date", "assignments", ["date"])

    op.create_table("alerts",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("worker_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", postgresql.ENUM(*ALERT_TYPE, name='alerttype', create_type=False), nullable=False),
        sa.Column("severity", postgresql.ENUM(*RISK_LEVEL, name='risklevel', create_type=False), nullable=False),
        sa.Column("status", postgresql.ENUM(*ALERT_STATUS, name='alertstatus', create_type=False), nullable=False, server_default="pending"),
        sa.Column("message", sa.String, nullable=False),
        sa.Column("details", sa.String, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("acknowledged_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("leader_explanation", sa.String, nullable=True),
        sa.Column("corrective_action", sa.String, nullable=True),
    )
    op.create_index("ix_alerts_worker_id", "alerts", ["worker_id"])
    op.create_index("ix_alerts_status", "alerts", ["status"])
    op.create_index(
        "uq_alert_pending_worker_type", "alerts", ["worker_id", "type"],
        unique=True,
        postgresql_where=sa.text("status = 'pending' AND type <> 'help-signal'"),
    )

    op.create_table("burnout_debt_scores",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("worker_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False),
        sa.Column("current_debt", sa.Integer, nullable=False, server_default="0"),
        sa.Column("trend", postgresql.ENUM(*DEBT_TREND, name='debttrend', create_type=False), nullable=False, server_default="stable"),
        sa.Column("last_updated", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("current_debt BETWEEN 0 AND 100", name="ck_debt_range"),
    )

    op.create_table("burnout_debt_entries",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("score_id", sa.Integer, sa.ForeignKey("burnout_debt_scores.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("score", sa.Integer, nullable=False),
        sa.Column("settled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("score_id", "date", name="uq_debt_entry_score_date"),
    )
    op.create_index("ix_burnout_debt_entries_score_id", "burnout_debt_entries", ["score_id"])


def downgrade() -> None:
    tables = [
        "burnout_debt_entries", "burnout_debt_scores",
        "alerts", "assignments", "surveys", "help_signals", "work_logs",
        "users",
    ]
    for table in tables:
        op.drop_table(table)

    enums = ["userrole", "difficulty", "risklevel", "alertstatus", "alerttype", "debttrend"]
    for e in enums:
        op.execute(f"DROP TYPE IF EXISTS {e}")
