# main.py
"""
Point d'entrée de l'API Burnout Shield.
Enregistre tous les modules via leurs routers.

Architecture : modules verticaux quasi-autonomes + engine transversal (engine/burnout).
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import configure_logging

from app.modules.team.router           import router as team_router
from app.modules.activity.router       import router as activity_router
from app.modules.assignment.router     import router as assignment_router
from app.modules.alert.router          import router as alert_router
from app.modules.burnout.router        import router as burnout_router
from app.modules.accountability.router import router as accountability_router

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(team_router)
app.include_router(activity_router)
app.include_router(assignment_router)
app.include_router(alert_router)
app.include_router(burnout_router)
app.include_router(accountability_router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "1.0.0"}
