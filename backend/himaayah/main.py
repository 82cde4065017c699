"""
FastAPI application entrypoint.
Run with: uvicorn himaayah.main:app --reload --port 4000  (or the `himaayah-api` script).

API base path: routes are mounted at root (no /api prefix).
  - Auth:     POST /auth/register, POST /auth/login, GET /me
  - Students: GET /students, GET|PATCH /students/{id}, POST /students/{id}/semester-results
  - Catalog:  GET|POST /subjects, GET|POST /classes
  - Exams:    GET|POST /exams, GET|POST /exams/{id}/questions, POST /exams/{id}/submit
  - Results:  POST /results/{id}/grade
  - Payments: GET|POST /payments
  - Export:   GET /export/student/{id}/report
  - Community: /journals, /students/{id}/journals, /pods, /posts

Errors are always {"error": "<message>"}; see himaayah.errors.
"""
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from himaayah.config import DEFAULT_SECRET_KEY, settings
from himaayah.errors import register_error_handlers
from himaayah.api.auth import router as auth_router
from himaayah.api.students import router as students_router
from himaayah.api.catalog import router as catalog_router
from himaayah.api.exams import router as exams_router
from himaayah.api.results import router as results_router
from himaayah.api.payments import router as payments_router
from himaayah.api.reports import router as reports_router
from himaayah.api.community import router as community_router

app = FastAPI(
    title="Himaayah Records API",
    description="Accounts, student profiles, exams and grading, payments and community posts.",
    version="0.1.0",
)

_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins if _origins else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router)
app.include_router(students_router)
app.include_router(catalog_router)
app.include_router(exams_router)
app.include_router(results_router)
app.include_router(payments_router)
app.include_router(reports_router)
app.include_router(community_router)


@app.on_event("startup")
def startup():
    """Create tables and seed catalogs. Fail fast if production uses the default JWT secret."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    _log = logging.getLogger("himaayah.main")
    if (settings.env or "").strip().lower() == "production":
        if (settings.secret_key or "").strip() == DEFAULT_SECRET_KEY:
            _log.critical("JWT_SECRET must be set in production. Set JWT_SECRET in env or .env.")
            raise RuntimeError("JWT_SECRET must be set in production. Set JWT_SECRET in env or .env.")
    from himaayah.database import init_db
    init_db()
    _log.info(
        "Database ready (pool limit %s, token expiry %sh)", settings.db_connection_limit, settings.jwt_expire_hours
    )


@app.on_event("shutdown")
def shutdown():
    from himaayah.database import dispose_engine
    dispose_engine()


@app.get("/health")
def health():
    """Health check (JSON)."""
    return {"ok": True}


def run():
    """Console entrypoint: serve on settings.port."""
    uvicorn.run("himaayah.main:app", host="0.0.0.0", port=settings.port)
