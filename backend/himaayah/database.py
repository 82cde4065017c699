"""
SQLAlchemy engine and session. Supports PostgreSQL and SQLite (for local runs and tests).
The engine (and its connection pool) is created once per process and disposed on shutdown;
request handlers get a session through the get_db dependency.
"""
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base

from himaayah.config import settings

logger = logging.getLogger(__name__)

_url = make_url(settings.sqlalchemy_url)
_is_sqlite = _url.get_backend_name() == "sqlite"
_is_memory = _is_sqlite and (_url.database in (None, "", ":memory:") or _url.query.get("mode") == "memory")
_connect_args = {"check_same_thread": False} if _is_sqlite else {}
# Bounded pool: no overflow, callers beyond the limit queue for up to pool_timeout seconds.
# In-memory SQLite keeps its single shared connection instead.
_pool_args = {} if _is_memory else {
    "pool_size": settings.db_connection_limit,
    "max_overflow": 0,
    "pool_timeout": settings.db_pool_timeout_seconds,
}
engine = create_engine(
    _url,
    pool_pre_ping=not _is_sqlite,
    connect_args=_connect_args,
    echo=False,  # Set True for SQL logging during development
    **_pool_args,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


if _is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


CLASS_SEED = [
    ("awwal", "Awwal", "First level primary"),
    ("thaaniy", "Thaaniy", "Second level primary"),
    ("thaalith", "Thaalith Ibtidaaiyyah", "Third level primary"),
    ("awwal_idaadi", "Awwal Idaadiyyah", "First secondary"),
]

SUBJECT_SEED = [
    ("sarf", "Sarf", "الصرف"),
    ("nahw", "Nahw", "النحو"),
    ("hadeeth", "Hadeeth", "الحديث"),
    ("tawheed", "Tawheed", "التوحيد"),
    ("balaagah", "Balaagah", "البلاغة"),
    ("arabiyyah", "Arabiyyah", "العربية"),
    ("tajweed", "Tajweed", "التجويد"),
    ("fiqh", "Fiqh", "الفقه"),
    ("mahfuuzah", "Mahfuuzah", "المحفوظة"),
    ("seerah", "Seerah", "السيرة"),
]


def init_db():
    """Create tables and seed the class and subject catalogs when empty. Call once at app startup."""
    # Import all models so they register with Base before create_all
    from himaayah import models  # noqa: F401
    from himaayah.models.catalog import SchoolClass, Subject

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(SchoolClass).count() == 0:
            for code, name, description in CLASS_SEED:
                db.add(SchoolClass(code=code, name=name, description=description))
            logger.info("Seeded %s classes", len(CLASS_SEED))
        if db.query(Subject).count() == 0:
            for code, name_en, name_ar in SUBJECT_SEED:
                db.add(Subject(code=code, name_en=name_en, name_ar=name_ar))
            logger.info("Seeded %s subjects", len(SUBJECT_SEED))
        db.commit()
    finally:
        db.close()


def dispose_engine():
    """Close every pooled connection. Call once at app shutdown."""
    engine.dispose()
    logger.info("Database connection pool disposed")


def get_db():
    """Dependency: yield a DB session, close after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
