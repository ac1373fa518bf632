from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from .settings import settings


def _engine_options(database_url: str) -> dict:
    """Opciones del pool según el motor: PostgreSQL en producción, SQLite en local"""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 300}


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Sesión por request; las operaciones confirman con atomic()"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
