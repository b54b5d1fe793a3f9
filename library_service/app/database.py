from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import DATABASE_URL, SQL_ECHO


def _engine_options(url: str) -> dict:
    options = {"echo": SQL_ECHO}
    if url.startswith("sqlite"):
        # FastAPI ejecuta los endpoints síncronos en un threadpool
        options["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # Una sola conexión compartida: si no, cada conexión ve una BD vacía
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True
    return options


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Aquí se define la base para que models.py la pueda importar
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
