from sqlalchemy import create_engine, event
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from app.config import settings


def creer_engine(url: str):
    """
    Crée l'engine SQLAlchemy pour l'URL donnée

    PostgreSQL: pool_pre_ping, isolation gérée par transaction.
    SQLite (dev/tests): chaque transaction démarre par BEGIN IMMEDIATE,
    ce qui sérialise les écritures entre connexions.
    """
    if not url.startswith("sqlite"):
        return create_engine(
            url,
            pool_pre_ping=True,  # Vérifie les connexions avant usage
            echo=settings.SQL_ECHO
        )

    engine = create_engine(
        url,
        echo=settings.SQL_ECHO,
        connect_args={
            "check_same_thread": False,
            "timeout": settings.SQLITE_TIMEOUT,
        }
    )

    @event.listens_for(engine, "connect")
    def _desactiver_begin_implicite(dbapi_connection, connection_record):
        # Le driver sqlite3 ouvrirait ses propres transactions
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


# Engine SQLAlchemy
engine = creer_engine(settings.DATABASE_URL)

# Fabrique de sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base des modèles
Base = declarative_base()


def get_db():
    """
    Dependency pour obtenir une session de base de données
    Utilisée dans FastAPI Depends
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
