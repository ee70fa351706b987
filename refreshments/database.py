# refreshments/database.py
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

# ---------------------------------------------------------
# Engine factory for the sql store backend.
#
# Postgres (Supabase pooler):
# - sslmode=require   : enforce SSL when running in the cloud
# - pool_size=1       : keep only 1 connection to the Supabase pooler
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_pre_ping=True: validate connections before using them
#
# SQLite:
# - check_same_thread=False: FastAPI runs sync endpoints in a threadpool
# ---------------------------------------------------------


def build_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    db_url = database_url
    # Append sslmode=require if it is not already present
    if "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    Called once on application startup when the sql backend is selected.
    """
    # Import models so SQLModel metadata is populated before create_all()
    from refreshments.models import catalog as _catalog_models  # noqa: F401
    from refreshments.models import purchase as _purchase_models  # noqa: F401

    SQLModel.metadata.create_all(engine)
