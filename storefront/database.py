# storefront/database.py
from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session


def build_engine(db_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for a database URL.

    - SQLite: allow use across FastAPI's threadpool workers
      (check_same_thread=False).
    - Others: pool_pre_ping=True to validate pooled connections before use.
    """
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
    )


def create_db_and_tables(bind: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup. Model modules must be
    imported beforehand so the metadata is populated.
    """
    SQLModel.metadata.create_all(bind)


def get_session(request: Request):
    """
    FastAPI dependency that yields a SQLModel Session.

    The engine is the one `create_app` built from its settings
    (`app.state.engine`), so each app talks to its own DATABASE_URL.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session
