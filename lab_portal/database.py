from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def make_engine(database_url: str):
    """Build an engine; SQLite needs cross-thread access under the test client and uvicorn workers."""
    connect_args = {}
    options = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, or every session sees its own empty database.
            options["poolclass"] = StaticPool
    return create_engine(database_url, connect_args=connect_args, **options)


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """Dependency to get a session from the app's own engine"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
