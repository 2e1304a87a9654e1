from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from akkuea_api.core.config import Settings

Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    url = make_url(settings.database_url)
    engine_options = {"echo": settings.sql_echo}

    if url.get_backend_name() == "sqlite":
        engine_options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # every session must see the same in-memory database
            engine_options["poolclass"] = StaticPool

    return create_engine(url, **engine_options)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def create_schema(engine: Engine) -> None:
    # models register their tables on Base.metadata when imported
    from akkuea_api.models import resource, user  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
