import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from course_api.core import config


Base = declarative_base()

logger = logging.getLogger(__name__)


class Store:
    """Process-wide handle on the relational store.

    Built once by the application factory and handed to the request handlers
    through ``get_store``/``get_db``. Sessions are acquired per operation with
    ``session()`` and always closed afterwards.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self.engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def connect(self) -> None:
        if self.engine is not None:
            return

        url = make_url(self.url)
        engine_options: dict = {'echo': self.echo}
        if url.get_backend_name() == 'sqlite':
            engine_options['connect_args'] = {'check_same_thread': False}
            if url.database in (None, '', ':memory:'):
                engine_options['poolclass'] = StaticPool

        self.engine = create_engine(self.url, **engine_options)
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

        logger.info('Testing the connection to the database...')
        with self.engine.connect() as connection:
            connection.execute(text('SELECT 1'))
        logger.info('Connection to the database successful!')

    def create_schema(self) -> None:
        # Registers the mapped tables on Base.metadata.
        from course_api.models import course, user  # noqa: F401

        Base.metadata.create_all(bind=self._require_engine())

    def disconnect(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._session_factory = None

    @contextmanager
    def session(self) -> Iterator[Session]:
        self._require_engine()
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError('Store is not connected. Call connect() first.')
        return self.engine


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_db(store: Store = Depends(get_store)):
    with store.session() as db:
        yield db


def build_store() -> Store:
    return Store(config.DATABASE_URL, echo=config.SQL_ECHO)
