from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import studytrack.models  # noqa: F401  (register tables)
from studytrack.database import Base
from studytrack.crud import create_subject, create_unit, create_topic
from studytrack.schemas import SubjectCreate, UnitCreate, TopicCreate


@pytest.fixture
def session_factory():
    """In-memory SQLite shared across sessions of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def now():
    return datetime(2026, 3, 10, 14, 30, 0)


@pytest.fixture
def make_topic(db):
    """Create a topic under a fresh subject/unit"""
    def _make(name="Finite automata", difficulty="medium", revision_interval_days=None, subject_name="Theory of Computation"):
        subject = create_subject(db, SubjectCreate(name=subject_name))
        unit = create_unit(db, UnitCreate(subject_id=subject.id, name="Unit I"))
        return create_topic(db, TopicCreate(
            unit_id=unit.id,
            name=name,
            difficulty=difficulty,
            revision_interval_days=revision_interval_days,
        ))
    return _make
