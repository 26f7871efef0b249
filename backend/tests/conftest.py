"""Root conftest — shared database fixtures.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - Foreign keys are enforced (PRAGMA) so delete rules match PostgreSQL
    - db_manager is a real DatabaseSessionManager bound to the test engine

Design Decisions:
    - File DB over :memory:: the entity store opens one session per call and
      fan-out runs them concurrently, which needs a real connection pool
    - DatabaseSessionManager built via __new__: the SQLite pool takes no
      pool_size / max_overflow arguments
"""

import os

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")

from registrar.db.base import Base  # noqa: E402
from registrar.infrastructure.database import DatabaseSessionManager  # noqa: E402
from registrar.models import (  # noqa: E402
    Course, Department, Student, Teacher, course_student,
)


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'registrar.db'}", echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def db_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def seed(test_session_factory):
    """Two teachers, three courses, three students, two departments.

    Layout:
        Turing teaches Algorithms and Compilers; Hopper teaches nothing.
        Databases has no teacher.
        Ada → Algorithms, Databases; Grace → Algorithms; Linus → nothing.
        Mathematics is headed by Turing; Physics has no head.
    """
    async with test_session_factory() as db:
        turing = Teacher(name="Alan Turing")
        hopper = Teacher(name="Grace Hopper")
        db.add_all([turing, hopper])
        await db.flush()

        algorithms = Course(title="Algorithms", teacher_id=turing.id)
        compilers = Course(title="Compilers", teacher_id=turing.id)
        databases = Course(title="Databases")
        ada = Student(name="Ada", email="ada@example.edu")
        grace = Student(name="Grace", email="grace@example.edu")
        linus = Student(name="Linus", email="linus@example.edu")
        mathematics = Department(name="Mathematics", head_of_department_id=turing.id)
        physics = Department(name="Physics")
        db.add_all([
            algorithms, compilers, databases, ada, grace, linus,
            mathematics, physics,
        ])
        await db.flush()

        await db.execute(course_student.insert(), [
            {"course_id": algorithms.id, "student_id": ada.id},
            {"course_id": databases.id, "student_id": ada.id},
            {"course_id": algorithms.id, "student_id": grace.id},
        ])
        await db.commit()

        return {
            "turing": turing.id, "hopper": hopper.id,
            "algorithms": algorithms.id, "compilers": compilers.id,
            "databases": databases.id,
            "ada": ada.id, "grace": grace.id, "linus": linus.id,
            "mathematics": mathematics.id, "physics": physics.id,
        }
