import os
import sys

import pytest

# Add the project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import bucketdb  # noqa: E402


@pytest.fixture
def db(tmp_path):
    """Bucketdb backed by a file in a temporary directory"""
    instance = bucketdb.new(str(tmp_path / "test.db"), pool_size=2)
    yield instance
    bucketdb.close(instance)


@pytest.fixture
def kvs(db):
    return bucketdb.store(db)


@pytest.fixture
def ranges(db):
    return bucketdb.range_store(db)


@pytest.fixture
def reject_value(db):
    """Return a function making SQLite abort inserts of a value into a table"""

    def create_trigger(table, value):
        def execute(cnx):
            cnx.sqlite.execute(
                f"CREATE TRIGGER reject_{table} BEFORE INSERT ON {table} "
                f"WHEN NEW.value = x'{value.hex()}' "
                "BEGIN SELECT RAISE(ABORT, 'rejected'); END"
            )

        bucketdb.apply(db, execute)

    return create_trigger
