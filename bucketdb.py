#!/usr/bin/env python3
"""
Bucketdb Storage Primitives

Bucketdb is a storage layer that implements an ordered key-value store and an
interval store using SQLite. Entries and ranges are partitioned in buckets.
Every operation runs on a worker thread that owns its own connection; write
operations are serialized through a lock and run inside an explicit
transaction, so a failed write never leaves a partial effect behind.
"""

import functools
import logging
import os
import queue
import sqlite3
import threading
from collections import deque, namedtuple
from typing import (
    Any,
    Callable,
    Iterator,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    TypeVar,
    Union,
    runtime_checkable,
)

# Type variable for function return types
T = TypeVar("T")

log = logging.getLogger(__name__)

# Default constants
DEFAULT_DB_PATH = "bucketdb.db"
DEFAULT_ROOT_NAME = b"root"
POOL_SIZE_DEFAULT = 4
PAGE_SIZE_DEFAULT = 10
RANGE_WIDTH_DEFAULT = 16  # bytes, 128-bit bounds


def pool_size_default() -> int:
    """Calculate the default pool size based on available CPU cores.

    Returns:
        int: Default pool size (2 * CPU count, or 4 if CPU count is not available)
    """
    return os.cpu_count() * 2 if os.cpu_count() else POOL_SIZE_DEFAULT


# Bucketdb namedtuple to hold configuration and state
BucketDB = namedtuple(
    "BucketDB",
    [
        "db_path",
        "pool_size",
        "worker_queue",
        "worker_threads",
        "worker_lock",
        "lifecycle_lock",
        "root_name",
        "page_size",
        "range_width",
    ],
)

# Connection and transaction types
BucketCnx = namedtuple("BucketCnx", ["bucketdb", "sqlite"])
BucketTxn = namedtuple("BucketTxn", ["cnx"])

# Records
KeyValue = namedtuple("KeyValue", ["key", "value"])
Range = namedtuple("Range", ["start", "end", "value"])

# Batch operations
Put = namedtuple("Put", ["key", "value"])
Del = namedtuple("Del", ["key"])


# Bytes


def _as_bytes(value, what: str) -> bytes:
    """Return value as bytes, refusing anything that is not bytes-like.

    bytes(3) is three zero bytes and a str would be stored as TEXT, neither
    is a usable key or value.
    """
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes, got {type(value).__name__}")
    return bytes(value)


# Bucket names


def _uvarint(n: int) -> bytes:
    """LEB128-like unsigned length prefix."""
    out = bytearray()
    while True:
        b = n & 0x7F
        n >>= 7
        if n:
            out.append(0x80 | b)
        else:
            out.append(b)
            return bytes(out)


def bucket_join(parent: bytes, segment: bytes) -> bytes:
    """Append a segment to an effective bucket name.

    Each segment is written as its length followed by its bytes, so two
    different sequences of segments never produce the same name: joining
    b"ab" then b"c" differs from joining b"a" then b"bc".

    Args:
        parent: Effective name of the parent bucket (b"" for none)
        segment: Name of the child bucket

    Returns:
        Effective name of the child bucket
    """
    segment = _as_bytes(segment, "Bucket name")
    return bytes(parent) + _uvarint(len(segment)) + segment


def bucket_split(name: bytes) -> Tuple[bytes, ...]:
    """Decode an effective bucket name back into its segments.

    Raises:
        ValueError: If name is not a sequence of length-prefixed segments
    """
    segments = []
    pos = 0
    while pos < len(name):
        length = 0
        shift = 0
        while True:
            if pos >= len(name):
                raise ValueError(f"Truncated segment length in bucket name {name!r}")
            byte = name[pos]
            pos += 1
            length |= (byte & 0x7F) << shift
            shift += 7
            if not byte & 0x80:
                break
        if pos + length > len(name):
            raise ValueError(f"Truncated segment in bucket name {name!r}")
        segments.append(bytes(name[pos : pos + length]))
        pos += length
    return tuple(segments)


# Range bounds


def range_encode(n: int, width: int = RANGE_WIDTH_DEFAULT) -> bytes:
    """Encode a non-negative integer as fixed-width big-endian bytes.

    Byte order of the output equals numeric order of the input, which is
    what lets SQLite compare bounds stored as BLOBs.
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError(f"Range bound must be an integer, got {type(n)}")
    if not 0 <= n < (1 << (8 * width)):
        raise ValueError(f"Range bound {n} does not fit in {width} bytes")
    return n.to_bytes(width, "big")


def range_decode(data: bytes) -> int:
    """Decode bytes produced by range_encode."""
    return int.from_bytes(data, "big")


def _range_bounds(start: int, end: int, width: int) -> Tuple[bytes, bytes]:
    start_bytes = range_encode(start, width)
    end_bytes = range_encode(end, width)
    if not start < end:
        raise ValueError(f"Range start must be lower than end, got [{start}, {end})")
    return start_bytes, end_bytes


def _range_overlap(
    bucket: bytes, start: int, end: int, width: int
) -> Tuple[str, Tuple[bytes, bytes, bytes]]:
    """Return the WHERE clause and parameters matching ranges overlapping [start, end).

    A window with start == end is a point: it matches the range containing
    start, if any.
    """
    start_bytes = range_encode(start, width)
    end_bytes = range_encode(end, width)
    if start > end:
        raise ValueError(f"Range start must not exceed end, got [{start}, {end})")
    operator = "<" if start < end else "<="
    where = f"bucket = ? AND range_start {operator} ? AND range_end > ?"
    return where, (bucket, end_bytes, start_bytes)


def _range_row(row: Tuple[bytes, bytes, bytes]) -> Range:
    return Range(range_decode(row[0]), range_decode(row[1]), row[2])


# Connections and transactions

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS entries (
        bucket BLOB NOT NULL,
        key BLOB NOT NULL,
        value BLOB NOT NULL,
        PRIMARY KEY (bucket, key)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ranges (
        bucket BLOB NOT NULL,
        range_start BLOB NOT NULL,
        range_end BLOB NOT NULL,
        value BLOB NOT NULL,
        PRIMARY KEY (bucket, range_end)
    )
    """,
    "CREATE INDEX IF NOT EXISTS ranges_start_idx ON ranges (bucket, range_start)",
)


def _connect(db_path: str) -> sqlite3.Connection:
    """Open a connection in autocommit mode and provision the schema."""
    # Transactions are opened explicitly by `transactional`
    sqlite = sqlite3.connect(db_path, isolation_level=None, check_same_thread=False)
    sqlite.execute("PRAGMA journal_mode=WAL")
    for statement in _SCHEMA:
        sqlite.execute(statement)
    log.debug("Opened connection to %s", db_path)
    return sqlite


def _rollback(cnx: BucketCnx) -> None:
    """Roll back the open transaction, or discard the connection if that fails."""
    try:
        if cnx.sqlite.in_transaction:
            cnx.sqlite.execute("ROLLBACK")
            log.debug("Transaction rolled back")
    except Exception:
        # Closing a connection discards its open transaction
        log.exception("Rollback failed, closing connection")
        cnx.sqlite.close()


def transactional(func):
    """Run a storage function inside a transaction.

    When called with a BucketCnx the wrapper opens an immediate transaction,
    commits if the function returns and rolls back if it raises; the
    original exception is re-raised. When called with a BucketTxn the
    function joins the transaction that is already open.
    """

    @functools.wraps(func)
    def wrapper(something, *args, **kwargs):
        if isinstance(something, BucketCnx):
            cnx = something
            cnx.sqlite.execute("BEGIN IMMEDIATE")
            try:
                out = func(BucketTxn(cnx), *args, **kwargs)
                cnx.sqlite.execute("COMMIT")
            except Exception:
                _rollback(cnx)
                raise
            else:
                return out
        elif isinstance(something, BucketTxn):
            return func(something, *args, **kwargs)
        else:
            msg = "transactional does not support unexpected: {}".format(
                type(something)
            )
            raise NotImplementedError(msg)

    return wrapper


# Worker threads


def _cnx_clean(cnx: BucketCnx) -> bool:
    """Make sure the connection is open and outside of any transaction.

    Returns:
        False if the connection was closed and must be replaced
    """
    try:
        if cnx.sqlite.in_transaction:
            log.warning("Task left a transaction open, rolling back")
            cnx.sqlite.execute("ROLLBACK")
        return True
    except Exception:
        log.warning("Discarding connection to %s", cnx.bucketdb.db_path)
        cnx.sqlite.close()
        return False


def _bucketdb_worker(bucketdb: BucketDB) -> None:
    """
    Worker thread that processes database operations.

    The connection is opened on the first task and replaced whenever a task
    leaves it unusable. A None task stops the worker.
    """
    log.debug("Worker %s started", threading.current_thread().name)
    cnx = None

    while True:
        task = bucketdb.worker_queue.get()
        if task is None:
            bucketdb.worker_queue.task_done()
            break

        func, args, kwargs, result_queue = task
        try:
            if cnx is None:
                cnx = BucketCnx(bucketdb, _connect(bucketdb.db_path))
            out = (True, func(cnx, *args, **kwargs))
        except Exception as e:
            out = (False, e)
        if cnx is not None and not _cnx_clean(cnx):
            cnx = None
        result_queue.put(out)
        bucketdb.worker_queue.task_done()

    if cnx is not None:
        cnx.sqlite.close()
    log.debug("Worker %s stopped", threading.current_thread().name)


def _start_worker_threads(bucketdb: BucketDB, num_threads: int = None) -> None:
    """
    Start worker threads for processing database operations.

    The caller must hold the lifecycle lock.
    """
    num_threads = num_threads if num_threads is not None else bucketdb.pool_size

    # Don't start more threads than needed
    if len(bucketdb.worker_threads) >= num_threads:
        return

    # Start new worker threads
    for _ in range(num_threads - len(bucketdb.worker_threads)):
        thread = threading.Thread(
            target=_bucketdb_worker, args=(bucketdb,), daemon=True
        )
        thread.start()
        bucketdb.worker_threads.append(thread)


def _submit(bucketdb: BucketDB, task: Tuple) -> None:
    """Queue a task for the workers, starting them if needed.

    Queueing and close both hold the lifecycle lock, so a task is either
    ahead of the stop sentinels or behind freshly started workers.
    """
    with bucketdb.lifecycle_lock:
        _start_worker_threads(bucketdb)
        bucketdb.worker_queue.put(task)


def apply(
    bucketdb: BucketDB,
    func: Callable[..., T],
    *args: Any,
    readonly: bool = False,
    **kwargs: Any,
) -> T:
    """
    Execute a function on a bucketdb worker thread.

    Write operations hold the worker lock until they complete, so at most
    one write runs at a time for a given bucketdb; reads never take it and
    run concurrently with writes.

    Args:
        bucketdb: The Bucketdb configuration and state.
        func: The function to execute. It should accept a connection as the first parameter.
        *args: Arguments to pass to the function (after the connection).
        readonly: If False, acquire the worker lock for write operations.
        **kwargs: Keyword arguments to pass to the function.

    Returns:
        The result of the function execution.

    Raises:
        Whatever the function raised, unchanged.
    """
    # Acquire lock for write operations
    if not readonly:
        bucketdb.worker_lock.acquire()

    try:
        # Create a result queue for this specific call
        result_queue = queue.Queue(maxsize=1)
        _submit(bucketdb, (func, args, kwargs, result_queue))
        ok, result = result_queue.get()
    finally:
        # Release lock for write operations
        if not readonly:
            bucketdb.worker_lock.release()

    if not ok:
        raise result
    return result


def close(bucketdb: BucketDB) -> None:
    """Stop the worker threads and close their connections.

    Tasks queued before close are run before the workers stop. Calling
    close more than once is harmless. The bucketdb stays usable: workers
    are started again by the next call to apply.
    """
    with bucketdb.lifecycle_lock:
        for _ in bucketdb.worker_threads:
            bucketdb.worker_queue.put(None)
        for thread in bucketdb.worker_threads:
            thread.join()
        del bucketdb.worker_threads[:]


def new(
    db_path: Union[str, "os.PathLike[str]"] = DEFAULT_DB_PATH,
    pool_size: int = None,
    root_name: bytes = DEFAULT_ROOT_NAME,
    page_size: int = PAGE_SIZE_DEFAULT,
    range_width: int = RANGE_WIDTH_DEFAULT,
) -> BucketDB:
    """
    Create a new Bucketdb instance with an initialized schema.

    Args:
        db_path: Path to the SQLite database file, or ":memory:".
        pool_size: Maximum number of worker threads. Forced to 1 for
            ":memory:" since every connection to it is a separate database.
        root_name: Name of the bucket used by the root stores.
        page_size: Default number of entries fetched per iterator round trip.
        range_width: Width in bytes of encoded range bounds.

    Returns:
        A BucketDB namedtuple with configuration and state.
    """
    db_path = os.fspath(db_path)

    # Calculate default pool size if not provided
    if pool_size is None:
        pool_size = pool_size_default()
    if db_path == ":memory:":
        pool_size = 1
    if page_size < 1:
        raise ValueError(f"Page size must be positive, got {page_size}")
    if range_width < 1:
        raise ValueError(f"Range width must be positive, got {range_width}")

    bucketdb = BucketDB(
        db_path=db_path,
        pool_size=pool_size,
        worker_queue=queue.Queue(),
        worker_threads=[],
        worker_lock=threading.Lock(),
        lifecycle_lock=threading.Lock(),
        root_name=_as_bytes(root_name, "Root name"),
        page_size=page_size,
        range_width=range_width,
    )

    # Provision the schema now so that errors surface at creation time
    if db_path != ":memory:":
        _connect(db_path).close()

    return bucketdb


# Entries


def entry_get(cnx: BucketCnx, bucket: bytes, key: bytes) -> Optional[bytes]:
    """Return the value associated with key in bucket, or None if not found."""
    cursor = cnx.sqlite.execute(
        "SELECT value FROM entries WHERE bucket = ? AND key = ?",
        (bucket, _as_bytes(key, "Key")),
    )
    result = cursor.fetchone()
    return result[0] if result else None


@transactional
def entry_set(txn, bucket: bytes, key: bytes, value: bytes) -> None:
    """Set a key-value pair in bucket, replacing any previous value."""
    txn.cnx.sqlite.execute(
        "INSERT INTO entries (bucket, key, value) VALUES (?, ?, ?) "
        "ON CONFLICT (bucket, key) DO UPDATE SET value = excluded.value",
        (bucket, _as_bytes(key, "Key"), _as_bytes(value, "Value")),
    )


@transactional
def entry_delete(txn, bucket: bytes, key: bytes) -> int:
    """Delete key from bucket if present.

    Returns:
        Number of rows deleted
    """
    cursor = txn.cnx.sqlite.execute(
        "DELETE FROM entries WHERE bucket = ? AND key = ?",
        (bucket, _as_bytes(key, "Key")),
    )
    return cursor.rowcount


@transactional
def entry_batch(txn, bucket: bytes, operations: Sequence[Union[Put, Del]]) -> None:
    """Apply Put and Del operations in order, all or nothing."""
    for operation in operations:
        if isinstance(operation, Put):
            entry_set(txn, bucket, operation.key, operation.value)
        elif isinstance(operation, Del):
            entry_delete(txn, bucket, operation.key)
        else:
            raise TypeError(f"Unsupported batch operation: {operation!r}")


def entry_page(
    cnx: BucketCnx, bucket: bytes, bound: bytes, exclusive: bool, limit: int
) -> List[KeyValue]:
    """Fetch at most limit entries of bucket after bound, in ascending key order.

    Args:
        cnx: Connection
        bucket: Effective bucket name
        bound: Lower bound on keys
        exclusive: If True skip the key equal to bound
        limit: Maximum number of entries to return
    """
    operator = ">" if exclusive else ">="
    cursor = cnx.sqlite.execute(
        f"SELECT key, value FROM entries WHERE bucket = ? AND key {operator} ? "
        "ORDER BY key ASC LIMIT ?",
        (bucket, _as_bytes(bound, "Bound"), limit),
    )
    return [KeyValue(row[0], row[1]) for row in cursor]


# Ranges


def range_query(
    cnx: BucketCnx,
    bucket: bytes,
    start: int,
    end: int,
    width: int = RANGE_WIDTH_DEFAULT,
) -> List[Range]:
    """Return the ranges of bucket that overlap [start, end), ordered by end.

    Ranges are returned whole, they are not clipped to [start, end). When
    start == end the range containing start is returned, if there is one.
    """
    where, params = _range_overlap(bucket, start, end, width)
    cursor = cnx.sqlite.execute(
        f"SELECT range_start, range_end, value FROM ranges WHERE {where} "
        "ORDER BY range_end ASC",
        params,
    )
    return [_range_row(row) for row in cursor]


def _range_pop(txn, where: str, params: Tuple) -> List[Range]:
    """Delete the ranges matching where and return them ordered by end."""
    rows = txn.cnx.sqlite.execute(
        f"SELECT range_start, range_end, value FROM ranges WHERE {where} "
        "ORDER BY range_end ASC",
        params,
    ).fetchall()
    txn.cnx.sqlite.execute(f"DELETE FROM ranges WHERE {where}", params)
    return [_range_row(row) for row in rows]


def _range_upsert(
    txn, bucket: bytes, start: int, end: int, value: bytes, width: int
) -> None:
    # Ends are unique per bucket, a range sharing its end replaces the old one
    txn.cnx.sqlite.execute(
        "INSERT INTO ranges (bucket, range_start, range_end, value) VALUES (?, ?, ?, ?) "
        "ON CONFLICT (bucket, range_end) DO UPDATE SET "
        "range_start = excluded.range_start, value = excluded.value",
        (bucket, range_encode(start, width), range_encode(end, width), value),
    )


@transactional
def range_put(
    txn,
    bucket: bytes,
    start: int,
    end: int,
    value: bytes,
    width: int = RANGE_WIDTH_DEFAULT,
) -> None:
    """Associate [start, end) with value in bucket.

    Existing ranges overlapping [start, end) are removed. The parts of the
    first and last of them that stick out of [start, end) are stored again
    with their old value; ranges fully covered are gone.

    Example:
        [100, 200) -> A, then put [110, 120) -> B leaves
        [100, 110) -> A, [110, 120) -> B, [120, 200) -> A
    """
    _range_bounds(start, end, width)
    value = _as_bytes(value, "Value")
    existing = _range_pop(txn, *_range_overlap(bucket, start, end, width))

    if existing and existing[0].start < start:
        first = existing[0]
        _range_upsert(txn, bucket, first.start, start, first.value, width)
    if existing and existing[-1].end > end:
        last = existing[-1]
        _range_upsert(txn, bucket, end, last.end, last.value, width)

    _range_upsert(txn, bucket, start, end, value, width)


@transactional
def range_delete(
    txn,
    bucket: bytes,
    start: int,
    end: int,
    width: int = RANGE_WIDTH_DEFAULT,
) -> int:
    """Delete every range of bucket that overlaps [start, end), in full.

    When start == end the range containing start is deleted, if there is one.

    Returns:
        Number of ranges deleted
    """
    where, params = _range_overlap(bucket, start, end, width)
    cursor = txn.cnx.sqlite.execute(f"DELETE FROM ranges WHERE {where}", params)
    return cursor.rowcount


# Stores


@runtime_checkable
class OrderedStore(Protocol):
    """Byte-keyed ordered store confined to a bucket."""

    def get(self, key: bytes) -> Optional[bytes]: ...
    def put(self, key: bytes, value: bytes) -> None: ...
    def delete(self, key: bytes) -> None: ...
    def batch(self, operations: Sequence[Union[Put, Del]]) -> None: ...
    def bucket(self, name: bytes) -> "OrderedStore": ...
    def iter(self, bound: bytes, exclusive: bool = True) -> "BucketIterator": ...


@runtime_checkable
class IntervalStore(Protocol):
    """Non-overlapping half-open ranges confined to a bucket."""

    def get(self, start: int, end: int) -> List[Range]: ...
    def put(self, start: int, end: int, value: bytes) -> None: ...
    def delete(self, start: int, end: int) -> None: ...
    def bucket(self, name: bytes) -> "IntervalStore": ...


class BucketIterator:
    """Lazy cursor over the entries of one bucket in ascending key order.

    Entries are fetched page_size at a time. The first page starts at the
    bound given at construction, every following page starts right after
    the last key returned. An empty page exhausts the iterator for good.

    No transaction is held between pages: writes made to the bucket while
    iterating may or may not show up in later pages. Dropping an iterator
    before it is exhausted needs no cleanup.
    """

    def __init__(
        self,
        bucketdb: BucketDB,
        bucket: bytes,
        bound: bytes,
        exclusive: bool = True,
        page_size: int = PAGE_SIZE_DEFAULT,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"Page size must be positive, got {page_size}")
        self.bucketdb = bucketdb
        self.bucket = bucket
        self.page_size = page_size
        self._bound = _as_bytes(bound, "Bound")
        self._exclusive = exclusive
        self._buffer = deque()
        self._exhausted = False

    def next(self) -> Optional[KeyValue]:
        """Return the next entry, or None once the bucket is exhausted."""
        if not self._buffer and not self._exhausted:
            self._fetch()
        if not self._buffer:
            return None
        entry = self._buffer.popleft()
        self._bound = entry.key
        self._exclusive = True
        return entry

    def _fetch(self) -> None:
        page = apply(
            self.bucketdb,
            entry_page,
            self.bucket,
            self._bound,
            self._exclusive,
            self.page_size,
            readonly=True,
        )
        if not page:
            self._exhausted = True
        self._buffer.extend(page)

    def __iter__(self) -> Iterator[KeyValue]:
        while True:
            entry = self.next()
            if entry is None:
                return
            yield entry


class KeyValueStore:
    """Ordered key-value store confined to one bucket.

    The root store and its children are the same class: each carries the
    effective name of its bucket, and bucket() derives a child name from it.
    """

    __slots__ = ("bucketdb", "name")

    def __init__(self, bucketdb: BucketDB, name: bytes) -> None:
        self.bucketdb = bucketdb
        self.name = name

    def get(self, key: bytes) -> Optional[bytes]:
        return apply(self.bucketdb, entry_get, self.name, key, readonly=True)

    def put(self, key: bytes, value: bytes) -> None:
        apply(self.bucketdb, entry_set, self.name, key, value)

    def delete(self, key: bytes) -> None:
        apply(self.bucketdb, entry_delete, self.name, key)

    def batch(self, operations: Sequence[Union[Put, Del]]) -> None:
        """Apply Put and Del operations in order as one transaction.

        If any operation fails none of them is applied and the error is
        re-raised.
        """
        apply(self.bucketdb, entry_batch, self.name, list(operations))

    def bucket(self, name: bytes) -> "KeyValueStore":
        return KeyValueStore(self.bucketdb, bucket_join(self.name, name))

    def iter(
        self, bound: bytes, exclusive: bool = True, page_size: Optional[int] = None
    ) -> BucketIterator:
        if page_size is None:
            page_size = self.bucketdb.page_size
        return BucketIterator(self.bucketdb, self.name, bound, exclusive, page_size)

    def __repr__(self) -> str:
        return "KeyValueStore({!r})".format(bucket_split(self.name))


class RangeStore:
    """Non-overlapping half-open ranges [start, end) confined to one bucket."""

    __slots__ = ("bucketdb", "name")

    def __init__(self, bucketdb: BucketDB, name: bytes) -> None:
        self.bucketdb = bucketdb
        self.name = name

    def get(self, start: int, end: int) -> List[Range]:
        """Return the stored ranges overlapping [start, end), ordered by end.

        get(s, s) returns the range containing s, if any.
        """
        return apply(
            self.bucketdb,
            range_query,
            self.name,
            start,
            end,
            self.bucketdb.range_width,
            readonly=True,
        )

    def put(self, start: int, end: int, value: bytes) -> None:
        """Store [start, end) -> value, trimming the ranges it overlaps."""
        apply(
            self.bucketdb,
            range_put,
            self.name,
            start,
            end,
            value,
            self.bucketdb.range_width,
        )

    def delete(self, start: int, end: int) -> None:
        """Delete every stored range overlapping [start, end).

        Unlike put, this does not trim: a range that only partially overlaps
        [start, end) is removed entirely, including its part outside the
        window. Callers wanting to clear exactly [start, end) must re-put the
        parts they want to keep.
        """
        apply(
            self.bucketdb,
            range_delete,
            self.name,
            start,
            end,
            self.bucketdb.range_width,
        )

    def bucket(self, name: bytes) -> "RangeStore":
        return RangeStore(self.bucketdb, bucket_join(self.name, name))

    def __repr__(self) -> str:
        return "RangeStore({!r})".format(bucket_split(self.name))


def store(bucketdb: BucketDB) -> KeyValueStore:
    """Return the root key-value store of bucketdb."""
    return KeyValueStore(bucketdb, bucket_join(b"", bucketdb.root_name))


def range_store(bucketdb: BucketDB) -> RangeStore:
    """Return the root range store of bucketdb."""
    return RangeStore(bucketdb, bucket_join(b"", bucketdb.root_name))
