# core/store.py

"""
Cooperative Entity Store

In-memory repositories for every entity type:
- Monotonic integer ids per entity type, never reused
- O(1) lookup by id, insertion-ordered listing and filtering
- Partial updates that can never change a record's id
- Copies handed out to callers, so records change only through update()
- atomic(): a lock-protected unit of work that restores every repository
  when an exception escapes it

Services talk to the repositories through the BaseRepository interface, so a
persistent backend can replace InMemoryRepository without touching the
cascade logic.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import replace
import copy
import logging
import threading

from accounts.models import User
from members.models import Member
from savings.models import Transaction, Saving
from loans.models import Loan
from dividends.models import Dividend, DividendDistribution
from core.models import Task

from .exceptions import InvalidArgument

logger = logging.getLogger(__name__)


# =============================================================================
# REPOSITORY INTERFACE
# =============================================================================

class BaseRepository(ABC):
    """Storage contract for one entity type"""

    model = None

    @abstractmethod
    def create(self, record):
        """Store a record without id; return it with its new id"""

    @abstractmethod
    def get(self, record_id):
        """Return the record or None"""

    @abstractmethod
    def all(self):
        """All records in insertion order"""

    @abstractmethod
    def update(self, record_id, **fields):
        """Merge fields into a record; None if the id is unknown"""

    def filter(self, predicate):
        return [record for record in self.all() if predicate(record)]

    def filter_by(self, **fields):
        return self.filter(
            lambda record: all(getattr(record, name) == value for name, value in fields.items())
        )

    def first(self, predicate=None, **fields):
        records = self.filter(predicate) if predicate else self.filter_by(**fields)
        return records[0] if records else None

    def count(self):
        return len(self.all())


# =============================================================================
# IN-MEMORY REPOSITORY
# =============================================================================

class InMemoryRepository(BaseRepository):
    """Dict-backed repository with an auto-incrementing id counter"""

    def __init__(self, model, name=None):
        self.model = model
        self.name = name or model.__name__
        self._records = {}
        self._next_id = 1

    def create(self, record):
        if not isinstance(record, self.model):
            raise TypeError(f"{self.name} repository cannot store {type(record).__name__}")
        if record.id is not None:
            raise InvalidArgument(f"{self.name} id is assigned by the store")

        record_id = self._next_id
        self._next_id += 1

        stored = replace(record, id=record_id)
        self._records[record_id] = stored
        logger.debug(f"Created {self.name} #{record_id}")
        return copy.copy(stored)

    def get(self, record_id):
        record = self._records.get(record_id)
        return copy.copy(record) if record is not None else None

    def all(self):
        return [copy.copy(record) for record in self._records.values()]

    def update(self, record_id, **fields):
        if 'id' in fields:
            raise InvalidArgument(f"{self.name} id cannot be changed")

        unknown = set(fields) - self.model.field_names()
        if unknown:
            raise InvalidArgument(f"Unknown {self.name} field(s): {', '.join(sorted(unknown))}")

        current = self._records.get(record_id)
        if current is None:
            return None

        updated = replace(current, **fields)
        self._records[record_id] = updated
        return copy.copy(updated)

    def count(self):
        return len(self._records)

    # Unit-of-work support. Records are replaced, never mutated in place,
    # so a shallow copy of the mapping is a complete snapshot.

    def snapshot(self):
        return dict(self._records)

    def restore(self, snapshot):
        self._records = snapshot


# =============================================================================
# COOPERATIVE STORE
# =============================================================================

class CooperativeStore:
    """All repositories of the cooperative plus the unit-of-work lock"""

    REPOSITORIES = (
        ('users', User),
        ('members', Member),
        ('transactions', Transaction),
        ('savings', Saving),
        ('loans', Loan),
        ('dividends', Dividend),
        ('dividend_distributions', DividendDistribution),
        ('tasks', Task),
    )

    def __init__(self, repository_class=InMemoryRepository):
        self.repositories = {}
        for name, model in self.REPOSITORIES:
            repository = repository_class(model)
            self.repositories[name] = repository
            setattr(self, name, repository)

        self._lock = threading.RLock()
        self._depth = 0
        self._on_commit = []

    @contextmanager
    def atomic(self):
        """
        Run a block as one unit of work.

        Writers are serialised by a re-entrant lock. Each level takes a
        snapshot; if an exception escapes, that level's snapshot is restored
        and the exception re-raised. Id counters are not rolled back.
        Callbacks queued with on_commit() run once the outermost block exits
        cleanly.
        """
        with self._lock:
            snapshot = {name: repo.snapshot() for name, repo in self.repositories.items()}
            pending_callbacks = len(self._on_commit)
            self._depth += 1
            try:
                yield self
            except Exception:
                for name, repo in self.repositories.items():
                    repo.restore(snapshot[name])
                del self._on_commit[pending_callbacks:]
                logger.warning("Rolled back unit of work after error", exc_info=True)
                raise
            finally:
                self._depth -= 1

            if self._depth == 0:
                callbacks, self._on_commit = self._on_commit, []
                for callback in callbacks:
                    callback()

    def on_commit(self, callback):
        """Run callback after the current unit of work commits (now if none is open)"""
        with self._lock:
            if self._depth:
                self._on_commit.append(callback)
                return
        callback()

    @property
    def in_atomic_block(self):
        return self._depth > 0


# =============================================================================
# PROCESS-WIDE STORE
# =============================================================================

_store = None
_store_lock = threading.Lock()


def get_store():
    """Return the process-wide store, creating it on first use"""
    global _store
    with _store_lock:
        if _store is None:
            _store = CooperativeStore()
        return _store


def reset_store(store=None):
    """Replace the process-wide store (fresh one by default) and return it"""
    global _store
    with _store_lock:
        _store = store or CooperativeStore()
        logger.info("Cooperative store reset")
        return _store
