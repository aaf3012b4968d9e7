"""
BaseService -- abstract base for all kernel-style engines.

Responsibility:
    Provides the common constructor and session-handling contract for
    every engine that mutates rows.  Concrete engines receive a SQLAlchemy
    ``Session`` and persist through ``session.flush()`` -- never
    ``session.commit()``.

Invariants enforced:
    Transaction boundaries: engines flush within the caller's transaction
    and never commit or roll back themselves.  The caller
    (``InventoryService``, ``OrderService`` or a test harness) owns
    commit/rollback, which makes a multi-record reservation atomic.

Failure modes:
    - If a subclass calls ``session.commit()``, a crash halfway through a
      multi-warehouse fill leaves partially applied counters behind.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from scm_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for all engines.

    Guarantees:
        - The engine never calls ``session.commit()`` or
          ``session.rollback()``.

    Non-goals:
        - Does NOT provide read-only reporting queries -- those belong
          in selectors.
    """

    def __init__(self, session: Session):
        self.session = session
