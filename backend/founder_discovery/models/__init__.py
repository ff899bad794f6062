"""ORM Models: SQLAlchemy declarative models for projects, assumptions, interviews.

Invariants:
    - All models inherit from Base (db/base.py)
    - Project is the aggregate root; assumptions and interviews are scoped by project_id

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from founder_discovery.models.project import Project  # noqa: F401
from founder_discovery.models.assumption import Assumption  # noqa: F401
from founder_discovery.models.interview import Interview  # noqa: F401
