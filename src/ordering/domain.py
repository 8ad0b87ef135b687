"""Ordering bounded context — order placement, tracking and administration.

Orders are plain CQRS aggregates: each checkout submission becomes one Order,
which is later mutated only by its owner (while pending) or by an admin.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
