"""Identity bounded context — users, sign-in sessions and roles.

Stands in for the hosted auth backend: registration, bearer sessions and the
``user``/``admin`` role that gates order administration.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_file_prefix="storefront")

logger = get_logger(__name__)

# Domain Composition Root
identity = Domain(name="identity")
