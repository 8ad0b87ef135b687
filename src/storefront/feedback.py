"""Share-your-experience form from the feedback page.

Submissions are validated and logged. Nothing is sent to the server.
"""

import re
from dataclasses import asdict, dataclass

import structlog

from storefront.catalog import FEEDBACK_PRODUCTS
from storefront.errors import FeedbackValidationError

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_RATING = 1
MAX_RATING = 5


@dataclass
class FeedbackForm:
    name: str = ""
    email: str = ""
    product: str | None = None
    rating: int | None = None
    feedback: str = ""


def validate_feedback(form: FeedbackForm) -> None:
    """Raise FeedbackValidationError for the first missing or invalid field."""
    for field in ("name", "email"):
        if not (getattr(form, field) or "").strip():
            raise FeedbackValidationError(field, f"{field} is required")
    if not EMAIL_PATTERN.match(form.email.strip()):
        raise FeedbackValidationError("email", "email must be a valid address")

    if form.product and form.product not in FEEDBACK_PRODUCTS:
        raise FeedbackValidationError("product", f"product must be one of {', '.join(FEEDBACK_PRODUCTS)}")

    if not isinstance(form.rating, int) or not MIN_RATING <= form.rating <= MAX_RATING:
        raise FeedbackValidationError("rating", f"rating must be between {MIN_RATING} and {MAX_RATING}")

    if not (form.feedback or "").strip():
        raise FeedbackValidationError("feedback", "feedback is required")


def submit_feedback(form: FeedbackForm) -> dict:
    validate_feedback(form)

    record = {key: value.strip() if isinstance(value, str) else value for key, value in asdict(form).items()}
    record["product"] = record["product"] or None
    logger.info("feedback_submitted", **record)
    return record
