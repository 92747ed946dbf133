import logging
from enum import Enum
from typing import NoReturn

from app.models.analysis import InstagramContent, TargetAudience

logger = logging.getLogger(__name__)

INSTAGRAM_LINK_PREFIX = "https://www.instagram.com/"


class ValidationFailure(str, Enum):
    AGE_RANGE = "age_range"
    MISSING_LOCATION = "missing_location"
    MISSING_INTERESTS = "missing_interests"
    MISSING_CONTENT = "missing_content"
    MALFORMED_LINK = "malformed_link"


MESSAGES = {
    ValidationFailure.AGE_RANGE: (
        "Ups, rentang usianya belum pas nih. Yuk, dicek lagi biar hasilnya maksimal!"
    ),
    ValidationFailure.MISSING_LOCATION: (
        "Lokasi target audiensmu penting lho! Yuk, diisi dulu ya."
    ),
    ValidationFailure.MISSING_INTERESTS: (
        "Apa sih yang disukai audiensmu? Ceritain minat mereka di sini ya!"
    ),
    ValidationFailure.MISSING_CONTENT: (
        "Caption atau link Instagram-nya jangan sampai kelewat ya. "
        "Keduanya bikin analisa makin top!"
    ),
    ValidationFailure.MALFORMED_LINK: (
        "Hmm, format link Instagram-nya sepertinya perlu diperiksa lagi. "
        f"Pastikan dimulai dengan `{INSTAGRAM_LINK_PREFIX}` ya!"
    ),
}


class InputValidationError(ValueError):
    """Raised when the audience or content input is incomplete or malformed.

    Attributes:
        kind: Which check failed.
        message: The user-facing message for that check.
    """

    def __init__(self, kind: ValidationFailure):
        self.kind = kind
        self.message = MESSAGES[kind]
        super().__init__(self.message)


def _parse_age(value: str) -> int | None:
    value = value.strip()
    # Plain ASCII digits only; int() would also take "+18", "1_8" and non-Latin digits.
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def validate_inputs(audience: TargetAudience, content: InstagramContent) -> None:
    """Check the form input before any analysis request is issued.

    Checks run in a fixed order and the first failing one is reported; there
    is no aggregation of several problems into one error.

    Args:
        audience: The target audience description.
        content: The Instagram post to analyze.

    Raises:
        InputValidationError: With the ``kind`` of the first failed check.
    """

    age_min = _parse_age(audience.ageMin)
    age_max = _parse_age(audience.ageMax)
    if age_min is None or age_max is None or age_min > age_max:
        _fail(ValidationFailure.AGE_RANGE)

    if not audience.location.strip():
        _fail(ValidationFailure.MISSING_LOCATION)

    if not audience.interests.strip():
        _fail(ValidationFailure.MISSING_INTERESTS)

    if not content.caption.strip() and not content.link.strip():
        _fail(ValidationFailure.MISSING_CONTENT)

    # Prefix is matched against the raw link, leading whitespace included.
    if content.link.strip() and not content.link.startswith(INSTAGRAM_LINK_PREFIX):
        _fail(ValidationFailure.MALFORMED_LINK)


def _fail(kind: ValidationFailure) -> NoReturn:
    logger.info("Input validation failed: %s", kind.value)
    raise InputValidationError(kind)
