from sqlalchemy.exc import IntegrityError


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell unique constraint violations apart from other integrity errors."""
    text = str(error.orig if error.orig is not None else error).lower()
    return "unique" in text or "duplicate key" in text
