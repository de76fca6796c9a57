"""
Identifier handling for the SQL store.

Records are keyed by the hex form of a UUID4. A value that cannot be
parsed as one is a cast failure, reported as MalformedIdentifierError;
the error handlers turn it into a 404.
"""

from uuid import UUID, uuid4


class MalformedIdentifierError(ValueError):
    """Raised when a value cannot be cast to a record identifier."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Malformed identifier: {value!r}")
        self.value = value


def new_identifier() -> str:
    return uuid4().hex


def parse_identifier(value: str) -> str:
    """Return the canonical key for an identifier.

    Raises:
        MalformedIdentifierError: If value is not a UUID.
    """
    try:
        return UUID(str(value)).hex
    except ValueError as exc:
        raise MalformedIdentifierError(value) from exc
