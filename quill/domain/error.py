"""Domain layer errors."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Raised when input fails validation.

    Carries every violation found, not just the first one.
    """

    def __init__(self, errors: list[dict[str, Any]]):
        self.errors = errors
        fields = ", ".join(error["field"] for error in errors)
        super().__init__(f"Invalid input: {fields}")

    @classmethod
    def from_pydantic(
        cls, exc: PydanticValidationError, prefix: str | None = None
    ) -> "ValidationError":
        """Flatten a pydantic validation failure into field/message pairs.

        Args:
            exc: The pydantic error, holding every violation
            prefix: Field name to report when the error has no location

        Returns:
            Domain validation error
        """
        errors = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"])
            errors.append(
                {
                    "field": location or prefix or "__root__",
                    "message": error["msg"],
                }
            )
        return cls(errors)

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields, in report order."""
        return [error["field"] for error in self.errors]


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class StructuralError(DomainError):
    """Raised when a reply path does not match the shape of a thread."""

    def __init__(self, thread_id: str, indices: tuple[int, ...], depth: int):
        self.thread_id = thread_id
        self.indices = indices
        self.depth = depth
        super().__init__(
            f"Reply index {indices[depth]} out of range at depth {depth} "
            f"in thread {thread_id}"
        )


class ConflictError(DomainError):
    """Raised when concurrent writers keep invalidating an update."""

    def __init__(self, resource: str, identifier: str, attempts: int):
        self.resource = resource
        self.identifier = identifier
        self.attempts = attempts
        super().__init__(
            f"{resource} {identifier} was modified concurrently, "
            f"gave up after {attempts} attempts"
        )


class ThreadConflictError(DomainError):
    """A whole-document write lost an optimistic-concurrency race.

    Raised by repositories; services retry the read-modify-write cycle and
    surface ConflictError once attempts run out.
    """

    def __init__(self, thread_id: str):
        self.thread_id = thread_id
        super().__init__(f"Thread {thread_id} changed since it was read")
