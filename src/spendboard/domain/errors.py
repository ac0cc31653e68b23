"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class SheetImportError(DomainError):
    """Base class for errors that abort a spreadsheet import before any write."""


class DecodeError(SheetImportError):
    """The uploaded bytes are not a readable spreadsheet."""


class LayoutNotFoundError(SheetImportError):
    """No header row with project, category and month columns was found."""


def project_not_found(project_id: int) -> str:
    """Return message for missing project by ID."""
    return f"Project {project_id} not found"


def project_name_not_found(name: str) -> str:
    """Return message for missing project by name."""
    return f"Project '{name}' not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def revenue_not_found(revenue_id: int) -> str:
    """Return message for missing revenue."""
    return f"Revenue {revenue_id} not found"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a name uniqueness violation."""
    return f"{kind} with name '{name}' already exists"


def delete_blocked(kind: str, entity_id: int, dependents: dict[str, int]) -> str:
    """Return message when an entity still has dependent rows.

    Args:
        kind: Entity label, e.g. "project"
        entity_id: ID of the entity being deleted
        dependents: Mapping of dependent label (singular) to count
    """
    parts = [
        f"{count} {label}{'s' if count != 1 else ''}"
        for label, count in dependents.items()
        if count > 0
    ]
    return (
        f"Cannot delete {kind} {entity_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )


def invalid_choice(field: str, value: str, choices: list[str]) -> str:
    """Return message for a value outside an allowed set."""
    return f"Invalid {field} '{value}'. Must be one of: {', '.join(choices)}"
