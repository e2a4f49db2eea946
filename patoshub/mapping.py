# patoshub/mapping.py

from typing import Any, Iterable, Optional

from pydantic.alias_generators import to_camel
from sqlalchemy import update
from sqlalchemy.sql.dml import Update
from sqlmodel import SQLModel

from .models import utcnow

READ_ONLY_COLUMNS = ("id", "created_at", "updated_at")


class UnknownFieldError(ValueError):
    def __init__(self, fields: Iterable[str]):
        self.fields = sorted(fields)
        super().__init__(f"Unknown or read-only fields: {', '.join(self.fields)}")


class EmptyUpdateError(ValueError):
    def __init__(self):
        super().__init__("No fields to update")


class EntityMapping:
    """
    Field table for one SQLModel table: translates the API's lower camel
    case names to snake_case columns and builds the partial UPDATE shared
    by every resource.

    Every visible column has exactly one external name (its camelCase form);
    hidden columns (e.g. password hashes) are never read from or written to
    a payload. Updatable fields default to every visible column except the
    identity and the timestamps.
    """

    def __init__(
        self,
        model: type[SQLModel],
        hidden: Iterable[str] = (),
        updatable: Optional[Iterable[str]] = None,
    ):
        self.model = model
        self.hidden = frozenset(hidden)
        columns = [c.name for c in model.__table__.columns if c.name not in self.hidden]
        # external -> internal
        self.fields = {to_camel(column): column for column in columns}
        self.columns = {column: external for external, column in self.fields.items()}
        if updatable is None:
            updatable = [
                external for external, column in self.fields.items()
                if column not in READ_ONLY_COLUMNS
            ]
        self.updatable = frozenset(updatable)

    def column_for(self, external: str) -> str:
        return self.fields[external]

    def to_external(self, row: SQLModel) -> dict[str, Any]:
        return {external: getattr(row, column) for external, column in self.fields.items()}

    def to_internal(self, payload: dict[str, Any]) -> dict[str, Any]:
        unknown = set(payload) - self.updatable
        if unknown:
            raise UnknownFieldError(unknown)
        return {self.fields[name]: value for name, value in payload.items()}

    def build_update(self, entity_id: str, changes: dict[str, Any]) -> Update:
        """
        UPDATE touching exactly the supplied fields of one row.

        A key present in `changes` is supplied even when its value is None;
        absent keys are left untouched. `updated_at` is always refreshed.
        """
        values = self.to_internal(changes)
        if not values:
            raise EmptyUpdateError()
        values["updated_at"] = utcnow()
        return (
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**values)
        )
