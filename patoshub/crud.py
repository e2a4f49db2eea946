# patoshub/crud.py

from typing import Any

from fastapi import HTTPException
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .mapping import EntityMapping, EmptyUpdateError, UnknownFieldError
from .models import User, Negocio, Producto, Reservacion, Disponibilidad


class Repository:
    """list / get / create / partial update / delete for one table."""

    def __init__(self, mapping: EntityMapping, label: str):
        self.mapping = mapping
        self.model = mapping.model
        self.label = label

    def _not_found(self) -> HTTPException:
        return HTTPException(status_code=404, detail=f"{self.label} not found")

    def list_all(self, session: Session) -> list[dict]:
        rows = session.exec(select(self.model)).all()
        return [self.mapping.to_external(row) for row in rows]

    def list_by(self, session: Session, field: str, value: Any) -> list[dict]:
        """Rows whose external `field` (e.g. "duenoId") equals `value`."""
        column = getattr(self.model, self.mapping.column_for(field))
        rows = session.exec(select(self.model).where(column == value)).all()
        return [self.mapping.to_external(row) for row in rows]

    def get_row(self, session: Session, entity_id: str):
        row = session.get(self.model, entity_id)
        if row is None:
            raise self._not_found()
        return row

    def get(self, session: Session, entity_id: str) -> dict:
        return self.mapping.to_external(self.get_row(session, entity_id))

    def create(self, session: Session, data: dict[str, Any], **columns: Any) -> dict:
        """
        Insert a row from an external-name payload.

        Fields sent as None fall back to the column default. Extra internal
        column values (e.g. a password hash) can be passed as keywords.
        """
        supplied = {name: value for name, value in data.items() if value is not None}
        try:
            values = self.mapping.to_internal(supplied)
        except UnknownFieldError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        values.update(columns)

        row = self.model(**values)
        session.add(row)
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise HTTPException(status_code=400, detail=str(exc.orig))
        session.refresh(row)  # fills server-side values
        return self.mapping.to_external(row)

    def update(self, session: Session, entity_id: str, changes: dict[str, Any]) -> dict:
        try:
            statement = self.mapping.build_update(entity_id, changes)
        except (EmptyUpdateError, UnknownFieldError) as exc:
            raise HTTPException(status_code=400, detail=str(exc))

        try:
            result = session.exec(statement.execution_options(synchronize_session=False))
        except IntegrityError as exc:
            session.rollback()
            raise HTTPException(status_code=400, detail=str(exc.orig))
        if result.rowcount == 0:
            session.rollback()
            raise self._not_found()
        session.commit()

        # commit expired the identity map, so this reads the stored row
        return self.get(session, entity_id)

    def delete(self, session: Session, entity_id: str) -> None:
        result = session.exec(delete(self.model).where(self.model.id == entity_id))
        if result.rowcount == 0:
            session.rollback()
            raise self._not_found()
        session.commit()


users = Repository(EntityMapping(User, hidden=["password_hash"]), "User")
negocios = Repository(EntityMapping(Negocio), "Business")
productos = Repository(EntityMapping(Producto), "Product")
reservaciones = Repository(EntityMapping(Reservacion), "Reservation")
disponibilidades = Repository(EntityMapping(Disponibilidad), "Availability")
