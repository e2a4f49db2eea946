# patoshub/routers/reservaciones_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from patoshub import crud
from patoshub.auth import get_current_user
from patoshub.db import get_session
from patoshub.schemas import ReservacionCreate, ReservacionPublic, ReservacionUpdate

router = APIRouter(
    prefix="/api/reservaciones",
    tags=["reservaciones"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[ReservacionPublic])
def list_reservaciones(session: Session = Depends(get_session)):
    return crud.reservaciones.list_all(session)


@router.get("/cliente/{cliente_id}", response_model=List[ReservacionPublic])
def list_reservaciones_by_cliente(cliente_id: str, session: Session = Depends(get_session)):
    return crud.reservaciones.list_by(session, "clienteId", cliente_id)


@router.get("/negocio/{negocio_id}", response_model=List[ReservacionPublic])
def list_reservaciones_by_negocio(negocio_id: str, session: Session = Depends(get_session)):
    return crud.reservaciones.list_by(session, "negocioId", negocio_id)


@router.get("/{reservacion_id}", response_model=ReservacionPublic)
def get_reservacion(reservacion_id: str, session: Session = Depends(get_session)):
    return crud.reservaciones.get(session, reservacion_id)


@router.post("", response_model=ReservacionPublic, status_code=201)
def create_reservacion(reservacion: ReservacionCreate, session: Session = Depends(get_session)):
    # estado is free text; omitted -> PENDIENTE
    return crud.reservaciones.create(session, reservacion.model_dump(by_alias=True))


@router.put("/{reservacion_id}", response_model=ReservacionPublic)
def update_reservacion(reservacion_id: str, changes: ReservacionUpdate, session: Session = Depends(get_session)):
    return crud.reservaciones.update(
        session, reservacion_id, changes.model_dump(exclude_unset=True, by_alias=True)
    )


@router.delete("/{reservacion_id}", status_code=204)
def delete_reservacion(reservacion_id: str, session: Session = Depends(get_session)):
    crud.reservaciones.delete(session, reservacion_id)
    return Response(status_code=204)
