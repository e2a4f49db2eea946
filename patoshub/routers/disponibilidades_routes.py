# patoshub/routers/disponibilidades_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from patoshub import crud
from patoshub.auth import get_current_user
from patoshub.db import get_session
from patoshub.schemas import DisponibilidadCreate, DisponibilidadPublic, DisponibilidadUpdate

router = APIRouter(
    prefix="/api/disponibilidades",
    tags=["disponibilidades"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[DisponibilidadPublic])
def list_disponibilidades(session: Session = Depends(get_session)):
    return crud.disponibilidades.list_all(session)


@router.get("/negocio/{negocio_id}", response_model=List[DisponibilidadPublic])
def list_disponibilidades_by_negocio(negocio_id: str, session: Session = Depends(get_session)):
    return crud.disponibilidades.list_by(session, "negocioId", negocio_id)


@router.get("/{disponibilidad_id}", response_model=DisponibilidadPublic)
def get_disponibilidad(disponibilidad_id: str, session: Session = Depends(get_session)):
    return crud.disponibilidades.get(session, disponibilidad_id)


@router.post("", response_model=DisponibilidadPublic, status_code=201)
def create_disponibilidad(slot: DisponibilidadCreate, session: Session = Depends(get_session)):
    # dia_semana is stored as sent (0-6 by convention)
    return crud.disponibilidades.create(session, slot.model_dump(by_alias=True))


@router.put("/{disponibilidad_id}", response_model=DisponibilidadPublic)
def update_disponibilidad(
    disponibilidad_id: str,
    changes: DisponibilidadUpdate,
    session: Session = Depends(get_session),
):
    return crud.disponibilidades.update(
        session, disponibilidad_id, changes.model_dump(exclude_unset=True, by_alias=True)
    )


@router.delete("/{disponibilidad_id}", status_code=204)
def delete_disponibilidad(disponibilidad_id: str, session: Session = Depends(get_session)):
    crud.disponibilidades.delete(session, disponibilidad_id)
    return Response(status_code=204)
