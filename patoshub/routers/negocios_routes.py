# patoshub/routers/negocios_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from patoshub import crud
from patoshub.auth import get_current_user
from patoshub.db import get_session
from patoshub.schemas import NegocioCreate, NegocioPublic, NegocioUpdate

router = APIRouter(
    prefix="/api/negocios",
    tags=["negocios"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[NegocioPublic])
def list_negocios(session: Session = Depends(get_session)):
    return crud.negocios.list_all(session)


@router.get("/dueno/{dueno_id}", response_model=List[NegocioPublic])
def list_negocios_by_dueno(dueno_id: str, session: Session = Depends(get_session)):
    return crud.negocios.list_by(session, "duenoId", dueno_id)


@router.get("/{negocio_id}", response_model=NegocioPublic)
def get_negocio(negocio_id: str, session: Session = Depends(get_session)):
    return crud.negocios.get(session, negocio_id)


@router.post("", response_model=NegocioPublic, status_code=201)
def create_negocio(negocio: NegocioCreate, session: Session = Depends(get_session)):
    # the owner is not checked against users
    return crud.negocios.create(session, negocio.model_dump(by_alias=True))


@router.put("/{negocio_id}", response_model=NegocioPublic)
def update_negocio(negocio_id: str, changes: NegocioUpdate, session: Session = Depends(get_session)):
    return crud.negocios.update(session, negocio_id, changes.model_dump(exclude_unset=True, by_alias=True))


@router.delete("/{negocio_id}", status_code=204)
def delete_negocio(negocio_id: str, session: Session = Depends(get_session)):
    # products, reservations and slots of the business are left in place
    crud.negocios.delete(session, negocio_id)
    return Response(status_code=204)
