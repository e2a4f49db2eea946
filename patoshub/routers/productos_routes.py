# patoshub/routers/productos_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from patoshub import crud
from patoshub.auth import get_current_user
from patoshub.db import get_session
from patoshub.schemas import ProductoCreate, ProductoPublic, ProductoUpdate

router = APIRouter(
    prefix="/api/productos",
    tags=["productos"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[ProductoPublic])
def list_productos(session: Session = Depends(get_session)):
    return crud.productos.list_all(session)


@router.get("/negocio/{negocio_id}", response_model=List[ProductoPublic])
def list_productos_by_negocio(negocio_id: str, session: Session = Depends(get_session)):
    return crud.productos.list_by(session, "negocioId", negocio_id)


@router.get("/{producto_id}", response_model=ProductoPublic)
def get_producto(producto_id: str, session: Session = Depends(get_session)):
    return crud.productos.get(session, producto_id)


@router.post("", response_model=ProductoPublic, status_code=201)
def create_producto(producto: ProductoCreate, session: Session = Depends(get_session)):
    return crud.productos.create(session, producto.model_dump(by_alias=True))


@router.put("/{producto_id}", response_model=ProductoPublic)
def update_producto(producto_id: str, changes: ProductoUpdate, session: Session = Depends(get_session)):
    return crud.productos.update(session, producto_id, changes.model_dump(exclude_unset=True, by_alias=True))


@router.delete("/{producto_id}", status_code=204)
def delete_producto(producto_id: str, session: Session = Depends(get_session)):
    crud.productos.delete(session, producto_id)
    return Response(status_code=204)
