# patoshub/schemas.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from enum import Enum
from datetime import datetime
from typing import Optional


class CamelModel(BaseModel):
    """Accepts and emits lower camel case field names (duenoId, tenantId, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


class UserRole(str, Enum):
    admin = "ADMIN"
    cliente = "CLIENTE"
    dueno = "DUENO"
    dueno_premium = "DUENO_PREMIUM"


# ---------- auth ----------

class LoginRequest(BaseModel):
    username: str
    password: str


class RegisterRequest(CamelModel):
    username: str
    email: str
    password: str
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    telefono: Optional[str] = None
    role: Optional[UserRole] = None


class UserPublic(CamelModel):
    id: str
    username: str
    email: str
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    telefono: Optional[str] = None
    role: str
    tenant_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    token: str
    user: UserPublic


class MessageResponse(BaseModel):
    message: str


# ---------- users ----------

class UserCreate(RegisterRequest):
    tenant_id: Optional[str] = None


class UserUpdate(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    telefono: Optional[str] = None
    role: Optional[UserRole] = None
    tenant_id: Optional[str] = None


# ---------- negocios ----------

class NegocioFields(CamelModel):
    direccion: Optional[str] = None
    telefono: Optional[str] = None
    pagina_web: Optional[str] = None
    latitud: Optional[float] = None
    longitud: Optional[float] = None
    icono_uri: Optional[str] = None
    banner_uri: Optional[str] = None
    categoria: Optional[str] = None
    categoria2: Optional[str] = None
    estado: Optional[str] = None
    descripcion: Optional[str] = None
    email: Optional[str] = None
    horarios: Optional[str] = None
    color_primario: Optional[str] = None
    color_secundario: Optional[str] = None
    redes_sociales: Optional[str] = None
    informacion_adicional: Optional[str] = None
    destacado: Optional[bool] = None
    fecha_inicio_activacion: Optional[int] = None
    fecha_fin_activacion: Optional[int] = None
    ocultar_al_cumplir_mes: Optional[bool] = None
    visible_en_directorio: Optional[bool] = None
    fecha_inicio_suscripcion: Optional[int] = None
    fecha_fin_suscripcion: Optional[int] = None
    suscripcion_activa: Optional[bool] = None


class NegocioCreate(NegocioFields):
    nombre: str
    dueno_id: str


class NegocioUpdate(NegocioFields):
    nombre: Optional[str] = None
    dueno_id: Optional[str] = None


class NegocioPublic(NegocioFields):
    id: str
    nombre: str
    dueno_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------- productos ----------

class ProductoCreate(CamelModel):
    negocio_id: str
    nombre: str
    descripcion: Optional[str] = None
    precio: float
    imagen_uri: Optional[str] = None
    stock: Optional[int] = None
    categoria: Optional[str] = None


class ProductoUpdate(CamelModel):
    negocio_id: Optional[str] = None
    nombre: Optional[str] = None
    descripcion: Optional[str] = None
    precio: Optional[float] = None
    imagen_uri: Optional[str] = None
    stock: Optional[int] = None
    categoria: Optional[str] = None


class ProductoPublic(ProductoCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------- reservaciones ----------

class ReservacionCreate(CamelModel):
    cliente_id: str
    negocio_id: str
    fecha: datetime
    hora: Optional[str] = None
    estado: Optional[str] = None  # free-form, PENDIENTE when omitted
    notas: Optional[str] = None


class ReservacionUpdate(CamelModel):
    cliente_id: Optional[str] = None
    negocio_id: Optional[str] = None
    fecha: Optional[datetime] = None
    hora: Optional[str] = None
    estado: Optional[str] = None
    notas: Optional[str] = None


class ReservacionPublic(ReservacionCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------- disponibilidades ----------

class DisponibilidadCreate(CamelModel):
    negocio_id: str
    dia_semana: int
    hora_inicio: Optional[str] = None
    hora_fin: Optional[str] = None
    disponible: Optional[bool] = None


class DisponibilidadUpdate(CamelModel):
    negocio_id: Optional[str] = None
    dia_semana: Optional[int] = None
    hora_inicio: Optional[str] = None
    hora_fin: Optional[str] = None
    disponible: Optional[bool] = None


class DisponibilidadPublic(DisponibilidadCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------- uploads ----------

class UploadResponse(CamelModel):
    url: str
    storage: str
    message: str
    type: Optional[str] = None
    entity_id: Optional[str] = None
