# patoshub/models.py

from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import BigInteger, DateTime
from sqlmodel import SQLModel, Field, Column

from .data import DEFAULT_CATEGORY, DEFAULT_RESERVATION_STATUS


def new_id() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampedTable(SQLModel):
    id: str = Field(default_factory=new_id, primary_key=True, max_length=255)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class User(TimestampedTable, table=True):
    __tablename__ = "users"

    username: str = Field(index=True, unique=True, max_length=255)
    email: str = Field(index=True, unique=True, max_length=255)
    password_hash: str
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    telefono: Optional[str] = None
    role: str = Field(max_length=50)  # ADMIN, CLIENTE, DUENO or DUENO_PREMIUM
    tenant_id: Optional[str] = Field(default=None, index=True)


class Negocio(TimestampedTable, table=True):
    __tablename__ = "negocios"

    nombre: str
    direccion: Optional[str] = None
    telefono: Optional[str] = None
    pagina_web: Optional[str] = None
    latitud: Optional[float] = 0
    longitud: Optional[float] = 0
    icono_uri: Optional[str] = None
    banner_uri: Optional[str] = None
    dueno_id: str = Field(index=True)  # not a foreign key
    categoria: Optional[str] = DEFAULT_CATEGORY
    categoria2: Optional[str] = None
    estado: Optional[str] = Field(default=None, max_length=50)
    descripcion: Optional[str] = None
    email: Optional[str] = None
    horarios: Optional[str] = None
    color_primario: Optional[str] = None
    color_secundario: Optional[str] = None
    redes_sociales: Optional[str] = None
    informacion_adicional: Optional[str] = None
    destacado: Optional[bool] = False
    # epoch milliseconds
    fecha_inicio_activacion: Optional[int] = Field(default=None, sa_column=Column(BigInteger))
    fecha_fin_activacion: Optional[int] = Field(default=None, sa_column=Column(BigInteger))
    ocultar_al_cumplir_mes: Optional[bool] = False
    visible_en_directorio: Optional[bool] = True
    fecha_inicio_suscripcion: Optional[int] = Field(default=None, sa_column=Column(BigInteger))
    fecha_fin_suscripcion: Optional[int] = Field(default=None, sa_column=Column(BigInteger))
    suscripcion_activa: Optional[bool] = False


class Producto(TimestampedTable, table=True):
    __tablename__ = "productos"

    negocio_id: str = Field(index=True)
    nombre: str
    descripcion: Optional[str] = None
    precio: float
    imagen_uri: Optional[str] = None
    stock: Optional[int] = 0
    categoria: Optional[str] = None


class Reservacion(TimestampedTable, table=True):
    __tablename__ = "reservaciones"

    cliente_id: str = Field(index=True)
    negocio_id: str = Field(index=True)
    fecha: datetime = Field(sa_type=DateTime)  # wall-clock time as sent
    hora: Optional[str] = Field(default=None, max_length=50)
    estado: Optional[str] = Field(default=DEFAULT_RESERVATION_STATUS, max_length=50)  # open set of values
    notas: Optional[str] = None


class Disponibilidad(TimestampedTable, table=True):
    __tablename__ = "disponibilidades"

    negocio_id: str = Field(index=True)
    dia_semana: int  # 0-6 by convention, not enforced
    hora_inicio: Optional[str] = Field(default=None, max_length=50)
    hora_fin: Optional[str] = Field(default=None, max_length=50)
    disponible: Optional[bool] = True
