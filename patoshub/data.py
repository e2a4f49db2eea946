# patoshub/data.py

DEFAULT_ROLE = "CLIENTE"
DEFAULT_CATEGORY = "General"
DEFAULT_RESERVATION_STATUS = "PENDIENTE"

ADMIN_ACCOUNT = {
    "username": "admin",
    "email": "admin@patoshub.com",
    "nombre": "Administrador",
    "role": "ADMIN",
}

ACCESS_TOKEN_EXPIRE_DAYS = 7

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB
ALLOWED_IMAGE_TYPES = ("jpeg", "jpg", "png", "gif", "webp")
UPLOAD_FIELD = "image"
DEFAULT_UPLOAD_FOLDER = "general"
