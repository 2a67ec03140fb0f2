# Third-party imports
import bcrypt

# Local application imports
from civictrack.core.exceptions import ValidationError

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    pwd_bytes = password.encode("utf-8")
    if len(pwd_bytes) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must not exceed {BCRYPT_MAX_BYTES} bytes")
    return pwd_bytes


def get_password_hash(password: str) -> str:
    hashed_password = bcrypt.hashpw(password=_encode(password), salt=bcrypt.gensalt())
    return hashed_password.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        plain_bytes = _encode(plain_password)
    except ValidationError:
        return False
    return bcrypt.checkpw(password=plain_bytes, hashed_password=hashed_password.encode("utf-8"))
