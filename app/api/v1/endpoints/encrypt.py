from fastapi import APIRouter

from app.core.exceptions import CiphertextTooLongError
from app.dependencies import RegistryDep, SettingsDep
from app.models.schemas import EncryptRequest, EncryptResponse, ErrorResponse

router = APIRouter()


@router.post(
    "",
    response_model=EncryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Encrypt plaintext",
    description="Encrypt plaintext using a specified cipher type. Educational tool for generating test ciphertexts.",
)
async def encrypt_plaintext(
    request: EncryptRequest,
    settings: SettingsDep,
    registry: RegistryDep,
) -> EncryptResponse:
    """
    Encrypt plaintext with a specified cipher type.

    A random key is generated when none is given.
    """
    if len(request.plaintext) > settings.max_ciphertext_length:
        raise CiphertextTooLongError(len(request.plaintext), settings.max_ciphertext_length)

    engine = registry.require_engine(request.cipher_type)

    key = request.key
    if key is None:
        key = engine.generate_random_key()

    return EncryptResponse(
        ciphertext=engine.encrypt(request.plaintext, key),
        cipher_type=request.cipher_type,
        key_used=key,
    )
