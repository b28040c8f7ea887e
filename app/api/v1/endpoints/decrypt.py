from fastapi import APIRouter

from app.core.exceptions import CiphertextTooLongError
from app.dependencies import RegistryDep, SettingsDep
from app.models.schemas import DecryptRequest, DecryptResponse, ErrorResponse

router = APIRouter()


@router.post(
    "",
    response_model=DecryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
        422: {"model": ErrorResponse, "description": "Decryption failed"},
    },
    summary="Decrypt ciphertext",
    description="Decrypt ciphertext using a specified cipher type and optional key.",
)
async def decrypt_ciphertext(
    request: DecryptRequest,
    settings: SettingsDep,
    registry: RegistryDep,
) -> DecryptResponse:
    """
    Decrypt ciphertext with a forced cipher type.

    If no key is provided, the engine recovers one by cryptanalysis.
    Non-letters are kept in place.
    """
    if len(request.ciphertext) > settings.max_ciphertext_length:
        raise CiphertextTooLongError(len(request.ciphertext), settings.max_ciphertext_length)

    engine = registry.require_engine(request.cipher_type)

    if request.key is not None:
        result = engine.decrypt_with_key(request.ciphertext, request.key)
    else:
        result = engine.find_key_and_decrypt(
            request.ciphertext,
            request.options.model_dump(exclude_none=True),
        )

    return DecryptResponse(
        plaintext=result.plaintext,
        confidence=result.confidence,
        key_used=result.key,
        explanation=result.explanation,
    )
