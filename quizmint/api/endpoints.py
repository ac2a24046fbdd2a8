import traceback

from fastapi import APIRouter, Depends

from quizmint.core.errors import QuizMintError, SignatureGenerationError
from quizmint.core.signer import EditionSigner, get_server_config, get_signer
from quizmint.models.schemas import ErrorResponse, SignatureRequest, SignedPayload

router = APIRouter()


@router.get("/")
def read_root():
    return {"message": "Quiz mint signature server is live."}


@router.get("/health")
def read_health():
    """For the uptime monitor."""
    return {"status": "ok"}


@router.post(
    "/api/server",
    response_model=SignedPayload,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def generate_mint_signature(request: SignatureRequest, signer: EditionSigner = Depends(get_signer)):
    config = get_server_config()
    print(f"[ENDPOINT] Signature requested for {request.address}.")
    try:
        return signer.generate_signature_for_token_id(config.quantity, config.token_id, request.address)
    except QuizMintError as e:
        print(f"[ENDPOINT] ❌ Signature refused: {e.message}")
        raise
    except Exception:
        print(f"[ENDPOINT] ❌ Signature generation failed: {traceback.format_exc()}")
        raise SignatureGenerationError()
