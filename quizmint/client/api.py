from typing import Optional

import httpx
from pydantic import ValidationError

from quizmint.core.errors import SignatureRequestError
from quizmint.models.schemas import SignedPayload

SIGNATURE_PATH = "/api/server"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Signature request failed."
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text or "Signature request failed."


class SignatureAPI:
    def __init__(self, base_url: str, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(base_url=base_url)

    async def request_signature(self, address: str) -> SignedPayload:
        print(f"[CLIENT] Requesting mint signature for {address}...")
        try:
            response = await self.client.post(SIGNATURE_PATH, json={"address": address})
        except httpx.HTTPError as e:
            raise SignatureRequestError(f"Could not reach signature server: {e}", code=503)
        if response.is_error:
            raise SignatureRequestError(_error_message(response), code=response.status_code)
        try:
            return SignedPayload.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            print(f"[CLIENT] ❌ Unreadable signature response: {e}")
            raise SignatureRequestError("Signature server returned a malformed payload.", code=502)

    async def aclose(self):
        await self.client.aclose()
