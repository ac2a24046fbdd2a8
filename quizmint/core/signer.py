import time
import traceback
import uuid
from functools import lru_cache

from eth_account import Account
from eth_account.messages import encode_typed_data
from web3 import Web3

from quizmint.core.config import ServerConfig
from quizmint.core.errors import InvalidAddressError, SignerNotConfiguredError
from quizmint.models.schemas import MintRequest, SignedPayload

NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

MINT_REQUEST_TYPES = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    "MintRequest": [
        {"name": "to", "type": "address"},
        {"name": "royaltyRecipient", "type": "address"},
        {"name": "royaltyBps", "type": "uint256"},
        {"name": "primarySaleRecipient", "type": "address"},
        {"name": "tokenId", "type": "uint256"},
        {"name": "uri", "type": "string"},
        {"name": "quantity", "type": "uint256"},
        {"name": "pricePerToken", "type": "uint256"},
        {"name": "currency", "type": "address"},
        {"name": "validityStartTimestamp", "type": "uint128"},
        {"name": "validityEndTimestamp", "type": "uint128"},
        {"name": "uid", "type": "bytes32"},
    ],
}


def mint_request_typed_data(request: MintRequest, chain_id: int, edition_address: str) -> dict:
    message = request.model_dump(by_alias=True)
    message["uid"] = bytes.fromhex(request.uid.removeprefix("0x"))
    return {
        "types": MINT_REQUEST_TYPES,
        "primaryType": "MintRequest",
        "domain": {
            "name": "TokenERC1155",
            "version": "1",
            "chainId": chain_id,
            "verifyingContract": Web3.to_checksum_address(edition_address),
        },
        "message": message,
    }


def recover_signer(signed: SignedPayload, chain_id: int, edition_address: str) -> str:
    """Returns the address that produced `signed.signature`."""
    typed_data = mint_request_typed_data(signed.payload, chain_id, edition_address)
    return Account.recover_message(encode_typed_data(full_message=typed_data), signature=signed.signature)


class EditionSigner:
    """
    Issues signature-based mint authorizations for one Edition contract.
    Holds the admin key; shared read-only across requests.
    """

    def __init__(self, private_key: str, edition_address: str, chain_id: int,
                 royalty_recipient: str, primary_sale_recipient: str, validity_days: int = 3650):
        try:
            self.account = Account.from_key(private_key)
        except (ValueError, TypeError):
            raise SignerNotConfiguredError("Server PRIVATE_KEY is not a valid private key.")
        self.edition_address = Web3.to_checksum_address(edition_address)
        self.chain_id = chain_id
        self.royalty_recipient = Web3.to_checksum_address(royalty_recipient)
        self.primary_sale_recipient = Web3.to_checksum_address(primary_sale_recipient)
        self.validity_days = validity_days

    @property
    def address(self) -> str:
        return self.account.address

    def build_mint_request(self, quantity: int, token_id: int, to: str) -> MintRequest:
        try:
            recipient = Web3.to_checksum_address(to)
        except (ValueError, TypeError):
            raise InvalidAddressError(to)

        return MintRequest(
            to=recipient,
            royalty_recipient=self.royalty_recipient,
            royalty_bps=0,
            primary_sale_recipient=self.primary_sale_recipient,
            token_id=token_id,
            uri="",
            quantity=quantity,
            price_per_token=0,
            currency=NATIVE_TOKEN_ADDRESS,
            validity_start_timestamp=0,
            validity_end_timestamp=int(time.time()) + self.validity_days * 24 * 60 * 60,
            uid="0x" + uuid.uuid4().hex.ljust(64, "0"),
        )

    def generate_signature_for_token_id(self, quantity: int, token_id: int, to: str) -> SignedPayload:
        request = self.build_mint_request(quantity, token_id, to)
        typed_data = mint_request_typed_data(request, self.chain_id, self.edition_address)
        signed_message = Account.sign_message(encode_typed_data(full_message=typed_data), private_key=self.account.key)
        print(f"[SIGNER] ✍️ Signed mint of {quantity} x token {token_id} for {request.to}.")
        return SignedPayload(payload=request, signature="0x" + bytes(signed_message.signature).hex())


@lru_cache(maxsize=1)
def get_server_config() -> ServerConfig:
    return ServerConfig.from_env()


@lru_cache(maxsize=1)
def get_signer() -> EditionSigner:
    """Process-wide signer, created on first use from the environment."""
    config = get_server_config()
    if not config.private_key:
        raise SignerNotConfiguredError()
    try:
        signer = EditionSigner(
            private_key=config.private_key,
            edition_address=config.edition_address,
            chain_id=config.chain_id,
            royalty_recipient=config.royalty_recipient,
            primary_sale_recipient=config.primary_sale_recipient,
            validity_days=config.validity_days,
        )
    except ValueError:
        print(f"[SIGNER] ❌ Bad signer configuration: {traceback.format_exc()}")
        raise SignerNotConfiguredError("Server signer configuration is invalid.")
    print(f"[SIGNER] Signer {signer.address} ready for edition {signer.edition_address} on chain {signer.chain_id}.")
    return signer
