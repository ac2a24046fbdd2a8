import os
from dataclasses import dataclass
from typing import Optional

from quizmint.core.errors import ConfigError

EDITION_ADDRESS = "0x5Cb7A9d3F0e29c1D4b8F0aE6c3D7e2B9A41f6E08"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
DEFAULT_CHAIN_ID = 80002
DEFAULT_SERVER_URL = "http://127.0.0.1:8000"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"Env {name} must be an integer, got '{raw}'.")


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(name, "").strip()
    return raw or default


@dataclass(frozen=True)
class ServerConfig:
    private_key: Optional[str]
    edition_address: str
    chain_id: int
    token_id: int
    quantity: int
    validity_days: int
    royalty_recipient: str
    primary_sale_recipient: str

    @staticmethod
    def from_env() -> "ServerConfig":
        return ServerConfig(
            private_key=_env_str("PRIVATE_KEY"),
            edition_address=_env_str("EDITION_ADDRESS", EDITION_ADDRESS),
            chain_id=_env_int("CHAIN_ID", DEFAULT_CHAIN_ID),
            token_id=_env_int("MINT_TOKEN_ID", 0),
            quantity=_env_int("MINT_QUANTITY", 1),
            validity_days=_env_int("SIGNATURE_VALIDITY_DAYS", 3650),
            royalty_recipient=_env_str("ROYALTY_RECIPIENT", ZERO_ADDRESS),
            primary_sale_recipient=_env_str("PRIMARY_SALE_RECIPIENT", ZERO_ADDRESS),
        )


@dataclass(frozen=True)
class ClientConfig:
    server_url: str
    rpc_url: Optional[str]
    wallet_private_key: Optional[str]
    edition_address: str
    chain_id: int

    @staticmethod
    def from_env() -> "ClientConfig":
        return ClientConfig(
            server_url=_env_str("QUIZMINT_SERVER_URL", DEFAULT_SERVER_URL),
            rpc_url=_env_str("RPC_URL"),
            wallet_private_key=_env_str("WALLET_PRIVATE_KEY"),
            edition_address=_env_str("EDITION_ADDRESS", EDITION_ADDRESS),
            chain_id=_env_int("CHAIN_ID", DEFAULT_CHAIN_ID),
        )
