import traceback
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import Web3Exception

from quizmint.core.errors import MintError, MintTransactionError, NetworkMismatchError, WalletNotConnectedError
from quizmint.models.schemas import SignedPayload, TransactionResult

MINT_REQUEST_COMPONENTS = [
    {"internalType": "address", "name": "to", "type": "address"},
    {"internalType": "address", "name": "royaltyRecipient", "type": "address"},
    {"internalType": "uint256", "name": "royaltyBps", "type": "uint256"},
    {"internalType": "address", "name": "primarySaleRecipient", "type": "address"},
    {"internalType": "uint256", "name": "tokenId", "type": "uint256"},
    {"internalType": "string", "name": "uri", "type": "string"},
    {"internalType": "uint256", "name": "quantity", "type": "uint256"},
    {"internalType": "uint256", "name": "pricePerToken", "type": "uint256"},
    {"internalType": "address", "name": "currency", "type": "address"},
    {"internalType": "uint128", "name": "validityStartTimestamp", "type": "uint128"},
    {"internalType": "uint128", "name": "validityEndTimestamp", "type": "uint128"},
    {"internalType": "bytes32", "name": "uid", "type": "bytes32"},
]

EDITION_ABI = [
    {
        "inputs": [
            {
                "components": MINT_REQUEST_COMPONENTS,
                "internalType": "struct ITokenERC1155.MintRequest",
                "name": "_req",
                "type": "tuple",
            },
            {"internalType": "bytes", "name": "_signature", "type": "bytes"},
        ],
        "name": "mintWithSignature",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]


class Wallet:
    """A local key standing in for the browser wallet connector."""

    def __init__(self):
        self.account: Optional[LocalAccount] = None

    def connect(self, private_key: str) -> str:
        self.account = Account.from_key(private_key)
        return self.account.address

    def disconnect(self):
        self.account = None

    @property
    def address(self) -> Optional[str]:
        return self.account.address if self.account else None


class EditionMinter:
    def __init__(self, w3: Web3, wallet: Wallet, edition_address: str, chain_id: int):
        self.w3 = w3
        self.wallet = wallet
        self.chain_id = chain_id
        self.contract = w3.eth.contract(address=Web3.to_checksum_address(edition_address), abi=EDITION_ABI)

    @classmethod
    def connect(cls, rpc_url: str, wallet: Wallet, edition_address: str, chain_id: int) -> "EditionMinter":
        return cls(Web3(Web3.HTTPProvider(rpc_url)), wallet, edition_address, chain_id)

    def node_chain_id(self) -> int:
        try:
            return self.w3.eth.chain_id
        except (Web3Exception, RequestException) as e:
            print(f"[MINTER] ❌ RPC node unreachable: {e}")
            raise MintError(f"Could not reach the RPC node: {e}")

    def network_mismatch(self) -> bool:
        return self.node_chain_id() != self.chain_id

    def mint_with_signature(self, signed: SignedPayload) -> TransactionResult:
        account = self.wallet.account
        if account is None:
            raise WalletNotConnectedError()
        actual_chain_id = self.node_chain_id()
        if actual_chain_id != self.chain_id:
            raise NetworkMismatchError(self.chain_id, actual_chain_id)

        request = signed.payload
        signature = bytes.fromhex(signed.signature.removeprefix("0x"))
        try:
            tx = self.contract.functions.mintWithSignature(request.as_contract_tuple(), signature).build_transaction({
                "from": account.address,
                "value": request.price_per_token * request.quantity,
                "nonce": self.w3.eth.get_transaction_count(account.address),
                "chainId": self.chain_id,
            })
            signed_tx = account.sign_transaction(tx)
            tx_hash = "0x" + bytes(self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)).hex()
            print(f"[MINTER] 📤 Sent mintWithSignature {tx_hash}, waiting for receipt...")
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash)
        except (Web3Exception, RequestException) as e:
            print(f"[MINTER] ❌ mintWithSignature rejected: {traceback.format_exc()}")
            raise MintError(f"mintWithSignature rejected: {e}")

        if receipt["status"] != 1:
            print(f"[MINTER] ❌ Transaction {tx_hash} reverted.")
            raise MintTransactionError(tx_hash)
        print(f"[MINTER] ✅ Minted in block {receipt['blockNumber']}.")
        return TransactionResult(tx_hash=tx_hash, block_number=receipt["blockNumber"], status=receipt["status"])
