class QuizMintError(Exception):
    """Base error. `code` is the HTTP status the API answers with."""

    def __init__(self, message: str, *, code: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigError(QuizMintError):
    pass


class SignatureError(QuizMintError):
    """Raised while producing a mint authorization."""


class InvalidAddressError(SignatureError):
    def __init__(self, address: str):
        super().__init__(f"'{address}' is not a valid wallet address.", code=400)
        self.address = address


class SignerNotConfiguredError(SignatureError):
    def __init__(self, message: str = "Server PRIVATE_KEY not configured."):
        super().__init__(message, code=500)


class SignatureGenerationError(SignatureError):
    def __init__(self, message: str = "Failed to generate mint signature."):
        super().__init__(message, code=500)


class SignatureRequestError(QuizMintError):
    """The signature endpoint answered with a non-2xx status."""


class WalletNotConnectedError(QuizMintError):
    def __init__(self):
        super().__init__("No wallet connected.", code=400)


class NetworkMismatchError(QuizMintError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"Wallet is on chain {actual}, expected chain {expected}.", code=400)
        self.expected = expected
        self.actual = actual


class MintError(QuizMintError):
    """The node or contract rejected a mint, or could not be reached."""

    def __init__(self, message: str):
        super().__init__(message, code=502)


class MintTransactionError(MintError):
    def __init__(self, tx_hash: str):
        super().__init__(f"Mint transaction {tx_hash} reverted.")
        self.tx_hash = tx_hash
