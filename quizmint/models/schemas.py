from typing import Tuple

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    answers: Tuple[str, ...]
    correct_answer: int

    @model_validator(mode="after")
    def check_correct_answer(self):
        if len(self.answers) < 2:
            raise ValueError("A question needs at least two answers.")
        if not 0 <= self.correct_answer < len(self.answers):
            raise ValueError(f"correct_answer {self.correct_answer} is not one of the {len(self.answers)} answers.")
        return self

    def is_correct(self, choice: int) -> bool:
        if not 0 <= choice < len(self.answers):
            raise ValueError(f"Choice {choice} is not one of the {len(self.answers)} answers.")
        return choice == self.correct_answer


class SignatureRequest(BaseModel):
    address: str


class MintRequest(BaseModel):
    """The Edition contract's MintRequest struct, field for field."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    to: str
    royalty_recipient: str
    royalty_bps: int
    primary_sale_recipient: str
    token_id: int
    uri: str
    quantity: int
    price_per_token: int
    currency: str
    validity_start_timestamp: int
    validity_end_timestamp: int
    uid: str

    def as_contract_tuple(self) -> tuple:
        return (
            self.to,
            self.royalty_recipient,
            self.royalty_bps,
            self.primary_sale_recipient,
            self.token_id,
            self.uri,
            self.quantity,
            self.price_per_token,
            self.currency,
            self.validity_start_timestamp,
            self.validity_end_timestamp,
            bytes.fromhex(self.uid.removeprefix("0x")),
        )


class SignedPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    payload: MintRequest
    signature: str


class ErrorResponse(BaseModel):
    error: str


class TransactionResult(BaseModel):
    tx_hash: str
    block_number: int
    status: int
