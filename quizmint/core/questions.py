import json
from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter

from quizmint.models.schemas import Question

DEFAULT_QUESTIONS = (
    Question(
        prompt="What does the server hand back before you can mint?",
        answers=("A transaction receipt", "A signed mint request", "The contract's private key", "An NFT image"),
        correct_answer=1,
    ),
    Question(
        prompt="Who submits the mint transaction to the network?",
        answers=("The quiz server", "The contract owner", "You, from your own wallet"),
        correct_answer=2,
    ),
    Question(
        prompt="What kind of contract holds the token you are about to mint?",
        answers=("ERC-20 token", "Edition (ERC-1155) collection", "Multisig wallet"),
        correct_answer=1,
    ),
)

_questions_adapter = TypeAdapter(List[Question])


def load_questions(path: Union[str, Path]) -> List[Question]:
    """Loads a JSON array of {prompt, answers, correct_answer} objects."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    questions = _questions_adapter.validate_python(data)
    if not questions:
        raise ValueError(f"No questions found in {path}.")
    return questions
