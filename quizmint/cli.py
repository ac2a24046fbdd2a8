import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from quizmint.client.api import SignatureAPI
from quizmint.core.config import ClientConfig
from quizmint.core.errors import ConfigError, QuizMintError
from quizmint.core.minter import EditionMinter, Wallet
from quizmint.core.questions import DEFAULT_QUESTIONS, load_questions
from quizmint.core.quiz import Quiz, QuizStatus
from quizmint.models.schemas import Question, SignedPayload

typer.main.get_command_name = lambda name: name
app = typer.Typer()


def render_question(question: Question, number: int, total: int) -> str:
    lines = [f"Question {number}/{total}: {question.prompt}"]
    for i, answer in enumerate(question.answers, start=1):
        lines.append(f"  {i}. {answer}")
    return "\n".join(lines)


def run_quiz(quiz: Quiz) -> QuizStatus:
    total = len(quiz.questions)
    while quiz.current_question is not None:
        question = quiz.current_question
        typer.echo(render_question(question, quiz.state.index + 1, total))
        choice = typer.prompt("Your answer", type=int)
        while not 1 <= choice <= len(question.answers):
            typer.echo(f"Pick a number between 1 and {len(question.answers)}.")
            choice = typer.prompt("Your answer", type=int)
        if quiz.submit(choice - 1) is QuizStatus.IN_PROGRESS:
            typer.echo("Correct!\n")
    return quiz.status


def request_signature(server_url: str, address: str) -> SignedPayload:
    async def _request():
        api = SignatureAPI(server_url)
        try:
            return await api.request_signature(address)
        finally:
            await api.aclose()

    return asyncio.run(_request())


def connect_minter(config: ClientConfig) -> EditionMinter:
    if not config.rpc_url or not config.wallet_private_key:
        raise ConfigError("Set RPC_URL and WALLET_PRIVATE_KEY to mint.")
    wallet = Wallet()
    try:
        wallet.connect(config.wallet_private_key)
    except ValueError:
        raise ConfigError("WALLET_PRIVATE_KEY is not a valid private key.")
    return EditionMinter.connect(config.rpc_url, wallet, config.edition_address, config.chain_id)


@app.command()
def play(
    questions: Optional[Path] = typer.Option(None, help="JSON file of questions to ask instead of the built-in ones."),
    server_url: Optional[str] = typer.Option(None, help="Signature server, defaults to QUIZMINT_SERVER_URL."),
    yes: bool = typer.Option(False, "--yes", help="Mint without asking once the quiz is passed."),
) -> None:
    quiz = Quiz(load_questions(questions) if questions else DEFAULT_QUESTIONS)

    if run_quiz(quiz) is QuizStatus.FAILED:
        typer.echo("Wrong answer, the quiz is over. No NFT this time.")
        raise typer.Exit(code=1)

    typer.echo(f"All {len(quiz.questions)} answers correct!")
    if not yes and not typer.confirm("Mint your NFT now?", default=True):
        typer.echo("Skipped minting.")
        return

    try:
        config = ClientConfig.from_env()
        minter = connect_minter(config)
        if minter.network_mismatch():
            typer.echo(f"Wallet RPC is not on chain {config.chain_id}, switch networks and try again.")
            raise typer.Exit(code=1)
        signed = request_signature(server_url or config.server_url, minter.wallet.address)
        result = minter.mint_with_signature(signed)
    except QuizMintError as e:
        typer.echo(f"Minting failed: {e.message}")
        raise typer.Exit(code=1)

    typer.echo(f"Minted token {signed.payload.token_id} to {signed.payload.to} in tx {result.tx_hash}.")


@app.command()
def sign(
    address: str,
    server_url: Optional[str] = typer.Option(None, help="Signature server, defaults to QUIZMINT_SERVER_URL."),
) -> None:
    try:
        config = ClientConfig.from_env()
        signed = request_signature(server_url or config.server_url, address)
    except QuizMintError as e:
        typer.echo(f"Signature request failed ({e.code}): {e.message}")
        raise typer.Exit(code=1)
    typer.echo(json.dumps(signed.model_dump(by_alias=True), indent=2))


@app.command()
def serve(host: str = "127.0.0.1", port: int = 8000) -> None:
    import uvicorn

    uvicorn.run("main:app", host=host, port=port)


if __name__ == "__main__":
    app()
