import unittest
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner
from web3.exceptions import ContractLogicError

from quizmint.cli import app, render_question
from quizmint.core.errors import SignatureRequestError
from quizmint.core.questions import DEFAULT_QUESTIONS
from quizmint.models.schemas import TransactionResult
from tests.keys import PLAYER_ADDRESS, make_mock_minter, make_signer, unreachable_eth


def answers_input(choices):
    return "".join(f"{choice + 1}\n" for choice in choices)


ALL_CORRECT = answers_input(q.correct_answer for q in DEFAULT_QUESTIONS)


class PlayTestCase(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.signed = make_signer().generate_signature_for_token_id(1, 0, PLAYER_ADDRESS)
        self.minter = MagicMock()
        self.minter.network_mismatch.return_value = False
        self.minter.wallet.address = PLAYER_ADDRESS
        self.minter.mint_with_signature.return_value = TransactionResult(tx_hash="0xfeed", block_number=9, status=1)

    def test_render_question(self):
        text = render_question(DEFAULT_QUESTIONS[0], 1, 3)
        self.assertTrue(text.startswith("Question 1/3: "))
        self.assertIn("  2. A signed mint request", text)

    def test_wrong_answer_ends_quiz(self):
        wrong = (DEFAULT_QUESTIONS[0].correct_answer + 1) % len(DEFAULT_QUESTIONS[0].answers)
        with patch("quizmint.cli.request_signature") as request_signature:
            result = self.runner.invoke(app, ["play"], input=answers_input([wrong]))
        self.assertEqual(result.exit_code, 1)
        self.assertIn("quiz is over", result.output)
        request_signature.assert_not_called()

    def test_out_of_range_answer_asks_again(self):
        with patch("quizmint.cli.connect_minter", return_value=self.minter), \
                patch("quizmint.cli.request_signature", return_value=self.signed):
            result = self.runner.invoke(app, ["play", "--yes"], input="9\n" + ALL_CORRECT)
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Pick a number between 1 and 4.", result.output)

    def test_decline_mint(self):
        with patch("quizmint.cli.request_signature") as request_signature:
            result = self.runner.invoke(app, ["play"], input=ALL_CORRECT + "n\n")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Skipped minting.", result.output)
        request_signature.assert_not_called()

    def test_mints_after_passing(self):
        with patch("quizmint.cli.connect_minter", return_value=self.minter), \
                patch("quizmint.cli.request_signature", return_value=self.signed) as request_signature:
            result = self.runner.invoke(app, ["play", "--yes", "--server-url", "http://quiz"], input=ALL_CORRECT)
        self.assertEqual(result.exit_code, 0, result.output)
        request_signature.assert_called_once_with("http://quiz", PLAYER_ADDRESS)
        self.minter.mint_with_signature.assert_called_once_with(self.signed)
        self.assertIn("in tx 0xfeed", result.output)

    def test_signature_failure_reported(self):
        error = SignatureRequestError("Failed to generate mint signature.", code=500)
        with patch("quizmint.cli.connect_minter", return_value=self.minter), \
                patch("quizmint.cli.request_signature", side_effect=error):
            result = self.runner.invoke(app, ["play", "--yes"], input=ALL_CORRECT)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Minting failed: Failed to generate mint signature.", result.output)
        self.minter.mint_with_signature.assert_not_called()

    def test_network_mismatch_stops_before_signing(self):
        self.minter.network_mismatch.return_value = True
        with patch("quizmint.cli.connect_minter", return_value=self.minter), \
                patch("quizmint.cli.request_signature") as request_signature:
            result = self.runner.invoke(app, ["play", "--yes"], input=ALL_CORRECT)
        self.assertEqual(result.exit_code, 1)
        request_signature.assert_not_called()

    def test_missing_wallet_settings(self):
        env = {"RPC_URL": "", "WALLET_PRIVATE_KEY": ""}
        with patch("quizmint.cli.request_signature") as request_signature:
            result = self.runner.invoke(app, ["play", "--yes"], input=ALL_CORRECT, env=env)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Minting failed: Set RPC_URL and WALLET_PRIVATE_KEY to mint.", result.output)
        request_signature.assert_not_called()

    def test_bad_chain_id_reported_after_quiz(self):
        result = self.runner.invoke(app, ["play", "--yes"], input=ALL_CORRECT, env={"CHAIN_ID": "amoy"})
        self.assertEqual(result.exit_code, 1)
        self.assertIn("All 3 answers correct!", result.output)
        self.assertIn("Minting failed: Env CHAIN_ID must be an integer", result.output)

    def test_contract_revert_reported(self):
        minter = make_mock_minter()
        build = minter.contract.functions.mintWithSignature.return_value.build_transaction
        build.side_effect = ContractLogicError("execution reverted: invalid signature")
        with patch("quizmint.cli.connect_minter", return_value=minter), \
                patch("quizmint.cli.request_signature", return_value=self.signed):
            result = self.runner.invoke(app, ["play", "--yes"], input=ALL_CORRECT)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Minting failed: mintWithSignature rejected: execution reverted: invalid signature", result.output)

    def test_unreachable_rpc_reported(self):
        minter = make_mock_minter()
        minter.w3.eth = unreachable_eth()
        with patch("quizmint.cli.connect_minter", return_value=minter), \
                patch("quizmint.cli.request_signature") as request_signature:
            result = self.runner.invoke(app, ["play", "--yes"], input=ALL_CORRECT)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Minting failed: Could not reach the RPC node: rpc down", result.output)
        request_signature.assert_not_called()


class SignTestCase(unittest.TestCase):
    def test_prints_payload(self):
        signed = make_signer().generate_signature_for_token_id(1, 0, PLAYER_ADDRESS)
        with patch("quizmint.cli.request_signature", return_value=signed):
            result = CliRunner().invoke(app, ["sign", PLAYER_ADDRESS])
        self.assertEqual(result.exit_code, 0)
        self.assertIn('"tokenId": 0', result.output)
        self.assertIn(signed.signature, result.output)

    def test_bad_chain_id(self):
        with patch("quizmint.cli.request_signature") as request_signature:
            result = CliRunner().invoke(app, ["sign", PLAYER_ADDRESS], env={"CHAIN_ID": "amoy"})
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Env CHAIN_ID must be an integer", result.output)
        request_signature.assert_not_called()


if __name__ == "__main__":
    unittest.main()
