"""
Tests for genesis / transaction log decoding.

Malformed input of any kind must fail at load time with a typed error,
and transaction errors must name the offending line.
"""

import json

import pytest

from ledger_kernel.domain.record_parser import (
    parse_genesis,
    parse_transaction_record,
    parse_transactions,
)
from ledger_kernel.domain.transactions import Generate, Transfer
from ledger_kernel.domain.values import U64_MAX, Account
from ledger_kernel.exceptions import MalformedGenesisError, MalformedTransactionError

GENESIS = {
    "genesis_time": "2021-01-01T00:00:00Z",
    "chain_id": "testnet",
    "balances": {"alice": 1000, "bob": 1000},
}


def _genesis_text(**overrides) -> str:
    data = dict(GENESIS, **overrides)
    return json.dumps(data)


class TestParseGenesis:

    def test_valid(self):
        genesis = parse_genesis(_genesis_text())
        assert genesis.genesis_time == "2021-01-01T00:00:00Z"
        assert genesis.chain_id == "testnet"
        assert dict(genesis.balances) == {Account("alice"): 1000, Account("bob"): 1000}

    def test_empty_balances(self):
        assert dict(parse_genesis(_genesis_text(balances={})).balances) == {}

    def test_unknown_fields_ignored(self):
        genesis = parse_genesis(_genesis_text(extra="ignored"))
        assert genesis.chain_id == "testnet"

    def test_balances_read_only(self):
        genesis = parse_genesis(_genesis_text())
        with pytest.raises(TypeError):
            genesis.balances[Account("alice")] = 0

    @pytest.mark.parametrize("missing", ["genesis_time", "chain_id", "balances"])
    def test_missing_field(self, missing):
        data = {k: v for k, v in GENESIS.items() if k != missing}
        with pytest.raises(MalformedGenesisError, match=missing):
            parse_genesis(json.dumps(data))

    def test_not_json(self):
        with pytest.raises(MalformedGenesisError, match="invalid JSON"):
            parse_genesis("{not json")

    def test_not_an_object(self):
        with pytest.raises(MalformedGenesisError, match="JSON object"):
            parse_genesis("[1, 2, 3]")

    def test_chain_id_wrong_type(self):
        with pytest.raises(MalformedGenesisError, match="chain_id"):
            parse_genesis(_genesis_text(chain_id=7))

    def test_balances_wrong_type(self):
        with pytest.raises(MalformedGenesisError, match="balances"):
            parse_genesis(_genesis_text(balances=[["alice", 1]]))

    def test_negative_balance(self):
        with pytest.raises(MalformedGenesisError, match="non-negative"):
            parse_genesis(_genesis_text(balances={"alice": -1}))

    def test_fractional_balance(self):
        with pytest.raises(MalformedGenesisError):
            parse_genesis(_genesis_text(balances={"alice": 1.5}))

    def test_balance_above_u64(self):
        with pytest.raises(MalformedGenesisError):
            parse_genesis(_genesis_text(balances={"alice": U64_MAX + 1}))

    def test_balance_with_thousands_of_digits(self):
        text = (
            '{"genesis_time": "t", "chain_id": "c", "balances": {"alice": 1'
            + "0" * 5000
            + "}}"
        )
        with pytest.raises(MalformedGenesisError):
            parse_genesis(text)

    def test_duplicate_account_key(self):
        text = (
            '{"genesis_time": "t", "chain_id": "c", '
            '"balances": {"alice": 1, "alice": 2}}'
        )
        with pytest.raises(MalformedGenesisError, match="duplicate key 'alice'"):
            parse_genesis(text)

    def test_error_code(self):
        with pytest.raises(MalformedGenesisError) as exc_info:
            parse_genesis("")
        assert exc_info.value.code == "MALFORMED_GENESIS"


class TestParseTransactionRecord:

    def test_transfer(self):
        record = {"type": "transfer", "from": "alice", "to": "bob", "value": 10}
        assert parse_transaction_record(record) == Transfer("alice", "bob", 10)

    def test_generate(self):
        assert parse_transaction_record({"type": "generate", "to": "bob", "value": 10}) == (
            Generate("bob", 10)
        )

    def test_round_trips_to_record(self):
        tx = Transfer("alice", "bob", 10)
        assert parse_transaction_record(tx.to_record()) == tx

    def test_unknown_discriminator(self):
        with pytest.raises(MalformedTransactionError, match="unknown transaction type 'burn'"):
            parse_transaction_record({"type": "burn", "to": "bob", "value": 1})

    def test_discriminator_is_case_sensitive(self):
        with pytest.raises(MalformedTransactionError):
            parse_transaction_record({"type": "Transfer", "from": "a", "to": "b", "value": 1})

    def test_missing_discriminator(self):
        with pytest.raises(MalformedTransactionError, match="'type'"):
            parse_transaction_record({"to": "bob", "value": 1})

    def test_missing_field(self):
        with pytest.raises(MalformedTransactionError, match="from"):
            parse_transaction_record({"type": "transfer", "to": "bob", "value": 1})

    def test_negative_value(self):
        with pytest.raises(MalformedTransactionError, match="non-negative"):
            parse_transaction_record({"type": "generate", "to": "bob", "value": -1})

    def test_string_value(self):
        with pytest.raises(MalformedTransactionError):
            parse_transaction_record({"type": "generate", "to": "bob", "value": "10"})

    def test_bool_value(self):
        with pytest.raises(MalformedTransactionError):
            parse_transaction_record({"type": "generate", "to": "bob", "value": True})

    def test_account_wrong_type(self):
        with pytest.raises(MalformedTransactionError, match="'to'"):
            parse_transaction_record({"type": "generate", "to": 5, "value": 1})

    def test_not_an_object(self):
        with pytest.raises(MalformedTransactionError, match="JSON object"):
            parse_transaction_record(["generate", "bob", 1])


class TestParseTransactions:

    def test_order_preserved(self):
        text = "\n".join(
            [
                '{"type": "generate", "to": "bob", "value": 10}',
                '{"type": "transfer", "from": "alice", "to": "bob", "value": 5}',
                '{"type": "generate", "to": "alice", "value": 1}',
            ]
        )
        assert parse_transactions(text) == (
            Generate("bob", 10),
            Transfer("alice", "bob", 5),
            Generate("alice", 1),
        )

    def test_empty_log(self):
        assert parse_transactions("") == ()

    def test_trailing_newline(self):
        assert len(parse_transactions('{"type": "generate", "to": "bob", "value": 1}\n')) == 1

    def test_blank_lines_skipped(self):
        text = '\n{"type": "generate", "to": "bob", "value": 1}\n   \n'
        assert parse_transactions(text) == (Generate("bob", 1),)

    def test_error_names_line(self):
        text = "\n".join(
            [
                '{"type": "generate", "to": "bob", "value": 1}',
                '{"type": "generate", "to": "bob", "value": 2}',
                '{"type": "mint", "to": "bob", "value": 3}',
            ]
        )
        with pytest.raises(MalformedTransactionError) as exc_info:
            parse_transactions(text)
        assert exc_info.value.line_number == 3
        assert "line 3" in str(exc_info.value)

    def test_line_numbers_count_blank_lines(self):
        text = '{"type": "generate", "to": "bob", "value": 1}\n\n{"type": "generate"}'
        with pytest.raises(MalformedTransactionError) as exc_info:
            parse_transactions(text)
        assert exc_info.value.line_number == 3

    def test_invalid_json_line(self):
        with pytest.raises(MalformedTransactionError, match="invalid JSON") as exc_info:
            parse_transactions('{"type": "generate", "to": "bob", "value": 1}\n{oops')
        assert exc_info.value.line_number == 2

    def test_value_with_thousands_of_digits(self):
        text = (
            '{"type": "generate", "to": "bob", "value": 1}\n'
            '{"type": "generate", "to": "bob", "value": 1' + "0" * 5000 + "}\n"
        )
        with pytest.raises(MalformedTransactionError) as exc_info:
            parse_transactions(text)
        assert exc_info.value.line_number == 2

    @pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x85"])
    def test_account_id_with_unicode_line_separator(self, separator):
        account = f"a{separator}b"
        record = json.dumps({"type": "generate", "to": account, "value": 1}, ensure_ascii=False)
        text = record + "\n" + '{"type": "generate", "to": "bob", "value": 2}\n'

        assert parse_transactions(text) == (Generate(account, 1), Generate("bob", 2))

    def test_crlf_line_endings(self):
        text = (
            '{"type": "generate", "to": "bob", "value": 1}\r\n'
            "\r\n"
            '{"type": "mint", "to": "bob", "value": 2}\r\n'
        )
        with pytest.raises(MalformedTransactionError) as exc_info:
            parse_transactions(text)
        assert exc_info.value.line_number == 3
