import asyncio

import pytest

from typetology.errors import (
    ConversionError,
    FunctionNotFoundError,
    InvalidParameterError,
    StorageError,
    SubmissionError,
)
from typetology.runtime import (
    MIN_GAS_LIMIT,
    MIN_GAS_PRICE,
    ByteArrayArg,
    DeferredTransactionWrapper,
    TxParams,
    TypetologyContract,
)
from typetology.types import ParameterKind
from typetology.utils.address import ZERO_ADDRESS, address_from_bytes
from typetology.utils.crypto import PrivateKey


# --- Fixtures ------------------------------------------------------------------

@pytest.fixture
def abi(code_hash):
    return {
        "hash": code_hash,
        "functions": [
            {"name": "Query", "parameters": [{"name": "key", "type": "String"}]},
            {"name": "SetOwner", "parameters": [
                {"name": "domain", "type": "String"},
                {"name": "owner", "type": "ByteArray"},
            ]},
            {"name": "Ping", "parameters": []},
        ],
    }


@pytest.fixture
def contract(fake_client, abi):
    return TypetologyContract(fake_client, abi)


# --- Tests for TypetologyContract ----------------------------------------------

def test_code_hash_and_address(contract, code_hash):
    assert contract.code_hash == code_hash[2:]
    reversed_hash = bytes.fromhex(code_hash[2:])[::-1]
    assert contract.address.to_bytes() == reversed_hash


def test_contract_accepts_json_text(fake_client, abi):
    import json
    assert TypetologyContract(fake_client, json.dumps(abi)).abi_info.to_dict() == \
        TypetologyContract(fake_client, abi).abi_info.to_dict()


def test_get_storage_encodes_key(contract, fake_client, code_hash):
    assert asyncio.run(contract.get_storage("hello")) == "abcd"
    assert fake_client.storage_calls == [(code_hash[2:], "68656c6c6f")]


def test_get_storage_error_carries_code_and_desc(make_client, abi):
    client = make_client(storage={"Error": 44001, "Desc": "INVALID PARAMS", "Result": ""})
    contract = TypetologyContract(client, abi)
    with pytest.raises(StorageError) as exc:
        asyncio.run(contract.get_storage("hello"))
    assert exc.value.code == 44001
    assert exc.value.desc == "INVALID PARAMS"
    assert "44001" in str(exc.value)


def test_get_contract_passes_code_hash(contract, code_hash):
    assert asyncio.run(contract.get_contract())["Result"] == f"raw:{code_hash[2:]}"


# --- Tests for TxParams ------------------------------------------------------------

def test_tx_params_accept_camel_case(private_key_hex):
    params = TxParams.coerce({"privateKey": private_key_hex, "gasPrice": 1000, "gasLimit": "30000"})
    assert params.private_key == private_key_hex
    assert params.gas_price == 1000
    assert params.gas_limit == "30000"


def test_tx_params_require_private_key():
    with pytest.raises(InvalidParameterError):
        TxParams.coerce({"gas_price": "500"})


# --- Tests for ByteArrayArg ---------------------------------------------------------

def test_byte_array_tags():
    assert ByteArrayArg.of(b"\xab\xcd") == ByteArrayArg("raw", b"\xab\xcd")
    assert ByteArrayArg.of(bytearray(b"\x01")).to_hex() == "01"
    assert ByteArrayArg.of("abcd") == ByteArrayArg("hex", "abcd")
    tagged = ByteArrayArg("raw", b"\x00")
    assert ByteArrayArg.of(tagged) is tagged


def test_byte_array_rejects_other_shapes():
    with pytest.raises(ConversionError):
        ByteArrayArg.of(12)


# --- Tests for DeferredTransactionWrapper.build ------------------------------------

def test_build_uses_gas_defaults(contract, private_key_hex):
    tx = DeferredTransactionWrapper(contract, "Query", ["hello"]).build({"private_key": private_key_hex})
    assert tx.gas_price == int(MIN_GAS_PRICE) == 500
    assert tx.gas_limit == int(MIN_GAS_LIMIT) == 20000
    assert bytes(tx.serialize_unsigned())[22:42] == ZERO_ADDRESS.to_bytes()


def test_build_uses_given_gas(contract, private_key_hex):
    tx = DeferredTransactionWrapper(contract, "Query", ["hello"]).build(
        {"private_key": private_key_hex, "gas_price": 2500, "gas_limit": "40000"}
    )
    assert (tx.gas_price, tx.gas_limit) == (2500, 40000)


def test_build_encodes_raw_bytes_as_hex(contract, private_key_hex):
    tx = DeferredTransactionWrapper(contract, "SetOwner", ["a.ont", bytes([0xAB, 0xCD])]).build(
        {"private_key": private_key_hex}
    )
    owner = tx.parameters[1]
    assert (owner.name, owner.type, owner.value) == ("owner", ParameterKind.BYTE_ARRAY, "abcd")
    assert tx.parameters[0].value == "a.ont"


def test_build_passes_hex_strings_through(contract, private_key_hex):
    tx = DeferredTransactionWrapper(contract, "SetOwner", ["a.ont", "abcd"]).build(
        {"private_key": private_key_hex}
    )
    assert tx.parameters[1].value == "abcd"


def test_build_resolves_payer(contract, private_key_hex):
    payer = address_from_bytes(bytes(range(20)))
    from_str = DeferredTransactionWrapper(contract, "Ping", []).build(
        {"private_key": private_key_hex, "payer": payer.b58encode()}
    )
    from_obj = DeferredTransactionWrapper(contract, "Ping", []).build(
        {"private_key": private_key_hex, "payer": payer}
    )
    assert bytes(from_str.serialize_unsigned())[22:42] == payer.to_bytes()
    assert bytes(from_obj.serialize_unsigned())[22:42] == payer.to_bytes()


def test_build_addresses_owning_contract(contract, private_key_hex):
    tx = DeferredTransactionWrapper(contract, "Ping", []).build({"private_key": private_key_hex})
    assert bytes(tx.payload).endswith(b"\x67" + contract.address.to_bytes())


def test_build_rejects_wrong_arity(contract, private_key_hex):
    with pytest.raises(InvalidParameterError):
        DeferredTransactionWrapper(contract, "Query", []).build({"private_key": private_key_hex})


# --- Tests for DeferredTransactionWrapper.send -------------------------------------

def test_send_submits_signed_transaction(contract, fake_client, private_key_hex):
    result = asyncio.run(
        DeferredTransactionWrapper(contract, "Query", ["hello"]).send({"private_key": private_key_hex})
    )
    assert result["Result"] == "txhash"
    assert len(fake_client.sent) == 1
    public_key = PrivateKey.from_hex(private_key_hex).public_key().serialize().hex()
    assert public_key + "ac" in fake_client.sent[0]


def test_send_accepts_typed_key(contract, fake_client):
    key = PrivateKey.generate()
    asyncio.run(DeferredTransactionWrapper(contract, "Ping", []).send(TxParams(private_key=key)))
    assert key.public_key().serialize().hex() in fake_client.sent[0]


def test_send_can_be_repeated(contract, fake_client, private_key_hex):
    wrapper = DeferredTransactionWrapper(contract, "Ping", [])
    asyncio.run(wrapper.send({"private_key": private_key_hex}))
    asyncio.run(wrapper.send({"private_key": private_key_hex, "gas_price": 600}))
    assert len(fake_client.sent) == 2


def test_send_prefers_client_override(contract, fake_client, make_client, private_key_hex):
    other = make_client()
    asyncio.run(
        DeferredTransactionWrapper(contract, "Ping", []).send({"private_key": private_key_hex}, other)
    )
    assert len(other.sent) == 1
    assert fake_client.sent == []


def test_unknown_function_fails_before_network(contract, fake_client, private_key_hex):
    wrapper = DeferredTransactionWrapper(contract, "Missing", [])
    with pytest.raises(FunctionNotFoundError) as exc:
        asyncio.run(wrapper.send({"private_key": private_key_hex}))
    assert isinstance(exc.value, LookupError)
    assert exc.value.function_name == "Missing"
    assert fake_client.sent == []


@pytest.mark.parametrize("tx_params", [
    {"private_key": "not-a-key"},
    {"private_key": "00" * 31},
    {"private_key": "75de8489fcb2dcaf2ef3cd607feffde18789de7da129b5e97c81e001793cb7cf", "payer": "bogus"},
    {"private_key": "75de8489fcb2dcaf2ef3cd607feffde18789de7da129b5e97c81e001793cb7cf", "gas_price": "cheap"},
])
def test_malformed_inputs_fail_before_network(contract, fake_client, tx_params):
    with pytest.raises(ConversionError):
        asyncio.run(DeferredTransactionWrapper(contract, "Ping", []).send(tx_params))
    assert fake_client.sent == []


def test_non_bytes_byte_array_fails_before_network(contract, fake_client, private_key_hex):
    with pytest.raises(ConversionError):
        asyncio.run(
            DeferredTransactionWrapper(contract, "SetOwner", ["a.ont", 42]).send({"private_key": private_key_hex})
        )
    assert fake_client.sent == []


def test_submission_failure_propagates_unchanged(contract, private_key_hex):
    error = SubmissionError("node unreachable")

    class FailingClient:
        async def send_raw_transaction(self, hex_data, pre_exec=False):
            raise error

    with pytest.raises(SubmissionError) as exc:
        asyncio.run(
            DeferredTransactionWrapper(contract, "Ping", []).send({"private_key": private_key_hex}, FailingClient())
        )
    assert exc.value is error
