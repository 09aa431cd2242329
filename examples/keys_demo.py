"""
Offline walkthrough of the signing layer: keys, addresses and a signed
invoke transaction. Nothing is sent to a node.

Usage:
  python3 examples/keys_demo.py
"""
from typetology.types import ParameterKind
from typetology.utils import (
    Parameter,
    PrivateKey,
    contract_address,
    make_invoke_transaction,
    serialize_transaction,
    sign_transaction,
    transaction_hash,
)


def generate_and_display_keys(count: int = 3):
    """
    Generate a few P-256 key pairs and print them in hex.
    """
    print("=" * 70)
    print("PART 1: key pairs")
    print("=" * 70)

    for i in range(count):
        key = PrivateKey.generate()
        public_key = key.public_key().serialize()
        print(f"--- KEY SET {i + 1} ---")
        print(f"    private key: {key.to_hex()}")
        print(f"    public key:  {public_key.hex()}")


def run_transaction_demo():
    """
    Build, sign and verify an invoke transaction for a Query call.
    """
    print("\n" + "=" * 70)
    print("PART 2: signed invoke transaction")
    print("=" * 70)

    contract = contract_address("a7f5c0a3bd8a1bb3c8e7fc3a13c4df0e2bf6bd5b")
    print(f"\n    contract address: {contract.b58encode()}")

    params = [Parameter("domain", ParameterKind.STRING, "example.ont")]
    tx = make_invoke_transaction("Query", params, contract, "500", "20000")
    print(f"    nonce: {tx.nonce}  gas: {tx.gas_price}/{tx.gas_limit}")

    key = PrivateKey.generate()
    signature = key.sign(transaction_hash(tx))
    is_valid = key.public_key().verify(signature, transaction_hash(tx))
    print(f"    signature valid: {is_valid}")
    assert is_valid, "signature does not verify against the transaction hash"

    sign_transaction(tx, key)

    print(f"\n    raw transaction:\n    {serialize_transaction(tx)}")


if __name__ == "__main__":
    generate_and_display_keys()
    run_transaction_demo()
