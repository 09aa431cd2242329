"""
Generate a binding for the sample DomainContract ABI, then query and
register a domain through a node's REST API.

Usage:
  TYPETOLOGY_REST_URL=http://127.0.0.1:20334 python3 examples/domain_demo.py <private-key-hex>
"""
import asyncio
import importlib
import sys
from pathlib import Path

from typetology import NetworkError, RestClient, TypetologyError
from typetology.cli import generate_bindings
from typetology.utils import PrivateKey

BASE_DIR = Path(__file__).resolve().parent.parent
ABI_GLOB = str(BASE_DIR / "tests" / "abi" / "DomainContract.json")
OUT_DIR = BASE_DIR / "build" / "bindings"


async def main(private_key: str):
    # ==========================================================================
    # 1. Generate the binding
    # ==========================================================================
    print("Step 1: generating bindings...")
    for path in generate_bindings(ABI_GLOB, str(OUT_DIR), force=True):
        print(f"   - wrote {path.relative_to(BASE_DIR)}")

    sys.path.insert(0, str(OUT_DIR))
    DomainContract = importlib.import_module("DomainContract").DomainContract

    # ==========================================================================
    # 2. Read state
    # ==========================================================================
    print("\nStep 2: reading contract state...")
    async with RestClient() as client:
        contract = DomainContract(client)
        print(f"   - node: {client.url}")
        print(f"   - contract address: {contract.address.b58encode()}")

        try:
            owner = await contract.get_storage("example.ont")
            print(f"   - owner of example.ont: {owner or '<unset>'}")
        except TypetologyError as e:
            print(f"   - storage lookup failed: {e}")

        # ======================================================================
        # 3. Register a domain
        # ======================================================================
        print("\nStep 3: sending Register...")
        key = PrivateKey.from_hex(private_key)
        owner = key.public_key().serialize()
        try:
            result = await contract.RegisterTx("example.ont", owner).send({"private_key": key})
            print(f"   - node response: {result}")
        except NetworkError as e:
            print(f"   - submission failed: {e}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit(__doc__)
    asyncio.run(main(sys.argv[1]))
