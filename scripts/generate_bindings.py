"""
Regenerate Python bindings for every ABI under `tests/abi/`.

Writes one module per ABI plus `typetology_runtime.py` into
`build/bindings/`, overwriting previous output. Useful for eyeballing
generator changes in a diff.

Usage:
  python3 scripts/generate_bindings.py
"""

from pathlib import Path

from typetology.cli import generate_bindings

# —— Paths ——————————————————————————————
BASE_DIR = Path(__file__).resolve().parent.parent
ABI_DIR = BASE_DIR / "tests" / "abi"
OUTPUT_DIR = BASE_DIR / "build" / "bindings"

for stub_path in generate_bindings(str(ABI_DIR / "*.json"), str(OUTPUT_DIR), force=True):
    print(f"Generated binding: {stub_path.relative_to(BASE_DIR)}")

print("✅ Binding generation complete.")
