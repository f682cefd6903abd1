"""Write a synthetic login payload to disk.

The file has the same shape as the login endpoint's response body
(``{"data": {...}, "message": ...}``) and can be fed to
``scripts/print_summary.py`` or used as a fixture while the endpoint is down.

Output: data/sample_payload.json
"""

from __future__ import annotations

import argparse
from pathlib import Path

from dashboard import synth


def main() -> None:
    parser = argparse.ArgumentParser(description="Write a synthetic login payload as JSON")
    parser.add_argument("--rows", type=int, default=synth.DEFAULT_ROWS)
    parser.add_argument("--seed", type=int, default=synth.DEFAULT_SEED)
    parser.add_argument("--output", type=Path, default=Path("data") / "sample_payload.json")
    args = parser.parse_args()

    path = synth.write_payload(args.output, rows=args.rows, seed=args.seed)
    print(f"Wrote {path} with {args.rows} transactions")


if __name__ == "__main__":
    main()
