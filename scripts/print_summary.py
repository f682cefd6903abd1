"""Print the normalized row count and payment-method split for a payload."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from dashboard import export, insights, normalize, synth
from dashboard.logging_setup import configure_logging


def _load_payload(path: Path | None, seed: int) -> Any:
    if path is None:
        return synth.generate_payload(seed=seed)
    return json.loads(path.read_text(encoding="utf-8"))


def main() -> None:
    parser = argparse.ArgumentParser(description="Summarise a login payload")
    parser.add_argument("payload", type=Path, nargs="?", help="Payload JSON (default: synthetic)")
    parser.add_argument("--seed", type=int, default=synth.DEFAULT_SEED)
    parser.add_argument("--timezone", default=normalize.DEFAULT_TIMEZONE)
    parser.add_argument("--excel", type=Path, default=None, help="Also write the spreadsheet export here")
    args = parser.parse_args()

    configure_logging()
    rows = normalize.normalize_payload(_load_payload(args.payload, args.seed), args.timezone)

    summary = {
        "rows": len(rows),
        "undated": int(rows["timestamp"].isna().sum()),
        "payment_methods": [
            {"name": entry["name"], "count": entry["count"]}
            for entry in insights.count_by_category(rows)
        ],
    }
    print(json.dumps(summary, indent=2))

    if args.excel is not None:
        args.excel.parent.mkdir(parents=True, exist_ok=True)
        args.excel.write_bytes(export.build_excel_report(rows))
        print(f"Wrote {args.excel}")


if __name__ == "__main__":
    main()
