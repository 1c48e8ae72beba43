"""\
Example Output Validation Script

This script validates that the StatusCharts examples produced reasonable output.

Checks:
- Summary panel PNG files exist and exceed a minimum size threshold
- The standalone timeline PNG exists
- Each file carries a PNG signature

Usage:
  python examples/validate_output.py
"""

from __future__ import annotations

from pathlib import Path

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _check_file(path: Path, min_bytes: int) -> tuple[bool, str]:
    if not path.exists():
        return False, f"MISSING: {path}"
    size = path.stat().st_size
    if size < min_bytes:
        return False, f"TOO SMALL: {path} ({size} bytes < {min_bytes})"
    with path.open("rb") as f:
        if f.read(len(PNG_SIGNATURE)) != PNG_SIGNATURE:
            return False, f"NOT PNG?: {path} (missing PNG signature)"
    return True, f"OK: {path} ({size/1024:.1f} KB)"


def main() -> int:
    output = Path("output")

    expected = {
        output / "summary_panel_noncyclic.png": 50_000,
        output / "summary_panel_cyclic.png": 50_000,
        output / "timeline.png": 10_000,
    }

    print("Validating StatusCharts example outputs")
    print("=" * 60)

    ok_all = True
    for path, min_bytes in expected.items():
        ok, msg = _check_file(path, min_bytes=min_bytes)
        print(f"  {msg}")
        ok_all = ok_all and ok

    print()
    print("PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


if __name__ == "__main__":
    raise SystemExit(main())
