# living_hinge/__main__.py
# Package entrypoint so you can run:
#   python -m living_hinge --help
#
# Examples:
#   python -m living_hinge --preset standard --out out/
#   python -m living_hinge --job hinge.json --out out/ --csv --png preview.png

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
