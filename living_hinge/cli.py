# living_hinge/cli.py
# Command line front end:
# - start from defaults, a preset and/or a job JSON, then explicit flags
# - print derived values and validation errors
# - write the SVG into --out under its descriptive name
# - optional CSV / JSON / PNG side outputs
#
# Run:
#   python -m living_hinge --preset dense --out out/
#   python -m living_hinge --job hinge.json --size 140x60 --regular --png preview.png
#   python -m living_hinge --list --out out/

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Optional

from .config import parse_size_text
from .debounce import DebounceScheduler
from .errors import HingeError
from .instance import HingeInstance
from .io_csv import export_all
from .io_json import HingeJob, load_job_json, save_layout_json
from .layout import generate_layout
from .logger import set_enabled, set_verbose
from .presets import available_presets
from .storage import DirectoryStorage, list_generated_hinges

# flag dest -> base parameter
_PARAM_FLAGS = {
    "thickness": "MaterialThickness",
    "slit_length": "SlitLength",
    "slit_width": "SlitWidth",
    "spacing": "SlitSpacing",
    "offset": "RowOffset",
    "material_color": "MaterialColor",
    "cut_color": "CutColor",
}


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Living hinge cut pattern generator (SVG)")
    p.add_argument("--job", type=str, default="", help="Path to job JSON ({name, preset, params})")
    p.add_argument("--name", type=str, default="", help="Instance name (default: <preset>_HHMMSS)")
    p.add_argument("--preset", type=str, default="", help=f"One of: {', '.join(available_presets())}")
    p.add_argument("--size", type=str, default="", help="Sheet LengthxWidth in mm, e.g. 100x50")
    p.add_argument("--thickness", type=float, default=None, help="Material thickness (mm)")
    p.add_argument("--slit_length", "--slit-length", type=float, default=None, help="Slit length (mm)")
    p.add_argument("--slit_width", "--slit-width", type=float, default=None, help="Slit (stroke) width (mm)")
    p.add_argument("--spacing", type=float, default=None, help="Gap between slits in a row (mm)")
    p.add_argument("--offset", type=float, default=None, help="Distance between rows (mm)")
    p.add_argument("--material_color", "--material-color", type=str, default=None, help="Sheet fill color")
    p.add_argument("--cut_color", "--cut-color", type=str, default=None, help="Cut stroke color")
    p.add_argument("--regular", action="store_true", help="Do not shift odd rows")
    p.add_argument("--out", type=str, default=".", help="Output directory (default: %(default)s)")
    p.add_argument("--csv", action="store_true", help="Also export segments + parameters CSV")
    p.add_argument("--json", action="store_true", help="Also export layout JSON")
    p.add_argument("--png", type=str, default="", help="Save matplotlib preview as PNG (optional)")
    p.add_argument("--list", action="store_true", help="List generated hinges in --out, newest first")
    p.add_argument("--segments", action="store_true", help="Print every cut segment")
    p.add_argument("--quiet", action="store_true", help="Silence info/warning output")
    p.add_argument("--verbose", action="store_true", help="Debug output")
    return p


def collect_overrides(args: argparse.Namespace, job: HingeJob) -> Dict[str, object]:
    """Job params first, command line flags win."""
    overrides: Dict[str, object] = dict(job.params)
    if args.size:
        length, width = parse_size_text(args.size)
        overrides["Length"] = length
        overrides["Width"] = width
    for dest, pname in _PARAM_FLAGS.items():
        v = getattr(args, dest)
        if v is not None:
            overrides[pname] = v
    if args.regular:
        overrides["AlternateRows"] = False
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    set_enabled(not args.quiet)
    set_verbose(bool(args.verbose))

    storage = DirectoryStorage(Path(args.out))

    if args.list:
        for name in list_generated_hinges(storage):
            print(name)
        return 0

    job = HingeJob()
    if args.job:
        job_path = Path(args.job)
        if not job_path.exists():
            raise SystemExit(f"Job JSON not found: {job_path}")
        job = load_job_json(job_path)

    try:
        inst = HingeInstance.create(
            name=args.name or job.name,
            preset=args.preset or job.preset,
            overrides=collect_overrides(args, job),
            storage=storage,
            scheduler=DebounceScheduler(0.0),
        )
    except HingeError as e:
        raise SystemExit(f"Invalid parameters: {e}")

    pset = inst.parameters
    print(f"Hinge: {inst.name}  type={inst.hinge_type or 'custom'}")
    for pname in pset.derived_names():
        value, unit = pset.get(pname)
        print(f"  {pname}: {value} {unit or ''}".rstrip())

    if inst.errors:
        print("Validation errors:")
        for msg in inst.errors:
            print(f"  - {msg}")
        return 1

    filename = inst.generate()
    print(f"Cuts: {inst.layout.num_segments()}  (dropped at edge: {inst.layout.dropped})")
    print(f"Wrote: {Path(args.out) / filename}")

    layout = inst.layout if inst.layout is not None else generate_layout(pset)
    stem = filename[: -len(".svg")]
    out_dir = Path(args.out)

    if args.csv:
        export_all(layout, pset, out_dir=out_dir, prefix=stem)
        print(f"Exported CSV to: {out_dir}")
    if args.json:
        save_layout_json(layout, out_dir / f"{stem}.json", pset)
        print(f"Exported JSON to: {out_dir / (stem + '.json')}")
    if args.segments:
        from .debug import print_layout
        print_layout(layout)
    if args.png.strip():
        from .plotting import save_layout_png
        save_layout_png(layout, pset, args.png.strip())
        print(f"Preview saved to: {args.png.strip()}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
