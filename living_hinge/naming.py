# living_hinge/naming.py
# Descriptive artifact names:
#   hinge_<type>_<L>x<W>_slit<SL>x<SW>_sp<S>_off<O>_<alt|reg>_<YYYYmmdd_HHMMSS>
#
# Integer fields are rounded half-up, SW to one decimal. The timestamp is the only
# non-deterministic part; its fixed-width format makes name order equal time order
# within one hinge type. Older files use the legacy "living_hinge_*.svg" family and
# carry no parameters.

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .config import DEFAULTS
from .parameters import ParameterSet
from .utils import round_half_up

SVG_SUFFIX = ".svg"

_NAME_RE = re.compile(
    r"^hinge_(?P<type>[a-z0-9-]+)"
    r"_(?P<length>-?\d+)x(?P<width>-?\d+)"
    r"_slit(?P<slit_length>-?\d+)x(?P<slit_width>-?\d+\.\d)"
    r"_sp(?P<spacing>-?\d+)"
    r"_off(?P<offset>-?\d+)"
    r"_(?P<alt>alt|reg)"
    r"_(?P<stamp>\d{8}_\d{6})"
    r"(?:\.svg)?$"
)


@dataclass(frozen=True)
class HingeFileInfo:
    hinge_type: str
    length: int
    width: int
    slit_length: int
    slit_width: float
    spacing: int
    offset: int
    alternate: bool
    timestamp: datetime


def type_slug(hinge_type: Optional[str]) -> str:
    """'Dense' -> 'dense'; anything outside [a-z0-9-] becomes '-'. Empty -> 'custom'."""
    s = re.sub(r"[^a-z0-9-]+", "-", str(hinge_type or "").strip().lower()).strip("-")
    return s or "custom"


def describe_filename(
    pset: ParameterSet,
    hinge_type: Optional[str] = None,
    *,
    clock: Optional[Callable[[], datetime]] = None,
) -> str:
    """Descriptive base name (no extension) for a recomputed set."""
    def r0(name: str) -> str:
        return str(round_half_up(pset.number(name), 0))

    stamp = (clock or datetime.now)().strftime(DEFAULTS.filename_timestamp_format)
    dims = f"{r0('Length')}x{r0('Width')}"
    slit = f"slit{r0('SlitLength')}x{round_half_up(pset.number('SlitWidth'), 1)}"
    alt = "alt" if pset.value("AlternateRows") else "reg"
    return f"hinge_{type_slug(hinge_type)}_{dims}_{slit}_sp{r0('SlitSpacing')}_off{r0('RowOffset')}_{alt}_{stamp}"


def artifact_name(base: str) -> str:
    return base if base.endswith(SVG_SUFFIX) else base + SVG_SUFFIX


def parse_filename(name: str) -> Optional[HingeFileInfo]:
    """Recover the parameters encoded by describe_filename; None if `name` is not one."""
    m = _NAME_RE.match(name.rsplit("/", 1)[-1])
    if m is None:
        return None
    return HingeFileInfo(
        hinge_type=m.group("type"),
        length=int(m.group("length")),
        width=int(m.group("width")),
        slit_length=int(m.group("slit_length")),
        slit_width=float(m.group("slit_width")),
        spacing=int(m.group("spacing")),
        offset=int(m.group("offset")),
        alternate=m.group("alt") == "alt",
        timestamp=datetime.strptime(m.group("stamp"), DEFAULTS.filename_timestamp_format),
    )


def is_artifact_name(name: str) -> bool:
    """True for both the legacy and the current artifact families."""
    return any(fnmatch.fnmatchcase(name, pat) for pat in DEFAULTS.artifact_patterns)
