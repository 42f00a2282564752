# living_hinge/instance.py
# A hinge instance: one ParameterSet, the last computed layout and preview, and the
# debounce task that coalesces edits into a single refresh cycle.
#
# Flow:
#   edit()          -> set_base (sync, errors propagate) -> debounced refresh()
#   apply_preset()  -> overrides + immediate refresh() (pending edit cycle dropped)
#   refresh()       -> recompute -> validate -> layout -> preview (one at a time)
#   generate()      -> full-scale SVG written to storage under a descriptive name

from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, List, Mapping, Optional

from .debounce import DebounceScheduler
from .errors import HingeError, ValidationFailure
from .layout import generate_layout
from .logger import get_logger
from .naming import artifact_name, describe_filename
from .parameters import ParameterSet, create as create_parameters
from .presets import CUSTOM, Preset, apply_preset
from .render_svg import render, render_preview
from .storage import MemoryStorage, Storage
from .types import Layout, Value
from .utils import timer
from .validate import validate_parameters

Clock = Callable[[], datetime]


class HingeInstance:
    def __init__(
        self,
        name: str,
        pset: ParameterSet,
        *,
        hinge_type: Optional[str] = None,
        clock: Optional[Clock] = None,
        storage: Optional[Storage] = None,
        scheduler: Optional[DebounceScheduler] = None,
        on_refresh: Optional[Callable[["HingeInstance"], None]] = None,
    ):
        self.name = name
        self.parameters = pset
        self.hinge_type = hinge_type
        self.clock: Clock = clock or datetime.now
        self.storage: Storage = storage if storage is not None else MemoryStorage()
        self.scheduler = scheduler or DebounceScheduler()
        self.on_refresh = on_refresh

        self.errors: List[str] = []
        self.layout: Optional[Layout] = None
        self.preview_svg: str = ""
        self.last_file: Optional[str] = None
        self.cycles = 0

        self._lock = threading.RLock()
        self.log = get_logger(name)

    @classmethod
    def create(
        cls,
        name: str = "",
        preset: Optional[str] = None,
        overrides: Optional[Mapping[str, object]] = None,
        **kwargs,
    ) -> "HingeInstance":
        """
        Fresh instance from the schema defaults, optionally with a preset and then
        explicit overrides applied. Runs one refresh immediately (no debounce).
        """
        clock: Clock = kwargs.get("clock") or datetime.now
        if not name:
            prefix = preset.strip() if preset and preset.strip() else "Hinge"
            name = f"{prefix}_{clock():%H%M%S}"

        pset = create_parameters()
        matched: Optional[Preset] = apply_preset(pset, preset) if preset else None
        if overrides:
            pset.set_many(overrides)
            pset.recompute()

        if matched is not None:
            hinge_type = matched.name
        elif preset and preset.strip().lower() == CUSTOM.lower():
            hinge_type = CUSTOM
        else:
            hinge_type = None

        inst = cls(name, pset, hinge_type=hinge_type, **kwargs)
        inst.refresh()
        return inst

    # ---- edits ----

    def edit(self, name: str, value: object) -> Value:
        """Assign a base value now; validation and preview follow after the debounce window."""
        with self._lock:
            v = self.parameters.set_base(name, value)
        self.log.debug(f"{name} = {v!r}")
        self.scheduler.schedule(self.refresh)
        return v

    def apply_preset(self, preset: str) -> Optional[Preset]:
        self.scheduler.cancel()
        with self._lock:
            matched = apply_preset(self.parameters, preset)
            if matched is not None:
                self.hinge_type = matched.name
            elif preset and preset.strip().lower() == CUSTOM.lower():
                self.hinge_type = CUSTOM
        self.refresh()
        return matched

    # ---- cycles ----

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def pending(self) -> bool:
        return self.scheduler.pending

    def refresh(self) -> List[str]:
        """
        One recompute/validate/layout/preview cycle. Returns the validation messages.
        A layout or preview that cannot be built is reported in `errors`; layout and
        preview are cleared every cycle.
        """
        with self._lock:
            self.parameters.recompute()
            self.errors = validate_parameters(self.parameters)
            self.layout = None
            self.preview_svg = ""
            if self.errors:
                self.log.debug("invalid: " + "; ".join(self.errors))
            else:
                try:
                    with timer("refresh") as t:
                        layout = generate_layout(self.parameters)
                        preview = render_preview(layout, self.parameters, clock=self.clock)
                except HingeError as e:
                    self.errors = [str(e)]
                    self.log.warn(f"refresh failed: {e}")
                else:
                    self.layout = layout
                    self.preview_svg = preview
                    self.log.debug(f"{layout.num_segments()} segments in {t['seconds']:.4f}s")
            self.cycles += 1
            errors = list(self.errors)

        if self.on_refresh is not None:
            self.on_refresh(self)
        return errors

    def render_full(self) -> str:
        """Full-scale drawing of the current values (pending edits applied first)."""
        self.scheduler.flush()
        with self._lock:
            self.parameters.recompute()
            errors = validate_parameters(self.parameters)
            if errors:
                raise ValidationFailure(errors)
            layout = generate_layout(self.parameters)
            return render(layout, self.parameters, 1.0, clock=self.clock)

    def generate(self) -> str:
        """
        Render at full scale and write it to storage.
        Returns the artifact file name; raises ValidationFailure for invalid values.
        """
        try:
            svg = self.render_full()
        except ValidationFailure as e:
            self.log.warn(f"not generated, {len(e.messages)} validation error(s)")
            raise
        with self._lock:
            filename = artifact_name(describe_filename(self.parameters, self.hinge_type, clock=self.clock))
        self.storage.write(filename, svg)
        self.last_file = filename
        self.log.info(f"SVG saved as: {filename}")
        return filename
