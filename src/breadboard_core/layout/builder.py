# src/breadboard_core/layout/builder.py
"""
Populates a `CircuitLab` from a board layout.

`LayoutBuilder.build` is the single entry point for layout files. It runs the
parser, instantiates every component through the lab's component factory and
places each one with `place_component`, so a layout obeys the same footprint
rules as interactive placement. Any failure, from a missing file to a rejected
footprint, is re-raised as one `LayoutBuildError` carrying a diagnostic report.
"""
import dataclasses
import logging
from pathlib import Path
from typing import Optional, Union

import pint

from ..board.point import Point
from ..components.elements import Switch
from ..config import LabConfig
from ..errors import DiagnosableError, LayoutBuildError, format_diagnostic_report
from ..lab import CircuitLab
from .parser import LayoutParser
from .raw_data import ParsedComponentPlacement, ParsedLayout

logger = logging.getLogger(__name__)


class LayoutBuilder:
    """Builds a populated lab from a layout file or a parsed layout."""

    def __init__(self, parser: Optional[LayoutParser] = None):
        self.parser = parser or LayoutParser()

    def build(
        self,
        layout: Union[str, Path, ParsedLayout],
        lab: Optional[CircuitLab] = None,
        config: Optional[LabConfig] = None,
    ) -> CircuitLab:
        """
        Places every component of `layout` on `lab`, or on a new lab sized by the
        layout's `board` section when no lab is given.

        Raises:
            LayoutBuildError: On any parsing, instantiation or placement failure.
        """
        try:
            parsed = layout if isinstance(layout, ParsedLayout) else self.parser.parse(layout)
            if lab is None:
                lab = CircuitLab(config=self._config_for(parsed, config or LabConfig()))

            for placement in parsed.components:
                self._place(lab, placement)

            logger.info(f"Layout '{parsed.source_yaml_path}' built: {len(parsed.components)} component(s) placed.")
            return lab

        except DiagnosableError as e:
            raise LayoutBuildError(e.get_diagnostic_report()) from e

    @staticmethod
    def _config_for(parsed: ParsedLayout, base: LabConfig) -> LabConfig:
        changes = {}
        if parsed.num_rows is not None:
            changes["num_rows"] = parsed.num_rows
        if parsed.num_cols is not None:
            changes["num_cols"] = parsed.num_cols
        return dataclasses.replace(base, **changes)

    def _place(self, lab: CircuitLab, placement: ParsedComponentPlacement):
        context = {
            'component': placement.instance_id,
            'location': f"{placement.start} -> {placement.end}",
            'source_file': placement.source_yaml_path,
        }
        try:
            component = lab.create_component(
                placement.component_type, placement.instance_id, placement.raw_parameters_dict
            )
        except (KeyError, ValueError, TypeError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
            report = format_diagnostic_report(
                error_type="Component Instantiation Failed",
                details=str(e).strip("'\""),
                suggestion="Check the component 'type' and the names and units of its 'parameters'.",
                context=context,
            )
            raise LayoutBuildError(report) from e

        if placement.closed is not None:
            if not isinstance(component, Switch):
                report = format_diagnostic_report(
                    error_type="Invalid Component Setting",
                    details=f"'closed' only applies to switches, not to '{placement.component_type}'.",
                    suggestion="Remove the 'closed' key from this component.",
                    context=context,
                )
                raise LayoutBuildError(report)
            if component.is_closed != placement.closed:
                component.toggle()

        start = Point(*placement.start)
        end = Point(*placement.end)
        for point in (start, end):
            if not lab.board.contains(point):
                report = format_diagnostic_report(
                    error_type="Placement Outside Board",
                    details=f"Point {point} lies outside the {lab.board.num_cols} x {lab.board.num_rows} board.",
                    suggestion="Move the component or enlarge the board in the 'board' section.",
                    context=context,
                )
                raise LayoutBuildError(report)

        lab.place_component(component, start, end)
        logger.debug(f"Placed '{placement.instance_id}' ({placement.component_type}) from {start} to {end}.")
