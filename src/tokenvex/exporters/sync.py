"""
Write-back computations: evaluated ``calc:`` values and WEB code syntax.

Both functions are pure. They return a report describing what should be
written back to the host; ``report.apply(variables)`` produces updated
variable records (the originals are frozen and left untouched).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..core.errors import AmbiguousReferenceError
from ..core.ir.settings import ConversionSettings, NameFormatRule
from ..core.ir.variables import Variable, VariableCollection
from ..core.resolution.context import ResolutionContext
from ..core.resolution.expressions import resolve_expression
from ..core.transforms.description import resolve_token_config
from ..core.transforms.glob import find_matching_rule
from ..core.transforms.names import format_name

logger = logging.getLogger(__name__)

WEB = "WEB"


# =============================================================================
# Calculations
# =============================================================================


@dataclass
class CalculationSyncReport:
    """Outcome of evaluating every ``calc:`` directive.

    ``updates`` maps variable id to ``{mode_id: value}`` for the modes
    that evaluated cleanly.
    """

    synced: int = 0
    failed: int = 0
    warnings: list[str] = field(default_factory=list)
    updates: dict[str, dict[str, float]] = field(default_factory=dict)

    def apply(self, variables: Sequence[Variable]) -> list[Variable]:
        updated: list[Variable] = []
        for variable in variables:
            values = self.updates.get(variable.id)
            if values:
                variable = variable.model_copy(
                    update={"values_by_mode": {**variable.values_by_mode, **values}}
                )
            updated.append(variable)
        return updated


def sync_calculations(
    variables: Sequence[Variable],
    collections: Sequence[VariableCollection],
    settings: ConversionSettings | None = None,
) -> CalculationSyncReport:
    """
    Evaluate each variable's ``calc:`` directive for every mode.

    A mode counts as synced when it evaluates without warnings; otherwise
    it counts as failed and its warnings are reported prefixed with the
    variable name. Ambiguous path references fail the mode instead of
    aborting the run.
    """
    settings = settings or ConversionSettings()
    ctx = ResolutionContext.from_settings(variables, collections, settings)
    report = CalculationSyncReport()

    for collection in collections:
        for variable in variables:
            if variable.variable_collection_id != collection.id:
                continue
            config = resolve_token_config(variable.description, ctx.base_config)
            if not config.expression:
                continue

            for mode in collection.modes:
                try:
                    result = resolve_expression(config, mode.mode_id, ctx)
                except AmbiguousReferenceError as e:
                    report.failed += 1
                    report.warnings.append(f"{variable.name}: {e.message}")
                    continue

                if result.ok and result.value is not None:
                    report.updates.setdefault(variable.id, {})[mode.mode_id] = result.value
                    report.synced += 1
                else:
                    report.failed += 1
                    report.warnings.extend(f"{variable.name}: {w}" for w in result.warnings)

    if report.failed:
        logger.warning(
            "Calculation sync: %d synced, %d failed", report.synced, report.failed
        )
    else:
        logger.info("Calculation sync: %d synced", report.synced)
    return report


# =============================================================================
# Code syntax
# =============================================================================


@dataclass
class CodeSyntaxSyncReport:
    """WEB code syntax per variable id; None clears the entry."""

    synced: int = 0
    skipped: int = 0
    code_syntax: dict[str, str | None] = field(default_factory=dict)

    def apply(self, variables: Sequence[Variable]) -> list[Variable]:
        updated: list[Variable] = []
        for variable in variables:
            if variable.id in self.code_syntax:
                syntax = {k: v for k, v in variable.code_syntax.items() if k != WEB}
                web = self.code_syntax[variable.id]
                if web is not None:
                    syntax[WEB] = web
                variable = variable.model_copy(update={"code_syntax": syntax})
            updated.append(variable)
        return updated


def sync_code_syntax(
    variables: Sequence[Variable],
    prefix: str = "",
    rules: Sequence[NameFormatRule] = (),
) -> CodeSyntaxSyncReport:
    """Compute ``var(--name)`` WEB code syntax from the rename rules.

    Variables no enabled rule matches are skipped and keep their current
    code syntax. Pass the rules from ``get_all_rules_with_default`` to
    cover every variable.
    """
    report = CodeSyntaxSyncReport()
    for variable in variables:
        if find_matching_rule(variable.name, rules) is None:
            report.skipped += 1
            continue
        report.code_syntax[variable.id] = f"var(--{format_name(variable.name, rules, prefix)})"
        report.synced += 1

    logger.info("Code syntax sync: %d synced, %d skipped", report.synced, report.skipped)
    return report


def reset_code_syntax(variables: Sequence[Variable]) -> CodeSyntaxSyncReport:
    """Report that clears WEB code syntax on every variable that has one."""
    report = CodeSyntaxSyncReport()
    for variable in variables:
        if WEB in variable.code_syntax:
            report.code_syntax[variable.id] = None
            report.synced += 1
        else:
            report.skipped += 1
    return report
