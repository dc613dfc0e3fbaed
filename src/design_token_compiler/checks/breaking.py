"""
breaking.py
===========

Does: Compare the current token tree against a baseline tree and classify the
      differences: removals and type changes are breaking, additions are not.
      Removed/added pairs of the same type with similar paths are reported as
      likely renames.
Returns: compare_token_sets() -> BreakingReport, check_breaking(),
         path_similarity(), report_lines().
Used by: `design-tokens check-breaking`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from rapidfuzz.distance import Levenshtein

from design_token_compiler.checks.discovery import TokenRecord, load_token_records

__all__ = [
    "RENAME_THRESHOLD",
    "ADDED_PREVIEW",
    "RenameSuggestion",
    "TypeChange",
    "BreakingReport",
    "path_similarity",
    "compare_token_sets",
    "check_breaking",
    "report_lines",
]
__docformat__ = "google"

logger = logging.getLogger(__name__)

RENAME_THRESHOLD = 0.7
ADDED_PREVIEW = 10


@dataclass(frozen=True)
class RenameSuggestion:
    from_path: str
    to_path: str
    similarity: float


@dataclass(frozen=True)
class TypeChange:
    path: str
    old_type: str | None
    new_type: str | None


@dataclass(frozen=True)
class BreakingReport:
    baseline_count: int
    current_count: int
    removed: tuple[str, ...] = ()
    added: tuple[str, ...] = ()
    type_changes: tuple[TypeChange, ...] = ()
    renames: tuple[RenameSuggestion, ...] = ()

    @property
    def is_breaking(self) -> bool:
        return bool(self.removed or self.type_changes)

    @property
    def exit_code(self) -> int:
        return 1 if self.is_breaking else 0

    def rename_for(self, path: str) -> RenameSuggestion | None:
        """Does: First rename suggestion whose source is `path`."""
        return next((r for r in self.renames if r.from_path == path), None)


def path_similarity(a: str, b: str) -> float:
    """Does: (len(longer) - edit distance) / len(longer); 1.0 for two empty strings."""
    return Levenshtein.normalized_similarity(a, b)


def compare_token_sets(
    baseline: Mapping[str, TokenRecord],
    current: Mapping[str, TokenRecord],
) -> BreakingReport:
    """
    Does: Diff two path → record maps.
    Returns: BreakingReport (paths listed in baseline / current iteration order).
    """
    removed = tuple(p for p in baseline if p not in current)
    added = tuple(p for p in current if p not in baseline)

    renames = tuple(
        RenameSuggestion(old, new, sim)
        for old in removed
        for new in added
        if baseline[old].type == current[new].type
        and (sim := path_similarity(old, new)) > RENAME_THRESHOLD
    )

    type_changes = tuple(
        TypeChange(p, rec.type, current[p].type)
        for p, rec in baseline.items()
        if p in current and rec.type != current[p].type
    )

    logger.debug(
        "Compared %d baseline / %d current tokens: -%d +%d ~%d",
        len(baseline), len(current), len(removed), len(added), len(type_changes),
    )
    return BreakingReport(
        baseline_count=len(baseline),
        current_count=len(current),
        removed=removed,
        added=added,
        type_changes=type_changes,
        renames=renames,
    )


def check_breaking(baseline_dir: str | Path, tokens_dir: str | Path) -> BreakingReport | None:
    """
    Does: Load both trees and compare them.
    Returns: None when the baseline directory does not exist (nothing to compare).
    Raises: TokenSourceError when either tree holds malformed JSON.
    """
    if not Path(baseline_dir).is_dir():
        logger.info("No baseline directory at %s", baseline_dir)
        return None
    return compare_token_sets(load_token_records(baseline_dir), load_token_records(tokens_dir))


def report_lines(report: BreakingReport) -> list[str]:
    """Does: Human-readable report, removals and type changes first."""
    lines = [
        f"  Baseline: {report.baseline_count} tokens",
        f"  Current:  {report.current_count} tokens",
        "",
    ]

    if report.removed:
        lines += [f"❌ BREAKING: {len(report.removed)} token(s) removed:", ""]
        for path in report.removed:
            lines.append(f"   - {path}")
            rename = report.rename_for(path)
            if rename:
                lines.append(f'     (possibly renamed to "{rename.to_path}")')
        lines.append("")

    if report.type_changes:
        lines += [f"❌ BREAKING: {len(report.type_changes)} token type(s) changed:", ""]
        lines += [f"   - {tc.path}: {tc.old_type} → {tc.new_type}" for tc in report.type_changes]
        lines.append("")

    if report.added:
        lines += [f"✅ {len(report.added)} new token(s) added (non-breaking):", ""]
        lines += [f"   + {p}" for p in report.added[:ADDED_PREVIEW]]
        if len(report.added) > ADDED_PREVIEW:
            lines.append(f"   ... and {len(report.added) - ADDED_PREVIEW} more")
        lines.append("")

    if report.is_breaking:
        lines += [
            "⚠️  BREAKING CHANGES DETECTED!",
            "",
            "   This will require a MAJOR version bump.",
            "   Please update the migration guide before merging.",
        ]
    elif report.added:
        lines += [
            "✅ No breaking changes detected.",
            "",
            "   New tokens added - this will be a MINOR version bump.",
        ]
    else:
        lines.append("✅ No changes detected.")
    return lines
