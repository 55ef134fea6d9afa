"""Structural containment check between two decoded JSON trees."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .exceptions import MaxDepthExceededError
from .models import CheckerConfig, CheckResult, DiffEntry, DiffType, JsonKind
from .path import Path
from .utils import format_value, kind_of, numbers_equal

logger = logging.getLogger(__name__)


class ContainmentChecker:
    """
    Walks a subset and a superset tree in lock-step.

    Handles:
    - Objects: every subset key must exist in the superset; extra keys pass
    - Arrays: set mode, each subset element must be contained in some
      superset element (order ignored, one superset element may serve many)
    - Scalars: same kind and exact value; numbers by double equality
    """

    def __init__(
        self,
        config: Optional[CheckerConfig] = None,
        collect_diffs: bool = True
    ):
        self.config = config or CheckerConfig()
        self.collect_diffs = collect_diffs

        self.diffs: list[DiffEntry] = []
        self.fields_checked = 0
        self._aborted = False

    def check(self, subset: Any, superset: Any, path: Path = Path()) -> bool:
        """
        Check containment of ``subset`` in ``superset`` at ``path``.

        Returns:
            True if the subset is contained, False otherwise
        """
        if self._aborted:
            return False

        if path.depth > self.config.max_depth:
            raise MaxDepthExceededError(self.config.max_depth, str(path))

        sub_kind = kind_of(subset)
        sup_kind = kind_of(superset)

        if sub_kind == JsonKind.NULL:
            self.fields_checked += 1
            if sup_kind == JsonKind.NULL:
                return True
            self._add_diff(path, DiffType.VALUE_MISMATCH, subset, superset)
            return False

        if sub_kind.is_compound and sup_kind != sub_kind:
            self._add_diff(path, DiffType.TYPE_MISMATCH, subset, superset)
            return False

        if sub_kind == JsonKind.OBJECT:
            return self._check_objects(subset, superset, path)
        elif sub_kind == JsonKind.ARRAY:
            return self._check_arrays(subset, superset, path)
        else:
            return self._check_scalars(subset, sub_kind, superset, sup_kind, path)

    def _check_objects(self, subset: dict, superset: dict, path: Path) -> bool:
        """Every subset key must be present and contained."""
        all_match = True

        for key in sorted(subset):
            if self._aborted:
                return False

            child_path = path.field(key)

            if key not in superset:
                self._add_diff(child_path, DiffType.MISSING_KEY, subset[key])
                all_match = False
                continue

            if not self.check(subset[key], superset[key], child_path):
                all_match = False

        return all_match

    def _check_arrays(self, subset: list, superset: list, path: Path) -> bool:
        """Every subset element must be contained in some superset element."""
        all_match = True

        for i, sub_item in enumerate(subset):
            if self._aborted:
                return False

            child_path = path.index(i)
            found = False
            for sup_item in superset:
                if self._item_contained(sub_item, sup_item, child_path):
                    found = True
                    break

            if not found:
                self._add_diff(child_path, DiffType.ELEMENT_NOT_FOUND, sub_item)
                all_match = False

        return all_match

    def _check_scalars(
        self,
        subset: Any,
        sub_kind: JsonKind,
        superset: Any,
        sup_kind: JsonKind,
        path: Path
    ) -> bool:
        """Compare scalar values."""
        self.fields_checked += 1

        if sup_kind == JsonKind.NULL:
            self._add_diff(path, DiffType.VALUE_MISMATCH, subset, superset)
            return False

        if sub_kind != sup_kind:
            self._add_diff(path, DiffType.TYPE_MISMATCH, subset, superset)
            return False

        if sub_kind == JsonKind.NUMBER:
            is_match = numbers_equal(subset, superset)
        else:
            is_match = subset == superset

        if is_match:
            return True

        self._add_diff(path, DiffType.VALUE_MISMATCH, subset, superset)
        return False

    def _item_contained(self, subset: Any, superset: Any, path: Path) -> bool:
        """Boolean-only containment test used by the array search."""
        # Separate checker so the search leaves our diffs untouched
        temp_checker = ContainmentChecker(self.config, collect_diffs=False)
        return temp_checker.check(subset, superset, path)

    def _add_diff(
        self,
        path: Path,
        diff_type: DiffType,
        subset_value: Any,
        superset_value: Any = None
    ):
        """Add a diff entry."""
        has_superset_value = diff_type in (
            DiffType.VALUE_MISMATCH, DiffType.TYPE_MISMATCH
        )

        if self.collect_diffs:
            entry = DiffEntry(
                path=path,
                type=diff_type,
                subset_value=subset_value,
                superset_value=superset_value,
                has_superset_value=has_superset_value,
                message=self._message(diff_type, subset_value, superset_value),
            )
            self.diffs.append(entry)
            logger.debug("%s: %s", entry.path, entry.message)

        if self.config.fail_fast or not self.collect_diffs:
            self._aborted = True

    def _message(self, diff_type: DiffType, subset_value: Any, superset_value: Any) -> str:
        limit = self.config.max_value_length
        if diff_type == DiffType.MISSING_KEY:
            return "missing key in superset"
        if diff_type == DiffType.ELEMENT_NOT_FOUND:
            return f"element not found in superset array: {format_value(subset_value, limit)}"
        if diff_type == DiffType.TYPE_MISMATCH:
            return (
                f"type mismatch (subset: {kind_of(subset_value).value}, "
                f"superset: {kind_of(superset_value).value})"
            )
        return (
            f"value mismatch (subset: {format_value(subset_value, limit)}, "
            f"superset: {format_value(superset_value, limit)})"
        )


def check_subset(
    subset: Any,
    superset: Any,
    config: Optional[CheckerConfig] = None
) -> CheckResult:
    """
    Check whether ``subset`` is structurally contained in ``superset``.

    Args:
        subset: Decoded JSON tree whose content must all be found
        superset: Decoded JSON tree being searched
        config: Optional checker configuration

    Returns:
        CheckResult, which also unpacks as ``(is_contained, diffs)``
    """
    checker = ContainmentChecker(config)
    try:
        contained = checker.check(subset, superset)
    except RecursionError:
        raise MaxDepthExceededError(checker.config.max_depth, "$")
    return CheckResult(
        is_contained=contained and not checker.diffs,
        diffs=checker.diffs,
        fields_checked=checker.fields_checked,
    )


def is_contained(subset: Any, superset: Any, config: Optional[CheckerConfig] = None) -> bool:
    """Boolean-only containment test; no differences are collected."""
    checker = ContainmentChecker(config, collect_diffs=False)
    try:
        return checker.check(subset, superset)
    except RecursionError:
        raise MaxDepthExceededError(checker.config.max_depth, "$")


check = check_subset
