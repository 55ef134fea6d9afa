"""Engine that runs the check and the report rendering as one call."""

from __future__ import annotations

import logging
import time
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Optional

from .checker import check_subset
from .models import CheckerConfig, CheckReport, ExecutionInfo, Summary
from .renderer import render_diff
from .utils import validate_json_tree

logger = logging.getLogger(__name__)


class SubsetEngine:
    """
    Orchestrates a containment run:

    1. Validation: both inputs must be decoded JSON trees
    2. Check: structural containment with path-tagged differences
    3. Render: the subset annotated with failure markers (only on failure)
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[CheckerConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or CheckerConfig()

    def compare(self, subset: Any, superset: Any) -> CheckReport:
        """
        Check whether ``subset`` is contained in ``superset``.

        Raises:
            ValidationError: if either input is not a JSON tree
            MaxDepthExceededError: if nesting exceeds ``config.max_depth``
        """
        start_time = time.time()

        validate_json_tree(subset)
        validate_json_tree(superset)

        result = check_subset(subset, superset, self.config)

        report_text = ""
        if not result.is_contained:
            report_text = render_diff(subset, result.diffs, self.config)
            logger.info("Not contained: %d difference(s)", len(result.diffs))
        else:
            logger.info("Contained (%d fields checked)", result.fields_checked)

        duration_ms = int((time.time() - start_time) * 1000)
        counts = Counter(d.type.value for d in result.diffs)

        return CheckReport(
            is_contained=result.is_contained,
            execution=ExecutionInfo(
                duration_ms=duration_ms,
                timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
                engine_version=self.VERSION
            ),
            summary=Summary(
                fields_checked=result.fields_checked,
                differences_found=len(result.diffs),
                by_type=dict(counts)
            ),
            diffs=result.diffs,
            report=report_text
        )


def compare(
    subset: Any,
    superset: Any,
    config: Optional[CheckerConfig] = None
) -> CheckReport:
    """Convenience function: ``SubsetEngine(config).compare(subset, superset)``."""
    return SubsetEngine(config).compare(subset, superset)
