"""JSON report generator for test runs.

Generates structured JSON reports from recorded outcomes.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence


class JsonReporter:
    """Generates JSON reports from test outcomes."""

    def generate(
        self,
        run_pattern: str,
        outcomes: Sequence[Any],
        skipped: Optional[Sequence[str]] = None,
        duration_ms: int = 0,
    ) -> dict[str, Any]:
        """Generate a JSON report from test outcomes.

        Args:
            run_pattern: Pattern the suites were selected with.
            outcomes: Recorded Outcome objects.
            skipped: Full names of tests skipped after a stop.
            duration_ms: Run duration in milliseconds.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        skipped = list(skipped or [])
        passed = sum(1 for o in outcomes if o.passed)
        failed = len(outcomes) - passed

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "pattern": run_pattern,
            "status": "passed" if failed == 0 else "failed",
            "summary": {
                "total": len(outcomes),
                "passed": passed,
                "failed": failed,
                "skipped": len(skipped),
                "duration_ms": duration_ms,
            },
            "tests": [
                {
                    "suite": o.suite,
                    "name": o.name,
                    "status": "pass" if o.passed else "fail",
                    "duration_ms": o.duration_ms,
                    "timed_out": o.timed_out,
                    "diagnostic": o.diagnostic,
                }
                for o in outcomes
            ],
            "skipped": skipped,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Args:
            report: Report dictionary.
            path: Output file path.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path

