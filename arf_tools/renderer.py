"""
Text and JSON rendering of the validator and link-checker reports.
"""

import json
import logging
from typing import List, Optional

from arf_tools.tree import DeadLink, LinkCheckReport
from arf_tools.validator import ValidationResult


class Renderer:
    """Renderer for the reports printed at the end of each tool run."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize the renderer.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def render_validation_report(self, result: ValidationResult, verbose: bool = False) -> str:
        """Render the outcome of a validation run.

        Args:
            result: Validation result
            verbose: List duplicate names instead of only counting them

        Returns:
            Report text
        """
        lines = [f"Structure Validation: {'PASSED' if result.valid else 'FAILED'}"]

        if result.duplicate_urls:
            lines.append("")
            lines.append(f"[!] Found {len(result.duplicate_urls)} Duplicate URLs:")
            lines.extend(f'  - "{d.name}": {d.url}' for d in result.duplicate_urls)
        else:
            lines.append("Duplicate URLs: NONE")

        # Short names repeat legitimately across folders, so these stay a count by default
        if result.duplicate_names:
            lines.append("")
            lines.append(
                f"[!] Found {len(result.duplicate_names)} Duplicate Names (Potential ambiguous nodes):"
            )
            if verbose:
                lines.extend(f'  - "{name}"' for name in result.duplicate_names)
            else:
                lines.append("  (Run with --verbose to see names)")

        return "\n".join(lines)

    def render_link_report(self, report: LinkCheckReport) -> str:
        """Render the outcome of a link-check run.

        Args:
            report: Finished link-check report

        Returns:
            Report text
        """
        lines = [
            "",
            "",
            "--- Check Complete ---",
            f"Total URLs: {report.total}",
            f"Dead/Refused: {len(report.dead_links)}",
        ]

        if not report.dead_links:
            lines.append("No broken links found!")
            return "\n".join(lines)

        lines.append("")
        lines.append("Potential Dead Links:")
        for dead in report.dead_links:
            lines.extend(self._render_dead_link(dead))

        lines.append("")
        lines.append('Note: Some "dead" links might just be blocking bots or have timeouts.')

        return "\n".join(lines)

    def _render_dead_link(self, dead: DeadLink) -> List[str]:
        detail = dead.code if dead.code is not None else (dead.error or "")
        return [
            f"[{dead.reason.value.upper()}] {detail} - {dead.name}",
            f"    URL: {dead.url}",
            f"    Path: {dead.path}",
        ]

    def save_dead_links(self, report: LinkCheckReport, output_path: str) -> str:
        """Save the dead-link records to a JSON file.

        Args:
            report: Finished link-check report
            output_path: Path of the JSON file

        Returns:
            Path to the saved JSON file
        """
        payload = {
            "total": report.total,
            "checked": report.checked,
            "dead_links": [dead.to_dict() for dead in report.dead_links],
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

        self.logger.info(f"Saved {len(report.dead_links)} dead links to {output_path}")
        return output_path
