"""Text fixer gateway: splice RewriteResults into source text by byte range."""

import logging

from prefer_arrow.domain.entities import RewriteResult
from prefer_arrow.domain.protocols import FixerGatewayProtocol

logger = logging.getLogger(__name__)


class TextFixerGateway(FixerGatewayProtocol):
    """
    Applies a set of rewrites in one pass.

    Fixes are taken in source order; a fix that overlaps one already taken is left for
    the next pass. Sorting by (start, -end) makes an outer rewrite win over the nested
    rewrites it contains.
    """

    def select_non_overlapping(self, fixes: list[RewriteResult]) -> list[RewriteResult]:
        ordered = sorted(fixes, key=lambda f: (f.target_range.start, -f.target_range.end))
        selected: list[RewriteResult] = []
        last_end = -1
        for fix in ordered:
            if fix.target_range.start < last_end:
                logger.debug(
                    "Deferring overlapping fix at [%d, %d)",
                    fix.target_range.start,
                    fix.target_range.end,
                )
                continue
            selected.append(fix)
            last_end = fix.target_range.end
        return selected

    def apply_fixes(self, source: str, fixes: list[RewriteResult]) -> tuple[str, int]:
        """Apply non-overlapping rewrites. Returns (new source, number applied)."""
        selected = self.select_non_overlapping(fixes)
        if not selected:
            return source, 0
        data = source.encode("utf-8")
        # Splice back to front so earlier offsets stay valid.
        for fix in reversed(selected):
            start, end = fix.target_range.start, fix.target_range.end
            if start < 0 or end > len(data) or start > end:
                raise ValueError(f"Fix range [{start}, {end}) outside source of {len(data)} bytes")
            data = data[:start] + fix.replacement_text.encode("utf-8") + data[end:]
        return data.decode("utf-8"), len(selected)
