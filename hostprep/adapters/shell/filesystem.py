"""
Filesystem adapter — the shell profile reads and appends.

Action params:
    operation (str): One of 'exists', 'read', 'append'.
    path (str): Absolute path, ``~`` already expanded.
    content (str): Text to append (for 'append').
"""

from __future__ import annotations

import logging
from pathlib import Path

from hostprep.adapters.base import ExecutionContext, OperationAdapter
from hostprep.core.models.action import Receipt

logger = logging.getLogger(__name__)


class FilesystemAdapter(OperationAdapter):
    """Local file operations. ``OSError`` becomes a failed receipt."""

    operations = frozenset({"exists", "read", "append"})
    required = {
        "exists": ("path",),
        "read": ("path",),
        "append": ("path", "content"),
    }

    @property
    def name(self) -> str:
        return "filesystem"

    def is_available(self) -> bool:
        return True

    def _exists(self, ctx: ExecutionContext) -> Receipt:
        target = Path(ctx.params["path"])
        exists = target.exists()
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=str(exists),
            metadata={"exists": exists, "path": str(target)},
        )

    def _read(self, ctx: ExecutionContext) -> Receipt:
        """Read a text file.

        Bytes that are not UTF-8 read as U+FFFD. A failed receipt carries
        ``metadata["missing"]`` so callers can tell an absent file from one
        they could not read.
        """
        target = Path(ctx.params["path"])
        if not target.exists():
            return self._fail(
                ctx, f"File not found: {target}",
                metadata={"path": str(target), "missing": True},
            )
        try:
            text = target.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            return self._fail(
                ctx, f"Cannot read {target}: {e}",
                metadata={"path": str(target), "missing": False},
            )
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=text,
            metadata={"path": str(target)},
        )

    def _append(self, ctx: ExecutionContext) -> Receipt:
        target = Path(ctx.params["path"])
        content = ctx.params["content"]
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as fh:
            fh.write(content)
        logger.debug("Appended %d bytes to %s", len(content), target)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Appended to {target}",
            metadata={"path": str(target), "size": len(content)},
        )
