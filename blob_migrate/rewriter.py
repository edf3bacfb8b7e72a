"""Literal replacement of local image paths with blob URLs in markup files."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from .config import RewriteConfig
from .mapping import KEYS_PER_IMAGE, load_mapping
from .models import FileRewrite, RewriteSummary
from .utils import has_extension, walk_files

logger = logging.getLogger("blob_migrate")


class ReplacementPlan:
    """Compiled single-pass substitution for every mapping key.

    Keys are escaped so they match as literal text and are tried longest first;
    when one key is a substring of another the longer one wins at any position.
    Keys of equal length keep the mapping's insertion order. Replacement text is
    never rescanned, so a URL containing a key is left alone.
    """

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self.mapping: Dict[str, str] = {key: value for key, value in mapping.items() if key}
        ordered = sorted(self.mapping, key=len, reverse=True)
        self.pattern: Optional[re.Pattern[str]] = (
            re.compile("|".join(re.escape(key) for key in ordered)) if ordered else None
        )

    def apply(self, text: str) -> Tuple[str, int]:
        """Return the rewritten text and the number of replacements made."""
        if self.pattern is None:
            return text, 0
        return self.pattern.subn(lambda match: self.mapping[match.group(0)], text)


def rewrite_file(path: Path, plan: ReplacementPlan) -> FileRewrite:
    """Apply ``plan`` to one file, writing it back only when something changed."""
    logger.info("Processing %s...", path)
    content = path.read_text(encoding="utf-8", errors="surrogateescape")
    updated, count = plan.apply(content)
    if count:
        path.write_text(updated, encoding="utf-8", errors="surrogateescape")
        logger.info("   Updated %d image references", count)
    else:
        logger.info("   No changes needed")
    return FileRewrite(path=path, replacements=count)


def run_rewriter(config: RewriteConfig) -> RewriteSummary:
    """Rewrite every markup file under ``config.root`` using the stored mapping."""
    logger.info("Starting image URL update...")
    mapping = load_mapping(config.mapping_path)
    logger.info("Loaded %d image mappings", len(mapping) // KEYS_PER_IMAGE)
    plan = ReplacementPlan(mapping)

    markup_files = walk_files(config.root, has_extension(config.extension, case_sensitive=True))
    logger.info("Found %d %s files", len(markup_files), config.extension.lstrip(".").upper())

    summary = RewriteSummary()
    for path in markup_files:
        summary.files.append(rewrite_file(path, plan))

    logger.info(
        "Updated %d image references across %d files (%d changed)",
        summary.total_replacements,
        len(summary.files),
        summary.files_changed,
    )
    logger.info("Next steps:")
    logger.info("1. Review the changes with: git diff")
    logger.info("2. Test your site locally")
    logger.info("3. Commit and push the rewritten files")
    logger.info("4. Optional: delete the local images directory to save space")
    return summary
