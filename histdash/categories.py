"""Fixed command category table and first-match categorization."""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from histdash.models import Category, CategorySummary, CommandRecord

logger = logging.getLogger("histdash")

# Tried in declaration order; the first set containing the base token wins.
CATEGORY_TABLE: tuple[tuple[Category, frozenset[str]], ...] = (
    (Category.VERSION_CONTROL, frozenset({"git", "hg", "svn"})),
    (Category.FILE_OPERATIONS, frozenset({"ls", "cd", "cp", "mv", "rm", "mkdir", "rmdir", "find", "fd", "locate"})),
    (Category.TEXT_PROCESSING, frozenset({"more", "less", "cat", "head", "tail", "grep", "sed", "awk", "sort", "uniq", "wc"})),
    (Category.DEVELOPMENT, frozenset({"npm", "node", "python", "python3", "make", "cargo", "go", "javac", "gcc"})),
    (Category.PACKAGE_MANAGEMENT, frozenset({"brew", "apt", "yum", "pip", "gem"})),
    (Category.SYSTEM, frozenset({"ps", "top", "htop", "kill", "sudo", "chmod", "chown", "df", "du"})),
    (Category.NETWORK, frozenset({"curl", "wget", "ssh", "scp", "ping", "dig", "nslookup"})),
    (Category.EDITORS, frozenset({"vim", "nano", "emacs", "code", "bbedit", "subl"})),
    (Category.TERMINAL_SESSION, frozenset({"tmux", "screen", "exit", "logout", "clear"})),
    (Category.ARCHIVES, frozenset({"tar", "zip", "unzip", "gzip", "gunzip"})),
    (Category.DOCKER, frozenset({"docker", "docker-compose"})),
    (Category.OTHER, frozenset()),
)


def categorize_record(record: CommandRecord) -> Category:
    for category, tokens in CATEGORY_TABLE:
        if record.baseToken in tokens:
            return category
    return Category.OTHER


def categorize(records: Sequence[CommandRecord]) -> dict[Category, tuple[CommandRecord, ...]]:
    """Group records by category, keeping chronological order inside each group."""
    grouped: dict[Category, list[CommandRecord]] = {category: [] for category, _ in CATEGORY_TABLE}
    for record in records:
        grouped[categorize_record(record)].append(record)
    logger.info("Commands categorized")
    return {category: tuple(items) for category, items in grouped.items()}


def summarize_categories(
    by_category: Mapping[Category, Sequence[CommandRecord]],
    total: int,
) -> list[CategorySummary]:
    summaries: list[CategorySummary] = []
    for category, items in by_category.items():
        if not items:
            continue
        percentage = round(len(items) / total * 100, 1) if total else 0.0
        summaries.append(CategorySummary(category=category, count=len(items), percentage=percentage))
    return summaries
