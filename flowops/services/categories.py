"""
Hierarchical inventory category paths.

Categories are folders such as ``Food/Dairy/Cheese``. A path is parsed once
into a tuple of trimmed segments and stored in canonical ``"A/B/C"`` form, so
"everything under Food" is a prefix query on an indexed column rather than
string splitting over every row on read.
"""
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from flowops.schemas.inventory import CategoryNode

SEPARATOR = "/"
# Accept "Food > Dairy" as well as "Food/Dairy" on input
_SPLIT_RE = re.compile(r"[/>]")


@dataclass(frozen=True)
class CategoryPath:
    segments: Tuple[str, ...]

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["CategoryPath"]:
        """Parse user input; blank input (or only separators) means uncategorized."""
        if raw is None:
            return None
        segments = tuple(s.strip() for s in _SPLIT_RE.split(raw) if s.strip())
        if not segments:
            return None
        return cls(segments)

    @property
    def name(self) -> str:
        return self.segments[-1]

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def parent(self) -> Optional["CategoryPath"]:
        if len(self.segments) == 1:
            return None
        return CategoryPath(self.segments[:-1])

    def ancestors(self) -> List["CategoryPath"]:
        """Every path from the root folder down to and including this one."""
        return [CategoryPath(self.segments[:i]) for i in range(1, len(self.segments) + 1)]

    def is_within(self, other: "CategoryPath") -> bool:
        return self.segments[:len(other.segments)] == other.segments

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments)


def canonical(raw: Optional[str]) -> Optional[str]:
    path = CategoryPath.parse(raw)
    return str(path) if path else None


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def prefix_filter(column, path: CategoryPath) -> ColumnElement:
    """WHERE clause matching ``path`` itself and every descendant folder."""
    value = str(path)
    return or_(
        column == value,
        column.like(_escape_like(value) + SEPARATOR + "%", escape="\\"),
    )


def build_tree(counts: Iterable[Tuple[Optional[str], int]]) -> Tuple[List[CategoryNode], int]:
    """
    Build the folder tree from ``(canonical_category, item_count)`` rows.

    Returns the root folders (sorted by name at every level) and the number
    of items without a category.
    """
    nodes: Dict[Tuple[str, ...], CategoryNode] = {}
    roots: List[CategoryNode] = []
    uncategorized = 0

    for raw, count in counts:
        path = CategoryPath.parse(raw)
        if path is None:
            uncategorized += count
            continue
        for folder in path.ancestors():
            node = nodes.get(folder.segments)
            if node is None:
                node = CategoryNode(name=folder.name, path=str(folder), item_count=0, total_count=0, children=[])
                nodes[folder.segments] = node
                if folder.parent is None:
                    roots.append(node)
                else:
                    nodes[folder.parent.segments].children.append(node)
            node.total_count += count
        nodes[path.segments].item_count += count

    def _sort(children: List[CategoryNode]) -> List[CategoryNode]:
        children.sort(key=lambda n: n.name.lower())
        for child in children:
            _sort(child.children)
        return children

    return _sort(roots), uncategorized
