"""
Two-level category hierarchy.

Categories arrive from the catalog API as a flat list; a record without a
parent id is a root, a record whose parent id names a root is a
subcategory. Everything here is a pure function over an already-fetched
snapshot: no I/O, no shared state, and no exceptions for bad data.
Unresolvable references (orphans, unknown ids) are dropped silently.
"""

import logging
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from catalog_admin.schemas.category import Category, CategoryNode, ResolvedNames

logger = logging.getLogger(__name__)


def parse_categories(payload: Any) -> List[Category]:
    """Validate raw API records, skipping anything that is not a category."""
    if not isinstance(payload, list):
        return []

    categories = []
    for item in payload:
        try:
            categories.append(Category.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed category record: {e.error_count()} errors")
    return categories


def _name_key(category: Category) -> str:
    return category.name.lower()


def build_tree(flat_list: Sequence[Category], sort_by_name: bool = False) -> List[CategoryNode]:
    """
    Build the root -> children tree from a flat category list.

    Roots keep their input order and each root's children keep theirs,
    unless sort_by_name is set. Orphans, and records nested under a
    subcategory, do not appear in the result.
    """
    roots = [cat for cat in flat_list if cat.is_root]
    if sort_by_name:
        roots = sorted(roots, key=_name_key)

    children_by_parent: Dict[Hashable, List[Category]] = {root.id: [] for root in roots}
    for cat in flat_list:
        if not cat.is_root and cat.parent_id in children_by_parent:
            children_by_parent[cat.parent_id].append(cat)

    tree = []
    for root in roots:
        children = children_by_parent[root.id]
        if sort_by_name:
            children = sorted(children, key=_name_key)
        tree.append(CategoryNode(
            category=root,
            children=tuple(CategoryNode(category=child) for child in children),
        ))
    return tree


def tree_from_payload(payload: Any) -> List[CategoryNode]:
    """
    Convert a server-built hierarchy (categories/tree/hierarchy) into nodes.

    Top-level items that carry a parent id are skipped, and anything below
    the second level is discarded.
    """
    if not isinstance(payload, list):
        return []

    tree = []
    for item in payload:
        roots = parse_categories([item])
        if not roots or not roots[0].is_root:
            continue
        raw_children = item.get("children") if isinstance(item, dict) else None
        children = parse_categories(raw_children or [])
        tree.append(CategoryNode(
            category=roots[0],
            children=tuple(CategoryNode(category=child) for child in children),
        ))
    return tree


def sort_tree(tree: Sequence[CategoryNode]) -> List[CategoryNode]:
    """Copy of tree with roots and each child list ordered by name."""
    def by_name(node: CategoryNode) -> str:
        return _name_key(node.category)

    return [
        CategoryNode(category=node.category, children=tuple(sorted(node.children, key=by_name)))
        for node in sorted(tree, key=by_name)
    ]


def count_children(flat_list: Sequence[Category], root_id: Hashable) -> int:
    """Number of records whose parent id is root_id."""
    return sum(1 for cat in flat_list if cat.parent_id is not None and cat.parent_id == root_id)


def index_children(flat_list: Sequence[Category]) -> Dict[Hashable, int]:
    """Child counts for every parent id, in one pass."""
    counts: Dict[Hashable, int] = {}
    for cat in flat_list:
        if cat.parent_id is not None:
            counts[cat.parent_id] = counts.get(cat.parent_id, 0) + 1
    return counts


def split_levels(flat_list: Sequence[Category]) -> Tuple[List[Category], List[Category]]:
    """Partition into (roots, records with a parent id)."""
    roots = [cat for cat in flat_list if cat.is_root]
    subcategories = [cat for cat in flat_list if not cat.is_root]
    return roots, subcategories


def name_lookup(flat_list: Sequence[Category]) -> Dict[Hashable, str]:
    """Map every category id to its name."""
    return {cat.id: cat.name for cat in flat_list}


def resolve_names(tree: Sequence[CategoryNode], ids: Iterable[Hashable]) -> ResolvedNames:
    """
    Resolve category ids into parent and subcategory display names.

    A matching root contributes its own name. A matching child contributes
    its name to sub_names and its root's name to parent_names. Both lists
    are deduplicated by name in tree order; unknown ids are ignored.
    """
    wanted = set(ids)
    parent_names: List[str] = []
    sub_names: List[str] = []

    for node in tree:
        matched_children = [child for child in node.children if child.category.id in wanted]
        if node.category.id in wanted or matched_children:
            if node.category.name not in parent_names:
                parent_names.append(node.category.name)
        for child in matched_children:
            if child.category.name not in sub_names:
                sub_names.append(child.category.name)

    return ResolvedNames(parent_names=parent_names, sub_names=sub_names)


def category_names(tree: Sequence[CategoryNode], ids: Iterable[Hashable]) -> List[str]:
    """Names of every node whose id is in ids, in tree order."""
    wanted = set(ids)
    names = []
    for node in tree:
        if node.category.id in wanted:
            names.append(node.category.name)
        for child in node.children:
            if child.category.id in wanted:
                names.append(child.category.name)
    return names


def toggle_selection(current: Iterable[Hashable], category_id: Hashable) -> frozenset:
    """Return a new selection with category_id removed if present, else added."""
    selection = set(current)
    if category_id in selection:
        selection.discard(category_id)
    else:
        selection.add(category_id)
    return frozenset(selection)


def find_category(flat_list: Sequence[Category], category_id: Hashable) -> Optional[Category]:
    """The record with this id, or None. Path parameters arrive as strings, so ids compare as text."""
    for cat in flat_list:
        if str(cat.id) == str(category_id):
            return cat
    return None
