"""
Tree Builder

Сборка вложенного дерева сводок из плоского списка AX узлов CDP:
индекс узлов, выбор корня, рекурсивная сборка с ограничением глубины,
последующая обрезка дерева и поиск по нему.
"""

import logging
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence

from .accessibility_parser import filter_ignored, summarize_node
from .types import AXNodeSummary, RawAXNode


logger = logging.getLogger("TreeBuilder")


def build_tree_index(nodes: Sequence[RawAXNode]) -> Dict[str, RawAXNode]:
    """Индекс node_id -> узел (при повторе ID побеждает последний)"""
    index: Dict[str, RawAXNode] = {}
    for node in nodes:
        index[node.node_id] = node
    return index


def find_root(nodes: Sequence[RawAXNode]) -> Optional[RawAXNode]:
    """Первый узел без родителя или с родителем вне набора"""
    node_ids = {node.node_id for node in nodes}
    for node in nodes:
        if node.parent_id is None or node.parent_id not in node_ids:
            return node
    return None


def assemble_tree(node: RawAXNode, index: Dict[str, RawAXNode],
                  depth: int = 0, max_depth: int = 10,
                  _path: FrozenSet[str] = frozenset()) -> AXNodeSummary:
    """Рекурсивная сборка дерева сводок от узла node.

    Глубина корня равна depth; на глубине max_depth дочерние узлы
    не раскрываются. Игнорируемые и отсутствующие в индексе дочерние
    узлы пропускаются, как и узлы, уже находящиеся на пути от корня.
    """
    summary = summarize_node(node)

    if depth >= max_depth or not node.child_ids:
        return summary

    path = _path | {node.node_id}
    children: List[AXNodeSummary] = []
    for child_id in node.child_ids:
        if child_id in path:
            logger.debug(f"Skipping cyclic reference {node.node_id} -> {child_id}")
            continue

        child = index.get(child_id)
        if child is None:
            logger.debug(f"Skipping dangling child id {child_id} of node {node.node_id}")
            continue

        if not child.ignored:
            children.append(assemble_tree(child, index, depth + 1, max_depth, path))

    if children:
        summary.children = children

    return summary


def prune_to_depth(node: AXNodeSummary, max_depth: int) -> AXNodeSummary:
    """Обрезка дерева до max_depth уровней (1 = только корень)"""
    if max_depth <= 1 or not node.children:
        return node.model_copy(update={'children': None})

    return node.model_copy(update={
        'children': [prune_to_depth(child, max_depth - 1) for child in node.children]
    })


def prune_snapshot_to_depth(node: Dict[str, Any], max_depth: int) -> Dict[str, Any]:
    """Та же обрезка для дерева-словаря из высокоуровневого снимка"""
    pruned = {key: value for key, value in node.items() if key != 'children'}
    children = node.get('children')
    if max_depth <= 1 or not children:
        return pruned

    pruned['children'] = [prune_snapshot_to_depth(child, max_depth - 1) for child in children]
    return pruned


def count_nodes(node: AXNodeSummary) -> int:
    """Количество узлов в дереве"""
    if not node.children:
        return 1
    return 1 + sum(count_nodes(child) for child in node.children)


def count_snapshot_nodes(node: Dict[str, Any]) -> int:
    """Количество узлов в дереве-снимке"""
    children = node.get('children')
    if not children:
        return 1
    return 1 + sum(count_snapshot_nodes(child) for child in children)


def find_node(node: AXNodeSummary,
              predicate: Callable[[AXNodeSummary], bool]) -> Optional[AXNodeSummary]:
    """Первый узел, удовлетворяющий предикату (обход в глубину)"""
    if predicate(node):
        return node
    for child in node.children or []:
        found = find_node(child, predicate)
        if found is not None:
            return found
    return None


def find_all_nodes(node: AXNodeSummary,
                   predicate: Callable[[AXNodeSummary], bool]) -> List[AXNodeSummary]:
    """Все узлы, удовлетворяющие предикату, в порядке обхода в глубину"""
    results = [node] if predicate(node) else []
    for child in node.children or []:
        results.extend(find_all_nodes(child, predicate))
    return results


def build_tree(nodes: Sequence[RawAXNode], max_depth: int = 10,
               interesting_only: bool = True) -> Optional[AXNodeSummary]:
    """Фильтрация, выбор корня, сборка и обрезка дерева за один вызов.

    Возвращает None, если корень не найден.
    """
    filtered = filter_ignored(nodes) if interesting_only else list(nodes)

    root = find_root(filtered)
    if root is None:
        logger.info("No root node found in accessibility tree")
        return None

    index = build_tree_index(filtered)
    assembled = assemble_tree(root, index, 0, max_depth)
    return prune_to_depth(assembled, max_depth)
