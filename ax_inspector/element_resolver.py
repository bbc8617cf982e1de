"""
Element Resolver

Выборка интерактивных AX узлов и параллельное получение DOM данных
(тег и атрибуты) для построения селекторов. Неудачный запрос по одному
узлу превращается в деградированный результат и не влияет на остальные.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence, Union

from .accessibility_parser import get_property_value, node_name, node_role, summarize_node
from .attributes import parse_attributes
from .config import DEFAULT_INTERACTIVE_ROLES
from .selector_generator import build_selector_from_raw_node
from .types import DomNodeDescription, ElementResult, RawAXNode


UNKNOWN_TAG = "unknown"

INTERACTIVE_ROLES = DEFAULT_INTERACTIVE_ROLES

logger = logging.getLogger("ElementResolver")

DomResolver = Callable[[int], Awaitable[DomNodeDescription]]


@dataclass(frozen=True)
class ResolvedDomDetail:
    """DOM данные получены"""
    tag_name: str
    raw_attributes: Optional[List[str]]
    degraded: bool = False


@dataclass(frozen=True)
class DegradedDomDetail:
    """DOM данные недоступны: тег неизвестен, атрибутов нет"""
    reason: str
    tag_name: str = UNKNOWN_TAG
    raw_attributes: Optional[List[str]] = None
    degraded: bool = True


DomDetail = Union[ResolvedDomDetail, DegradedDomDetail]


def select_interactive_nodes(nodes: Iterable[RawAXNode],
                             roles: Optional[Iterable[str]] = None,
                             include_disabled: bool = False) -> List[RawAXNode]:
    """Неигнорируемые узлы с интерактивной ролью (порядок сохраняется)"""
    target_roles = {role.lower() for role in roles} if roles is not None else INTERACTIVE_ROLES

    selected = []
    for node in nodes:
        if node.ignored:
            continue

        if node_role(node).lower() not in target_roles:
            continue

        # Отключенные элементы пропускаем, если не запрошены явно
        if not include_disabled and get_property_value(node.properties, 'disabled') is True:
            continue

        selected.append(node)

    return selected


async def _resolve_one(node: RawAXNode, resolver: DomResolver) -> DomDetail:
    if node.backend_dom_node_id is None:
        return DegradedDomDetail(reason="no backend DOM node id")

    try:
        description = await resolver(node.backend_dom_node_id)
    except Exception as e:
        # DOM.describeNode падает, например, для отсоединенных узлов
        logger.warning(f"DOM lookup failed for node {node.node_id} "
                       f"(backend {node.backend_dom_node_id}): {e}")
        return DegradedDomDetail(reason=str(e))

    return ResolvedDomDetail(tag_name=description.local_name, raw_attributes=description.attributes)


async def resolve_dom_details(nodes: Sequence[RawAXNode], resolver: DomResolver) -> List[DomDetail]:
    """DOM данные для каждого узла, в порядке входного списка"""
    return list(await asyncio.gather(*(_resolve_one(node, resolver) for node in nodes)))


def build_element_result(node: RawAXNode, detail: DomDetail) -> ElementResult:
    """Элемент с AX сводкой, DOM атрибутами и селекторами"""
    role = node_role(node)
    name = node_name(node)

    result = ElementResult(
        role=role,
        name=name,
        node_id=node.node_id,
        backend_dom_node_id=node.backend_dom_node_id,
        ax_properties=summarize_node(node),
        suggested_selectors=build_selector_from_raw_node(
            name, role, detail.tag_name, detail.raw_attributes
        ),
    )

    if not detail.degraded:
        result.tag_name = detail.tag_name
        result.dom_attributes = parse_attributes(detail.raw_attributes)

    return result


async def resolve_elements(nodes: Sequence[RawAXNode], resolver: DomResolver) -> List[ElementResult]:
    """Элементы с селекторами для списка узлов"""
    details = await resolve_dom_details(nodes, resolver)
    degraded = sum(1 for detail in details if detail.degraded)
    if degraded:
        logger.info(f"Resolved {len(details) - degraded} of {len(details)} elements, {degraded} degraded")
    return [build_element_result(node, detail) for node, detail in zip(nodes, details)]
