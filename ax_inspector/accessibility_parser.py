"""
Accessibility Parser

Парсер ответов CDP Accessibility домена: превращает сырые узлы
в модели RawAXNode и строит канонические сводки узлов.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from .types import AXNodeSummary, AXProperty, AXValue, RawAXNode


UNKNOWN_ROLE = "unknown"

# Свойства, которые переносятся в сводку
BOOLEAN_PROPERTIES = ('focused', 'disabled', 'expanded', 'required')

logger = logging.getLogger("AccessibilityParser")


def _payload(wrapper: Optional[AXValue]) -> Optional[Any]:
    if wrapper is None:
        return None
    return wrapper.value


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def get_property_value(properties: Optional[List[AXProperty]], name: str) -> Optional[Any]:
    """Значение свойства AX узла по имени"""
    if not properties:
        return None
    for prop in properties:
        if prop.name == name:
            return prop.value.value
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return None


def _as_checked(value: Any):
    # CDP отдает checked как tristate: "true" / "false" / "mixed"
    if isinstance(value, str) and value.lower() == "mixed":
        return "mixed"
    return _as_bool(value)


def _as_level(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def summarize_node(node: RawAXNode) -> AXNodeSummary:
    """Каноническая сводка одного AX узла (без дочерних узлов).

    Роль по умолчанию "unknown", имя по умолчанию пустая строка.
    Остальные поля попадают в сводку только если CDP их сообщил.
    """
    role = _payload(node.role)
    name = _payload(node.name)
    description = _payload(node.description)
    value = _payload(node.value)

    fields: Dict[str, Any] = {
        'role': _as_text(role) if role is not None else UNKNOWN_ROLE,
        'name': _as_text(name) if name is not None else "",
        'node_id': node.node_id,
    }

    if description is not None:
        fields['description'] = _as_text(description)

    if value is not None:
        fields['value'] = _as_text(value)

    for prop_name in BOOLEAN_PROPERTIES:
        prop_value = _as_bool(get_property_value(node.properties, prop_name))
        if prop_value is not None:
            fields[prop_name] = prop_value

    checked = _as_checked(get_property_value(node.properties, 'checked'))
    if checked is not None:
        fields['checked'] = checked

    level = _as_level(get_property_value(node.properties, 'level'))
    if level is not None:
        fields['level'] = level

    if node.backend_dom_node_id is not None:
        fields['backend_dom_node_id'] = node.backend_dom_node_id

    return AXNodeSummary(**fields)


def filter_ignored(nodes: Iterable[RawAXNode]) -> List[RawAXNode]:
    """Отбрасывание игнорируемых узлов с сохранением порядка"""
    return [node for node in nodes if not node.ignored]


def node_role(node: RawAXNode) -> str:
    """Роль узла как строка (пустая, если не сообщена)"""
    role = _payload(node.role)
    return _as_text(role) if role is not None else ""


def node_name(node: RawAXNode) -> str:
    """Доступное имя узла как строка (пустая, если не сообщено)"""
    name = _payload(node.name)
    return _as_text(name) if name is not None else ""


class AccessibilityParser:
    """Парсер ответов Accessibility домена CDP"""

    def __init__(self):
        self.logger = logger

    def parse_nodes(self, ax_tree_data: Optional[Dict[str, Any]]) -> List[RawAXNode]:
        """Парсинг списка узлов из ответа getFullAXTree / getPartialAXTree / queryAXTree"""
        if not ax_tree_data or 'nodes' not in ax_tree_data:
            self.logger.warning("Accessibility response has no nodes")
            return []

        parsed_nodes = []
        for node_data in ax_tree_data['nodes'] or []:
            parsed_node = self._parse_single_node(node_data)
            if parsed_node is not None:
                parsed_nodes.append(parsed_node)

        self.logger.debug(f"Parsed {len(parsed_nodes)} accessibility nodes")
        return parsed_nodes

    def _parse_single_node(self, node_data: Dict[str, Any]) -> Optional[RawAXNode]:
        """Парсинг отдельного AX узла"""
        try:
            return RawAXNode.model_validate(node_data)
        except ValidationError as e:
            self.logger.warning(f"Skipping malformed accessibility node: {e.error_count()} validation errors")
            return None
