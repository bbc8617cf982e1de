"""
Accessibility Inspector

Основные операции над Accessibility Tree страницы: дерево, запрос узлов,
интерактивные элементы, свойства элемента и элемент в фокусе.
Сессия CDP передается в каждую операцию явно.
"""

import logging
import time
from typing import Any, Dict, Iterable, Optional

from .accessibility_parser import (
    UNKNOWN_ROLE, filter_ignored, get_property_value, node_name, node_role, summarize_node
)
from .attributes import parse_attributes
from .cdp_client import CDPSession
from .element_resolver import resolve_elements, select_interactive_nodes, INTERACTIVE_ROLES
from .errors import (
    BrowserNotConnectedError, CDPCommandError, ElementNotFoundError, InvalidQueryError
)
from .selector_generator import build_selector_from_raw_node
from .tree_builder import (
    build_tree, count_nodes, count_snapshot_nodes, prune_snapshot_to_depth
)


class AccessibilityInspector:
    """Анализатор Accessibility Tree страницы"""

    def __init__(self):
        self.logger = logging.getLogger("AccessibilityInspector")

    @staticmethod
    def _require_session(session: Optional[CDPSession]) -> CDPSession:
        if session is None:
            raise BrowserNotConnectedError()
        return session

    async def get_accessibility_tree(self, session: Optional[CDPSession],
                                     interesting_only: bool = True, max_depth: int = 10,
                                     use_full_tree: bool = False) -> Dict[str, Any]:
        """Дерево доступности страницы с ограничением глубины"""
        session = self._require_session(session)
        start_time = time.time()

        try:
            if not use_full_tree and not session.has_snapshot:
                self.logger.debug("Snapshot provider unavailable, using full CDP tree")
                use_full_tree = True

            if use_full_tree:
                nodes = await session.get_full_ax_tree()
                tree = build_tree(nodes, max_depth=max_depth, interesting_only=interesting_only)
                if tree is None:
                    return {
                        'tree': None,
                        'nodeCount': 0,
                        'message': 'No root node found in accessibility tree.',
                    }
                tree_data = tree.to_dict()
                node_count = count_nodes(tree)
            else:
                snapshot = await session.accessibility_snapshot(interesting_only)
                if not snapshot:
                    return {
                        'tree': None,
                        'nodeCount': 0,
                        'message': 'Accessibility snapshot returned null. The page may not have loaded.',
                    }
                tree_data = prune_snapshot_to_depth(snapshot, max_depth)
                node_count = count_snapshot_nodes(tree_data)

            page_info = await session.get_page_info()

            self.logger.info(f"Accessibility tree built in {time.time() - start_time:.3f}s, "
                             f"{node_count} nodes")
            return {
                'url': page_info['url'],
                'title': page_info['title'],
                'nodeCount': node_count,
                'maxDepth': max_depth,
                'interestingOnly': interesting_only,
                'tree': tree_data,
            }

        except Exception as e:
            self.logger.error(f"Error getting accessibility tree: {e}")
            raise

    async def query_accessibility_tree(self, session: Optional[CDPSession],
                                       role: Optional[str] = None,
                                       accessible_name: Optional[str] = None,
                                       backend_node_id: Optional[int] = None) -> Dict[str, Any]:
        """Поиск узлов по роли и/или доступному имени"""
        session = self._require_session(session)

        if not role and not accessible_name:
            raise InvalidQueryError('At least one of "role" or "accessibleName" must be provided.')

        try:
            scope_id = backend_node_id
            if scope_id is None:
                # Без явного узла ищем от корня документа
                document = await session.get_document()
                scope_id = document.backend_node_id

            nodes = await session.query_ax_tree(scope_id, role=role, accessible_name=accessible_name)
            summaries = [summarize_node(node).to_dict() for node in filter_ignored(nodes)]

            self.logger.info(f"Query role={role!r} name={accessible_name!r} matched {len(summaries)} nodes")
            return {
                'query': {
                    'role': role,
                    'accessibleName': accessible_name,
                    'backendNodeId': backend_node_id,
                },
                'count': len(summaries),
                'nodes': summaries,
            }

        except Exception as e:
            self.logger.error(f"Error querying accessibility tree: {e}")
            raise

    async def get_interactive_elements(self, session: Optional[CDPSession],
                                       roles: Optional[Iterable[str]] = None,
                                       include_disabled: bool = False,
                                       max_elements: int = 100) -> Dict[str, Any]:
        """Интерактивные элементы с DOM атрибутами и селекторами"""
        session = self._require_session(session)
        start_time = time.time()

        try:
            target_roles = {r.lower() for r in roles} if roles is not None else set(INTERACTIVE_ROLES)

            nodes = await session.get_full_ax_tree()
            interactive_nodes = select_interactive_nodes(nodes, target_roles, include_disabled)
            limited = interactive_nodes[:max_elements]

            elements = await resolve_elements(limited, session.resolve_node)

            self.logger.info(f"Resolved {len(elements)} of {len(interactive_nodes)} interactive elements "
                             f"in {time.time() - start_time:.3f}s")
            return {
                'totalFound': len(interactive_nodes),
                'returned': len(elements),
                'maxElements': max_elements,
                'roles': sorted(target_roles),
                'elements': [element.to_dict() for element in elements],
            }

        except Exception as e:
            self.logger.error(f"Error getting interactive elements: {e}")
            raise

    async def get_element_properties(self, session: Optional[CDPSession], selector: str,
                                     include_html: bool = False) -> Dict[str, Any]:
        """Свойства элемента, найденного по CSS селектору"""
        session = self._require_session(session)

        try:
            document = await session.get_document()
            node_id = await session.query_selector(document.node_id, selector)
            if node_id is None:
                raise ElementNotFoundError(f'No element found matching selector: "{selector}"')

            dom_node = await session.describe_node(node_id=node_id)
            backend_node_id = dom_node.backend_node_id
            tag_name = dom_node.local_name

            ax_nodes = await session.get_partial_ax_tree(backend_node_id)
            non_ignored = filter_ignored(ax_nodes)
            primary = non_ignored[0] if non_ignored else (ax_nodes[0] if ax_nodes else None)

            ax_summary = None
            suggested_selectors = None
            if primary is not None:
                ax_summary = summarize_node(primary).to_dict()
                suggested_selectors = build_selector_from_raw_node(
                    node_name(primary), node_role(primary), tag_name, dom_node.attributes
                ).to_dict()

            result = {
                'selector': selector,
                'tagName': tag_name,
                'domAttributes': parse_attributes(dom_node.attributes),
                'backendNodeId': backend_node_id,
                'accessibility': ax_summary,
                'suggestedSelectors': suggested_selectors,
            }

            if include_html:
                try:
                    result['outerHTML'] = await session.get_outer_html(backend_node_id)
                except CDPCommandError as e:
                    self.logger.warning(f"Outer HTML unavailable for {selector!r}: {e}")

            return result

        except Exception as e:
            self.logger.error(f"Error getting element properties for {selector!r}: {e}")
            raise

    async def get_focused_element(self, session: Optional[CDPSession]) -> Dict[str, Any]:
        """Элемент, находящийся в фокусе"""
        session = self._require_session(session)

        try:
            nodes = await session.get_full_ax_tree()
            # Ищем по плоскому списку: фокус может быть под игнорируемой обёрткой
            focused_node = next(
                (n for n in nodes if not n.ignored and get_property_value(n.properties, 'focused') is True),
                None
            )
            focused = summarize_node(focused_node) if focused_node is not None else None

            if focused is None:
                return {
                    'focused': None,
                    'message': 'No element is currently focused.',
                }

            result = focused.to_dict()

            if focused.backend_dom_node_id is not None:
                try:
                    dom_node = await session.resolve_node(focused.backend_dom_node_id)
                except CDPCommandError as e:
                    # DOM данные недоступны: возвращаем то, что есть в AX дереве
                    self.logger.warning(f"DOM info unavailable for focused node: {e}")
                else:
                    role = focused.role if focused.role != UNKNOWN_ROLE else ''
                    result['tagName'] = dom_node.local_name
                    result['domAttributes'] = parse_attributes(dom_node.attributes)
                    result['suggestedSelectors'] = build_selector_from_raw_node(
                        focused.name, role, dom_node.local_name, dom_node.attributes
                    ).to_dict()

            return {'focused': result}

        except Exception as e:
            self.logger.error(f"Error getting focused element: {e}")
            raise
