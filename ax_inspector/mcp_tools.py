"""
MCP Tools для AX Inspector

Инструменты для интеграции AccessibilityInspector в MCP сервер:
проверка аргументов, значения по умолчанию из конфигурации и
ответы-конверты {"success": ..., "data"/"error": ...}.
"""

import logging
from typing import Any, Dict, List, Optional

from .cdp_client import CDPSession
from .config import AXInspectorConfig
from .errors import InvalidQueryError, tool_error, tool_success
from .inspector import AccessibilityInspector


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidQueryError(f'"{name}" must be a positive integer, got {value!r}')
    return value


class MCPAccessibilityTools:
    """MCP инструменты для AX Inspector"""

    def __init__(self, config: Optional[AXInspectorConfig] = None,
                 inspector: Optional[AccessibilityInspector] = None):
        self.config = config or AXInspectorConfig()
        self.inspector = inspector or AccessibilityInspector()
        self.logger = logging.getLogger("MCPAccessibilityTools")

        # Статистика использования
        self._usage_stats = {
            'total_calls': 0,
            'successful_calls': 0,
            'failed_calls': 0
        }

    async def _run(self, tool_name: str, operation) -> Dict[str, Any]:
        """Выполнение операции с упаковкой результата в конверт"""
        self._usage_stats['total_calls'] += 1
        try:
            data = await operation()
        except Exception as e:
            self.logger.error(f"Tool {tool_name} failed: {e}")
            self._usage_stats['failed_calls'] += 1
            return tool_error(e)

        self._usage_stats['successful_calls'] += 1
        return tool_success(data)

    async def get_accessibility_tree(self, session: Optional[CDPSession],
                                     interesting_only: Optional[bool] = None,
                                     max_depth: Optional[int] = None,
                                     use_full_tree: Optional[bool] = None) -> Dict[str, Any]:
        """Дерево доступности страницы"""
        tree_config = self.config.tree

        async def operation():
            return await self.inspector.get_accessibility_tree(
                session,
                interesting_only=tree_config.interesting_only if interesting_only is None else interesting_only,
                max_depth=_positive_int('maxDepth', tree_config.max_depth if max_depth is None else max_depth),
                use_full_tree=tree_config.use_full_tree if use_full_tree is None else use_full_tree,
            )

        return await self._run('get_accessibility_tree', operation)

    async def query_accessibility_tree(self, session: Optional[CDPSession],
                                       role: Optional[str] = None,
                                       accessible_name: Optional[str] = None,
                                       backend_node_id: Optional[int] = None) -> Dict[str, Any]:
        """Поиск узлов по роли и/или имени"""
        async def operation():
            return await self.inspector.query_accessibility_tree(
                session, role=role, accessible_name=accessible_name, backend_node_id=backend_node_id
            )

        return await self._run('query_accessibility_tree', operation)

    async def get_interactive_elements(self, session: Optional[CDPSession],
                                       roles: Optional[List[str]] = None,
                                       include_disabled: Optional[bool] = None,
                                       max_elements: Optional[int] = None) -> Dict[str, Any]:
        """Интерактивные элементы с селекторами"""
        interactive_config = self.config.interactive

        async def operation():
            return await self.inspector.get_interactive_elements(
                session,
                roles=roles if roles else interactive_config.roles,
                include_disabled=(interactive_config.include_disabled
                                  if include_disabled is None else include_disabled),
                max_elements=_positive_int(
                    'maxElements', interactive_config.max_elements if max_elements is None else max_elements
                ),
            )

        return await self._run('get_interactive_elements', operation)

    async def get_element_properties(self, session: Optional[CDPSession], selector: str,
                                     include_html: bool = False) -> Dict[str, Any]:
        """Свойства элемента по CSS селектору"""
        async def operation():
            if not selector or not selector.strip():
                raise InvalidQueryError('"selector" must be a non-empty CSS selector')
            return await self.inspector.get_element_properties(session, selector, include_html=include_html)

        return await self._run('get_element_properties', operation)

    async def get_focused_element(self, session: Optional[CDPSession]) -> Dict[str, Any]:
        """Элемент в фокусе"""
        async def operation():
            return await self.inspector.get_focused_element(session)

        return await self._run('get_focused_element', operation)

    def get_usage_stats(self) -> Dict[str, Any]:
        """Получение статистики использования"""
        stats = self._usage_stats.copy()
        if stats['total_calls'] > 0:
            stats['success_rate'] = stats['successful_calls'] / stats['total_calls']
        else:
            stats['success_rate'] = 0.0
        return stats
