"""
CDP Session

Явная сессия Chrome DevTools Protocol. Подключение к браузеру и транспорт
остаются за вызывающей стороной: сессия получает готовую корутину
send(method, params) и предоставляет типизированные запросы
Accessibility и DOM доменов.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .accessibility_parser import AccessibilityParser
from .errors import CDPCommandError
from .types import DomNodeDescription, RawAXNode


SendFn = Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]
SnapshotFn = Callable[[bool], Awaitable[Optional[Dict[str, Any]]]]


class CDPSession:
    """CDP сессия для конкретной вкладки"""

    def __init__(self, send: SendFn, snapshot: Optional[SnapshotFn] = None,
                 target_id: Optional[str] = None):
        self._send = send
        self._snapshot = snapshot
        self.target_id = target_id
        self.parser = AccessibilityParser()
        self.logger = logging.getLogger(f"CDPSession-{target_id}" if target_id else "CDPSession")

    async def send(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Выполнение CDP команды"""
        try:
            result = await self._send(method, params or {})
        except CDPCommandError:
            raise
        except Exception as e:
            self.logger.debug(f"{method} failed: {e}")
            raise CDPCommandError(method, e) from e
        return result or {}

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    async def accessibility_snapshot(self, interesting_only: bool = True) -> Optional[Dict[str, Any]]:
        """Высокоуровневый снимок Accessibility Tree (если доступен)"""
        if self._snapshot is None:
            return None
        return await self._snapshot(interesting_only)

    async def get_full_ax_tree(self) -> List[RawAXNode]:
        """Accessibility.getFullAXTree"""
        result = await self.send('Accessibility.getFullAXTree', {})
        return self.parser.parse_nodes(result)

    async def get_partial_ax_tree(self, backend_node_id: int, fetch_relatives: bool = False) -> List[RawAXNode]:
        """Accessibility.getPartialAXTree для одного DOM узла"""
        result = await self.send('Accessibility.getPartialAXTree', {
            'backendNodeId': backend_node_id,
            'fetchRelatives': fetch_relatives,
        })
        return self.parser.parse_nodes(result)

    async def query_ax_tree(self, backend_node_id: int, role: Optional[str] = None,
                            accessible_name: Optional[str] = None) -> List[RawAXNode]:
        """Accessibility.queryAXTree в поддереве DOM узла"""
        params: Dict[str, Any] = {'backendNodeId': backend_node_id}
        if role:
            params['role'] = role
        if accessible_name:
            params['accessibleName'] = accessible_name

        result = await self.send('Accessibility.queryAXTree', params)
        return self.parser.parse_nodes(result)

    async def get_document(self) -> DomNodeDescription:
        """DOM.getDocument (только корень)"""
        result = await self.send('DOM.getDocument', {'depth': 0})
        return DomNodeDescription.model_validate(result.get('root', {}))

    async def query_selector(self, node_id: int, selector: str) -> Optional[int]:
        """DOM.querySelector: nodeId найденного элемента или None"""
        result = await self.send('DOM.querySelector', {'nodeId': node_id, 'selector': selector})
        found = result.get('nodeId')
        return found or None

    async def describe_node(self, backend_node_id: Optional[int] = None,
                            node_id: Optional[int] = None) -> DomNodeDescription:
        """DOM.describeNode по backendNodeId или nodeId"""
        params: Dict[str, Any] = {'depth': 0}
        if backend_node_id is not None:
            params['backendNodeId'] = backend_node_id
        if node_id is not None:
            params['nodeId'] = node_id

        result = await self.send('DOM.describeNode', params)
        return DomNodeDescription.model_validate(result.get('node', {}))

    async def resolve_node(self, backend_node_id: int) -> DomNodeDescription:
        """Резолвер DOM данных для ElementResolver"""
        return await self.describe_node(backend_node_id=backend_node_id)

    async def get_outer_html(self, backend_node_id: int) -> str:
        """DOM.getOuterHTML"""
        result = await self.send('DOM.getOuterHTML', {'backendNodeId': backend_node_id})
        return result.get('outerHTML', '')

    async def get_page_info(self) -> Dict[str, str]:
        """URL и заголовок страницы (пустые строки, если недоступны)"""
        try:
            result = await self.send('Target.getTargetInfo', {})
        except CDPCommandError as e:
            self.logger.debug(f"Page info unavailable: {e}")
            return {'url': '', 'title': ''}

        target_info = result.get('targetInfo', {})
        return {
            'url': target_info.get('url', ''),
            'title': target_info.get('title', ''),
        }
