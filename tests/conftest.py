from typing import Any, Dict, List, Optional

import pytest

from ax_inspector.cdp_client import CDPSession
from ax_inspector.types import RawAXNode


def ax_node(node_id: str, role: Optional[str] = None, name: Optional[str] = None,
            parent: Optional[str] = None, children: Optional[List[str]] = None,
            ignored: bool = False, backend: Optional[int] = None,
            properties: Optional[Dict[str, Any]] = None, **extra) -> Dict[str, Any]:
    """Raw CDP AX node dict as returned by Accessibility.getFullAXTree"""
    data: Dict[str, Any] = {'nodeId': node_id, 'ignored': ignored}
    if role is not None:
        data['role'] = {'type': 'role', 'value': role}
    if name is not None:
        data['name'] = {'type': 'computedString', 'value': name}
    if parent is not None:
        data['parentId'] = parent
    if children is not None:
        data['childIds'] = children
    if backend is not None:
        data['backendDOMNodeId'] = backend
    if properties is not None:
        data['properties'] = [
            {'name': key, 'value': {'type': 'booleanOrUndefined', 'value': value}}
            for key, value in properties.items()
        ]
    data.update(extra)
    return data


def raw(node_id: str, **kwargs) -> RawAXNode:
    return RawAXNode.model_validate(ax_node(node_id, **kwargs))


class FakeCDP:
    """In-memory CDP transport: canned responses keyed by method name"""

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses = responses or {}
        self.calls: List[tuple] = []

    async def send(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append((method, params))
        response = self.responses.get(method)
        if response is None:
            raise RuntimeError(f"No response configured for {method}")
        if callable(response):
            response = response(params)
        if isinstance(response, Exception):
            raise response
        return response

    def methods(self) -> List[str]:
        return [method for method, _ in self.calls]


@pytest.fixture
def page_nodes() -> List[Dict[str, Any]]:
    """Small page: root -> main -> (heading, button, ignored div -> link)"""
    return [
        ax_node('1', role='RootWebArea', name='Shop', children=['2'], backend=1),
        ax_node('2', role='main', parent='1', children=['3', '4', '5'], backend=2),
        ax_node('3', role='heading', name='Products', parent='2', backend=3,
                properties={'level': 2}),
        ax_node('4', role='button', name='Buy', parent='2', backend=4,
                properties={'focused': True}),
        ax_node('5', role='generic', parent='2', children=['6'], ignored=True, backend=5),
        ax_node('6', role='link', name='Hidden link', parent='5', backend=6),
    ]


@pytest.fixture
def fake_cdp():
    return FakeCDP()


@pytest.fixture
def session(fake_cdp):
    return CDPSession(fake_cdp.send, target_id='tab-1')
