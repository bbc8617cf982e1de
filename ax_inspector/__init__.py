"""
AX Inspector Package

Пакет для анализа Accessibility Tree через Chrome DevTools Protocol (CDP):
сборка дерева из плоского списка узлов и генерация стабильных
селекторов для фреймворков автотестирования.
"""

from .attributes import parse_attributes
from .accessibility_parser import AccessibilityParser, filter_ignored, summarize_node
from .tree_builder import (
    build_tree_index, find_root, assemble_tree, prune_to_depth,
    prune_snapshot_to_depth, count_nodes, find_node, find_all_nodes, build_tree
)
from .selector_generator import build_selector_from_raw_node
from .element_resolver import (
    ResolvedDomDetail, DegradedDomDetail, select_interactive_nodes,
    resolve_dom_details, resolve_elements
)
from .cdp_client import CDPSession
from .browser import BrowserManager
from .inspector import AccessibilityInspector
from .mcp_tools import MCPAccessibilityTools
from .types import (
    AXValue, AXProperty, RawAXNode, AXNodeSummary, DomNodeDescription,
    Stability, SuggestedSelectors, ElementResult
)
from .errors import (
    AXInspectorError, BrowserNotConnectedError, InvalidQueryError,
    ElementNotFoundError, CDPCommandError
)
from .config import (
    AXInspectorConfig, TreeConfig, InteractiveConfig, ServerConfig,
    load_config_from_env, configure_logging
)

__version__ = "0.1.0"

__all__ = [
    "parse_attributes",
    "AccessibilityParser",
    "filter_ignored",
    "summarize_node",
    "build_tree_index",
    "find_root",
    "assemble_tree",
    "prune_to_depth",
    "prune_snapshot_to_depth",
    "count_nodes",
    "find_node",
    "find_all_nodes",
    "build_tree",
    "build_selector_from_raw_node",
    "ResolvedDomDetail",
    "DegradedDomDetail",
    "select_interactive_nodes",
    "resolve_dom_details",
    "resolve_elements",
    "CDPSession",
    "BrowserManager",
    "AccessibilityInspector",
    "MCPAccessibilityTools",
    "AXValue",
    "AXProperty",
    "RawAXNode",
    "AXNodeSummary",
    "DomNodeDescription",
    "Stability",
    "SuggestedSelectors",
    "ElementResult",
    "AXInspectorError",
    "BrowserNotConnectedError",
    "InvalidQueryError",
    "ElementNotFoundError",
    "CDPCommandError",
    "AXInspectorConfig",
    "TreeConfig",
    "InteractiveConfig",
    "ServerConfig",
    "load_config_from_env",
    "configure_logging"
]
