"""
MCP сервер для AX Inspector

Регистрирует инструменты AX Inspector на FastMCP сервере. Сервер получает
корутину, возвращающую текущую CDP сессию (или None, если браузер не
подключен). При запуске через main() подключением управляет BrowserManager.
"""

import logging
from typing import Awaitable, Callable, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .browser import BrowserManager
from .cdp_client import CDPSession
from .config import AXInspectorConfig, configure_logging, load_config_from_env
from .errors import tool_error, tool_success
from .mcp_tools import MCPAccessibilityTools


SessionProvider = Callable[[], Awaitable[Optional[CDPSession]]]


def build_server(session_provider: SessionProvider,
                 config: Optional[AXInspectorConfig] = None,
                 browser: Optional[BrowserManager] = None) -> FastMCP:
    """Создание FastMCP сервера с инструментами AX Inspector"""
    config = config or AXInspectorConfig()
    configure_logging(config)

    tools = MCPAccessibilityTools(config)
    mcp = FastMCP(name=config.server.name)
    logging.getLogger("MCPServer").info(f"Registering AX Inspector tools on '{config.server.name}'")

    @mcp.tool()
    async def get_accessibility_tree(interestingOnly: Optional[bool] = None,
                                     maxDepth: Optional[int] = None,
                                     useFullTree: Optional[bool] = None) -> Dict:
        """Get the accessibility tree of the current page, limited to maxDepth levels.

        Args:
          interestingOnly: prune ignored nodes (default from config, true)
          maxDepth: maximum tree depth to return (default 10)
          useFullTree: use CDP Accessibility.getFullAXTree instead of the page snapshot
        """
        return await tools.get_accessibility_tree(
            await session_provider(), interestingOnly, maxDepth, useFullTree
        )

    @mcp.tool()
    async def query_accessibility_tree(role: Optional[str] = None,
                                       accessibleName: Optional[str] = None,
                                       backendNodeId: Optional[int] = None) -> Dict:
        """Find accessibility nodes by ARIA role and/or accessible name."""
        return await tools.query_accessibility_tree(
            await session_provider(), role, accessibleName, backendNodeId
        )

    @mcp.tool()
    async def get_interactive_elements(roles: Optional[List[str]] = None,
                                       includeDisabled: Optional[bool] = None,
                                       maxElements: Optional[int] = None) -> Dict:
        """List interactive elements with DOM attributes and suggested test selectors."""
        return await tools.get_interactive_elements(
            await session_provider(), roles, includeDisabled, maxElements
        )

    @mcp.tool()
    async def get_element_properties(selector: str, includeHtml: bool = False) -> Dict:
        """Get accessibility properties and suggested selectors for the element matching a CSS selector."""
        return await tools.get_element_properties(await session_provider(), selector, includeHtml)

    @mcp.tool()
    async def get_focused_element() -> Dict:
        """Get the currently focused element with its suggested selectors."""
        return await tools.get_focused_element(await session_provider())

    if browser is not None:
        _register_browser_tools(mcp, browser)

    return mcp


def _register_browser_tools(mcp: FastMCP, browser: BrowserManager):
    logger = logging.getLogger("MCPServer")

    @mcp.tool()
    async def browser_connect(cdpUrl: Optional[str] = None) -> Dict:
        """Connect to a running Chrome started with --remote-debugging-port (default http://localhost:9222)."""
        try:
            return tool_success(await browser.connect(cdpUrl))
        except Exception as e:
            logger.error(f"Browser connection failed: {e}")
            return tool_error(e)

    @mcp.tool()
    async def browser_disconnect() -> Dict:
        """Disconnect from the browser without closing it."""
        try:
            await browser.disconnect()
        except Exception as e:
            logger.error(f"Browser disconnect failed: {e}")
            return tool_error(e)
        return tool_success({'connected': False})


def main():
    """Запуск MCP сервера (stdio)"""
    config = load_config_from_env()
    browser = BrowserManager(config.server.cdp_url)

    async def current_session() -> Optional[CDPSession]:
        return browser.session()

    build_server(current_session, config, browser).run()


if __name__ == "__main__":
    main()
