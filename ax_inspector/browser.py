"""
Подключение к браузеру через Playwright

Подключается к уже запущенному Chrome (--remote-debugging-port) по CDP,
берет последнюю открытую вкладку и создает для нее CDPSession.
Процесс браузера не принадлежит нам: при отключении он не закрывается.
"""

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from playwright.async_api import async_playwright

from .cdp_client import CDPSession
from .errors import BrowserNotConnectedError

if TYPE_CHECKING:
    from playwright.async_api import Browser, CDPSession as PlaywrightCDPSession, Page, Playwright


DEFAULT_CDP_URL = "http://localhost:9222"


class BrowserManager:
    """Состояние подключения к одному браузеру"""

    def __init__(self, cdp_url: str = DEFAULT_CDP_URL):
        self.cdp_url = cdp_url
        self._pw: Optional["Playwright"] = None
        self._browser: Optional["Browser"] = None
        self._page: Optional["Page"] = None
        self._cdp: Optional["PlaywrightCDPSession"] = None
        self._session: Optional[CDPSession] = None
        self.logger = logging.getLogger("BrowserManager")

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    async def connect(self, cdp_url: Optional[str] = None) -> Dict[str, Any]:
        """Подключение к браузеру; предыдущее подключение закрывается"""
        if self._session is not None:
            await self.disconnect()
        if cdp_url:
            self.cdp_url = cdp_url

        self.logger.info(f"Connecting to browser at {self.cdp_url}")
        self._pw = await async_playwright().start()
        try:
            self._browser = await self._pw.chromium.connect_over_cdp(self.cdp_url)
            pages = [page for context in self._browser.contexts for page in context.pages]
            if not pages:
                raise BrowserNotConnectedError("No pages found in the connected browser. Open a tab first.")

            # Последняя вкладка, как правило, активна
            self._page = pages[-1]
            self._cdp = await self._page.context.new_cdp_session(self._page)
            await self._cdp.send("Accessibility.enable")
        except Exception:
            await self._release()
            raise

        self._session = CDPSession(self._cdp.send)
        self.logger.info(f"Connected to {self._page.url}")
        return {'cdpUrl': self.cdp_url, 'url': self._page.url, 'title': await self._page.title()}

    async def disconnect(self):
        """Отключение от браузера без закрытия его процесса"""
        if self._session is None and self._pw is None:
            return
        await self._release()
        self.logger.info("Disconnected from browser")

    async def _release(self):
        try:
            if self._cdp is not None:
                try:
                    await self._cdp.detach()
                except Exception as e:
                    self.logger.debug(f"CDP session detach failed: {e}")
            if self._browser is not None:
                # для connect_over_cdp close() только разрывает соединение
                try:
                    await self._browser.close()
                except Exception as e:
                    self.logger.warning(f"Browser connection close failed: {e}")
            if self._pw is not None:
                try:
                    await self._pw.stop()
                except Exception as e:
                    self.logger.warning(f"Playwright stop failed: {e}")
        finally:
            self._pw = self._browser = self._page = self._cdp = None
            self._session = None

    def session(self) -> Optional[CDPSession]:
        """Текущая CDP сессия или None"""
        return self._session

