"""
Ошибки AX Inspector

Иерархия исключений слоя инструментов и построители ответов-конвертов.
"""

from typing import Any, Dict, Optional


class AXInspectorError(Exception):
    """Базовая ошибка AX Inspector"""


class BrowserNotConnectedError(AXInspectorError):
    """Нет CDP сессии"""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or (
            "Browser is not connected. Connect to Chrome first. "
            "Make sure Chrome is running with --remote-debugging-port=9222."
        ))


class InvalidQueryError(AXInspectorError):
    """Некорректные параметры запроса"""


class ElementNotFoundError(AXInspectorError):
    """Элемент не найден"""


class CDPCommandError(AXInspectorError):
    """Ошибка выполнения CDP команды"""

    def __init__(self, method: str, reason: Any):
        self.method = method
        self.reason = reason
        super().__init__(f"CDP command {method} failed: {reason}")


def tool_success(data: Any) -> Dict[str, Any]:
    """Успешный ответ инструмента"""
    return {"success": True, "data": data}


def tool_error(error: Any) -> Dict[str, Any]:
    """Ответ инструмента с ошибкой"""
    return {"success": False, "error": f"Error: {error}"}
