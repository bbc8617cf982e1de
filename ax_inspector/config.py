"""
Конфигурация AX Inspector

Настройки построения дерева, выборки интерактивных элементов и логирования.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Set


# Роли, которые считаются интерактивными по умолчанию
DEFAULT_INTERACTIVE_ROLES = frozenset({
    'button', 'link', 'textbox', 'searchbox', 'combobox', 'listbox',
    'option', 'checkbox', 'radio', 'switch', 'slider', 'spinbutton',
    'menuitem', 'tab', 'treeitem', 'gridcell', 'rowheader',
    'columnheader', 'progressbar', 'scrollbar'
})

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass
class TreeConfig:
    """Конфигурация построения Accessibility Tree"""
    max_depth: int = 10
    interesting_only: bool = True
    use_full_tree: bool = False


@dataclass
class InteractiveConfig:
    """Конфигурация выборки интерактивных элементов"""
    roles: Set[str] = field(default_factory=lambda: set(DEFAULT_INTERACTIVE_ROLES))
    max_elements: int = 100
    include_disabled: bool = False


@dataclass
class ServerConfig:
    """Конфигурация MCP сервера"""
    name: str = "AX Inspector"
    cdp_url: str = "http://localhost:9222"
    log_level: str = "INFO"
    debug: bool = False


@dataclass
class AXInspectorConfig:
    """Основная конфигурация AX Inspector"""
    tree: TreeConfig = field(default_factory=TreeConfig)
    interactive: InteractiveConfig = field(default_factory=InteractiveConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def _env_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    return raw.lower() in ("1", "true", "yes", "on")


def load_config_from_env() -> AXInspectorConfig:
    """Загрузка конфигурации из переменных окружения"""
    config = AXInspectorConfig()

    # Дерево
    if os.getenv("AX_MAX_DEPTH"):
        config.tree.max_depth = int(os.getenv("AX_MAX_DEPTH"))

    interesting_only = _env_bool("AX_INTERESTING_ONLY")
    if interesting_only is not None:
        config.tree.interesting_only = interesting_only

    use_full_tree = _env_bool("AX_USE_FULL_TREE")
    if use_full_tree is not None:
        config.tree.use_full_tree = use_full_tree

    # Интерактивные элементы
    if os.getenv("AX_MAX_ELEMENTS"):
        config.interactive.max_elements = int(os.getenv("AX_MAX_ELEMENTS"))

    include_disabled = _env_bool("AX_INCLUDE_DISABLED")
    if include_disabled is not None:
        config.interactive.include_disabled = include_disabled

    # Сервер
    if os.getenv("AX_CDP_URL"):
        config.server.cdp_url = os.getenv("AX_CDP_URL")

    # Отладка
    debug = _env_bool("DEBUG")
    if debug is not None:
        config.server.debug = debug

    if os.getenv("LOG_LEVEL"):
        config.server.log_level = os.getenv("LOG_LEVEL")

    return config


def configure_logging(config: Optional[AXInspectorConfig] = None):
    """Настройка логирования по конфигурации"""
    config = config or AXInspectorConfig()
    level = logging.DEBUG if config.server.debug else config.server.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)

