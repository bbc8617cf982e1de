"""
Selector Generator

Построение набора локаторов для Playwright, Selenium, Cypress, WebdriverIO
и Puppeteer по роли, доступному имени, тегу и DOM атрибутам элемента.

Приоритет:
    1. data-testid / data-cy / data-test / data-qa  ->  high
    2. стабильный id (не UUID / не числовой / не mat- / не ng-)  ->  high
    3. роль + доступное имя  ->  medium
    4. семантический CSS (тег + type/name/role/placeholder)  ->  low
"""

import logging
import re
from typing import Dict, Optional, Sequence

from .attributes import parse_attributes
from .types import Stability, SuggestedSelectors


logger = logging.getLogger("SelectorGenerator")

TEST_ID_ATTRS = ('data-testid', 'data-cy', 'data-test', 'data-qa')
CANONICAL_TEST_ID = 'data-testid'

# Автоматически сгенерированные id, которые не стоит использовать
UNSTABLE_ID_RE = re.compile(r'^(mat-|ng-|[0-9]|[a-f0-9]{8}-)', re.IGNORECASE)

SEMANTIC_ATTRS = ('type', 'name', 'role', 'placeholder')

# Роли CDP, которые называются иначе в ARIA
ROLE_MAP = {
    'image': 'img',
    'ToggleButton': 'button',
    'DisclosureTriangle': 'button',
    'PopUpButton': 'combobox',
    'MenuListPopup': 'listbox',
    'MenuListOption': 'option',
    'RootWebArea': 'document',
}


def escape_str(value: str) -> str:
    """Экранирование обратной косой черты и обоих видов кавычек"""
    return value.replace('\\', '\\\\').replace("'", "\\'").replace('"', '\\"')


def _literal(value: str) -> str:
    # строковый литерал JS / Python в одинарных кавычках
    return f"'{escape_str(value)}'"


def _wrap(expression: str) -> str:
    # готовое выражение селектора внутри литерала в одинарных кавычках
    return "'" + expression.replace('\\', '\\\\').replace("'", "\\'") + "'"


def _css_ident(value: str) -> str:
    """Экранирование идентификатора CSS (аналог CSS.escape)"""
    out = []
    for i, char in enumerate(value):
        code = ord(char)
        if code == 0:
            out.append('\ufffd')
        elif code < 0x20 or code == 0x7f:
            # управляющие символы только в шестнадцатеричном виде
            out.append(f'\\{code:x} ')
        elif char.isdigit() and (i == 0 or (i == 1 and value[0] == '-')):
            out.append(f'\\{code:x} ')
        elif char.isalnum() or char in '-_' or code >= 0x80:
            out.append(char)
        else:
            out.append('\\' + char)
    return ''.join(out)


def xpath_literal(value: str) -> str:
    """Строковый литерал XPath 1.0 (без escape-последовательностей)"""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def map_role(role: str) -> str:
    """Роль CDP -> роль, понятная фреймворкам"""
    return ROLE_MAP.get(role, role)


def build_aria_selector(role: str, name: str) -> str:
    """Playwright role= селектор"""
    aria_role = map_role(role)
    if not name:
        return f'role={aria_role}'
    return f'role={aria_role}[name="{escape_str(name)}"]'


def build_playwright_by_role(role: str, name: str) -> str:
    """page.getByRole(...)"""
    aria_role = map_role(role)
    if not name:
        return f'page.getByRole({_literal(aria_role)})'
    return f'page.getByRole({_literal(aria_role)}, {{ name: {_literal(name)} }})'


def build_puppeteer_aria(role: str, name: str) -> str:
    """Puppeteer ::-p-aria(...) селектор"""
    return f'::-p-aria([name="{escape_str(name)}"][role="{map_role(role)}"])'


def build_xpath(role: str, name: str, tag: str) -> str:
    """XPath по aria-label / title внутри тега"""
    tag = tag or '*'
    if name:
        literal = xpath_literal(name)
        return f'//{tag}[@aria-label={literal} or @title={literal}]'
    return f'//{tag}[@role={xpath_literal(role)}]'


def build_semantic_css(tag: str, attrs: Dict[str, str]) -> str:
    """CSS из тега и полезных атрибутов"""
    parts = [tag or '*']
    for attr in SEMANTIC_ATTRS:
        if attrs.get(attr):
            parts.append(f'[{attr}="{escape_str(attrs[attr])}"]')
    return ''.join(parts)


def is_stable_id(value: Optional[str]) -> bool:
    """id пригоден для локатора (не сгенерирован фреймворком)"""
    return bool(value) and not UNSTABLE_ID_RE.match(value)


def _css_bundle(css: str, stability: Stability, **extra) -> SuggestedSelectors:
    # одинаковый CSS для всех фреймворков
    wrapped = _wrap(css)
    playwright = extra.pop('playwright', f'page.locator({wrapped})')
    return SuggestedSelectors(
        css=css,
        playwright=playwright,
        selenium=extra.pop('selenium', f'driver.find_element(By.CSS_SELECTOR, {wrapped})'),
        cypress=f'cy.get({wrapped})',
        webdriverio=f'$({wrapped})',
        puppeteer=f'page.locator({wrapped})',
        stability=stability,
        recommended=playwright,
        **extra,
    )


def build_selector_from_raw_node(name: str, role: str, tag_name: str,
                                 attributes: Optional[Sequence[str]]) -> SuggestedSelectors:
    """Набор локаторов для узла по его доступному имени, роли и DOM атрибутам"""
    attrs = parse_attributes(attributes)
    tag = (tag_name or '').lower()

    # Приоритет 1: test id атрибуты
    for attr in TEST_ID_ATTRS:
        val = attrs.get(attr)
        if val:
            logger.debug(f"Selector tier test-id via {attr}")
            attr_selector = f'[{attr}="{escape_str(val)}"]'
            extra = {}
            if attr == CANONICAL_TEST_ID:
                extra['playwright'] = f'page.getByTestId({_literal(val)})'
            return _css_bundle(
                attr_selector,
                Stability.HIGH,
                test_id=attr_selector,
                aria=build_aria_selector(role, name) if role else None,
                **extra,
            )

    # Приоритет 2: стабильный id
    id_val = attrs.get('id')
    if is_stable_id(id_val):
        logger.debug("Selector tier stable id")
        id_selector = f'#{_css_ident(id_val)}'
        return _css_bundle(
            id_selector,
            Stability.HIGH,
            id=id_selector,
            aria=build_aria_selector(role, name) if role else None,
            selenium=f'driver.find_element(By.ID, {_literal(id_val)})',
        )

    semantic_css = build_semantic_css(tag, attrs)

    # Приоритет 3: роль + доступное имя
    if name and role:
        logger.debug("Selector tier role+name")
        playwright_by_role = build_playwright_by_role(role, name)
        return SuggestedSelectors(
            aria=build_aria_selector(role, name),
            css=semantic_css,
            playwright=playwright_by_role,
            selenium=f'driver.find_element(By.XPATH, {_wrap(build_xpath(role, name, tag))})',
            cypress=f'cy.get({_wrap(semantic_css)})',
            webdriverio=f'$({_wrap("aria/" + name)})',
            puppeteer=f'page.locator({_wrap(build_puppeteer_aria(role, name))})',
            stability=Stability.MEDIUM,
            recommended=playwright_by_role,
        )

    # Приоритет 4: семантический CSS
    logger.debug("Selector tier semantic css")
    return _css_bundle(semantic_css, Stability.LOW)
