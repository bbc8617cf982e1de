"""
Разбор плоского списка DOM атрибутов

CDP (DOM.describeNode) отдает атрибуты плоским списком
["key", "value", "key", "value", ...].
"""

from typing import Dict, Optional, Sequence


def parse_attributes(attributes: Optional[Sequence[str]]) -> Dict[str, str]:
    """Преобразование плоского списка атрибутов в словарь.

    Повторяющийся ключ перезаписывается последним значением,
    непарный хвостовой элемент отбрасывается.
    """
    attrs: Dict[str, str] = {}
    if not attributes:
        return attrs

    for i in range(0, len(attributes) - 1, 2):
        attrs[attributes[i]] = attributes[i + 1]

    return attrs
