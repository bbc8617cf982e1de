"""
Типы данных для AX Inspector

Определяет структуры данных для сырых узлов Accessibility Tree из CDP,
канонических сводок узлов, описаний DOM узлов и наборов селекторов.
"""

from typing import Any, Dict, List, Literal, Optional, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _CDPModel(BaseModel):
    """Базовая модель: snake_case поля с camelCase алиасами CDP"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация без отсутствующих полей"""
        return self.model_dump(by_alias=True, exclude_none=True)


class AXValue(_CDPModel):
    """Типизированное значение CDP (AXValue)"""
    type: str = Field("", description="Тип значения CDP")
    value: Optional[Any] = Field(None, description="Нетипизированная полезная нагрузка")


class AXProperty(_CDPModel):
    """Свойство AX узла (focused, disabled, checked, ...)"""
    name: str = Field(..., description="Имя свойства")
    value: AXValue = Field(..., description="Значение свойства")


class RawAXNode(_CDPModel):
    """Сырой AX узел в том виде, в котором его возвращает CDP"""
    node_id: str = Field(..., alias="nodeId", description="ID узла")
    ignored: bool = Field(False, description="Узел скрыт от вспомогательных технологий")
    ignored_reasons: Optional[List[AXProperty]] = Field(None, alias="ignoredReasons")
    role: Optional[AXValue] = None
    name: Optional[AXValue] = None
    description: Optional[AXValue] = None
    value: Optional[AXValue] = None
    properties: Optional[List[AXProperty]] = None
    parent_id: Optional[str] = Field(None, alias="parentId", description="ID родительского узла")
    child_ids: List[str] = Field(default_factory=list, alias="childIds", description="ID дочерних узлов")
    backend_dom_node_id: Optional[int] = Field(None, alias="backendDOMNodeId", description="ID DOM узла")
    frame_id: Optional[str] = Field(None, alias="frameId")


class AXNodeSummary(_CDPModel):
    """Каноническая сводка AX узла"""
    role: str = Field(..., description="Роль узла")
    name: str = Field("", description="Доступное имя узла")
    description: Optional[str] = None
    value: Optional[str] = None
    focused: Optional[bool] = None
    disabled: Optional[bool] = None
    checked: Optional[Union[bool, Literal["mixed"]]] = None
    expanded: Optional[bool] = None
    required: Optional[bool] = None
    level: Optional[int] = None
    backend_dom_node_id: Optional[int] = Field(None, alias="backendDOMNodeId")
    node_id: str = Field(..., alias="nodeId")
    children: Optional[List["AXNodeSummary"]] = None

    @model_validator(mode="after")
    def _drop_empty_children(self) -> "AXNodeSummary":
        # children либо отсутствует, либо непустой
        if self.children is not None and len(self.children) == 0:
            self.children = None
        return self


class DomNodeDescription(_CDPModel):
    """Описание DOM узла (DOM.describeNode().node)"""
    node_id: int = Field(0, alias="nodeId")
    backend_node_id: Optional[int] = Field(None, alias="backendNodeId")
    node_type: int = Field(1, alias="nodeType")
    node_name: str = Field("", alias="nodeName")
    local_name: str = Field("", alias="localName")
    node_value: str = Field("", alias="nodeValue")
    attributes: Optional[List[str]] = None
    frame_id: Optional[str] = Field(None, alias="frameId")


class Stability(str, Enum):
    """Оценка стабильности селектора"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SuggestedSelectors(_CDPModel):
    """Набор эквивалентных локаторов для одного элемента"""
    test_id: Optional[str] = Field(None, alias="testId")
    id: Optional[str] = None
    aria: Optional[str] = None
    css: Optional[str] = None
    playwright: str = Field(..., description="Playwright локатор")
    selenium: str = Field(..., description="Selenium (Python) локатор")
    cypress: str = Field(..., description="Cypress локатор")
    webdriverio: str = Field(..., description="WebdriverIO локатор")
    puppeteer: str = Field(..., description="Puppeteer локатор")
    stability: Stability
    recommended: str = Field(..., description="Рекомендуемый локатор")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ElementResult(_CDPModel):
    """Интерактивный элемент с DOM данными и селекторами"""
    role: str
    name: str
    node_id: str = Field(..., alias="nodeId")
    backend_dom_node_id: Optional[int] = Field(None, alias="backendDOMNodeId")
    tag_name: Optional[str] = Field(None, alias="tagName")
    dom_attributes: Optional[Dict[str, str]] = Field(None, alias="domAttributes")
    suggested_selectors: Optional[SuggestedSelectors] = Field(None, alias="suggestedSelectors")
    ax_properties: Optional[AXNodeSummary] = Field(None, alias="axProperties")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


AXNodeSummary.model_rebuild()
