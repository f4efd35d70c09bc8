"""
Declarative page and element definitions loaded from JSON page files
"""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import InvalidPageDefinition

PLACEHOLDER_PATTERN = re.compile(r'%s|\{[A-Za-z_][A-Za-z0-9_]*\}')

WAIT_KEYWORDS = ('visible', 'clickable', 'present', 'invisible')


class ElementType(Enum):
    """Element wrapper kinds a page file can declare"""
    BUTTON = 'Button'
    TEXTBOX = 'Textbox'
    COMBOBOX = 'Combobox'
    CHECKBOX = 'Checkbox'
    LABEL = 'Label'
    COLLECTION = 'Collection'
    DYNAMIC_LABEL = 'DynamicLabel'
    DYNAMIC_BUTTON = 'DynamicButton'
    DYNAMIC_LINK = 'DynamicLink'
    LIST_ELEMENT = 'ListElement'

    @classmethod
    def parse(cls, value: Union[str, 'ElementType']) -> 'ElementType':
        """Parse a type name case-insensitively ('button', 'Button', 'dynamic_label' ...)"""
        if isinstance(value, ElementType):
            return value
        if not isinstance(value, str):
            raise InvalidPageDefinition(f"Element type must be a string, got {value!r}")
        normalized = value.replace('_', '').replace('-', '').strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        raise InvalidPageDefinition(f"Unknown element type '{value}'")

    @property
    def is_dynamic(self) -> bool:
        return self in (ElementType.DYNAMIC_LABEL, ElementType.DYNAMIC_BUTTON, ElementType.DYNAMIC_LINK)

    @property
    def is_collection(self) -> bool:
        return self in (ElementType.COLLECTION, ElementType.LIST_ELEMENT)


def count_placeholders(locator: str) -> int:
    return len(PLACEHOLDER_PATTERN.findall(locator or ''))


@dataclass(frozen=True)
class ElementDefinition:
    """One declared UI control of a page"""
    name: str
    locator: str
    type: ElementType = ElementType.LABEL
    description: str = ''
    timeout: Optional[float] = None
    required: bool = True
    tags: Tuple[str, ...] = ()
    wait: Optional[str] = None
    fallbacks: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ElementDefinition':
        if not isinstance(data, dict):
            raise InvalidPageDefinition(f"Element entry must be an object, got {type(data).__name__}")

        timeout = data.get('timeout')
        if timeout is not None:
            try:
                timeout = float(timeout)
            except (TypeError, ValueError):
                raise InvalidPageDefinition(
                    f"Element '{data.get('name')}' has a non-numeric timeout: {timeout!r}"
                )

        wait = data.get('wait')
        return cls(
            name=(data.get('name') or '').strip(),
            locator=(data.get('locator') or '').strip(),
            type=ElementType.parse(data.get('type') or 'Label'),
            description=data.get('description') or '',
            timeout=timeout,
            required=bool(data.get('required', True)),
            tags=tuple(data.get('tags') or ()),
            wait=wait.strip().lower() if isinstance(wait, str) else wait,
            fallbacks=tuple(data.get('fallbacks') or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'name': self.name,
            'locator': self.locator,
            'type': self.type.value,
            'required': self.required,
        }
        if self.description:
            data['description'] = self.description
        if self.timeout is not None:
            data['timeout'] = self.timeout
        if self.tags:
            data['tags'] = list(self.tags)
        if self.wait:
            data['wait'] = self.wait
        if self.fallbacks:
            data['fallbacks'] = list(self.fallbacks)
        return data

    def placeholder_count(self) -> int:
        return count_placeholders(self.locator)

    def validate(self):
        """Raise InvalidPageDefinition when this element cannot be used"""
        if not self.name:
            raise InvalidPageDefinition("Element definition is missing a name")
        if not self.locator:
            raise InvalidPageDefinition(f"Element '{self.name}' is missing a locator")
        placeholders = self.placeholder_count()
        if self.type.is_dynamic and placeholders != 1:
            raise InvalidPageDefinition(
                f"Dynamic element '{self.name}' must have exactly one placeholder "
                f"in its locator, found {placeholders}: {self.locator}"
            )
        if self.wait is not None and self.wait not in WAIT_KEYWORDS:
            raise InvalidPageDefinition(
                f"Element '{self.name}' has unknown wait type '{self.wait}', "
                f"expected one of {', '.join(WAIT_KEYWORDS)}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise InvalidPageDefinition(f"Element '{self.name}' timeout must be positive")
        for fallback in self.fallbacks:
            if not isinstance(fallback, str) or not fallback.strip():
                raise InvalidPageDefinition(f"Element '{self.name}' has an empty fallback locator")

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


@dataclass
class PageDefinition:
    """One declared page: URL, default timeout and its named elements"""
    page_name: str
    url: str = ''
    description: str = ''
    timeout: Optional[float] = None
    tags: Tuple[str, ...] = ()
    elements: Tuple[ElementDefinition, ...] = ()
    _index: Dict[str, ElementDefinition] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.elements = tuple(self.elements)
        self.tags = tuple(self.tags)
        # First declaration wins in the index; duplicates are reported by validate()
        for element in self.elements:
            self._index.setdefault(element.name, element)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> 'PageDefinition':
        if not isinstance(data, dict):
            raise InvalidPageDefinition("Page definition must be a JSON object", source)

        raw_elements = data.get('elements')
        if raw_elements is None:
            raw_elements = []
        if not isinstance(raw_elements, list):
            raise InvalidPageDefinition("'elements' must be a list", source)

        timeout = data.get('timeout')
        if timeout is not None:
            try:
                timeout = float(timeout)
            except (TypeError, ValueError):
                raise InvalidPageDefinition(f"Page timeout is not numeric: {timeout!r}", source)

        try:
            elements = tuple(ElementDefinition.from_dict(item) for item in raw_elements)
        except InvalidPageDefinition as e:
            raise InvalidPageDefinition(e.message, source) from e

        return cls(
            page_name=(data.get('pageName') or '').strip(),
            url=data.get('url') or '',
            description=data.get('description') or '',
            timeout=timeout,
            tags=tuple(data.get('tags') or ()),
            elements=elements,
        )

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> 'PageDefinition':
        path = Path(path)
        if not path.is_file():
            raise InvalidPageDefinition("Page JSON file not found", str(path))
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidPageDefinition(f"Page JSON is not valid JSON: {e}", str(path)) from e
        return cls.from_dict(data, source=str(path))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'pageName': self.page_name,
            'url': self.url,
            'elements': [element.to_dict() for element in self.elements],
        }
        if self.description:
            data['description'] = self.description
        if self.timeout is not None:
            data['timeout'] = self.timeout
        if self.tags:
            data['tags'] = list(self.tags)
        return data

    def validate(self, source: Optional[str] = None):
        """Raise InvalidPageDefinition unless the page and all its elements are usable"""
        if not self.page_name:
            raise InvalidPageDefinition("Page definition is missing pageName", source)
        if not self.elements:
            raise InvalidPageDefinition(f"Page '{self.page_name}' declares no elements", source)
        if self.timeout is not None and self.timeout <= 0:
            raise InvalidPageDefinition(f"Page '{self.page_name}' timeout must be positive", source)

        seen = set()
        for element in self.elements:
            try:
                element.validate()
            except InvalidPageDefinition as e:
                raise InvalidPageDefinition(f"Page '{self.page_name}': {e.message}", source) from e
            if element.name in seen:
                raise InvalidPageDefinition(
                    f"Page '{self.page_name}' declares element '{element.name}' more than once", source
                )
            seen.add(element.name)

    def get_element(self, name: str) -> Optional[ElementDefinition]:
        return self._index.get(name)

    def has_element(self, name: str) -> bool:
        return name in self._index

    def element_names(self) -> List[str]:
        return [element.name for element in self.elements]

    def elements_by_type(self, element_type: Union[str, ElementType]) -> List[ElementDefinition]:
        element_type = ElementType.parse(element_type)
        return [element for element in self.elements if element.type is element_type]

    def elements_by_tag(self, tag: str) -> List[ElementDefinition]:
        return [element for element in self.elements if element.has_tag(tag)]

    def required_elements(self) -> List[ElementDefinition]:
        return [element for element in self.elements if element.required]

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def effective_timeout(self, element: ElementDefinition, default: float = 10.0) -> float:
        """Element timeout, else the page timeout, else the framework default"""
        if element.timeout is not None:
            return element.timeout
        if self.timeout is not None:
            return self.timeout
        return default
