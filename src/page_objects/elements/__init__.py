"""
Typed element wrappers and the factory that builds them from definitions
"""

from typing import Dict, Optional, Type, Union

from playwright.sync_api import Page

from ..models import ElementDefinition, ElementType
from .base import DEFAULT_TIMEOUT, BaseElement, ElementWrapper
from .button import Button
from .checkbox import Checkbox
from .collection import Collection, ListElement
from .combobox import Combobox
from .dynamic import DynamicButton, DynamicElement, DynamicLabel, DynamicLink
from .label import Label
from .textbox import Textbox

WRAPPERS: Dict[ElementType, Type[ElementWrapper]] = {
    ElementType.BUTTON: Button,
    ElementType.TEXTBOX: Textbox,
    ElementType.COMBOBOX: Combobox,
    ElementType.CHECKBOX: Checkbox,
    ElementType.LABEL: Label,
    ElementType.COLLECTION: Collection,
    ElementType.LIST_ELEMENT: ListElement,
    ElementType.DYNAMIC_LABEL: DynamicLabel,
    ElementType.DYNAMIC_BUTTON: DynamicButton,
    ElementType.DYNAMIC_LINK: DynamicLink,
}


def create_element(element_type: Union[str, ElementType], page: Page,
                   definition: ElementDefinition,
                   timeout: Optional[float] = None) -> ElementWrapper:
    """Build the wrapper for element_type bound to definition's locator"""
    wrapper_class = WRAPPERS[ElementType.parse(element_type)]
    return wrapper_class(
        page,
        definition.locator,
        definition.name,
        timeout=timeout if timeout is not None else (definition.timeout or DEFAULT_TIMEOUT),
        wait_type=definition.wait,
    )


__all__ = [
    'ElementWrapper',
    'BaseElement',
    'DynamicElement',
    'Button',
    'Textbox',
    'Combobox',
    'Checkbox',
    'Label',
    'Collection',
    'ListElement',
    'DynamicLabel',
    'DynamicButton',
    'DynamicLink',
    'WRAPPERS',
    'create_element',
]
