"""
Dynamic Page Objects

A JSON-driven page object layer on top of Playwright: page files declare
named elements with locators and types, the factory turns them into typed
wrappers with wait policies, and fallback chains keep tests running when a
primary locator breaks.
"""

from .browser import BrowserSession
from .cache import ElementCache, KeyedCache, PageCache
from .config import Settings, get_settings, setup_logging
from .dates import DateTokenResolver
from .elements import (
    Button,
    Checkbox,
    Collection,
    Combobox,
    DynamicButton,
    DynamicLabel,
    DynamicLink,
    Label,
    ListElement,
    Textbox,
    create_element,
)
from .errors import (
    ActionFailed,
    AllCandidatesFailed,
    ElementNotFound,
    ElementNotReady,
    ElementTypeMismatch,
    InvalidPageDefinition,
    InvalidParameter,
    PageObjectError,
    TestDataError,
)
from .factory import PageObjectFactory
from .healing import ResilientElement, retry, retrying, try_in_order
from .locators import NativeSelector, resolve
from .models import ElementDefinition, ElementType, PageDefinition
from .page import DynamicPage
from .test_data import TestDataResolver
from .waits import WaitType

__all__ = [
    'BrowserSession',
    'ElementCache',
    'KeyedCache',
    'PageCache',
    'Settings',
    'get_settings',
    'setup_logging',
    'DateTokenResolver',
    'Button',
    'Checkbox',
    'Collection',
    'Combobox',
    'DynamicButton',
    'DynamicLabel',
    'DynamicLink',
    'Label',
    'ListElement',
    'Textbox',
    'create_element',
    'ActionFailed',
    'AllCandidatesFailed',
    'ElementNotFound',
    'ElementNotReady',
    'ElementTypeMismatch',
    'InvalidPageDefinition',
    'InvalidParameter',
    'PageObjectError',
    'TestDataError',
    'PageObjectFactory',
    'ResilientElement',
    'retry',
    'retrying',
    'try_in_order',
    'NativeSelector',
    'resolve',
    'ElementDefinition',
    'ElementType',
    'PageDefinition',
    'DynamicPage',
    'TestDataResolver',
    'WaitType',
]
