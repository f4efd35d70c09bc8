"""
Dynamic page object built from a PageDefinition
"""

import logging
from typing import List, Optional, Union

from playwright.sync_api import Page

from .cache import ElementCache
from .elements import (
    Button, Checkbox, Collection, Combobox, DynamicButton, DynamicLabel,
    DynamicLink, ElementWrapper, Label, ListElement, Textbox, create_element,
)
from .elements.base import DEFAULT_TIMEOUT, check_state, locate_all
from .errors import ElementNotFound, ElementTypeMismatch
from .healing import ResilientElement
from .models import ElementDefinition, ElementType, PageDefinition
from .waits import WaitType, wait_until

logger = logging.getLogger(__name__)


class DynamicPage:
    """Page object whose elements come from a JSON page definition"""

    def __init__(self, definition: PageDefinition, browser_page: Page,
                 element_cache: Optional[ElementCache] = None,
                 default_timeout: float = DEFAULT_TIMEOUT,
                 retry_attempts: int = 1, retry_delay: float = 0.0):
        self.definition = definition
        self.browser_page = browser_page
        self.element_cache = element_cache if element_cache is not None else ElementCache()
        self.default_timeout = default_timeout
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        logger.info(f"Created DynamicPage for: {definition.page_name}")

    @property
    def page_name(self) -> str:
        return self.definition.page_name

    @property
    def url(self) -> str:
        return self.definition.url

    @property
    def description(self) -> str:
        return self.definition.description

    def _definition_of(self, name: str) -> ElementDefinition:
        definition = self.definition.get_element(name)
        if definition is None:
            raise ElementNotFound(name, self.page_name)
        return definition

    def timeout_for(self, definition: ElementDefinition) -> float:
        return self.definition.effective_timeout(definition, self.default_timeout)

    def _check_type(self, definition: ElementDefinition, element_type: ElementType):
        """Dynamic wrappers need a one-placeholder template, static ones a concrete locator"""
        placeholders = definition.placeholder_count()
        if element_type.is_dynamic and placeholders != 1 or not element_type.is_dynamic and placeholders:
            raise ElementTypeMismatch(definition.name, self.page_name, element_type.value, definition.locator)

    def element(self, name: str, element_type: Union[str, ElementType, None] = None) -> ElementWrapper:
        """
        Return the wrapper for a declared element.

        element_type defaults to the type declared in the page file. Wrappers
        are cached per (page, element, type, browser page), so asking twice
        returns the same object.

        Raises:
            ElementNotFound: name is not declared on this page
            ElementTypeMismatch: a dynamic type for a static locator, or the reverse
        """
        definition = self._definition_of(name)
        element_type = ElementType.parse(element_type) if element_type is not None else definition.type
        self._check_type(definition, element_type)
        key = ElementCache.key(self.page_name, name, element_type, self.browser_page)

        def build() -> ElementWrapper:
            wrapper = create_element(element_type, self.browser_page, definition,
                                     timeout=self.timeout_for(definition))
            logger.info(
                f"Resolved {element_type.value} '{name}' on page '{self.page_name}' "
                f"-> {definition.locator}"
            )
            return wrapper

        return self.element_cache.get_or_create(key, build)

    def button(self, name: str) -> Button:
        return self.element(name, ElementType.BUTTON)

    def textbox(self, name: str) -> Textbox:
        return self.element(name, ElementType.TEXTBOX)

    def label(self, name: str) -> Label:
        return self.element(name, ElementType.LABEL)

    def combobox(self, name: str) -> Combobox:
        return self.element(name, ElementType.COMBOBOX)

    def checkbox(self, name: str) -> Checkbox:
        return self.element(name, ElementType.CHECKBOX)

    def collection(self, name: str) -> Collection:
        return self.element(name, ElementType.COLLECTION)

    def list_element(self, name: str) -> ListElement:
        return self.element(name, ElementType.LIST_ELEMENT)

    def dynamic_label(self, name: str) -> DynamicLabel:
        return self.element(name, ElementType.DYNAMIC_LABEL)

    def dynamic_button(self, name: str) -> DynamicButton:
        return self.element(name, ElementType.DYNAMIC_BUTTON)

    def dynamic_link(self, name: str) -> DynamicLink:
        return self.element(name, ElementType.DYNAMIC_LINK)

    def resilient(self, name: str, retry_attempts: Optional[int] = None,
                  retry_delay: Optional[float] = None) -> ResilientElement:
        """
        Fallback-chain handle: the declared locator first, then its fallbacks in order.

        Retry settings default to the page's (test.retry.attempts / test.retry.delay
        when the page came from a factory).
        """
        definition = self._definition_of(name)
        candidates = [definition.locator, *definition.fallbacks]
        return ResilientElement(
            self.browser_page,
            name,
            candidates,
            timeout=self.timeout_for(definition),
            retry_attempts=self.retry_attempts if retry_attempts is None else retry_attempts,
            retry_delay=self.retry_delay if retry_delay is None else retry_delay,
        )

    def open(self):
        """Navigate the browser to this page's URL"""
        if not self.url:
            raise ValueError(f"Page '{self.page_name}' has no url")
        logger.info(f"Opening page '{self.page_name}': {self.url}")
        self.browser_page.goto(self.url)
        return self

    def is_loaded(self) -> bool:
        """True when every required, non-dynamic element is present in time"""
        for definition in self.definition.required_elements():
            if definition.type.is_dynamic:
                continue
            handle = locate_all(self.browser_page, definition.locator)
            present = wait_until(
                lambda: check_state(definition.name, WaitType.PRESENT.value, lambda: handle.count() > 0),
                self.timeout_for(definition),
            )
            if not present:
                logger.warning(f"Page '{self.page_name}' not loaded: '{definition.name}' is missing")
                return False
        return True

    def has_element(self, name: str) -> bool:
        return self.definition.has_element(name)

    def element_names(self) -> List[str]:
        return self.definition.element_names()

    def clear_element_cache(self):
        """Forget this page's wrappers for the bound browser page"""
        logger.info(f"Clearing element cache for page: {self.page_name}")
        self.element_cache.clear_page(self.page_name, self.browser_page)

    def cached_element_count(self) -> int:
        return self.element_cache.count_for_page(self.page_name, self.browser_page)

    def __repr__(self) -> str:
        return (
            f"DynamicPage(page_name={self.page_name!r}, url={self.url!r}, "
            f"elements={len(self.definition.elements)}, cached_elements={self.cached_element_count()})"
        )
