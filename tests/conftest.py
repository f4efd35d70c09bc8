"""Pytest configuration and fixtures."""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from page_objects.cache import ElementCache, PageCache
from page_objects.config import Settings
from page_objects.dates import DateTokenResolver
from page_objects.factory import PageObjectFactory
from page_objects.locators import resolve


@dataclass
class FakeElement:
    """State of one DOM element as seen through the fake locator"""
    text: str = ''
    value: str = ''
    visible: bool = True
    enabled: bool = True
    checked: bool = False
    html: str = ''
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    options: List[Tuple[str, str]] = field(default_factory=list)
    selected: int = 0
    items: Optional[List['FakeElement']] = None
    fail_with: Optional[str] = None
    clicks: int = 0
    pressed: List[str] = field(default_factory=list)


class FakeLocator:
    """Subset of playwright.sync_api.Locator backed by FakeElement state"""

    def __init__(self, page: 'FakePage', selector: str,
                 resolver: Optional[Callable[[], Optional[FakeElement]]] = None):
        self.page = page
        self.selector = selector
        self._resolver = resolver or (lambda: page.elements.get(selector))

    def _element(self) -> Optional[FakeElement]:
        return self._resolver()

    def _strict(self, element: Optional[FakeElement]):
        if element is not None and element.items is not None:
            raise PlaywrightError(
                f"strict mode violation: locator('{self.selector}') resolved to {len(element.items)} elements"
            )

    def _require(self) -> FakeElement:
        element = self._element()
        if element is None:
            raise PlaywrightTimeoutError(f"Timeout exceeded: no element matches {self.selector}")
        self._strict(element)
        if element.fail_with:
            raise PlaywrightError(element.fail_with)
        return element

    def _record(self, action: str, *args):
        self.page.calls.append((action, self.selector) + args)

    def wait_for(self, state: str = 'visible', timeout: Optional[float] = None):
        self._record('wait_for', state)
        element = self._element()
        self._strict(element)
        if state == 'attached':
            ok = element is not None
        elif state == 'hidden':
            ok = element is None or not element.visible
        else:
            ok = element is not None and element.visible
        if not ok:
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for {self.selector} to be {state}"
            )

    def count(self) -> int:
        element = self._element()
        if element is None:
            return 0
        return len(element.items) if element.items is not None else 1

    def is_visible(self) -> bool:
        element = self._element()
        self._strict(element)
        return element is not None and element.visible

    def is_enabled(self) -> bool:
        return self._require().enabled

    def is_checked(self) -> bool:
        return self._require().checked

    def inner_text(self) -> str:
        return self._require().text

    def text_content(self) -> str:
        return self._require().text

    def inner_html(self) -> str:
        return self._require().html

    def input_value(self) -> str:
        element = self._require()
        if element.options:
            return element.options[element.selected][1]
        return element.value

    def get_attribute(self, name: str) -> Optional[str]:
        return self._require().attributes.get(name)

    def all_inner_texts(self) -> List[str]:
        element = self._element()
        if element is None:
            return []
        if element.items is not None:
            return [item.text for item in element.items]
        return [element.text]

    def click(self, button: str = 'left'):
        element = self._require()
        element.clicks += 1
        self._record('click', button)

    def dblclick(self):
        self._require().clicks += 2
        self._record('dblclick')

    def hover(self):
        self._require()
        self._record('hover')

    def focus(self):
        self._require()
        self._record('focus')

    def scroll_into_view_if_needed(self):
        self._require()
        self._record('scroll')

    def press_sequentially(self, text: str):
        self._require().value += text
        self._record('press_sequentially', text)

    def fill(self, text: str):
        self._require().value = text
        self._record('fill', text)

    def clear(self):
        self._require().value = ''
        self._record('clear')

    def press(self, key: str):
        self._require().pressed.append(key)
        self._record('press', key)

    def check(self):
        self._require().checked = True
        self._record('check')

    def uncheck(self):
        self._require().checked = False
        self._record('uncheck')

    def select_option(self, label: Optional[str] = None, value: Optional[str] = None,
                      index: Optional[int] = None):
        element = self._require()
        for position, (option_label, option_value) in enumerate(element.options):
            if position == index or option_label == label or option_value == value:
                element.selected = position
                self._record('select_option', option_label)
                return [option_value]
        raise PlaywrightError(f"No option matching label={label} value={value} index={index}")

    def evaluate(self, script: str, arg: Any = None):
        self._require()
        self._record('evaluate', script)
        if 'getPropertyValue' in script:
            return self.page.css_values.get(arg, '')
        return None

    def _pick(self, index: int) -> Optional[FakeElement]:
        element = self._element()
        if element is None:
            return None
        if element.items is None:
            return element if index == 0 else None
        return element.items[index] if 0 <= index < len(element.items) else None

    def nth(self, index: int) -> 'FakeLocator':
        return FakeLocator(self.page, f"{self.selector} >> nth={index}", lambda: self._pick(index))

    @property
    def first(self) -> 'FakeLocator':
        """First match; keeps the selector so recorded calls read like the bare locator"""
        return FakeLocator(self.page, self.selector, lambda: self._pick(0))

    def locator(self, selector: str) -> 'FakeLocator':
        def resolver():
            element = self._element()
            if element is None:
                return None
            options = [FakeElement(text=label, value=value) for label, value in element.options]
            if selector == 'option:checked':
                options = options[element.selected:element.selected + 1]
            return FakeElement(items=options)

        return FakeLocator(self.page, f"{self.selector} >> {selector}", resolver)


class FakePage:
    """Subset of playwright.sync_api.Page: elements keyed by Playwright selector"""

    def __init__(self):
        self.elements: Dict[str, FakeElement] = {}
        self.calls: List[tuple] = []
        self.css_values: Dict[str, str] = {}
        self.url = 'about:blank'
        self.locator_requests: List[str] = []

    def add(self, locator: str, **state) -> FakeElement:
        """Register an element under the selector the framework resolves locator to"""
        element = FakeElement(**state)
        self.elements[resolve(locator).selector] = element
        return element

    def remove(self, locator: str):
        self.elements.pop(resolve(locator).selector, None)

    def locator(self, selector: str) -> FakeLocator:
        self.locator_requests.append(selector)
        return FakeLocator(self, selector)

    def goto(self, url: str):
        self.calls.append(('goto', url))
        self.url = url

    def evaluate(self, script: str, arg: Any = None):
        self.calls.append(('evaluate', script, arg))


HOME_PAGE = {
    "pageName": "HomePage",
    "url": "https://www.agoda.com",
    "description": "Agoda home page",
    "timeout": 0.2,
    "elements": [
        {"name": "search", "type": "Textbox", "locator": "id=textInput"},
        {"name": "searchButton", "type": "Button", "locator": "css=button[data-selenium='searchButton']"},
        {"name": "destination", "type": "DynamicLabel",
         "locator": "xpath=//li[@data-text='%s']", "required": False},
        {"name": "currency", "type": "Combobox", "locator": "name=currency"},
        {"name": "results", "type": "Collection", "locator": "class=hotel-item", "required": False},
        {"name": "username", "type": "Textbox", "locator": "id=username", "required": False,
         "fallbacks": ["css=[name='user-name-input']", "xpath=//input[@placeholder='Username']"]},
    ],
}


@pytest.fixture
def fake_page():
    """In-memory stand-in for a Playwright page."""
    return FakePage()


@pytest.fixture
def settings(tmp_path):
    """Settings rooted at a temporary pages/testdata directory."""
    return Settings({
        'pages.dir': str(tmp_path / 'pages'),
        'testdata.dir': str(tmp_path / 'testdata'),
        'browser.timeout': '0.2',
        'test.retry.attempts': '1',
        'test.retry.delay': '0',
    })


@pytest.fixture
def pages_dir(tmp_path):
    """Directory holding the sample page files."""
    directory = tmp_path / 'pages'
    directory.mkdir()
    (directory / 'home_page.json').write_text(json.dumps(HOME_PAGE), encoding='utf-8')
    return directory


@pytest.fixture
def factory(fake_page, pages_dir, settings):
    """Factory with fresh caches bound to the fake page."""
    return PageObjectFactory(
        browser_page=fake_page,
        page_cache=PageCache(),
        element_cache=ElementCache(),
        pages_dir=pages_dir,
        default_timeout=0.2,
        settings=settings,
    )


@pytest.fixture
def fixed_clock():
    """Clock pinned to Monday 2024-01-01 09:30:00."""
    return lambda: datetime(2024, 1, 1, 9, 30, 0)


@pytest.fixture
def date_resolver(fixed_clock):
    return DateTokenResolver(clock=fixed_clock)
