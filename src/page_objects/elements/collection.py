"""
Collection of elements sharing one locator
"""

import logging
from typing import List, Optional

from playwright.sync_api import Locator, Page

from ..models import ElementType
from ..waits import WaitType
from .base import BaseElement, check_state, locate_all
from .label import Label

logger = logging.getLogger(__name__)


class Collection(BaseElement):
    """
    All elements matched by a locator.

    size() never waits, an empty collection is a valid answer. Items are
    returned as Label wrappers bound to the n-th match.
    """

    element_type = ElementType.COLLECTION

    def _bind(self, page: Page, locator: str) -> Locator:
        return locate_all(page, locator)

    def _ready(self, wait_type: Optional[WaitType] = None):
        # Waits apply to the first match; the whole set is not strict-waitable
        self._wait(self.element.first, self.locator, wait_type)

    def is_displayed(self) -> bool:
        """True if the first match is visible"""
        return check_state(self.name, 'is displayed', self.element.first.is_visible)

    def size(self) -> int:
        """Number of current matches, without waiting"""
        count = self._act('count', self.element.count)
        logger.debug(f"Collection '{self.name}' has {count} elements")
        return count

    def is_empty(self) -> bool:
        return self.size() == 0

    def get_element_at(self, index: int) -> Label:
        """
        Label bound to the index-th match.

        Raises:
            IndexError: index < 0 or index >= size()
        """
        size = self.size()
        if index < 0 or index >= size:
            raise IndexError(
                f"Index {index} out of bounds for collection '{self.name}' with size {size}"
            )
        return Label(
            self.page,
            f"{self.locator} >> nth={index}",
            f"{self.name}[{index}]",
            timeout=self.timeout,
            handle=self.element.nth(index),
        )

    def get_first(self) -> Label:
        return self.get_element_at(0)

    def get_last(self) -> Label:
        return self.get_element_at(self.size() - 1)

    def get_all_texts(self) -> List[str]:
        """Stripped inner text of every match, in document order"""
        texts = self._act('read texts of', self.element.all_inner_texts)
        return [text.strip() for text in texts]

    def click_element_at(self, index: int):
        """Wait for the index-th match to be clickable, then click it"""
        item = self.get_element_at(index)
        logger.info(f"Clicking element {index} of collection '{self.name}'")
        item.wait_clickable()
        item._act('click', item.element.click)
        return self

    def click_first(self):
        return self.click_element_at(0)

    def click_last(self):
        return self.click_element_at(self.size() - 1)


class ListElement(Collection):
    """Alternative name for Collection"""

    element_type = ElementType.LIST_ELEMENT
