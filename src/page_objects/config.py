"""
Configuration settings for the page object framework

Values are looked up in this order: explicit overrides, environment variables
(``browser.timeout`` -> ``BROWSER_TIMEOUT``), the defaults given to
``Settings`` and finally the default passed by the caller.
"""

import logging
import logging.config
import os
import threading
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load variables from a .env file in the working directory, if any
load_dotenv()

BASE_DIR = Path(os.getcwd())

DEFAULTS: Dict[str, str] = {
    'browser': 'chromium',
    'browser.headless': 'true',
    'browser.size': '1920x1080',
    'browser.slow.mo': '0',
    'browser.timeout': '10',
    'page.load.timeout': '30',
    'test.retry.attempts': '3',
    'test.retry.delay': '0.5',
    'pages.dir': 'resources/pages',
    'testdata.dir': 'resources/testdata',
    'base.url': 'https://www.agoda.com',
    'application.environment': 'test',
    'log.level': 'INFO',
    'debug': 'false',
}

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


class Settings:
    """Layered key/value configuration backed by the environment"""

    def __init__(self, defaults: Optional[Dict[str, str]] = None):
        self._defaults = dict(DEFAULTS)
        if defaults:
            self._defaults.update(defaults)
        self._overrides: Dict[str, str] = {}
        self._lock = threading.Lock()

    @staticmethod
    def env_key(key: str) -> str:
        return key.upper().replace('.', '_')

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Resolve a property through overrides, environment and defaults"""
        for value in (
            self._overrides.get(key),
            os.getenv(self.env_key(key)),
            self._defaults.get(key),
        ):
            if value is not None and value.strip():
                return value
        return default

    def get_int_property(self, key: str, default: int = 0) -> int:
        value = self.get_property(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid integer for '{key}': {value!r}, using default {default}")
            return default

    def get_float_property(self, key: str, default: float = 0.0) -> float:
        value = self.get_property(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Invalid number for '{key}': {value!r}, using default {default}")
            return default

    def get_bool_property(self, key: str, default: bool = False) -> bool:
        value = self.get_property(key)
        if value is None:
            return default
        return value.strip().lower() in _TRUE_VALUES

    def has_property(self, key: str) -> bool:
        return self.get_property(key) is not None

    def set_property(self, key: str, value: str):
        """Override a property for the lifetime of this Settings object"""
        with self._lock:
            self._overrides[key] = str(value)
        logger.debug(f"Property override set: {key}={value}")

    def properties_with_prefix(self, prefix: str) -> Dict[str, str]:
        """Return every known key starting with prefix, resolved to its current value"""
        keys = set(self._defaults) | set(self._overrides)
        result = {}
        for key in sorted(keys):
            if key.startswith(prefix):
                value = self.get_property(key)
                if value is not None:
                    result[key] = value
        return result

    def reset(self):
        with self._lock:
            self._overrides.clear()

    # Browser

    @property
    def browser(self) -> str:
        return self.get_property('browser', 'chromium')

    @property
    def headless(self) -> bool:
        return self.get_bool_property('browser.headless', True)

    @property
    def viewport(self) -> Dict[str, int]:
        size = self.get_property('browser.size', '1920x1080')
        try:
            width, height = (int(part) for part in size.lower().split('x'))
        except ValueError:
            logger.warning(f"Invalid browser size {size!r}, using 1920x1080")
            width, height = 1920, 1080
        return {'width': width, 'height': height}

    @property
    def slow_mo(self) -> float:
        return self.get_float_property('browser.slow.mo', 0.0)

    # Timeouts are in seconds throughout the framework

    @property
    def default_timeout(self) -> float:
        return self.get_float_property('browser.timeout', 10.0)

    @property
    def page_load_timeout(self) -> float:
        return self.get_float_property('page.load.timeout', 30.0)

    @property
    def retry_attempts(self) -> int:
        return self.get_int_property('test.retry.attempts', 3)

    @property
    def retry_delay(self) -> float:
        return self.get_float_property('test.retry.delay', 0.5)

    # Locations

    @property
    def pages_dir(self) -> Path:
        return BASE_DIR / self.get_property('pages.dir', 'resources/pages')

    @property
    def test_data_dir(self) -> Path:
        return BASE_DIR / self.get_property('testdata.dir', 'resources/testdata')

    @property
    def environment(self) -> str:
        return self.get_property('application.environment', 'test')

    @property
    def base_url(self) -> str:
        env_url = self.get_property(f"{self.environment}.base.url")
        if env_url:
            return env_url
        return self.get_property('base.url', '')

    @property
    def log_level(self) -> str:
        if self.debug:
            return 'DEBUG'
        return self.get_property('log.level', 'INFO').upper()

    @property
    def debug(self) -> bool:
        return self.get_bool_property('debug', False)


_settings: Optional[Settings] = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Return the process-wide Settings instance"""
    global _settings
    with _settings_lock:
        if _settings is None:
            _settings = Settings()
        return _settings


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """Configure console (and optionally file) logging for the framework"""
    level = (level or get_settings().log_level).upper()
    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
            'level': level,
            'stream': 'ext://sys.stdout',
        },
    }
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers['file'] = {
            'class': 'logging.FileHandler',
            'formatter': 'standard',
            'level': level,
            'filename': str(log_file),
            'encoding': 'utf-8',
        }

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            },
        },
        'handlers': handlers,
        'loggers': {
            'page_objects': {
                'handlers': list(handlers),
                'level': level,
                'propagate': False,
            },
        },
    })
