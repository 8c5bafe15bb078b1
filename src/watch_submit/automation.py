"""Browser automation against an already-running Chrome.

PREREQUISITES -- both must be running before the watcher is started:

1. Chrome with remote debugging enabled, e.g. on macOS:
   /Applications/Google\\ Chrome.app/Contents/MacOS/Google\\ Chrome --remote-debugging-port=9222
2. chromedriver (from the Chrome for Testing dashboard), e.g.:
   ./chromedriver --port=9515

Each run opens a fresh WebDriver session attached through the debugger
address, fills the input field with the payload and clicks the button.
Ending a debugger-attached session leaves the browser itself running.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
import urllib3
from loguru import logger
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By

from .config import WatchConfig
from .errors import AutomationError
from .models import AutomationStep

log = logger.bind(stage="automation")

# urllib3 errors surface when chromedriver is unreachable or drops mid-run
_DRIVER_ERRORS = (WebDriverException, urllib3.exceptions.HTTPError, OSError)


def _describe(exc: Exception) -> str:
    """First line of an exception message, without selenium's stacktrace."""
    msg = getattr(exc, "msg", None) or str(exc)
    lines = msg.strip().splitlines()
    return lines[0] if lines else type(exc).__name__


@contextmanager
def _step(step: AutomationStep, message: str) -> Iterator[None]:
    try:
        yield
    except _DRIVER_ERRORS as e:
        raise AutomationError(step, f"{message}: {_describe(e)}") from e


def _connect(config: WatchConfig) -> webdriver.Remote:
    options = webdriver.ChromeOptions()
    options.debugger_address = config.debugger_address

    with _step(
        AutomationStep.CONNECT,
        f"Failed to connect to chromedriver. Is it running at {config.webdriver_url}?",
    ):
        return webdriver.Remote(
            command_executor=config.webdriver_url, options=options
        )


def run_automation(content: str, config: WatchConfig) -> None:
    """Paste content into the configured input and click the configured button.

    Raises AutomationError naming the failed step. No retries.
    """
    driver = _connect(config)
    try:
        _fill_and_submit(driver, content, config)
    finally:
        try:
            driver.quit()
        except _DRIVER_ERRORS as e:
            log.warning(f"Failed to end WebDriver session: {_describe(e)}")


def _fill_and_submit(driver, content: str, config: WatchConfig) -> None:
    url = config.target_url
    log.info(f"Navigating to {url}")
    with _step(AutomationStep.NAVIGATE, f"Failed to navigate to URL: {url}"):
        driver.get(url)

    input_id = config.input_id
    log.info(f"Looking for input field with ID '{input_id}'...")
    with _step(
        AutomationStep.FIND_INPUT,
        f"Could not find input field with ID '{input_id}'",
    ):
        field = driver.find_element(By.ID, input_id)

    with _step(AutomationStep.CLEAR_INPUT, "Failed to clear input field"):
        field.clear()
    with _step(AutomationStep.TYPE_INPUT, "Failed to send keys to input field"):
        field.send_keys(content)
    log.info("Entered content into the input field.")

    button_id = config.button_id
    log.info(f"Looking for button with ID '{button_id}'...")
    with _step(
        AutomationStep.FIND_BUTTON,
        f"Could not find button with ID '{button_id}'",
    ):
        button = driver.find_element(By.ID, button_id)

    with _step(
        AutomationStep.CLICK_BUTTON, f"Failed to click the '{button_id}' button"
    ):
        button.click()
    log.info(f"Clicked the '{button_id}' button.")


def check_webdriver(config: WatchConfig) -> bool:
    """Ask the WebDriver server whether it is ready to create sessions.

    Only used to warn at startup; an unreachable server is not fatal.
    """
    status_url = f"{config.webdriver_url}/status"
    log.debug(f"WebDriver preflight: GET {status_url}")
    try:
        resp = httpx.get(status_url, timeout=config.preflight_timeout)
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        log.warning(f"WebDriver server not reachable at {config.webdriver_url}: {e}")
        return False

    value = data.get("value") if isinstance(data, dict) else None
    ready = bool(value.get("ready")) if isinstance(value, dict) else False
    if not ready:
        log.warning(f"WebDriver server at {config.webdriver_url} reports not ready")
    return ready
