"""
Login Page Object

The account page where users authenticate. Reached from the home page via
"My Account".
"""
from __future__ import annotations

import logging

from playwright.async_api import Page, expect
from playwright.async_api import TimeoutError as PlaywrightTimeout

from vivastreet_e2e.pages.base import PageActions
from vivastreet_e2e.steps import step

logger = logging.getLogger(__name__)

# The form enables its inputs shortly after render
INPUT_SETTLE_MS = 500


class LoginPage(PageActions):
    def __init__(self, page: Page) -> None:
        super().__init__(page)
        self.email_input = page.get_by_test_id("urD_LoginEmailInput")
        self.password_input = page.get_by_test_id("urD_Password")
        self.login_button = page.get_by_test_id("urD_Login")
        self.captcha_checkbox = page.locator('label.cb-lb input[type="checkbox"]')
        self.error_message = page.locator('[role="alert"].bg-error')

    async def navigate(self) -> None:
        async with step("Navigate to login page"):
            await self.page.goto("/account_classifieds.php")
            await self.wait_until_ready()

    async def enter_email(self, email: str) -> None:
        async with step("Enter email: {email}", email=email):
            await self.page.wait_for_timeout(INPUT_SETTLE_MS)
            await self.email_input.fill(email)

    async def enter_password(self, password: str) -> None:
        async with step("Enter password"):
            await self.page.wait_for_timeout(INPUT_SETTLE_MS)
            await self.password_input.fill(password)

    async def check_captcha(self) -> bool:
        """Tick the CAPTCHA checkbox. Returns False if it is not shown."""
        async with step("Check CAPTCHA"):
            try:
                await self.captcha_checkbox.check(timeout=5000)
            except PlaywrightTimeout:
                logger.info("CAPTCHA not found or already solved")
                return False
            return True

    async def click_login_button(self) -> None:
        async with step("Click login button"):
            await self.login_button.wait_for(state="visible")
            await expect(self.login_button).to_be_enabled(timeout=10000)
            await self.login_button.click()

    async def login(self, email: str, password: str) -> None:
        await self.enter_email(email)
        await self.enter_password(password)
        await self.check_captcha()
        await self.click_login_button()

    async def verify_login_error_displayed(self) -> None:
        async with step("Verify login error is displayed"):
            await expect(self.error_message).to_be_visible()

    async def verify_error_message(self, expected_message: str) -> None:
        async with step("Verify error message: {expected_message}", expected_message=expected_message):
            await expect(self.error_message).to_contain_text(expected_message)
