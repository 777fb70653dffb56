import re
from typing import Dict, List

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page, expect

from locale_loader import LocaleConfig
from locales import LOCALES
from signup_data import SignupFormData

NAVIGATION_TIMEOUT_MS = 90_000

# data-testid values are the same in every locale
TEST_IDS = {
    "first_name": "first-name-input",
    "last_name": "last-name-input",
    "phone_number": "phoneInput",
    "province": "region-select",
    "email": "email-input",
    "password": "password-input",
    "confirm_password": "passwordConfirmation-input",
    "submit_button": "submit-button",
    "login_button": "header-login-button",
    "language_switch": "header-language-switch",
    "terms_of_service_link": "terms-link",
}

ERROR_TEST_IDS = {
    "first_name": "first-name-error-message-typography",
    "last_name": "last-name-error-message-typography",
    "phone_number": "phone-error-message-typography",
    "province": "province-error-message-typography",
    "email": "email-error-message-typography",
    "password": "password-error-message-typography",
    "confirm_password": "passwordConfirmation-error-message-typography",
}

ERROR_SELECTORS = [
    "[role='alert']",
    ".error",
    "[class*='error']",
    "[class*='invalid']",
]

SUCCESS_PATTERNS = [
    re.compile(r"success", re.IGNORECASE),
    re.compile(r"account created", re.IGNORECASE),
    re.compile(r"welcome", re.IGNORECASE),
]


def _require_resolved(locale: LocaleConfig) -> None:
    if not locale.urls.is_resolved:
        raise ValueError(
            f"LocaleConfig for {locale.locale!r} has relative URLs; load it with a base URL before navigating"
        )


class SignupPage:
    def __init__(self, page: Page, locale: LocaleConfig):
        self.page = page
        self.locale = locale
        labels = locale.signup

        self.first_name_input = page.get_by_test_id(TEST_IDS["first_name"])
        self.last_name_input = page.get_by_test_id(TEST_IDS["last_name"])
        self.phone_number_input = page.get_by_test_id(TEST_IDS["phone_number"])
        self.province_select = page.get_by_test_id(TEST_IDS["province"])
        self.email_input = page.get_by_test_id(TEST_IDS["email"])
        self.password_input = page.get_by_test_id(TEST_IDS["password"])
        self.confirm_password_input = page.get_by_test_id(TEST_IDS["confirm_password"])
        self.submit_button = page.get_by_test_id(TEST_IDS["submit_button"])
        self.partner_contact_checkbox = page.locator("input[type='checkbox']").first

        self.heading = page.get_by_role("heading", name=labels.heading)
        self.password_requirement_text = page.get_by_text(labels.password_requirement)
        self.login_button = page.get_by_test_id(TEST_IDS["login_button"])
        self.login_link = page.get_by_role(
            "link", name=re.compile(re.escape(labels.login_link), re.IGNORECASE)
        )
        self.language_switch = page.get_by_test_id(TEST_IDS["language_switch"])
        self.terms_of_service_link = page.get_by_test_id(TEST_IDS["terms_of_service_link"])
        self.privacy_policy_link = page.get_by_text(
            re.compile(re.escape(labels.privacy_policy), re.IGNORECASE)
        )

        self.error_messages: Dict[str, Locator] = {
            field: page.get_by_test_id(test_id) for field, test_id in ERROR_TEST_IDS.items()
        }

    @property
    def form_inputs(self) -> List[Locator]:
        return [
            self.first_name_input,
            self.last_name_input,
            self.phone_number_input,
            self.province_select,
            self.email_input,
            self.password_input,
            self.confirm_password_input,
        ]

    def goto(self) -> None:
        _require_resolved(self.locale)
        self.page.goto(self.locale.urls.signup, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)
        self.wait_for_page_load()

    def wait_for_page_load(self) -> None:
        self.page.wait_for_load_state("networkidle")
        expect(self.heading).to_be_visible()

    def fill_form(self, data: SignupFormData) -> None:
        self.first_name_input.fill(data.first_name)
        self.last_name_input.fill(data.last_name)
        self.phone_number_input.fill(data.phone_number)
        self.select_province(data.province)
        self.email_input.fill(data.email)
        self.password_input.fill(data.password)
        self.confirm_password_input.fill(data.confirm_password)

        if data.partner_contact:
            self.partner_contact_checkbox.check()

    def fill_first_name(self, first_name: str) -> None:
        self.first_name_input.fill(first_name)

    def fill_last_name(self, last_name: str) -> None:
        self.last_name_input.fill(last_name)

    def fill_phone_number(self, phone_number: str) -> None:
        self.phone_number_input.fill(phone_number)

    def select_province(self, province_name: str) -> None:
        """Select by display name, never by province code."""
        self.province_select.select_option(label=province_name)

    def fill_email(self, email: str) -> None:
        self.email_input.fill(email)

    def fill_password(self, password: str) -> None:
        self.password_input.fill(password)

    def fill_confirm_password(self, password: str) -> None:
        self.confirm_password_input.fill(password)

    def check_partner_contact(self) -> None:
        self.partner_contact_checkbox.check()

    def uncheck_partner_contact(self) -> None:
        self.partner_contact_checkbox.uncheck()

    def submit(self) -> None:
        self.submit_button.click()

    def get_first_name(self) -> str:
        return self.first_name_input.input_value()

    def get_last_name(self) -> str:
        return self.last_name_input.input_value()

    def get_email(self) -> str:
        return self.email_input.input_value()

    def get_phone_number(self) -> str:
        return self.phone_number_input.input_value()

    def get_selected_province(self) -> str:
        # Display text of the selected option, not its value
        return self.province_select.evaluate(
            """
            (select) => {
              const option = select.options[select.selectedIndex];
              return option ? (option.textContent || "").trim() : "";
            }
            """
        )

    def is_partner_contact_checked(self) -> bool:
        return self.partner_contact_checkbox.is_checked()

    def validate_form_fields_visible(self) -> None:
        for locator in self.form_inputs + [self.submit_button]:
            expect(locator).to_be_visible()

    def validate_labels(self) -> None:
        expect(self.heading).to_be_visible()
        expect(self.password_requirement_text).to_be_visible()
        for locator in self.form_inputs:
            expect(locator).to_be_visible()

    def validate_form_is_empty(self) -> None:
        expect(self.first_name_input).to_have_value("")
        expect(self.last_name_input).to_have_value("")
        expect(self.email_input).to_have_value("")

    def clear_form(self) -> None:
        for locator in (
            self.first_name_input,
            self.last_name_input,
            self.phone_number_input,
            self.email_input,
            self.password_input,
            self.confirm_password_input,
        ):
            locator.clear()
        self.uncheck_partner_contact()

    def click_login_link(self) -> None:
        self.login_link.click()

    def click_login_button(self) -> None:
        self.login_button.click()

    def click_terms_of_service_link(self) -> None:
        self.terms_of_service_link.click()

    def click_privacy_policy_link(self) -> None:
        self.privacy_policy_link.click()

    def switch_language(self, target_locale: str) -> None:
        """
        Toggle the header language switch and wait for the target locale's
        signup route.
        """
        self.language_switch.click()
        self.page.wait_for_url(f"**{LOCALES[target_locale]['signup_path_marker']}")

    def get_validation_errors(self) -> List[str]:
        errors: List[str] = []
        for sel in ERROR_SELECTORS:
            for element in self.page.locator(sel).all():
                text = element.text_content()
                if text and text.strip():
                    errors.append(text.strip())
        return errors

    def verify_error_message(self, field: str, error_message: str) -> None:
        expect(self.error_messages[field]).to_contain_text(error_message)

    def is_submission_successful(self) -> bool:
        if "/signup" not in self.page.url:
            return True

        for pattern in SUCCESS_PATTERNS:
            try:
                if self.page.get_by_text(pattern).first.is_visible():
                    return True
            except PlaywrightError:
                continue
        return False


class LoginPage:
    def __init__(self, page: Page):
        self.page = page
        self.email_input = page.get_by_role("textbox", name="Email")
        self.password_input = page.get_by_role("textbox", name="Password")
        self.submit_button = page.get_by_role("button", name="Log In")

    def verify_email_input_visible(self) -> None:
        expect(self.email_input).to_be_visible()


class LandingPage:
    def __init__(self, page: Page, locale: LocaleConfig):
        self.page = page
        self.locale = locale
        self.menu_button = page.get_by_test_id("menu-button")
        self.my_portfolio_button = page.get_by_test_id("my-portfolio-button")

    def goto(self) -> None:
        _require_resolved(self.locale)
        self.page.goto(self.locale.urls.base_url, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)

    def wait_for_page_load(self) -> None:
        self.page.wait_for_load_state("networkidle")
        expect(self.menu_button).to_be_visible()
        expect(self.my_portfolio_button).to_be_visible()
        assert "getaquote" in self.page.url, f"Expected landing URL to contain 'getaquote', got {self.page.url}"

    def click_menu_button(self) -> None:
        self.menu_button.click()
