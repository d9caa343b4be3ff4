"""Form payloads. Each form carries its own validation errors back to the page."""

from dataclasses import dataclass

from snippetbox.core.validator import Validator

PERMITTED_EXPIRES = (1, 7, 365)


@dataclass
class SnippetCreateForm(Validator):
    title: str = ""
    content: str = ""
    expires: int = 365

    def __post_init__(self) -> None:
        Validator.__init__(self)


@dataclass
class UserSignupForm(Validator):
    name: str = ""
    email: str = ""
    password: str = ""

    def __post_init__(self) -> None:
        Validator.__init__(self)


@dataclass
class UserLoginForm(Validator):
    email: str = ""
    password: str = ""

    def __post_init__(self) -> None:
        Validator.__init__(self)
