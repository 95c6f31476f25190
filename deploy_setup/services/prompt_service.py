"""Interactive prompt service built on inquirer."""

from typing import Any, Callable, List, Optional, Sequence, Tuple

import inquirer
from inquirer import errors

# Returns an error message, or None when the answer is acceptable
Validator = Callable[[str], Optional[str]]
Choice = Tuple[str, Any]


class PromptService:
    """
    Thin wrapper over ``inquirer`` questions.

    Collectors only talk to this class, so tests can swap in a scripted
    prompter with the same methods.
    """

    def _ask(self, question) -> Any:
        answers = inquirer.prompt([question], raise_keyboard_interrupt=True)
        if answers is None:
            raise KeyboardInterrupt
        return answers[question.name]

    @staticmethod
    def _wrap_validator(validate: Optional[Validator]):
        if validate is None:
            return True

        def _check(_answers, current):
            error = validate(current)
            if error:
                raise errors.ValidationError("", reason=error)
            return True

        return _check

    def text(
        self,
        message: str,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> str:
        """Free-form text; re-asked until ``validate`` passes."""
        question = inquirer.Text(
            "value",
            message=message,
            default=default,
            validate=self._wrap_validator(validate),
        )
        return self._ask(question)

    def confirm(self, message: str, default: bool = False) -> bool:
        return bool(self._ask(inquirer.Confirm("value", message=message, default=default)))

    def select(
        self, message: str, choices: Sequence[Choice], default: Any = None
    ) -> Any:
        """Single choice from ``(label, value)`` pairs; returns the value."""
        question = inquirer.List(
            "value",
            message=message,
            choices=list(choices),
            default=default,
            carousel=True,
        )
        return self._ask(question)

    def checkbox(
        self, message: str, choices: Sequence[Choice], checked: Sequence[Any] = ()
    ) -> List[Any]:
        """Multi-select from ``(label, value)`` pairs; returns the chosen values."""
        question = inquirer.Checkbox(
            "value",
            message=message,
            choices=list(choices),
            default=list(checked),
        )
        return list(self._ask(question))
