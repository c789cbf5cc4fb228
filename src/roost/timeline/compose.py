"""The compose control: input value, enabled state and focus."""

from dataclasses import dataclass

from roost.errors import ValidationError


def validate_content(content: str, max_length: int = 480) -> str:
    """Return *content* trimmed, or raise ``ValidationError``.

    Length is counted in code points, after trimming.
    """
    trimmed = content.strip()
    if not trimmed:
        msg = "content is required"
        raise ValidationError(msg)
    if len(trimmed) > max_length:
        msg = f"content must be at most {max_length} characters"
        raise ValidationError(msg)
    return trimmed


@dataclass(slots=True)
class ComposeForm:
    """State of the compose textarea and its submit button.

    The submit control is enactable only for valid, non-empty input and
    while no publish is in flight.
    """

    max_length: int = 480
    value: str = ""
    disabled: bool = False
    focused: bool = False

    @property
    def can_submit(self) -> bool:
        if self.disabled:
            return False
        try:
            validate_content(self.value, self.max_length)
        except ValidationError:
            return False
        return True

    def input(self, value: str) -> None:
        self.value = value

    def focus(self) -> None:
        self.focused = True

    def reset(self) -> None:
        self.value = ""
