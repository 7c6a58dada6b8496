"""Key/value application setting."""

from dataclasses import dataclass

from flashinbox.domain.common.exceptions import ValidationError

MAX_KEY_LENGTH = 255


@dataclass
class AppSetting:
    """
    A single stored preference, such as the last used deck name.

    Settings are identified by their key; the value may be null.
    """

    key: str
    value: str | None = None

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            raise ValidationError("Setting key cannot be empty", field="key")
        if len(self.key) > MAX_KEY_LENGTH:
            raise ValidationError(
                f"Setting key cannot exceed {MAX_KEY_LENGTH} characters", field="key"
            )
