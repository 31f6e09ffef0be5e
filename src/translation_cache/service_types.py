from enum import Enum
from typing import Union


class ServiceType(str, Enum):
    """Identifiers of the translation backends whose results are cached."""

    QIANWEN = "qianwen"
    GOOGLE = "google"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: Union["ServiceType", str]) -> "ServiceType":
        """Return the member for ``value`` (member or its string value)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unsupported service: {value}. "
                f"Available services: {[member.value for member in cls]}"
            ) from None


_DISPLAY_NAMES = {
    ServiceType.QIANWEN: "Qianwen",
    ServiceType.GOOGLE: "Google Translate",
}
