"""Node identity used to break ties between otherwise equal timestamps."""

from dataclasses import dataclass

from hlclock.clock.errors import TimestampFormatError

DEFAULT_SEPARATOR = "-"


@dataclass(frozen=True, order=True)
class NodeId:
    """Opaque, totally ordered identifier of a clock participant.

    Equality and ordering are those of the underlying string.
    """

    value: str

    def __str__(self) -> str:
        return self.value

    def compare_to(self, other: "NodeId") -> int:
        if self.value < other.value:
            return -1
        if self.value > other.value:
            return 1
        return 0

    def pack(self, separator: str = DEFAULT_SEPARATOR) -> str:
        """Packed form is the raw identifier; it must be non-empty and free of the separator."""
        _check_packable(self.value, separator)
        return self.value

    @classmethod
    def from_packed(cls, raw: str, separator: str = DEFAULT_SEPARATOR) -> "NodeId":
        _check_packable(raw, separator)
        return cls(raw)


def _check_packable(raw: str, separator: str) -> None:
    if not raw:
        raise TimestampFormatError("Node id must not be empty")
    if separator in raw:
        raise TimestampFormatError(
            f"Node id {raw!r} contains the field separator {separator!r}"
        )
