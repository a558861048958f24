# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""
Telnet events.

Every event is an immutable value. Decoding produces events from the bytes received from
peer, and encoding turns events back into bytes which can be sent to peer.
"""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from dataclasses import dataclass
from typing import ClassVar, Optional

# Third-party Modules:
from knickknacks.typedef import Self

# Local Modules:
from .options import TelnetOption
from .telnet_constants import DO, DONT, NAWS_PAYLOAD_LENGTH, WILL, WONT
from .typedef import OptionLike


UINT8_MAX: int = 0xFF
UINT16_MAX: int = 0xFFFF


def _to_option(value: OptionLike) -> TelnetOption:
	return value if isinstance(value, TelnetOption) else TelnetOption(value)


@dataclass(frozen=True)
class TelnetEvent:
	"""The base class of all Telnet events."""


@dataclass(frozen=True)
class Message(TelnetEvent):
	"""
	A line of application data.

	Text is stored as UTF-8 bytes.
	"""

	data: bytes
	"""The message content, without line terminator."""

	def __post_init__(self) -> None:
		if isinstance(self.data, str):
			object.__setattr__(self, "data", bytes(self.data, "utf-8"))
		elif not isinstance(self.data, bytes):
			object.__setattr__(self, "data", bytes(self.data))

	@property
	def text(self) -> str:
		"""The message content, decoded as UTF-8. Invalid sequences are replaced."""
		return str(self.data, "utf-8", "replace")


@dataclass(frozen=True)
class RawMessage(Message):
	"""Application data which is never given a line terminator when encoded, such as a prompt."""


@dataclass(frozen=True)
class Character(TelnetEvent):
	"""A single byte of application data, produced in character mode."""

	value: int

	def __post_init__(self) -> None:
		"""
		Performs additional processing after dataclass initialization.

		Raises:
			ValueError: The value is not a byte.
		"""
		if not 0 <= self.value <= UINT8_MAX:
			raise ValueError(f"{self!r}: Value must be in range 0 - {UINT8_MAX}.")

	def to_bytes(self) -> bytes:
		return bytes([self.value])


@dataclass(frozen=True)
class Negotiation(TelnetEvent):
	"""The base class of the option negotiation events."""

	verb: ClassVar[bytes]
	option: TelnetOption

	def __post_init__(self) -> None:
		object.__setattr__(self, "option", _to_option(self.option))


@dataclass(frozen=True)
class Do(Negotiation):
	"""Requests, or confirms, that the receiving side perform an option."""

	verb: ClassVar[bytes] = DO


@dataclass(frozen=True)
class Dont(Negotiation):
	"""Demands, or confirms, that the receiving side stop performing an option."""

	verb: ClassVar[bytes] = DONT


@dataclass(frozen=True)
class Will(Negotiation):
	"""Offers, or confirms, that the sending side performs an option."""

	verb: ClassVar[bytes] = WILL


@dataclass(frozen=True)
class Wont(Negotiation):
	"""Refuses, or stops, the sending side performing an option."""

	verb: ClassVar[bytes] = WONT


NEGOTIATION_EVENTS: dict[bytes, type[Negotiation]] = {
	DO: Do,
	DONT: Dont,
	WILL: Will,
	WONT: Wont,
}


@dataclass(frozen=True)
class Subnegotiate(TelnetEvent):
	"""An option specific payload, sent between IAC SB and IAC SE."""

	option: TelnetOption
	payload: bytes = b""

	def __post_init__(self) -> None:
		object.__setattr__(self, "option", _to_option(self.option))
		object.__setattr__(self, "payload", bytes(self.payload))


@dataclass(frozen=True)
class WindowSize(TelnetEvent):
	"""The dimensions of peer's window, negotiated with NAWS."""

	width: int
	"""The window width."""
	height: int
	"""The window height."""

	def __post_init__(self) -> None:
		"""
		Performs additional processing after dataclass initialization.

		Raises:
			ValueError: Invalid width or height values were given.
		"""
		if not 0 <= self.width <= UINT16_MAX or not 0 <= self.height <= UINT16_MAX:
			raise ValueError(f"{self!r}: Values must be in range 0 - {UINT16_MAX}.")

	@classmethod
	def from_payload(cls: type[Self], data: bytes) -> Self:
		"""
		Creates a new WindowSize instance from a NAWS payload.

		Args:
			data: The bytes with the encoded width and height values.

		Returns:
			A WindowSize instance using the new values.

		Raises:
			ValueError: Invalid NAWS payload.
		"""
		if len(data) != NAWS_PAYLOAD_LENGTH:
			raise ValueError(f"Invalid NAWS payload: {data!r}.")
		# NAWS is negotiated with 16-bit words.
		width: int = int.from_bytes(data[:2], byteorder="big", signed=False)
		height: int = int.from_bytes(data[2:], byteorder="big", signed=False)
		return cls(width=width, height=height)

	def to_payload(self) -> bytes:
		"""
		Converts the width and height to a NAWS payload.

		Returns:
			The encoded width and height as bytes.
		"""
		width: bytes = int.to_bytes(self.width, length=2, byteorder="big", signed=False)
		height: bytes = int.to_bytes(self.height, length=2, byteorder="big", signed=False)
		return width + height


@dataclass(frozen=True)
class CharsetRequest(TelnetEvent):
	"""Asks the receiving side to pick one of the listed character sets."""

	charsets: tuple[bytes, ...]

	def __post_init__(self) -> None:
		object.__setattr__(
			self,
			"charsets",
			tuple(bytes(i, "us-ascii") if isinstance(i, str) else bytes(i) for i in self.charsets),
		)


@dataclass(frozen=True)
class CharsetAccepted(TelnetEvent):
	"""The receiving side accepted one of the requested character sets."""

	charset: bytes

	def __post_init__(self) -> None:
		if isinstance(self.charset, str):
			object.__setattr__(self, "charset", bytes(self.charset, "us-ascii"))


@dataclass(frozen=True)
class CharsetRejected(TelnetEvent):
	"""The receiving side supports none of the requested character sets."""


@dataclass(frozen=True)
class CharsetTTableRejected(TelnetEvent):
	"""The receiving side refused a translation table."""


@dataclass(frozen=True)
class GoAhead(TelnetEvent):
	"""The Go Ahead signal, which usually marks the end of a prompt."""


@dataclass(frozen=True)
class NoOperation(TelnetEvent):
	"""A command which does nothing, often used as a heartbeat."""


@dataclass(frozen=True)
class Unknown(TelnetEvent):
	"""
	Bytes which were not understood.

	If option is None, data holds a raw command sequence, I.E. IAC followed by the command byte.
	Otherwise, data holds the payload of a subnegotiation for that option.
	"""

	data: bytes
	option: Optional[TelnetOption] = None

	def __post_init__(self) -> None:
		object.__setattr__(self, "data", bytes(self.data))
		if self.option is not None:
			object.__setattr__(self, "option", _to_option(self.option))

