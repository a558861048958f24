# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Negotiable Telnet options and message modes."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from enum import Enum, IntEnum, auto
from typing import Any, Optional


OPTION_MAX: int = 0xFF


class MessageMode(Enum):
	"""How application data is framed."""

	LINE = auto()
	"""Data is buffered into whole lines."""
	CHARACTER = auto()
	"""Every byte of data is its own event."""


class TelnetOption(IntEnum):
	"""
	Telnet options which may be negotiated with DO, DONT, WILL, and WONT.

	Option codes which are not named here are still valid. Looking one up returns a
	member named OTHER_<code>, which compares and hashes as its code.
	"""

	ECHO = 1
	SGA = 3
	TTYPE = 24
	END_OF_RECORD = 25
	NAWS = 31
	LINEMODE = 34
	NEW_ENVIRON = 39
	CHARSET = 42
	MSDP = 69
	MSSP = 70
	MCCP2 = 86
	MSP = 90
	MXP = 91
	GMCP = 201

	@classmethod
	def _missing_(cls, value: Any) -> Optional[TelnetOption]:
		if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= OPTION_MAX:
			return None
		# Other options are created once, then cached like the named ones.
		member: TelnetOption = int.__new__(cls, value)
		member._name_ = f"OTHER_{value}"
		member._value_ = value
		return cls._value2member_map_.setdefault(value, member)  # type: ignore[return-value]

	@classmethod
	def from_byte(cls, data: bytes) -> TelnetOption:
		"""
		Looks up an option from its single byte wire form.

		Args:
			data: The option byte.

		Returns:
			The option.

		Raises:
			ValueError: Data is not exactly 1 byte.
		"""
		if len(data) != 1:
			raise ValueError(f"Option must be a single byte, not {data!r}.")
		return cls(data[0])

	@property
	def is_other(self) -> bool:
		"""True if this option is not one of the named options, False otherwise."""
		return self._name_ not in type(self).__members__

	def to_byte(self) -> bytes:
		"""
		Converts the option to its wire form.

		Returns:
			The option as a single byte.
		"""
		return bytes([self._value_])
