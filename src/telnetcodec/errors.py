# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Telnet codec exceptions."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from collections.abc import Sequence
from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover
	# Local Modules:
	from .events import TelnetEvent


class TelnetError(Exception):
	"""Implements the base class for Telnet exceptions."""


class BufferOverflowError(TelnetError):
	"""
	Raised when buffered input from peer grows past the configured limit.

	The connection should be closed when this is raised, as peer is withholding a line
	terminator or a subnegotiation terminator.

	Attributes:
		events: The events which were fully decoded before the limit was exceeded.
		consumed: The number of input bytes consumed before the limit was exceeded.
		limit: The configured maximum buffer size.
	"""

	def __init__(self, limit: int, *, events: Sequence[TelnetEvent] = (), consumed: int = 0) -> None:
		super().__init__(f"Input buffer exceeded the maximum size of {limit} bytes.")
		self.limit: int = limit
		self.events: tuple[TelnetEvent, ...] = tuple(events)
		self.consumed: int = consumed
