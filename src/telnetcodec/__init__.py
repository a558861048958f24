# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from contextlib import suppress
from typing import TYPE_CHECKING

# Local Modules:
from .codec import TelnetCodec
from .errors import BufferOverflowError, TelnetError
from .events import (
	Character,
	CharsetAccepted,
	CharsetRejected,
	CharsetRequest,
	CharsetTTableRejected,
	Do,
	Dont,
	GoAhead,
	Message,
	Negotiation,
	NoOperation,
	RawMessage,
	Subnegotiate,
	TelnetEvent,
	Unknown,
	Will,
	WindowSize,
	Wont,
)
from .negotiation import NegotiationState, OptionTable
from .options import MessageMode, TelnetOption


__version__: str = "0.0.0"
if not TYPE_CHECKING:
	with suppress(ImportError):
		from ._version import __version__


__all__: list[str] = [
	"BufferOverflowError",
	"Character",
	"CharsetAccepted",
	"CharsetRejected",
	"CharsetRequest",
	"CharsetTTableRejected",
	"Do",
	"Dont",
	"GoAhead",
	"Message",
	"MessageMode",
	"Negotiation",
	"NegotiationState",
	"NoOperation",
	"OptionTable",
	"RawMessage",
	"Subnegotiate",
	"TelnetCodec",
	"TelnetError",
	"TelnetEvent",
	"TelnetOption",
	"Unknown",
	"Will",
	"WindowSize",
	"Wont",
	"__version__",
]
