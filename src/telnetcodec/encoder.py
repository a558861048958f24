# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Serialization of events to Telnet bytes."""

# Future Modules:
from __future__ import annotations

# Local Modules:
from .events import (
	Character,
	CharsetAccepted,
	CharsetRejected,
	CharsetRequest,
	CharsetTTableRejected,
	GoAhead,
	Message,
	Negotiation,
	NoOperation,
	RawMessage,
	Subnegotiate,
	TelnetEvent,
	Unknown,
	WindowSize,
)
from .options import MessageMode
from .telnet_constants import (
	CHARSET,
	CHARSET_ACCEPTED,
	CHARSET_REJECTED,
	CHARSET_REQUEST,
	CHARSET_SEPARATOR,
	CHARSET_TTABLE_REJECTED,
	CR,
	CR_LF,
	CR_NULL,
	GA,
	IAC,
	IAC_IAC,
	LF,
	NAWS,
	NOP,
	SB,
	SE,
)


def escape_iac(data: bytes) -> bytes:
	"""
	Escapes IAC bytes of a bytes-like object.

	Args:
		data: The data to be escaped.

	Returns:
		The data with IAC bytes escaped.
	"""
	return data.replace(IAC, IAC_IAC)


def normalize_newlines(data: bytes) -> bytes:
	"""
	Converts line endings to their NVT form.

	LF and CR LF become CR LF, and a bare CR becomes CR NUL.

	Args:
		data: The data to be converted.

	Returns:
		The converted data.
	"""
	return data.replace(CR_LF, LF).replace(CR_NULL, CR).replace(CR, CR_NULL).replace(LF, CR_LF)


def subnegotiation(option: bytes, payload: bytes) -> bytes:
	"""
	Frames a subnegotiation.

	Args:
		option: The subnegotiation option.
		payload: The payload, which will be escaped.

	Returns:
		IAC SB, the option, the escaped payload, then IAC SE.
	"""
	return IAC + SB + option + escape_iac(payload) + IAC + SE


class EncodeEngine:
	"""
	Converts events to the bytes sent to peer.

	Encoding has no side effects. Option state is not touched here.
	"""

	def __init__(self, *, line_terminator: bytes = CR_LF) -> None:
		"""
		Defines the constructor.

		Args:
			line_terminator: The byte sequence appended to messages in line mode.
		"""
		self.line_terminator: bytes = line_terminator

	def encode(self, event: TelnetEvent, *, mode: MessageMode = MessageMode.LINE) -> bytes:  # NOQA: C901
		"""
		Encodes an event.

		Args:
			event: The event to be encoded.
			mode: The message mode, which decides if messages receive a line terminator.

		Returns:
			The encoded bytes.

		Raises:
			TypeError: Event is not a Telnet event.
		"""
		if isinstance(event, Message):
			return self.encode_message(event, mode=mode)
		elif isinstance(event, Character):
			return escape_iac(event.to_bytes())
		elif isinstance(event, Negotiation):
			return IAC + event.verb + event.option.to_byte()
		elif isinstance(event, Subnegotiate):
			return subnegotiation(event.option.to_byte(), event.payload)
		elif isinstance(event, WindowSize):
			return subnegotiation(NAWS, event.to_payload())
		elif isinstance(event, CharsetRequest):
			return subnegotiation(
				CHARSET, CHARSET_REQUEST + CHARSET_SEPARATOR + CHARSET_SEPARATOR.join(event.charsets)
			)
		elif isinstance(event, CharsetAccepted):
			return subnegotiation(CHARSET, CHARSET_ACCEPTED + event.charset)
		elif isinstance(event, CharsetRejected):
			return subnegotiation(CHARSET, CHARSET_REJECTED)
		elif isinstance(event, CharsetTTableRejected):
			return subnegotiation(CHARSET, CHARSET_TTABLE_REJECTED)
		elif isinstance(event, GoAhead):
			return IAC + GA
		elif isinstance(event, NoOperation):
			return IAC + NOP
		elif isinstance(event, Unknown):
			if event.option is None:
				return event.data
			return subnegotiation(event.option.to_byte(), event.data)
		raise TypeError(f"Can't encode {event!r}: not a Telnet event.")

	def encode_message(self, event: Message, *, mode: MessageMode = MessageMode.LINE) -> bytes:
		"""
		Encodes application data.

		Line endings are converted to their NVT form, and IAC bytes are escaped. In line mode,
		the line terminator is appended unless the data already ends with one, or the event is a
		RawMessage.

		Args:
			event: The message to be encoded.
			mode: The message mode.

		Returns:
			The encoded bytes.
		"""
		data: bytes = escape_iac(normalize_newlines(event.data))
		if (
			mode is MessageMode.LINE
			and not isinstance(event, RawMessage)
			and not data.endswith(self.line_terminator)
		):
			data += self.line_terminator
		return data
