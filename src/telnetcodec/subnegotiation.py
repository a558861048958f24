# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Subnegotiation payload parsing."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging

# Local Modules:
from .events import (
	CharsetAccepted,
	CharsetRejected,
	CharsetRequest,
	CharsetTTableRejected,
	TelnetEvent,
	Unknown,
	WindowSize,
)
from .options import TelnetOption
from .telnet_constants import (
	CHARSET_ACCEPTED,
	CHARSET_REJECTED,
	CHARSET_REQUEST,
	CHARSET_TTABLE_REJECTED,
)
from .typedef import OptionLike, SubnegotiationHandlerType, SubnegotiationMapType


logger: logging.Logger = logging.getLogger(__name__)


class SubnegotiationParser:
	"""
	Turns the payload of a completed subnegotiation into an event.

	Payloads which can't be parsed never raise. They produce an Unknown event carrying the
	payload and option instead, so that one bad subnegotiation doesn't end the connection.
	"""

	def __init__(self) -> None:
		# When a subnegotiation is completed, the option is looked up in the
		# subnegotiation_map dictionary. If a callable is found, it is invoked with
		# the option and payload, and must return an event.
		self.subnegotiation_map: SubnegotiationMapType = {
			TelnetOption.NAWS: self.on_naws,
			TelnetOption.CHARSET: self.on_charset,
		}

	def register(self, option: OptionLike, handler: SubnegotiationHandlerType) -> None:
		"""
		Installs a payload handler for an option, replacing any existing handler.

		Args:
			option: The subnegotiation option.
			handler: A callable taking the option and payload, and returning an event.
		"""
		self.subnegotiation_map[TelnetOption(option)] = handler

	def parse(self, option: OptionLike, payload: bytes) -> TelnetEvent:
		"""
		Parses a subnegotiation payload.

		Args:
			option: The subnegotiation option.
			payload: The payload, with IAC bytes already unescaped.

		Returns:
			The parsed event.
		"""
		option = TelnetOption(option)
		handler = self.subnegotiation_map.get(option)
		if handler is None:
			return self.on_unhandled_subnegotiation(option, payload)
		return handler(option, payload)

	def on_unhandled_subnegotiation(self, option: TelnetOption, payload: bytes) -> TelnetEvent:
		"""
		Called for subnegotiations for which no handler is installed.

		Args:
			option: The subnegotiation option.
			payload: The payload.

		Returns:
			An Unknown event carrying the payload.
		"""
		logger.debug(f"No handler for {option.name} subnegotiation: {payload!r}")
		return Unknown(payload, option)

	def on_naws(self, option: TelnetOption, payload: bytes) -> TelnetEvent:
		"""
		Called when a NAWS subnegotiation is received.

		Args:
			option: The subnegotiation option.
			payload: The payload.

		Returns:
			A WindowSize event, or an Unknown event if the payload is malformed.
		"""
		try:
			event: WindowSize = WindowSize.from_payload(payload)
		except ValueError as e:
			logger.warning(repr(e))
			return Unknown(payload, option)
		logger.debug(f"Received window size from peer: width = {event.width}, height = {event.height}.")
		return event

	def on_charset(self, option: TelnetOption, payload: bytes) -> TelnetEvent:
		"""
		Called when a charset subnegotiation is received.

		Args:
			option: The subnegotiation option.
			payload: The payload.

		Returns:
			A charset event, or an Unknown event if the payload is malformed.
		"""
		status, response = payload[:1], payload[1:]
		if status == CHARSET_REQUEST:
			separator, names = response[:1], response[1:]
			charsets: tuple[bytes, ...] = tuple(i for i in names.split(separator) if i) if separator else ()
			if charsets:
				logger.debug(f"Peer requests charsets: {charsets!r}.")
				return CharsetRequest(charsets)
		elif status == CHARSET_ACCEPTED:
			logger.debug(f"Peer responds: Charset {response!r} accepted.")
			return CharsetAccepted(response)
		elif status == CHARSET_REJECTED:
			logger.debug("Peer responds: Charset rejected.")
			return CharsetRejected()
		elif status == CHARSET_TTABLE_REJECTED:
			logger.debug("Peer responds: Translation table rejected.")
			return CharsetTTableRejected()
		logger.warning(f"Unknown charset negotiation from peer: {payload!r}")
		return Unknown(payload, option)
