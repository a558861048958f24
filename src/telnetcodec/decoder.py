# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""
The Telnet decoding state machine.

Bytes received from peer are consumed one state transition at a time. When input ends in the
middle of a command or subnegotiation, the state is kept until the next call, so a stream may be
split at any byte without changing the decoded events.
"""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

# Local Modules:
from .errors import BufferOverflowError
from .events import Character, GoAhead, Message, Negotiation, NoOperation, TelnetEvent, Unknown
from .negotiation import NegotiationResult, OptionTable
from .options import MessageMode
from .scanner import ByteScanner
from .subnegotiation import SubnegotiationParser
from .telnet_constants import (
	CR,
	DESCRIPTIONS,
	GA,
	IAC,
	LF,
	NEGOTIATION_ORDS,
	NOP,
	NULL,
	SB,
	SE,
	describe_sequence,
)
from .typedef import BytesLike


DEFAULT_MAX_BUFFER_SIZE: int = 1024
_IAC: int = IAC[0]
_CR: int = CR[0]
_LF: int = LF[0]
_NULL: int = NULL[0]
_SB: int = SB[0]
_SE: int = SE[0]
_GA: int = GA[0]
_NOP: int = NOP[0]
LINE_DATA_STOPS: frozenset[int] = frozenset((_IAC, _CR, _LF))
SUBNEGOTIATION_STOPS: frozenset[int] = frozenset((_IAC,))


logger: logging.Logger = logging.getLogger(__name__)


class DecodeState(Enum):
	"""
	Valid states for the state machine.
	"""

	DATA = auto()
	NEWLINE = auto()
	COMMAND = auto()
	NEGOTIATION = auto()
	SUBNEGOTIATION = auto()
	SUBNEGOTIATION_ESCAPED = auto()


@dataclass(frozen=True)
class DecodeResult:
	"""The outcome of one decode call."""

	events: tuple[TelnetEvent, ...]
	"""The events which were fully decoded, in order."""
	consumed: int
	"""The number of input bytes consumed."""


@dataclass(frozen=True)
class DecoderSnapshot:
	"""Everything needed to resume decoding where it was left off."""

	state: DecodeState
	mode: MessageMode
	verb: Optional[bytes]
	message: bytes
	subnegotiation: bytes


class DecodeStateMachine:
	"""Decodes bytes from peer into Telnet events."""

	def __init__(
		self,
		options: OptionTable,
		*,
		parser: Optional[SubnegotiationParser] = None,
		mode: MessageMode = MessageMode.LINE,
		max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE,
	) -> None:
		"""
		Defines the constructor.

		Args:
			options: The table which tracks and answers option negotiations.
			parser: The subnegotiation parser. If None, a new parser is used.
			mode: The message mode.
			max_buffer_size: The maximum number of bytes buffered for a line or a subnegotiation.

		Raises:
			ValueError: Max buffer size is less than 1.
		"""
		if max_buffer_size < 1:
			raise ValueError("Max buffer size must be a positive integer.")
		self.options: OptionTable = options
		self.parser: SubnegotiationParser = parser if parser is not None else SubnegotiationParser()
		self.mode: MessageMode = mode
		self.max_buffer_size: int = max_buffer_size
		self.state: DecodeState = DecodeState.DATA
		"""The state of the state machine."""
		self.replies: list[Negotiation] = []
		"""Negotiations which must be sent to peer in response to received negotiations."""
		self._verb: Optional[bytes] = None
		self._message: bytearray = bytearray()
		self._subnegotiation: bytearray = bytearray()

	@property
	def needs_more_input(self) -> bool:
		"""True if input ended in the middle of a command or subnegotiation, False otherwise."""
		return self.state not in (DecodeState.DATA, DecodeState.NEWLINE)

	@property
	def buffered(self) -> int:
		"""The number of bytes in the partial line."""
		return len(self._message)

	def snapshot(self) -> DecoderSnapshot:
		"""
		Captures the decoding state.

		Returns:
			An immutable copy of the state.
		"""
		return DecoderSnapshot(
			state=self.state,
			mode=self.mode,
			verb=self._verb,
			message=bytes(self._message),
			subnegotiation=bytes(self._subnegotiation),
		)

	def restore(self, snapshot: DecoderSnapshot) -> None:
		"""
		Resumes decoding from a snapshot.

		Args:
			snapshot: The state to restore.
		"""
		self.state = snapshot.state
		self.mode = snapshot.mode
		self._verb = snapshot.verb
		self._message[:] = snapshot.message
		self._subnegotiation[:] = snapshot.subnegotiation

	def reset(self) -> None:
		"""Discards any partial input and returns to the data state."""
		self.state = DecodeState.DATA
		self._verb = None
		self._message.clear()
		self._subnegotiation.clear()
		self.replies.clear()

	def flush(self) -> list[TelnetEvent]:
		"""
		Emits the partial line, if any.

		Returns:
			A message event for the partial line, or an empty list.
		"""
		if not self._message:
			return []
		message: Message = Message(bytes(self._message))
		self._message.clear()
		return [message]

	def decode(self, data: BytesLike) -> DecodeResult:
		"""
		Decodes bytes received from peer.

		All input is consumed. Incomplete commands are kept until the next call.

		Args:
			data: The received bytes.

		Returns:
			The decoded events, and the number of bytes consumed.

		Raises:
			BufferOverflowError: A line or subnegotiation grew past the max buffer size.
		"""
		events: list[TelnetEvent] = []
		if self.mode is MessageMode.CHARACTER:
			# A line which was started before switching to character mode.
			events.extend(self.flush())
		with ByteScanner(data) as scanner:
			while not scanner.at_end:
				self._step(scanner, events)
			consumed: int = scanner.position
		return DecodeResult(tuple(events), consumed)

	def _overflow(self, buffer: bytearray, scanner: ByteScanner, events: list[TelnetEvent]) -> None:
		if len(buffer) <= self.max_buffer_size:
			return
		logger.warning(f"Input from peer exceeded {self.max_buffer_size} bytes without a terminator.")
		buffer.clear()
		self.state = DecodeState.DATA
		raise BufferOverflowError(self.max_buffer_size, events=events, consumed=scanner.position)

	def _emit_data(self, byte: int, scanner: ByteScanner, events: list[TelnetEvent]) -> None:
		if self.mode is MessageMode.CHARACTER:
			events.append(Character(byte))
		else:
			self._message.append(byte)
			self._overflow(self._message, scanner, events)

	def _step(self, scanner: ByteScanner, events: list[TelnetEvent]) -> None:  # NOQA: C901, PLR0912
		byte: Optional[int]
		if self.state is DecodeState.DATA:
			if self.mode is MessageMode.LINE:
				self._message.extend(scanner.advance_until(LINE_DATA_STOPS))
				self._overflow(self._message, scanner, events)
			byte = scanner.advance()
			if byte is None:
				return
			elif byte == _IAC:
				self.state = DecodeState.COMMAND
			elif self.mode is MessageMode.CHARACTER:
				events.append(Character(byte))
			else:
				# Line terminator. The terminator itself is not part of the message.
				events.extend(self.flush() or [Message(b"")])
				if byte == _CR:
					self.state = DecodeState.NEWLINE
		elif self.state is DecodeState.NEWLINE:
			# CR LF and CR NUL are single terminators.
			if scanner.peek() in (_LF, _NULL):
				scanner.advance()
			self.state = DecodeState.DATA
		elif self.state is DecodeState.COMMAND:
			byte = scanner.advance()
			if byte is None:
				return
			self.state = DecodeState.DATA
			if byte == _IAC:
				# Escaped IAC.
				self._emit_data(byte, scanner, events)
			elif byte in NEGOTIATION_ORDS:
				self.state = DecodeState.NEGOTIATION
				self._verb = bytes([byte])
			elif byte == _SB:
				self.state = DecodeState.SUBNEGOTIATION
				self._subnegotiation.clear()
			elif byte == _GA:
				logger.debug("Received from peer: IAC GA")
				events.append(GoAhead())
			elif byte == _NOP:
				logger.debug("Received from peer: IAC NOP")
				events.append(NoOperation())
			else:
				sequence: bytes = IAC + bytes([byte])
				if byte == _SE:
					logger.warning("IAC SE received outside of subnegotiation.")
				else:
					logger.warning(f"Unknown Telnet command received: {describe_sequence(sequence)}.")
				events.append(Unknown(sequence))
		elif self.state is DecodeState.NEGOTIATION:
			byte = scanner.advance()
			if byte is None or self._verb is None:
				return
			self.state = DecodeState.DATA
			verb: bytes = self._verb
			self._verb = None
			result: NegotiationResult = self.options.apply(verb, byte)
			events.append(result.event)
			if result.reply is not None:
				self.replies.append(result.reply)
		elif self.state is DecodeState.SUBNEGOTIATION:
			self._subnegotiation.extend(scanner.advance_until(SUBNEGOTIATION_STOPS))
			self._overflow(self._subnegotiation, scanner, events)
			if scanner.advance() is not None:
				self.state = DecodeState.SUBNEGOTIATION_ESCAPED
		elif self.state is DecodeState.SUBNEGOTIATION_ESCAPED:
			byte = scanner.advance()
			if byte is None:
				return
			if byte == _SE:
				self.state = DecodeState.DATA
				self._complete_subnegotiation(events)
				return
			self.state = DecodeState.SUBNEGOTIATION
			if byte != _IAC:
				logger.warning(
					f"Unexpected IAC {DESCRIPTIONS.get(bytes([byte]), repr(bytes([byte])))} "
					+ "inside subnegotiation."
				)
			self._subnegotiation.append(byte)
			self._overflow(self._subnegotiation, scanner, events)

	def _complete_subnegotiation(self, events: list[TelnetEvent]) -> None:
		commands: bytes = bytes(self._subnegotiation)
		self._subnegotiation.clear()
		if not commands:
			logger.warning("Subnegotiation without an option received from peer.")
			events.append(Unknown(IAC + SB + IAC + SE))
			return
		option, payload = commands[0], commands[1:]
		event: TelnetEvent = self.parser.parse(option, payload)
		logger.debug(f"Received from peer: IAC SB {event!r} IAC SE")
		events.append(event)
