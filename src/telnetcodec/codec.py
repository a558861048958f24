# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""The Telnet codec."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from typing import Optional

# Local Modules:
from .decoder import DEFAULT_MAX_BUFFER_SIZE, DecodeResult, DecoderSnapshot, DecodeStateMachine
from .encoder import EncodeEngine
from .errors import BufferOverflowError
from .events import Negotiation, TelnetEvent
from .negotiation import OptionTable
from .options import MessageMode
from .subnegotiation import SubnegotiationParser
from .telnet_constants import CR_LF
from .typedef import BytesLike, OptionSetType


logger: logging.Logger = logging.getLogger(__name__)


class TelnetCodec:
	"""
	Converts between a Telnet byte stream and Telnet events, for a single connection.

	The codec performs no I/O. The owner of the connection reads bytes from peer into a buffer
	and passes it to `decode`, then writes the output of `encode` and `take_replies` to peer.
	"""

	def __init__(
		self,
		*,
		max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE,
		mode: MessageMode = MessageMode.LINE,
		local_options: Optional[OptionSetType] = None,
		remote_options: Optional[OptionSetType] = None,
		line_terminator: bytes = CR_LF,
	) -> None:
		"""
		Defines the constructor.

		Args:
			max_buffer_size: The maximum size of a line or subnegotiation received from peer.
			mode: The message mode.
			local_options: Options we agree to enable on our side when peer asks.
			remote_options: Options we allow peer to enable when peer offers.
			line_terminator: The byte sequence appended to messages sent in line mode.
		"""
		self._options: OptionTable = OptionTable(local_options=local_options, remote_options=remote_options)
		self._parser: SubnegotiationParser = SubnegotiationParser()
		self._decoder: DecodeStateMachine = DecodeStateMachine(
			self._options, parser=self._parser, mode=mode, max_buffer_size=max_buffer_size
		)
		self._encoder: EncodeEngine = EncodeEngine(line_terminator=line_terminator)

	@property
	def options(self) -> OptionTable:
		"""The negotiation state of every option."""
		return self._options

	@property
	def parser(self) -> SubnegotiationParser:
		"""The subnegotiation parser, which accepts handlers for more options."""
		return self._parser

	@property
	def max_buffer_size(self) -> int:
		"""The maximum size of a line or subnegotiation received from peer."""
		return self._decoder.max_buffer_size

	@property
	def mode(self) -> MessageMode:
		"""The message mode."""
		return self._decoder.mode

	@mode.setter
	def mode(self, value: MessageMode) -> None:
		self.set_mode(value)

	@property
	def needs_more_input(self) -> bool:
		"""True if input ended in the middle of a command or subnegotiation, False otherwise."""
		return self._decoder.needs_more_input

	def set_mode(self, mode: MessageMode) -> None:
		"""
		Switches between line mode and character mode.

		A partial line which was buffered in line mode is emitted as a message by the next
		call to `decode` in character mode.

		Args:
			mode: The new message mode.
		"""
		if mode is not self._decoder.mode:
			logger.debug(f"Switching from {self._decoder.mode.name} to {mode.name} mode.")
			self._decoder.mode = mode

	def decode(self, buffer: bytearray) -> list[TelnetEvent]:
		"""
		Decodes the bytes received from peer.

		Consumed bytes are removed from the start of the buffer.

		Args:
			buffer: The bytes received from peer.

		Returns:
			The decoded events, in order.

		Raises:
			TypeError: Buffer is not a bytearray.
			BufferOverflowError: Peer sent a line or subnegotiation longer than the max buffer size.
				The connection should be closed.
		"""
		if not isinstance(buffer, bytearray):
			raise TypeError(f"Mutable bytearray required, not {type(buffer).__name__}.")
		try:
			result: DecodeResult = self._decoder.decode(buffer)
		except BufferOverflowError as e:
			del buffer[: e.consumed]
			raise
		del buffer[: result.consumed]
		return list(result.events)

	def decode_bytes(self, data: BytesLike) -> DecodeResult:
		"""
		Decodes bytes received from peer without modifying them.

		Args:
			data: The bytes received from peer.

		Returns:
			The decoded events, and the number of bytes consumed.

		Raises:
			BufferOverflowError: Peer sent a line or subnegotiation longer than the max buffer size.
		"""
		return self._decoder.decode(data)

	def encode(self, event: TelnetEvent) -> bytes:
		"""
		Encodes an event to be sent to peer.

		Negotiations are recorded in the option table. A negotiation which would be redundant,
		because the option is already in the requested state or being negotiated, is not sent.

		Args:
			event: The event to be encoded.

		Returns:
			The bytes to send. These are empty if the event was a redundant negotiation.
		"""
		if isinstance(event, Negotiation) and not self._options.request(event.verb, event.option):
			return b""
		return self._encoder.encode(event, mode=self._decoder.mode)

	def take_replies(self) -> bytes:
		"""
		Collects the responses to negotiations received from peer.

		Returns:
			The encoded responses, which must be sent to peer.
		"""
		replies: list[Negotiation] = self._decoder.replies[:]
		self._decoder.replies.clear()
		return b"".join(self._encoder.encode(reply) for reply in replies)

	def flush(self) -> list[TelnetEvent]:
		"""
		Emits the partial line received from peer, if any.

		Returns:
			A message event for the partial line, or an empty list.
		"""
		return self._decoder.flush()

	def snapshot(self) -> DecoderSnapshot:
		"""
		Captures the decoding state.

		Returns:
			An immutable copy of the decoding state.
		"""
		return self._decoder.snapshot()

	def restore(self, snapshot: DecoderSnapshot) -> None:
		"""
		Resumes decoding from a snapshot.

		Args:
			snapshot: The decoding state to restore.
		"""
		self._decoder.restore(snapshot)

	def reset(self) -> None:
		"""Discards partial input, pending replies, and all option state."""
		self._decoder.reset()
		self._options.reset()
