# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Telnet option negotiation state."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

# Local Modules:
from .events import NEGOTIATION_EVENTS, Do, Dont, Negotiation, Will, Wont
from .options import TelnetOption
from .telnet_constants import DESCRIPTIONS, DO, DONT, NEGOTIATION_BYTES, WILL, WONT
from .typedef import OptionLike, OptionSetType


DEFAULT_LOCAL_OPTIONS: frozenset[TelnetOption] = frozenset((TelnetOption.ECHO, TelnetOption.SGA))
DEFAULT_REMOTE_OPTIONS: frozenset[TelnetOption] = frozenset((TelnetOption.NAWS, TelnetOption.SGA))


logger: logging.Logger = logging.getLogger(__name__)


class NegotiationState(Enum):
	"""The state of an option on one side of the connection."""

	DISABLED = auto()
	ENABLED = auto()
	PENDING_ENABLE = auto()
	PENDING_DISABLE = auto()

	@property
	def is_pending(self) -> bool:
		"""True if a request about the option is awaiting a response, False otherwise."""
		return self in (NegotiationState.PENDING_ENABLE, NegotiationState.PENDING_DISABLE)


class OptionState:
	"""
	Represents the state of an option on both sides of a Telnet connection.

	Some options can be enabled on a particular side of the connection
	(RFC 1073 for example: only the client can have NAWS enabled).
	Other options can be enabled on either or both sides (such as RFC 1372: each
	side can have its own flow control state).

	Attributes:
		local: The state of the option on this side of the connection.
		remote: The state of the option on the other side of the connection.
	"""

	def __init__(self) -> None:
		self.local: NegotiationState = NegotiationState.DISABLED
		self.remote: NegotiationState = NegotiationState.DISABLED

	def __repr__(self) -> str:
		return f"<OptionState local={self.local.name} remote={self.remote.name}>"


@dataclass(frozen=True)
class NegotiationResult:
	"""The outcome of a negotiation received from peer."""

	event: Negotiation
	"""The received negotiation, to be surfaced to the application."""
	reply: Optional[Negotiation] = None
	"""A negotiation which must be sent to peer in response, if any."""


def _describe(verb: bytes, option: TelnetOption) -> str:
	return f"IAC {DESCRIPTIONS[verb]} {option.name}"


class OptionTable:
	"""
	Tracks the negotiation state of every option on a connection.

	Which options are accepted when peer asks for them is decided by the caller, through the
	local and remote option sets. Local options are those which we agree to perform when peer
	sends DO. Remote options are those which we allow peer to perform when peer sends WILL.
	"""

	def __init__(
		self,
		*,
		local_options: Optional[OptionSetType] = None,
		remote_options: Optional[OptionSetType] = None,
	) -> None:
		"""
		Defines the constructor.

		Args:
			local_options: Options we agree to enable on our side. If None, ECHO and SGA are used.
			remote_options: Options we allow peer to enable. If None, NAWS and SGA are used.
		"""
		self.local_options: frozenset[TelnetOption] = (
			DEFAULT_LOCAL_OPTIONS
			if local_options is None
			else frozenset(TelnetOption(i) for i in local_options)
		)
		self.remote_options: frozenset[TelnetOption] = (
			DEFAULT_REMOTE_OPTIONS
			if remote_options is None
			else frozenset(TelnetOption(i) for i in remote_options)
		)
		self._options: dict[TelnetOption, OptionState] = {}
		"""A mapping of options to their current state."""

	def state(self, option: OptionLike) -> OptionState:
		"""
		Gets the state of a Telnet option.

		Args:
			option: The option to get state.

		Returns:
			An object containing the option state.
		"""
		option = TelnetOption(option)
		if option not in self._options:
			self._options[option] = OptionState()
		return self._options[option]

	def local_state(self, option: OptionLike) -> NegotiationState:
		"""
		Gets the state of an option on our side.

		Args:
			option: The option.

		Returns:
			The negotiation state.
		"""
		return self._options[option].local if option in self._options else NegotiationState.DISABLED

	def remote_state(self, option: OptionLike) -> NegotiationState:
		"""
		Gets the state of an option on peer's side.

		Args:
			option: The option.

		Returns:
			The negotiation state.
		"""
		return self._options[option].remote if option in self._options else NegotiationState.DISABLED

	def is_enabled_local(self, option: OptionLike) -> bool:
		"""True if the option is enabled on our side, False otherwise."""
		return self.local_state(option) is NegotiationState.ENABLED

	def is_enabled_remote(self, option: OptionLike) -> bool:
		"""True if the option is enabled on peer's side, False otherwise."""
		return self.remote_state(option) is NegotiationState.ENABLED

	def reset(self) -> None:
		"""Forgets the state of all options."""
		self._options.clear()

	def request(self, verb: bytes, option: OptionLike) -> bool:
		"""
		Records a negotiation which we are about to send to peer.

		WILL and WONT change the state on our side, DO and DONT the state on peer's side.

		Args:
			verb: The negotiation command, one of DO, DONT, WILL, or WONT.
			option: The option being negotiated.

		Returns:
			True if the negotiation should be sent, False if it would be redundant.

		Raises:
			ValueError: Verb is not a negotiation command.
		"""
		if verb not in NEGOTIATION_BYTES:
			raise ValueError(f"Invalid negotiation command {verb!r}.")
		option = TelnetOption(option)
		state: OptionState = self.state(option)
		is_local: bool = verb in (WILL, WONT)
		current: NegotiationState = state.local if is_local else state.remote
		is_enable: bool = verb in (WILL, DO)
		side: str = "our" if is_local else "peer's"
		if current.is_pending:
			logger.warning(
				f"Not sending {_describe(verb, option)}: the option is already being negotiated "
				+ f"on {side} side."
			)
			return False
		if (current is NegotiationState.ENABLED) is is_enable:
			logger.warning(
				f"Not sending {_describe(verb, option)}: the option is already "
				+ f"{'enabled' if is_enable else 'disabled'} on {side} side."
			)
			return False
		new: NegotiationState = (
			NegotiationState.PENDING_ENABLE if is_enable else NegotiationState.PENDING_DISABLE
		)
		if is_local:
			state.local = new
		else:
			state.remote = new
		logger.debug(f"Send to peer: {_describe(verb, option)}")
		return True

	def apply(self, verb: bytes, option: OptionLike) -> NegotiationResult:
		"""
		Processes a negotiation received from peer.

		Args:
			verb: The negotiation command, one of DO, DONT, WILL, or WONT.
			option: The option being negotiated.

		Returns:
			The received negotiation, and the reply which must be sent to peer, if any.

		Raises:
			ValueError: Verb is not a negotiation command.
		"""
		if verb not in NEGOTIATION_BYTES:
			raise ValueError(f"Invalid negotiation command {verb!r}.")
		option = TelnetOption(option)
		logger.debug(f"Received from peer: {_describe(verb, option)}")
		event: Negotiation = NEGOTIATION_EVENTS[verb](option)
		reply: Optional[Negotiation]
		if verb == DO:
			reply = self._on_enable_request(option, is_local=True)
		elif verb == WILL:
			reply = self._on_enable_request(option, is_local=False)
		elif verb == DONT:
			reply = self._on_disable_request(option, is_local=True)
		else:
			reply = self._on_disable_request(option, is_local=False)
		if reply is not None:
			logger.debug(f"Reply to peer: {_describe(reply.verb, option)}")
		return NegotiationResult(event, reply)

	def _on_enable_request(self, option: TelnetOption, *, is_local: bool) -> Optional[Negotiation]:
		state: OptionState = self.state(option)
		current: NegotiationState = state.local if is_local else state.remote
		new: NegotiationState = current
		reply: Optional[Negotiation] = None
		if current is NegotiationState.DISABLED:
			# Peer is unilaterally asking for an option to be enabled.
			supported = self.local_options if is_local else self.remote_options
			if option in supported:
				new = NegotiationState.ENABLED
				reply = Will(option) if is_local else Do(option)
			else:
				reply = Wont(option) if is_local else Dont(option)
		elif current is NegotiationState.PENDING_ENABLE:
			# Peer agreed to enable an option at our request.
			new = NegotiationState.ENABLED
		elif current is NegotiationState.PENDING_DISABLE:
			# A disable request can't be refused, so this is a misbehaving peer.
			logger.warning(
				f"Peer asked for {option.name} to be enabled while we were disabling it. "
				+ "Treating the option as disabled."
			)
			new = NegotiationState.DISABLED
		# Otherwise peer is asking to enable an already enabled option. Ignore this.
		if is_local:
			state.local = new
		else:
			state.remote = new
		return reply

	def _on_disable_request(self, option: TelnetOption, *, is_local: bool) -> Optional[Negotiation]:
		state: OptionState = self.state(option)
		current: NegotiationState = state.local if is_local else state.remote
		reply: Optional[Negotiation] = None
		if current is NegotiationState.ENABLED:
			# Peer is unilaterally demanding that an option be disabled.
			reply = Wont(option) if is_local else Dont(option)
		elif current is NegotiationState.PENDING_ENABLE:
			logger.debug(f"Peer refuses to enable option {option.name} in response to our request.")
		# A disable request always ends with the option disabled.
		if is_local:
			state.local = NegotiationState.DISABLED
		else:
			state.remote = NegotiationState.DISABLED
		return reply
