# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""
Telnet Constants.

Definitions for the command, option, and subnegotiation bytes understood by the codec.

---
ASCII Definitions

Attributes:
	NULL: No operation. Follows a CR which is not part of a new line.
	LF: Moves the printer to the next print line, keeping the same horizontal position.
	CR: Moves the printer to the left margin of the current line.
	CR_LF: The NVT end of line sequence.
	CR_NULL: The NVT sequence for a bare carriage return.

---
Telnet Command Definitions

Attributes:
	IAC: (Interpret As Command) Indicates the start of a Telnet command.
	NOP: No operation.
	GA: The Go Ahead signal.
	WILL: Indicates the desire to begin performing, or confirmation that you are now performing,
		the indicated option.
	WONT: Indicates the refusal to perform, or refusal to continue performing, the indicated option.
	DO: Indicates the request that the other party perform, or confirmation that you are
		expecting the other party to perform, the indicated option.
	DONT: Indicates the demand that the other party stop performing, or confirmation that you
		are no longer expecting the other party to perform, the indicated option.
	SB: Indicates what follows is a subnegotiation of the indicated option.
	SE: End of subnegotiation parameters.

---
Telnet Option Definitions

Attributes:
	ECHO: (User-to-Server) Asks the server to send Echos of the transmitted data.
	SGA: Suppress Go Ahead. Most modern servers should suppress it.
	TTYPE: Negotiate terminal type.
	END_OF_RECORD: Negotiate the use of the EOR command.
	NAWS: Negotiate About Window Size.
	LINEMODE: Allow line buffering to be negotiated.
	NEW_ENVIRON: Negotiate environment variables.
	CHARSET: Negotiate character set.

---
Mud Specific Options

Attributes:
	GMCP: Generic Mud Communication Protocol.
	MCCP2: Mud Client Compression Protocol V2.
	MSDP: Mud Server Data Protocol.
	MSP: Mud Sound Protocol.
	MSSP: Mud Server Status Protocol.
	MXP: Mud Extention Protocol.
"""


# Future Modules:
from __future__ import annotations


# Protocol specifications.
# Telnet: https://www.rfc-editor.org/rfc/rfc854
# Telnet Option Specifications: https://www.rfc-editor.org/rfc/rfc855
# Negotiate About Window Size: https://www.rfc-editor.org/rfc/rfc1073
# Telnet Charset Option: https://www.rfc-editor.org/rfc/rfc2066


DESCRIPTIONS: dict[bytes, str] = {}


def describe(description: str, value: int) -> bytes:
	"""
	Stores the description of a negotiation.

	Args:
		description: The negotiation description.
		value: The ordinal value of the negotiation.

	Returns:
		The negotiation byte.
	"""
	byte: bytes = bytes([value])
	DESCRIPTIONS[byte] = description
	return byte


def describe_sequence(data: bytes) -> str:
	"""
	Builds a human readable description of a command sequence, for logging.

	Args:
		data: The command bytes, without any subnegotiation payload.

	Returns:
		The space separated names of each byte, or its repr if the byte is unnamed.
	"""
	return " ".join(DESCRIPTIONS.get(data[i : i + 1], repr(data[i : i + 1])) for i in range(len(data)))


# ASCII characters.
NULL: bytes = bytes([0])
LF: bytes = bytes([10])
CR: bytes = bytes([13])
CR_LF: bytes = CR + LF
CR_NULL: bytes = CR + NULL

# Telnet Commands.
SE: bytes = describe("SE", 240)  # End Subnegotiation.
NOP: bytes = describe("NOP", 241)  # No Operation.
DM: bytes = describe("DM", 242)  # Data Mark.
BRK: bytes = describe("BRK", 243)  # Break.
IP: bytes = describe("IP", 244)  # Interrupt Process permanently.
AO: bytes = describe("AO", 245)  # Abort output but let prog finish.
AYT: bytes = describe("AYT", 246)  # Are You There?
EC: bytes = describe("EC", 247)  # Erase Character.
EL: bytes = describe("EL", 248)  # Erase Line.
GA: bytes = describe("GA", 249)  # Go Ahead.
SB: bytes = describe("SB", 250)  # Begin Subnegotiation.
WILL: bytes = describe("WILL", 251)
WONT: bytes = describe("WONT", 252)
DO: bytes = describe("DO", 253)
DONT: bytes = describe("DONT", 254)
IAC: bytes = describe("IAC", 255)
IAC_IAC: bytes = IAC + IAC
NEGOTIATION_BYTES: frozenset[bytes] = frozenset((WILL, WONT, DO, DONT))
NEGOTIATION_ORDS: frozenset[int] = frozenset(ord(i) for i in NEGOTIATION_BYTES)

# Telnet Options.
# See https://www.iana.org/assignments/telnet-options
# Descriptions are not stored for options, as their byte values overlap the ASCII range.
# Names of options are provided by the TelnetOption enumeration instead.
ECHO: bytes = bytes([1])  # RFC 857.
SGA: bytes = bytes([3])  # RFC 858.
TTYPE: bytes = bytes([24])  # RFC 1091, MTTS.
END_OF_RECORD: bytes = bytes([25])  # RFC 885.
NAWS: bytes = bytes([31])  # RFC 1073.
LINEMODE: bytes = bytes([34])  # RFC 1116, 1184.
NEW_ENVIRON: bytes = bytes([39])  # RFC 1571, 1572.
CHARSET: bytes = bytes([42])  # RFC 2066.

# Mud Specific Options.
MSDP: bytes = bytes([69])  # Mud Server Data Protocol.
MSSP: bytes = bytes([70])  # Mud Server Status Protocol.
MCCP2: bytes = bytes([86])  # Mud Client Compression Protocol V2.
MSP: bytes = bytes([90])  # Mud Sound Protocol.
MXP: bytes = bytes([91])  # Mud Extention Protocol.
GMCP: bytes = bytes([201])  # Generic Mud Communication Protocol.

# Negotiate About Window Size (RFC 1073) Constants.
NAWS_PAYLOAD_LENGTH: int = 4

# Telnet Charset Option (RFC 2066) Constants.
CHARSET_REQUEST: bytes = bytes([1])
CHARSET_ACCEPTED: bytes = bytes([2])
CHARSET_REJECTED: bytes = bytes([3])
CHARSET_TTABLE_IS: bytes = bytes([4])
CHARSET_TTABLE_REJECTED: bytes = bytes([5])
CHARSET_TTABLE_ACK: bytes = bytes([6])
CHARSET_TTABLE_NAK: bytes = bytes([7])
CHARSET_SEPARATOR: bytes = b" "
