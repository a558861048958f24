# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Shared type definitions."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Union

# Third-party Modules:
from knickknacks.typedef import TypeAlias


if TYPE_CHECKING:  # pragma: no cover
	# Local Modules:
	from .events import TelnetEvent
	from .options import TelnetOption


BytesLike: TypeAlias = Union[bytes, bytearray, memoryview]
OptionLike: TypeAlias = Union["TelnetOption", int]
OptionSetType: TypeAlias = Iterable[OptionLike]
SubnegotiationHandlerType: TypeAlias = Callable[["TelnetOption", bytes], "TelnetEvent"]
SubnegotiationMapType: TypeAlias = dict["TelnetOption", SubnegotiationHandlerType]


__all__: list[str] = [
	"BytesLike",
	"OptionLike",
	"OptionSetType",
	"SubnegotiationHandlerType",
	"SubnegotiationMapType",
]
