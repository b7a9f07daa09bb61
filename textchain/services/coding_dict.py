"""
Coding dictionaries: canonical token <-> code mappings for the Markov chain.

Every chain owns exactly one dictionary, and every State and TransitionTable
stores codes produced by it. The variants trade memory for encode speed:

- IdentityCodingDictionary: no canonicalization at all
- FlyweightCodingDictionary: interns equal strings onto one instance
- *ArrayCodingDictionary: append-only token list, linear-scan lookup (smallest)
- *HashArrayCodingDictionary: same list plus a token -> code index (fastest)

The "Short" variants use 16-bit signed codes, the "Int" variants 32-bit.
Codes wrap silently once the vocabulary outgrows the code width, so a
Short dictionary must only be used for vocabularies below 32768 tokens.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Hashable, List, Optional, Type, Union

Code = Hashable


class CodingDictionary(ABC):
    """Canonicalizes tokens to compact codes and back."""

    __slots__ = ()

    @abstractmethod
    def encode(self, token: str) -> Code:
        """Return the code for token, registering it if it's new."""

    @abstractmethod
    def find_code(self, token: str) -> Optional[Code]:
        """Return the code for token if it's registered, else None. Never registers."""

    @abstractmethod
    def decode(self, code: Code) -> str:
        """Return the token previously encoded as code."""

    @abstractmethod
    def size(self) -> int:
        """Number of distinct tokens registered so far."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size()})"


class IdentityCodingDictionary(CodingDictionary):
    """
    Pass-through dictionary: the token is its own code.

    Nothing is registered, so size() always reports 0 rather than the
    number of distinct tokens seen.
    """

    __slots__ = ()

    def encode(self, token: str) -> str:
        return token

    def find_code(self, token: str) -> str:
        return token

    def decode(self, code: str) -> str:
        return code

    def size(self) -> int:
        return 0


class FlyweightCodingDictionary(CodingDictionary):
    """Collapses equal token strings onto one shared instance."""

    __slots__ = ("_tokens",)

    def __init__(self):
        self._tokens: Dict[str, str] = {}

    def encode(self, token: str) -> str:
        return self._tokens.setdefault(token, token)

    def find_code(self, token: str) -> Optional[str]:
        return self._tokens.get(token)

    def decode(self, code: str) -> str:
        return code

    def size(self) -> int:
        return len(self._tokens)


class ArrayCodingDictionary(CodingDictionary):
    """
    Stores tokens in an append-only list; a token's code is its list index.

    Lookups scan the list, so encode is O(size). Subclasses pick the code
    width via CODE_BITS and may override the lookup or the storage format.
    """

    __slots__ = ("_tokens",)

    CODE_BITS = 32

    def __init__(self):
        self._tokens: List[Union[str, bytes]] = []

    # --- storage format hooks ---
    def _pack(self, token: str) -> Union[str, bytes]:
        return token

    def _unpack(self, stored: Union[str, bytes]) -> str:
        return stored  # type: ignore[return-value]

    # --- lookup ---
    def _find(self, stored: Union[str, bytes]) -> Optional[int]:
        try:
            return self._tokens.index(stored)
        except ValueError:
            return None

    def _register(self, stored: Union[str, bytes]) -> int:
        self._tokens.append(stored)
        return len(self._tokens) - 1

    @classmethod
    def wrap_code(cls, index: int) -> int:
        """Narrow an index into the signed range of CODE_BITS (no overflow check)."""
        half = 1 << (cls.CODE_BITS - 1)
        return ((index + half) % (half << 1)) - half

    def encode(self, token: str) -> int:
        stored = self._pack(token)
        index = self._find(stored)
        if index is None:
            index = self._register(stored)
        return self.wrap_code(index)

    def find_code(self, token: str) -> Optional[int]:
        index = self._find(self._pack(token))
        return None if index is None else self.wrap_code(index)

    def decode(self, code: int) -> str:
        if not 0 <= code < len(self._tokens):
            raise KeyError(f"code {code!r} was not produced by this dictionary")
        return self._unpack(self._tokens[code])

    def size(self) -> int:
        return len(self._tokens)


class HashArrayCodingDictionary(ArrayCodingDictionary):
    """Array dictionary backed by a token -> code index for O(1) encodes."""

    __slots__ = ("_index",)

    def __init__(self):
        super().__init__()
        self._index: Dict[Union[str, bytes], int] = {}

    def _find(self, stored: Union[str, bytes]) -> Optional[int]:
        return self._index.get(stored)

    def _register(self, stored: Union[str, bytes]) -> int:
        index = super()._register(stored)
        self._index[stored] = index
        return index


class _Utf8Storage:
    """Keeps tokens as UTF-8 bytes instead of str objects."""

    __slots__ = ()

    def _pack(self, token: str) -> bytes:
        return token.encode("utf-8")

    def _unpack(self, stored: bytes) -> str:
        return stored.decode("utf-8")


class ShortArrayCodingDictionary(ArrayCodingDictionary):
    __slots__ = ()
    CODE_BITS = 16


class IntArrayCodingDictionary(ArrayCodingDictionary):
    __slots__ = ()
    CODE_BITS = 32


class ShortHashArrayCodingDictionary(HashArrayCodingDictionary):
    __slots__ = ()
    CODE_BITS = 16


class IntHashArrayCodingDictionary(HashArrayCodingDictionary):
    __slots__ = ()
    CODE_BITS = 32


class ShortArrayCodingDictionaryUtf8(_Utf8Storage, ShortArrayCodingDictionary):
    __slots__ = ()


class ShortHashArrayCodingDictionaryUtf8(_Utf8Storage, ShortHashArrayCodingDictionary):
    __slots__ = ()


DICTIONARY_TYPES: Dict[str, Type[CodingDictionary]] = {
    cls.__name__: cls
    for cls in (
        IdentityCodingDictionary,
        FlyweightCodingDictionary,
        ShortArrayCodingDictionary,
        IntArrayCodingDictionary,
        ShortHashArrayCodingDictionary,
        IntHashArrayCodingDictionary,
        ShortArrayCodingDictionaryUtf8,
        ShortHashArrayCodingDictionaryUtf8,
    )
}


def create_dictionary(name: str) -> CodingDictionary:
    """Instantiate a dictionary by class name (see DICTIONARY_TYPES)."""
    try:
        return DICTIONARY_TYPES[name]()
    except KeyError:
        raise ValueError(
            f"unknown coding dictionary {name!r}; expected one of {sorted(DICTIONARY_TYPES)}"
        ) from None
