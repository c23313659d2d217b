from binascii import unhexlify
from typing import Union

from pyesrp.exceptions import ValueFormatError


def to_bytes(data: int) -> bytes:
    """Minimal big-endian encoding, zero is encoded as empty bytes"""
    return data.to_bytes((data.bit_length() + 7) // 8, byteorder='big')


def to_int(data: bytes) -> int:
    return int.from_bytes(data, byteorder='big')


class Value:
    """Representation-independent SRP value

    Crypto primitives work with raw bytes, transfers between client and server usually
    use hex strings and the protocol math uses integers. Value keeps all three views of
    the same unsigned big-endian number.

    Hex is always derived from bytes, so two Values are equal only when their bytes are equal:
    Value(b'\\x00\\xff') and Value.from_int(255) are different values.
    """
    def __init__(self, raw: Union[bytes, bytearray]) -> None:
        if not isinstance(raw, (bytes, bytearray)):
            raise ValueFormatError(f'Value expects bytes, got {type(raw).__name__}')
        self._bytes = bytes(raw)
        self._hex = self._bytes.hex()
        self._int = to_int(self._bytes)

    @classmethod
    def from_hex(cls, data: str) -> 'Value':
        if not isinstance(data, str):
            raise ValueFormatError(f'Hex value expects str, got {type(data).__name__}')
        try:
            raw = unhexlify(data)
        except ValueError as e:  # binascii.Error included
            raise ValueFormatError(f'Malformed hex value: {data!r}') from e
        return cls(raw)

    @classmethod
    def from_int(cls, data: int) -> 'Value':
        if isinstance(data, bool) or not isinstance(data, int):
            raise ValueFormatError(f'Integer value expects int, got {type(data).__name__}')
        if data < 0:
            raise ValueFormatError('Value is unsigned, negative integers are not allowed')
        return cls(to_bytes(data))

    def to_bytes(self) -> bytes:
        return self._bytes

    def to_hex(self) -> str:
        """Lowercase hex, always of even length"""
        return self._hex

    def to_int(self) -> int:
        return self._int

    def to_bin(self) -> str:
        """Debug form that uses \\xNN notation for non-printable bytes"""
        return repr(self._bytes)[2:-1]

    def __bytes__(self) -> bytes:
        return self._bytes

    def __int__(self) -> int:
        return self._int

    def __len__(self) -> int:
        return len(self._bytes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __repr__(self) -> str:
        return f'Value({self._hex!r})'
