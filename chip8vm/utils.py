from collections.abc import Iterable


def display_bytes(data: bytes | bytearray | Iterable[int]) -> str:
    buffer = [hex(b)[2:].zfill(2) for b in bytearray(data)]
    return "|".join(buffer)


def read_address(operation: int) -> int:
    return operation & 0x0FFF


def read_byte(operation: int) -> int:
    return operation & 0x00FF


def nibbles(operation: int) -> tuple[int, int, int, int]:
    return (operation >> 12) & 0xF, (operation >> 8) & 0xF, (operation >> 4) & 0xF, operation & 0xF
