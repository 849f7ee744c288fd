from __future__ import annotations

import hashlib

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def double_sha256(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def base58_encode(data: bytes) -> str:
    num = int.from_bytes(data, "big")
    encoded = ""
    while num > 0:
        num, rem = divmod(num, 58)
        encoded = _B58_ALPHABET[rem] + encoded
    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    return "1" * leading_zeros + encoded


def base58_decode(value: str) -> bytes:
    num = 0
    for char in value:
        index = _B58_ALPHABET.find(char)
        if index < 0:
            raise ValueError(f"Invalid base58 character: {char!r}")
        num = num * 58 + index
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    leading_ones = len(value) - len(value.lstrip("1"))
    return b"\x00" * leading_ones + body


def base58check_encode(payload: bytes) -> str:
    return base58_encode(payload + double_sha256(payload)[:4])


def base58check_decode(value: str) -> bytes:
    raw = base58_decode(value)
    if len(raw) < 5:
        raise ValueError(f"base58check value too short: {value}")
    payload, checksum = raw[:-4], raw[-4:]
    if double_sha256(payload)[:4] != checksum:
        raise ValueError(f"base58check checksum mismatch: {value}")
    return payload


def decode_node_message(message: str) -> str:
    """Node error messages arrive hex-encoded; fall back to the raw text."""
    try:
        return bytes.fromhex(message).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return message
