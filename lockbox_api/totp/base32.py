"""
Base32 Decoding

Permissive RFC 4648 Base32 decoder matching the lockbox firmware.
"""

BASE32_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ234567'
PADDING = '='

_ALPHABET_INDEX = {char: index for index, char in enumerate(BASE32_ALPHABET)}


def decode_base32(secret: str) -> bytes:
    """
    Decode a Base32 secret the way the firmware does.

    Decoding stops at the first padding character. Characters outside the
    alphabet (including lowercase letters) are skipped, and leftover bits
    that do not fill a whole byte are dropped.

    Args:
        secret: Base32 encoded secret

    Returns:
        Decoded key bytes (possibly empty)
    """
    decoded = bytearray()
    buffer = 0
    bits_left = 0

    for char in secret:
        if char == PADDING:
            break

        value = _ALPHABET_INDEX.get(char)
        if value is None:
            continue

        buffer = ((buffer << 5) | value) & 0xFFFF
        bits_left += 5

        if bits_left >= 8:
            decoded.append((buffer >> (bits_left - 8)) & 0xFF)
            bits_left -= 8

    return bytes(decoded)
