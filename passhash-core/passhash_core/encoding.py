"""
Hash Encoding
=============
The crypt() flavoured base64 used by the legacy hash formats.
"""

ITOA64 = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def encode64(data: bytes, count: int) -> str:
    """
    Encode the first `count` bytes of `data`.

    Three input bytes are packed little-endian into four 6-bit symbols.
    A trailing partial group emits one symbol more than it has bytes.

    Args:
        data: Raw bytes
        count: Number of bytes to encode

    Returns:
        Encoded string of ceil(8 * count / 6) characters
    """
    output = []
    i = 0
    while i < count:
        value = data[i]
        i += 1
        output.append(ITOA64[value & 0x3F])
        if i < count:
            value |= data[i] << 8
        output.append(ITOA64[(value >> 6) & 0x3F])
        if i >= count:
            break
        i += 1
        if i < count:
            value |= data[i] << 16
        output.append(ITOA64[(value >> 12) & 0x3F])
        if i >= count:
            break
        i += 1
        output.append(ITOA64[(value >> 18) & 0x3F])
    return "".join(output)


def char_index(char: str) -> int:
    """Position of `char` in the alphabet, or -1."""
    return ITOA64.find(char) if len(char) == 1 else -1
