"""
Decoding of subprocess output for rconfig.

Subprocess output arrives as bytes. How those bytes become text depends on
the platform:

- On POSIX the bytes are an opaque OS string and are converted as-is with
  the filesystem encoding; nothing is transcoded.
- On Windows the console writes in its active code page, so the bytes are
  transcoded to UTF-16 with MultiByteToWideChar using that code page.

Decoding never fails. Bytes that cannot be represented end up as U+FFFD once
the text goes through to_lossy_text().
"""

import os
import re


# MultiByteToWideChar takes the input length as a signed 32-bit int
MAX_TRANSCODE_LENGTH = 2**31 - 1

_LONE_SURROGATES = re.compile('[\ud800-\udfff]')


class PosixDecoder:
    """Treat output bytes as an OS string."""

    def decode(self, data: bytes) -> str:
        return os.fsdecode(data)


class ConsoleCodePageDecoder:
    """Transcode output bytes from the console's active code page."""

    def __init__(self, kernel32=None):
        if kernel32 is None:
            import ctypes

            kernel32 = getattr(ctypes, "windll").kernel32
        self.kernel32 = kernel32

    def code_page(self) -> int:
        return self.kernel32.GetConsoleCP()

    def transcode(self, data: bytes, code_page: int) -> str:
        """Convert bytes in the given code page to text.

        The length of the result is queried first with a null buffer,
        then a buffer of that size is filled by a second call.
        """
        import ctypes

        if len(data) > MAX_TRANSCODE_LENGTH:
            raise ValueError(
                f"cannot transcode {len(data)} bytes, "
                f"limit is {MAX_TRANSCODE_LENGTH}"
            )
        if not data:
            return ''

        length = self.kernel32.MultiByteToWideChar(
            code_page, 0, data, len(data), None, 0
        )
        if length <= 0:
            return ''

        buffer = ctypes.create_unicode_buffer(length)
        length = self.kernel32.MultiByteToWideChar(
            code_page, 0, data, len(data), buffer, length
        )
        return buffer[:length]

    def decode(self, data: bytes) -> str:
        return self.transcode(data, self.code_page())


_decoder = None


def default_decoder():
    """Get the decoder for the running platform, created once."""
    global _decoder
    if _decoder is None:
        if os.name == 'nt':
            _decoder = ConsoleCodePageDecoder()
        else:
            _decoder = PosixDecoder()
    return _decoder


def decode_output(data: bytes, decoder=None) -> str:
    """Decode raw subprocess output into native text."""
    if not data:
        return ''
    return (decoder or default_decoder()).decode(data)


def to_lossy_text(text: str) -> str:
    """Replace lone surrogates, left by undecodable bytes, with U+FFFD."""
    return _LONE_SURROGATES.sub('\ufffd', text)
