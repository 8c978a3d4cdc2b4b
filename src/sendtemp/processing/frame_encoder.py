"""
Encoding of temperature readings into the 24-byte display frame.

Layout:
    byte 0      integer Celsius, clamped to [0, 255]
    byte 1      first decimal digit, clamped to [0, 9]
    bytes 2-23  zero padding
"""
import math

from sendtemp.models.temperature import TemperatureSample

FRAME_LENGTH = 24
MAX_INTEGER = 255
MAX_DIGIT = 9


def encode_celsius(celsius: float) -> bytes:
    """
    Encode a Celsius value into an update frame.

    Values below zero encode as 0.0. Values above 255 keep their decimal
    digit with the integer byte saturated at 255. The decimal digit is the
    fractional part rounded half-up to the nearest tenth; a fraction that
    rounds up to a whole degree is capped at 9 so the integer byte always
    stays floor(value).

    Raises:
        ValueError: if celsius is NaN
    """
    if math.isnan(celsius):
        raise ValueError("Cannot encode NaN temperature")

    buffer = bytearray(FRAME_LENGTH)
    if celsius <= 0:
        return bytes(buffer)
    if math.isinf(celsius):
        buffer[0] = MAX_INTEGER
        return bytes(buffer)

    integer_part = math.floor(celsius)
    # Fraction only, so huge values never overflow; rounded to absorb
    # binary error (45.05 - 45 -> 0.049999...)
    fraction = celsius - integer_part
    digit = math.floor(round(fraction * 10, 6) + 0.5)

    buffer[0] = min(integer_part, MAX_INTEGER)
    buffer[1] = max(0, min(digit, MAX_DIGIT))
    return bytes(buffer)


def encode_sample(sample: TemperatureSample) -> bytes:
    """Encode an available sample. Raises ValueError on an unavailable one."""
    if not sample.available:
        raise ValueError("Cannot encode an unavailable temperature sample")
    return encode_celsius(sample.celsius)


def describe_frame(frame: bytes) -> str:
    """Short hex rendering of the meaningful bytes, e.g. '2d 03'."""
    return f"{frame[0]:02x} {frame[1]:02x}"
