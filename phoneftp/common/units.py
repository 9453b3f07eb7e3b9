"""Byte count formatting."""

from phoneftp.common.constants import BYTE_UNITS, UNIT_STEP
from phoneftp.common.protocol_definitions import FormattedSize


def format_bytes(num_bytes: int) -> FormattedSize:
    """Scale a byte count to the largest decimal unit keeping it under 1000.

    Stops at TB, so very large counts are reported as thousands of TB.
    """
    value = num_bytes
    unit_index = 0

    while value >= UNIT_STEP and unit_index < len(BYTE_UNITS) - 1:
        value /= UNIT_STEP
        unit_index += 1

    return FormattedSize(value=f"{value:.2f}", unit=BYTE_UNITS[unit_index])
