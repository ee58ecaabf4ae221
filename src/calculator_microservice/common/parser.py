"""Parse numeric query parameters."""
import math
import re
from typing import Optional


class NumberParser:
    """
    Parse numeric strings the way browsers and JavaScript runtimes do for query input.

    Leading whitespace is skipped and the longest valid decimal prefix is read,
    so trailing characters are ignored:

        - "42" -> 42.0
        - " -1.5e3px" -> -1500.0
        - "Infinity" -> inf
        - "abc", "" or a missing value -> nan
    """

    # Optional sign, then either Infinity or a decimal literal with an optional exponent
    _PREFIX = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

    @staticmethod
    def parse(text: Optional[str]) -> float:
        """
        Parse the leading number of a string.

        :param str text: Raw parameter value, None when the parameter is absent

        :return: Parsed number, NaN when no numeric prefix exists
        :rtype: float
        """
        if text is None:
            return math.nan
        match = NumberParser._PREFIX.match(text.lstrip())
        if match is None:
            return math.nan
        return float(match.group(0))

    @staticmethod
    def is_number(value: float) -> bool:
        """
        Determine if a parsed value is usable as an operand.

        :param float value: Result of :meth:`parse`

        :return: True unless the value is NaN
        :rtype: bool
        """
        return not math.isnan(value)
