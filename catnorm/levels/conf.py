"""Parse configuration classes.

Customize by subclassing and overriding class attributes::

    class ReadrConf(ParseConf):
        absent_values = ('', 'NA')
        trim_ws = True
"""
from typing import Tuple


class ParseConf:
    # strings treated as "no input supplied"; None/NaN/pd.NA always are
    absent_values: Tuple[str, ...] = ('',)
    # strip surrounding whitespace before matching
    trim_ws: bool = False
    # how many offending values to name in the parser's warning line
    report_preview: int = 5


class TrimmedParseConf(ParseConf):
    trim_ws = True


class ReadrConf(ParseConf):
    """Matches readr::parse_factor defaults: na = c('', 'NA'), trim_ws = TRUE."""
    absent_values = ('', 'NA')
    trim_ws = True
