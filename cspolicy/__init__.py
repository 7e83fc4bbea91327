"""
cspolicy - immutable Content-Security-Policy builder
"""

__version__ = "0.1.0"

from cspolicy.directives import (
    FETCH_DIRECTIVES,
    HEADER_NAME,
    MINIMAL_DIRECTIVES,
    REPORT_ONLY_HEADER_NAME,
)
from cspolicy.logging_config import configure_logging, setup_logging
from cspolicy.policy import Policy, SourceInput
from cspolicy.sink import DictHeaderSink, HeaderSink, ResponseHeaderSink
from cspolicy.source_list import SourceList

__all__ = [
    'FETCH_DIRECTIVES',
    'HEADER_NAME',
    'MINIMAL_DIRECTIVES',
    'REPORT_ONLY_HEADER_NAME',
    'DictHeaderSink',
    'HeaderSink',
    'Policy',
    'ResponseHeaderSink',
    'SourceInput',
    'SourceList',
    'configure_logging',
    'setup_logging',
]
