"""Concrete system collaborators used by the palette."""

from .network import HttpIpLookup, IpLookupError
from .port_intel import PORT_DATABASE, PROCESS_HINTS, ServiceCategory, ServiceInfo, service_info
from .ports import PsutilPortProvider
from .processes import PsutilProcessProvider

__all__ = [
    "HttpIpLookup",
    "IpLookupError",
    "PORT_DATABASE",
    "PROCESS_HINTS",
    "PsutilPortProvider",
    "PsutilProcessProvider",
    "ServiceCategory",
    "ServiceInfo",
    "service_info",
]
