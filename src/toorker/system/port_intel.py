"""Well-known port and process hints used to describe listening services."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum


class ServiceCategory(StrEnum):
    DEV = "dev"
    DATABASE = "database"
    INFRA = "infra"
    SYSTEM = "system"


@dataclass(frozen=True, slots=True)
class ServiceInfo:
    name: str
    description: str
    category: ServiceCategory


_D = ServiceCategory.DEV
_DB = ServiceCategory.DATABASE
_I = ServiceCategory.INFRA

PORT_DATABASE: dict[int, ServiceInfo] = {
    22: ServiceInfo("SSH", "Secure Shell", _I),
    53: ServiceInfo("DNS", "Domain Name System", _I),
    80: ServiceInfo("HTTP", "Web server", _I),
    443: ServiceInfo("HTTPS", "Secure web server", _I),
    1433: ServiceInfo("SQL Server", "Microsoft SQL Server", _DB),
    1521: ServiceInfo("Oracle DB", "Oracle Database", _DB),
    2181: ServiceInfo("ZooKeeper", "Apache ZooKeeper", _I),
    3000: ServiceInfo("Dev Server", "Next.js, React, or Express", _D),
    3001: ServiceInfo("Dev Server", "Node.js (alternate port)", _D),
    3306: ServiceInfo("MySQL", "MySQL / MariaDB", _DB),
    4200: ServiceInfo("Angular", "Angular dev server", _D),
    4500: ServiceInfo("Dev Server", "Development server", _D),
    5000: ServiceInfo("Flask / ASP.NET", "Python or .NET dev server", _D),
    5173: ServiceInfo("Vite", "Vite dev server", _D),
    5174: ServiceInfo("Vite", "Vite dev server (alt)", _D),
    5432: ServiceInfo("PostgreSQL", "PostgreSQL database", _DB),
    5672: ServiceInfo("RabbitMQ", "Message broker", _I),
    6379: ServiceInfo("Redis", "In-memory data store", _DB),
    6380: ServiceInfo("Redis", "Redis (alt port)", _DB),
    8000: ServiceInfo("Django / FastAPI", "Python web server", _D),
    8080: ServiceInfo("HTTP Proxy", "Proxy or Tomcat", _I),
    8081: ServiceInfo("HTTP Alt", "Alternative HTTP service", _I),
    8443: ServiceInfo("HTTPS Alt", "Alternative HTTPS", _I),
    8888: ServiceInfo("Jupyter", "Jupyter Notebook", _D),
    9000: ServiceInfo("PHP-FPM", "PHP or SonarQube", _I),
    9090: ServiceInfo("Prometheus", "Monitoring", _I),
    9200: ServiceInfo("Elasticsearch", "Search engine API", _DB),
    9300: ServiceInfo("Elasticsearch", "Transport layer", _DB),
    15672: ServiceInfo("RabbitMQ UI", "Management console", _I),
    27017: ServiceInfo("MongoDB", "MongoDB database", _DB),
}

# keyed by lower-cased process name with any ".exe" suffix removed
PROCESS_HINTS: dict[str, tuple[str, ServiceCategory]] = {
    "node": ("Node.js", _D),
    "python": ("Python", _D),
    "python3": ("Python", _D),
    "java": ("Java", _D),
    "javaw": ("Java", _D),
    "docker": ("Docker", _I),
    "com.docker.backend": ("Docker", _I),
    "postgres": ("PostgreSQL", _DB),
    "mysqld": ("MySQL", _DB),
    "mongod": ("MongoDB", _DB),
    "redis-server": ("Redis", _DB),
    "nginx": ("Nginx", _I),
    "httpd": ("Apache", _I),
    "code": ("VS Code", _D),
    "cursor": ("Cursor", _D),
    "dotnet": (".NET", _D),
    "ruby": ("Ruby", _D),
    "go": ("Go", _D),
    "bun": ("Bun", _D),
    "deno": ("Deno", _D),
}

_EXE_SUFFIX = re.compile(r"\.exe$", re.IGNORECASE)


def _bare_name(process_name: str) -> str:
    return _EXE_SUFFIX.sub("", process_name)


def service_info(port: int, process_name: str) -> ServiceInfo:
    known = PORT_DATABASE.get(port)
    hint = PROCESS_HINTS.get(_bare_name(process_name).lower())

    if known and hint:
        return ServiceInfo(known.name, f"{hint[0]} · {known.description}", known.category)
    if known:
        return known
    if hint:
        label, category = hint
        if 3000 <= port <= 9999:
            return ServiceInfo(label, f"Development server on :{port}", category)
        return ServiceInfo(label, process_name, category)

    name = _bare_name(process_name)
    if 3000 <= port <= 3999:
        return ServiceInfo(name, "Development server", _D)
    if 8000 <= port <= 8999:
        return ServiceInfo(name, "HTTP service", _I)
    return ServiceInfo(name, f"Port {port}", ServiceCategory.SYSTEM)


__all__ = ["PORT_DATABASE", "PROCESS_HINTS", "ServiceCategory", "ServiceInfo", "service_info"]
