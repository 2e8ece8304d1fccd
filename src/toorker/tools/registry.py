"""Static registry of the tools hosted by the main Toorker window."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ToolCategory(StrEnum):
    NETWORK = "network"
    SYSTEM = "system"
    CONVERTERS = "converters"
    FORMATTERS = "formatters"
    ENCODERS = "encoders"
    GENERATORS = "generators"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class CategoryDefinition:
    id: ToolCategory
    label: str
    icon: str


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    id: str
    name: str
    description: str
    icon: str
    category: ToolCategory
    keywords: tuple[str, ...] = ()


CATEGORIES: tuple[CategoryDefinition, ...] = (
    CategoryDefinition(ToolCategory.NETWORK, "Network", "Globe"),
    CategoryDefinition(ToolCategory.SYSTEM, "System", "Monitor"),
    CategoryDefinition(ToolCategory.CONVERTERS, "Converters", "ArrowLeftRight"),
    CategoryDefinition(ToolCategory.FORMATTERS, "Formatters", "Braces"),
    CategoryDefinition(ToolCategory.ENCODERS, "Encoders / Decoders", "Lock"),
    CategoryDefinition(ToolCategory.GENERATORS, "Generators", "Sparkles"),
    CategoryDefinition(ToolCategory.TEXT, "Text", "Type"),
)


TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        "ports",
        "Ports",
        "Monitor listening ports and manage services",
        "Radio",
        ToolCategory.NETWORK,
        ("port", "network", "listen", "service", "tcp", "udp", "kill"),
    ),
    ToolDefinition(
        "api-tester",
        "API Tester",
        "Send HTTP requests and inspect responses",
        "Send",
        ToolCategory.NETWORK,
        ("http", "request", "get", "post", "api", "fetch", "curl", "rest"),
    ),
    ToolDefinition(
        "processes",
        "Processes",
        "Monitor running processes and memory usage",
        "Activity",
        ToolCategory.SYSTEM,
        ("process", "pid", "kill", "memory", "task", "manager"),
    ),
    ToolDefinition(
        "number-base",
        "Number Base",
        "Convert numbers between decimal, hex, octal, binary",
        "Binary",
        ToolCategory.CONVERTERS,
        ("number", "base", "hex", "decimal", "binary", "octal", "convert"),
    ),
    ToolDefinition(
        "date-converter",
        "Date Converter",
        "Convert between Unix timestamps and human dates",
        "Calendar",
        ToolCategory.CONVERTERS,
        ("date", "time", "unix", "timestamp", "epoch", "iso", "utc", "convert"),
    ),
    ToolDefinition(
        "color-converter",
        "Color Converter",
        "Convert colors between HEX, RGB, and HSL",
        "Palette",
        ToolCategory.CONVERTERS,
        ("color", "hex", "rgb", "hsl", "convert", "palette", "picker"),
    ),
    ToolDefinition(
        "cron-parser",
        "Cron Parser",
        "Parse cron expressions to human-readable format",
        "Timer",
        ToolCategory.CONVERTERS,
        ("cron", "schedule", "timer", "crontab", "parse"),
    ),
    ToolDefinition(
        "json-formatter",
        "JSON Formatter",
        "Format, minify, and validate JSON data",
        "Braces",
        ToolCategory.FORMATTERS,
        ("json", "format", "pretty", "minify", "validate", "parse"),
    ),
    ToolDefinition(
        "markdown-preview",
        "Markdown",
        "Preview markdown with live rendering",
        "FileText",
        ToolCategory.FORMATTERS,
        ("markdown", "md", "preview", "render", "format"),
    ),
    ToolDefinition(
        "base64",
        "Base64",
        "Encode and decode Base64 text",
        "FileCode",
        ToolCategory.ENCODERS,
        ("base64", "encode", "decode", "text", "binary"),
    ),
    ToolDefinition(
        "url-encoder",
        "URL Encoder",
        "Encode and decode URL components",
        "Link",
        ToolCategory.ENCODERS,
        ("url", "encode", "decode", "percent", "uri", "component"),
    ),
    ToolDefinition(
        "html-encoder",
        "HTML Encoder",
        "Encode and decode HTML entities",
        "Code",
        ToolCategory.ENCODERS,
        ("html", "entity", "encode", "decode", "escape", "unescape"),
    ),
    ToolDefinition(
        "jwt-decoder",
        "JWT Decoder",
        "Decode and inspect JSON Web Tokens",
        "KeyRound",
        ToolCategory.ENCODERS,
        ("jwt", "token", "decode", "json", "web", "auth", "bearer"),
    ),
    ToolDefinition(
        "uuid-generator",
        "UUID Generator",
        "Generate random UUIDs (v4)",
        "Fingerprint",
        ToolCategory.GENERATORS,
        ("uuid", "guid", "random", "generate", "id", "unique"),
    ),
    ToolDefinition(
        "hash-generator",
        "Hash Generator",
        "Calculate SHA-1, SHA-256, SHA-384, SHA-512 hashes",
        "ShieldCheck",
        ToolCategory.GENERATORS,
        ("hash", "sha", "sha256", "sha512", "checksum", "digest"),
    ),
    ToolDefinition(
        "password-generator",
        "Password",
        "Generate secure random passwords",
        "Lock",
        ToolCategory.GENERATORS,
        ("password", "generate", "random", "secure", "strong"),
    ),
    ToolDefinition(
        "lorem-ipsum",
        "Lorem Ipsum",
        "Generate placeholder text",
        "TextCursorInput",
        ToolCategory.GENERATORS,
        ("lorem", "ipsum", "placeholder", "text", "dummy"),
    ),
    ToolDefinition(
        "qr-code",
        "QR Code Generator",
        "Generate QR codes from text, URLs, WiFi, email & phone",
        "QrCode",
        ToolCategory.GENERATORS,
        ("qr", "qrcode", "barcode", "scan", "url", "wifi", "link"),
    ),
    ToolDefinition(
        "gradient-builder",
        "Gradient Builder",
        "Create beautiful gradients with live preview and code export",
        "Palette",
        ToolCategory.GENERATORS,
        ("gradient", "color", "css", "linear", "radial", "conic", "background", "design", "tailwind"),
    ),
    ToolDefinition(
        "regex-tester",
        "Regex Tester",
        "Test regular expressions with live highlighting",
        "Regex",
        ToolCategory.TEXT,
        ("regex", "regexp", "regular expression", "pattern", "match", "test"),
    ),
    ToolDefinition(
        "text-diff",
        "Text Diff",
        "Compare two texts and highlight differences",
        "GitCompareArrows",
        ToolCategory.TEXT,
        ("diff", "compare", "text", "difference", "merge"),
    ),
    ToolDefinition(
        "data-converter",
        "YAML / JSON / TOML",
        "Convert between YAML, JSON, and TOML formats",
        "ArrowLeftRight",
        ToolCategory.CONVERTERS,
        (
            "yaml",
            "json",
            "toml",
            "convert",
            "converter",
            "transform",
            "config",
            "configuration",
            "data",
            "format",
        ),
    ),
)


def get_tool(tool_id: str) -> ToolDefinition | None:
    return next((tool for tool in TOOLS if tool.id == tool_id), None)


def tools_by_category() -> dict[ToolCategory, list[ToolDefinition]]:
    grouped: dict[ToolCategory, list[ToolDefinition]] = {
        category.id: [] for category in CATEGORIES
    }
    for tool in TOOLS:
        grouped[tool.category].append(tool)
    return grouped


__all__ = [
    "CATEGORIES",
    "TOOLS",
    "CategoryDefinition",
    "ToolCategory",
    "ToolDefinition",
    "get_tool",
    "tools_by_category",
]
