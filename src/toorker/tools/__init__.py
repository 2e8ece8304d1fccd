from .registry import CATEGORIES, TOOLS, CategoryDefinition, ToolCategory, ToolDefinition, get_tool, tools_by_category

__all__ = [
    "CATEGORIES",
    "TOOLS",
    "CategoryDefinition",
    "ToolCategory",
    "ToolDefinition",
    "get_tool",
    "tools_by_category",
]
