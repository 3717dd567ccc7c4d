"""Tool parameter schema generation and argument coercion."""

from .argument_coercer import ArgumentCoercer
from .tool_param_factory import ToolParameterFactory

__all__ = ["ArgumentCoercer", "ToolParameterFactory"]
