import inspect
import types
from typing import Any, List, Union, get_origin, Annotated, get_args

from pydantic.fields import FieldInfo

from ..models import ParameterType, ToolParameter
from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_SCALAR_TYPES = {
    str: ParameterType.STRING,
    int: ParameterType.NUMBER,
    float: ParameterType.NUMBER,
    bool: ParameterType.BOOLEAN,
}


class ToolParameterFactory:
    """Capsules the extraction and validation of single function parameters for tool definitions"""

    @classmethod
    def build_parameter(cls, param_name: str, param: inspect.Parameter, tool_name: str) -> ToolParameter:
        """Creates the ToolParameter for a single function parameter.

        Args:
            param_name: The name of the parameter.
            param: The inspect.Parameter object.
            tool_name: The name of the tool for error reporting.

        Returns:
            A ToolParameter with type, description, required flag and default.
        """
        annotation = param.annotation
        description = cls._extract_description(annotation=annotation, param_name=param_name, tool_name=tool_name)
        param_type = cls._resolve_type(annotation=annotation, param_name=param_name, tool_name=tool_name)

        has_default = param.default is not inspect.Parameter.empty
        return ToolParameter(
            type=param_type,
            description=description,
            required=not has_default,
            default=param.default if has_default else None,
        )

    @staticmethod
    def _extract_description(annotation: Any, param_name: str, tool_name: str) -> str:
        """Every tool parameter needs 'Annotated[<class>, Field(description='...')]' as its annotation.

        Raises:
            ToolValidationError: If the parameter is missing a Pydantic Field description.
        """

        if get_origin(annotation) is Annotated:
            for metadata in get_args(annotation):
                if isinstance(metadata, FieldInfo) and metadata.description:
                    return metadata.description

        msg = (
            f"Parameter '{param_name}' in tool '{tool_name}' is missing a description.\n"
            f"Usage: {param_name}: Annotated[Type, Field(description='...')] = ..."
        )
        logger.error(msg)
        raise ToolValidationError(msg)

    @staticmethod
    def _resolve_type(annotation: Any, param_name: str, tool_name: str) -> ParameterType:
        """Map a Python annotation onto one of the four parameter types."""
        base = get_args(annotation)[0] if get_origin(annotation) is Annotated else annotation

        # Optional[X] -> X
        if get_origin(base) in (Union, types.UnionType):
            non_null = [arg for arg in get_args(base) if arg is not type(None)]
            if len(non_null) == 1:
                base = non_null[0]

        if base in _SCALAR_TYPES:
            return _SCALAR_TYPES[base]
        if base is list or get_origin(base) in (list, List):
            return ParameterType.ARRAY

        msg = (
            f"Parameter '{param_name}' in tool '{tool_name}' has unsupported type {base!r}. "
            "Use str, int, float, bool or list[str]."
        )
        logger.error(msg)
        raise ToolValidationError(msg)

