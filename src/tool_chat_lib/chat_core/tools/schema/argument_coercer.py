"""Validation and coercion of model-supplied arguments against a tool's parameter schema."""

from typing import Any, Dict, List, Mapping

from ..models import ArgumentValue, CoercedArguments, ParameterType, ToolParameter
from ...exceptions import ArgumentCoercionError
from ...logger import get_logger

logger = get_logger(__name__)


class ArgumentCoercer:
    """
    Turns the untyped JSON arguments of a parsed call into ``CoercedArguments``.

    Required parameters are checked before anything is converted, so a call that
    lacks one is rejected without any partial work. Arguments the schema does not
    declare are dropped.
    """

    @classmethod
    def coerce(cls, arguments: Mapping[str, Any], parameters: Mapping[str, ToolParameter]) -> CoercedArguments:
        """Validate and convert arguments.

        Args:
            arguments: Raw JSON arguments from the model.
            parameters: The tool's declared parameters.

        Returns:
            The converted arguments, with defaults filled in for absent optional parameters.

        Raises:
            ArgumentCoercionError: If a required parameter is missing or a value has the wrong type.
        """
        for param_name, param in parameters.items():
            if param.required and param_name not in arguments:
                raise ArgumentCoercionError(f"Missing required parameter: {param_name}")

        result: Dict[str, ArgumentValue] = {}
        for arg_name, raw_value in arguments.items():
            param = parameters.get(arg_name)
            if param is None:
                logger.debug("Dropping undeclared argument '%s'.", arg_name)
                continue

            if raw_value is None:
                if param.required:
                    raise ArgumentCoercionError(f"Parameter '{arg_name}' must not be null")
                continue

            result[arg_name] = cls.coerce_value(raw_value, param.type, arg_name)

        for param_name, param in parameters.items():
            if not param.required and param_name not in result and param.default is not None:
                result[param_name] = param.default

        return result

    @staticmethod
    def coerce_value(value: Any, param_type: ParameterType, param_name: str) -> ArgumentValue:
        """Convert a single JSON value to the declared parameter type.

        Args:
            value: The raw JSON value.
            param_type: The declared type.
            param_name: Parameter name used in error messages.

        Returns:
            The converted value.

        Raises:
            ArgumentCoercionError: If the value cannot be represented as the declared type.
        """
        if param_type is ParameterType.STRING:
            if not isinstance(value, str):
                raise ArgumentCoercionError(f"Parameter '{param_name}' must be a string")
            return value

        if param_type is ParameterType.NUMBER:
            # bool is a subclass of int; JSON true/false is not a number.
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ArgumentCoercionError(f"Parameter '{param_name}' must be a number")
            return value

        if param_type is ParameterType.BOOLEAN:
            if not isinstance(value, bool):
                raise ArgumentCoercionError(f"Parameter '{param_name}' must be a boolean")
            return value

        if param_type is ParameterType.ARRAY:
            if not isinstance(value, list):
                raise ArgumentCoercionError(f"Parameter '{param_name}' must be an array")
            items: List[str] = []
            for item in value:
                if isinstance(item, bool):
                    items.append("true" if item else "false")
                elif isinstance(item, (str, int, float)):
                    items.append(str(item))
            return items

        raise ArgumentCoercionError(f"Unknown parameter type: {param_type}")
