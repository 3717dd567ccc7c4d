"""Data models describing a tool and its parameters."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Values produced by argument coercion. Every declared parameter type maps to
# exactly one branch: string -> str, number -> int | float, boolean -> bool,
# array -> list of str.
ArgumentValue = Union[bool, int, float, str, List[str]]
CoercedArguments = Dict[str, ArgumentValue]


class ParameterType(str, Enum):
    """The parameter types a tool may declare."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"


class ToolParameter(BaseModel):
    """
    Describes a single named parameter of a tool.

    Attributes:
        type: The declared value type.
        description: What the parameter is used for (shown to the model).
        required: Whether the model must supply the parameter.
        default: Value used when an optional parameter is not supplied.
    """

    model_config = ConfigDict(frozen=True)

    type: ParameterType
    description: str
    required: bool = True
    default: Optional[Any] = None


class ToolDefinition(BaseModel):
    """
    Represents the definition of a tool that the model can call.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        parameters: Parameter schema keyed by parameter name, in declaration order.
        requires_focus: Whether the tool can only run while a focus document is open.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str
    parameters: Dict[str, ToolParameter] = Field(default_factory=dict)
    requires_focus: bool = False

    @property
    def required_parameters(self) -> List[str]:
        """Names of the parameters the model must supply."""
        return [name for name, param in self.parameters.items() if param.required]

    def to_json_schema(self) -> Dict[str, Any]:
        """Render the parameter schema as a JSON schema object.

        Returns:
            A JSON schema dictionary with ``properties`` and ``required`` keys.
        """
        properties: Dict[str, Any] = {}
        for name, param in self.parameters.items():
            prop: Dict[str, Any] = {"type": param.type.value, "description": param.description}
            if param.type is ParameterType.ARRAY:
                prop["items"] = {"type": "string"}
            if param.default is not None:
                prop["default"] = param.default
            properties[name] = prop

        return {
            "type": "object",
            "properties": properties,
            "required": self.required_parameters,
            "additionalProperties": False,
        }
