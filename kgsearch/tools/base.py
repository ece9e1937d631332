"""
Tool Base Classes
==================

Base classes for the tools exposed to the conversational agent.

A tool is an atomic operation invoked through LLM function calling:

    Agent -> selects Tool -> __call__(**kwargs) -> ToolResult
             (via ToolRegistry)

Every tool:
- Has a name and a description (shown to the LLM)
- Declares typed parameters (-> JSON Schema)
- Returns a ToolResult; exceptions never cross the tool boundary
"""

import json
import structlog
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from kgsearch.errors import describe_error

log = structlog.get_logger()


class ParameterType(str, Enum):
    """JSON Schema types for tool parameters."""
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


@dataclass
class ToolParameter:
    """
    Definition of a tool parameter.

    Attributes:
        name: Parameter name as seen by the LLM (camelCase)
        param_type: JSON Schema type
        description: Description shown to the LLM
        required: Whether the parameter must be provided
        default: Default value if not provided
        enum: Allowed values
        schema: Extra JSON Schema keys (e.g. ``properties`` of an object)
    """
    name: str
    param_type: ParameterType
    description: str
    required: bool = True
    default: Any = None
    enum: Optional[List[str]] = None
    schema: Optional[Dict[str, Any]] = None

    def to_json_schema(self) -> Dict[str, Any]:
        """Convert to JSON Schema for function calling."""
        schema: Dict[str, Any] = {
            "type": self.param_type.value,
            "description": self.description,
        }
        if self.enum:
            schema["enum"] = self.enum
        if self.default is not None:
            schema["default"] = self.default
        if self.schema:
            schema.update(self.schema)
        return schema


@dataclass
class ToolResult:
    """
    Outcome of a tool execution.

    Attributes:
        success: Whether execution succeeded
        data: Payload (shape depends on the tool)
        error: Error message when success=False
        metadata: Extra metadata (timestamp, timing, ...)
        tool_name: Tool that produced the result
    """
    success: bool
    data: Any = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    tool_name: Optional[str] = None

    def __post_init__(self):
        if "timestamp" not in self.metadata:
            self.metadata["timestamp"] = datetime.now().isoformat()

    @classmethod
    def ok(cls, data: Any, tool_name: str = None, **metadata) -> "ToolResult":
        """Factory method for a successful result."""
        return cls(success=True, data=data, tool_name=tool_name, metadata=metadata)

    @classmethod
    def fail(cls, error: str, tool_name: str = None, **metadata) -> "ToolResult":
        """Factory method for a failed result."""
        return cls(success=False, error=error, tool_name=tool_name, metadata=metadata)

    def to_json(self) -> str:
        """Agent-facing text: the data payload, or the error message."""
        if not self.success:
            return json.dumps({"error": self.error}, indent=2)
        if isinstance(self.data, str):
            return self.data
        return json.dumps(self.data, indent=2, default=str)


class BaseTool(ABC):
    """
    Abstract base class for all tools.

    Subclasses provide ``name``, ``description`` (as class or instance
    attributes), ``parameters`` and ``execute()``.

    Example:
        >>> class EchoTool(BaseTool):
        ...     name = "echo"
        ...     description = "Echo the query back"
        ...
        ...     @property
        ...     def parameters(self) -> List[ToolParameter]:
        ...         return [ToolParameter("query", ParameterType.STRING, "Text to echo")]
        ...
        ...     async def execute(self, query: str) -> ToolResult:
        ...         return ToolResult.ok(query, tool_name=self.name)
    """

    name: str = ""
    description: str = ""

    def __init__(self):
        if not self.name:
            raise ValueError("Tool must have a name")
        if not self.description:
            raise ValueError("Tool must have a description")

        log.debug(f"Tool initialized: {self.name}")

    @property
    @abstractmethod
    def parameters(self) -> List[ToolParameter]:
        """Parameters accepted by the tool."""
        pass

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """
        Run the tool with the given parameters.

        Args:
            **kwargs: Parameters as declared in self.parameters

        Returns:
            ToolResult with the data or the error
        """
        pass

    def validate_params(self, **kwargs) -> Optional[str]:
        """
        Validate parameters before execution.

        Returns:
            None when valid, the error message otherwise
        """
        param_names = {p.name for p in self.parameters}
        required_params = {p.name for p in self.parameters if p.required}

        for param in sorted(required_params):
            if param not in kwargs or kwargs[param] is None:
                return f"Missing required parameter: {param}"

        for param in kwargs:
            if param not in param_names:
                return f"Unknown parameter: {param}"

        return None

    async def __call__(self, **kwargs) -> ToolResult:
        """
        Validate + execute.

        Any exception raised by ``execute`` is converted into
        ``ToolResult.fail`` with the error message.
        """
        error = self.validate_params(**kwargs)
        if error:
            return ToolResult.fail(error, tool_name=self.name)

        try:
            return await self.execute(**kwargs)
        except Exception as e:
            message = describe_error(e)
            log.error(f"Tool {self.name} failed", error=message)
            return ToolResult.fail(message, tool_name=self.name)

    def get_schema(self) -> Dict[str, Any]:
        """
        JSON schema for LLM function calling.

        Compatible with the OpenAI/Anthropic function calling format.
        """
        properties = {}
        required = []

        for param in self.parameters:
            properties[param.name] = param.to_json_schema()
            if param.required:
                required.append(param.name)

        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": required,
            }
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"
