from dataclasses import dataclass
from typing import Any, Callable, Dict, Type

from pydantic import BaseModel


@dataclass(frozen=True)
class GorilliAction:
    """A named, schema-validated operation exposed to an agent."""

    name: str
    description: str
    args_schema: Type[BaseModel]
    func: Callable[..., str]
    needs_wallet: bool = True

    def invoke(self, wallet: Any, args: Dict[str, Any]) -> str:
        """Validate `args` against the schema and run the handler.

        Raises pydantic.ValidationError when the arguments do not match.
        """
        validated = self.args_schema(**args)
        if self.needs_wallet:
            return self.func(wallet, validated)
        return self.func(validated)

    def parameters(self) -> Dict[str, Any]:
        return self.args_schema.model_json_schema()
