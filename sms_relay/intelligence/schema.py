from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..errors import UpstreamError


def _as_int(value: Any) -> int:
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"{value!r} is not a whole number")
    return int(number)


def _as_stop(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(s, str) for s in value):
        return list(value)
    raise ValueError(f"{value!r} is not a string or list of strings")


_COERCERS: Dict[str, Callable[[Any], Any]] = {
    "model": str,
    "temperature": float,
    "max_tokens": _as_int,
    "top_p": float,
    "frequency_penalty": float,
    "presence_penalty": float,
    "stop": _as_stop,
}


@dataclass
class ModelParameters:
    """Sampling parameters sent along with a completion request."""
    model: Optional[str] = None  # None = use the client's configured model
    temperature: float = 0.7
    max_tokens: int = 256
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    stop: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ModelParameters":
        """
        Build parameters from a provider config dict, ignoring unknown keys.

        Numeric values sent as strings (``"0.7"``) are converted.

        Raises:
            UpstreamError: if a value cannot be converted to its field's type.
        """
        params = cls()
        if not data:
            return params
        for key, value in data.items():
            coerce = _COERCERS.get(key)
            if coerce is None or value is None:
                continue
            if isinstance(value, bool):
                raise UpstreamError(f"Invalid model parameter {key}={value!r}")
            try:
                setattr(params, key, coerce(value))
            except (TypeError, ValueError) as e:
                raise UpstreamError(f"Invalid model parameter {key}={value!r}") from e
        return params


@dataclass
class PromptSpec:
    """A prompt template (with an ``{{input}}`` marker) and its model parameters."""
    template_text: str
    parameters: ModelParameters = field(default_factory=ModelParameters)
