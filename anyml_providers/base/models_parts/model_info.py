"""
Model DTO for provider model listings.

Represents a single model entry as returned by a provider's listing endpoint.
Parameter size and quantization labels are normalized on construction, and a
human-friendly display name is derived from the model id.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

# Words rendered with fixed casing in display names.
REPLACEMENT_WORDS: Dict[str, str] = {
    "ai": "AI",
    "api": "API",
    "gpt": "GPT",
    "lm": "LM",
    "llm": "LLM",
    "moe": "MoE",
    "oss": "OSS",
    "sd": "SD",
    "sdxl": "SDXL",
    "vlm": "VLM",
    "xl": "XL",
    "xxl": "XXL",
}


def normalize_parameters(value: Optional[str]) -> Optional[str]:
    """Upper-case a parameter size label (``"7b"`` -> ``"7B"``)."""
    return value.upper() if value else None


def normalize_quantization(value: Optional[str]) -> Optional[str]:
    """Normalize a quantization label (``"q4_k_m"`` -> ``"Q4:KM"``).

    The first ``_``/``-`` separator becomes ``:``; later separators are
    dropped.
    """
    if not value:
        return None
    out = []
    seen_sep = False
    for ch in value.upper():
        if ch in "_-":
            if not seen_sep:
                out.append(":")
            seen_sep = True
        else:
            out.append(ch)
    return "".join(out)


def prettify_model_id(model_id: str) -> str:
    """Return a display name derived from a raw model id.

    ``"library/llama-3-1_instruct:8b"`` becomes ``"Llama 3.1 Instruct"``.
    """
    base = model_id.split(":", 1)[0]
    cut = max(base.rfind("/"), base.rfind("\\"))
    if cut != -1:
        base = base[cut + 1:]
    spaced = []
    for i, ch in enumerate(base):
        if ch == "_":
            spaced.append(" ")
        elif ch == "-":
            prev_digit = i > 0 and base[i - 1].isdigit()
            next_digit = i + 1 < len(base) and base[i + 1].isdigit()
            spaced.append("." if prev_digit and next_digit else " ")
        else:
            spaced.append(ch)
    words = []
    for word in "".join(spaced).split():
        replacement = REPLACEMENT_WORDS.get(word.lower())
        words.append(replacement if replacement else word[:1].upper() + word[1:])
    return " ".join(words)


@dataclass(frozen=True)
class Model:
    """A single model listing entry.

    Attributes:
        id: Stable model identifier as accepted by ``ChatOptions.model``.
        parameters: Normalized parameter size label (e.g. ``"7B"``).
        quantization: Normalized quantization label (e.g. ``"Q4:KM"``).
        thinking_modes: Supported thinking modes, ``None`` when unknown or
            unsupported.
    """

    id: str
    parameters: Optional[str] = None
    quantization: Optional[str] = None
    thinking_modes: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", normalize_parameters(self.parameters))
        object.__setattr__(self, "quantization", normalize_quantization(self.quantization))

    @property
    def name(self) -> str:
        return prettify_model_id(self.id)

    def display(self) -> str:
        """Return the name with a parameter/quantization suffix when known."""
        details = " ".join(p for p in (self.parameters, self.quantization) if p)
        return f"{self.name} ({details})" if details else self.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "parameters": self.parameters,
            "quantization": self.quantization,
            "thinking_modes": list(self.thinking_modes) if self.thinking_modes else None,
        }


__all__ = [
    "Model",
    "REPLACEMENT_WORDS",
    "normalize_parameters",
    "normalize_quantization",
    "prettify_model_id",
]
