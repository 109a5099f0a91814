"""Catálogo fijo de modelos conocidos.

No hay catálogo remoto: esta tabla es toda la superficie de validación de nombres.
"""

from __future__ import annotations

from core.domain.models import ModelArtifact, ModelSpec
from core.exceptions import UnknownModelError

_HF = "https://huggingface.co"

CATALOG: dict[str, ModelSpec] = {
    spec.name: spec
    for spec in (
        ModelSpec(
            name="llama2-chat",
            description="Llama 2 13B chat, GGML q3_K_L",
            artifacts=(
                ModelArtifact(
                    url=(
                        f"{_HF}/TheBloke/Llama-2-13B-chat-GGML/resolve/"
                        "a17885f653039bd07ed0f8ff4ecc373abf5425fd/llama-2-13b-chat.ggmlv3.q3_K_L.bin"
                    ),
                    relative_path="llama2-chat",
                ),
            ),
        ),
        ModelSpec(
            name="codellama-instruct",
            description="CodeLlama 13B instruct, GGML Q3_K_L",
            artifacts=(
                ModelArtifact(
                    url=(
                        f"{_HF}/TheBloke/CodeLlama-13B-Instruct-GGML/resolve/"
                        "b3dc9d8df8b4143ee18407169f09bc12c0ae09ef/codellama-13b-instruct.ggmlv3.Q3_K_L.bin"
                    ),
                    relative_path="codellama-instruct",
                ),
            ),
        ),
        ModelSpec(
            name="all-minikm-16-v2",
            description="all-MiniLM-L6-v2 sentence embeddings (tokenizer + safetensors)",
            artifacts=(
                ModelArtifact(
                    url=(
                        f"{_HF}/sentence-transformers/all-MiniLM-L6-v2/resolve/"
                        "7dbbc90392e2f80f3d3c277d6e90027e55de9125/tokenizer.json"
                    ),
                    relative_path="all-minikm-16-v2/tokenizer.json",
                ),
                ModelArtifact(
                    url=(
                        f"{_HF}/sentence-transformers/all-MiniLM-L6-v2/resolve/"
                        "0b6dc4ef7c29dba0d2e99a5db0c855c3102310d8/model.safetensors"
                    ),
                    relative_path="all-minikm-16-v2/model.safetensors",
                ),
            ),
        ),
    )
}

KNOWN_MODELS: tuple[str, ...] = tuple(CATALOG)


def get_model_spec(name: str) -> ModelSpec:
    """Devuelve el `ModelSpec` de `name` o lanza `UnknownModelError`."""

    try:
        return CATALOG[name]
    except KeyError:
        raise UnknownModelError(name) from None
