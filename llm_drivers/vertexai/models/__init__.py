"""Built-in Vertex AI publisher model definitions."""

from typing import Dict

from ...base.models import AIModel, ModelType
from .chat import ChatModelDefinition
from .definition import ModelDefinition
from .predict import PredictModelDefinition
from .text import TextModelDefinition

CODEY_CHAT = ChatModelDefinition(
    AIModel(id="codechat-bison", name="Codey for Code Chat", provider="vertexai", owner="google", type=ModelType.CHAT)
)
PALM2_CHAT = ChatModelDefinition(
    AIModel(id="chat-bison", name="PaLM 2 for Chat", provider="vertexai", owner="google", type=ModelType.CHAT)
)
PALM2_TEXT = TextModelDefinition(
    AIModel(id="text-bison", name="PaLM 2 for Text", provider="vertexai", owner="google", type=ModelType.TEXT)
)

BUILTIN_DEFINITIONS: Dict[str, ModelDefinition] = {
    d.model.id: d for d in (CODEY_CHAT, PALM2_CHAT, PALM2_TEXT)
}

__all__ = [
    "ModelDefinition",
    "PredictModelDefinition",
    "ChatModelDefinition",
    "TextModelDefinition",
    "CODEY_CHAT",
    "PALM2_CHAT",
    "PALM2_TEXT",
    "BUILTIN_DEFINITIONS",
]
