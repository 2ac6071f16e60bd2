"""Place-scoped chat assistant.

Builds the prompt for one user turn and hands it to the LLM provider:

  1. SYSTEM  -- fixed Italian instructions plus a block describing the
                place (name, category, address, city, hours, contacts,
                price, rating, tags).
  2. HISTORY -- the prior turns exactly as the client sent them, in order.
  3. USER    -- the new message, always last.

The assistant is stateless: the client resends the whole history with
every message, and nothing is trimmed, so an over-long conversation gets
whatever the provider does with it.

Provider failures never reach the caller.  A failed call yields
:data:`ERROR_REPLY`, an empty answer yields :data:`EMPTY_REPLY`; the chat
endpoint therefore answers 200 even when the provider is down.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from src.interfaces.llm_provider import ILLMProvider
from src.models.chat import ChatMessage, ChatRole
from src.models.directory import Place
from src.utils.errors import LLMError
from src.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)

EMPTY_REPLY = (
    "Mi dispiace, non ho potuto elaborare la tua richiesta. "
    "Prova a riformulare la domanda."
)
ERROR_REPLY = (
    "Mi dispiace, si è verificato un errore nel sistema. "
    "Riprova più tardi o contatta direttamente il luogo per informazioni."
)
HOURS_NOT_SPECIFIED = "Non specificati"

_SYSTEM_PROMPT = (
    "Sei un assistente virtuale specializzato in informazioni turistiche per {name} a {city}.\n"
    "Fornisci informazioni accurate e utili basate sui seguenti dettagli sul luogo.\n"
    "Rispondi in italiano in modo amichevole e professionale.\n"
    "Se non conosci la risposta, suggerisci di contattare direttamente il luogo.\n"
    "\n"
    "INFORMAZIONI SUL LUOGO:\n"
    "{context}"
)


def build_place_context(place: Place, city_name: str) -> str:
    """Render the place facts block embedded in the system prompt."""
    contacts = f"{place.contact_phone or ''} {place.contact_email or ''}".strip()
    lines = [
        f"Nome: {place.name}",
        f"Categoria: {place.category.value}",
        f"Indirizzo: {place.address}",
        f"Città: {city_name}",
        f"Descrizione: {place.description}",
        f"Orari: {place.opening_hours or HOURS_NOT_SPECIFIED}",
        f"Contatti: {contacts}",
        f"Prezzo: {place.price_level}",
        f"Valutazione: {place.display_rating}/5.0 ({place.review_count} recensioni)",
        f"Tag: {', '.join(place.tags)}",
    ]
    return "\n".join(lines)


def build_system_prompt(place: Place, city_name: str) -> str:
    return _SYSTEM_PROMPT.format(
        name=place.name,
        city=city_name,
        context=build_place_context(place, city_name),
    )


def build_messages(
    user_message: str,
    place: Place,
    city_name: str,
    history: Sequence[ChatMessage] = (),
) -> list[dict[str, str]]:
    """Assemble system prompt, prior turns and the new user turn, in that order."""
    messages = [{"role": "system", "content": build_system_prompt(place, city_name)}]
    messages.extend({"role": turn.role.value, "content": turn.content} for turn in history)
    messages.append({"role": ChatRole.USER.value, "content": user_message})
    return messages


class ChatContextAssembler:
    """Answers questions about a single place through an LLM provider.

    Parameters
    ----------
    llm:
        Chat-completion provider.
    temperature:
        Sampling temperature for every call.
    max_tokens:
        Reply length cap for every call.
    """

    def __init__(
        self,
        llm: ILLMProvider,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> None:
        self._llm = llm
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def provider_name(self) -> str:
        return self._llm.get_provider_name()

    async def converse(
        self,
        user_message: str,
        place: Place,
        city_name: str,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Return the assistant's reply to *user_message*.

        Never raises for provider problems; see the module docstring for
        the two fallback replies.
        """
        messages = build_messages(user_message, place, city_name, history)

        try:
            reply = await self._llm.chat(
                messages,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except LLMError as exc:
            logger.warning(
                "chat_provider_failed",
                place_id=place.id,
                provider=exc.provider_name,
                error=exc.message,
            )
            return ERROR_REPLY
        except Exception:
            logger.error(
                "chat_provider_failed",
                place_id=place.id,
                provider=self.provider_name,
                exc_info=True,
            )
            return ERROR_REPLY

        if not reply:
            logger.info("chat_empty_reply", place_id=place.id, provider=self.provider_name)
            return EMPTY_REPLY

        logger.info(
            "chat_reply",
            place_id=place.id,
            history_turns=len(history),
            reply_chars=len(reply),
        )
        return reply
