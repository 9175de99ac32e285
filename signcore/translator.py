"""
translator.py – Recognised sign words → display text.

Backends (selected at construction):

1. **phrase** (default) — a fixed table of conversational renderings for
   common signs (``THANK_YOU`` → ``"Thank you"``); unknown words are
   lower-cased with ``_`` turned into a space.  Needs no model.
2. **llama_cpp** — a local GGUF model through ``llama-cpp-python`` for
   turning a run of glosses into one English sentence.
3. **transformers** — a HuggingFace text-generation pipeline, same role.

Any backend that fails to load or to generate falls back to the phrase
table, so ``translate`` always returns text.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)

PHRASES: dict[str, str] = {
    "HELLO": "Hello!",
    "HI": "Hi there!",
    "BYE": "Goodbye!",
    "GOODBYE": "Goodbye!",
    "YES": "Yes",
    "NO": "No",
    "PLEASE": "Please",
    "THANK_YOU": "Thank you",
    "SORRY": "I'm sorry",
    "WHAT": "What?",
    "WHERE": "Where?",
    "WHEN": "When?",
    "HOW": "How?",
    "WHY": "Why?",
    "MOTHER": "Mother",
    "FATHER": "Father",
    "FAMILY": "Family",
    "EAT": "Eat",
    "DRINK": "Drink",
    "SLEEP": "Sleep",
    "HELP": "Help me",
    "HAPPY": "I am happy",
    "SAD": "I am sad",
    "LOVE": "Love",
    "TODAY": "Today",
    "TOMORROW": "Tomorrow",
    "YESTERDAY": "Yesterday",
}

_SYSTEM_PROMPT = (
    "You are an expert American Sign Language interpreter. "
    "I will give you raw ASL gloss tokens in ALL CAPS. "
    "Convert them into a single, grammatically correct, conversational English sentence. "
    "Output ONLY the translated sentence."
)


def phrase_for(word: str) -> str:
    """Table rendering of one sign word."""
    return PHRASES.get(word, word.lower().replace("_", " "))


class GlossTranslator:
    """Turn recognised words into text for the presentation layer.

    Parameters
    ----------
    backend:
        ``"phrase"``, ``"llama_cpp"`` or ``"transformers"``.
    model_path:
        GGUF file for ``llama_cpp`` (defaults to ``$LLAMA_GGUF_PATH``) or
        a HuggingFace model id / directory for ``transformers``.
    max_new_tokens:
        Generation budget.  Sign sentences rarely exceed 30 tokens.
    """

    def __init__(
        self,
        backend: str = "phrase",
        model_path: Optional[str] = None,
        max_new_tokens: int = 60,
    ) -> None:
        self.max_new_tokens = max_new_tokens
        self._model = None
        self._backend = "phrase"

        if backend == "llama_cpp":
            self._try_init_llama_cpp(model_path or os.getenv("LLAMA_GGUF_PATH"))
        elif backend == "transformers":
            self._try_init_transformers(model_path)
        elif backend != "phrase":
            raise ValueError(f"Unknown translator backend: {backend!r}")

    @property
    def backend(self) -> str:
        return self._backend

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def translate(self, glosses: List[str]) -> str:
        """Render *glosses* (oldest first) as one string."""
        if not glosses:
            return ""
        if self._backend == "phrase" or len(glosses) == 1:
            return " ".join(phrase_for(g) for g in glosses)

        prompt = f"Gloss: {' '.join(glosses)}\nEnglish:"
        try:
            if self._backend == "llama_cpp":
                return self._generate_llama_cpp(prompt)
            return self._generate_transformers(prompt)
        except Exception as exc:
            logger.warning("%s inference failed (%s); using phrase table.", self._backend, exc)
            return " ".join(phrase_for(g) for g in glosses)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _try_init_llama_cpp(self, model_path: Optional[str]) -> None:
        if not model_path or not os.path.isfile(model_path):
            logger.warning("GGUF model %r not found; using phrase table.", model_path)
            return
        try:
            from llama_cpp import Llama  # type: ignore[import]

            self._model = Llama(model_path=model_path, n_ctx=512, verbose=False)
            self._backend = "llama_cpp"
        except Exception as exc:
            logger.warning("llama.cpp model could not be loaded from %r (%s).", model_path, exc)
            self._model = None

    def _try_init_transformers(self, model_path: Optional[str]) -> None:
        if not model_path:
            logger.warning("No transformers model given; using phrase table.")
            return
        try:
            from transformers import pipeline  # type: ignore[import]

            self._model = pipeline("text-generation", model=model_path)
            self._backend = "transformers"
        except Exception as exc:
            logger.warning(
                "transformers model could not be loaded from %r (%s).", model_path, exc
            )
            self._model = None

    def _generate_llama_cpp(self, prompt: str) -> str:
        messages = [
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        response = self._model.create_chat_completion(
            messages=messages,
            max_tokens=self.max_new_tokens,
            temperature=0.2,
        )
        return response["choices"][0]["message"]["content"].strip()

    def _generate_transformers(self, prompt: str) -> str:
        full_prompt = f"{_SYSTEM_PROMPT}\n{prompt}"
        output = self._model(full_prompt, max_new_tokens=self.max_new_tokens)
        return output[0]["generated_text"].replace(full_prompt, "").strip()
