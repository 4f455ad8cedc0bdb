from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType


FALLBACK_LANGUAGE = "en"
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "es", "fr", "de", "hi")


@dataclass(frozen=True)
class JokeRecord:
    """A single joke with its translations keyed by language code."""

    id: int
    category: str
    content: Mapping[str, str]

    def __post_init__(self) -> None:
        unknown = sorted(set(self.content) - set(SUPPORTED_LANGUAGES))
        if unknown:
            raise ValueError(f"Joke {self.id} has unsupported language codes: {', '.join(unknown)}")
        if FALLBACK_LANGUAGE not in self.content:
            raise ValueError(f"Joke {self.id} is missing the '{FALLBACK_LANGUAGE}' text")
        empty = sorted(lang for lang, text in self.content.items() if not text)
        if empty:
            raise ValueError(f"Joke {self.id} has empty text for: {', '.join(empty)}")
        # Frozen dataclass: bypass __setattr__ to swap in a read-only view.
        object.__setattr__(self, "content", MappingProxyType(dict(self.content)))

    def text_for(self, lang: str) -> str:
        """Return the text in `lang`, falling back to English when it is missing."""

        text = self.content.get(lang)
        if text is None:
            return self.content[FALLBACK_LANGUAGE]
        return text


class JokeStore:
    """Immutable, ordered, non-empty sequence of jokes."""

    def __init__(self, records: Iterable[JokeRecord]) -> None:
        self._records: tuple[JokeRecord, ...] = tuple(records)
        if not self._records:
            raise ValueError("Joke store must contain at least one joke")

        seen: set[int] = set()
        for record in self._records:
            if record.id in seen:
                raise ValueError(f"Duplicate joke id: {record.id}")
            seen.add(record.id)

    @property
    def records(self) -> tuple[JokeRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> JokeRecord:
        return self._records[index]

    def __iter__(self) -> Iterator[JokeRecord]:
        return iter(self._records)


DEFAULT_JOKES: tuple[JokeRecord, ...] = (
    JokeRecord(
        id=1,
        category="science",
        content={
            "en": "Why don't scientists trust atoms? Because they make up everything.",
            "es": "¿Por qué los científicos no confían en los átomos? Porque lo componen todo.",
            "fr": "Pourquoi les scientifiques ne font-ils pas confiance aux atomes ? Parce qu'ils inventent tout.",
            "de": "Warum vertrauen Wissenschaftler Atomen nicht? Weil sie alles erfinden.",
            "hi": "वैज्ञानिक परमाणुओं पर विश्वास क्यों नहीं करते? क्योंकि वे सब कुछ बना देते हैं।",
        },
    ),
    JokeRecord(
        id=2,
        category="pun",
        content={
            "en": "I told my wife she was drawing her eyebrows too high. She looked surprised.",
            "es": "Le dije a mi esposa que estaba dibujando sus cejas demasiado altas. Parecía sorprendida.",
            "fr": "J'ai dit à ma femme qu'elle dessinait ses sourcils trop haut. Elle avait l'air surprise.",
            "de": "Ich sagte meiner Frau, dass sie ihre Augenbrauen zu hoch zeichnet. Sie sah überrascht aus.",
            "hi": "मैंने अपनी पत्नी से कहा कि वह अपनी भौंहें बहुत ऊंची बना रही है। वह आश्चर्यचकित दिखीं।",
        },
    ),
    JokeRecord(
        id=3,
        category="programming",
        content={
            "en": "Why did the programmer go broke? Because he lost his domain in a crash.",
            "es": "¿Por qué el programador se quedó sin dinero? Porque perdió su dominio en un accidente.",
            "fr": "Pourquoi le programmeur est-il devenu pauvre ? Parce qu'il a perdu son domaine dans un crash.",
            "de": "Warum ging der Programmierer pleite? Weil er seine Domain bei einem Absturz verloren hat.",
            "hi": "प्रोग्रामर कंगाल क्यों हो गया? क्योंकि उसने क्रैश में अपना डोमेन खो दिया।",
        },
    ),
    JokeRecord(
        id=4,
        category="programming",
        content={
            "en": "Why don't programmers like nature? It has too many bugs.",
            "es": "¿Por qué a los programadores no les gusta la naturaleza? Tiene demasiados insectos.",
            "fr": "Pourquoi les programmeurs n'aiment pas la nature ? Elle a trop de bugs.",
            "de": "Warum mögen Programmierer die Natur nicht? Sie hat zu viele Bugs.",
            "hi": "प्रोग्रामर प्रकृति को क्यों पसंद नहीं करते? इसमें बहुत सारे बग हैं।",
        },
    ),
    JokeRecord(
        id=5,
        category="food",
        content={
            "en": "What do you call a fake noodle? An impasta.",
            "es": "¿Cómo se llama un fideo falso? Un impasta.",
            "fr": "Comment appelle-t-on de fausses nouilles ? Des impasstas.",
            "de": "Wie nennt man eine gefälschte Nudel? Eine Impasta.",
            "hi": "नकली नूडल्स को क्या कहते हैं? इम्पास्ता।",
        },
    ),
)


_DEFAULT_STORE: JokeStore | None = None


def get_default_store() -> JokeStore:
    global _DEFAULT_STORE
    if _DEFAULT_STORE is None:
        _DEFAULT_STORE = JokeStore(DEFAULT_JOKES)
    return _DEFAULT_STORE
