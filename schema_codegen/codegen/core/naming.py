"""
Naming utilities for safe code generation.

Holds the language-agnostic part of identifier handling: the base name
sanitizer, the case transforms shared by every target, the rename
diagnostics channel, and the ``NamingRules`` interface each target
language implements.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional

from ...logging_config import get_logger

logger = get_logger(__name__)


# Base sanitizer rules, applied in order
_SANITIZE_REPLACEMENTS = (
    ("[]", ""),
    ("[", "_"),
    ("]", ""),
    ("(", "_"),
    (")", ""),
    (".", "_"),
    ("-", "_"),
    (" ", "_"),
)
_NON_WORD_PATTERN = re.compile(r"[^A-Za-z0-9_]")

# underscore() patterns
_ACRONYM_WORD_PATTERN = re.compile(r"([A-Z]+)([A-Z][a-z][a-z]+)")
_LOWER_UPPER_PATTERN = re.compile(r"([a-z\d])([A-Z])")

# camelize() word boundaries
_CAMELIZE_SPLIT_PATTERN = re.compile(r"[_\-\s./]+")

UPPERCASE_ONLY_PATTERN = re.compile(r"^[A-Z_]*$")
STARTS_WITH_DIGIT_PATTERN = re.compile(r"^\d")


def sanitize_name(name: Optional[str]) -> str:
    """
    Strip characters that cannot appear in an identifier.

    Brackets, parentheses, dots, dashes and spaces become word separators
    (or disappear), then anything outside ``[A-Za-z0-9_]`` is removed.
    The transform is idempotent.

    Args:
        name: Raw schema name

    Returns:
        Cleaned candidate name
    """
    if name is None:
        return "ERROR_UNKNOWN"
    if name == "$":
        return "value"

    for old, new in _SANITIZE_REPLACEMENTS:
        name = name.replace(old, new)

    return _NON_WORD_PATTERN.sub("", name)


def underscore(word: str) -> str:
    """
    Convert a mixed-case word to snake_case.

    Examples:
        >>> underscore("PhoneNumber")
        'phone_number'
        >>> underscore("HTTPResponseCode")
        'http_response_code'
    """
    if not word:
        return ""

    result = word.replace("$", "__")
    result = _ACRONYM_WORD_PATTERN.sub(r"\1_\2", result)
    result = _LOWER_UPPER_PATTERN.sub(r"\1_\2", result)
    result = result.replace("-", "_").replace(" ", "_")
    return result.lower()


def camelize(word: str, lower_first: bool = False) -> str:
    """
    Convert a word to CamelCase.

    Each word after a separator gets an uppercase first letter; the rest of
    the word is kept as-is, so acronyms survive (``get_HTTP`` -> ``GetHTTP``).

    Args:
        word: Word to convert
        lower_first: Lowercase the very first character (``camelCase``)
    """
    if not word:
        return ""

    parts = [part for part in _CAMELIZE_SPLIT_PATTERN.split(word) if part]
    result = "".join(part[0].upper() + part[1:] for part in parts)

    if lower_first and result:
        result = result[0].lower() + result[1:]
    return result


def starts_with_digit(name: str) -> bool:
    """Check whether a name starts with a digit."""
    return bool(STARTS_WITH_DIGIT_PATTERN.match(name))


class NameCategory(Enum):
    """Kinds of identifiers a generator has to produce."""

    VARIABLE = "variable"
    PARAMETER = "parameter"
    MODEL_TYPE = "model type"
    MODEL_FILE = "model file"
    API_NAME = "api name"
    API_FILE = "api file"
    API_TEST_FILE = "api test file"
    MODEL_TEST_FILE = "model test file"
    ENUM_VALUE = "enum value"
    ENUM_VAR_NAME = "enum var name"
    ENUM_TYPE_NAME = "enum type name"
    OPERATION_ID = "operation id"
    IMPORT = "import"


@dataclass(frozen=True)
class NamingDiagnostic:
    """A corrective rename performed while resolving an identifier."""

    category: NameCategory
    original: str
    replacement: str
    reason: str

    @property
    def message(self) -> str:
        return (
            f"{self.original} ({self.reason}) cannot be used as "
            f"{self.category.value}. Renamed to {self.replacement}"
        )


DiagnosticListener = Callable[[NamingDiagnostic], None]


class DiagnosticLog:
    """Collects rename diagnostics and forwards them to listeners."""

    def __init__(self):
        self._entries: List[NamingDiagnostic] = []
        self._listeners: List[DiagnosticListener] = []

    def subscribe(self, listener: DiagnosticListener) -> None:
        """Register a callable invoked with every new diagnostic."""
        self._listeners.append(listener)

    def emit(self, diagnostic: NamingDiagnostic) -> None:
        """Record a diagnostic, log it and notify listeners.

        Resolving the same name again yields an identical diagnostic; only the
        first one is recorded.
        """
        if diagnostic in self._entries:
            return
        self._entries.append(diagnostic)
        logger.warning(diagnostic.message)
        for listener in self._listeners:
            listener(diagnostic)

    def for_category(self, category: NameCategory) -> List[NamingDiagnostic]:
        return [entry for entry in self._entries if entry.category == category]

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[NamingDiagnostic]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


class NamingRules(ABC):
    """
    Identifier rules for one target language.

    Generators hold an instance of a concrete subclass and ask it for every
    name they emit, so a name computed for a model in one template always
    matches the name computed for the same model anywhere else.
    """

    def __init__(self):
        self.diagnostics = DiagnosticLog()

    def _renamed(
        self, category: NameCategory, original: str, replacement: str, reason: str
    ) -> None:
        self.diagnostics.emit(
            NamingDiagnostic(
                category=category,
                original=original,
                replacement=replacement,
                reason=reason,
            )
        )

    # Reserved words and escaping

    @abstractmethod
    def is_reserved_word(self, name: str) -> bool:
        pass

    @abstractmethod
    def escape_reserved_word(self, name: str) -> str:
        pass

    @abstractmethod
    def escape_text(self, text: str) -> str:
        pass

    # Variables and parameters

    @abstractmethod
    def to_var_name(self, name: str) -> str:
        pass

    @abstractmethod
    def to_param_name(self, name: str) -> str:
        pass

    # Models

    @abstractmethod
    def to_model_name(self, name: str) -> str:
        pass

    @abstractmethod
    def to_model_filename(self, name: str) -> str:
        pass

    @abstractmethod
    def to_model_doc_filename(self, name: str) -> str:
        pass

    @abstractmethod
    def to_model_test_filename(self, name: str) -> str:
        pass

    @abstractmethod
    def to_model_import(self, name: str) -> str:
        pass

    # APIs

    @abstractmethod
    def to_api_name(self, name: str) -> str:
        pass

    @abstractmethod
    def to_api_filename(self, name: str) -> str:
        pass

    @abstractmethod
    def to_api_doc_filename(self, name: str) -> str:
        pass

    @abstractmethod
    def to_api_test_filename(self, name: str) -> str:
        pass

    @abstractmethod
    def to_api_import(self, name: str) -> str:
        pass

    @abstractmethod
    def to_operation_id(self, operation_id: str) -> str:
        pass

    # Enums

    @abstractmethod
    def to_enum_value(self, value: str, datatype: str) -> str:
        pass

    @abstractmethod
    def to_enum_var_name(self, name: str, datatype: str) -> str:
        pass

    @abstractmethod
    def to_enum_name(self, property_name: str) -> str:
        pass
