import re
import unicodedata
import uuid

__all__ = (
    'camel_case',
    'generate_id',
    'pascal_case',
    'sanitize_identifier',
    'snake_case',
    'split_words',
)

# Runs of letters and digits in any script
_TOKEN_RE = re.compile(r'[^\W_]+')


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def _split_token(token: str) -> list[str]:
    # Boundaries: after a digit run, lower -> upper, and before the last
    # capital of an acronym that starts a new word ('HTTPServer').
    words = []
    start = 0
    for i in range(1, len(token)):
        prev, char = token[i - 1], token[i]
        following = token[i + 1] if i + 1 < len(token) else ''
        if (
            (prev.isdigit() and not char.isdigit())
            or (prev.islower() and char.isupper())
            or (prev.isupper() and char.isupper() and following.islower())
        ):
            words.append(token[start:i])
            start = i
    words.append(token[start:])
    return words


def split_words(text: str | None) -> list[str]:
    """Split free text or an identifier in any casing into words.

    ``'getUserByID'``, ``'get-user_by id'`` and ``'GET /user/by/id'`` all
    produce the same word sequence modulo case. Letters of any script
    count, so ``'получитьПользователя'`` splits into two words.
    """
    if not text:
        return []
    return [
        word
        for token in _TOKEN_RE.findall(remove_accents(str(text)))
        for word in _split_token(token)
    ]


def snake_case(text: str | None) -> str:
    return '_'.join(word.lower() for word in split_words(text))


def camel_case(text: str | None) -> str:
    words = split_words(text)
    if not words:
        return ''
    return words[0].lower() + ''.join(capitalize(w.lower()) for w in words[1:])


def pascal_case(text: str | None) -> str:
    return capitalize(camel_case(text))


def generate_id() -> str:
    """Return a process-unique identifier for a route."""
    return uuid.uuid4().hex


def sanitize_identifier(name: str) -> str:
    """Convert a string into a valid Python identifier.

    - Replace spaces and hyphens with underscores
    - Remove other invalid characters
    - Ensure it doesn't start with a digit
    - Convert to PascalCase for class names
    """
    if not name:
        return 'UnnamedType'

    # Replace spaces and hyphens with underscores, then split
    parts = re.sub(r'[\W_]+', '_', remove_accents(name)).split('_')

    # Capitalize each part and join (PascalCase)
    if len(parts) == 1:
        sanitized = parts[0]
    else:
        sanitized = ''.join(capitalize(part) for part in parts if part)

    # Remove any remaining invalid characters
    sanitized = re.sub(r'\W', '', sanitized)

    # Ensure it doesn't start with a digit
    if sanitized and sanitized[0].isdigit():
        sanitized = '_' + sanitized

    # If empty after sanitization, return a default
    return sanitized or 'UnnamedType'
