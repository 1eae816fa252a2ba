"""Paste identifier generation

Identifiers are 8 characters drawn from the URL-safe alphabet
`A-Za-z0-9_-` with a CSPRNG, giving 48 bits of entropy. Collisions are
treated as negligible for the lifetime of the dataset, so no existence check
is made before the first write.

Example:
    >>> from pasteshare.utils import generate_paste_id
    >>> generate_paste_id()
    'V1StGXR8'
"""

import secrets
import string

from pasteshare.constants import Paste


URL_SAFE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + '_-'


def generate_paste_id(length: int = Paste.ID_LENGTH, alphabet: str = URL_SAFE_ALPHABET) -> str:
    """Generate an unpredictable, fixed-length, URL-safe paste identifier.

    Args:
        length (int, optional):
            Number of characters. Defaults to 8.
        alphabet (str, optional):
            Characters to draw from. Defaults to `A-Za-z0-9_-`.

    Returns:
        str: A random identifier of exactly `length` characters.

    Raises:
        TypeError: If `length` is not an integer or `alphabet` is not a string.
        ValueError: If `length` < 1 or `alphabet` is empty.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not isinstance(alphabet, str):
        raise TypeError(f'Alphabet must be of type string (given type: {type(alphabet)}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')

    return ''.join(secrets.choice(alphabet) for _ in range(length))
